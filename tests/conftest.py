import io

import pytest

from load_data import load

# three countries over three years; "C" only appears from 2001 on
SAMPLE_CSV = """\
country,region,year,income_per_person,life_expectancy,population
A,asia,2000,1000,50,1000000
B,europe,2000,20000,75,5000000
A,asia,2001,1100,51,1100000
B,europe,2001,21000,76,5100000
C,africa,2001,500,40,200000
A,asia,2002,1200,52,1200000
C,africa,2002,550,41,210000
"""


@pytest.fixture
def sample_df():
    return load(io.StringIO(SAMPLE_CSV))


@pytest.fixture
def sample_csv():
    return SAMPLE_CSV
