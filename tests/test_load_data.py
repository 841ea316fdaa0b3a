import io

import pytest

from load_data import LoadFailure, load, year_extent


def test_load_keeps_strings_and_order(sample_df):
    assert len(sample_df) == 7
    assert list(sample_df['country']) == ['A', 'B', 'A', 'B', 'C', 'A', 'C']
    # numbers are parsed later, where they're used
    assert sample_df['year'].iloc[0] == '2000'
    assert sample_df['population'].iloc[1] == '5000000'


def test_year_extent(sample_df):
    assert year_extent(sample_df) == (2000, 2002)


def test_missing_file_is_load_failure(tmp_path):
    with pytest.raises(LoadFailure):
        load(tmp_path / "nope.csv")


def test_empty_csv_is_load_failure():
    with pytest.raises(LoadFailure):
        load(io.StringIO(""))


def test_header_only_is_load_failure():
    csv = "country,region,year,income_per_person,life_expectancy,population\n"
    with pytest.raises(LoadFailure):
        load(io.StringIO(csv))


def test_missing_column_is_load_failure():
    # no population column
    csv = "country,region,year,income_per_person,life_expectancy\nA,asia,2000,1000,50\n"
    with pytest.raises(LoadFailure, match="population"):
        load(io.StringIO(csv))


def test_ragged_rows_are_load_failure():
    csv = (
        "country,region,year,income_per_person,life_expectancy,population\n"
        "A,asia,2000,1000,50,1000000\n"
        "B,europe,2000,20000,75,5000000,x,y,z\n"
    )
    with pytest.raises(LoadFailure):
        load(io.StringIO(csv))


def test_rows_wider_than_header_are_load_failure():
    # every row one field too long: pandas would shift the columns silently
    csv = (
        "country,region,year,income_per_person,life_expectancy,population\n"
        "A,asia,2000,1000,50,1000000,EXTRA\n"
    )
    with pytest.raises(LoadFailure, match="more fields"):
        load(io.StringIO(csv))


def test_numeric_column_without_numbers_is_load_failure():
    csv = (
        "country,region,year,income_per_person,life_expectancy,population\n"
        "A,asia,2000,n/a,50,1000000\n"
        "B,europe,2000,n/a,75,5000000\n"
    )
    with pytest.raises(LoadFailure, match="income_per_person"):
        load(io.StringIO(csv))


def test_header_whitespace_is_stripped():
    csv = (
        "country, region, year, income_per_person, life_expectancy, population\n"
        "A,asia,2000,1000,50,1000000\n"
    )
    df = load(io.StringIO(csv))
    assert 'region' in df.columns
