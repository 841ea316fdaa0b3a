# year_frames.py
#
# One "frame" = the rows for a single year. Frames are cut fresh from the
# full dataset every time the year changes; nothing is cached.

import logging

import pandas as pd

from bubble_scales import ScaleSet

logger = logging.getLogger(__name__)


def filter_by_year(df: pd.DataFrame, year: int) -> pd.DataFrame:
    """Rows whose (parsed) year equals `year`. Empty frame if none match."""
    years = pd.to_numeric(df['year'], errors='coerce')
    frame = df[years == int(year)]
    logger.debug("year %s: %d rows", year, len(frame))
    return frame


def frame_attrs(frame: pd.DataFrame, scales: ScaleSet) -> dict[str, dict]:
    """
    Circle attributes for every row of a frame, keyed by country.

    Returns {country: {'cx', 'cy', 'r', 'fill'}} in frame order. If a country
    shows up twice in one year, the last row wins.
    """
    cx = scales.x(pd.to_numeric(frame['income_per_person'], errors='coerce').to_numpy())
    cy = scales.y(pd.to_numeric(frame['life_expectancy'], errors='coerce').to_numpy())
    r = scales.r(pd.to_numeric(frame['population'], errors='coerce').to_numpy())

    attrs = {}
    for i, (country, region) in enumerate(zip(frame['country'], frame['region'])):
        attrs[str(country)] = {
            'cx':   float(cx[i]),
            'cy':   float(cy[i]),
            'r':    float(r[i]),
            'fill': scales.color(region),
        }
    return attrs
