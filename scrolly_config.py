# scrolly_config.py
#
# Knobs for the scrollytelling bubble chart. Everything is a plain constant;
# change them here rather than threading arguments through the build script.

# ────────────────────────────────────────────────────────────────────────────
# DATA
# ────────────────────────────────────────────────────────────────────────────

CSV_URL = (
    "https://gist.githubusercontent.com/jeremiak/c564a2227fcc82326b37d0166fd777c7"
    "/raw/4da27d4cbbf48abe85bf52936eabfe20e04c4fa7/life_expectancy_gdp_pop_year.csv"
)

REQUIRED_COLS = [
    'country', 'region', 'year',
    'income_per_person', 'life_expectancy', 'population',
]

# ────────────────────────────────────────────────────────────────────────────
# GEOMETRY & ENCODINGS
# ────────────────────────────────────────────────────────────────────────────

WIDTH = 800
HEIGHT = 400

X_DOMAIN_MIN = 10        # log scale can't start at 0, income floor for the axis
R_RANGE = (2, 40)        # circle radius in px (area ∝ population)

REGION_COLORS = {
    'africa':   'darkseagreen',
    'asia':     'indianred',
    'americas': 'gold',
    'europe':   'lightblue',
}
FALLBACK_COLOR = 'lightgrey'   # regions outside the table

CIRCLE_OPACITY = 0.8
YEAR_OPACITY = 0.3

# outline one country in the circles; None = no outline
HIGHLIGHT_COUNTRY = None
HIGHLIGHT_STROKE = 'hotpink'

# ────────────────────────────────────────────────────────────────────────────
# TIMING
# ────────────────────────────────────────────────────────────────────────────

SHOW_MS = 200     # fade in/out when a step is entered
TICK_MS = 100     # one year per tick, circles glide for the same duration

# None → stop at the dataset's last year. The hand-written page stopped at 2021.
MAX_YEAR = None

# ────────────────────────────────────────────────────────────────────────────
# SCROLL TRIGGER (scrollama)
# ────────────────────────────────────────────────────────────────────────────

STEP_SELECTOR = '.step'
STEP_OFFSET = 0.5      # trigger when the step crosses the middle of the viewport
STEP_DEBUG = False

OUT_DIR = "docs"
