#!/usr/bin/env python3
# build_scrolly.py
#
# Summary:
# - Loads the life expectancy / income / population CSV (strings only)
# - Builds the scales once, mounts the scene and runs it through the same
#   step table + year animation the page uses, recording every year's circles
# - Writes docs/index.html (scrollytelling page: inline SVG + scrollama),
#   docs/viz_bubbles.html (plotly slider version) and docs/links.html
#
# Notes:
# - Axes never rescale: domains come from ALL years, not the year on screen.
# - The page does no data work. It replays the frames recorded here.

import html as html_lib
import json
import logging
import math
import os
from dataclasses import dataclass

import pandas as pd
import plotly.express as px

from bubble_scales import ScaleSet, build_scales
from bubble_scene import GROUPS, Scene, SceneRenderer, to_svg
from load_data import load, year_extent
from scrolly_config import (
    CSV_URL, OUT_DIR, MAX_YEAR, REGION_COLORS, X_DOMAIN_MIN, R_RANGE,
    SHOW_MS, TICK_MS, STEP_SELECTOR, STEP_OFFSET, STEP_DEBUG,
)
from step_dispatch import PLAY_STEP, StepDispatcher, step_table
from visibility import VisibilityController
from year_animator import AnimationState, ManualScheduler, YearAnimator
from year_frames import filter_by_year

logger = logging.getLogger(__name__)

# ────────────────────────────────────────────────────────────────────────────
# 1. WIRING
# ────────────────────────────────────────────────────────────────────────────


@dataclass
class Scrolly:
    scene: Scene
    renderer: SceneRenderer
    visibility: VisibilityController
    animator: YearAnimator
    dispatcher: StepDispatcher
    scheduler: ManualScheduler
    state: AnimationState


def assemble(df: pd.DataFrame, scales: ScaleSet | None = None, max_year: int | None = MAX_YEAR) -> Scrolly:
    """
    load → scales → first frame → everything hidden → ready for step events.

    max_year=None plays up to the last year in the data.
    """
    scales = scales or build_scales(df)
    min_year, data_max = year_extent(df)
    max_year = data_max if max_year is None else max_year

    renderer = SceneRenderer(scales)
    first = filter_by_year(df, min_year)
    logger.debug("first frame (%s): %d countries", min_year, len(first))
    scene = renderer.mount(first, min_year)

    visibility = VisibilityController(scene)
    for sel in GROUPS:
        visibility.hide(sel, duration_ms=0)

    state = AnimationState(current_year=min_year)
    scheduler = ManualScheduler()
    animator = YearAnimator(state, df, renderer, scene, scheduler, max_year, period_ms=TICK_MS)
    dispatcher = StepDispatcher(visibility, animator)
    return Scrolly(scene, renderer, visibility, animator, dispatcher, scheduler, state)


def _snapshot(scene: Scene) -> dict:
    out = {}
    for country, el in scene.circles.items():
        a = {}
        for k in ('cx', 'cy', 'r'):
            v = float(el.attrs[k])
            a[k] = None if math.isnan(v) else round(v, 2)
        a['fill'] = el.attrs['fill']
        if 'stroke' in el.attrs:
            a['stroke'] = el.attrs['stroke']
        out[country] = a
    return out


def record_frames(df: pd.DataFrame, scales: ScaleSet | None = None, max_year: int | None = MAX_YEAR) -> list[dict]:
    """
    Enter the play step on a fresh scene and tick until the last year,
    snapshotting the circles after every tick.

    Returns [{'year': 1800, 'circles': {country: {cx, cy, r, fill}}}, ...],
    first year included.
    """
    s = assemble(df, scales, max_year)
    frames = [{'year': s.state.current_year, 'circles': _snapshot(s.scene)}]

    s.dispatcher.on_step_enter(PLAY_STEP)
    while s.state.current_year < s.animator.max_year:
        s.scheduler.advance(s.animator.period_ms)
        frames.append({'year': s.state.current_year, 'circles': _snapshot(s.scene)})
    s.animator.stop()
    return frames


# ────────────────────────────────────────────────────────────────────────────
# 2. PLOTLY COMPANION CHART
# ────────────────────────────────────────────────────────────────────────────

def bubble_figure(df: pd.DataFrame, scales: ScaleSet | None = None):
    """Same encodings as the scrolly chart, as a plotly animation with a year slider."""
    scales = scales or build_scales(df)
    num = ['year', 'income_per_person', 'life_expectancy', 'population']
    plot_df = df.assign(**{c: pd.to_numeric(df[c], errors='coerce') for c in num})
    plot_df = plot_df.dropna(subset=num)
    plot_df = plot_df.assign(year=plot_df['year'].astype(int)).sort_values(['year', 'country'])

    fig = px.scatter(
        plot_df,
        x="income_per_person", y="life_expectancy",
        size="population", size_max=R_RANGE[1],
        color="region", color_discrete_map=REGION_COLORS,
        hover_name="country",
        animation_frame="year", animation_group="country",
        log_x=True,
        range_x=[X_DOMAIN_MIN, scales.x.domain[1]],
        range_y=list(scales.y.domain),
        title="🌍 Life Expectancy vs. Income, by Year",
        labels={
            "income_per_person": "Income per person",
            "life_expectancy": "Life expectancy (years)",
            "population": "Population",
            "region": "Region",
        },
    )
    fig.update_traces(marker=dict(opacity=0.8))
    fig.update_xaxes(tickformat=".2s")
    fig.update_layout(font=dict(size=16), legend_title="Region")

    if getattr(fig.layout, "sliders", None):
        s = fig.layout.sliders[0]
        s.currentvalue.prefix = "Year: "
        s.currentvalue.font.size = 14
    if getattr(fig.layout, "updatemenus", None):
        play = fig.layout.updatemenus[0].buttons[0]
        play.args[1]["frame"]["duration"] = TICK_MS
        play.args[1]["transition"]["duration"] = TICK_MS
    return fig


# ────────────────────────────────────────────────────────────────────────────
# 3. SCROLLYTELLING PAGE (inline SVG + scrollama)
# ────────────────────────────────────────────────────────────────────────────

STEP_TEXT = [
    "Every country, every year: how long people live and how much they earn.",
    "Income per person runs left to right. The axis is logarithmic: each tick is ten times the last.",
    "Life expectancy runs bottom to top.",
    "Each circle is a country. Bigger circles, more people. Colors are regions.",
    "This is the first year in the data.",
    "Keep reading while the years play forward.",
]


def write_scrolly_page(df: pd.DataFrame, out_path: str, scales: ScaleSet | None = None,
                       max_year: int | None = MAX_YEAR) -> None:
    scales = scales or build_scales(df)
    s = assemble(df, scales, max_year)
    svg = to_svg(s.scene)
    frames = record_frames(df, scales, max_year)
    steps = step_table()
    if len(STEP_TEXT) != len(steps):
        raise ValueError(f"{len(STEP_TEXT)} step texts for {len(steps)} steps")

    step_divs = "\n".join(
        f'      <div class="step" data-step="{i}"><p>{text}</p></div>'
        for i, text in enumerate(STEP_TEXT)
    )

    html = r"""<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8" />
  <title>Life Expectancy vs. Income</title>
  <script src="https://unpkg.com/scrollama@3.2.0/build/scrollama.min.js"></script>
  <style>
    body { font-family: system-ui, -apple-system, Segoe UI, Roboto, sans-serif; margin: 0; }
    h1 { margin: 1.25rem; }
    .scrolly { display: flex; gap: 2rem; padding: 0 1.25rem; }
    #chart { position: sticky; top: 10vh; height: %%HEIGHT%%px; flex: none; }
    #chart svg { overflow: visible; }
    .steps { flex: 1; min-width: 240px; }
    .step { margin: 0 0 80vh; padding: 1rem; border: 1px solid #ddd; border-radius: 10px; background: #fff; }
    .step:first-child { margin-top: 30vh; }
  </style>
</head>
<body>
  <h1>🌍 Life Expectancy vs. Income</h1>

  <div class="scrolly">
    <div id="chart">
%%SVG%%
    </div>
    <div class="steps">
%%STEPS_HTML%%
    </div>
  </div>

<script>
  // ----- Data injected from Python -----
  const STEPS = %%STEPS_JSON%%;      // [{opacity: {selector: value}, timer: 'start'|'cancel'}]
  const FRAMES = %%FRAMES_JSON%%;    // [{year, circles: {country: {cx, cy, r, fill}}}]
  const SHOW_MS = %%SHOW_MS%%;
  const TICK_MS = %%TICK_MS%%;
  const SCROLL = %%SCROLL_JSON%%;    // scrollama setup options

  const NS = 'http://www.w3.org/2000/svg';
  const svg = document.querySelector('#chart svg');
  const groupOpacity = {};

  // ----- Show / hide groups -----
  function show(selector, opacity, ms){
    groupOpacity[selector] = opacity;
    svg.querySelectorAll(selector).forEach(el => {
      el.style.transition = 'opacity ' + ms + 'ms';
      el.style.opacity = opacity;
    });
  }

  // ----- Year frames (keyed by country) -----
  let frameIdx = 0;
  let interval = null;

  function renderFrame(i){
    const f = FRAMES[i];
    svg.querySelector('#year').textContent = f.year;
    const seen = new Set();
    for (const [key, a] of Object.entries(f.circles)){
      seen.add(key);
      let el = svg.querySelector('circle[data-key="' + CSS.escape(key) + '"]');
      if (!el){
        el = document.createElementNS(NS, 'circle');
        el.dataset.key = key;
        el.style.opacity = groupOpacity['circle'] || 0;
        svg.appendChild(el);
      }
      el.style.transition = ['cx', 'cy', 'r'].map(p => p + ' ' + TICK_MS + 'ms').join(', ') + ', opacity ' + SHOW_MS + 'ms';
      for (const p of ['cx', 'cy', 'r']){ if (a[p] !== null) el.style[p] = a[p] + 'px'; }
      el.setAttribute('fill', a.fill);
      if (a.stroke) el.setAttribute('stroke', a.stroke);
    }
    svg.querySelectorAll('circle').forEach(el => { if (!seen.has(el.dataset.key)) el.remove(); });
  }

  function tick(){
    if (frameIdx >= FRAMES.length - 1) return;   // last year: keep ticking, change nothing
    frameIdx += 1;
    renderFrame(frameIdx);
  }

  // ----- Steps -----
  const scroller = scrollama();
  scroller.setup(SCROLL).onStepEnter(response => {
    const row = STEPS[response.index];
    if (!row){ console.warn('ignoring step', response.index); return; }
    for (const [sel, op] of Object.entries(row.opacity)) show(sel, op, SHOW_MS);
    if (row.timer === 'start'){
      if (!interval) interval = setInterval(tick, TICK_MS);
    } else if (interval){
      clearInterval(interval);
      interval = null;
    }
  });
  window.addEventListener('resize', scroller.resize);
</script>
</body>
</html>
"""

    scroll = {"step": STEP_SELECTOR, "offset": STEP_OFFSET, "debug": STEP_DEBUG}

    # --- Inject payloads into the template ---
    html = html.replace("%%HEIGHT%%",      str(scales.height))
    html = html.replace("%%SVG%%",         svg)
    html = html.replace("%%STEPS_HTML%%",  step_divs)
    html = html.replace("%%STEPS_JSON%%",  json.dumps(steps))
    html = html.replace("%%FRAMES_JSON%%", json.dumps(frames))
    html = html.replace("%%SHOW_MS%%",     str(SHOW_MS))
    html = html.replace("%%TICK_MS%%",     str(TICK_MS))
    html = html.replace("%%SCROLL_JSON%%", json.dumps(scroll))

    # --- Write out ---
    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    with open(out_path, "w", encoding="utf-8") as f:
        f.write(html)


LINKS_PAGE = r"""<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8" />
  <title>Life Expectancy vs. Income: pages</title>
  <style>
    body { font-family: system-ui, -apple-system, Segoe UI, Roboto, sans-serif; margin: 1.25rem; }
    li { margin: 0.5rem 0; }
  </style>
</head>
<body>
  <h1>🌍 Life Expectancy vs. Income</h1>
  <ul>
%%LINKS%%
  </ul>
</body>
</html>
"""


def write_links(out_files: list[tuple[str, str]], out_path: str) -> None:
    """Small landing page linking the pages built next to it (relative hrefs)."""
    links = "\n".join(
        f'    <li><a href="{html_lib.escape(os.path.basename(fn))}">{html_lib.escape(label)}</a></li>'
        for label, fn in out_files
    )
    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    with open(out_path, "w", encoding="utf-8") as f:
        f.write(LINKS_PAGE.replace("%%LINKS%%", links))


# ────────────────────────────────────────────────────────────────────────────
# 4. MAIN
# ────────────────────────────────────────────────────────────────────────────

def main(source=CSV_URL, out_dir: str = OUT_DIR) -> list[str]:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    # a LoadFailure stops everything here, before any file is touched
    df = load(source)
    scales = build_scales(df)
    min_year, max_year = year_extent(df)
    print(f"→ loaded {len(df)} rows, {min_year}–{max_year}")

    os.makedirs(out_dir, exist_ok=True)
    out_files: list[tuple[str, str]] = []

    page_fn = os.path.join(out_dir, "index.html")
    write_scrolly_page(df, page_fn, scales)
    print(f"→ wrote {page_fn}")
    out_files.append(("Scrollytelling chart", page_fn))

    fig_fn = os.path.join(out_dir, "viz_bubbles.html")
    bubble_figure(df, scales).write_html(fig_fn, include_plotlyjs='cdn')
    print(f"→ wrote {fig_fn}")
    out_files.append(("Bubble chart with year slider", fig_fn))

    links_fn = os.path.join(out_dir, "links.html")
    write_links(out_files, links_fn)
    print(f"→ wrote {links_fn}")

    print(f"✅ All files written into {out_dir}/ (ready for GitHub Pages).")
    return [fn for _, fn in out_files] + [links_fn]


if __name__ == "__main__":
    main()
