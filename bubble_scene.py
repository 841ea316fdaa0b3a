# bubble_scene.py
#
# Headless scene for the bubble chart: two axis groups, the big year label and
# one circle per country. The page gets it serialized as SVG (to_svg) and
# afterwards only flips opacities and moves circles around.

import math
from dataclasses import dataclass, field
from html import escape

import pandas as pd

from bubble_scales import ScaleSet, si_format
from scrolly_config import HIGHLIGHT_COUNTRY, HIGHLIGHT_STROKE
from year_frames import frame_attrs

# selectors the rest of the code talks about
X_AXIS = '.axis-x'
Y_AXIS = '.axis-y'
YEAR_LABEL = '#year'
CIRCLES = 'circle'
GROUPS = [X_AXIS, Y_AXIS, YEAR_LABEL, CIRCLES]


@dataclass
class Element:
    tag: str
    key: str
    classes: tuple = ()
    id: str | None = None
    attrs: dict = field(default_factory=dict)
    transition_ms: int | None = None   # duration of the last change, None = instant

    def matches(self, selector: str) -> bool:
        """Tiny selector support: 'tag', '.class' or '#id'."""
        if selector.startswith('.'):
            return selector[1:] in self.classes
        if selector.startswith('#'):
            return self.id == selector[1:]
        return self.tag == selector

    def set(self, duration_ms: int | None = None, **attrs) -> None:
        self.attrs.update(attrs)
        self.transition_ms = duration_ms


class Scene:
    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.fixed: list[Element] = []           # axes + year label, created once
        self.circles: dict[str, Element] = {}    # country → circle
        self.group_opacity: dict[str, float] = {}

    def elements(self) -> list[Element]:
        return self.fixed + list(self.circles.values())

    def select_all(self, selector: str) -> list[Element]:
        return [el for el in self.elements() if el.matches(selector)]

    def select(self, selector: str) -> Element | None:
        found = self.select_all(selector)
        return found[0] if found else None


class SceneRenderer:
    """Creates the scene once (mount) and re-binds circles per frame (render_frame)."""

    def __init__(self, scales: ScaleSet, highlight: str | None = HIGHLIGHT_COUNTRY):
        self.scales = scales
        self.highlight = highlight

    def mount(self, frame: pd.DataFrame, year: int) -> Scene:
        s = self.scales
        scene = Scene(s.width, s.height)

        x_ticks = [(float(s.x(t)), si_format(t)) for t in s.x.ticks()]
        y_ticks = [(float(s.y(t)), f"{t:g}") for t in s.y.ticks()]
        scene.fixed.append(Element('g', 'axis-x', classes=('axis-x',), attrs={
            'transform': f"translate(0 {s.height - 30})",
            'ticks': x_ticks,
            'opacity': 0.0,
        }))
        scene.fixed.append(Element('g', 'axis-y', classes=('axis-y',), attrs={
            'transform': "translate(20 0)",
            'ticks': y_ticks,
            'opacity': 0.0,
        }))
        scene.fixed.append(Element('text', 'year', id='year', attrs={
            'dy': s.height * 0.8,
            'dx': 500,
            'font-size': '100px',
            'text': str(year),
            'opacity': 0.0,
        }))

        # nothing is visible until a step says so
        for sel in GROUPS:
            scene.group_opacity[sel] = 0.0
        self.render_frame(scene, frame)
        return scene

    def render_frame(self, scene: Scene, frame: pd.DataFrame, duration_ms: int | None = None) -> Scene:
        """
        Keyed update of the circles against `frame` (key = country):
          - country already drawn → move/resize/recolor with a transition
          - new country           → create it at the circle group's opacity
          - country not in frame  → remove its circle
        """
        attrs = frame_attrs(frame, self.scales)
        entering_opacity = scene.group_opacity.get(CIRCLES, 0.0)

        for country in [c for c in scene.circles if c not in attrs]:
            del scene.circles[country]

        for country, a in attrs.items():
            if self.highlight is not None and country == self.highlight:
                a['stroke'] = HIGHLIGHT_STROKE
            el = scene.circles.get(country)
            if el is None:
                scene.circles[country] = Element('circle', country, attrs={**a, 'opacity': entering_opacity})
            else:
                el.set(duration_ms, **a)
        return scene


# ────────────────────────────────────────────────────────────────────────────
# SVG EXPORT
# ────────────────────────────────────────────────────────────────────────────

def _num(v) -> str:
    return f"{round(float(v), 2):g}"


def _axis_svg(el: Element, scene: Scene) -> list[str]:
    horizontal = el.matches(X_AXIS)
    out = [f'<g class="{" ".join(el.classes)}" transform="{el.attrs["transform"]}" '
           f'opacity="{_num(el.attrs["opacity"])}" font-size="10" fill="none">']
    if horizontal:
        out.append(f'  <path class="domain" stroke="currentColor" d="M0,0H{scene.width}"/>')
    else:
        out.append(f'  <path class="domain" stroke="currentColor" d="M0,{scene.height}V0"/>')
    for pos, label in el.attrs['ticks']:
        if horizontal:
            out.append(f'  <g class="tick" transform="translate({_num(pos)},0)">'
                       f'<line stroke="currentColor" y2="6"/>'
                       f'<text fill="currentColor" y="9" dy="0.71em" text-anchor="middle">{escape(label)}</text></g>')
        else:
            out.append(f'  <g class="tick" transform="translate(0,{_num(pos)})">'
                       f'<line stroke="currentColor" x2="-6"/>'
                       f'<text fill="currentColor" x="-9" dy="0.32em" text-anchor="end">{escape(label)}</text></g>')
    out.append('</g>')
    return out


def to_svg(scene: Scene) -> str:
    """Serialize the scene. Circles carry data-key so the page can update them by country."""
    lines = [f'<svg xmlns="http://www.w3.org/2000/svg" width="{scene.width}" height="{scene.height}">']
    for el in scene.fixed:
        if el.tag == 'g':
            lines += _axis_svg(el, scene)
        else:
            a = el.attrs
            lines.append(f'<text id="{el.id}" dy="{_num(a["dy"])}" dx="{_num(a["dx"])}" '
                         f'font-size="{a["font-size"]}" opacity="{_num(a["opacity"])}">{escape(a["text"])}</text>')
    for country, el in scene.circles.items():
        a = el.attrs
        geo = ' '.join(f'{k}="{_num(a[k])}"' for k in ('cx', 'cy', 'r') if not math.isnan(a[k]))
        stroke = f' stroke="{a["stroke"]}"' if 'stroke' in a else ''
        lines.append(f'<circle data-key="{escape(country)}" {geo} fill="{a["fill"]}"{stroke} '
                     f'opacity="{_num(a["opacity"])}"/>')
    lines.append('</svg>')
    return "\n".join(lines)
