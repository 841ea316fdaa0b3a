import io

import pytest

from bubble_scales import build_scales
from bubble_scene import SceneRenderer, to_svg
from load_data import load
from visibility import VisibilityController
from year_frames import filter_by_year


@pytest.fixture
def renderer(sample_df):
    return SceneRenderer(build_scales(sample_df))


@pytest.fixture
def scene(renderer, sample_df):
    return renderer.mount(filter_by_year(sample_df, 2000), 2000)


def test_mount_creates_everything_hidden(scene):
    assert len(scene.select_all('.axis-x')) == 1
    assert len(scene.select_all('.axis-y')) == 1
    assert scene.select('#year').attrs['text'] == '2000'
    assert list(scene.circles) == ['A', 'B']
    assert all(el.attrs['opacity'] == 0 for el in scene.elements())


def test_axis_placement_and_labels(scene):
    x_axis = scene.select('.axis-x')
    assert x_axis.attrs['transform'] == "translate(0 370)"
    labels = [label for _, label in x_axis.attrs['ticks']]
    assert '1.0k' in labels and '10k' in labels
    assert scene.select('.axis-y').attrs['transform'] == "translate(20 0)"
    assert scene.select('#year').attrs['dy'] == pytest.approx(320)


def test_render_frame_is_keyed_by_country(renderer, scene, sample_df):
    a_before = scene.circles['A']

    renderer.render_frame(scene, filter_by_year(sample_df, 2001), duration_ms=100)
    assert list(scene.circles) == ['A', 'B', 'C']
    assert scene.circles['A'] is a_before          # same element, moved
    assert a_before.attrs['cx'] == pytest.approx(renderer.scales.x(1100))
    assert a_before.transition_ms == 100

    renderer.render_frame(scene, filter_by_year(sample_df, 2002), duration_ms=100)
    assert set(scene.circles) == {'A', 'C'}        # B has no 2002 row


def test_entering_circles_take_the_group_opacity(renderer, scene, sample_df):
    VisibilityController(scene).show('circle', 0.8)
    renderer.render_frame(scene, filter_by_year(sample_df, 2001))
    assert scene.circles['C'].attrs['opacity'] == 0.8


def test_empty_frame_renders_no_circles(renderer, scene, sample_df):
    renderer.render_frame(scene, filter_by_year(sample_df, 1999))
    assert scene.circles == {}
    assert scene.select_all('circle') == []


def test_highlighted_country_gets_outline(sample_df):
    renderer = SceneRenderer(build_scales(sample_df), highlight='B')
    scene = renderer.mount(filter_by_year(sample_df, 2000), 2000)
    assert scene.circles['B'].attrs['stroke'] == 'hotpink'
    assert 'stroke' not in scene.circles['A'].attrs


def test_unknown_region_gets_fallback_fill():
    csv = (
        "country,region,year,income_per_person,life_expectancy,population\n"
        "A,asia,2000,1000,50,1000000\n"
        "Z,oceania,2000,3000,70,20000\n"
    )
    df = load(io.StringIO(csv))
    scene = SceneRenderer(build_scales(df)).mount(filter_by_year(df, 2000), 2000)
    assert scene.circles['Z'].attrs['fill'] == 'lightgrey'


def test_to_svg(scene):
    svg = to_svg(scene)
    assert svg.startswith('<svg')
    assert svg.rstrip().endswith('</svg>')
    assert 'class="axis-x"' in svg
    assert '<text id="year"' in svg
    assert svg.count('<circle ') == 2
    assert 'data-key="A"' in svg
    assert '>1.0k<' in svg
