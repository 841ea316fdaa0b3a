import pytest

from build_scrolly import assemble
from year_animator import ManualScheduler


def test_n_ticks_advance_n_years(sample_df):
    s = assemble(sample_df, max_year=2021)
    s.animator.start()
    s.scheduler.advance(100 * 5)
    assert s.state.current_year == 2005


def test_stops_counting_at_max_year_but_keeps_ticking(sample_df):
    s = assemble(sample_df, max_year=2021)
    s.animator.start()
    s.scheduler.advance(100 * 21)
    assert s.state.current_year == 2021

    s.scheduler.advance(100 * 10)
    assert s.state.current_year == 2021
    assert s.animator.running
    assert s.scheduler.active == 1


def test_max_year_defaults_to_last_year_in_data(sample_df):
    s = assemble(sample_df)
    assert s.animator.max_year == 2002
    s.animator.start()
    s.scheduler.advance(1000)
    assert s.state.current_year == 2002


def test_tick_updates_label_and_circles(sample_df):
    s = assemble(sample_df)
    s.animator.tick()
    assert s.scene.select('#year').attrs['text'] == '2001'
    assert list(s.scene.circles) == ['A', 'B', 'C']
    assert s.scene.circles['A'].transition_ms == 100


def test_years_without_rows_render_nothing(sample_df):
    s = assemble(sample_df, max_year=2021)
    s.animator.start()
    s.scheduler.advance(100 * 3)
    assert s.state.current_year == 2003
    assert s.scene.circles == {}


def test_stop_is_immediate(sample_df):
    s = assemble(sample_df)
    s.animator.start()
    s.animator.stop()
    s.scheduler.advance(1000)
    assert s.state.current_year == 2000
    assert s.state.timer is None


def test_scheduler_runs_intervals_in_time_order():
    sched = ManualScheduler()
    calls = []
    sched.set_interval(lambda: calls.append('slow'), 30)
    sched.set_interval(lambda: calls.append('fast'), 20)
    sched.advance(60)
    assert calls == ['fast', 'slow', 'fast', 'slow', 'fast']
    assert sched.now_ms == 60


def test_scheduler_clear_and_bad_period():
    sched = ManualScheduler()
    calls = []
    h = sched.set_interval(lambda: calls.append(1), 10)
    sched.clear_interval(h)
    sched.clear_interval(h)      # unknown handle, nothing to do
    sched.advance(100)
    assert calls == []
    with pytest.raises(ValueError):
        sched.set_interval(lambda: None, 0)
