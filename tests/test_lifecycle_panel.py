from types import SimpleNamespace

import pytest

from devblog.services.debounce import DebounceTimer
from devblog.services.lifecycle_demo import LifecycleDemo

pytest.importorskip("tkinter")
from devblog.ui.lifecycle_panel import LifecyclePanel  # noqa: E402


def make_panel(scheduler):
    """Panel stand-in carrying only what the render hooks touch."""
    rendered = []
    panel = SimpleNamespace(
        demo=LifecycleDemo(scheduler),
        _render_timer=DebounceTimer(scheduler, delay_ms=0),
        _render=rendered.append,
    )
    panel._unsubscribe = panel.demo.subscribe(
        lambda state: LifecyclePanel._on_state_changed(panel, state)
    )
    return panel, rendered


def test_state_changes_render_once_on_the_next_tick(scheduler):
    panel, rendered = make_panel(scheduler)
    panel.demo.update_dockerfile("FROM alpine")
    panel.demo.update_dockerfile("FROM nginx")
    assert rendered == []
    scheduler.advance(0)
    assert [state.dockerfile for state in rendered] == ["FROM nginx"]


def test_destroy_cancels_a_queued_render(scheduler):
    panel, rendered = make_panel(scheduler)
    panel.demo.update_dockerfile("FROM alpine")
    LifecyclePanel._on_destroy(panel, SimpleNamespace(widget=panel))
    scheduler.advance(5000)
    assert rendered == []
    assert scheduler.pending == 0


def test_destroy_of_a_child_widget_keeps_the_panel_alive(scheduler):
    panel, rendered = make_panel(scheduler)
    LifecyclePanel._on_destroy(panel, SimpleNamespace(widget=object()))
    panel.demo.update_dockerfile("FROM alpine")
    scheduler.advance(0)
    assert len(rendered) == 1
