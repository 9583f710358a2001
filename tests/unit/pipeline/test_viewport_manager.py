from __future__ import annotations

import pytest

from chartpipeline.domain.viewport import Margins, Viewport
from chartpipeline.pipeline.viewport import ViewportManager


def policy(width, height):
    return Viewport(width=width or 800, height=height or 400)


def test_initial_viewport_is_emitted_synchronously():
    seen = []
    manager = ViewportManager(policy, listener=seen.append)

    assert seen == [Viewport(800, 400)]
    assert manager.current == Viewport(800, 400)
    assert manager.emitted == 1


def test_unchanged_size_is_not_emitted():
    seen = []
    manager = ViewportManager(policy, width=640, listener=seen.append)

    assert manager.observe(640) is None
    assert manager.observe(640, None) is None
    assert len(seen) == 1


def test_changed_size_is_emitted_to_every_listener():
    first, second = [], []
    manager = ViewportManager(policy, listener=first.append)
    manager.subscribe(second.append)

    viewport = manager.observe(1024, 300)

    assert viewport == Viewport(1024, 300)
    assert first[-1] == viewport
    assert second == [viewport]
    assert manager.emitted == 2


def test_inner_size_excludes_margins_and_never_goes_negative():
    viewport = Viewport(100, 50, Margins(top=10, right=20, bottom=10, left=30))
    assert viewport.inner_width == 50
    assert viewport.inner_height == 30
    assert Viewport(10, 10, Margins(left=40)).inner_width == 0
    assert viewport.view_box == "0 0 100 50"


def test_failed_listener_does_not_commit_the_viewport():
    calls = []

    def flaky(viewport):
        calls.append(viewport)
        if len(calls) == 2:
            raise RuntimeError("render failed")

    manager = ViewportManager(policy, listener=flaky)

    with pytest.raises(RuntimeError):
        manager.observe(500, 250)

    assert manager.current == Viewport(800, 400)
    assert manager.emitted == 1
    assert manager.observe(500, 250) == Viewport(500, 250)
    assert manager.current == Viewport(500, 250)
    assert len(calls) == 3
