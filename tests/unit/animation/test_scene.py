from __future__ import annotations

import pytest

from chartpipeline.animation import Scene, TransitionState


def make_scene() -> Scene:
    return Scene(duration=1.0, easing="linear")


def test_entering_elements_animate_from_their_enter_values():
    scene = make_scene()
    scene.update(
        {"bar:0": {"y": 100, "height": 50}},
        now=0.0,
        enter={"bar:0": {"y": 150, "height": 0}},
    )

    assert scene.animating
    assert scene.frame(0.5) == {"bar:0": {"y": pytest.approx(125), "height": pytest.approx(25)}}
    assert scene.frame(1.0) == {"bar:0": {"y": 100, "height": 50}}
    assert not scene.animating


def test_elements_without_enter_values_appear_at_their_targets():
    scene = make_scene()
    scene.update({"area:path": {"opacity": 1}}, now=0.0)
    assert not scene.animating
    assert scene.frame(0.0) == {"area:path": {"opacity": 1}}


def test_existing_elements_retarget_mid_flight():
    scene = make_scene()
    scene.update({"gauge:pointer": {"angle": 0}}, now=0.0)
    scene.update({"gauge:pointer": {"angle": 1}}, now=0.0)
    scene.frame(0.5)

    scene.update({"gauge:pointer": {"angle": -1}}, now=0.5)

    transition = scene.transition("gauge:pointer", "angle")
    assert transition.state is TransitionState.ANIMATING
    assert transition.animation.from_value == pytest.approx(0.5)
    assert scene.frame(1.0)["gauge:pointer"]["angle"] == pytest.approx(-0.25)


def test_removed_elements_and_properties_are_dropped():
    scene = make_scene()
    scene.update({"bar:0": {"y": 1, "height": 2}, "bar:1": {"y": 3, "height": 4}}, now=0.0)

    scene.update({"bar:1": {"y": 5}}, now=1.0)

    assert "bar:0" not in scene
    assert scene.keys() == ["bar:1"]
    assert len(scene) == 1
    assert set(scene.frame(3.0)["bar:1"]) == {"y"}


def test_identity_follows_keys_not_order():
    scene = make_scene()
    scene.update({"bar:0": {"y": 10}, "bar:1": {"y": 20}}, now=0.0)

    scene.update({"bar:1": {"y": 20}, "bar:0": {"y": 10}}, now=0.5)

    assert not scene.animating
