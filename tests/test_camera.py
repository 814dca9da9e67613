import pytest

from geoview.camera import (
    CameraActions,
    CameraFlyAnimation,
    CameraSimpleAnimation,
    CameraState,
    Direction,
    ease_in_quint,
    ease_linear,
    interpolate_azimuth,
    interpolate_pos,
    interpolate_scale,
)
from geoview.geo import Point, Rect


@pytest.fixture
def origin():
    return CameraState(None, azimuth=10.0, scale=2.0, proj_rect=Rect(0, 0, 100, 50))


def test_state_center_and_equality(origin):
    assert origin.proj_center() == Point(50, 25)
    same = CameraState(None, azimuth=10.0, scale=2.0, proj_rect=Rect(0, 0, 100, 50))
    assert origin == same
    assert origin != CameraState(None, azimuth=10.0, scale=3.0, proj_rect=Rect(0, 0, 100, 50))


def test_actions_start_from_origin(origin):
    actions = CameraActions(origin)
    assert actions.scale == origin.scale
    assert actions.azimuth == origin.azimuth
    assert actions.proj_center == origin.proj_center()


def test_actions_chain_and_reset(origin):
    actions = CameraActions(origin).scale_by(3).rotate_by(5).move_to(Point(7, 8))
    assert actions.scale == pytest.approx(origin.scale * 3)
    assert actions.azimuth == pytest.approx(origin.azimuth + 5)
    assert actions.proj_center == Point(7, 8)
    actions.reset()
    assert actions.scale == origin.scale
    assert actions.proj_center == origin.proj_center()


def test_scale_to_rect_uses_smaller_ratio(origin):
    target = Rect(10, 10, 50, 10)
    actions = CameraActions(origin).scale_to_rect(target)
    ratio = min(origin.proj_rect.width / target.width, origin.proj_rect.height / target.height)
    assert actions.scale == pytest.approx(origin.scale * ratio)
    assert actions.proj_center == target.center()


def test_rebase_keeps_values(origin):
    actions = CameraActions(origin).scale_to(5.0)
    other = CameraState(None, scale=9.0)
    actions.rebase(other)
    assert actions.origin is other
    assert actions.scale == 5.0


def test_interpolation_endpoints():
    assert interpolate_scale(1.0, 8.0, 0.0) == pytest.approx(1.0)
    assert interpolate_scale(1.0, 8.0, 1.0) == pytest.approx(8.0)
    assert interpolate_scale(2.0, 2.0, 0.7) == 2.0
    assert interpolate_azimuth(0.0, 90.0, 0.5) == pytest.approx(45.0)
    assert interpolate_pos(Point(0, 0), Point(10, 20), 0.5) == Point(5, 10)


def test_interpolate_scale_is_geometric():
    mid = interpolate_scale(1.0, 16.0, 0.5)
    assert mid * mid == pytest.approx(16.0)


def test_easing_endpoints():
    for ease in (ease_linear, ease_in_quint):
        assert ease(0.0) == 0.0
        assert ease(1.0) == 1.0
    assert ease_in_quint(0.5) < ease_linear(0.5)


def test_simple_animation_start_and_end(origin):
    actions = CameraActions(origin).scale_to(8.0).rotate_to(40.0).move_to(Point(200, 100))
    anim = CameraSimpleAnimation(actions)
    start = anim.target_at(0)
    assert start.scale == pytest.approx(origin.scale)
    assert start.proj_center == origin.proj_center()
    end = anim.target_at(anim.duration)
    assert end.scale == pytest.approx(8.0)
    assert end.azimuth == pytest.approx(40.0)
    assert end.proj_center.x == pytest.approx(200)
    assert end.proj_center.y == pytest.approx(100)


def test_backward_direction_reverses(origin):
    actions = CameraActions(origin).move_to(Point(200, 100))
    anim = CameraSimpleAnimation(actions)
    anim.direction = Direction.BACKWARD
    assert anim.progress_at(0) == 1.0
    assert anim.target_at(anim.duration).proj_center == origin.proj_center()


def test_fly_animation_short_hop_shortens_duration():
    origin = CameraState(None, scale=1.0, proj_rect=Rect(-10, -10, 20, 20))
    actions = CameraActions(origin).move_to(Point(30, 0))
    anim = CameraFlyAnimation(actions)
    assert anim.duration == 3000
    anim.start()
    assert anim.duration < 3000
    assert anim.fly_anchor == Point(15, 0)


def test_fly_animation_endpoints():
    origin = CameraState(None, scale=1.0, azimuth=0.0, proj_rect=Rect(-10, -10, 20, 20))
    actions = CameraActions(origin).move_to(Point(5000, 0)).scale_to(4.0).rotate_to(30.0)
    anim = CameraFlyAnimation(actions)
    anim.start()
    assert anim.fly_scale <= actions.scale
    start = anim.progress_at(0)
    first = CameraActions(origin)
    anim.on_progress(start, first)
    assert first.scale == pytest.approx(1.0)
    assert first.proj_center.x == pytest.approx(0.0)
    last = anim.target_at(anim.duration)
    assert last.scale == pytest.approx(4.0)
    assert last.proj_center.x == pytest.approx(5000)
    assert last.azimuth == pytest.approx(30.0)