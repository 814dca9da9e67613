"""Camera state, camera actions and camera animations for a map view."""

from __future__ import annotations

import abc
import enum
import math
from dataclasses import dataclass, field
from typing import Callable, Optional

from geoview.geo import Point, Rect

_EXPECTED_SPEED = 300.0
_FLY_SWITCH = 0.5


def _fuzzy_compare(a: float, b: float) -> bool:
    return abs(a - b) * 1e12 <= min(abs(a), abs(b))


def _ratio(num: float, den: float) -> float:
    if den == 0:
        return math.inf if num != 0 else math.nan
    return num / den


def _clamp_progress(progress: float) -> float:
    return min(1.0, max(0.0, progress))


@dataclass(eq=False)
class CameraState:
    """Where a map camera looks: scale, azimuth and the visible projected area."""

    geo_map: Optional[object] = None
    azimuth: float = 0.0
    scale: float = 1.0
    proj_rect: Rect = field(default_factory=Rect)
    animation: bool = False

    def proj_center(self) -> Point:
        return self.proj_rect.center()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CameraState):
            return NotImplemented
        return (
            self.geo_map is other.geo_map
            and _fuzzy_compare(self.scale, other.scale)
            and _fuzzy_compare(self.azimuth, other.azimuth)
            and self.proj_rect == other.proj_rect
            and self.animation == other.animation
        )

    __hash__ = None  # type: ignore[assignment]


class CameraActions:
    """A requested camera change, expressed relative to an origin state.

    Every modifier returns the same object so calls can be chained.
    """

    def __init__(self, origin: CameraState) -> None:
        self.origin = origin
        self.scale = origin.scale
        self.azimuth = origin.azimuth
        self.proj_center = origin.proj_center()

    def rebase(self, origin: CameraState) -> CameraActions:
        """Replace the origin while keeping the requested values."""
        self.origin = origin
        return self

    def reset(self, origin: Optional[CameraState] = None) -> CameraActions:
        """Drop the requested values, optionally switching to a new origin."""
        if origin is not None:
            self.origin = origin
        self.scale = self.origin.scale
        self.azimuth = self.origin.azimuth
        self.proj_center = self.origin.proj_center()
        return self

    def scale_by(self, factor: float) -> CameraActions:
        return self.scale_to(self.origin.scale * factor)

    def scale_to(self, scale: float) -> CameraActions:
        self.scale = scale
        return self

    def scale_to_rect(self, proj_rect: Rect) -> CameraActions:
        """Fit ``proj_rect`` into the origin's visible area and center on it."""
        old = self.origin.proj_rect
        factor = min(
            abs(_ratio(old.width, proj_rect.width)),
            abs(_ratio(old.height, proj_rect.height)),
        )
        self.scale = self.origin.scale * factor
        self.proj_center = proj_rect.center()
        return self

    def rotate_by(self, angle: float) -> CameraActions:
        return self.rotate_to(self.origin.azimuth + angle)

    def rotate_to(self, azimuth: float) -> CameraActions:
        self.azimuth = azimuth
        return self

    def move_to(self, proj_pos: Point) -> CameraActions:
        self.proj_center = proj_pos
        return self


def interpolate_scale(start: float, end: float, progress: float) -> float:
    """Interpolate scale geometrically, so every zoom step takes equal time."""
    if _fuzzy_compare(start, end):
        return start
    exp_start = math.log2(start)
    exp_end = math.log2(end)
    return math.pow(2, exp_start + (exp_end - exp_start) * progress)


def interpolate_azimuth(start: float, end: float, progress: float) -> float:
    if _fuzzy_compare(start, end):
        return start
    return start + (end - start) * progress


def interpolate_pos(start: Point, end: Point, progress: float) -> Point:
    if start == end:
        return start
    return start + (end - start) * progress


def ease_linear(progress: float) -> float:
    """Linear easing; progress is clamped to [0, 1]."""
    return _clamp_progress(progress)


def ease_in_quint(progress: float) -> float:
    """Quintic ease-in; progress is clamped to [0, 1]."""
    return _clamp_progress(progress) ** 5


class Direction(enum.Enum):
    FORWARD = "forward"
    BACKWARD = "backward"


class CameraAnimation(abc.ABC):
    """A timed camera move from the actions' origin to the requested state."""

    def __init__(self, actions: CameraActions, duration: int = 1000) -> None:
        self.actions = actions
        self.duration = duration
        self.direction = Direction.FORWARD

    def start(self, origin: Optional[CameraState] = None) -> None:
        """Begin the animation, optionally from a fresh camera state."""
        if origin is not None:
            self.actions.rebase(origin)
        self.on_start()

    def on_start(self) -> None:
        """Hook run when the animation starts."""

    @abc.abstractmethod
    def on_progress(self, progress: float, target: CameraActions) -> None:
        """Fill ``target`` with the camera for ``progress`` in [0, 1]."""

    def progress_at(self, current_time: float) -> float:
        progress = 1.0 if self.duration <= 0 else current_time / self.duration
        if self.direction is Direction.BACKWARD:
            progress = 1.0 - progress
        return progress

    def target_at(self, current_time: float) -> CameraActions:
        """Return the camera actions to apply at ``current_time`` milliseconds."""
        target = CameraActions(self.actions.origin)
        self.on_progress(self.progress_at(current_time), target)
        return target


class CameraSimpleAnimation(CameraAnimation):
    """Scale, rotation and position all follow one easing curve."""

    def __init__(
        self,
        actions: CameraActions,
        duration: int = 1000,
        easing: Callable[[float], float] = ease_linear,
    ) -> None:
        super().__init__(actions, duration)
        self.easing = easing

    def on_progress(self, progress: float, target: CameraActions) -> None:
        progress = self.easing(progress)
        origin = self.actions.origin
        target.scale_to(interpolate_scale(origin.scale, self.actions.scale, progress))
        target.rotate_to(interpolate_azimuth(origin.azimuth, self.actions.azimuth, progress))
        target.move_to(interpolate_pos(origin.proj_center(), self.actions.proj_center, progress))


class CameraFlyAnimation(CameraAnimation):
    """Zoom out, travel, then zoom back in, like a flight over the map."""

    def __init__(self, actions: CameraActions, duration: int = 3000) -> None:
        super().__init__(actions, duration)
        self.fly_scale = actions.scale
        self.fly_anchor = actions.proj_center

    def on_start(self) -> None:
        origin = self.actions.origin
        distance0 = math.dist(
            (self.actions.proj_center.x, self.actions.proj_center.y),
            (origin.proj_center().x, origin.proj_center().y),
        )
        distance1 = distance0 * origin.scale
        distance2 = distance0 * self.actions.scale
        seconds = self.duration // 1000
        speed0 = _ratio(distance0, seconds)
        speed1 = _ratio(distance1, seconds)
        speed2 = _ratio(distance2, seconds)
        if speed1 < _EXPECTED_SPEED and speed2 < _EXPECTED_SPEED:
            self.duration = int(1000.0 * max(distance1, distance2) / _EXPECTED_SPEED)
        self.fly_scale = min(self.actions.scale, _ratio(_EXPECTED_SPEED, speed0))
        self.fly_anchor = interpolate_pos(origin.proj_center(), self.actions.proj_center, 0.5)

    def on_progress(self, progress: float, target: CameraActions) -> None:
        origin = self.actions.origin
        if progress <= _FLY_SWITCH:
            fly = progress / _FLY_SWITCH
            target.scale_to(interpolate_scale(origin.scale, self.fly_scale, fly))
            move = ease_in_quint(fly)
            target.move_to(interpolate_pos(origin.proj_center(), self.fly_anchor, move))
        else:
            fly = (progress - _FLY_SWITCH) / (1.0 - _FLY_SWITCH)
            target.scale_to(interpolate_scale(self.fly_scale, self.actions.scale, fly))
            move = 1.0 - ease_in_quint(1.0 - fly)
            target.move_to(interpolate_pos(self.fly_anchor, self.actions.proj_center, move))
        target.rotate_to(interpolate_azimuth(origin.azimuth, self.actions.azimuth, progress))