"""Flight kinematics for the ground station and the readouts of its instruments."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Optional

TICK_SECONDS = 0.1
STATE_SIZE = 11

_KMH_PER_MS = 3.6
_LABEL_STEP = 68
_PIXELS_PER_UNIT = 6.8

_ALT_SCALE_X = 432
_ALT_LABEL_X = 425
_ALT_BAND = 30
_ALT_LOW_SCALE_Y = -620
_ALT_HIGH_SCALE_Y = -484
_ALT_LOW_FIRST_LABEL_Y = -296
_ALT_HIGH_FIRST_LABEL_Y = -160
_ALT_LABEL_OFFSETS = (50, 40, 30, 20, 10, 0, -10, -20)

_COMPASS_Y = 340
_COMPASS_SCALE_X = -520
_COMPASS_FIRST_LABEL_X = 25
_COMPASS_BAND = 20


def _c_mod(value: int, divisor: int) -> int:
    """Remainder with the sign of the dividend."""
    return int(math.fmod(value, divisor))


def desired_heading(x: float, z: float, x_des: float, z_des: float) -> float:
    """Heading (radians) from the local point (x, z) towards (x_des, z_des).

    Raises ``ValueError`` when the two points coincide and no heading exists.
    """
    dx = x_des - x
    dz = z - z_des
    distance = math.hypot(dx, dz)
    if distance == 0:
        raise ValueError("target coincides with the current position")
    heading = math.acos(max(-1.0, min(1.0, dx / distance)))
    if dx == 0:
        ratio = math.copysign(math.inf, dz) * math.copysign(1.0, dx)
    else:
        ratio = dz / dx
    if math.atan(ratio) < 0:
        heading = -heading
    if abs(heading) < math.pi / 2:
        heading = -heading
    return heading


@dataclass
class FlightState:
    """Aircraft state in local Cartesian coordinates (metres, radians, m/s)."""

    x: float = 1.0
    y: float = 1.0
    z: float = 1.0
    v: float = 1.0
    theta: float = 1.0
    psi: float = 1.0
    gamma: float = 1.0
    nx: float = 1.0
    ny: float = 1.0
    nydot: float = 1.0
    nz: float = 1.0
    speed_angle: float = 0.0
    ticks: int = 0

    def step(self, yaw_deg: float, speed_kmh: float, pitch_deg: float) -> None:
        """Advance one tick of manual flight from the control sliders."""
        self.ticks += 1
        self.speed_angle += yaw_deg / 180.0 * math.pi / 180.0
        if abs(math.degrees(self.speed_angle)) > 180:
            self.speed_angle = -self.speed_angle

        self.v = speed_kmh / _KMH_PER_MS
        self.theta = math.radians(pitch_deg)
        self.psi = math.radians(yaw_deg)

        travel = TICK_SECONDS * self.v
        self.x += travel * math.cos(self.theta) * math.cos(self.speed_angle)
        self.y += travel * math.sin(self.theta)
        self.z -= travel * math.cos(self.theta) * math.sin(self.speed_angle)

        self.nx = self.ny = self.nydot = self.nz = 1.0
        self.y = abs(self.y)

    def load_vector(self, values: Iterable[float]) -> None:
        """Take the state reported by the flight model (automatic mode)."""
        numbers = [float(v) for v in values]
        if len(numbers) < STATE_SIZE:
            raise ValueError(f"state vector needs {STATE_SIZE} values, got {len(numbers)}")
        self.ticks += 1
        (
            self.x,
            self.y,
            self.z,
            self.v,
            self.theta,
            self.psi,
            self.gamma,
            self.nx,
            self.ny,
            self.nydot,
            self.nz,
        ) = numbers[:STATE_SIZE]
        self.speed_angle = self.psi
        self.y = abs(self.y)

    def as_vector(self) -> list[float]:
        """State in the order the flight model expects."""
        return [
            self.x,
            self.y,
            self.z,
            self.v,
            self.theta,
            self.psi,
            self.gamma,
            self.nx,
            self.ny,
            self.nydot,
            self.nz,
        ]

    @property
    def compass_angle(self) -> float:
        """Course in degrees within [0, 360)."""
        angle = math.degrees(self.speed_angle)
        return angle + 360 if angle < 0 else angle


@dataclass(frozen=True)
class CompassScale:
    """Heading readout and the positions and texts of the compass tape."""

    heading: str
    scale_pos: tuple[int, int]
    label_pos: tuple[tuple[int, int], ...]
    labels: tuple[str, ...]


def compass_labels(compass_angle: float) -> CompassScale:
    """Lay out the compass tape for a course in degrees."""
    angle = compass_angle + 360 if compass_angle < 0 else compass_angle
    shift = _c_mod(int(angle), _COMPASS_BAND) * _PIXELS_PER_UNIT
    label_pos = tuple(
        (int(_COMPASS_FIRST_LABEL_X + _LABEL_STEP * index - shift), _COMPASS_Y)
        for index in range(7)
    )
    wrapped_base = math.trunc((angle + 360) / _COMPASS_BAND) * _COMPASS_BAND
    base = math.trunc(angle / _COMPASS_BAND) * _COMPASS_BAND
    values = [int(wrapped_base + offset) for offset in (-30, -20, -10)]
    values += [int(base + offset) for offset in (0, 10, 20, 30)]
    return CompassScale(
        heading=f"{int(angle)}°",
        scale_pos=(int(_COMPASS_SCALE_X - shift), _COMPASS_Y),
        label_pos=label_pos,
        labels=tuple(str(_c_mod(value, 360)) for value in values),
    )


@dataclass(frozen=True)
class AltitudeScale:
    """Altitude readout and the altimeter tape.

    ``labels`` is ``None`` below the first band: the tape keeps its texts.
    """

    value: str
    scale_pos: tuple[int, int]
    label_pos: tuple[tuple[int, int], ...]
    labels: Optional[tuple[str, ...]]


def altitude_labels(altitude: float) -> AltitudeScale:
    """Lay out the altimeter tape for an altitude in metres."""
    altitude = abs(altitude)
    shift = _c_mod(int(altitude), _ALT_BAND) * _PIXELS_PER_UNIT
    if altitude < _ALT_BAND:
        scale_y = _ALT_LOW_SCALE_Y
        first_y = _ALT_LOW_FIRST_LABEL_Y
        labels = None
    else:
        scale_y = _ALT_HIGH_SCALE_Y
        first_y = _ALT_HIGH_FIRST_LABEL_Y
        base = math.trunc(altitude / _ALT_BAND) * _ALT_BAND
        labels = tuple(f"{float(base + offset):g}" for offset in _ALT_LABEL_OFFSETS)
    label_pos = tuple(
        (_ALT_LABEL_X, int(first_y + _LABEL_STEP * index + shift))
        for index in range(len(_ALT_LABEL_OFFSETS))
    )
    return AltitudeScale(
        value=str(int(altitude)),
        scale_pos=(_ALT_SCALE_X, int(scale_y + shift)),
        label_pos=label_pos,
        labels=labels,
    )