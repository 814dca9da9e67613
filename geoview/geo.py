"""Geographic primitives: positions, rectangles, tiles and affine transforms."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Union

_LON_EPSILON = 180.000001


def _fuzzy_compare(a: float, b: float) -> bool:
    return abs(a - b) * 1e12 <= min(abs(a), abs(b))


def _fuzzy_is_null(value: float) -> bool:
    return abs(value) <= 1e-12


@dataclass(frozen=True)
class Point:
    """A point in projected (planar) coordinates."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> Point:
        return Point(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def __neg__(self) -> Point:
        return Point(-self.x, -self.y)


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle in projected coordinates."""

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @classmethod
    def from_points(cls, p1: Point, p2: Point) -> Rect:
        """Build a rectangle from its top-left and bottom-right corners."""
        return cls(p1.x, p1.y, p2.x - p1.x, p2.y - p1.y)

    @property
    def left(self) -> float:
        return self.x

    @property
    def top(self) -> float:
        return self.y

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def top_left(self) -> Point:
        return Point(self.x, self.y)

    @property
    def bottom_right(self) -> Point:
        return Point(self.right, self.bottom)

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def center(self) -> Point:
        return Point(self.x + self.width / 2, self.y + self.height / 2)


def _normalize_longitude(lon: float) -> float:
    if lon > _LON_EPSILON:
        return math.fmod(180.0 + lon, 360.0) - 180.0
    if lon < -_LON_EPSILON:
        return 180.0 - math.fmod(180.0 - lon, 360.0)
    return lon


def _angle_parts(value: float) -> tuple[float, float, float]:
    degree_part = abs(value)
    min_part = (degree_part - int(degree_part)) * 60.0
    sec_part = (min_part - int(min_part)) * 60.0
    return degree_part, min_part, sec_part


def _apply_angle_format(result: str, value: float) -> str:
    degree_part, min_part, sec_part = _angle_parts(value)
    for token, text in (
        ("di", str(int(degree_part))),
        ("d", f"{degree_part:.6f}"),
        ("mi", str(int(min_part))),
        ("m", f"{min_part:.4f}"),
        ("si", str(int(sec_part))),
        ("s", f"{sec_part:.3f}"),
    ):
        result = result.replace(token, text)
    return result


def format_longitude(lon: float, fmt: str) -> str:
    """Format a longitude.

    Tokens: ``[+-]`` sign, ``d`` degrees, ``di`` integer degrees, ``m`` minutes,
    ``mi`` integer minutes, ``s`` seconds, ``si`` integer seconds.
    """
    result = fmt.replace("[+-]", "-" if lon < 0 else "")
    return _apply_angle_format(result, lon)


def format_latitude(lat: float, fmt: str) -> str:
    """Format a latitude; supports the longitude tokens plus ``[NS]``."""
    result = fmt.replace("[+-]", "-" if lat < 0 else "")
    result = result.replace("[NS]", "N" if lat < 0 else "S")
    return _apply_angle_format(result, lat)


@dataclass(frozen=True)
class GeoPos:
    """A geographic position in degrees; longitude is wrapped into range."""

    latitude: float = 0.0
    longitude: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "latitude", min(90.0, float(self.latitude)))
        object.__setattr__(self, "longitude", _normalize_longitude(float(self.longitude)))

    def lat_to_string(self, fmt: str) -> str:
        return format_latitude(self.latitude, fmt)

    def lon_to_string(self, fmt: str) -> str:
        return format_longitude(self.longitude, fmt)


class GeoRect:
    """A geographic rectangle stored as its top-left and bottom-right corners."""

    __slots__ = ("_top_left", "_bottom_right")

    def __init__(self, pos1: GeoPos | None = None, pos2: GeoPos | None = None) -> None:
        if pos1 is None or pos2 is None:
            self._top_left = GeoPos()
            self._bottom_right = GeoPos()
            return
        self._top_left = GeoPos(
            max(pos1.latitude, pos2.latitude), min(pos1.longitude, pos2.longitude)
        )
        self._bottom_right = GeoPos(
            min(pos1.latitude, pos2.latitude), max(pos1.longitude, pos2.longitude)
        )

    @classmethod
    def from_coords(cls, lat1: float, lon1: float, lat2: float, lon2: float) -> GeoRect:
        return cls(GeoPos(lat1, lon1), GeoPos(lat2, lon2))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GeoRect):
            return NotImplemented
        return self._top_left == other._top_left and self._bottom_right == other._bottom_right

    def __hash__(self) -> int:
        return hash((self._top_left, self._bottom_right))

    def __repr__(self) -> str:
        return f"GeoRect({self._top_left!r}, {self._bottom_right!r})"

    @property
    def top_left(self) -> GeoPos:
        return self._top_left

    @property
    def top_right(self) -> GeoPos:
        return GeoPos(self._top_left.latitude, self._bottom_right.longitude)

    @property
    def bottom_left(self) -> GeoPos:
        return GeoPos(self._bottom_right.latitude, self._top_left.longitude)

    @property
    def bottom_right(self) -> GeoPos:
        return self._bottom_right

    @property
    def lon_left(self) -> float:
        return self._top_left.longitude

    @property
    def lon_right(self) -> float:
        return self._bottom_right.longitude

    @property
    def lat_bottom(self) -> float:
        return self._bottom_right.latitude

    @property
    def lat_top(self) -> float:
        return self._top_left.latitude

    def corners(self) -> tuple[GeoPos, GeoPos, GeoPos, GeoPos]:
        return (self.top_left, self.top_right, self.bottom_left, self.bottom_right)

    def contains(self, other: Union[GeoPos, GeoRect]) -> bool:
        """Test whether a position or a whole rectangle lies inside."""
        if isinstance(other, GeoPos):
            return (
                self.lon_left <= other.longitude < self.lon_right
                and self.lat_bottom < other.latitude <= self.lat_top
            )
        if isinstance(other, GeoRect):
            return (
                self.lon_left <= other.lon_left
                and other.lon_right <= self.lon_right
                and self.lat_bottom <= other.lat_bottom
                and other.lat_top <= self.lat_top
            )
        raise TypeError(f"cannot test containment of {type(other).__name__}")

    def intersects(self, other: GeoRect) -> bool:
        return any(self.contains(c) for c in other.corners()) or any(
            other.contains(c) for c in self.corners()
        )


def _trunc_div(value: int, divisor: int) -> int:
    quotient = abs(value) // divisor
    return -quotient if value < 0 else quotient


@dataclass(frozen=True, order=True)
class GeoTilePos:
    """A slippy-map tile address: zoom level and tile column/row."""

    zoom: int = -1
    x: int = 0
    y: int = 0

    def contains(self, other: GeoTilePos) -> bool:
        if self.zoom >= other.zoom:
            return False
        parent_tile = other.parent(self.zoom)
        return self.x == parent_tile.x and self.y == parent_tile.y

    def parent(self, parent_zoom: int) -> GeoTilePos:
        if parent_zoom >= self.zoom:
            return GeoTilePos()
        factor = 2 ** (self.zoom - parent_zoom)
        return GeoTilePos(parent_zoom, _trunc_div(self.x, factor), _trunc_div(self.y, factor))

    @staticmethod
    def _left_top(zoom: int, x: int, y: int) -> GeoPos:
        tiles = 2.0**zoom
        lon = x / tiles * 360.0 - 180
        n = math.pi - 2.0 * math.pi * y / tiles
        lat = 180.0 / math.pi * math.atan(0.5 * (math.exp(n) - math.exp(-n)))
        return GeoPos(lat, lon)

    def to_geo_rect(self) -> GeoRect:
        return GeoRect(
            self._left_top(self.zoom, self.x, self.y),
            self._left_top(self.zoom, self.x + 1, self.y + 1),
        )

    def to_quad_key(self) -> str:
        digits = []
        for level in range(self.zoom, 0, -1):
            mask = 1 << (level - 1)
            digit = 0
            if self.x & mask:
                digit += 1
            if self.y & mask:
                digit += 2
            digits.append(str(digit))
        return "".join(digits)

    @classmethod
    def from_geo(cls, zoom: int, geo_pos: GeoPos) -> GeoTilePos:
        tiles = 2.0**zoom
        lat_rad = geo_pos.latitude * math.pi / 180.0
        x = math.floor((geo_pos.longitude + 180.0) / 360.0 * tiles)
        y = math.floor(
            (1.0 - math.log(math.tan(lat_rad) + 1.0 / math.cos(lat_rad)) / math.pi) / 2.0 * tiles
        )
        return cls(zoom, int(x), int(y))


@dataclass(frozen=True)
class Transform:
    """A 2D affine transform; each operation applies before the existing ones."""

    m11: float = 1.0
    m12: float = 0.0
    m21: float = 0.0
    m22: float = 1.0
    dx: float = 0.0
    dy: float = 0.0

    def translate(self, dx: float, dy: float) -> Transform:
        return Transform(
            self.m11,
            self.m12,
            self.m21,
            self.m22,
            self.dx + dx * self.m11 + dy * self.m21,
            self.dy + dx * self.m12 + dy * self.m22,
        )

    def scale(self, sx: float, sy: float) -> Transform:
        return Transform(
            self.m11 * sx, self.m12 * sx, self.m21 * sy, self.m22 * sy, self.dx, self.dy
        )

    def rotate(self, degrees: float) -> Transform:
        if degrees in (90.0, -270.0):
            sina, cosa = 1.0, 0.0
        elif degrees in (270.0, -90.0):
            sina, cosa = -1.0, 0.0
        elif degrees == 180.0:
            sina, cosa = 0.0, -1.0
        else:
            rad = math.radians(degrees)
            sina, cosa = math.sin(rad), math.cos(rad)
        return Transform(
            cosa * self.m11 + sina * self.m21,
            cosa * self.m12 + sina * self.m22,
            -sina * self.m11 + cosa * self.m21,
            -sina * self.m12 + cosa * self.m22,
            self.dx,
            self.dy,
        )

    def map(self, point: Point) -> Point:
        return Point(
            self.m11 * point.x + self.m21 * point.y + self.dx,
            self.m12 * point.x + self.m22 * point.y + self.dy,
        )

    def is_identity(self) -> bool:
        return (
            _fuzzy_is_null(self.m11 - 1.0)
            and _fuzzy_is_null(self.m22 - 1.0)
            and _fuzzy_is_null(self.m12)
            and _fuzzy_is_null(self.m21)
            and _fuzzy_is_null(self.dx)
            and _fuzzy_is_null(self.dy)
        )


def create_transform(anchor: Point, scale: float, azimuth: float) -> Transform:
    """Scale and rotate around ``anchor``; identity when nothing changes."""
    scale_changed = not _fuzzy_compare(scale, 1.0)
    azimuth_changed = not _fuzzy_is_null(azimuth)
    transform = Transform()
    if not scale_changed and not azimuth_changed:
        return transform
    transform = transform.translate(anchor.x, anchor.y)
    if scale_changed:
        transform = transform.scale(scale, scale)
    if azimuth_changed:
        transform = transform.rotate(azimuth)
    return transform.translate(-anchor.x, -anchor.y)


def create_transform_scale(anchor: Point, scale: float) -> Transform:
    return create_transform(anchor, scale, 0.0)


def create_transform_azimuth(anchor: Point, azimuth: float) -> Transform:
    return create_transform(anchor, 1.0, azimuth)


@dataclass
class _DebugSettings:
    draw: bool = False
    print: bool = False


_debug: _DebugSettings = field(default=None) if False else _DebugSettings()


def set_draw_debug(enabled: bool) -> None:
    _debug.draw = bool(enabled)


def is_draw_debug() -> bool:
    return _debug.draw


def set_print_debug(enabled: bool) -> None:
    _debug.print = bool(enabled)


def is_print_debug() -> bool:
    return _debug.print