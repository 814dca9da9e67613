"""Map items that draw themselves, with flags controlling scale and rotation."""

from __future__ import annotations

import abc
import enum
import math
from dataclasses import dataclass, field
from typing import Optional

from geoview.geo import Point, Rect, Transform, create_transform, is_draw_debug
from geoview.item import Item

HIGHLIGHT_SCALE = 1.15


def _fuzzy_compare(a: float, b: float) -> bool:
    return abs(a - b) * 1e12 <= min(abs(a), abs(b))


class ItemFlag(enum.Flag):
    NONE = 0
    IGNORE_SCALE = enum.auto()
    IGNORE_AZIMUTH = enum.auto()
    HIGHLIGHTABLE = enum.auto()
    HIGHLIGHTED = enum.auto()
    HIGHLIGHT_CUSTOM = enum.auto()
    TRANSFORMED = enum.auto()


def _then(first: Transform, second: Transform) -> Transform:
    """Transform applying ``first`` and then ``second``."""
    return Transform(
        first.m11 * second.m11 + first.m12 * second.m21,
        first.m11 * second.m12 + first.m12 * second.m22,
        first.m21 * second.m11 + first.m22 * second.m21,
        first.m21 * second.m12 + first.m22 * second.m22,
        first.dx * second.m11 + first.dy * second.m21 + second.dx,
        first.dx * second.m12 + first.dy * second.m22 + second.dy,
    )


@dataclass
class RenderState:
    """What the scene shows for a draw item."""

    transform: Transform = field(default_factory=Transform)
    visible: bool = True
    opacity: float = 1.0
    z_value: float = 0.0
    accept_hover_events: bool = False
    geometry_resets: int = 0
    update_requests: int = 0


class DrawItem(Item, abc.ABC):
    """An item with a projected shape that is rendered on the map.

    The map at the root of the tree must expose a ``camera`` attribute with
    ``scale`` and ``azimuth``.
    """

    def __init__(self) -> None:
        super().__init__()
        self._flags = ItemFlag.NONE
        self._dirty = False
        self._render: Optional[RenderState] = None
        self.update_count = 0

    @property
    def flags(self) -> ItemFlag:
        return self._flags

    @property
    def render(self) -> Optional[RenderState]:
        return self._render

    @property
    def dirty(self) -> bool:
        return self._dirty

    def set_flags(self, flags: ItemFlag) -> None:
        if self._flags != flags:
            self._flags = flags
            self.proj_on_flags()
            self.refresh()

    def set_flag(self, flag: ItemFlag, enabled: bool = True) -> None:
        self.set_flags(self._flags | flag if enabled else self._flags & ~flag)

    def is_flag(self, flag: ItemFlag) -> bool:
        return flag in self._flags

    @abc.abstractmethod
    def proj_shape(self) -> Rect:
        """Bounding shape of the item in projected coordinates."""

    def proj_anchor(self) -> Point:
        return self.proj_shape().center()

    def proj_transform(self) -> Transform:
        """User transform applied when the TRANSFORMED flag is set."""
        return Transform()

    def proj_on_flags(self) -> None:
        """Hook run when the flags change."""

    @property
    def effective_transform(self) -> Transform:
        if self._render is None:
            return Transform()
        return self._render.transform

    def item_transform(self, camera_scale: float, camera_azimuth: float) -> Transform:
        """Transform that applies highlighting and cancels camera scale or rotation."""
        if not self._flags & (
            ItemFlag.HIGHLIGHTED | ItemFlag.IGNORE_SCALE | ItemFlag.IGNORE_AZIMUTH
        ):
            return Transform()
        scale = 1.0
        azimuth = 0.0
        if self.is_flag(ItemFlag.HIGHLIGHTED) and not self.is_flag(ItemFlag.HIGHLIGHT_CUSTOM):
            scale *= HIGHLIGHT_SCALE
        if self.is_flag(ItemFlag.IGNORE_SCALE):
            scale *= 1.0 / camera_scale
        if self.is_flag(ItemFlag.IGNORE_AZIMUTH):
            azimuth -= camera_azimuth
        return create_transform(self.proj_anchor(), scale, azimuth)

    def _camera(self) -> tuple[float, float]:
        geo_map = self.get_map()
        camera = getattr(geo_map, "camera", None)
        if camera is None:
            return 1.0, 0.0
        return camera.scale, camera.azimuth

    def refresh(self) -> None:
        """Recompute the rendered transform, visibility, opacity and z order."""
        render = self._render
        if render is None:
            return
        if not self.visible:
            render.visible = False
            return
        user = self.proj_transform() if self.is_flag(ItemFlag.TRANSFORMED) else Transform()
        item = Transform()
        if self._flags & (ItemFlag.HIGHLIGHTED | ItemFlag.IGNORE_SCALE | ItemFlag.IGNORE_AZIMUTH):
            item = self.item_transform(*self._camera())
        render.transform = _then(item, user)
        render.visible = self.effectively_visible()
        render.opacity = self.effective_opacity()
        render.z_value = self.effective_z_value()
        render.accept_hover_events = self.is_flag(ItemFlag.HIGHLIGHTABLE)
        render.update_requests += 1
        self._dirty = False
        if is_draw_debug():
            self.update_count += 1

    def repaint(self) -> None:
        if self._render is None:
            return
        if self._dirty:
            self.refresh()
        else:
            self._render.update_requests += 1

    def reset_boundary(self) -> None:
        """Note that the shape changed; transformed items need a refresh."""
        if self._render is not None:
            self._render.geometry_resets += 1
        if self._flags & (
            ItemFlag.TRANSFORMED
            | ItemFlag.HIGHLIGHTED
            | ItemFlag.IGNORE_SCALE
            | ItemFlag.IGNORE_AZIMUTH
        ):
            self._dirty = True

    def on_projection(self, geo_map) -> None:
        super().on_projection(geo_map)
        if self._render is None:
            self._render = RenderState()

    def on_camera(self, old_state, new_state) -> None:
        super().on_camera(old_state, new_state)
        needed = (
            self.is_flag(ItemFlag.IGNORE_AZIMUTH)
            and not _fuzzy_compare(old_state.azimuth, new_state.azimuth)
        ) or (
            self.is_flag(ItemFlag.IGNORE_SCALE)
            and not _fuzzy_compare(old_state.scale, new_state.scale)
        )
        if needed:
            self.refresh()

    def on_update(self) -> None:
        super().on_update()
        self.refresh()

    def on_clean(self) -> None:
        super().on_clean()
        self._render = None


def _distance(a: Point, b: Point) -> float:
    return math.hypot(a.x - b.x, a.y - b.y)