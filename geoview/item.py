"""Tree of map items with z-order, opacity, visibility and selection."""

from __future__ import annotations

import math
from typing import Iterator, Optional, Protocol

Z_MIN = -32768
Z_MAX = 32767
_Z_SPAN = Z_MAX - Z_MIN


def _fuzzy_compare(a: float, b: float) -> bool:
    return abs(a - b) * 1e12 <= min(abs(a), abs(b))


class MapHost(Protocol):
    """What an item expects from the map at the root of its tree."""

    def select_item(self, item: "Item") -> None: ...

    def unselect_item(self, item: "Item") -> None: ...

    def items_changed(self, item: "Item") -> None: ...


class Item:
    """A node in the map's item tree.

    Items start detached; a map at the root of the tree makes them live.
    """

    def __init__(self) -> None:
        self._parent: Optional[Item] = None
        self._children: list[Item] = []
        self._z_value = 0
        self._opacity = 1.0
        self._visible = True
        self._selectable = False
        self._selected = False

    # Tree -----------------------------------------------------------------

    @property
    def parent(self) -> Optional[Item]:
        return self._parent

    @property
    def children(self) -> tuple[Item, ...]:
        return tuple(self._children)

    def __len__(self) -> int:
        return len(self._children)

    def __iter__(self) -> Iterator[Item]:
        return iter(list(self._children))

    def __getitem__(self, index: int) -> Item:
        return self._children[index]

    def set_parent(self, item: Optional[Item]) -> None:
        """Move this item under ``item`` (or detach it with ``None``)."""
        if self._parent is item:
            return
        self.selected = False
        if self._parent is not None:
            self._parent._children.remove(self)
        old_parent = self._parent
        self._parent = item
        if item is not None:
            item._children.append(self)
        geo_map = self.get_map()
        if geo_map is not None:
            if old_parent is not None:
                geo_map.items_changed(old_parent)
            if item is not None:
                geo_map.items_changed(item)
            self.on_projection(geo_map)
            self.update()
        else:
            self.on_clean()

    def get_map(self) -> Optional[MapHost]:
        """Return the map at the root of the tree, if any."""
        if self._parent is not None:
            return self._parent.get_map()
        return None

    def add_item(self, item: Item) -> None:
        if item is None:
            raise ValueError("item must not be None")
        item.set_parent(self)

    def remove_item(self, item: Item) -> None:
        if item is None:
            raise ValueError("item must not be None")
        if item.parent is not self:
            return
        item.set_parent(None)

    def delete_items(self) -> None:
        """Drop every child (and their subtrees) from this item."""
        for child in list(self._children):
            child.delete_items()
            child.on_clean()
            child._parent = None
        self._children.clear()

    # Z-order ----------------------------------------------------------------

    @property
    def z_value(self) -> int:
        return self._z_value

    @z_value.setter
    def z_value(self, value: int) -> None:
        value = int(value)
        if not Z_MIN <= value <= Z_MAX:
            raise ValueError(f"z value {value} outside [{Z_MIN}, {Z_MAX}]")
        if self._z_value != value:
            self._z_value = value
            self.update()

    def bring_to_front(self) -> None:
        self._z_value = Z_MAX
        self.update()

    def send_to_back(self) -> None:
        self._z_value = Z_MIN
        self.update()

    # Opacity ----------------------------------------------------------------

    @property
    def opacity(self) -> float:
        return self._opacity

    @opacity.setter
    def opacity(self, value: float) -> None:
        value = min(1.0, max(0.0, float(value)))
        if _fuzzy_compare(self._opacity, value):
            return
        self._opacity = value
        self.update()

    # Selection --------------------------------------------------------------

    @property
    def selectable(self) -> bool:
        return self._selectable

    @selectable.setter
    def selectable(self, allowed: bool) -> None:
        allowed = bool(allowed)
        if self._selectable == allowed:
            return
        self._selectable = allowed
        if not allowed:
            self.selected = False
        self.on_update()

    @property
    def selected(self) -> bool:
        return self._selected

    @selected.setter
    def selected(self, value: bool) -> None:
        value = bool(value)
        if self._selected == value or not self._selectable:
            return
        self._selected = value
        geo_map = self.get_map()
        if geo_map is not None:
            if value:
                geo_map.select_item(self)
            else:
                geo_map.unselect_item(self)
        self.update()

    def select(self) -> None:
        self.selected = True

    def unselect(self) -> None:
        self.selected = False

    # Visibility -------------------------------------------------------------

    @property
    def visible(self) -> bool:
        return self._visible

    @visible.setter
    def visible(self, value: bool) -> None:
        value = bool(value)
        if self._visible == value:
            return
        self._visible = value
        self.update()

    def show(self) -> None:
        self.visible = True

    def hide(self) -> None:
        self.visible = False

    # Effective values -------------------------------------------------------

    def _ancestors(self) -> Iterator[Item]:
        node = self._parent
        while node is not None:
            yield node
            node = node._parent

    def effective_z_value(self) -> float:
        """Z value folded with the ancestors' so siblings stay within their parent's slot."""
        if self._parent is None:
            return float(self._z_value)
        depth = sum(1 for _ in self._parent._ancestors())
        scale = math.pow(1.0 / _Z_SPAN, depth)
        return self._parent.effective_z_value() + scale * self._z_value / _Z_SPAN

    def effective_opacity(self) -> float:
        if self._parent is None:
            return self._opacity
        return self._opacity * self._parent.effective_opacity()

    def effectively_visible(self) -> bool:
        if self._parent is None:
            return self._visible
        return self._visible and self._parent.effectively_visible()

    # Notifications ----------------------------------------------------------

    def update(self) -> None:
        """Propagate an update through the subtree when attached to a map."""
        if self.get_map() is None:
            return
        for child in list(self._children):
            child.update()
        self.on_update()

    def on_projection(self, geo_map: MapHost) -> None:
        for child in list(self._children):
            child.on_projection(geo_map)

    def on_camera(self, old_state: object, new_state: object) -> None:
        for child in list(self._children):
            if child.visible:
                child.on_camera(old_state, new_state)

    def on_update(self) -> None:
        """Hook for subclasses; called when the item's look may have changed."""

    def on_clean(self) -> None:
        for child in list(self._children):
            child.on_clean()