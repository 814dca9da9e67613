import pytest

from geoview.item import Z_MAX, Z_MIN, Item


class FakeMap(Item):
    def __init__(self):
        super().__init__()
        self.selected_items = []
        self.changed = []

    def get_map(self):
        return self

    def select_item(self, item):
        self.selected_items.append(item)

    def unselect_item(self, item):
        self.selected_items.remove(item)

    def items_changed(self, item):
        self.changed.append(item)


class Recorder(Item):
    def __init__(self):
        super().__init__()
        self.events = []

    def on_projection(self, geo_map):
        self.events.append("projection")
        super().on_projection(geo_map)

    def on_update(self):
        self.events.append("update")

    def on_clean(self):
        self.events.append("clean")
        super().on_clean()

    def on_camera(self, old_state, new_state):
        self.events.append(("camera", old_state, new_state))
        super().on_camera(old_state, new_state)


def test_add_item_links_parent_and_child():
    parent, child = Item(), Item()
    parent.add_item(child)
    assert child.parent is parent
    assert len(parent) == 1
    assert parent[0] is child


def test_reparent_moves_child():
    a, b, child = Item(), Item(), Item()
    a.add_item(child)
    b.add_item(child)
    assert list(a) == []
    assert list(b) == [child]


def test_items_changed_reported_for_both_parents():
    geo_map = FakeMap()
    a, b, child = Item(), Item(), Item()
    geo_map.add_item(a)
    geo_map.add_item(b)
    a.add_item(child)
    geo_map.changed.clear()
    b.add_item(child)
    assert geo_map.changed == [a, b]


def test_attach_to_map_projects_and_updates():
    geo_map = FakeMap()
    layer = Item()
    geo_map.add_item(layer)
    child = Recorder()
    layer.add_item(child)
    assert child.events == ["projection", "update"]
    assert child.get_map() is geo_map


def test_detach_cleans():
    geo_map = FakeMap()
    layer = Item()
    geo_map.add_item(layer)
    child = Recorder()
    layer.add_item(child)
    child.events.clear()
    layer.remove_item(child)
    assert child.events == ["clean"]
    assert child.get_map() is None


def test_remove_foreign_item_is_ignored():
    a, b, child = Item(), Item(), Item()
    a.add_item(child)
    b.remove_item(child)
    assert child.parent is a


def test_add_none_raises():
    with pytest.raises(ValueError):
        Item().add_item(None)


def test_delete_items_clears_subtree():
    root, child, grandchild = Item(), Item(), Item()
    root.add_item(child)
    child.add_item(grandchild)
    root.delete_items()
    assert len(root) == 0
    assert child.parent is None
    assert len(child) == 0
    assert grandchild.parent is None


def test_front_and_back():
    item = Item()
    item.bring_to_front()
    assert item.z_value == Z_MAX
    item.send_to_back()
    assert item.z_value == Z_MIN


def test_z_value_out_of_range():
    with pytest.raises(ValueError):
        Item().z_value = Z_MAX + 1


def test_deeper_levels_stay_inside_parent_slot():
    root, mid, leaf = Item(), Item(), Item()
    root.add_item(mid)
    mid.add_item(leaf)
    mid.z_value = 10
    leaf.bring_to_front()
    assert mid.effective_z_value() < leaf.effective_z_value()
    other = Item()
    root.add_item(other)
    other.z_value = 11
    assert leaf.effective_z_value() < other.effective_z_value()


def test_opacity_clamped_and_combined():
    parent, child = Item(), Item()
    parent.add_item(child)
    child.opacity = 2
    assert child.opacity == 1.0
    child.opacity = -1
    assert child.opacity == 0.0
    child.opacity = 0.5
    parent.opacity = 0.5
    assert child.effective_opacity() == pytest.approx(0.25)


def test_visibility_inherited():
    parent, child = Item(), Item()
    parent.add_item(child)
    parent.hide()
    assert child.visible is True
    assert child.effectively_visible() is False
    parent.show()
    assert child.effectively_visible() is True


def test_unselect():
    geo_map = FakeMap()
    item = Item()
    geo_map.add_item(item)
    item.selectable = True
    item.select()
    item.unselect()
    assert item.selected is False
    assert geo_map.selected_items == []


def test_update_without_map_does_nothing():
    root, child = Item(), Recorder()
    root.add_item(child)
    child.events.clear()
    root.update()
    assert child.events == []


def test_update_reaches_children_on_map():
    geo_map = FakeMap()
    parent, child = Recorder(), Recorder()
    middle = Item()
    geo_map.add_item(parent)
    parent.add_item(middle)
    middle.add_item(child)
    parent.events.clear()
    child.events.clear()
    parent.update()
    assert child.events == ["update"]
    assert parent.events == ["update"]


def test_camera_only_reaches_visible_children():
    root = Item()
    shown, hidden = Recorder(), Recorder()
    root.add_item(shown)
    root.add_item(hidden)
    hidden.hide()
    shown.events.clear()
    hidden.events.clear()
    root.on_camera("old", "new")
    assert shown.events == [("camera", "old", "new")]
    assert hidden.events == []