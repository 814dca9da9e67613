# geoview

A small library, with no third-party dependencies, that models a geographic map. It does not draw anything.

## Modules

- `geoview.geo` holds the basic geometry.
  - `Point` and `Rect` are planar coordinates.
  - `GeoPos` is a latitude and longitude. Longitude is wrapped into [-180, 180]. Latitude is capped at 90.
  - `GeoRect` is a geographic rectangle. It supports `contains` for a position or a rectangle, and `intersects`.
  - `GeoTilePos` is a web-mercator tile address.
    - `from_geo` finds the tile for a position.
    - `to_geo_rect` gives the tile's bounds.
    - `to_quad_key` gives the tile's quad key.
    - `parent` and `contains` relate tiles across zoom levels.
  - `format_latitude` and `format_longitude` format an angle. Use the tokens `[+-]`, `[NS]` (latitude only), `d`, `di`, `m`, `mi`, `s` and `si`.
  - `Transform` is an immutable 2D affine transform. `create_transform`, `create_transform_scale` and `create_transform_azimuth` scale and rotate around an anchor.
  - `set_draw_debug`, `is_draw_debug`, `set_print_debug` and `is_print_debug` are global debug switches.
- `geoview.layers` builds tile URLs.
  - `Layer` is a named item.
  - `OnlineTileLayer` is the abstract base for tile sources.
  - `OSMLayer`, `GoogleLayer`, `BingLayer` and `BDGExLayer` are the concrete sources. Each has `min_zoom_level`, `max_zoom_level` and `tile_pos_to_url`.
  - `TilesType` selects satellite, schema or hybrid tiles.
  - `OSMLayer.custom` and `BDGExLayer.custom` take your own URL template.
- `geoview.item` holds `Item`, a tree of map items.
  - An item has a z value, opacity, visibility and selection.
  - `effective_z_value`, `effective_opacity` and `effectively_visible` combine an item's own value with its ancestors'.
  - The map at the root of the tree must provide `select_item`, `unselect_item` and `items_changed`.
- `geoview.drawitem` holds `DrawItem` and the `ItemFlag` flags.
  - `DrawItem` computes a `RenderState` for each item: transform, visibility, opacity, z value and hover acceptance.
  - The flags control highlighting and whether camera scale and azimuth are ignored.
- `geoview.camera` holds the camera.
  - `CameraState` is where the camera looks.
  - `CameraActions` is a chainable request to change the camera.
  - `interpolate_scale`, `interpolate_azimuth` and `interpolate_pos` interpolate one value each.
  - `ease_linear` and `ease_in_quint` are easing functions.
  - `CameraSimpleAnimation` and `CameraFlyAnimation` are the animations. Their `target_at(ms)` returns the camera for a moment in time.
- `geoview.telemetry` handles big-endian binary packets that carry a text message or a vector of doubles.
  - `encode_message` and `encode_vector` build packets.
  - `decode` returns a `Packet`. It raises `ValueError` on an unknown type or on truncated data.
  - `Command` lists the flight commands.
- `geoview.flight` holds flight helpers.
  - `FlightState` is the aircraft state in local Cartesian coordinates. Use `step` for manual flight and `load_vector` for states reported by a model.
  - `desired_heading` gives the course towards a target point.
  - `compass_labels` and `altitude_labels` lay out the instrument tapes.

## Example

```python
from geoview.geo import GeoPos, GeoTilePos
from geoview.layers import OSMLayer

moscow = GeoPos(55.7558, 37.6173)
tile = GeoTilePos.from_geo(10, moscow)
print(tile.to_quad_key())
print(OSMLayer().tile_pos_to_url(tile))
```

Round-tripping a telemetry packet:

```python
from geoview.telemetry import encode_vector, decode

packet = decode(encode_vector([1.0, 2.0, 3.0]))
print(packet.values)  # (1.0, 2.0, 3.0)
```

## What it does not do

This is a model, not an application. The package does not:

- download tiles;
- render a map or instruments to a screen;
- open network connections;
- read a joystick;
- talk to an aircraft.

Projection between geographic and projected coordinates is not included either. Items and camera actions work with projected `Point` and `Rect` values that you supply.

## Installation and tests

```
pip install .[test]
pytest
```