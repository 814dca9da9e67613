"""Map layers and online tile sources."""

from __future__ import annotations

import abc
import enum

from geoview.geo import GeoTilePos
from geoview.item import Item


class TilesType(enum.Enum):
    SATELLITE = "Satellite"
    SCHEMA = "Schema"
    HYBRID = "Hybrid"


_TYPE_LABELS = {
    TilesType.SATELLITE: "QGV::Satellite",
    TilesType.SCHEMA: "QGV::Schema",
    TilesType.HYBRID: "QGV::Hybrid",
}


def _template(templates: list[str], server_number: int) -> str:
    if 0 <= server_number < len(templates):
        return templates[server_number]
    return ""


class Layer(Item):
    """A named group of map items."""

    def __init__(self, name: str = "", description: str = "") -> None:
        super().__init__()
        self.name = name
        self.description = description


class OnlineTileLayer(Layer, abc.ABC):
    """A layer whose tiles are fetched from a URL per tile position."""

    @abc.abstractmethod
    def min_zoom_level(self) -> int:
        """Lowest zoom level the source serves."""

    @abc.abstractmethod
    def max_zoom_level(self) -> int:
        """Highest zoom level the source serves."""

    @abc.abstractmethod
    def tile_pos_to_url(self, tile_pos: GeoTilePos) -> str:
        """URL of the image for ``tile_pos``."""


_BDGEX_BASE = (
    "http://bdgex.eb.mil.br/mapcache?request=GetMap&service=WMS&version=1.1.1"
    "&layers={layer}&srs={srs}&bbox=lonLeft,latBottom,lonRigth,latTop"
    "&width=WIDTH&height=HEIGHT&format=image%2Fpng"
)

_BDGEX_TEMPLATES = [
    _BDGEX_BASE.format(layer=layer, srs=srs)
    for layer, srs in (
        ("ctm25", "EPSG%3A4326"),
        ("ctm50", "EPSG%3A4326"),
        ("ctm100", "EPSG%3A4326"),
        ("ctm250", "EPSG%3A4326"),
        ("ctm250", "EPSG%3A4326"),
        ("ctmmultiescalas", "EPSG%3A4326"),
        ("ctmmultiescalas_mercator", "EPSG%3A3857"),
    )
]

_BDGEX_WIDTH_PIXELS = 900


class BDGExLayer(OnlineTileLayer):
    """WMS topographic maps requested by bounding box."""

    def __init__(self, server_number: int = 0) -> None:
        super().__init__(
            "Banco de Dados Geográfico do Exército",
            'Copyrights: "Termo de Uso do BDGEx"',
        )
        self.url = _template(_BDGEX_TEMPLATES, server_number)

    @classmethod
    def custom(cls, url: str) -> BDGExLayer:
        layer = cls()
        layer.url = url
        layer.name = "Padrão"
        layer.description = "Carta Topográfica Matricial"
        return layer

    def min_zoom_level(self) -> int:
        return 0

    def max_zoom_level(self) -> int:
        return 20

    def tile_pos_to_url(self, tile_pos: GeoTilePos) -> str:
        rect = tile_pos.to_geo_rect()
        url = self.url
        url = url.replace("lonLeft", f"{rect.lon_left:.6f}")
        url = url.replace("latBottom", f"{rect.lat_bottom:.6f}")
        url = url.replace("lonRigth", f"{rect.lon_right:.6f}")
        url = url.replace("latTop", f"{rect.lat_top:.6f}")
        ratio = (rect.lon_right - rect.lon_left) / (rect.lat_top - rect.lat_bottom)
        height_pixels = int(_BDGEX_WIDTH_PIXELS / ratio)
        url = url.replace("WIDTH", str(_BDGEX_WIDTH_PIXELS))
        return url.replace("HEIGHT", str(height_pixels))


class _TypedTileLayer(OnlineTileLayer):
    """Shared state for sources that offer several tile types and locales."""

    _provider = ""

    def __init__(self, tiles_type: TilesType, locale: str, server_number: int, description: str) -> None:
        super().__init__(description=description)
        self._tiles_type = tiles_type
        self._locale = locale
        self.server_number = server_number
        self._refresh_name()

    def _refresh_name(self) -> None:
        self.name = f"{self._provider} ({_TYPE_LABELS[self._tiles_type]} {self._locale})"

    @property
    def tiles_type(self) -> TilesType:
        return self._tiles_type

    @tiles_type.setter
    def tiles_type(self, value: TilesType) -> None:
        self._tiles_type = value
        self._refresh_name()

    @property
    def locale(self) -> str:
        return self._locale

    @locale.setter
    def locale(self, value: str) -> None:
        self._locale = value
        self._refresh_name()


def _mirrors(pattern: str, hosts: tuple[str, ...]) -> list[str]:
    return [pattern.format(host=host) for host in hosts]


_BING_TEMPLATES = {
    tiles_type: _mirrors(
        "http://{host}.tiles.virtualearth.net/tiles/" + prefix + "${{qk}}.jpeg?g=181&mkt=${{lcl}}",
        ("t0", "t1", "t2"),
    )
    for tiles_type, prefix in (
        (TilesType.SATELLITE, "a"),
        (TilesType.SCHEMA, "r"),
        (TilesType.HYBRID, "h"),
    )
}


class BingLayer(_TypedTileLayer):
    """Quad-key addressed tiles."""

    _provider = "Bing Maps"

    def __init__(
        self,
        tiles_type: TilesType = TilesType.SATELLITE,
        locale: str = "en_US",
        server_number: int = 0,
    ) -> None:
        super().__init__(tiles_type, locale, server_number, "Copyrights ©Microsoft")

    def min_zoom_level(self) -> int:
        return 1

    def max_zoom_level(self) -> int:
        return 19

    def tile_pos_to_url(self, tile_pos: GeoTilePos) -> str:
        url = _template(_BING_TEMPLATES[self.tiles_type], self.server_number).lower()
        url = url.replace("${lcl}", self.locale)
        return url.replace("${qk}", tile_pos.to_quad_key())


_GOOGLE_TEMPLATES = {
    TilesType.SATELLITE: _mirrors(
        "https://{host}.google.com/vt/lyrs=s@186112443&hl=${{lcl}}&x=${{x}}&y=${{y}}&z=${{z}}&s=Galile",
        ("mts0", "mts1", "mts2"),
    ),
    TilesType.SCHEMA: _mirrors(
        "http://{host}.google.com/vt/lyrs=m@110&hl=${{lcl}}&x=${{x}}&y=${{y}}&z=${{z}}",
        ("mt1", "mt2", "mt3"),
    ),
    TilesType.HYBRID: _mirrors(
        "http://{host}.google.com/vt/lyrs=s,m@110&hl=${{lcl}}&x=${{x}}&y=${{y}}&z=${{z}}",
        ("mt1", "mt2", "mt3"),
    ),
}


def _replace_xyz(url: str, tile_pos: GeoTilePos) -> str:
    url = url.replace("${z}", str(tile_pos.zoom))
    url = url.replace("${x}", str(tile_pos.x))
    return url.replace("${y}", str(tile_pos.y))


class GoogleLayer(_TypedTileLayer):
    """XYZ tiles with a locale parameter."""

    _provider = "Google Maps"

    def __init__(
        self,
        tiles_type: TilesType = TilesType.SCHEMA,
        locale: str = "en_US",
        server_number: int = 0,
    ) -> None:
        super().__init__(tiles_type, locale, server_number, "Copyrights ©Google")

    def min_zoom_level(self) -> int:
        return 0

    def max_zoom_level(self) -> int:
        return 21

    def tile_pos_to_url(self, tile_pos: GeoTilePos) -> str:
        url = _template(_GOOGLE_TEMPLATES[self.tiles_type], self.server_number).lower()
        url = url.replace("${lcl}", self.locale)
        return _replace_xyz(url, tile_pos)


_OSM_TEMPLATES = _mirrors("http://{host}.tile.openstreetmap.org/${{z}}/${{x}}/${{y}}.png", ("a", "b", "c"))


class OSMLayer(OnlineTileLayer):
    """XYZ tiles from a ``${z}/${x}/${y}`` URL template."""

    def __init__(self, server_number: int = 0) -> None:
        super().__init__("OpenStreetMap", "Copyrights ©OpenStreetMap")
        self.url = _template(_OSM_TEMPLATES, server_number)

    @classmethod
    def custom(cls, url: str) -> OSMLayer:
        layer = cls()
        layer.url = url
        layer.name = "Custom"
        layer.description = "OSM-like map"
        return layer

    def min_zoom_level(self) -> int:
        return 0

    def max_zoom_level(self) -> int:
        return 20

    def tile_pos_to_url(self, tile_pos: GeoTilePos) -> str:
        return _replace_xyz(self.url.lower(), tile_pos)