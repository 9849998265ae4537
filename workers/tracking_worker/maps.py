from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol
from urllib.parse import quote, urlencode

from workers.tracking_worker.formatting import Coordinates
from workers.tracking_worker.models import PublicConfig

AMSTERDAM_CENTER = Coordinates(52.3676, 4.9041)
DEFAULT_ZOOM = 13
MIN_ZOOM = 10
MAX_ZOOM = 18

LocationCallback = Callable[[Coordinates], None]


@dataclass(frozen=True)
class MapMarkers:
    user: Coordinates | None = None
    pickup: Coordinates | None = None
    delivery: Coordinates | None = None
    driver: Coordinates | None = None
    address: str = ""

    def points(self) -> list[tuple[str, Coordinates]]:
        named = (
            ("user", self.user),
            ("pickup", self.pickup),
            ("delivery", self.delivery),
            ("driver", self.driver),
        )
        return [(name, point) for name, point in named if point is not None]

    def center(self) -> Coordinates:
        if self.pickup and self.delivery:
            return Coordinates(
                (self.pickup.lat + self.delivery.lat) / 2,
                (self.pickup.lng + self.delivery.lng) / 2,
            )
        return self.pickup or self.delivery or self.driver or self.user or AMSTERDAM_CENTER


class MapRenderer(Protocol):
    name: str

    def render_markers(self, markers: MapMarkers) -> str: ...

    def render_route(self, origin: Coordinates, destination: Coordinates) -> str: ...

    def set_zoom(self, level: int) -> int: ...

    def on_location_request(self, callback: LocationCallback) -> None: ...


def _point(point: Coordinates) -> str:
    return f"{point.lat},{point.lng}"


class _BaseMapRenderer:
    name = "base"

    def __init__(self) -> None:
        self.zoom = DEFAULT_ZOOM
        self._location_callbacks: list[LocationCallback] = []

    def set_zoom(self, level: int) -> int:
        self.zoom = max(MIN_ZOOM, min(MAX_ZOOM, level))
        return self.zoom

    def on_location_request(self, callback: LocationCallback) -> None:
        self._location_callbacks.append(callback)

    def request_location(self, point: Coordinates) -> None:
        for callback in list(self._location_callbacks):
            callback(point)


class GoogleStaticMapRenderer(_BaseMapRenderer):
    name = "google"
    BASE_URL = "https://maps.googleapis.com/maps/api/staticmap"
    MARKER_STYLES = {
        "user": "color:blue|label:U",
        "pickup": "color:green|label:P",
        "delivery": "color:red|label:D",
        "driver": "color:orange|label:B",
    }

    def __init__(self, api_key: str, size: str = "640x320") -> None:
        super().__init__()
        self.api_key = api_key
        self.size = size

    def render_markers(self, markers: MapMarkers) -> str:
        params: list[tuple[str, str]] = [
            ("center", _point(markers.center())),
            ("zoom", str(self.zoom)),
            ("size", self.size),
        ]
        for name, point in markers.points():
            params.append(("markers", f"{self.MARKER_STYLES[name]}|{_point(point)}"))
        params.append(("key", self.api_key))
        return f"{self.BASE_URL}?{urlencode(params)}"

    def render_route(self, origin: Coordinates, destination: Coordinates) -> str:
        params = [
            ("size", self.size),
            ("path", f"color:0x2563ebff|weight:4|{_point(origin)}|{_point(destination)}"),
            ("key", self.api_key),
        ]
        return f"{self.BASE_URL}?{urlencode(params)}"


class LocationIQMapRenderer(_BaseMapRenderer):
    name = "locationiq"
    BASE_URL = "https://maps.locationiq.com/v3/static/map"

    def __init__(self, api_key: str, size: int = 600) -> None:
        super().__init__()
        self.api_key = api_key
        self.size = size

    def _base_params(self, center: Coordinates) -> list[tuple[str, str]]:
        return [
            ("key", self.api_key),
            ("center", _point(center)),
            ("zoom", str(self.zoom)),
            ("size", f"{self.size}x{self.size}"),
            ("format", "png"),
            ("maptype", "roads"),
        ]

    def render_markers(self, markers: MapMarkers) -> str:
        params = self._base_params(markers.center())
        for _name, point in markers.points():
            params.append(("markers", f"icon:large-red-cutout|{_point(point)}"))
        return f"{self.BASE_URL}?{urlencode(params)}"

    def render_route(self, origin: Coordinates, destination: Coordinates) -> str:
        center = MapMarkers(pickup=origin, delivery=destination).center()
        params = self._base_params(center)
        params.append(("path", f"weight:4|color:blue|{_point(origin)}|{_point(destination)}"))
        return f"{self.BASE_URL}?{urlencode(params)}"


class OpenStreetMapRenderer(_BaseMapRenderer):
    name = "osm"
    EMBED_URL = "https://www.openstreetmap.org/export/embed.html"
    DIRECTIONS_URL = "https://www.openstreetmap.org/directions"

    def _bounding_box(self, center: Coordinates) -> tuple[float, float, float, float]:
        lat_range = 0.01 * 2 ** (15 - self.zoom)
        lng_range = 0.015 * 2 ** (15 - self.zoom)
        return (
            center.lng - lng_range,
            center.lat - lat_range,
            center.lng + lng_range,
            center.lat + lat_range,
        )

    def render_markers(self, markers: MapMarkers) -> str:
        bbox = ",".join(str(value) for value in self._bounding_box(markers.center()))
        params = [("bbox", bbox), ("layer", "mapnik")]
        # the embed only draws one marker
        first = markers.pickup or markers.delivery or markers.driver or markers.user
        if first is not None:
            params.append(("marker", _point(first)))
        return f"{self.EMBED_URL}?{urlencode(params, safe=',')}"

    def render_route(self, origin: Coordinates, destination: Coordinates) -> str:
        route = quote(f"{_point(origin)};{_point(destination)}", safe=",;")
        return f"{self.DIRECTIONS_URL}?engine=fossgis_osrm_car&route={route}"


def select_map_renderer(config: PublicConfig) -> MapRenderer:
    if config.google_maps_api_key:
        return GoogleStaticMapRenderer(config.google_maps_api_key)
    if config.locationiq_api_key:
        return LocationIQMapRenderer(config.locationiq_api_key)
    return OpenStreetMapRenderer()
