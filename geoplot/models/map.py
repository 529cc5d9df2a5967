import itertools
from typing import List, Optional, Tuple

from geoplot.core.exceptions import UnknownIconError
from geoplot.models.entities import Circle, Icon, IconHandle, Marker, Polyline
from geoplot.models.geo import Area, LatLng

_map_ids = itertools.count(1)


class Map:
    """
    A map description: optional viewport settings plus the entities drawn on it.

    Icons live in a per-map arena. `add_icon` returns a handle that markers use
    to refer to the icon; markers sharing a handle share one icon on the page.

    Entities are kept in insertion order. The map does no locking of its own:
    adding entities while another thread renders the same map needs external
    synchronization. Rendering never mutates the map.
    """

    def __init__(self, center: Optional[LatLng] = None, zoom: int = 0, area: Optional[Area] = None):
        self.center = center
        self.zoom = zoom  # 0 leaves the zoom level to the page default
        self.area = area

        self._owner = next(_map_ids)
        self._icons: List[Icon] = []
        self._markers: List[Marker] = []
        self._polylines: List[Polyline] = []
        self._circles: List[Circle] = []

    def add_icon(self, icon: Icon) -> IconHandle:
        self._icons.append(icon)
        return IconHandle(owner=self._owner, index=len(self._icons) - 1)

    def icon(self, handle: IconHandle) -> Icon:
        if handle.owner != self._owner or not 0 <= handle.index < len(self._icons):
            raise UnknownIconError(f"icon handle {handle.index} was not issued by this map")
        return self._icons[handle.index]

    def add_marker(self, marker: Marker) -> None:
        if marker.icon is not None:
            self.icon(marker.icon)
        self._markers.append(marker)

    def add_polyline(self, polyline: Polyline) -> None:
        self._polylines.append(polyline)

    def add_circle(self, circle: Circle) -> None:
        self._circles.append(circle)

    @property
    def icons(self) -> Tuple[Icon, ...]:
        return tuple(self._icons)

    @property
    def markers(self) -> Tuple[Marker, ...]:
        return tuple(self._markers)

    @property
    def polylines(self) -> Tuple[Polyline, ...]:
        return tuple(self._polylines)

    @property
    def circles(self) -> Tuple[Circle, ...]:
        return tuple(self._circles)
