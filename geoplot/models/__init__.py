# Value objects first; the Map aggregate imports them
from geoplot.models.geo import Area, Color, LatLng, Point, Size
from geoplot.models.entities import Circle, Icon, IconHandle, Marker, Polyline, color_icon
from geoplot.models.map import Map

__all__ = [
    "Area",
    "Circle",
    "Color",
    "Icon",
    "IconHandle",
    "LatLng",
    "Map",
    "Marker",
    "Point",
    "Polyline",
    "Size",
    "color_icon",
]
