from typing import List, Optional

from pydantic import BaseModel, Field

from geoplot.models import Area, Circle, Icon, LatLng, Map, Marker, Polyline


class MarkerIn(BaseModel):
    lat_lng: LatLng
    popup: str = ""
    icon: Optional[int] = Field(None, ge=0, description="Index into `icons`; markers with the same index share one icon")


class MapRequest(BaseModel):
    center: Optional[LatLng] = None
    zoom: int = Field(0, ge=0, le=30, description="0 keeps the page default zoom")
    area: Optional[Area] = None
    icons: List[Icon] = []
    markers: List[MarkerIn] = []
    polylines: List[Polyline] = []
    circles: List[Circle] = []

    class Config:
        json_schema_extra = {
            "example": {
                "zoom": 13,
                "center": {"latitude": 35.658584, "longitude": 139.7454316},
                "icons": [
                    {
                        "url": "https://maps.google.com/mapfiles/ms/icons/red-dot.png",
                        "size": {"width": 32, "height": 32},
                        "anchor": {"x": 16, "y": 32},
                    }
                ],
                "markers": [
                    {"lat_lng": {"latitude": 35.658584, "longitude": 139.7454316}, "popup": "Tokyo Tower", "icon": 0}
                ],
                "polylines": [
                    {
                        "lat_lngs": [
                            {"latitude": 35.65, "longitude": 139.74},
                            {"latitude": 35.66, "longitude": 139.75},
                        ],
                        "popup": "Walk",
                        "color": {"r": 255, "g": 0, "b": 0},
                    }
                ],
                "circles": [
                    {"lat_lng": {"latitude": 35.658584, "longitude": 139.7454316}, "radius_meters": 300, "popup": "Nearby"}
                ],
            }
        }

    def to_map(self) -> Map:
        """Build a Map, registering each icon once. Raises ValueError on a bad icon index."""
        m = Map(center=self.center, zoom=self.zoom, area=self.area)
        handles = [m.add_icon(icon) for icon in self.icons]
        for c in self.circles:
            m.add_circle(c)
        for mk in self.markers:
            handle = None
            if mk.icon is not None:
                if mk.icon >= len(handles):
                    raise ValueError(f"marker icon index {mk.icon} out of range ({len(handles)} icons)")
                handle = handles[mk.icon]
            m.add_marker(Marker(lat_lng=mk.lat_lng, popup=mk.popup, icon=handle))
        for pl in self.polylines:
            m.add_polyline(pl)
        return m
