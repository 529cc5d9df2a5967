from typing import List, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings


class TileLayer(BaseModel):
    name: str
    url: str
    attribution: str
    max_zoom: Optional[int] = None


# tiles are copied from: https://leaflet-extras.github.io/leaflet-providers/preview/
DEFAULT_TILE_LAYERS = [
    TileLayer(
        name="Esri",
        url="https://server.arcgisonline.com/ArcGIS/rest/services/World_Street_Map/MapServer/tile/{z}/{y}/{x}",
        attribution=(
            "Tiles &copy; Esri &mdash; Source: Esri, DeLorme, NAVTEQ, USGS, Intermap, iPC, NRCAN, "
            "Esri Japan, METI, Esri China (Hong Kong), Esri (Thailand), TomTom, 2012"
        ),
    ),
    TileLayer(
        name="OpenStreetMap",
        url="https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png",
        attribution='&copy; <a href="https://www.openstreetmap.org/copyright">OpenStreetMap</a> contributors',
        max_zoom=19,
    ),
]


class Settings(BaseSettings):
    PAGE_TITLE: str = "geoplot"
    # Leaflet client assets; the integrity hashes must match the version
    LEAFLET_VERSION: str = "1.7.1"
    LEAFLET_CSS_INTEGRITY: str = "sha512-xodZBNTC5n17Xt2atTPuE1HxjVMSvLVW9ocqUKLsCC5CXdbqCmblAshOMAS6/keqq/sMZMZ19scR4PsZChSR7A=="
    LEAFLET_JS_INTEGRITY: str = "sha512-XQoYMqMTK8LvdxXYG3nZ448hOEQiglfqkJs1NOQV44cWnUrBc8PkAOcXy20w0vlaXaVUearIOBhiXZ5V3ynxwA=="
    # Viewport used by the page before any generated statement runs
    DEFAULT_LAT: float = Field(0.0, ge=-90, le=90, allow_inf_nan=False)
    DEFAULT_LON: float = Field(0.0, allow_inf_nan=False)
    DEFAULT_ZOOM: int = 1
    TILE_LAYERS: List[TileLayer] = DEFAULT_TILE_LAYERS
    ATTRIBUTION: str = 'Rendered by geoplot with <a href="https://leafletjs.com">Leaflet</a>'
    CORS_ORIGINS: List[str] = ["*"]
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

settings = Settings()
