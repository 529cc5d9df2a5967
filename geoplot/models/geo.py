from pydantic import BaseModel, ConfigDict, Field


class LatLng(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float

    def offset(self, lat: float, lon: float) -> "LatLng":
        """Return a copy translated by (lat, lon) degrees. No clamping or wraparound."""
        return LatLng(latitude=self.latitude + lat, longitude=self.longitude + lon)


class Point(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: int
    y: int


class Size(BaseModel):
    model_config = ConfigDict(frozen=True)

    width: int
    height: int


class Area(BaseModel):
    # "from" is a keyword, so the attribute is from_ and the wire name is "from"
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    from_: LatLng = Field(..., alias="from")
    to: LatLng


class Color(BaseModel):
    model_config = ConfigDict(frozen=True)

    r: int = Field(..., ge=0, le=255)
    g: int = Field(..., ge=0, le=255)
    b: int = Field(..., ge=0, le=255)

    def hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"
