from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict

from geoplot.models.geo import Color, LatLng, Point, Size


class Icon(BaseModel):
    """
    Image icon when `url` is set, otherwise an HTML icon built from `html`.
    """
    model_config = ConfigDict(frozen=True)

    url: str = ""
    html: str = ""
    size: Optional[Size] = None
    anchor: Optional[Point] = None
    popup_anchor: Optional[Point] = None


class IconHandle(BaseModel):
    """
    Opaque reference to an icon registered with Map.add_icon.
    `owner` identifies the issuing map, `index` the slot in its icon list.
    """
    model_config = ConfigDict(frozen=True)

    owner: int
    index: int


class Marker(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat_lng: LatLng
    popup: str = ""
    icon: Optional[IconHandle] = None


class Polyline(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat_lngs: Tuple[LatLng, ...] = ()
    popup: str = ""
    color: Optional[Color] = None


class Circle(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat_lng: LatLng
    radius_meters: int
    popup: str = ""


_PIN_SVG = """
<svg width="100%" height="100%" viewBox="0 0 32 48" version="1.1" xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink" xml:space="preserve" style="fill-rule:evenodd;clip-rule:evenodd;stroke-linejoin:round;stroke-miterlimit:2;">
    <path d="M1.701,23.023C0.613,20.877 0,18.454 0,15.89C0,7.12 7.169,0 15.998,0C24.828,0 31.997,7.12 31.997,15.89C31.997,18.454 31.389,20.854 30.3,23L15.998,48.007L1.701,23.023Z" style="fill:rgb({r},{g},{b});"/>
    <path d="M1.701,23.023C0.613,20.877 0,18.454 0,15.89C0,7.12 7.169,0 15.998,0C24.828,0 31.997,7.12 31.997,15.89C31.997,18.454 31.389,20.854 30.3,23L15.998,48.007L1.701,23.023ZM2.582,22.549C1.57,20.544 1,18.283 1,15.89C1,7.67 7.722,1 15.998,1C24.274,1 30.997,7.67 30.997,15.89C30.997,18.277 30.434,20.513 29.425,22.514C29.419,22.526 15.998,45.993 15.998,45.993L2.582,22.549Z"/>
    <g transform="matrix(1.02055,0,0,1.02055,-1.48306,1.74407)">
        <circle cx="17.129" cy="13.971" r="5.862" style="fill:white;"/>
    </g>
</svg>
"""


def color_icon(r: int, g: int, b: int) -> Icon:
    """
    A 20x30 map pin filled with rgb(r, g, b), anchored at its tip.
    """
    return Icon(
        html=_PIN_SVG.replace("{r}", str(r)).replace("{g}", str(g)).replace("{b}", str(b)),
        size=Size(width=20, height=30),
        anchor=Point(x=10, y=30),
        popup_anchor=Point(x=0, y=-30),
    )
