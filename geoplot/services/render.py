"""
Serialize a Map into Leaflet statements.

Rendering runs in two phases. `assign_icon_ids` walks the markers and gives
every distinct icon handle they reference a fresh identifier in a table local
to this render. The statement functions then turn each entity into one line of
JavaScript using that table. Nothing is written back to the map or its
entities, so the same Map can be rendered by several requests at once.
"""
import json
import math
import secrets
import string
from typing import Callable, Dict, List, Mapping, Optional

from structlog import get_logger

from geoplot.core.exceptions import IdentifierGenerationError, SerializationError
from geoplot.models import Circle, Icon, IconHandle, LatLng, Map, Marker, Polyline

logger = get_logger()

ID_ALPHABET = string.ascii_lowercase + string.ascii_uppercase
ID_LENGTH = 16

# Characters that must not appear raw inside a <script> block; json.dumps
# already escapes everything outside ASCII
_UNSAFE_JS = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
}


def generate_id() -> str:
    try:
        return "".join(secrets.choice(ID_ALPHABET) for _ in range(ID_LENGTH))
    except (OSError, NotImplementedError) as e:
        raise IdentifierGenerationError(f"secure random source unavailable: {e}") from e


def _escape(encoded: str) -> str:
    for ch, repl in _UNSAFE_JS.items():
        encoded = encoded.replace(ch, repl)
    return encoded


def to_js_json(value) -> str:
    """JSON-encode `value` so it can be embedded verbatim in a script block."""
    try:
        return _escape(json.dumps(value, allow_nan=False))
    except (TypeError, ValueError) as e:
        raise SerializationError(f"cannot encode {value!r}: {e}") from e


def popup_literal(text: str) -> str:
    return to_js_json(text.replace("\n", "<br/>"))


def _number(value: float) -> str:
    if not math.isfinite(value):
        raise SerializationError(f"non-finite coordinate: {value}")
    return f"{value:.6f}"


def _coord(ll: LatLng) -> str:
    return f"[{_number(ll.latitude)}, {_number(ll.longitude)}]"


def viewport_statement(m: Map) -> Optional[str]:
    parts = []
    if m.zoom > 0:
        parts.append(f"map.setZoom({m.zoom});")
    if m.center is not None:
        parts.append(f"map.setView({_coord(m.center)});")
    if m.area is not None:
        parts.append(f"map.fitBounds([{_coord(m.area.from_)},{_coord(m.area.to)}]);")
    if not parts:
        return None
    return " ".join(parts)


def icon_statement(icon: Icon, ident: str) -> str:
    if icon.url:
        method = "icon"
        options = {"iconUrl": icon.url}
    else:
        method = "divIcon"
        # an empty className drops Leaflet's default white box around the markup
        options = {"html": icon.html, "className": ""}
    if icon.size is not None:
        options["iconSize"] = [icon.size.width, icon.size.height]
    if icon.anchor is not None:
        options["iconAnchor"] = [icon.anchor.x, icon.anchor.y]
    if icon.popup_anchor is not None:
        options["popupAnchor"] = [icon.popup_anchor.x, icon.popup_anchor.y]

    return f"const {ident} = L.{method}({to_js_json(options)});"


def marker_statement(marker: Marker, icon_ids: Mapping[IconHandle, str]) -> str:
    options = "{}"
    if marker.icon is not None:
        options = f"{{icon: {icon_ids[marker.icon]}}}"
    return f"L.marker({_coord(marker.lat_lng)}, {options}).addTo(map).bindPopup({popup_literal(marker.popup)});"


def polyline_statement(polyline: Polyline) -> str:
    latlngs = ",".join(_coord(ll) for ll in polyline.lat_lngs)
    options = {}
    if polyline.color is not None:
        options["color"] = polyline.color.hex()
    return (
        f"L.polyline([{latlngs}], {to_js_json(options)})"
        f".addTo(map).bindPopup({popup_literal(polyline.popup)});"
    )


def circle_statement(circle: Circle) -> str:
    return (
        f"L.circle({_coord(circle.lat_lng)}, {{radius: {int(circle.radius_meters)}}})"
        f".addTo(map).bindPopup({popup_literal(circle.popup)});"
    )


def assign_icon_ids(m: Map, id_factory: Callable[[], str] = generate_id) -> Dict[IconHandle, str]:
    icon_ids: Dict[IconHandle, str] = {}
    for marker in m.markers:
        if marker.icon is None or marker.icon in icon_ids:
            continue
        icon_ids[marker.icon] = id_factory()
    return icon_ids


def render_statements(m: Map, id_factory: Callable[[], str] = generate_id) -> List[str]:
    """
    Return the statements for `m` in page order: viewport, icons, circles,
    markers, polylines.
    """
    icon_ids = assign_icon_ids(m, id_factory)

    lines: List[str] = []
    viewport = viewport_statement(m)
    if viewport is not None:
        lines.append(viewport)
    for handle, ident in icon_ids.items():
        lines.append(icon_statement(m.icon(handle), ident))
    for circle in m.circles:
        lines.append(circle_statement(circle))
    for marker in m.markers:
        lines.append(marker_statement(marker, icon_ids))
    for polyline in m.polylines:
        lines.append(polyline_statement(polyline))

    logger.debug(
        "Map statements rendered",
        icons=len(icon_ids),
        circles=len(m.circles),
        markers=len(m.markers),
        polylines=len(m.polylines),
    )
    return lines
