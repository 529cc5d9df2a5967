from functools import lru_cache
from typing import Callable, Optional

import jinja2
from fastapi.responses import HTMLResponse
from structlog import get_logger

from geoplot.config import Settings, settings as default_settings
from geoplot.core.exceptions import MapWriteError, SerializationError, TemplateRenderError
from geoplot.models import Map
from geoplot.services.render import generate_id, render_statements

logger = get_logger()

# Statements are emitted verbatim; the renderer has already made them safe.
# Configuration strings go through |tojson, which escapes <, > and &.
PAGE_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{{ title | e }}</title>
    <link rel="stylesheet" href="https://unpkg.com/leaflet@{{ leaflet_version | e }}/dist/leaflet.css"
      integrity="{{ css_integrity | e }}"
      crossorigin=""/>
    <script src="https://unpkg.com/leaflet@{{ leaflet_version | e }}/dist/leaflet.js"
      integrity="{{ js_integrity | e }}"
      crossorigin=""></script>
    <style>
        html, body, #map {
            height: 100%;
            margin: 0;
        }
    </style>
</head>
<body>
    <div id="map"></div>
    <script>
      const map = L.map('map', {
        center: [{{ default_lat }}, {{ default_lon }}],
        zoom: {{ default_zoom }},
      });
      const layers = {};
      {% for layer in tile_layers %}
      layers[{{ layer.name | tojson }}] = L.tileLayer({{ layer.url | tojson }}, {
        {% if layer.max_zoom is not none %}maxZoom: {{ layer.max_zoom }},{% endif %}
        attribution: {{ layer.attribution | tojson }}
      }){% if loop.first %}.addTo(map){% endif %};
      {% endfor %}
      {% if tile_layers | length > 1 %}
      L.control.layers(layers).addTo(map);
      {% endif %}
      map.attributionControl.addAttribution({{ attribution | tojson }});
      {% for line in lines %}
      {{ line }}
      {% endfor %}
    </script>
</body>
</html>
"""


@lru_cache(maxsize=1)
def load_template() -> jinja2.Template:
    env = jinja2.Environment(autoescape=False, trim_blocks=True, lstrip_blocks=True)
    try:
        return env.from_string(PAGE_TEMPLATE)
    except jinja2.TemplateSyntaxError as e:
        raise TemplateRenderError(f"page template is invalid: {e}") from e


def render_page(
    m: Map,
    settings: Optional[Settings] = None,
    id_factory: Callable[[], str] = generate_id,
) -> str:
    """
    Render `m` into a complete HTML document.

    The document is built in memory; on any failure a MapRenderError is raised
    and nothing has been handed to the caller.
    """
    settings = settings or default_settings
    template = load_template()
    lines = render_statements(m, id_factory)
    try:
        document = template.render(
            title=settings.PAGE_TITLE,
            leaflet_version=settings.LEAFLET_VERSION,
            css_integrity=settings.LEAFLET_CSS_INTEGRITY,
            js_integrity=settings.LEAFLET_JS_INTEGRITY,
            default_lat=float(settings.DEFAULT_LAT),
            default_lon=float(settings.DEFAULT_LON),
            default_zoom=int(settings.DEFAULT_ZOOM),
            tile_layers=settings.TILE_LAYERS,
            attribution=settings.ATTRIBUTION,
            lines=lines,
        )
    except jinja2.TemplateError as e:
        raise TemplateRenderError(f"page template failed to render: {e}") from e
    try:
        document.encode("utf-8")
    except UnicodeEncodeError as e:
        raise SerializationError(f"page is not valid UTF-8: {e}") from e
    return document


def write_map(sink, m: Map, settings: Optional[Settings] = None, id_factory: Callable[[], str] = generate_id) -> None:
    """
    Render `m` and write the page to `sink`, which must accept ``write(str)``.

    Rendering completes before the single write, so a render error leaves the
    sink untouched. A failing write, including a bytes-only sink rejecting
    text, raises MapWriteError.
    """
    document = render_page(m, settings, id_factory)
    try:
        sink.write(document)
    except (OSError, ValueError, TypeError) as e:
        logger.error("Map write failed", error=str(e))
        raise MapWriteError(f"failed to write map page: {e}") from e


def map_response(m: Map, settings: Optional[Settings] = None) -> HTMLResponse:
    document = render_page(m, settings)
    logger.info("Map rendered", markers=len(m.markers), polylines=len(m.polylines), circles=len(m.circles))
    return HTMLResponse(content=document)
