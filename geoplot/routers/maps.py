from fastapi import APIRouter, HTTPException, Query, status
from fastapi.responses import HTMLResponse
from structlog import get_logger

from geoplot.core.exceptions import MapRenderError
from geoplot.models import LatLng, Map, Marker
from geoplot.schemas.map import MapRequest
from geoplot.services.demo import build_demo_map
from geoplot.services.page import map_response

logger = get_logger()
router = APIRouter(prefix="/api/v1", tags=["map"])

_demo_map = build_demo_map()


def _serve(m: Map) -> HTMLResponse:
    try:
        return map_response(m)
    except MapRenderError as e:
        logger.error("Map render failed", error=str(e), exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to render map")


def make_map_router(m: Map, path: str = "/map", **router_kwargs) -> APIRouter:
    """
    Build a router that serves `m` as an HTML page on GET `path`.

    The map is rendered on every request, so entities added later show up on
    the next load. Adding entities concurrently with a request is not safe.
    """
    map_router = APIRouter(**router_kwargs)

    @map_router.get(path, response_class=HTMLResponse)
    async def serve_map():
        return _serve(m)

    return map_router


@router.get("/map/preview", response_class=HTMLResponse)
async def map_preview(
    lat: float = Query(..., ge=-90, le=90),
    lon: float = Query(..., ge=-180, le=180),
    zoom: int = Query(14, ge=1, le=19),
):
    """
    Simple unauthenticated HTML page with a single marker centered at lat/lon.
    """
    center = LatLng(latitude=lat, longitude=lon)
    m = Map(center=center, zoom=zoom)
    m.add_marker(Marker(lat_lng=center, popup=f"{lat:.6f}, {lon:.6f}"))
    return _serve(m)


@router.post("/map/render", response_class=HTMLResponse)
async def render_map(req: MapRequest):
    """
    Render a map described as JSON into an HTML page.
    """
    try:
        m = req.to_map()
    except ValueError as e:
        logger.warning("Invalid map request", error=str(e))
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    return _serve(m)


@router.get("/map/demo", response_class=HTMLResponse)
async def demo_map():
    return _serve(_demo_map)
