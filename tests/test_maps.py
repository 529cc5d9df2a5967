import pytest
from fastapi import FastAPI, status
from httpx import ASGITransport, AsyncClient
from unittest.mock import patch

from geoplot.core.exceptions import SerializationError
from geoplot.models import Circle, LatLng, Map
from geoplot.routers.maps import make_map_router
from geoplot.schemas.map import MapRequest

MAP_REQUEST = MapRequest.model_config["json_schema_extra"]["example"]


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/api/v1/health")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_map_preview_success(client):
    response = await client.get("/api/v1/map/preview?lat=9.03&lon=38.75&zoom=12")
    assert response.status_code == status.HTTP_200_OK
    assert response.headers["content-type"].startswith("text/html")
    assert "map.setZoom(12); map.setView([9.030000, 38.750000]);" in response.text
    assert "L.marker([9.030000, 38.750000], {})" in response.text


@pytest.mark.asyncio
async def test_map_preview_rejects_out_of_range_latitude(client):
    response = await client.get("/api/v1/map/preview?lat=91&lon=0")
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


@pytest.mark.asyncio
async def test_render_map_from_json(client):
    response = await client.post("/api/v1/map/render", json=MAP_REQUEST)
    assert response.status_code == status.HTTP_200_OK
    body = response.text
    assert body.count("= L.icon(") == 1
    assert "map.setZoom(13);" in body
    assert "L.circle([35.658584, 139.745432], {radius: 300})" in body
    assert '{"color": "#ff0000"}' in body
    assert body.index("L.circle(") < body.index("L.marker(") < body.index("L.polyline(")


@pytest.mark.asyncio
async def test_render_map_shared_icon_index(client):
    payload = {
        "icons": [{"url": "a.png"}],
        "markers": [
            {"lat_lng": {"latitude": 1, "longitude": 1}, "icon": 0},
            {"lat_lng": {"latitude": 2, "longitude": 2}, "icon": 0},
        ],
        "area": {"from": {"latitude": 0, "longitude": 0}, "to": {"latitude": 3, "longitude": 3}},
    }
    response = await client.post("/api/v1/map/render", json=payload)
    assert response.status_code == status.HTTP_200_OK
    assert response.text.count("= L.icon(") == 1
    assert "map.fitBounds([[0.000000, 0.000000],[3.000000, 3.000000]]);" in response.text


@pytest.mark.asyncio
async def test_render_map_bad_icon_index(client):
    payload = {"markers": [{"lat_lng": {"latitude": 1, "longitude": 1}, "icon": 2}]}
    response = await client.post("/api/v1/map/render", json=payload)
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert "out of range" in response.json()["detail"]


@pytest.mark.asyncio
async def test_demo_map(client):
    response = await client.get("/api/v1/map/demo")
    assert response.status_code == status.HTTP_200_OK
    body = response.text
    assert "= L.icon(" in body
    assert "= L.divIcon(" in body
    assert "L.circle([35.658584, 139.745432], {radius: 1000})" in body
    assert "Pin\\u003cbr/\\u003enorth-east" in body


@pytest.mark.asyncio
@patch("geoplot.services.page.render_statements")
async def test_render_failure_returns_500(mock_render_statements, client):
    mock_render_statements.side_effect = SerializationError("cannot encode")
    response = await client.get("/api/v1/map/demo")
    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json()["detail"] == "Failed to render map"


@pytest.mark.asyncio
async def test_make_map_router_serves_live_map(sample_map):
    app = FastAPI()
    app.include_router(make_map_router(sample_map, "/"))
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        first = await client.get("/")
        sample_map.add_circle(Circle(lat_lng=LatLng(latitude=1, longitude=2), radius_meters=42))
        second = await client.get("/")

    assert first.status_code == status.HTTP_200_OK
    assert "L.circle(" not in first.text
    assert "L.circle([1.000000, 2.000000], {radius: 42})" in second.text


@pytest.mark.asyncio
async def test_make_map_router_reports_errors():
    m = Map()
    m.add_circle(Circle(lat_lng=LatLng(latitude=float("nan"), longitude=0), radius_meters=1))
    app = FastAPI()
    app.include_router(make_map_router(m))
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.get("/map")
    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR


@pytest.mark.asyncio
@patch("geoplot.services.render.secrets.choice")
async def test_random_source_failure_returns_500(mock_choice, client):
    mock_choice.side_effect = OSError("no entropy")
    response = await client.get("/api/v1/map/demo")
    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json()["detail"] == "Failed to render map"
