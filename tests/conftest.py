import itertools

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from geoplot.main import app
from geoplot.models import Icon, LatLng, Map, Marker, Point, Polyline, Size

TOKYO_TOWER = LatLng(latitude=35.658584, longitude=139.7454316)


@pytest_asyncio.fixture
async def client():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
def id_factory():
    """Deterministic icon identifiers: iconAAAAAAAAAAAA, iconBBBBBBBBBBBB, ..."""
    letters = itertools.cycle("ABCDEFGHIJKLMNOPQRSTUVWXYZ")
    return lambda: "icon" + next(letters) * 12


@pytest.fixture
def url_icon():
    return Icon(
        url="https://maps.google.com/mapfiles/ms/icons/red-dot.png",
        size=Size(width=32, height=32),
        anchor=Point(x=16, y=32),
    )


@pytest.fixture
def sample_map(url_icon):
    m = Map()
    handle = m.add_icon(url_icon)
    m.add_marker(Marker(lat_lng=TOKYO_TOWER, popup="Hello", icon=handle))
    m.add_polyline(Polyline(
        lat_lngs=[
            TOKYO_TOWER.offset(-0.1, -0.1),
            TOKYO_TOWER.offset(-0.1, 0.1),
            TOKYO_TOWER.offset(0.1, 0.1),
            TOKYO_TOWER.offset(0.1, -0.1),
            TOKYO_TOWER.offset(-0.1, -0.1),
        ],
        popup="World",
    ))
    return m
