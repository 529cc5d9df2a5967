from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from geoplot.routers import health
from geoplot.routers import maps
from geoplot.core.logging import setup_logging
from geoplot.config import settings

app = FastAPI(title="geoplot")
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(health.router)
app.include_router(maps.router)

@app.on_event("startup")
async def startup_event():
    setup_logging()
