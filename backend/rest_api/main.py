"""
REST API main application.
Entry point for the FastAPI REST server.
"""

from fastapi import FastAPI

from shared.config.settings import settings
from rest_api.core.cors import configure_cors
from rest_api.core.lifespan import lifespan
from rest_api.core.middlewares import register_middlewares
from rest_api.routers.bookings import router as bookings_router
from rest_api.routers.orders import router as orders_router
from rest_api.routers.kitchen import stations_router, tickets_router
from rest_api.routers.public import health_router


app = FastAPI(
    title="Tablewise REST API",
    description="Table booking, ordering and kitchen routing for multi-location restaurants",
    version="0.1.0",
    lifespan=lifespan,
)

register_middlewares(app)
configure_cors(app)


# =============================================================================
# Include Routers
# =============================================================================

app.include_router(health_router)
app.include_router(bookings_router)
app.include_router(orders_router)
app.include_router(stations_router)
app.include_router(tickets_router)


# =============================================================================
# Development entry point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "rest_api.main:app",
        host="0.0.0.0",
        port=settings.rest_api_port,
        reload=True,
    )
