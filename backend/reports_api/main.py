"""
Reports API main application.
Entry point for the FastAPI reports server.
"""

from fastapi import FastAPI

from shared.config.settings import settings
from shared.infrastructure.correlation import CorrelationIdMiddleware
from reports_api.core import configure_cors, lifespan, register_exception_handlers
from reports_api.routers.analytics import router as analytics_router
from reports_api.routers.billing import router as billing_router
from reports_api.routers.customers import router as customers_router


app = FastAPI(
    title="Restaurant Reports API",
    description="Billing reports and dish analytics for the restaurant admin dashboard",
    version="0.1.0",
    lifespan=lifespan,
)

# Every response carries X-Request-ID
app.add_middleware(CorrelationIdMiddleware)
configure_cors(app)
register_exception_handlers(app)


# =============================================================================
# Health Check
# =============================================================================


@app.get("/api/health")
def health_check():
    """Basic health check endpoint."""
    return {
        "status": "healthy",
        "service": "reports-api",
        "environment": settings.environment,
    }


# =============================================================================
# Include Routers
# =============================================================================

app.include_router(billing_router)
app.include_router(analytics_router)
app.include_router(customers_router)


# =============================================================================
# Development entry point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "reports_api.main:app",
        host="0.0.0.0",
        port=settings.rest_api_port,
        reload=True,
    )
