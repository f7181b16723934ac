"""
API module - FastAPI routers and endpoint definitions.

Usage:
    from job_platform.api.routes import api_router, realtime_router
    app.include_router(api_router, prefix="/api")
    app.include_router(realtime_router)
"""
