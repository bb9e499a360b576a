"""
Occupancy Analytics API - READ-ONLY Backend
============================================
Portfolio occupancy, vacancy-timeline and revenue-loss reports over the
property store.

IMPORTANT: Report operations are GET-only. Nothing here modifies the store.

Reports:
- Occupancy: current-status occupancy, area and revenue per property
- Opportunity Loss: reconstructed vacant/maintenance days and lost revenue
- Property Performance: occupancy, revenue and efficiency rankings
- Occupancy Stats: portfolio rollup with best/worst property
"""
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from leasedash.api.auth import router as auth_router
from leasedash.api.reports import router as reports_router
from leasedash.config import get_settings

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Occupancy Analytics API",
    description="""
    Read-only API for portfolio occupancy and revenue-loss analytics.

    ## Reports
    - **Occupancy**: unit counts, area and revenue by current status
    - **Opportunity Loss**: vacancy timeline reconstruction over a window
    - **Property Performance**: occupancy, revenue and efficiency ranks
    - **Occupancy Stats**: portfolio-wide summary

    ## Timeframes
    Pass `start_date`/`end_date`, or a preset: `cm`, `pm`, `ytd`, `l30`, `l7`.
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        origin for origin in (
            "http://localhost:3000",
            "http://127.0.0.1:3000",
            settings.frontend_url,
        ) if origin
    ],
    allow_credentials=True,
    allow_methods=["GET", "POST"],  # POST needed for login
    allow_headers=["*"],
)

app.include_router(auth_router, prefix="/api", tags=["Auth"])
app.include_router(reports_router, prefix="/api/v1", tags=["Reports"])


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "Occupancy Analytics API",
        "version": "1.0.0",
        "docs": "/docs",
        "status": "running",
        "note": "READ-ONLY API - reports are GET only",
    }
