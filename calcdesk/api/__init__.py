"""
API routes for the calculator catalog.
"""

from fastapi import APIRouter

from calcdesk.api import calculations, tax, network, statistics, dates, expressions

router = APIRouter()

# Include sub-routers
router.include_router(calculations.router, prefix="/calculate", tags=["calculations"])
router.include_router(tax.router, prefix="/tax", tags=["tax"])
router.include_router(network.router, prefix="/network", tags=["network"])
router.include_router(statistics.router, prefix="/statistics", tags=["statistics"])
router.include_router(dates.router, prefix="/dates", tags=["dates"])
router.include_router(expressions.router, prefix="/expressions", tags=["expressions"])
