"""API v1 router aggregation."""

from fastapi import APIRouter

from folio.api.v1.auth import router as auth_router
from folio.api.v1.fonts import router as fonts_router
from folio.api.v1.portfolios import router as portfolios_router
from folio.api.v1.styles import router as styles_router
from folio.api.v1.templates import router as templates_router

api_router = APIRouter()

api_router.include_router(auth_router, prefix="/auth", tags=["Authentication"])
api_router.include_router(portfolios_router, prefix="/portfolios", tags=["Portfolios"])
api_router.include_router(templates_router, prefix="/templates", tags=["Templates"])
api_router.include_router(styles_router, prefix="/styles", tags=["Styles"])
api_router.include_router(fonts_router, prefix="/fonts", tags=["Fonts"])
