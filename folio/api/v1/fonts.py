"""Font catalog and loading endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from folio.api.deps import RequirePermission, get_font_loader
from folio.config import settings
from folio.core.permissions import Permission
from folio.fonts.catalog import build_stylesheet_url, font_category, font_stack, search_fonts
from folio.fonts.loader import FontLoader
from folio.models.sql.user import User
from folio.schemas.font import FontDetailResponse, FontLoadRequest, FontLoadResponse, FontResponse

router = APIRouter()


def _describe(name: str, loader: FontLoader) -> FontResponse:
    config = loader.catalog[name]
    return FontResponse(
        name=name,
        weights=list(config.weights),
        variable=config.variable,
        category=font_category(name),
        stack=font_stack(name),
        is_loaded=loader.is_loaded(name),
    )


@router.get("", response_model=list[FontResponse], summary="List available fonts")
async def list_fonts(
    search: Optional[str] = None,
    category: Optional[str] = None,
    font_loader: FontLoader = Depends(get_font_loader),
) -> list[FontResponse]:
    return [
        _describe(name, font_loader)
        for name in search_fonts(search, category)
        if name in font_loader.catalog
    ]


@router.get("/loaded", response_model=list[str], summary="Fonts loaded so far")
async def loaded_fonts(font_loader: FontLoader = Depends(get_font_loader)) -> list[str]:
    return font_loader.loaded_fonts()


@router.post("/load", response_model=FontLoadResponse, summary="Load font stylesheets")
async def load_fonts(
    request: FontLoadRequest,
    current_user: User = Depends(RequirePermission(Permission.FONT_LOAD)),
    font_loader: FontLoader = Depends(get_font_loader),
) -> FontLoadResponse:
    """Load several families at once; failures are reported, not raised."""
    failed = await font_loader.load_many(request.families, request.weights)
    loaded = [name for name in request.families if font_loader.is_loaded(name)]
    return FontLoadResponse(loaded=loaded, failed=failed)


@router.get("/{name}", response_model=FontDetailResponse, summary="Font details")
async def get_font(
    name: str,
    weights: list[int] = Query([400]),
    font_loader: FontLoader = Depends(get_font_loader),
) -> FontDetailResponse:
    if name not in font_loader.catalog:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f'Font "{name}" not found in configuration',
        )

    config = font_loader.catalog[name]
    return FontDetailResponse(
        **_describe(name, font_loader).model_dump(),
        stylesheet_url=build_stylesheet_url(settings.GOOGLE_FONTS_CSS_URL, name, config, weights),
    )
