"""Style composition endpoints."""

from typing import Any

from fastapi import APIRouter, Depends

from folio.api.deps import RequirePermission
from folio.core.permissions import Permission
from folio.models.sql.user import User
from folio.schemas.style import ComposeRequest, ComposeResponse, ResolveResponse
from folio.styles.composer import TYPOGRAPHY_PRESETS, apply_typography_preset, compose_styles
from folio.styles.presets import FONT_COMBINATIONS, PREDEFINED_THEMES, TYPOGRAPHY_SCALES
from folio.styles.theme import theme_classes
from folio.styles.tokens import TOKEN_TABLES, known_tokens, lookup, resolve

router = APIRouter()


@router.post(
    "/compose",
    response_model=ComposeResponse,
    summary="Compose an element's inline styles",
)
async def compose(
    request: ComposeRequest,
    current_user: User = Depends(RequirePermission(Permission.STYLE_COMPOSE)),
) -> ComposeResponse:
    """Turn style panel state into a flat CSS property map."""
    customizations = request.customizations.model_dump()
    props = request.props
    if request.preset:
        props = apply_typography_preset(props, request.preset)

    return ComposeResponse(
        styles=compose_styles(props, customizations),
        classes=theme_classes(customizations),
    )


@router.get("/tokens", summary="List semantic tokens per property")
async def list_tokens() -> dict[str, list[str]]:
    return {name: known_tokens(name) for name in TOKEN_TABLES}


@router.get(
    "/tokens/{property_name}/{token}",
    response_model=ResolveResponse,
    summary="Resolve one token",
)
async def resolve_token(property_name: str, token: str) -> ResolveResponse:
    return ResolveResponse(
        property=property_name,
        token=token,
        value=resolve(property_name, token),
        known=lookup(property_name, token) is not None,
    )


@router.get("/presets", summary="Built-in themes, font pairings and scales")
async def list_presets() -> dict[str, Any]:
    return {
        "themes": PREDEFINED_THEMES,
        "font_combinations": FONT_COMBINATIONS,
        "typography_scales": TYPOGRAPHY_SCALES,
        "typography_presets": TYPOGRAPHY_PRESETS,
    }
