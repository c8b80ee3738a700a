"""Portfolio endpoints."""

import logging
import re
from datetime import UTC, datetime
from math import ceil
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status
from motor.motor_asyncio import AsyncIOMotorCollection

from folio.api.deps import (
    RequirePermission,
    get_current_user,
    get_font_loader,
    require_portfolio_editor,
    require_portfolio_owner,
    require_portfolio_reader,
)
from folio.core.permissions import Permission
from folio.db.mongodb import get_portfolios_collection
from folio.fonts.catalog import font_stack
from folio.fonts.loader import FontLoader
from folio.models.nosql.portfolio import Portfolio, PortfolioContent, TemplateInfo
from folio.models.sql.user import User
from folio.schemas.portfolio import (
    PortfolioCreate,
    PortfolioListResponse,
    PortfolioResponse,
    PortfolioUpdate,
    ThemePresetRequest,
    ThemeResponse,
)
from folio.styles.presets import (
    FONT_COMBINATIONS,
    ThemeImportError,
    UnknownPresetError,
    apply_color_theme,
    apply_font_combination,
    apply_typography_scale,
    export_theme,
    font_families,
    import_theme,
    reset_theme,
)
from folio.styles.theme import StyleRoot, inject_theme_variables, theme_classes
from folio.templates.registry import get_template

logger = logging.getLogger(__name__)

router = APIRouter()


def merge_customizations(defaults: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Overlay stored customizations on template defaults, section by section."""
    merged = {key: dict(value) if isinstance(value, dict) else value for key, value in defaults.items()}
    for section, values in overrides.items():
        if isinstance(values, dict) and isinstance(merged.get(section), dict):
            merged[section].update(values)
        else:
            merged[section] = values
    return merged


async def _save_changes(
    collection: AsyncIOMotorCollection, portfolio_id: str, changes: dict[str, Any]
) -> Portfolio:
    changes["updated_at"] = datetime.now(UTC)
    await collection.update_one({"_id": portfolio_id}, {"$set": changes})

    document = await collection.find_one({"_id": portfolio_id})
    if document is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Portfolio not found",
        )
    return Portfolio.from_mongo(document)


@router.get(
    "",
    response_model=PortfolioListResponse,
    summary="List the current user's portfolios",
)
async def list_portfolios(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    search: Optional[str] = None,
    current_user: User = Depends(get_current_user),
    collection: AsyncIOMotorCollection = Depends(get_portfolios_collection),
) -> PortfolioListResponse:
    """List portfolios owned by the caller, most recently edited first."""
    query: dict[str, Any] = {"user_id": str(current_user.id)}
    if search:
        query["title"] = {"$regex": re.escape(search), "$options": "i"}

    total = await collection.count_documents(query)
    cursor = (
        collection.find(query)
        .sort("updated_at", -1)
        .skip((page - 1) * page_size)
        .limit(page_size)
    )
    documents = await cursor.to_list(length=page_size)

    return PortfolioListResponse(
        items=[PortfolioResponse(**Portfolio.from_mongo(d).model_dump()) for d in documents],
        total=total,
        page=page,
        page_size=page_size,
        pages=ceil(total / page_size) if total > 0 else 1,
    )


@router.post(
    "",
    response_model=PortfolioResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a portfolio from a template",
)
async def create_portfolio(
    portfolio_data: PortfolioCreate,
    current_user: User = Depends(RequirePermission(Permission.PORTFOLIO_CREATE)),
    collection: AsyncIOMotorCollection = Depends(get_portfolios_collection),
) -> PortfolioResponse:
    """Create a portfolio seeded with the template's sections and theme."""
    template = get_template(portfolio_data.template)

    customizations = template["customizations"]
    if portfolio_data.customizations is not None:
        customizations = merge_customizations(
            customizations, portfolio_data.customizations.model_dump()
        )

    content = portfolio_data.content or PortfolioContent()
    if not content.sections:
        content = PortfolioContent(sections=template["sections"], metadata=content.metadata)

    portfolio = Portfolio(
        user_id=str(current_user.id),
        title=portfolio_data.title,
        description=portfolio_data.description,
        content=content,
        customizations=customizations,
        template_info=TemplateInfo(
            name=template["name"],
            slug=template["slug"],
            category=template["category"],
        ),
    )
    await collection.insert_one(portfolio.to_mongo())

    logger.info(f"Created portfolio {portfolio.id} from template {template['slug']}")
    return PortfolioResponse(**portfolio.model_dump())


@router.get(
    "/{portfolio_id}",
    response_model=PortfolioResponse,
    summary="Get a portfolio",
)
async def get_portfolio(
    portfolio: Portfolio = Depends(require_portfolio_reader),
) -> PortfolioResponse:
    return PortfolioResponse(**portfolio.model_dump())


@router.patch(
    "/{portfolio_id}",
    response_model=PortfolioResponse,
    summary="Update a portfolio",
)
async def update_portfolio(
    update_data: PortfolioUpdate,
    portfolio: Portfolio = Depends(require_portfolio_editor),
    collection: AsyncIOMotorCollection = Depends(get_portfolios_collection),
) -> PortfolioResponse:
    """Update title, publication state, content or customizations."""
    changes = update_data.model_dump(exclude_unset=True, exclude_none=True)
    if not changes:
        return PortfolioResponse(**portfolio.model_dump())

    updated = await _save_changes(collection, portfolio.id, changes)
    return PortfolioResponse(**updated.model_dump())


@router.delete(
    "/{portfolio_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a portfolio",
)
async def delete_portfolio(
    portfolio: Portfolio = Depends(require_portfolio_owner),
    collection: AsyncIOMotorCollection = Depends(get_portfolios_collection),
) -> None:
    await collection.delete_one({"_id": portfolio.id})
    logger.info(f"Deleted portfolio {portfolio.id}")


@router.get(
    "/{portfolio_id}/theme",
    response_model=ThemeResponse,
    summary="Theme variables for live preview",
)
async def get_portfolio_theme(
    portfolio: Portfolio = Depends(require_portfolio_reader),
) -> ThemeResponse:
    """Project the portfolio's customizations onto ``:root`` custom properties."""
    root = StyleRoot()
    variables = inject_theme_variables(portfolio.customizations, root)

    fonts = portfolio.customizations.get("fonts") or {}
    stacks = {
        role: font_stack(family)
        for role, family in fonts.items()
        if isinstance(family, str) and family and family != "default"
    }

    return ThemeResponse(
        variables=variables,
        css=root.to_css(),
        classes=theme_classes(portfolio.customizations),
        font_stacks=stacks,
    )


@router.post(
    "/{portfolio_id}/theme/preset",
    response_model=PortfolioResponse,
    summary="Apply a built-in theme preset",
)
async def apply_theme_preset(
    preset: ThemePresetRequest,
    portfolio: Portfolio = Depends(require_portfolio_editor),
    collection: AsyncIOMotorCollection = Depends(get_portfolios_collection),
    font_loader: FontLoader = Depends(get_font_loader),
) -> PortfolioResponse:
    """Apply a color theme, font combination, typography scale or reset."""
    current = portfolio.customizations
    try:
        if preset.kind == "reset":
            customizations = reset_theme(current)
        elif preset.kind == "colors":
            customizations = apply_color_theme(current, preset.name)
        elif preset.kind == "fonts":
            customizations = apply_font_combination(current, preset.name)
            # Font failures are logged by the loader and never block the theme
            await font_loader.load_many(
                font_families(FONT_COMBINATIONS[preset.name]), (300, 400, 500, 600, 700)
            )
        else:
            customizations = apply_typography_scale(current, preset.name)
    except UnknownPresetError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown {preset.kind} preset: {preset.name}",
        )

    updated = await _save_changes(collection, portfolio.id, {"customizations": customizations})
    return PortfolioResponse(**updated.model_dump())


@router.get(
    "/{portfolio_id}/theme/export",
    summary="Export the portfolio theme",
)
async def export_portfolio_theme(
    portfolio: Portfolio = Depends(require_portfolio_reader),
) -> dict[str, Any]:
    return export_theme(portfolio.customizations)


@router.post(
    "/{portfolio_id}/theme/import",
    response_model=PortfolioResponse,
    summary="Import a previously exported theme",
)
async def import_portfolio_theme(
    theme_data: dict[str, Any] = Body(...),
    portfolio: Portfolio = Depends(require_portfolio_editor),
    collection: AsyncIOMotorCollection = Depends(get_portfolios_collection),
) -> PortfolioResponse:
    try:
        customizations = import_theme(portfolio.customizations, theme_data)
    except ThemeImportError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )

    updated = await _save_changes(collection, portfolio.id, {"customizations": customizations})
    return PortfolioResponse(**updated.model_dump())
