"""Template gallery endpoints."""

from typing import Literal, Optional

from fastapi import APIRouter, HTTPException, Query, status

from folio.schemas.template import TemplateCategory, TemplateResponse
from folio.templates.registry import TEMPLATE_CATEGORIES, TEMPLATES, get_template, list_templates

router = APIRouter()


@router.get("", response_model=list[TemplateResponse], summary="List templates")
async def get_templates(
    search: Optional[str] = None,
    category: Optional[str] = None,
    dark_mode: bool = False,
    sort_by: Literal["none", "-rating", "name"] = Query("none"),
) -> list[dict]:
    return list_templates(search=search, category=category, dark_mode=dark_mode, sort_by=sort_by)


@router.get("/categories", response_model=list[TemplateCategory], summary="Template categories")
async def get_categories() -> list[TemplateCategory]:
    return [TemplateCategory(id=key, name=name) for key, name in TEMPLATE_CATEGORIES.items()]


@router.get("/{slug}", response_model=TemplateResponse, summary="Get a template")
async def get_template_detail(slug: str) -> dict:
    if slug not in TEMPLATES:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Template not found",
        )
    return get_template(slug)
