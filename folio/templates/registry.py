"""Portfolio templates offered in the gallery.

Only metadata and default customizations live here; section content is
supplied by the editor.
"""

import copy
from typing import Any, Optional

from folio.config import settings

TEMPLATE_CATEGORIES: dict[str, str] = {
    "portfolio": "Portfolio",
    "developer": "Developer",
    "creative": "Creative",
    "business": "Business",
    "photography": "Photography",
}

TEMPLATE_RATINGS: dict[str, float] = {
    "modern-minimalist": 4.8,
    "creative-dark": 4.9,
    "professional-corporate": 4.7,
    "modern-creative": 5.0,
    "tattoo-artist": 4.8,
    "photographer-minimal": 4.9,
    "designer-bio": 5.0,
    "developer-focused": 4.6,
}
DEFAULT_RATING = 4.5
TEMPLATE_CREATED_AT = "2024-01-01T00:00:00.000Z"

TEMPLATES: dict[str, dict[str, Any]] = {
    "modern-minimalist": {
        "name": "Modern Minimalist",
        "description": "Clean layout with generous whitespace and a single accent color.",
        "customizations": {
            "colors": {
                "primary": "#3b82f6",
                "secondary": "#6b7280",
                "background": "#ffffff",
                "text": "#111827",
            },
            "fonts": {"heading": "Inter", "body": "Inter"},
        },
    },
    "creative-dark": {
        "name": "Creative Dark",
        "description": "Bold dark canvas for visual work.",
        "customizations": {
            "colors": {
                "primary": "#8b5cf6",
                "secondary": "#9ca3af",
                "background": "#0f172a",
                "text": "#f9fafb",
            },
            "fonts": {"heading": "Poppins", "body": "Nunito Sans"},
        },
    },
    "developer-focused": {
        "name": "Developer Focused",
        "description": "Project-first layout with monospace accents.",
        "customizations": {
            "colors": {
                "primary": "#10b981",
                "secondary": "#64748b",
                "background": "#ffffff",
                "text": "#0f172a",
            },
            "fonts": {"heading": "Space Grotesk", "body": "DM Sans", "mono": "JetBrains Mono"},
        },
    },
    "designer-bio": {
        "name": "Designer Bio",
        "description": "Editorial biography layout with serif headings.",
        "customizations": {
            "colors": {
                "primary": "#f97316",
                "secondary": "#78716c",
                "background": "#fffbeb",
                "text": "#1c1917",
            },
            "fonts": {"heading": "Playfair Display", "body": "Lato"},
        },
    },
}

# Gallery order when no sort is requested
TEMPLATE_ORDER = ("modern-minimalist", "creative-dark", "developer-focused", "designer-bio")


def template_category(template_id: str) -> str:
    """Derive a gallery category from the template id."""
    if "developer" in template_id or "tech" in template_id:
        return "developer"
    if any(word in template_id for word in ("creative", "artist", "designer")):
        return "creative"
    if "photographer" in template_id or "portfolio" in template_id:
        return "photography"
    if any(word in template_id for word in ("business", "corporate", "professional")):
        return "business"
    return "portfolio"


def _describe(template_id: str) -> dict[str, Any]:
    template = copy.deepcopy(TEMPLATES[template_id])
    features = template.pop("features", {})
    return {
        "id": template_id,
        "slug": template_id,
        "sections": [],
        **template,
        "price": template.get("price", 0),
        "is_free": True,
        "rating": template.get("rating", TEMPLATE_RATINGS.get(template_id, DEFAULT_RATING)),
        "created_at": template.get("created_at", TEMPLATE_CREATED_AT),
        "features": {
            "responsive": True,
            "dark_mode": "dark" in template_id or "creative" in template_id,
            **features,
        },
        "category": template.get("category") or template_category(template_id),
    }


def get_template(slug: Optional[str]) -> dict[str, Any]:
    """Look up a template, falling back to the default one."""
    if slug not in TEMPLATES:
        slug = settings.DEFAULT_TEMPLATE
    return _describe(slug)


def list_templates(
    search: Optional[str] = None,
    category: Optional[str] = None,
    dark_mode: bool = False,
    sort_by: str = "none",
) -> list[dict[str, Any]]:
    """Gallery listing with the same filters the template page offers."""
    templates = [_describe(template_id) for template_id in TEMPLATE_ORDER if template_id in TEMPLATES]

    if category and category != "all":
        templates = [t for t in templates if t["category"] == category]
    if search:
        term = search.lower()
        templates = [t for t in templates if term in t["name"].lower()]
    if dark_mode:
        templates = [t for t in templates if t["features"].get("dark_mode")]

    if sort_by == "-rating":
        templates.sort(key=lambda t: t["rating"] or 0, reverse=True)
    elif sort_by == "name":
        templates.sort(key=lambda t: t["name"].lower())

    return templates
