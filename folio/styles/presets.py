"""Built-in color themes, font pairings and typography scales."""

import copy
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

PREDEFINED_THEMES: dict[str, dict[str, Any]] = {
    "light": {
        "name": "Light",
        "colors": {
            "primary": "#3b82f6",
            "secondary": "#6b7280",
            "accent": "#10b981",
            "background": "#ffffff",
            "surface": "#f9fafb",
            "text": "#111827",
            "textSecondary": "#6b7280",
            "border": "#e5e7eb",
            "success": "#10b981",
            "warning": "#f59e0b",
            "error": "#ef4444",
        },
    },
    "dark": {
        "name": "Dark",
        "colors": {
            "primary": "#60a5fa",
            "secondary": "#9ca3af",
            "accent": "#34d399",
            "background": "#111827",
            "surface": "#1f2937",
            "text": "#f9fafb",
            "textSecondary": "#d1d5db",
            "border": "#374151",
            "success": "#34d399",
            "warning": "#fbbf24",
            "error": "#f87171",
        },
    },
    "elegant": {
        "name": "Elegant",
        "colors": {
            "primary": "#8b5cf6",
            "secondary": "#64748b",
            "accent": "#f59e0b",
            "background": "#fefefe",
            "surface": "#f8fafc",
            "text": "#1e293b",
            "textSecondary": "#64748b",
            "border": "#e2e8f0",
            "success": "#059669",
            "warning": "#d97706",
            "error": "#dc2626",
        },
    },
    "ocean": {
        "name": "Ocean",
        "colors": {
            "primary": "#0891b2",
            "secondary": "#475569",
            "accent": "#06b6d4",
            "background": "#f0f9ff",
            "surface": "#e0f2fe",
            "text": "#0f172a",
            "textSecondary": "#475569",
            "border": "#bae6fd",
            "success": "#0d9488",
            "warning": "#ea580c",
            "error": "#dc2626",
        },
    },
    "sunset": {
        "name": "Sunset",
        "colors": {
            "primary": "#f97316",
            "secondary": "#78716c",
            "accent": "#eab308",
            "background": "#fffbeb",
            "surface": "#fef3c7",
            "text": "#1c1917",
            "textSecondary": "#78716c",
            "border": "#fed7aa",
            "success": "#16a34a",
            "warning": "#ca8a04",
            "error": "#dc2626",
        },
    },
    "minimal": {
        "name": "Minimal",
        "colors": {
            "primary": "#000000",
            "secondary": "#666666",
            "accent": "#333333",
            "background": "#ffffff",
            "surface": "#fafafa",
            "text": "#000000",
            "textSecondary": "#666666",
            "border": "#e0e0e0",
            "success": "#4caf50",
            "warning": "#ff9800",
            "error": "#f44336",
        },
    },
}

FONT_COMBINATIONS: dict[str, dict[str, str]] = {
    "modern": {
        "name": "Modern",
        "heading": "Inter",
        "body": "Inter",
        "display": "Inter",
        "mono": "JetBrains Mono",
    },
    "classic": {
        "name": "Classic",
        "heading": "Playfair Display",
        "body": "Source Sans Pro",
        "display": "Playfair Display",
        "mono": "Source Code Pro",
    },
    "professional": {
        "name": "Professional",
        "heading": "Montserrat",
        "body": "Open Sans",
        "display": "Montserrat",
        "mono": "Roboto Mono",
    },
    "creative": {
        "name": "Creative",
        "heading": "Poppins",
        "body": "Nunito Sans",
        "display": "Poppins",
        "mono": "Fira Code",
    },
    "elegant": {
        "name": "Elegant",
        "heading": "Cormorant Garamond",
        "body": "Lato",
        "display": "Cormorant Garamond",
        "mono": "IBM Plex Mono",
    },
    "tech": {
        "name": "Tech",
        "heading": "Space Grotesk",
        "body": "DM Sans",
        "display": "Space Grotesk",
        "mono": "JetBrains Mono",
    },
}

_TYPE_SIZES = {
    "xs": "0.75rem",
    "sm": "0.875rem",
    "base": "1rem",
    "lg": "1.125rem",
    "xl": "1.25rem",
    "2xl": "1.5rem",
    "3xl": "1.875rem",
    "4xl": "2.25rem",
    "5xl": "3rem",
}

TYPOGRAPHY_SCALES: dict[str, dict[str, Any]] = {
    "small": {"name": "Small", "baseSize": "14px", "scale": 1.125, "sizes": dict(_TYPE_SIZES)},
    "medium": {"name": "Medium", "baseSize": "16px", "scale": 1.25, "sizes": dict(_TYPE_SIZES)},
    "large": {"name": "Large", "baseSize": "18px", "scale": 1.333, "sizes": dict(_TYPE_SIZES)},
}

DEFAULT_COLOR_THEME = "light"
DEFAULT_FONT_COMBINATION = "modern"

EXPORTED_SECTIONS = ("colors", "fonts", "typography", "spacing")


class ThemeImportError(ValueError):
    """Raised when an imported theme payload has no usable sections."""


class UnknownPresetError(KeyError):
    """Raised when a preset name is not defined."""


def _copy_customizations(customizations: Mapping[str, Any] | None) -> dict[str, Any]:
    return copy.deepcopy(dict(customizations or {}))


def _merge_section(customizations: dict[str, Any], section: str, values: Mapping[str, Any]) -> None:
    current = customizations.get(section)
    merged = dict(current) if isinstance(current, Mapping) else {}
    merged.update(values)
    customizations[section] = merged


def font_families(combination: Mapping[str, str]) -> list[str]:
    """The distinct font families a combination refers to, name excluded."""
    families = []
    for role, family in combination.items():
        if role != "name" and family not in families:
            families.append(family)
    return families


def apply_color_theme(customizations: Mapping[str, Any] | None, theme: str) -> dict[str, Any]:
    """Overlay a predefined color theme; other sections are kept."""
    if theme not in PREDEFINED_THEMES:
        raise UnknownPresetError(theme)
    updated = _copy_customizations(customizations)
    _merge_section(updated, "colors", PREDEFINED_THEMES[theme]["colors"])
    return updated


def apply_font_combination(customizations: Mapping[str, Any] | None, combination: str) -> dict[str, Any]:
    if combination not in FONT_COMBINATIONS:
        raise UnknownPresetError(combination)
    updated = _copy_customizations(customizations)
    fonts = {k: v for k, v in FONT_COMBINATIONS[combination].items() if k != "name"}
    _merge_section(updated, "fonts", fonts)
    return updated


def apply_typography_scale(customizations: Mapping[str, Any] | None, scale: str) -> dict[str, Any]:
    if scale not in TYPOGRAPHY_SCALES:
        raise UnknownPresetError(scale)
    updated = _copy_customizations(customizations)
    _merge_section(updated, "typography", copy.deepcopy(TYPOGRAPHY_SCALES[scale]))
    return updated


def reset_theme(customizations: Mapping[str, Any] | None) -> dict[str, Any]:
    """Back to the light palette with the modern font pairing."""
    updated = apply_color_theme(customizations, DEFAULT_COLOR_THEME)
    return apply_font_combination(updated, DEFAULT_FONT_COMBINATION)


def export_theme(customizations: Mapping[str, Any] | None) -> dict[str, Any]:
    """Snapshot the theme sections of a customizations document."""
    source = customizations or {}
    data = {section: copy.deepcopy(source.get(section)) for section in EXPORTED_SECTIONS}
    data["exportDate"] = datetime.now(UTC).isoformat()
    return data


def import_theme(customizations: Mapping[str, Any] | None, theme_data: Any) -> dict[str, Any]:
    """Merge an exported theme back into a customizations document.

    Each section present in ``theme_data`` is merged key by key; at least one
    section must be present and every present section must be a mapping.
    """
    if not isinstance(theme_data, Mapping):
        raise ThemeImportError("Invalid theme file")

    sections = {s: theme_data[s] for s in EXPORTED_SECTIONS if theme_data.get(s) is not None}
    if not sections:
        raise ThemeImportError("Theme file contains no theme sections")

    updated = _copy_customizations(customizations)
    for section, values in sections.items():
        if not isinstance(values, Mapping):
            raise ThemeImportError(f"Theme section '{section}' must be an object")
        _merge_section(updated, section, values)
    return updated
