"""Semantic style tokens and their CSS literals.

Every table maps a token chosen in the editor (``"2xl"``, ``"bold"``,
``"blur-md"``) to the literal a browser understands. Lookups never fail:
an unknown token is handed back unchanged so power users can type raw CSS
into any field.
"""

from collections.abc import Callable, Hashable
from typing import Any, Optional

DEFAULT_ACCENT_COLOR = "#3b82f6"
DEFAULT_SHADOW_COLOR = "#000000"

TOKEN_TABLES: dict[str, dict[str, Any]] = {
    "fontSize": {
        "xs": "0.75rem",
        "sm": "0.875rem",
        "base": "1rem",
        "lg": "1.125rem",
        "xl": "1.25rem",
        "2xl": "1.5rem",
        "3xl": "1.875rem",
        "4xl": "2.25rem",
        "5xl": "3rem",
    },
    "fontWeight": {
        "thin": 100,
        "extralight": 200,
        "light": 300,
        "normal": 400,
        "medium": 500,
        "semibold": 600,
        "bold": 700,
        "extrabold": 800,
        "black": 900,
    },
    "lineHeight": {
        "tight": 1.25,
        "snug": 1.375,
        "normal": 1.5,
        "relaxed": 1.625,
        "loose": 2,
    },
    "letterSpacing": {
        "tighter": "-0.05em",
        "tight": "-0.025em",
        "normal": "0",
        "wide": "0.025em",
        "wider": "0.05em",
        "widest": "0.1em",
    },
    "wordSpacing": {
        "tight": "-0.05em",
        "normal": "normal",
        "wide": "0.1em",
        "wider": "0.2em",
    },
    "padding": {
        "none": "0",
        "small": "0.5rem",
        "medium": "1rem",
        "large": "1.5rem",
        "xl": "2rem",
    },
    "borderRadius": {
        "none": "0",
        "sm": "0.125rem",
        "md": "0.375rem",
        "lg": "0.5rem",
        "xl": "0.75rem",
        "full": "9999px",
    },
    "shadow": {
        "sm": "0 1px 2px 0 rgba(0, 0, 0, 0.05)",
        "md": "0 4px 6px -1px rgba(0, 0, 0, 0.1), 0 2px 4px -1px rgba(0, 0, 0, 0.06)",
        "lg": "0 10px 15px -3px rgba(0, 0, 0, 0.1), 0 4px 6px -2px rgba(0, 0, 0, 0.05)",
        "xl": "0 20px 25px -5px rgba(0, 0, 0, 0.1), 0 10px 10px -5px rgba(0, 0, 0, 0.04)",
        "2xl": "0 25px 50px -12px rgba(0, 0, 0, 0.25)",
        "inner": "inset 0 2px 4px 0 rgba(0, 0, 0, 0.06)",
    },
    "textShadow": {
        "sm": "1px 1px 2px rgba(0,0,0,0.1)",
        "md": "2px 2px 4px rgba(0,0,0,0.15)",
        "lg": "4px 4px 8px rgba(0,0,0,0.2)",
    },
    "backdropFilter": {
        "blur-sm": "blur(4px)",
        "blur-md": "blur(8px)",
        "blur-lg": "blur(16px)",
        "brightness-50": "brightness(0.5)",
        "brightness-150": "brightness(1.5)",
        "contrast-150": "contrast(1.5)",
        "grayscale": "grayscale(100%)",
        "sepia": "sepia(100%)",
    },
    "gradientDirection": {
        "to-r": "to right",
        "to-l": "to left",
        "to-t": "to top",
        "to-b": "to bottom",
        "to-tr": "to top right",
        "to-tl": "to top left",
        "to-br": "to bottom right",
        "to-bl": "to bottom left",
    },
}

# Entries whose literal depends on the element's accent color.
CONTEXTUAL_TOKENS: dict[str, dict[str, Callable[[str], str]]] = {
    "shadow": {"colored": lambda color: f"0 4px 6px -1px {color}33"},
    "textShadow": {"colored": lambda color: f"2px 2px 4px {color}33"},
}


def lookup(
    property_name: str, token: Any, accent_color: Optional[str] = None
) -> Optional[Any]:
    """Return the literal for ``token`` in ``property_name``'s table, or None."""
    if not isinstance(token, Hashable):
        return None

    contextual = CONTEXTUAL_TOKENS.get(property_name, {})
    if accent_color is not None and token in contextual:
        return contextual[token](accent_color)

    return TOKEN_TABLES.get(property_name, {}).get(token)


def or_literal(found: Optional[Any], token: Any) -> Any:
    """Fall back to the raw token when a lookup came back empty."""
    return token if found is None else found


def resolve(property_name: str, token: Any, accent_color: Optional[str] = None) -> Any:
    """Resolve a semantic token to CSS, passing unknown tokens through."""
    return or_literal(lookup(property_name, token, accent_color), token)


def known_tokens(property_name: str) -> list[str]:
    """List the tokens defined for a property, contextual ones included."""
    tokens = list(TOKEN_TABLES.get(property_name, {}))
    tokens.extend(CONTEXTUAL_TOKENS.get(property_name, {}))
    return tokens
