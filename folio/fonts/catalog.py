"""Known web font families, their weights and fallback stacks."""

from typing import NamedTuple, Optional
from urllib.parse import quote


class FontConfig(NamedTuple):
    """Weights a family ships and whether it is a variable font."""

    weights: tuple[int, ...]
    variable: bool


DEFAULT_FONT = "default"
DEFAULT_WEIGHT = 400
ALL_WEIGHTS = (100, 200, 300, 400, 500, 600, 700, 800, 900)

FONT_CONFIG: dict[str, FontConfig] = {
    # Sans serif
    "Inter": FontConfig(ALL_WEIGHTS, True),
    "Roboto": FontConfig((100, 300, 400, 500, 700, 900), False),
    "Open Sans": FontConfig((300, 400, 500, 600, 700, 800), True),
    "Poppins": FontConfig(ALL_WEIGHTS, False),
    "Montserrat": FontConfig(ALL_WEIGHTS, True),
    "Raleway": FontConfig(ALL_WEIGHTS, True),
    "Lato": FontConfig((100, 300, 400, 700, 900), False),
    "Source Sans Pro": FontConfig((200, 300, 400, 600, 700, 900), False),
    "Nunito Sans": FontConfig((200, 300, 400, 500, 600, 700, 800, 900), True),
    "DM Sans": FontConfig((400, 500, 700), True),
    "Space Grotesk": FontConfig((300, 400, 500, 600, 700), True),
    "Work Sans": FontConfig(ALL_WEIGHTS, True),
    # Serif
    "Playfair Display": FontConfig((400, 500, 600, 700, 800, 900), True),
    "Merriweather": FontConfig((300, 400, 700, 900), False),
    "Cormorant Garamond": FontConfig((300, 400, 500, 600, 700), False),
    "Crimson Text": FontConfig((400, 600, 700), False),
    "Libre Baskerville": FontConfig((400, 700), False),
    "PT Serif": FontConfig((400, 700), False),
    # Display
    "Oswald": FontConfig((200, 300, 400, 500, 600, 700), True),
    "Bebas Neue": FontConfig((400,), False),
    "Anton": FontConfig((400,), False),
    "Righteous": FontConfig((400,), False),
    "Fredoka One": FontConfig((400,), False),
    # Monospace
    "JetBrains Mono": FontConfig((100, 200, 300, 400, 500, 600, 700, 800), True),
    "Fira Code": FontConfig((300, 400, 500, 600, 700), True),
    "Source Code Pro": FontConfig((200, 300, 400, 500, 600, 700, 800, 900), True),
    "Roboto Mono": FontConfig((100, 200, 300, 400, 500, 600, 700), False),
    "IBM Plex Mono": FontConfig((100, 200, 300, 400, 500, 600, 700), False),
}

FONT_CATEGORIES: dict[str, tuple[str, ...]] = {
    "sans-serif": (
        "Inter", "Roboto", "Open Sans", "Poppins", "Montserrat", "Raleway", "Lato",
        "Source Sans Pro", "Nunito Sans", "DM Sans", "Space Grotesk", "Work Sans",
    ),
    "serif": (
        "Playfair Display", "Merriweather", "Cormorant Garamond", "Crimson Text",
        "Libre Baskerville", "PT Serif",
    ),
    "display": ("Oswald", "Bebas Neue", "Anton", "Righteous", "Fredoka One"),
    "monospace": (
        "JetBrains Mono", "Fira Code", "Source Code Pro", "Roboto Mono", "IBM Plex Mono",
    ),
}

FONT_STACKS: dict[str, str] = {
    "Inter": 'Inter, -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif',
    "Roboto": 'Roboto, -apple-system, BlinkMacSystemFont, "Segoe UI", sans-serif',
    "Open Sans": '"Open Sans", -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif',
    "Poppins": 'Poppins, -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif',
    "Playfair Display": '"Playfair Display", Georgia, "Times New Roman", serif',
    "Merriweather": 'Merriweather, Georgia, "Times New Roman", serif',
    "JetBrains Mono": '"JetBrains Mono", "Fira Code", Consolas, "Liberation Mono", Menlo, Courier, monospace',
}

POPULAR_FONTS = ("Inter", "Roboto", "Open Sans", "Poppins", "Montserrat", "Playfair Display")


def font_stack(name: str) -> str:
    """CSS font-family value with sensible fallbacks for ``name``."""
    return FONT_STACKS.get(name, f'"{name}", sans-serif')


def font_category(name: str) -> Optional[str]:
    for category, families in FONT_CATEGORIES.items():
        if name in families:
            return category
    return None


def select_weights(config: FontConfig, weights) -> list[int]:
    """Keep the requested weights the family ships, defaulting to 400."""
    selected = [w for w in weights if w in config.weights]
    return selected or [DEFAULT_WEIGHT]


def build_stylesheet_url(base_url: str, name: str, config: FontConfig, weights) -> str:
    """Google Fonts css2 URL for one family.

    Variable families request a ``min..max`` weight range, static ones an
    explicit ``;``-separated list.
    """
    selected = select_weights(config, weights)
    if config.variable:
        axis = f"{min(selected)}..{max(selected)}"
    else:
        axis = ";".join(str(w) for w in selected)
    family = quote(name, safe="").replace("%20", "+")
    return f"{base_url}?family={family}:wght@{axis}&display=swap"


def search_fonts(search: Optional[str] = None, category: Optional[str] = None) -> list[str]:
    """Family names matching a case-insensitive substring and/or category."""
    names = list(FONT_CONFIG)
    if category and category != "all":
        members = FONT_CATEGORIES.get(category, ())
        names = [name for name in names if name in members]
    if search:
        term = search.lower()
        names = [name for name in names if term in name.lower()]
    return names
