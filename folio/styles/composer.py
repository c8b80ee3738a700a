"""Compose one element's inline style map from editor state.

The composer is fed whatever the style panel produced, so it never raises:
unknown tokens pass through, malformed values are skipped and identity
values are omitted.
"""

import logging
from collections.abc import Mapping
from typing import Any, Optional

from folio.styles.custom_css import parse_custom_css
from folio.styles.tokens import DEFAULT_ACCENT_COLOR, DEFAULT_SHADOW_COLOR, resolve

logger = logging.getLogger(__name__)

CSS_VARIABLE_PREFIX = "--"
DEFAULT_BORDER_STYLE = "solid"
DEFAULT_BORDER_COLOR = "#e5e7eb"
DEFAULT_TEXT_GRADIENT_END = "#8b5cf6"
DEFAULT_BACKGROUND_COLOR = "#ffffff"

PADDING_SIDES = ("paddingTop", "paddingRight", "paddingBottom", "paddingLeft")
MARGIN_SIDES = ("marginTop", "marginRight", "marginBottom", "marginLeft")
LAYOUT_PROPERTIES = ("display", "position", "zIndex", "overflow")

# (filter name, identity value, unit)
FILTERS = (
    ("blur", 0, "px"),
    ("brightness", 100, "%"),
    ("contrast", 100, "%"),
    ("saturate", 100, "%"),
    ("hue-rotate", 0, "deg"),
    ("grayscale", 0, "%"),
)

TYPOGRAPHY_PRESETS: dict[str, dict[str, str]] = {
    "heading": {
        "fontSize": "2xl",
        "fontWeight": "bold",
        "lineHeight": "tight",
        "letterSpacing": "tight",
    },
    "subheading": {
        "fontSize": "xl",
        "fontWeight": "semibold",
        "lineHeight": "snug",
        "letterSpacing": "normal",
    },
    "body": {
        "fontSize": "base",
        "fontWeight": "normal",
        "lineHeight": "relaxed",
        "letterSpacing": "normal",
    },
    "caption": {
        "fontSize": "sm",
        "fontWeight": "normal",
        "lineHeight": "normal",
        "letterSpacing": "wide",
    },
    "display": {
        "fontSize": "4xl",
        "fontWeight": "black",
        "lineHeight": "none",
        "letterSpacing": "tighter",
    },
}


def _is_set(value: Any) -> bool:
    return value is not None and value != ""


def _number(value: Any) -> Optional[float]:
    """Coerce editor input to a float, None when it is not numeric."""
    if isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError, OverflowError):
        return None


def _format_number(value: float) -> str:
    return str(int(value)) if value.is_integer() else str(value)


def _accent_color(props: Mapping[str, Any], customizations: Mapping[str, Any]) -> str:
    if _is_set(props.get("color")):
        return str(props["color"])
    colors = customizations.get("colors")
    if isinstance(colors, Mapping) and _is_set(colors.get("primary")):
        return str(colors["primary"])
    return DEFAULT_ACCENT_COLOR


def apply_typography_preset(props: Mapping[str, Any], preset: str) -> dict[str, Any]:
    """Return a copy of ``props`` with a named typography preset applied."""
    updated = dict(props)
    updated.update(TYPOGRAPHY_PRESETS.get(preset, {}))
    return updated


def _apply_typography(styles: dict, props: Mapping[str, Any]) -> None:
    font_family = props.get("fontFamily")
    if _is_set(font_family) and font_family != "default":
        styles["fontFamily"] = font_family

    for name in ("fontSize", "fontWeight", "lineHeight", "letterSpacing", "wordSpacing"):
        if _is_set(props.get(name)):
            styles[name] = resolve(name, props[name])

    align = props.get("textAlign") or props.get("align")
    if _is_set(align):
        styles["textAlign"] = align

    for name in ("textTransform", "fontStyle", "textDecoration", "writingMode"):
        if _is_set(props.get(name)):
            styles[name] = props[name]


def _gradient_colors(value: Any, default: list[str]) -> list[str]:
    if isinstance(value, (list, tuple)):
        colors = [str(color) for color in value if _is_set(color)]
        if colors:
            return colors
    return default


def _apply_text_effects(styles: dict, props: Mapping[str, Any], accent: str) -> None:
    text_shadow = props.get("textShadow")
    if _is_set(text_shadow) and text_shadow != "none":
        shadow_color = str(props["color"]) if _is_set(props.get("color")) else DEFAULT_SHADOW_COLOR
        styles["textShadow"] = resolve("textShadow", text_shadow, shadow_color)

    gradient = props.get("textGradient")
    if not isinstance(gradient, Mapping) or not gradient.get("enabled"):
        return

    gradient_type = gradient.get("type") or "linear"
    angle = gradient.get("angle") or "45deg"
    colors = ", ".join(
        _gradient_colors(gradient.get("colors"), [accent, DEFAULT_TEXT_GRADIENT_END])
    )

    if gradient_type == "radial":
        styles["background"] = f"radial-gradient(circle, {colors})"
    elif gradient_type == "conic":
        styles["background"] = f"conic-gradient(from {angle}, {colors})"
    else:
        styles["background"] = f"linear-gradient({angle}, {colors})"

    # Gradient text only renders when all three clip properties are present.
    styles["WebkitBackgroundClip"] = "text"
    styles["WebkitTextFillColor"] = "transparent"
    styles["backgroundClip"] = "text"


def _apply_colors(styles: dict, props: Mapping[str, Any], accent: str) -> None:
    for name in ("color", "backgroundColor", "borderColor"):
        if _is_set(props.get(name)):
            styles[name] = props[name]

    gradient = props.get("backgroundGradient")
    if not isinstance(gradient, Mapping) or not gradient.get("enabled"):
        return

    direction = resolve("gradientDirection", gradient.get("direction") or "to-r")
    start = props.get("backgroundColor") if _is_set(props.get("backgroundColor")) else DEFAULT_BACKGROUND_COLOR
    colors = _gradient_colors(gradient.get("colors"), [str(start), accent])

    styles.pop("backgroundColor", None)
    styles["background"] = f"linear-gradient({direction}, {', '.join(colors)})"


def _apply_spacing(styles: dict, props: Mapping[str, Any]) -> None:
    if _is_set(props.get("padding")):
        styles["padding"] = resolve("padding", props["padding"])

    for name in PADDING_SIDES + MARGIN_SIDES:
        if _is_set(props.get(name)):
            styles[name] = props[name]


def _apply_border(styles: dict, props: Mapping[str, Any]) -> None:
    width = props.get("borderWidth")
    if not _is_set(width) or width == "none":
        return

    numeric = _number(width)
    styles["borderWidth"] = f"{_format_number(numeric)}px" if numeric is not None else width
    styles["borderStyle"] = props.get("borderStyle") or DEFAULT_BORDER_STYLE
    styles["borderColor"] = props.get("borderColor") or DEFAULT_BORDER_COLOR


def _apply_radius_and_shadow(styles: dict, props: Mapping[str, Any], accent: str) -> None:
    radius = props.get("rounded") if _is_set(props.get("rounded")) else props.get("borderRadius")
    if _is_set(radius):
        styles["borderRadius"] = resolve("borderRadius", radius)

    shadow = props.get("shadow")
    if _is_set(shadow) and shadow != "none":
        styles["boxShadow"] = resolve("shadow", shadow, accent)


def build_transform(props: Mapping[str, Any]) -> Optional[str]:
    """Join non-identity rotate/scale values into a transform list."""
    transforms = []

    rotate = _number(props.get("rotate"))
    if rotate is not None and rotate != 0:
        transforms.append(f"rotate({_format_number(rotate)}deg)")

    scale = _number(props.get("scale"))
    if scale is not None and scale != 100:
        transforms.append(f"scale({_format_number(scale / 100)})")

    for axis in ("scaleX", "scaleY"):
        value = _number(props.get(axis))
        if value is not None and value != 1:
            transforms.append(f"{axis}({_format_number(value)})")

    return " ".join(transforms) or None


def build_filter(filters: Any) -> Optional[str]:
    """Emit one CSS filter function per value that differs from its identity."""
    if not isinstance(filters, Mapping):
        return None

    parts = []
    for name, identity, unit in FILTERS:
        value = _number(filters.get(name))
        if value is None or value == identity:
            continue
        parts.append(f"{name}({_format_number(value)}{unit})")

    return " ".join(parts) or None


def _apply_effects(styles: dict, props: Mapping[str, Any]) -> None:
    transform = build_transform(props)
    if transform:
        styles["transform"] = transform

    filter_value = build_filter(props.get("filters"))
    if filter_value:
        styles["filter"] = filter_value

    backdrop = props.get("backdropFilter")
    if _is_set(backdrop) and backdrop != "none":
        styles["backdropFilter"] = resolve("backdropFilter", backdrop)


def _apply_layout(styles: dict, props: Mapping[str, Any]) -> None:
    for name in LAYOUT_PROPERTIES:
        if _is_set(props.get(name)):
            styles[name] = props[name]

    opacity = _number(props.get("opacity"))
    if opacity is not None and opacity != 100:
        styles["opacity"] = opacity / 100


def _apply_custom_css(styles: dict, props: Mapping[str, Any]) -> None:
    for declaration in parse_custom_css(props.get("customCSS")):
        styles[declaration.property] = declaration.value

    variables = props.get("cssVariables")
    if not isinstance(variables, Mapping):
        return
    for key, value in variables.items():
        if isinstance(key, str) and key.startswith(CSS_VARIABLE_PREFIX) and _is_set(value):
            styles[key] = value


def compose_styles(
    props: Optional[Mapping[str, Any]],
    customizations: Optional[Mapping[str, Any]] = None,
) -> dict[str, Any]:
    """Build the flat inline style map for a single element.

    Stages run in a fixed order; later stages win on conflicts, so
    individual padding sides override the padding shorthand and custom
    CSS overrides everything computed before it.
    """
    if not isinstance(props, Mapping):
        return {}
    if not isinstance(customizations, Mapping):
        customizations = {}

    accent = _accent_color(props, customizations)
    styles: dict[str, Any] = {}

    _apply_typography(styles, props)
    _apply_text_effects(styles, props, accent)
    _apply_colors(styles, props, accent)
    _apply_spacing(styles, props)
    _apply_border(styles, props)
    _apply_radius_and_shadow(styles, props, accent)
    _apply_effects(styles, props)
    _apply_layout(styles, props)
    _apply_custom_css(styles, props)

    return styles
