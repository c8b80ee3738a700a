"""Project a portfolio's customizations onto CSS custom properties."""

from collections.abc import Iterator, Mapping
from typing import Any, Optional

# customizations section -> custom property namespace
THEME_NAMESPACES: dict[str, str] = {
    "colors": "color",
    "fonts": "font",
    "typography": "typography",
    "spacing": "spacing",
}


def _flatten(prefix: str, value: Any) -> Iterator[tuple[str, str]]:
    if value is None:
        return
    if isinstance(value, Mapping):
        for key, child in value.items():
            yield from _flatten(f"{prefix}-{key}", child)
        return
    yield prefix, str(value)


def compute_theme_variables(customizations: Optional[Mapping[str, Any]]) -> dict[str, str]:
    """Map every leaf of the customizations document to ``--<ns>-<key>``.

    Nested maps (a typography scale's ``sizes``) flatten with ``-``, so
    ``typography.sizes.xl`` becomes ``--typography-sizes-xl``. Sections that
    are missing or not mappings contribute nothing.
    """
    variables: dict[str, str] = {}
    if not isinstance(customizations, Mapping):
        return variables

    for section, namespace in THEME_NAMESPACES.items():
        entries = customizations.get(section)
        if not isinstance(entries, Mapping):
            continue
        for key, value in entries.items():
            variables.update(_flatten(f"--{namespace}-{key}", value))

    return variables


def theme_classes(customizations: Optional[Mapping[str, Any]]) -> list[str]:
    """Helper classes the renderer adds to the page root."""
    classes: list[str] = []
    if not isinstance(customizations, Mapping):
        return classes

    colors = customizations.get("colors")
    if isinstance(colors, Mapping) and colors.get("primary"):
        classes.append("theme-primary")

    fonts = customizations.get("fonts")
    if isinstance(fonts, Mapping) and isinstance(fonts.get("body"), str) and fonts["body"]:
        classes.append(f"font-{'-'.join(fonts['body'].lower().split())}")

    return classes


class StyleRoot:
    """Document-level custom property bag that theme variables are written to."""

    def __init__(self) -> None:
        self._properties: dict[str, str] = {}

    @property
    def properties(self) -> dict[str, str]:
        return dict(self._properties)

    def set_property(self, name: str, value: str) -> None:
        self._properties[name] = value

    def remove_property(self, name: str) -> None:
        self._properties.pop(name, None)

    def get_property(self, name: str) -> Optional[str]:
        return self._properties.get(name)

    def to_css(self, selector: str = ":root") -> str:
        """Render the bag as a single CSS rule."""
        lines = [f"  {name}: {value};" for name, value in sorted(self._properties.items())]
        return "\n".join([f"{selector} {{", *lines, "}"])


def _is_theme_property(name: str) -> bool:
    return any(name.startswith(f"--{ns}-") for ns in THEME_NAMESPACES.values())


def inject_theme_variables(
    customizations: Optional[Mapping[str, Any]], root: StyleRoot
) -> dict[str, str]:
    """Write the theme variables to ``root``, replacing any previous theme.

    Properties left over from an earlier document under one of the theme
    namespaces are removed; unrelated properties are untouched.
    """
    variables = compute_theme_variables(customizations)

    for name in root.properties:
        if _is_theme_property(name) and name not in variables:
            root.remove_property(name)

    for name, value in variables.items():
        root.set_property(name, value)

    return variables
