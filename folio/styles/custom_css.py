"""Tokenizer for the free-form custom CSS box in the style panel."""

import logging
import re
from typing import Any, NamedTuple

logger = logging.getLogger(__name__)

_KEBAB_SEGMENT = re.compile(r"-([a-z])")


class CSSDeclaration(NamedTuple):
    """A single ``property: value`` pair, property already camel-cased."""

    property: str
    value: str


def kebab_to_camel(name: str) -> str:
    """Convert ``background-color`` to ``backgroundColor``.

    Vendor prefixes keep their capital: ``-webkit-mask`` becomes ``WebkitMask``.
    """
    return _KEBAB_SEGMENT.sub(lambda match: match.group(1).upper(), name)


def parse_custom_css(text: Any) -> list[CSSDeclaration]:
    """Split ``prop: value; prop: value;`` text into declarations.

    Fragments without a colon or with an empty side are skipped. Only the
    first colon separates property from value, so ``url(http://...)``
    survives intact.
    """
    if not isinstance(text, str):
        return []

    declarations = []
    for fragment in text.split(";"):
        if not fragment.strip():
            continue

        prop, sep, value = fragment.partition(":")
        prop, value = prop.strip(), value.strip()
        if not sep or not prop or not value:
            logger.debug(f"Skipping malformed custom CSS fragment: {fragment!r}")
            continue

        declarations.append(CSSDeclaration(kebab_to_camel(prop), value))

    return declarations
