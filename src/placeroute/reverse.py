"""Rebuild concrete URLs from a compiled template and parameter values."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping

    from placeroute.compiler import CompiledRoute, PlaceholderToken

logger = logging.getLogger(__name__)


def reverse(
    compiled: CompiledRoute,
    params: Mapping[str | int, Any] | None = None,
) -> str | None:
    """Return the URL for *compiled* filled with *params*, or ``None``.

    Every placeholder needs exactly one value, keyed by its name (or its
    position for unnamed placeholders; ``1`` and ``"1"`` are equivalent).
    Each value must satisfy the placeholder's type and quantifier.  Extra or
    missing keys fail the whole call; nothing is partially substituted.
    """
    params = params or {}

    if not compiled.tokens:
        if params:
            logger.debug("Reverse of %r failed: takes no params", compiled.template)
            return None
        return compiled.template

    if len(params) != len(compiled.tokens):
        logger.debug(
            "Reverse of %r failed: expected %d params, got %d",
            compiled.template,
            len(compiled.tokens),
            len(params),
        )
        return None

    template = compiled.template
    # a None value counts as missing
    supplied = {str(key): str(value) for key, value in params.items() if value is not None}
    parts: list[str] = []
    cursor = 0
    replaced = 0

    for token in compiled.tokens:
        value = supplied.get(str(token.name))
        if value is None or not _accepts(token, value):
            logger.debug(
                "Reverse of %r failed: no valid value for %s",
                template,
                token.literal,
            )
            return None
        # search the template, not the output, so values are never rescanned
        start = template.find(token.literal, cursor)
        if start < 0:
            continue
        parts.append(template[cursor:start])
        parts.append(value)
        cursor = start + len(token.literal)
        replaced += 1

    if replaced != len(compiled.tokens):
        logger.debug("Reverse of %r failed: unresolved placeholders", template)
        return None
    parts.append(template[cursor:])
    return "".join(parts)


def _accepts(token: PlaceholderToken, value: str) -> bool:
    if token.type.validator().fullmatch(value) is None:
        return False
    bounds = token.bounds
    if bounds is None:
        return True
    if token.type.atomic:
        return bounds.allows(len(value))
    # multi-character units: the quantifier counts repetitions, not characters
    return re.fullmatch(token.repeated(), value) is not None
