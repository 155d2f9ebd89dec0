"""Match request paths against compiled templates."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from placeroute.compiler import CompiledRoute


@dataclass(frozen=True, slots=True)
class MatchResult:
    """Outcome of :func:`match`.  Truthy on success."""

    matched: bool
    params: dict[str | int, str] = field(default_factory=dict)

    def __bool__(self) -> bool:
        return self.matched


NO_MATCH = MatchResult(False)


def match(
    compiled: CompiledRoute,
    path: str,
    *,
    max_length: int | None = None,
) -> MatchResult:
    """Match *path* against *compiled* as a whole (no prefix matching).

    Captured values are keyed by placeholder name, or by 1-based position
    for unnamed placeholders.  Paths longer than *max_length* are rejected
    without running the regex.
    """
    if max_length is not None and len(path) > max_length:
        return NO_MATCH

    if not compiled.tokens:
        return MatchResult(path == compiled.template)

    m = compiled.regex.fullmatch(path)
    if m is None:
        return NO_MATCH

    params: dict[str | int, str] = {}
    for token, index in zip(compiled.tokens, compiled.group_indices):
        params[token.name] = m.group(index) or ""
    return MatchResult(True, params)
