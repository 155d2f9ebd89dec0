"""Compile URL templates with typed placeholders into regex matchers.

Placeholder grammar::

    ( [name] : type [: quantifier] )

``name`` matches ``[a-z0-9_]*`` and may be omitted, in which case the
placeholder is numbered by position (1, 2, ... counting unnamed ones only).
``type`` names a registered :class:`~placeroute.placeholders.PlaceholderType`
(case-insensitive).  ``quantifier`` is ``*``, ``+``, ``?``, ``n`` or
``min,max`` with either bound optional.

Examples::

    "/blog/(id:digit)"            -> ^/blog/(?P<id>[0-9]+)$
    "/code/(:alpha:2,4)"          -> ^/code/([a-zA-Z]{2,4})$
    "/archive/(y:year)/(m:month)" -> ^/archive/(?P<y>[12][0-9]{3})/(?P<m>0[1-9]|1[012])$
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from placeroute.errors import CompileError
from placeroute.placeholders import PlaceholderRegistry, PlaceholderType, default_registry

logger = logging.getLogger(__name__)

# Anything parenthesised within one segment that contains a colon is a token
_CANDIDATE_RE = re.compile(r"\([^()/]*:[^()/]*\)")

_TOKEN_RE = re.compile(
    r"""
    \(
    (?P<name>[a-z0-9_]*)
    :
    (?P<type>[a-z_][a-z0-9_]*)
    (?::(?P<quantifier>[*+?]|\d*,?\d*))?
    \)
    """,
    re.IGNORECASE | re.VERBOSE,
)


@dataclass(frozen=True, slots=True)
class Quantifier:
    """Inclusive length window for a placeholder value.  ``max=None`` is unbounded."""

    min: int
    max: int | None = None

    def allows(self, length: int) -> bool:
        if length < self.min:
            return False
        return self.max is None or length <= self.max


@dataclass(frozen=True, slots=True)
class PlaceholderToken:
    """One placeholder occurrence inside a template."""

    name: str | int
    type: PlaceholderType
    quantifier: str
    literal: str

    @property
    def named(self) -> bool:
        return isinstance(self.name, str)

    @property
    def suffix(self) -> str:
        """Repetition suffix appended to the type fragment in the match pattern."""
        if not self.type.repeatable:
            return ""
        q = self.quantifier
        if not q:
            return "+"
        if q in ("*", "+", "?"):
            return q
        if "," in q:
            low, high = q.split(",", 1)
            return f"{{{low or 1},{high}}}"
        return f"{{{q}}}"

    @property
    def bounds(self) -> Quantifier | None:
        """Allowed value length, or ``None`` for fixed-shape types."""
        if not self.type.repeatable:
            return None
        q = self.quantifier
        if q in ("", "+"):
            return Quantifier(1)
        if q == "?":
            return Quantifier(0, 1)
        if q == "*":
            return Quantifier(0)
        if "," in q:
            low, high = q.split(",", 1)
            return Quantifier(int(low or 1), int(high) if high else None)
        return Quantifier(int(q), int(q))

    def repeated(self) -> str:
        """Type fragment with its repetition suffix, without a capture group."""
        if not self.type.repeatable:
            return self.type.pattern
        return f"{self.type.unit}{self.suffix}"

    def subpattern(self, group_name: str | None = None) -> str:
        opener = f"(?P<{group_name}>" if group_name else "("
        return f"{opener}{self.repeated()})"


@dataclass(frozen=True, slots=True)
class CompiledRoute:
    """Immutable result of compiling a template.

    ``tokens`` are in capture order: the n-th placeholder in the template is
    ``tokens[n]`` and is captured by group ``group_indices[n]`` of ``regex``.
    """

    template: str
    pattern: str
    regex: re.Pattern[str] = field(repr=False)
    tokens: tuple[PlaceholderToken, ...] = ()
    group_indices: tuple[int, ...] = field(default=(), repr=False)

    @property
    def has_placeholders(self) -> bool:
        return bool(self.tokens)

    @property
    def names(self) -> list[str | int]:
        return [token.name for token in self.tokens]


def compile_template(
    template: str,
    registry: PlaceholderRegistry | None = None,
) -> CompiledRoute:
    """Compile *template* into a :class:`CompiledRoute`.

    Raises :class:`~placeroute.errors.CompileError` for malformed tokens,
    unknown types, or quantifiers that produce an invalid regex.
    """
    registry = registry if registry is not None else default_registry
    tokens: list[PlaceholderToken] = []
    group_indices: list[int] = []
    group_names: set[str] = set()
    parts: list[str] = []
    last_end = 0
    position = 1
    group = 1

    for candidate in _CANDIDATE_RE.finditer(template):
        literal = candidate.group(0)
        m = _TOKEN_RE.fullmatch(literal)
        if m is None:
            raise CompileError("Malformed placeholder", template=template, token=literal)

        ptype = registry.resolve(m.group("type"))
        if ptype is None:
            raise CompileError(
                f"Unknown placeholder type {m.group('type')!r}",
                template=template,
                token=literal,
            )

        name: str | int
        if m.group("name"):
            name = m.group("name")
        else:
            name = position
            position += 1

        token = PlaceholderToken(name, ptype, m.group("quantifier") or "", literal)

        group_name = None
        if isinstance(name, str) and name.isidentifier() and name not in group_names:
            group_name = name
            group_names.add(name)

        parts.append(re.escape(template[last_end : candidate.start()]))
        parts.append(token.subpattern(group_name))
        tokens.append(token)
        group_indices.append(group)
        group += 1 + ptype.group_count
        last_end = candidate.end()

    parts.append(re.escape(template[last_end:]))
    pattern = "^" + "".join(parts) + "$"

    try:
        regex = re.compile(pattern)
    except re.error as exc:
        raise CompileError(f"Invalid pattern ({exc})", template=template) from exc

    logger.debug("Compiled %r -> %s", template, pattern)
    return CompiledRoute(
        template=template,
        pattern=pattern,
        regex=regex,
        tokens=tuple(tokens),
        group_indices=tuple(group_indices),
    )
