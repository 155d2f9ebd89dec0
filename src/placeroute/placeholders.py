"""Placeholder types: named character classes usable inside URL templates.

A template such as ``/blog/(id:digit)`` refers to the ``digit`` type, which
supplies the regex fragment ``[0-9]``.  Types are either *repeatable* (a
fragment, usually one character class, that takes a quantifier) or
fixed-shape (a complete pattern such as a year or UUID that is emitted
as-is).
"""

from __future__ import annotations

import logging
import re
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = logging.getLogger(__name__)

_TYPE_NAME_RE = re.compile(r"[a-z_][a-z0-9_]*")

# One character class, escape or plain character: a quantifier binds to all of it
_ATOM_RE = re.compile(r"\[\^?(?:\\.|[^\]\\\[])+\]|\\.|[^\\\[\]().*+?{}|^$]")

# (name, fragment, repeatable) in registration order
BUILTIN_TYPES: tuple[tuple[str, str, bool], ...] = (
    ("any", r"[^/]", True),
    ("alnum", r"[a-zA-Z0-9]", True),
    ("alpha", r"[a-zA-Z]", True),
    ("bit", r"[01]", True),
    ("digit", r"[0-9]", True),
    ("lower", r"[a-z]", True),
    ("upper", r"[A-Z]", True),
    ("odigit", r"[0-7]", True),
    ("xdigit", r"[0-9a-fA-F]", True),
    ("day", r"0[1-9]|[12][0-9]|3[01]", False),
    ("month", r"0[1-9]|1[012]", False),
    ("year", r"[12][0-9]{3}", False),
    (
        "uuid",
        r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}",
        False,
    ),
)


@dataclass(frozen=True, slots=True)
class PlaceholderType:
    """A named regex fragment.

    ``repeatable`` types accept a quantifier (``*``, ``+``, ``?``, ``{m,n}``);
    fixed-shape types ignore one.
    """

    name: str
    pattern: str
    repeatable: bool = True

    @property
    def group_count(self) -> int:
        """Number of capture groups the fragment itself contributes."""
        return re.compile(self.pattern).groups

    @property
    def atomic(self) -> bool:
        """True when the fragment is a single character class or character."""
        return _ATOM_RE.fullmatch(self.pattern) is not None

    @property
    def unit(self) -> str:
        """The fragment as one repeatable unit, grouped unless already atomic.

        Both the match pattern and :meth:`validator` repeat this, so a
        quantifier always applies to the whole fragment.
        """
        if self.atomic:
            return self.pattern
        return f"(?:{self.pattern})"

    def validator(self) -> re.Pattern[str]:
        """Pattern a value must fully match to fill this type."""
        if self.repeatable:
            return re.compile(f"{self.unit}*")
        return re.compile(f"(?:{self.pattern})")


class PlaceholderRegistry:
    """Case-insensitive table of :class:`PlaceholderType` by name.

    Writes replace the internal mapping under a lock; reads go straight to
    the current mapping, so lookups never block.  Register custom types at
    startup, before routes that use them are compiled.
    """

    __slots__ = ("_lock", "_types")

    def __init__(self, *, builtins: bool = True) -> None:
        self._lock = threading.RLock()
        self._types: dict[str, PlaceholderType] = {}
        if builtins:
            for name, pattern, repeatable in BUILTIN_TYPES:
                self.register(name, pattern, repeatable)

    def register(self, name: str, pattern: str, repeatable: bool = True) -> None:
        """Add a type.  Re-registering an existing name is a no-op."""
        key = name.lower()
        if not _TYPE_NAME_RE.fullmatch(key):
            msg = f"Invalid placeholder type name: {name!r}"
            raise ValueError(msg)
        try:
            re.compile(pattern)
        except re.error as exc:
            msg = f"Invalid pattern for placeholder type {name!r}: {exc}"
            raise ValueError(msg) from exc

        with self._lock:
            if key in self._types:
                logger.debug("Placeholder type %r already registered, keeping first", key)
                return
            types = dict(self._types)
            types[key] = PlaceholderType(key, pattern, repeatable)
            self._types = types
        logger.debug("Registered placeholder type %r -> %s", key, pattern)

    def resolve(self, name: str) -> PlaceholderType | None:
        """Return the type registered under *name*, or ``None``."""
        return self._types.get(name.lower())

    def names(self) -> list[str]:
        return list(self._types)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._types

    def __iter__(self) -> Iterator[PlaceholderType]:
        return iter(list(self._types.values()))

    def __len__(self) -> int:
        return len(self._types)

    def __repr__(self) -> str:
        return f"PlaceholderRegistry({self.names()!r})"


default_registry = PlaceholderRegistry()


def register_type(name: str, pattern: str, repeatable: bool = True) -> None:
    """Register a placeholder type on the process-wide default registry."""
    default_registry.register(name, pattern, repeatable)


def resolve_type(name: str) -> PlaceholderType | None:
    return default_registry.resolve(name)
