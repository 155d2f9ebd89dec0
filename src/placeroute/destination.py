"""Route destinations: what a route points at.

A destination names a controller and an action, optionally under a module
prefix, followed by arguments::

    "app/controllers/Blogs::view/{id}"
    "app.controllers.Users::list/{page=1}/active"
    ("Blogs", "view", "{id}")

``{name}`` arguments are filled from the values captured by the route;
``{name=default}`` falls back to *default* when nothing was captured.  Any
other argument is passed through literally.  Destinations are descriptive
only; nothing here imports or calls the target.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence

from pydantic import BaseModel, ConfigDict

from placeroute.errors import DestinationError

_DESTINATION_RE = re.compile(
    r"""
    ^
    (?:(?P<prefix>[a-z0-9_]+(?:[./\\][a-z0-9_]+)*)[./\\])?
    (?P<controller>[a-z0-9_]+)
    ::
    (?P<action>[a-z0-9_]+)
    (?P<params>(?:/[^/]+)*)
    /?
    $
    """,
    re.IGNORECASE | re.VERBOSE,
)

_VARIABLE_RE = re.compile(r"\{(?P<name>[a-z0-9_]+)(?:=(?P<default>[^{}]*))?\}", re.IGNORECASE)
_LITERAL_RE = re.compile(r"""(?:"(?P<dq>[^"]*)"|'(?P<sq>[^']*)'|(?P<bare>[a-z0-9_\-=.]+))""", re.IGNORECASE)


class DestinationParam(BaseModel):
    """One argument of a destination."""

    model_config = ConfigDict(frozen=True)

    name: str | int
    value: str | None = None
    variable: bool = False


class Destination(BaseModel):
    """Parsed ``prefix/Controller::action/args`` destination."""

    model_config = ConfigDict(frozen=True)

    prefix: str = ""
    controller: str
    action: str
    params: tuple[DestinationParam, ...] = ()

    @property
    def target(self) -> str:
        """Dotted path of the controller, including the prefix."""
        if self.prefix:
            return f"{self.prefix}.{self.controller}"
        return self.controller

    def bind(self, captured: Mapping[str | int, str]) -> list[str]:
        """Resolve the positional argument list for a match.

        With no declared params, the captured values are passed in order.
        """
        if not self.params:
            return list(captured.values())

        by_name = {str(key): value for key, value in captured.items()}
        args: list[str] = []
        for param in self.params:
            if not param.variable:
                args.append(param.value or "")
                continue
            value = by_name.get(str(param.name), param.value)
            if value is None:
                msg = f"No value captured for destination argument {{{param.name}}} of {self}"
                raise DestinationError(msg)
            args.append(value)
        return args

    def unbound(self, names: Sequence[str | int]) -> list[str]:
        """Variables without a default that none of *names* can fill."""
        available = {str(name) for name in names}
        return [
            str(param.name)
            for param in self.params
            if param.variable and param.value is None and str(param.name) not in available
        ]

    def __str__(self) -> str:
        text = f"{self.target}::{self.action}"
        for param in self.params:
            if param.variable:
                default = f"={param.value}" if param.value is not None else ""
                text += f"/{{{param.name}{default}}}"
            else:
                text += f"/{param.value}"
        return text


def parse_destination(source: str | Sequence[str] | Destination) -> Destination:
    """Parse a destination string or ``(controller, action, *args)`` sequence.

    Raises :class:`~placeroute.errors.DestinationError` when *source* does
    not follow the grammar.
    """
    if isinstance(source, Destination):
        return source

    if not isinstance(source, str):
        parts = [str(part).strip("/") for part in source]
        if len(parts) < 2:
            msg = f"Destination sequence needs a controller and an action, got {source!r}"
            raise DestinationError(msg)
        source = "/".join([f"{parts[0]}::{parts[1]}", *parts[2:]])

    m = _DESTINATION_RE.match(source.rstrip("/"))
    if m is None:
        msg = f"Could not parse route destination: {source!r}"
        raise DestinationError(msg)

    prefix = re.sub(r"[/\\]", ".", m.group("prefix") or "")
    return Destination(
        prefix=prefix,
        controller=m.group("controller"),
        action=m.group("action"),
        params=_parse_params(source, m.group("params")),
    )


def _parse_params(source: str, raw: str) -> tuple[DestinationParam, ...]:
    params: list[DestinationParam] = []
    position = 1
    for part in raw.split("/"):
        if not part:
            continue
        variable = _VARIABLE_RE.fullmatch(part)
        if variable is not None:
            params.append(
                DestinationParam(
                    name=variable.group("name"),
                    value=variable.group("default"),
                    variable=True,
                )
            )
            continue
        literal = _LITERAL_RE.fullmatch(part)
        if literal is None:
            msg = f"Could not parse argument {part!r} of route destination {source!r}"
            raise DestinationError(msg)
        value = next(g for g in literal.group("dq", "sq", "bare") if g is not None)
        params.append(DestinationParam(name=position, value=value))
        position += 1
    return tuple(params)
