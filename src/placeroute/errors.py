"""Exception types raised by placeroute."""

from __future__ import annotations


class PlaceRouteError(Exception):
    """Base class for all placeroute errors."""


class CompileError(PlaceRouteError, ValueError):
    """A URL template could not be compiled.

    Parameters
    ----------
    message:
        Human-readable description of the problem.
    template:
        The template that failed to compile.
    token:
        The offending placeholder text, when the failure is tied to one.
    """

    def __init__(self, message: str, *, template: str, token: str | None = None) -> None:
        self.template = template
        self.token = token
        detail = f"{message} in template {template!r}"
        if token is not None:
            detail = f"{message}: {token!r} in template {template!r}"
        super().__init__(detail)


class DestinationError(PlaceRouteError, ValueError):
    """A route destination could not be parsed or bound."""
