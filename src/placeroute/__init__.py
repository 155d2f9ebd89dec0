"""Typed URL templates: compile, match and reverse."""

__version__ = "0.1.0"

from placeroute.builder import RouteBuilder
from placeroute.compiler import CompiledRoute, PlaceholderToken, Quantifier, compile_template
from placeroute.config import RouterConfig
from placeroute.destination import Destination, DestinationParam, parse_destination
from placeroute.errors import CompileError, DestinationError, PlaceRouteError
from placeroute.matching import MatchResult, match
from placeroute.placeholders import (
    PlaceholderRegistry,
    PlaceholderType,
    default_registry,
    register_type,
    resolve_type,
)
from placeroute.reverse import reverse
from placeroute.routing import Route, RouteMatch, Router

__all__ = [
    "CompileError",
    "CompiledRoute",
    "Destination",
    "DestinationError",
    "DestinationParam",
    "MatchResult",
    "PlaceRouteError",
    "PlaceholderRegistry",
    "PlaceholderToken",
    "PlaceholderType",
    "Quantifier",
    "Route",
    "RouteBuilder",
    "RouteMatch",
    "Router",
    "RouterConfig",
    "compile_template",
    "default_registry",
    "match",
    "parse_destination",
    "register_type",
    "resolve_type",
    "reverse",
]
