"""Ordered route table with first-match-wins lookup and named reverse."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from placeroute.compiler import compile_template
from placeroute.config import RouterConfig
from placeroute.destination import parse_destination
from placeroute.errors import DestinationError
from placeroute.matching import match as match_compiled
from placeroute.reverse import reverse

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping, Sequence

    from placeroute.compiler import CompiledRoute
    from placeroute.destination import Destination
    from placeroute.placeholders import PlaceholderRegistry

logger = logging.getLogger(__name__)


class Route:
    """A compiled template plus what it points at."""

    __slots__ = ("compiled", "destination", "name", "options")

    def __init__(
        self,
        compiled: CompiledRoute,
        destination: Destination | None = None,
        name: str | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> None:
        self.compiled = compiled
        self.destination = destination
        self.name = name
        self.options: dict[str, Any] = dict(options or {})

    @property
    def template(self) -> str:
        return self.compiled.template

    @property
    def reversible(self) -> bool:
        """Only named routes are indexed for reverse lookups."""
        return self.name is not None

    def match(self, path: str, *, max_length: int | None = None) -> dict[str | int, str] | None:
        """Return captured params if *path* matches, else ``None``."""
        result = match_compiled(self.compiled, path, max_length=max_length)
        if not result:
            return None
        return result.params

    def url(self, params: Mapping[str | int, Any] | None = None) -> str | None:
        return reverse(self.compiled, params)

    def option(self, key: str, default: Any = None) -> Any:
        return self.options.get(key, default)

    def __repr__(self) -> str:
        if self.name:
            return f"Route({self.template!r}, name={self.name!r})"
        return f"Route({self.template!r})"


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful :meth:`Router.match`."""

    route: Route
    params: dict[str | int, str] = field(default_factory=dict)

    @property
    def arguments(self) -> list[str]:
        """Positional arguments for the destination's action."""
        if self.route.destination is None:
            return list(self.params.values())
        return self.route.destination.bind(self.params)


class Router:
    """Ordered collection of routes with first-match-wins lookup.

    Usage::

        router = Router()
        router.add("/blog/(id:digit)", "Blogs::view/{id}", {"name": "blog"})
        router.match("/blog/42").params   # {"id": "42"}
        router.url_for("blog", {"id": 7}) # "/blog/7"
    """

    __slots__ = ("_named", "_routes", "config", "registry")

    def __init__(
        self,
        config: RouterConfig | None = None,
        registry: PlaceholderRegistry | None = None,
    ) -> None:
        self.config = config or RouterConfig()
        self.registry = registry
        self._routes: list[Route] = []
        self._named: dict[str, Route] = {}

    @property
    def routes(self) -> list[Route]:
        """Registered routes in order, as a copy."""
        return list(self._routes)

    def add(
        self,
        template: str,
        destination: str | Sequence[str] | Destination | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> Route:
        """Compile and register a route.

        ``options["name"]`` names the route for :meth:`url_for`; every other
        option is stored on the route untouched.  Raises
        :class:`~placeroute.errors.CompileError` or
        :class:`~placeroute.errors.DestinationError` without registering
        anything.
        """
        extra = dict(options or {})
        name = extra.pop("name", None) or None
        compiled = compile_template(template, self.registry)
        parsed = parse_destination(destination) if destination is not None else None
        if parsed is not None:
            missing = parsed.unbound(compiled.names)
            if missing:
                names = ", ".join(f"{{{var}}}" for var in missing)
                msg = f"Destination {parsed} refers to {names}, which {template!r} does not capture"
                raise DestinationError(msg)
        route = Route(compiled, parsed, name, extra)

        self._routes.append(route)
        if name is not None:
            if name in self._named:
                logger.debug("Route name %r re-bound to %r", name, template)
            self._named[name] = route
        return route

    def match(self, path: str) -> RouteMatch | None:
        """Return the first route matching *path*, or ``None``."""
        for route in self._routes:
            params = route.match(path, max_length=self.config.max_path_length)
            if params is not None:
                return RouteMatch(route, params)
        return None

    def find_by_url(self, path: str) -> Route | None:
        result = self.match(path)
        return result.route if result else None

    def find_by_name(self, name: str) -> Route | None:
        return self._named.get(name)

    def url_for(self, name: str, params: Mapping[str | int, Any] | None = None) -> str | None:
        """Reverse the route registered as *name*; ``None`` if impossible."""
        route = self._named.get(name)
        if route is None:
            logger.debug("No route named %r", name)
            return None
        return route.url(params)

    def __iter__(self) -> Iterator[Route]:
        return iter(list(self._routes))

    def __len__(self) -> int:
        return len(self._routes)
