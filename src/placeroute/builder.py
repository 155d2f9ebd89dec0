"""Registration helper: URL prefix groups and trailing-slash policy."""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from placeroute.routing import Router

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from placeroute.config import RouterConfig
    from placeroute.destination import Destination
    from placeroute.routing import Route


class RouteBuilder:
    """Build a :class:`Router` with scoped prefixes.

    Usage::

        builder = RouteBuilder()
        builder.link("/", "Home::index", name="home")
        with builder.group("/admin"):
            builder.link("/users/(id:digit)", "admin/Users::view/{id}", name="admin.user")
        builder.router.url_for("admin.user", {"id": 3})  # "/admin/users/3"
    """

    __slots__ = ("_prefix", "router")

    def __init__(self, router: Router | None = None, config: RouterConfig | None = None) -> None:
        self.router = router if router is not None else Router(config)
        self._prefix = ""

    @property
    def config(self) -> RouterConfig:
        return self.router.config

    @property
    def prefix(self) -> str:
        return self._prefix

    @contextmanager
    def group(self, prefix: str) -> Iterator[RouteBuilder]:
        """Prefix every template linked inside the ``with`` block."""
        previous = self._prefix
        scope = previous + prefix
        if not scope.startswith("/"):
            scope = "/" + scope
        self._prefix = scope
        try:
            yield self
        finally:
            self._prefix = previous

    def link(
        self,
        template: str,
        destination: str | Sequence[str] | Destination | None = None,
        **options: Any,
    ) -> Route:
        """Register *template* under the current group prefix."""
        url = self._prefix.rstrip("/") + template
        if self.config.append_slash:
            url = url.rstrip("/") + "/"
        elif url != "/":
            url = url.rstrip("/") or "/"
        return self.router.add(url, destination, options)
