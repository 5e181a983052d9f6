"""Declarative navigation graph and back stack for the shell.

Routes are plain strings (``list``, ``recipe/3``, ``settings/about``)
matched with werkzeug's routing map, so argument conversion and
unknown-route handling behave exactly like the HTTP side of the app.

Graph::

    list                 start destination
    recipe/{recipe_id}   recipe details (also deep link target)
    edit/{recipe_id}     recipe editor
    add_recipe           new recipe editor
    settings             nested graph, lands on settings_list
    settings/about
    settings/licenses
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from urllib.parse import urlsplit

from werkzeug.exceptions import HTTPException
from werkzeug.routing import Map, Rule

from cofi import config as app_config
from cofi.utils.logging import get_logger

LOG = get_logger("cofi.navigation")

START_DESTINATION = "list"

LIST = "list"
RECIPE = "recipe"
EDIT = "edit"
ADD_RECIPE = "add_recipe"
SETTINGS_LIST = "settings_list"
ABOUT = "about"
LICENSES = "licenses"

# Destinations grouped under the nested ``settings`` graph.
SETTINGS_GRAPH = (SETTINGS_LIST, ABOUT, LICENSES)


class NavigationError(RuntimeError):
    """Base class for navigation failures."""


class UnknownRouteError(NavigationError):
    """Raised when a route string matches no destination."""


class NavigationStateError(NavigationError):
    """A destination was reached without a required argument.

    Navigation never builds such an entry; seeing this is a programming
    fault, not a recoverable condition.
    """


@dataclass(frozen=True)
class NavEntry:
    destination: str
    route: str
    arguments: Dict[str, Any] = field(default_factory=dict)

    def require_int(self, name: str) -> int:
        """Argument lookup for consumers of the navigation API.

        HTTP page views get their ids from Flask's ``<int:>`` converters
        and never go through here.
        """
        value = self.arguments.get(name)
        if value is None:
            raise NavigationStateError(f"missing_argument:{name}")
        return int(value)

    @property
    def graph(self) -> Optional[str]:
        return "settings" if self.destination in SETTINGS_GRAPH else None


def _build_map() -> Map:
    return Map(
        [
            Rule("/list", endpoint=LIST),
            Rule("/recipe/<int:recipe_id>", endpoint=RECIPE),
            Rule("/edit/<int:recipe_id>", endpoint=EDIT),
            Rule("/add_recipe", endpoint=ADD_RECIPE),
            Rule("/settings", endpoint=SETTINGS_LIST),
            Rule("/settings/about", endpoint=ABOUT),
            Rule("/settings/licenses", endpoint=LICENSES),
        ],
        strict_slashes=False,
    )


def _build_deep_link_map() -> Map:
    return Map([Rule("/recipe/<int:recipe_id>", endpoint=RECIPE)])


class NavGraph:
    def __init__(self, deep_link_base: Optional[str] = None) -> None:
        self._map = _build_map()
        self._deep_links = _build_deep_link_map()
        base = (deep_link_base or app_config.deep_link_url()).rstrip("/")
        parts = urlsplit(base)
        self._deep_link_scheme = parts.scheme.lower()
        self._deep_link_host = parts.netloc.lower()
        self._deep_link_prefix = parts.path.rstrip("/")
        self.deep_link_base = base

    def resolve(self, route: str) -> NavEntry:
        path = "/" + (route or "").strip().strip("/")
        adapter = self._map.bind("cofi.local")
        try:
            endpoint, args = adapter.match(path)
        except HTTPException as exc:
            raise UnknownRouteError(f"unknown_route:{route}") from exc
        return NavEntry(destination=endpoint, route=path.lstrip("/"), arguments=dict(args))

    def route_for(self, destination: str, **arguments: Any) -> str:
        """Build the route string for a destination (inverse of `resolve`)."""
        adapter = self._map.bind("cofi.local")
        try:
            return adapter.build(destination, arguments).lstrip("/")
        except Exception as exc:
            raise UnknownRouteError(f"unknown_destination:{destination}") from exc

    def resolve_deep_link(self, url: str) -> Optional[NavEntry]:
        """Map an external URL to a destination, or None when it is not ours."""
        parts = urlsplit(url or "")
        if parts.scheme.lower() != self._deep_link_scheme or parts.netloc.lower() != self._deep_link_host:
            return None
        path = parts.path
        if self._deep_link_prefix:
            if not path.startswith(self._deep_link_prefix + "/"):
                return None
            path = path[len(self._deep_link_prefix):]
        adapter = self._deep_links.bind(self._deep_link_host)
        try:
            endpoint, args = adapter.match(path)
        except HTTPException:
            return None
        return self.resolve(self.route_for(endpoint, **args))


class NavController:
    """Back stack over a `NavGraph`, starting at the list destination."""

    def __init__(self, graph: NavGraph) -> None:
        self.graph = graph
        self._stack: List[NavEntry] = [graph.resolve(START_DESTINATION)]

    @property
    def current(self) -> NavEntry:
        return self._stack[-1]

    @property
    def back_stack(self) -> List[NavEntry]:
        return list(self._stack)

    def navigate(self, route: str, *, pop_up_to: Optional[str] = None, inclusive: bool = False) -> NavEntry:
        entry = self.graph.resolve(route)
        if pop_up_to is not None:
            self._pop_up_to(pop_up_to, inclusive)
        self._stack.append(entry)
        LOG.debug("Navigated to %s (depth=%d)", entry.route, len(self._stack))
        return entry

    def _pop_up_to(self, destination: str, inclusive: bool) -> None:
        target = self.graph.resolve(destination).destination
        positions = [i for i, e in enumerate(self._stack) if e.destination == target]
        if not positions:
            return
        cut = positions[-1] if inclusive else positions[-1] + 1
        del self._stack[cut:]

    def pop_back_stack(self) -> bool:
        if len(self._stack) <= 1:
            return False
        self._stack.pop()
        return True

    def handle_deep_link(self, url: str) -> Optional[NavEntry]:
        entry = self.graph.resolve_deep_link(url)
        if entry is None:
            LOG.info("Ignoring unrecognized deep link %s", url)
            return None
        return self.navigate(entry.route)


__all__ = [
    "START_DESTINATION",
    "LIST",
    "RECIPE",
    "EDIT",
    "ADD_RECIPE",
    "SETTINGS_LIST",
    "ABOUT",
    "LICENSES",
    "NavigationError",
    "UnknownRouteError",
    "NavigationStateError",
    "NavEntry",
    "NavGraph",
    "NavController",
]
