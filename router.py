"""
Router - maps catalog paths to views

AI Attribution (AIA): EAI Hin R Claude Code v1.0
Full: AIA Entirely AI, Human-initiated, Reviewed, Claude Code v1.0
Expanded: This work was entirely AI-generated. AI was prompted for its contributions,
or AI assistance was enabled. AI-generated content was reviewed and approved.
The following model(s) or application(s) were used: Claude Code.
Interpretation: https://aiattribution.github.io/interpret-attribution
More: https://aiattribution.github.io/
Vibe-Coder: Andrew Potozniak <potozniak@redhat.com>
Session Date: 2026-10-19
"""

from dataclasses import dataclass
from typing import Callable, List, Union
from urllib.parse import quote, unquote, urlsplit

CATALOG_PATH = "/images"
DETAIL_PREFIX = CATALOG_PATH + "/"


@dataclass(frozen=True)
class CatalogList:
    pass


@dataclass(frozen=True)
class ImageDetail:
    name: str


RouteTarget = Union[CatalogList, ImageDetail]


def resolve(path: str) -> RouteTarget:
    """Resolve a location path to its view.

    ``/images/{name}`` is tried first and captures everything after the
    prefix (repository names may contain slashes). ``/images``, ``/images/``
    and any unknown path fall back to the catalog list.
    """
    path = urlsplit(path or "").path

    if path.startswith(DETAIL_PREFIX):
        name = unquote(path[len(DETAIL_PREFIX):].rstrip("/"))
        if name:
            return ImageDetail(name)

    return CatalogList()


def path_for(target: RouteTarget) -> str:
    """Canonical path of a route target"""
    if isinstance(target, ImageDetail):
        name = quote(target.name, safe="/")
        # resolve() strips trailing slashes, so a slash that belongs to the name is encoded
        if name.endswith("/"):
            name = name[:-1] + "%2F"
        return DETAIL_PREFIX + name
    return CATALOG_PATH


class Router:
    """Holds the current location and tells listeners when it changes"""

    def __init__(self, initial_path: str = CATALOG_PATH, tui_debug_logger=None):
        self.path = path_for(resolve(initial_path))
        self.history: List[str] = []
        self._listeners: List[Callable[[RouteTarget], None]] = []
        self.tui_debug_logger = tui_debug_logger

    def current(self) -> RouteTarget:
        return resolve(self.path)

    def subscribe(self, listener: Callable[[RouteTarget], None]) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _go(self, path: str) -> None:
        self.path = path
        target = resolve(path)
        if self.tui_debug_logger:
            self.tui_debug_logger.debug("Route changed", path=path, target=target)
        for listener in list(self._listeners):
            listener(target)

    def navigate_to(self, target: RouteTarget) -> None:
        """Move to the canonical path of target, remembering where we were"""
        path = path_for(target)
        if path == self.path:
            return
        self.history.append(self.path)
        self._go(path)

    def back(self) -> bool:
        """Return to the previous location; False when there is nowhere to go"""
        if self.history:
            self._go(self.history.pop())
            return True
        if self.path != CATALOG_PATH:
            self._go(CATALOG_PATH)
            return True
        return False
