"""
Catalog View - pure rendering of store status and route

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
from typing import Optional, Tuple, Union

from catalog_store import CatalogEntry, Failed, FetchStatus, Succeeded
from facets import FacetFilter
from router import ImageDetail, RouteTarget

LOADING_MESSAGE = "Loading catalog..."
EMPTY_CATALOG_MESSAGE = "image not found"
NO_MATCHES_MESSAGE = "No images match the current filters"


@dataclass(frozen=True)
class CatalogListView:
    entries: Tuple[CatalogEntry, ...]
    message: Optional[str]
    loading: bool
    failed: bool
    total: int


@dataclass(frozen=True)
class ImageDetailView:
    name: str
    pull_reference: str


ViewModel = Union[CatalogListView, ImageDetailView]


def registry_host(registry_url: str) -> str:
    return registry_url.replace("https://", "").replace("http://", "").rstrip("/")


def render_catalog(status: FetchStatus, facet_filter: FacetFilter = None, name_filter: str = "") -> CatalogListView:
    """Entries to show for the list view; a failed fetch shows none"""
    if isinstance(status, Failed):
        return CatalogListView(entries=(), message=status.message, loading=False, failed=True, total=0)

    if not isinstance(status, Succeeded):
        return CatalogListView(entries=(), message=LOADING_MESSAGE, loading=True, failed=False, total=0)

    needle = name_filter.strip().lower()
    entries = tuple(
        CatalogEntry(name) for name in status.repositories
        if (not needle or needle in name.lower())
        and (facet_filter is None or facet_filter.matches(name))
    )

    message = None
    if not status.repositories:
        message = EMPTY_CATALOG_MESSAGE
    elif not entries:
        message = NO_MATCHES_MESSAGE
    return CatalogListView(entries=entries, message=message, loading=False, failed=False,
                           total=len(status.repositories))


def render_detail(name: str, registry_url: str = "") -> ImageDetailView:
    host = registry_host(registry_url)
    return ImageDetailView(name=name, pull_reference=f"{host}/{name}" if host else name)


def render_view(status: FetchStatus, route: RouteTarget, facet_filter: FacetFilter = None,
                name_filter: str = "", registry_url: str = "") -> ViewModel:
    """Map (store status, route) to the view model the screens draw"""
    if isinstance(route, ImageDetail):
        return render_detail(route.name, registry_url)
    return render_catalog(status, facet_filter, name_filter)
