"""
Catalog Store - fetch lifecycle for the image catalog

AI Attribution (AIA): EAI Hin R Claude Code v1.0
Full: AIA Entirely AI, Human-initiated, Reviewed, Claude Code v1.0
Expanded: This work was entirely AI-generated. AI was prompted for its contributions,
or AI assistance was enabled. AI-generated content was reviewed and approved.
The following model(s) or application(s) were used: Claude Code.
Interpretation: https://aiattribution.github.io/interpret-attribution
More: https://aiattribution.github.io/
Vibe-Coder: Andrew Potozniak <potozniak@redhat.com>
Session Date: 2026-10-19

The store walks Idle -> Loading -> Succeeded | Failed exactly once. A second
fetch needs a new store instance.
"""

import asyncio
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple, Union

from registry_client import FetchError


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Loading:
    pass


@dataclass(frozen=True)
class Succeeded:
    repositories: Tuple[str, ...]


@dataclass(frozen=True)
class Failed:
    message: str


FetchStatus = Union[Idle, Loading, Succeeded, Failed]


@dataclass(frozen=True)
class CatalogEntry:
    """One repository in a successful catalog; the name is also its route key"""
    name: str


class CatalogStore:
    """Owns the fetch status of the registry catalog for one list view"""

    label = "catalog"

    def __init__(self, spawn: Callable = None, tui_debug_logger=None):
        self._status: FetchStatus = Idle()
        self._generation = 0
        self._discarded = False
        self._listeners: List[Callable[[FetchStatus], None]] = []
        self._spawn = spawn or asyncio.ensure_future
        self.tui_debug_logger = tui_debug_logger

    def _debug(self, message: str, **kwargs):
        if self.tui_debug_logger:
            self.tui_debug_logger.debug(message, store=self.label, **kwargs)

    @property
    def is_discarded(self) -> bool:
        return self._discarded

    def current_status(self) -> FetchStatus:
        return self._status

    def entries(self) -> List[CatalogEntry]:
        """Entries of a successful fetch; empty in every other state"""
        if isinstance(self._status, Succeeded):
            return [CatalogEntry(name) for name in self._status.repositories]
        return []

    def subscribe(self, listener: Callable[[FetchStatus], None]) -> Callable[[], None]:
        """Register a status listener; returns a callable that removes it"""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_status(self, status: FetchStatus) -> None:
        self._status = status
        self._debug("Fetch status changed", status=type(status).__name__)
        for listener in list(self._listeners):
            listener(status)

    async def _request(self, client, base_url: str) -> List[str]:
        return await client.fetch_catalog(base_url)

    def begin_fetch_if_idle(self, client, base_url: str):
        """Start the single fetch of this store; a no-op unless the store is Idle.

        Returns whatever ``spawn`` returned for the fetch coroutine (a task or
        a worker), or ``None`` when nothing was started.
        """
        if self._discarded or not isinstance(self._status, Idle):
            self._debug("Fetch not started", status=type(self._status).__name__,
                        discarded=self._discarded)
            return None

        # Check and set happen before any await, so a second caller sees Loading
        self._set_status(Loading())
        return self._spawn(self._run_fetch(client, base_url, self._generation))

    async def _run_fetch(self, client, base_url: str, generation: int) -> None:
        try:
            result = await self._request(client, base_url)
        except FetchError as e:
            result = e
        except asyncio.CancelledError:
            self._debug("Fetch cancelled", base_url=base_url)
            raise
        except Exception as e:
            if self.tui_debug_logger:
                self.tui_debug_logger.error("Unexpected fetch failure", store=self.label, error=repr(e))
            result = FetchError(f"Unexpected error: {e}")
        self.on_fetch_resolved(result, generation)

    def on_fetch_resolved(self, result: Union[List[str], FetchError], generation: Optional[int] = None) -> bool:
        """Apply a finished fetch. Returns False when the result was ignored."""
        if self._discarded or (generation is not None and generation != self._generation):
            self._debug("Discarding result for a discarded store", generation=generation)
            return False

        if not isinstance(self._status, Loading):
            self._debug("Ignoring fetch result outside Loading",
                        status=type(self._status).__name__)
            return False

        if isinstance(result, FetchError):
            self._set_status(Failed(result.message))
        else:
            self._set_status(Succeeded(tuple(result)))
        return True

    def discard(self) -> None:
        """Detach the store from its view; a late result is dropped"""
        self._generation += 1
        self._discarded = True
        self._listeners.clear()
        self._debug("Store discarded")


class TagStore(CatalogStore):
    """Same lifecycle as the catalog, for the tag list of one repository"""

    label = "tags"

    def __init__(self, repository: str, spawn: Callable = None, tui_debug_logger=None):
        super().__init__(spawn=spawn, tui_debug_logger=tui_debug_logger)
        self.repository = repository

    def tags(self) -> List[str]:
        """Tags of a successful fetch; empty in every other state"""
        if isinstance(self._status, Succeeded):
            return list(self._status.repositories)
        return []

    async def _request(self, client, base_url: str) -> List[str]:
        return await client.fetch_tags(base_url, self.repository)
