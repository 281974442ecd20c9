"""
Search session with request sequencing.

Each search gets a generation number. A response is only applied when
its generation is still the newest, so a slow earlier search can never
overwrite the results of a later one. Scheduling a new search also
cancels the previous pending or in-flight one.
"""

import asyncio
import logging
from typing import TYPE_CHECKING, Optional

from opensearch_navigator.config import get_settings
from opensearch_navigator.core.models import ConnectionProfile, FilterState, SearchPage

if TYPE_CHECKING:
    from opensearch_navigator.orchestrator import NavigatorOrchestrator


logger = logging.getLogger(__name__)


class SearchSession:
    """
    Holds the current connection profile and the latest applied results.
    """
    
    def __init__(
        self,
        orchestrator: "NavigatorOrchestrator",
        profile: ConnectionProfile,
        debounce_seconds: Optional[float] = None,
    ):
        self.orchestrator = orchestrator
        self.profile = profile
        self.debounce_seconds = (
            debounce_seconds if debounce_seconds is not None else get_settings().debounce_seconds
        )
        self.latest: Optional[SearchPage] = None
        self.last_error: Optional[Exception] = None
        self._generation = 0
        self._pending: Optional[asyncio.Task] = None
    
    @property
    def generation(self) -> int:
        return self._generation
    
    def is_current(self, generation: int) -> bool:
        return generation == self._generation
    
    async def search(self, filters: FilterState) -> Optional[SearchPage]:
        """
        Run a search and apply its result if no newer search was issued.
        
        Returns:
            The page, or None when the response was superseded
        """
        self._generation += 1
        generation = self._generation
        
        try:
            page = await self.orchestrator.search(self.profile, filters)
        except Exception as e:
            if self.is_current(generation):
                self.last_error = e
                raise
            logger.debug("Discarding error from superseded search %d: %s", generation, e)
            return None
        
        if not self.is_current(generation):
            logger.debug(
                "Discarding stale search %d (current is %d)", generation, self._generation
            )
            return None
        
        self.latest = page
        self.last_error = None
        return page
    
    def schedule(self, filters: FilterState) -> asyncio.Task:
        """
        Debounce a search: cancel any previous one and start after the window.
        
        Must be called from a running event loop.
        """
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending = asyncio.ensure_future(self._debounced(filters))
        return self._pending
    
    async def _debounced(self, filters: FilterState) -> Optional[SearchPage]:
        if self.debounce_seconds > 0:
            await asyncio.sleep(self.debounce_seconds)
        return await self.search(filters)
