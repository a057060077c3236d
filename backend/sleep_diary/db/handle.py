import logging
from enum import Enum
from typing import Awaitable, Callable, Optional

from .base import JournalStore
from ..core.exceptions import StoreFailed, StoreNotReady

logger = logging.getLogger(__name__)


class StoreState(str, Enum):
    INITIALIZING = "initializing"
    READY = "ready"
    FAILED = "failed"


class StoreHandle:
    """
    Owns the process-wide store while it comes up.

    Requests that arrive while the store is initializing get ``StoreNotReady``
    (retryable). A failed initialization is terminal: ``start`` re-raises and
    every later access raises ``StoreFailed``.
    """

    def __init__(self, factory: Callable[[], JournalStore]):
        self._factory = factory
        self._store: Optional[JournalStore] = None
        self.state = StoreState.INITIALIZING
        self.error: Optional[BaseException] = None

    @property
    def store(self) -> JournalStore:
        if self.state is StoreState.READY:
            return self._store
        if self.state is StoreState.FAILED:
            raise StoreFailed()
        raise StoreNotReady()

    @property
    def backend_name(self) -> Optional[str]:
        return self._store.backend_name if self._store else None

    async def start(self, bootstrap: Optional[Callable[[JournalStore], Awaitable[None]]] = None):
        """Create and initialize the backend, then run ``bootstrap`` against it"""
        try:
            self._store = self._factory()
            logger.info(f"Initializing {self._store.backend_name} store")
            await self._store.initialize()
            if bootstrap is not None:
                await bootstrap(self._store)
        except Exception as e:
            self.state = StoreState.FAILED
            self.error = e
            logger.critical(f"Store initialization failed: {e}", exc_info=True)
            raise StoreFailed(f"Storage initialization failed: {e}") from e

        self.state = StoreState.READY
        logger.info("Store ready")

    async def close(self):
        if self._store is not None and self.state is StoreState.READY:
            await self._store.close()
            logger.info("Store closed")
