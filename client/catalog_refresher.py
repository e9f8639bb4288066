import asyncio
import logging

import config
from exceptions import ApiRequestException
from store.catalog import SetError, SetLoading, SetProducts
from store.store import Store
from client.api_client import ApiClient

logger = logging.getLogger(__name__)


class CatalogRefresher:
    """
    Periodically reloads the product catalog into the store.

    At most one refresh runs at a time; a refresh requested while another is
    outstanding is skipped. `stop()` cancels the loop and any in-flight refresh.
    """

    RETRY_MESSAGE = "Failed to refresh data. Please try again."

    def __init__(self, store: Store, api_client: ApiClient, interval_seconds: float | None = None):
        self.store = store
        self.api_client = api_client
        self.interval_seconds = interval_seconds or config.CATALOG_REFRESH_INTERVAL_SECONDS
        self._loop_task: asyncio.Task | None = None
        self._in_flight: asyncio.Task | None = None

    @property
    def is_running(self) -> bool:
        return self._loop_task is not None and not self._loop_task.done()

    @property
    def is_refreshing(self) -> bool:
        return self._in_flight is not None and not self._in_flight.done()

    def start(self) -> None:
        if self.is_running:
            return
        self._loop_task = asyncio.create_task(self._run())
        logger.info(f"Catalog refresher started (every {self.interval_seconds}s)")

    async def stop(self) -> None:
        tasks = [task for task in (self._in_flight, self._loop_task) if task is not None and not task.done()]
        for task in tasks:
            task.cancel()
        for task in tasks:
            try:
                await task
            except asyncio.CancelledError:
                pass
        self._loop_task = None
        self._in_flight = None
        logger.info("Catalog refresher stopped")

    async def refresh(self) -> bool:
        """
        Fetch the catalog once.

        Returns:
            True if products were loaded, False if the fetch failed or was skipped

        Raises:
            asyncio.CancelledError: The refresher was stopped mid-refresh
        """
        if self.is_refreshing:
            logger.debug("Catalog refresh already in progress, skipping")
            return False
        self._in_flight = asyncio.create_task(self._fetch())
        return await self._in_flight

    async def _fetch(self) -> bool:
        self.store.dispatch(SetLoading(loading=True))
        try:
            products = await self.api_client.get_all_products()
        except ApiRequestException as e:
            logger.warning(f"Catalog refresh failed: {e.message}")
            self.store.dispatch(SetError(message=self.RETRY_MESSAGE))
            return False
        except BaseException:
            # Cancelled or unexpected failure: never leave the catalog stuck in loading
            self.store.dispatch(SetLoading(loading=False))
            raise
        self.store.dispatch(SetProducts(products=tuple(products)))
        logger.debug(f"Catalog refreshed: {len(products)} products")
        return True

    async def _run(self) -> None:
        while True:
            try:
                await self.refresh()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.error(f"Unexpected error in catalog refresh loop: {e}", exc_info=e)
            await asyncio.sleep(self.interval_seconds)
