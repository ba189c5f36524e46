import asyncio
import json
import logging
from typing import Any, AsyncIterator, Awaitable, Callable, List, Optional, Set
from fastapi.encoders import jsonable_encoder
from app.core.config import FEED_QUEUE_SIZE, STREAM_INTERVAL
from app.services.inventory_service import list_inventory

log = logging.getLogger("inventory.feed")

Snapshot = Callable[[], Awaitable[List[Any]]]


def encode_frame(payload: Any) -> str:
    """Frames one payload as a Server-Sent Events message."""
    return f"data: {json.dumps(jsonable_encoder(payload))}\n\n"


class Subscription:
    """
    One listener of the feed. Frames are buffered in a bounded queue; when a slow
    reader falls behind, the oldest pending frame is dropped since every frame
    carries the full inventory.
    """

    def __init__(self, maxsize: int = FEED_QUEUE_SIZE):
        self._queue: asyncio.Queue = asyncio.Queue(maxsize=maxsize)
        self._cancelled = asyncio.Event()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def push(self, frame: Optional[str]):
        if self._queue.full():
            self._queue.get_nowait()
        self._queue.put_nowait(frame)

    def cancel(self):
        if not self.cancelled:
            self._cancelled.set()
            # Wakes a reader blocked on the queue
            self.push(None)

    async def frames(self) -> AsyncIterator[str]:
        while not self.cancelled:
            frame = await self._queue.get()
            if frame is None:
                return
            yield frame


class InventoryFeed:
    """
    Periodically snapshots the inventory and fans the frame out to subscribers.

    The ticker task starts with the first subscriber and is cancelled when the
    last one leaves. Its first tick comes one interval after it starts. No storage connection is held while it sleeps.
    """

    def __init__(self, snapshot: Snapshot, interval: float = STREAM_INTERVAL, queue_size: int = FEED_QUEUE_SIZE):
        self._snapshot = snapshot
        self._interval = interval
        self._queue_size = queue_size
        self._subscribers: Set[Subscription] = set()
        self._ticker: Optional[asyncio.Task] = None

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    @property
    def running(self) -> bool:
        return self._ticker is not None and not self._ticker.done()

    def subscribe(self) -> Subscription:
        subscription = Subscription(self._queue_size)
        self._subscribers.add(subscription)
        if not self.running:
            self._ticker = asyncio.create_task(self._run())
        return subscription

    def unsubscribe(self, subscription: Subscription):
        subscription.cancel()
        self._subscribers.discard(subscription)
        if not self._subscribers and self._ticker is not None:
            self._ticker.cancel()
            self._ticker = None

    async def tick(self):
        """Takes one snapshot and delivers it to every current subscriber."""
        frame = encode_frame(await self._snapshot())
        for subscription in list(self._subscribers):
            subscription.push(frame)

    async def _run(self):
        log.info("Inventory feed started.")
        try:
            while self._subscribers:
                # New subscribers are sent their first snapshot on connect
                await asyncio.sleep(self._interval)
                try:
                    await self.tick()
                except Exception as e:
                    # A failed snapshot skips this tick; the feed keeps running
                    log.error(f"Inventory feed snapshot failed: {e}")
        finally:
            log.info("Inventory feed stopped.")

    async def close(self):
        """Cancels every subscription and waits for the ticker to finish."""
        ticker = self._ticker
        for subscription in list(self._subscribers):
            self.unsubscribe(subscription)
        if ticker is not None:
            try:
                await ticker
            except asyncio.CancelledError:
                pass


# Process-wide feed shared by every /stream/inventory connection
inventory_feed = InventoryFeed(list_inventory)
