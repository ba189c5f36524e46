import logging
from fastapi import APIRouter, Request
from fastapi.responses import StreamingResponse
from app.events.inventory_feed import inventory_feed, encode_frame
from app.services.inventory_service import list_inventory

router = APIRouter()
log = logging.getLogger("uvicorn")


@router.get("/inventory")
async def stream_inventory(request: Request):
    """
    Server-Sent Events feed of the full inventory: one snapshot on connect,
    then one every STREAM_INTERVAL seconds until the client goes away.
    """

    async def event_stream():
        subscription = inventory_feed.subscribe()
        try:
            yield encode_frame(await list_inventory())
            async for frame in subscription.frames():
                if await request.is_disconnected():
                    break
                yield frame
        finally:
            inventory_feed.unsubscribe(subscription)
            log.info(f"Inventory stream closed; {inventory_feed.subscriber_count} subscriber(s) left.")

    return StreamingResponse(
        event_stream(),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "Connection": "keep-alive"},
    )
