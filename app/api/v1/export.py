from typing import Optional
from fastapi import APIRouter
from fastapi.responses import PlainTextResponse
from app.services.export_service import export_table

router = APIRouter()


@router.get("", response_class=PlainTextResponse)
async def export_csv(table: Optional[str] = None):
    """
    Downloads a table as CSV: items, inventory, distributors or distributor_prices.
    Any other name answers with the single line `error,invalid_table`.
    """
    return PlainTextResponse(await export_table(table), media_type="text/csv")
