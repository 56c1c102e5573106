import asyncio
import logging
import time
from typing import Optional

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_nft_reader
from api.metrics import observe_request
from integration.nft_holdings import NftHoldingsReader

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/nft-holdings")
async def nft_holdings(
    wallet_address: Optional[str] = Query(None, alias="walletAddress"),
    reader: NftHoldingsReader = Depends(get_nft_reader),
) -> dict:
    """
    Mood-room NFTs held by a wallet.
    walletAddress is optional at the routing level so a missing value
    reaches the reader and comes back as {"error": ...}.
    """
    start = time.time()
    try:
        holdings = await asyncio.to_thread(reader.holdings, wallet_address)
    except Exception as e:
        logger.error(f"Error fetching NFT holdings: {e}")
        observe_request("/nft-holdings", "error", start)
        raise

    observe_request("/nft-holdings", "ok", start)
    return holdings.to_wire()
