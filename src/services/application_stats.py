"""
Attach application counts to benefit listing results.
"""

import asyncio
import logging
from typing import Any, Dict, List

from src.storage.application_store import ApplicationStore


logger = logging.getLogger(__name__)


async def enrich_with_application_stats(
    benefits: List[Dict[str, Any]],
    store: ApplicationStore,
) -> List[Dict[str, Any]]:
    """
    Add ``application_details`` to each raw benefit.

    Lookups run concurrently; output order follows input order. Input
    records are not mutated.

    Args:
        benefits: Raw listing results from the content repository
        store: Application store to count against

    Returns:
        New list of benefit dicts with application counts attached
    """
    stats = await asyncio.gather(
        *(asyncio.to_thread(store.count_by_status, b.get("id")) for b in benefits)
    )

    logger.debug(f"Enriched {len(benefits)} benefits with application stats")

    return [
        {**benefit, "application_details": s.to_dict()}
        for benefit, s in zip(benefits, stats)
    ]
