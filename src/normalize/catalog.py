"""
Mapper from benefit records to protocol catalogs.

Converts BenefitRecord(s) → one catalog with a single unified provider
holding one item per benefit, wrapped with a protocol context.
"""

import asyncio
import copy
import logging
from typing import Any, Dict, List, Mapping, Sequence, Union

from src.core.domain_models import BenefitRecord
from src.core.errors import InvalidInput
from src.core.money import total_benefit_value
from src.core.time_utils import parse_repository_date, to_protocol_timestamp
from src.normalize.tags import (
    format_eligibility_tags,
    format_document_tags,
    format_benefit_tags,
    format_exclusion_tags,
    format_sponsoring_entity_tags,
    format_application_form_tags,
)


logger = logging.getLogger(__name__)

CATALOG_NAME = "Protean DSEP Scholarships and Grants BPP Platform"
PROVIDER_ID = "PROVIDER_UNIFIED"
CURRENCY = "INR"

PROVIDER_CATEGORIES = [
    {
        "id": "CAT_SCHOLARSHIP",
        "descriptor": {"code": "scholarship", "name": "Scholarship"},
    }
]

PROVIDER_FULFILLMENTS = [{"id": "FULFILL_UNIFIED", "tracking": False}]

PROVIDER_LOCATIONS = [
    {
        "id": "L1",
        "city": {"name": "Pune", "code": "std:020"},
        "state": {"name": "Maharashtra", "code": "MH"},
    }
]


async def map_benefits(
    records: Sequence[Union[BenefitRecord, Mapping[str, Any]]],
    context: Dict[str, Any],
) -> Dict[str, Any]:
    """
    Map benefit records to a full protocol message.

    Records are mapped concurrently; item order follows input order.

    Args:
        records: Benefit records (typed or raw repository mappings)
        context: Protocol context for the response

    Returns:
        {"context": ..., "message": {"catalog": ...}}

    Raises:
        InvalidInput: If ``records`` is not a list of benefit records
    """
    if not isinstance(records, (list, tuple)):
        raise InvalidInput("Expected an array of scholarships")

    benefits = [BenefitRecord.from_api(r) for r in records]
    items = await asyncio.gather(*(map_benefit(b) for b in benefits))

    logger.debug(f"Mapped {len(items)} benefits for {context.get('action')}")

    return {
        "context": context,
        "message": {
            "catalog": {
                "descriptor": {"name": CATALOG_NAME},
                "providers": [build_unified_provider(benefits, list(items))],
            }
        },
    }


async def map_benefit(benefit: BenefitRecord) -> Dict[str, Any]:
    """
    Map one benefit to a catalog item.

    The six tag groups and the price total are computed independently;
    the item is only built once all of them are done.
    """
    (
        eligibility_tags,
        document_tags,
        benefit_tags,
        exclusion_tags,
        sponsoring_entity_tags,
        application_form_tags,
        price_value,
    ) = await asyncio.gather(
        asyncio.to_thread(format_eligibility_tags, benefit.eligibility),
        asyncio.to_thread(format_document_tags, benefit.documents),
        asyncio.to_thread(format_benefit_tags, benefit.benefits),
        asyncio.to_thread(format_exclusion_tags, benefit.exclusions),
        asyncio.to_thread(format_sponsoring_entity_tags, benefit.sponsoring_entities),
        asyncio.to_thread(format_application_form_tags, benefit.application_form),
        asyncio.to_thread(total_benefit_value, benefit.benefits),
    )

    tags = [
        group for group in (
            eligibility_tags,
            document_tags,
            benefit_tags,
            exclusion_tags,
            sponsoring_entity_tags,
            application_form_tags,
        )
        if group is not None
    ]

    return {
        "id": benefit.document_id,
        "descriptor": {
            "name": benefit.title,
            "long_desc": benefit.long_description,
        },
        "price": {
            "currency": CURRENCY,
            "value": price_value,
        },
        "time": {
            "range": {
                "start": _format_date(benefit.application_open_date),
                "end": _format_date(benefit.application_close_date),
            }
        },
        "rateable": False,
        "tags": tags,
    }


def build_unified_provider(
    benefits: List[BenefitRecord],
    items: List[Dict[str, Any]],
) -> Dict[str, Any]:
    """
    Wrap all items under one synthetic provider.

    The provider name and image come from the first benefit only.
    """
    first = benefits[0] if benefits else None

    name = "Unknown Provider"
    if first and first.providing_entity and first.providing_entity.name:
        name = first.providing_entity.name

    images = [{"url": first.image_url}] if first and first.image_url else []

    return {
        "id": PROVIDER_ID,
        "descriptor": {
            "name": name,
            "short_desc": "Multiple scholarships offered",
            "images": images,
        },
        "categories": copy.deepcopy(PROVIDER_CATEGORIES),
        "fulfillments": copy.deepcopy(PROVIDER_FULFILLMENTS),
        "locations": copy.deepcopy(PROVIDER_LOCATIONS),
        "items": items,
    }


def _format_date(value):
    """Repository date → protocol timestamp; missing dates stay None."""
    try:
        parsed = parse_repository_date(value)
    except (ValueError, OverflowError) as e:
        raise InvalidInput(f"Invalid application date: {value!r}") from e
    return to_protocol_timestamp(parsed) if parsed else None
