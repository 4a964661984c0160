"""
Protocol actions and listing reads over benefits.

search / select / init answer network requests with catalogs built from
the content repository. get_benefits / get_benefit_by_id are the plain
listing reads used by the provider UI.
"""

import asyncio
import logging
from typing import Any, Dict, Mapping, Optional

from src.core.config import Settings
from src.core.domain_models import RequesterIdentity
from src.core.errors import (
    InitializationFailed,
    InvalidInput,
    UnsupportedDomain,
)
from src.core.utils import build_query_string
from src.ingest.strapi_client import StrapiClient
from src.normalize.catalog import map_benefits
from src.protocol.context import build_context
from src.services.application_stats import enrich_with_application_stats
from src.storage.application_store import ApplicationStore


logger = logging.getLogger(__name__)

FINANCE_DOMAIN = "finance"

# Provider fields copied into an init order
ORDER_PROVIDER_FIELDS = ("id", "descriptor", "rateable", "locations", "categories")

LISTING_DEFAULTS = {
    "page": "1",
    "pageSize": "100",
    "sort": "createdAt:desc",
    "locale": "en",
}


class BenefitsService:
    """
    Entry points for the benefits BPP.

    Each call is independent: the requester identity travels with the
    request and is never stored on the service.

    Usage:
        service = BenefitsService.from_settings(Settings.from_env().validate())
        response = await service.search(request)
    """

    def __init__(self, settings: Settings, client: StrapiClient, store: ApplicationStore):
        self.settings = settings
        self.client = client
        self.store = store

    @classmethod
    def from_settings(cls, settings: Settings) -> "BenefitsService":
        return cls(
            settings=settings,
            client=StrapiClient(settings.strapi_url, settings.strapi_token),
            store=ApplicationStore(settings.database_url),
        )

    # ------------------------------------------------------------------
    # Protocol actions
    # ------------------------------------------------------------------

    async def search(self, request: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Answer a search with the full benefit catalog.

        Raises:
            UnsupportedDomain: If context.domain is not "finance"
            InvalidRequesterIdentity: If bap_id / bap_uri are missing
            UpstreamFetchFailure: If the content repository fails
        """
        context = _request_context(request)
        if context.get("domain") != FINANCE_DOMAIN:
            raise UnsupportedDomain(context.get("domain"))

        requester = RequesterIdentity.from_context(context)

        records = await asyncio.to_thread(self.client.fetch_benefits)
        logger.info(f"search: {len(records)} benefits for {requester.bap_id}")

        return await map_benefits(records, self._context("on_search", requester, context))

    async def select(self, request: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Answer a select with a catalog holding the one selected benefit.

        Raises:
            InvalidRequesterIdentity: If bap_id / bap_uri are missing
            InvalidInput: If no item id is given or the benefit does not exist
            UpstreamFetchFailure: If the content repository fails
        """
        context = _request_context(request)
        requester = RequesterIdentity.from_context(context)

        benefit_id = _selected_item_id(request)
        record = await asyncio.to_thread(self.client.fetch_benefit, benefit_id)
        if record is None:
            raise InvalidInput(f"Benefit not found: {benefit_id}")

        logger.info(f"select: benefit {benefit_id} for {requester.bap_id}")

        return await map_benefits([record], self._context("on_select", requester, context))

    async def init(self, request: Dict[str, Any]) -> Dict[str, Any]:
        """
        Answer an init by returning the request's order completed with the
        provider, the item and an application form (xinput) to fill in.

        The request object itself is updated and returned.

        Raises:
            InvalidRequesterIdentity: If bap_id / bap_uri are missing
            InitializationFailed: With ``stage`` set to fetch, mapping or
                splice, wrapping the underlying error
        """
        context = _request_context(request)
        requester = RequesterIdentity.from_context(context)

        try:
            benefit_id = _selected_item_id(request)
            record = await asyncio.to_thread(self.client.fetch_benefit, benefit_id)
            if record is None:
                raise InvalidInput(f"Benefit not found: {benefit_id}")
        except Exception as e:
            logger.error(f"init: fetch failed: {e}", exc_info=True)
            raise InitializationFailed("fetch") from e

        try:
            mapped = await map_benefits([record], self._context("on_init", requester, context))
        except Exception as e:
            logger.error(f"init: mapping failed for benefit {benefit_id}: {e}", exc_info=True)
            raise InitializationFailed("mapping") from e

        try:
            provider = mapped["message"]["catalog"]["providers"][0]
            items = provider["items"]
            items[0]["xinput"] = self.build_xinput(benefit_id)

            order = request["message"]["order"]
            request["message"]["order"] = {
                **order,
                "providers": [
                    {key: provider[key] for key in ORDER_PROVIDER_FIELDS if key in provider}
                ],
                "items": items,
            }
            request["context"] = {
                **context,
                **mapped["context"],
                "action": "on_init",
            }
        except Exception as e:
            logger.error(f"init: splicing failed for benefit {benefit_id}: {e}", exc_info=True)
            raise InitializationFailed("splice") from e

        logger.info(f"init: benefit {benefit_id} for {requester.bap_id}")
        return request

    def build_xinput(self, benefit_id: str) -> Dict[str, Any]:
        """Application form descriptor hosted by the provider UI."""
        return {
            "head": {
                "descriptor": {"name": "Application Form"},
                "index": {"min": 0, "cur": 0, "max": 1},
                "headings": ["Personal Details"],
            },
            "form": {
                "url": f"{self.settings.provider_url.rstrip('/')}/benefit/apply/{benefit_id}",
                "mime_type": "text/html",
                "resubmit": False,
            },
            "required": True,
        }

    # ------------------------------------------------------------------
    # Listing reads
    # ------------------------------------------------------------------

    async def get_benefits(
        self,
        body: Optional[Mapping[str, Any]] = None,
        authorization: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        List benefits with their application counts.

        Args:
            body: Optional page, pageSize, sort, locale and filters
            authorization: Caller's Authorization header, forwarded to Strapi

        Returns:
            Repository payload; each result gains ``application_details``
        """
        body = body or {}
        params = {key: body.get(key) or default for key, default in LISTING_DEFAULTS.items()}
        params["filters"] = body.get("filters") or {}

        payload = await asyncio.to_thread(
            self.client.list_benefits, build_query_string(params), authorization
        )

        results = payload.get("results") or []
        if results:
            payload["results"] = await enrich_with_application_stats(results, self.store)

        return payload

    async def get_benefit_by_id(self, benefit_id: str) -> Dict[str, Any]:
        """Raw repository payload for one benefit."""
        return await asyncio.to_thread(self.client.fetch_benefit_payload, benefit_id)

    def _context(
        self,
        action: str,
        requester: RequesterIdentity,
        inbound: Mapping[str, Any],
    ) -> Dict[str, Any]:
        return build_context(
            action,
            requester,
            self.settings.bpp_id,
            self.settings.bpp_uri,
            transaction_id=inbound.get("transaction_id"),
        )


def _request_context(request: Any) -> Dict[str, Any]:
    if not isinstance(request, Mapping):
        raise InvalidInput("Request body must be an object")
    context = request.get("context")
    return context if isinstance(context, dict) else {}


def _selected_item_id(request: Mapping[str, Any]) -> str:
    """Benefit id at message.order.items[0].id."""
    try:
        benefit_id = request["message"]["order"]["items"][0]["id"]
    except (KeyError, IndexError, TypeError) as e:
        raise InvalidInput("Missing message.order.items[0].id") from e
    if benefit_id is None or str(benefit_id).strip() == "":
        raise InvalidInput("Missing message.order.items[0].id")
    return str(benefit_id)
