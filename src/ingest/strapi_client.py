"""
Client for the Strapi content repository holding benefit records.

This module handles:
1. Fetching every benefit with its nested relations populated
2. Fetching a single benefit by id
3. Paginated/filtered listing through the content-manager API
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from src.core.errors import UpstreamFetchFailure


logger = logging.getLogger(__name__)


DEFAULT_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}

DEFAULT_TIMEOUT = 30

# Relations to populate on every benefit read
POPULATE_EXTENSION = (
    "?populate[tags]=*"
    "&populate[benefits][on][benefit.financial-benefit][populate]=*"
    "&populate[benefits][on][benefit.non-monetary-benefit][populate]=*"
    "&populate[exclusions]=*"
    "&populate[references]=*"
    "&populate[providingEntity][populate][address]=*"
    "&populate[providingEntity][populate][contactInfo]=*"
    "&populate[sponsoringEntities][populate][address]=*"
    "&populate[sponsoringEntities][populate][contactInfo]=*"
    "&populate[eligibility][populate][criteria]=*"
    "&populate[documents]=*"
    "&populate[applicationProcess]=*"
    "&populate[applicationForm][populate][options]=*"
)

LISTING_PATH = "/content-manager/collection-types/api::benefit.benefit"


class StrapiClient:
    """
    Read-only access to benefits in Strapi.

    Usage:
        client = StrapiClient("https://cms.example.org/api", token)
        benefits = client.fetch_benefits()
        benefit = client.fetch_benefit("abc123")
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        session: Optional[requests.Session] = None,
        timeout: int = DEFAULT_TIMEOUT,
    ):
        """
        Initialize client.

        Args:
            base_url: Strapi API base URL (no trailing slash needed)
            token: API token used for protocol reads
            session: Optional pre-configured session
            timeout: Per-request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(DEFAULT_HEADERS)

    def fetch_benefits(self) -> List[Dict[str, Any]]:
        """
        Fetch all benefits with nested relations.

        Returns:
            List of raw benefit records (the response's ``data``)
        """
        payload = self._get(f"{self.base_url}/benefits{POPULATE_EXTENSION}", self._bearer())
        data = payload.get("data")
        if data is None:
            return []
        if not isinstance(data, list):
            logger.error(f"Expected a list of benefits, got {type(data).__name__}")
            raise UpstreamFetchFailure("Content repository returned a malformed benefit list")
        return data

    def fetch_benefit(self, benefit_id: str) -> Optional[Dict[str, Any]]:
        """
        Fetch one benefit with nested relations.

        Args:
            benefit_id: Benefit documentId

        Returns:
            Raw benefit record, or None if the payload carries no data
        """
        return self.fetch_benefit_payload(benefit_id).get("data")

    def fetch_benefit_payload(self, benefit_id: str) -> Dict[str, Any]:
        """Full repository response for one benefit (``data`` + ``meta``)."""
        return self._get(f"{self.base_url}/benefits/{benefit_id}{POPULATE_EXTENSION}", self._bearer())

    def list_benefits(self, query: str, authorization: Optional[str] = None) -> Dict[str, Any]:
        """
        List benefits through the content-manager API.

        Args:
            query: Pre-encoded query string (page, pageSize, sort, locale, filters)
            authorization: Caller's Authorization header, forwarded as-is

        Returns:
            Full response payload (``results`` + ``pagination``)
        """
        headers = {"Authorization": authorization} if authorization else {}
        return self._get(f"{self.base_url}{LISTING_PATH}?{query}", headers)

    def _bearer(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}

    def _get(self, url: str, headers: Dict[str, str]) -> Dict[str, Any]:
        try:
            response = self.session.get(url, headers=headers, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as e:
            logger.error(f"Failed to fetch {url}: {e}")
            raise UpstreamFetchFailure(f"Content repository request failed: {e}") from e
        except ValueError as e:
            logger.error(f"Invalid JSON from {url}: {e}")
            raise UpstreamFetchFailure("Content repository returned invalid JSON") from e

        logger.debug(f"Fetched {url}")
        return payload if isinstance(payload, dict) else {}
