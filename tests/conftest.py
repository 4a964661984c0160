"""Pytest configuration and shared fixtures.

Provides reusable test fixtures for:
- Sample benefit records as returned by Strapi
- Settings and a service wired to a mock content repository
- Protocol requests for search / select / init
"""

import copy

import pytest
from unittest.mock import MagicMock

from src.core.config import Settings
from src.services.benefits_service import BenefitsService
from src.storage.application_store import ApplicationStore


# =============================================================================
# Sample benefit records
# =============================================================================


MERIT_SCHOLARSHIP = {
    "id": 42,
    "documentId": "merit-2024",
    "title": "Merit Scholarship",
    "longDescription": "Support for meritorious students from low-income families.",
    "applicationOpenDate": "2024-06-01",
    "applicationCloseDate": "2024-07-31",
    "imageUrl": "https://cdn.example.org/merit.png",
    "eligibility": [
        {
            "type": "personal",
            "evidence": "caste-certificate",
            "description": "Applicant must belong to SC/ST category",
            "criteria": {"name": "caste", "condition": "in", "conditionValues": ["sc", "st"]},
        },
        {
            "type": "economical",
            "evidence": "income-certificate",
            "description": "Annual family income below ₹2,50,000",
        },
    ],
    "documents": [
        {"documentType": "incomeCertificate", "isRequired": True},
        {"documentType": "marksheet", "isRequired": False},
    ],
    "benefits": [
        {"__component": "benefit.financial-benefit", "title": "Tuition", "description": "₹12,000 per annum"},
        {"__component": "benefit.financial-benefit", "title": "Books", "description": "₹1,000 grant and ₹500 for stationery"},
        {"__component": "benefit.non-monetary-benefit", "title": "Mentoring", "description": "Monthly mentoring sessions"},
    ],
    "exclusions": [{"description": "Not available to students receiving other scholarships"}],
    "sponsoringEntities": [
        {"name": "State Education Trust", "type": "trust", "sponsorShare": "100%"},
    ],
    "providingEntity": {
        "name": "Pune Education Foundation",
        "address": {"city": "Pune", "state": "Maharashtra"},
        "contactInfo": {"email": "help@pef.example.org"},
    },
    "applicationForm": [
        {"type": "text", "name": "fullName", "label": "Full name", "required": True},
    ],
}

BARE_GRANT = {
    "id": 7,
    "documentId": "bare-grant",
    "title": "Travel Grant",
    "longDescription": "One-off travel support.",
    "applicationOpenDate": "2024-01-15T09:30:00.000Z",
    "applicationCloseDate": "2024-03-01T00:00:00.000Z",
    "providingEntity": {"name": "Another Provider"},
}


@pytest.fixture
def merit_scholarship():
    return copy.deepcopy(MERIT_SCHOLARSHIP)


@pytest.fixture
def bare_grant():
    return copy.deepcopy(BARE_GRANT)


# =============================================================================
# Settings and service
# =============================================================================


@pytest.fixture
def settings(tmp_path):
    return Settings(
        strapi_url="https://cms.example.org/api",
        strapi_token="secret-token",
        provider_url="https://provider.example.org",
        bpp_id="benefits-bpp.example.org",
        bpp_uri="https://benefits-bpp.example.org",
        database_url=str(tmp_path / "applications.db"),
    )


@pytest.fixture
def mock_client(merit_scholarship, bare_grant):
    """Content repository stub serving the two sample records."""
    records = {r["documentId"]: r for r in (merit_scholarship, bare_grant)}

    client = MagicMock()
    client.fetch_benefits.return_value = [merit_scholarship, bare_grant]
    client.fetch_benefit.side_effect = lambda benefit_id: copy.deepcopy(records.get(benefit_id))
    client.fetch_benefit_payload.side_effect = lambda benefit_id: {
        "data": copy.deepcopy(records.get(benefit_id)),
        "meta": {},
    }
    return client


@pytest.fixture
def application_store(settings):
    return ApplicationStore(settings.database_url)


@pytest.fixture
def service(settings, mock_client, application_store):
    return BenefitsService(settings, mock_client, application_store)


# =============================================================================
# Protocol requests
# =============================================================================


def _context(action, domain="finance", **overrides):
    context = {
        "domain": domain,
        "action": action,
        "version": "1.1.0",
        "bap_id": "bap.example.org",
        "bap_uri": "https://bap.example.org",
        "transaction_id": "txn-123",
        "message_id": "msg-1",
        "timestamp": "2024-06-10T10:00:00.000Z",
    }
    context.update(overrides)
    return context


@pytest.fixture
def search_request():
    return {
        "context": _context("search"),
        "message": {"intent": {"item": {"descriptor": {"name": "scholarship"}}}},
    }


@pytest.fixture
def select_request():
    return {
        "context": _context("select"),
        "message": {"order": {"items": [{"id": "merit-2024"}]}},
    }


@pytest.fixture
def init_request():
    return {
        "context": _context("init"),
        "message": {
            "order": {
                "items": [{"id": "merit-2024"}],
                "fulfillments": [{"customer": {"person": {"name": "Asha"}}}],
            }
        },
    }


@pytest.fixture
def make_context():
    return _context
