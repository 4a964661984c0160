"""
Error taxonomy for the benefits BPP.

Client errors (bad input, bad requester identity, unsupported domain) carry a
400 status and surface their message to the caller. Server errors carry a
generic public message; the underlying cause is logged and chained.
"""

from typing import Optional


class BenefitsError(Exception):
    """Base class for all benefits BPP errors."""

    status_code = 500
    public_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.public_message)

    @property
    def detail(self) -> str:
        """Message safe to return to the caller."""
        return self.public_message


class ClientError(BenefitsError):
    status_code = 400

    @property
    def detail(self) -> str:
        return str(self)


class InvalidInput(ClientError):
    """Malformed or non-collection data handed to the mapper."""


class InvalidRequesterIdentity(ClientError):
    """Missing or empty bap_id / bap_uri."""

    def __init__(self, message: str = "Invalid BAP ID or URI"):
        super().__init__(message)


class UnsupportedDomain(ClientError):
    """Search requested for a domain other than finance."""

    def __init__(self, domain: Optional[str] = None):
        super().__init__("Invalid domain provided")
        self.domain = domain


class UpstreamFetchFailure(BenefitsError):
    """Content repository or application store unreachable or erroring."""

    status_code = 502
    public_message = "Upstream service unavailable"


class InitializationFailed(BenefitsError):
    """
    Failure while composing the init response.

    ``stage`` is one of "fetch", "mapping" or "splice".
    """

    status_code = 500
    public_message = "Failed to initialize benefit"

    STAGES = ("fetch", "mapping", "splice")

    def __init__(self, stage: str, message: Optional[str] = None):
        if stage not in self.STAGES:
            raise ValueError(f"Unknown init stage: {stage}")
        super().__init__(message or f"{self.public_message} ({stage} stage)")
        self.stage = stage


class MissingConfiguration(BenefitsError):
    """Required configuration is missing or empty at startup."""

    def __init__(self, missing):
        self.missing = list(missing)
        super().__init__(
            "One or more required environment variables are missing or empty: "
            + ", ".join(self.missing)
        )
