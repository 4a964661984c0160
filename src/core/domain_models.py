"""
Canonical domain models for the benefits BPP.

BenefitRecord is the typed view of a benefit (scholarship/grant) as returned
by the content repository. Nested collections are kept as the raw mappings
received so they can be passed through to protocol consumers losslessly.
"""

from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any, Mapping

from src.core.errors import InvalidInput, InvalidRequesterIdentity


NestedList = Optional[List[Dict[str, Any]]]


def _present(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


@dataclass
class ProvidingEntity:
    """Organisation offering a benefit."""
    name: Optional[str] = None
    address: Optional[Dict[str, Any]] = None
    contact_info: Optional[Dict[str, Any]] = None

    @classmethod
    def from_api(cls, data: Optional[Mapping[str, Any]]) -> Optional["ProvidingEntity"]:
        if not data:
            return None
        return cls(
            name=data.get("name"),
            address=data.get("address"),
            contact_info=data.get("contactInfo"),
        )


@dataclass
class BenefitRecord:
    """
    One benefit as stored in the content repository.

    Every field except the identifiers may be absent; each nested
    collection is independently optional.
    """
    # Identifiers
    id: Optional[Any] = None  # Repository's numeric id
    document_id: Optional[str] = None  # Display id, used as catalog item id

    # Core fields
    title: Optional[str] = None
    long_description: Optional[str] = None
    application_open_date: Optional[str] = None
    application_close_date: Optional[str] = None
    image_url: Optional[str] = None

    # Nested collections
    eligibility: NestedList = None
    documents: NestedList = None
    benefits: NestedList = None  # financial and non-monetary lines
    exclusions: NestedList = None
    sponsoring_entities: NestedList = None
    application_form: NestedList = None

    providing_entity: Optional[ProvidingEntity] = None

    # Untouched repository payload
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_api(cls, data: Any) -> "BenefitRecord":
        """
        Build a record from a content repository entry.

        Args:
            data: Mapping as returned under ``data`` by the repository

        Raises:
            InvalidInput: If ``data`` is not a mapping
        """
        if isinstance(data, cls):
            return data
        if not isinstance(data, Mapping):
            raise InvalidInput(f"Expected a benefit record, got {type(data).__name__}")

        return cls(
            id=data.get("id"),
            document_id=data.get("documentId"),
            title=data.get("title"),
            long_description=data.get("longDescription"),
            application_open_date=data.get("applicationOpenDate"),
            application_close_date=data.get("applicationCloseDate"),
            image_url=data.get("imageUrl"),
            eligibility=data.get("eligibility"),
            documents=data.get("documents"),
            benefits=data.get("benefits"),
            exclusions=data.get("exclusions"),
            sponsoring_entities=data.get("sponsoringEntities"),
            application_form=data.get("applicationForm"),
            providing_entity=ProvidingEntity.from_api(data.get("providingEntity")),
            raw=dict(data),
        )


@dataclass
class RequesterIdentity:
    """BAP (requester) identity taken from an inbound protocol context."""
    bap_id: str
    bap_uri: str

    def __post_init__(self):
        if not _present(self.bap_id) or not _present(self.bap_uri):
            raise InvalidRequesterIdentity()

    @classmethod
    def from_context(cls, context: Optional[Mapping[str, Any]]) -> "RequesterIdentity":
        """
        Extract and validate bap_id / bap_uri from a request context.

        Raises:
            InvalidRequesterIdentity: If either value is missing or blank
        """
        context = context if isinstance(context, Mapping) else {}
        return cls(bap_id=context.get("bap_id"), bap_uri=context.get("bap_uri"))


@dataclass
class ApplicationStats:
    """Application counts for one benefit, grouped by status."""
    applications_count: int = 0
    pending_applications_count: int = 0
    approved_applications_count: int = 0
    rejected_applications_count: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "applications_count": self.applications_count,
            "pending_applications_count": self.pending_applications_count,
            "approved_applications_count": self.approved_applications_count,
            "rejected_applications_count": self.rejected_applications_count,
        }
