"""
Tag group formatters for catalog items.

Each formatter turns one nested collection of a benefit record into a
displayable tag group, or None when the collection is missing or empty.
Every tag value is the JSON of the source element, so protocol consumers
can parse the source object back out.
"""

from typing import Any, Dict, Mapping, Optional, Sequence

from src.core.utils import capitalize_first, serialize_value


TagGroup = Dict[str, Any]
Collection = Optional[Sequence[Mapping[str, Any]]]


def _tag_item(element: Mapping[str, Any], descriptor: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "descriptor": descriptor,
        "value": serialize_value(element),
        "display": True,
    }


def _tag_group(code: str, name: str, items) -> TagGroup:
    return {
        "display": True,
        "descriptor": {"code": code, "name": name},
        "list": list(items),
    }


def format_eligibility_tags(eligibility: Collection) -> Optional[TagGroup]:
    """
    Eligibility criteria, one tag per criterion.

    Code is the criterion's evidence; name reads "<Type> - <evidence>".
    """
    if not eligibility:
        return None

    def descriptor(e):
        evidence = e.get("evidence")
        desc = {
            "code": evidence,
            "name": f"{capitalize_first(e.get('type') or '')} - {evidence or ''}",
        }
        if e.get("description") is not None:
            desc["short_desc"] = e["description"]
        return desc

    return _tag_group(
        "eligibility",
        "Eligibility",
        (_tag_item(e, descriptor(e)) for e in eligibility),
    )


def format_document_tags(documents: Collection) -> Optional[TagGroup]:
    """Documents, tagged mandatory or optional by their isRequired flag."""
    if not documents:
        return None

    def descriptor(doc):
        if doc.get("isRequired"):
            return {"code": "mandatory-doc", "name": "Mandatory Document"}
        return {"code": "optional-doc", "name": "Optional Document"}

    return _tag_group(
        "required-docs",
        "Required Documents",
        (_tag_item(doc, descriptor(doc)) for doc in documents),
    )


def format_benefit_tags(benefits: Collection) -> Optional[TagGroup]:
    """Financial and non-monetary benefit lines, named by their title."""
    if not benefits:
        return None

    return _tag_group(
        "benefits",
        "Benefits",
        (_tag_item(b, {"code": "financial", "name": b.get("title")}) for b in benefits),
    )


def format_exclusion_tags(exclusions: Collection) -> Optional[TagGroup]:
    if not exclusions:
        return None

    return _tag_group(
        "exclusions",
        "Exclusions",
        (
            _tag_item(e, {"code": "ineligibility", "name": "Ineligibility Condition"})
            for e in exclusions
        ),
    )


def format_sponsoring_entity_tags(sponsoring_entities: Collection) -> Optional[TagGroup]:
    if not sponsoring_entities:
        return None

    return _tag_group(
        "sponsoringEntities",
        "Sponsoring Entities",
        (
            _tag_item(s, {"code": "sponsoringEntities", "name": "Entities Sponsoring Benefits"})
            for s in sponsoring_entities
        ),
    )


def format_application_form_tags(application_form: Collection) -> Optional[TagGroup]:
    if not application_form:
        return None

    return _tag_group(
        "applicationForm",
        "Application Form",
        (
            _tag_item(f, {"code": "applicationForm", "name": "Application Form"})
            for f in application_form
        ),
    )
