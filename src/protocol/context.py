"""
Protocol context envelope.

Every response carries a fresh context: who asked (BAP), who answers (BPP),
which action this is, and new message/transaction identifiers.
"""

import logging
from typing import Any, Dict, Mapping, Optional, Union

from src.core.domain_models import RequesterIdentity
from src.core.time_utils import now_protocol_timestamp
from src.core.utils import new_message_id


logger = logging.getLogger(__name__)

DOMAIN = "onest:financial-support"
VERSION = "1.1.0"
TTL = "PT10M"

ACTIONS = ("on_search", "on_select", "on_init")


def build_context(
    action: str,
    requester: Union[RequesterIdentity, Mapping[str, Any], None],
    bpp_id: str,
    bpp_uri: str,
    transaction_id: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Build the context for one response.

    Args:
        action: Response action (on_search, on_select, on_init)
        requester: BAP identity of the caller, or the inbound context
            holding bap_id / bap_uri
        bpp_id: This platform's subscriber id
        bpp_uri: This platform's subscriber URI
        transaction_id: Continue an existing transaction; a new id is
            minted when omitted

    Returns:
        Context dict ready to embed in a protocol message
    """
    if action not in ACTIONS:
        logger.warning(f"Building context for unexpected action: {action}")

    if not isinstance(requester, RequesterIdentity):
        # Raw request context, or nothing at all
        requester = RequesterIdentity.from_context(requester)

    return {
        "domain": DOMAIN,
        "action": action,
        "version": VERSION,
        "bap_id": requester.bap_id,
        "bap_uri": requester.bap_uri,
        "bpp_id": bpp_id,
        "bpp_uri": bpp_uri,
        "transaction_id": transaction_id or new_message_id(),
        "message_id": new_message_id(),
        "timestamp": now_protocol_timestamp(),
        "ttl": TTL,
    }
