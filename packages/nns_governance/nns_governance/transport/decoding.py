"""
Normalizes decoded Candid values from the governance canister into wire models.

Records decoded without a type annotation are keyed by field hash (``_<hash>``)
rather than by name, so every lookup accepts either form.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from ..exceptions import TransportError
from ..interfaces import ProposalDetail, ProposalHandle

_MISSING = object()


def candid_hash(name: str) -> int:
    """Field id used by Candid for a record label."""
    h = 0
    for byte in name.encode("utf-8"):
        h = (h * 223 + byte) % 2**32
    return h


def field(record: Any, name: str, default: Any = _MISSING) -> Any:
    if isinstance(record, dict):
        hashed = candid_hash(name)
        for key in (name, f"_{hashed}", hashed):
            if key in record:
                return record[key]
    if default is _MISSING:
        raise TransportError(f"Malformed governance response: missing field '{name}'")
    return default


def unwrap_opt(value: Any) -> Any:
    """Candid ``opt T`` decodes to ``[]`` or ``[T]``."""
    if isinstance(value, (list, tuple)):
        if not value:
            return None
        if len(value) == 1:
            return value[0]
        raise TransportError(f"Malformed governance response: opt with {len(value)} values")
    return value


def unwrap_reply(decoded: Sequence[Dict[str, Any]]) -> Any:
    """First return value of a decoded reply (``[{"type": ..., "value": ...}]``)."""
    if not decoded:
        raise TransportError("Malformed governance response: empty reply")
    first = decoded[0]
    if isinstance(first, dict) and "value" in first:
        return first["value"]
    return first


def _proposal_id(info: Dict[str, Any]) -> Optional[int]:
    ident = unwrap_opt(field(info, "id", None))
    if ident is None:
        return None
    return int(field(ident, "id"))


def _proposal_text(info: Dict[str, Any]) -> Dict[str, Optional[str]]:
    proposal = unwrap_opt(field(info, "proposal", None))
    if proposal is None:
        return {"title": None, "summary": None}
    return {
        "title": unwrap_opt(field(proposal, "title", None)),
        "summary": field(proposal, "summary", None),
    }


def proposal_info_to_handle(info: Dict[str, Any]) -> ProposalHandle:
    return ProposalHandle(id=_proposal_id(info), **_proposal_text(info))


def proposal_info_to_detail(info: Dict[str, Any]) -> ProposalDetail:
    return ProposalDetail(
        id=_proposal_id(info),
        topic=int(field(info, "topic")),
        status=int(field(info, "status")),
        proposal_timestamp_seconds=int(field(info, "proposal_timestamp_seconds", 0)),
        **_proposal_text(info),
    )


def decode_list_response(decoded: Sequence[Dict[str, Any]]) -> List[ProposalHandle]:
    response = unwrap_reply(decoded)
    infos = field(response, "proposal_info")
    if not isinstance(infos, (list, tuple)):
        raise TransportError("Malformed governance response: proposal_info is not a vector")
    return [proposal_info_to_handle(info) for info in infos]


def decode_info_response(decoded: Sequence[Dict[str, Any]]) -> Optional[ProposalDetail]:
    info = unwrap_opt(unwrap_reply(decoded))
    if info is None:
        return None
    return proposal_info_to_detail(info)
