"""
Governance transport over the Internet Computer HTTP interface.

Arguments are Candid-encoded with ic-py and sent as anonymous queries; replies
are decoded without a type annotation and normalized in ``decoding``.
"""

from typing import Any, Dict, List, Optional

from ic.agent import Agent
from ic.candid import Types, encode
from ic.client import Client
from ic.identity import Identity

from ..config import GovernanceConfig
from ..exceptions import TransportError
from ..interfaces import GovernanceTransport, ListProposalsRequest, ProposalDetail, ProposalHandle
from .decoding import decode_info_response, decode_list_response

PROPOSAL_ID = Types.Record({"id": Types.Nat64})

LIST_PROPOSAL_INFO = Types.Record({
    "include_reward_status": Types.Vec(Types.Int32),
    "omit_large_fields": Types.Opt(Types.Bool),
    "before_proposal": Types.Opt(PROPOSAL_ID),
    "limit": Types.Nat32,
    "exclude_topic": Types.Vec(Types.Int32),
    "include_all_manage_neuron_proposals": Types.Opt(Types.Bool),
    "include_status": Types.Vec(Types.Int32),
})


def _opt(value: Any) -> List[Any]:
    return [] if value is None else [value]


def encode_list_request(request: ListProposalsRequest) -> bytes:
    value: Dict[str, Any] = {
        "include_reward_status": list(request.include_reward_status),
        "omit_large_fields": _opt(request.omit_large_fields),
        "before_proposal": _opt(
            None if request.before_proposal is None else {"id": request.before_proposal}
        ),
        "limit": request.limit,
        "exclude_topic": list(request.exclude_topic),
        "include_all_manage_neuron_proposals": _opt(request.include_all_manage_neuron_proposals),
        "include_status": list(request.include_status),
    }
    return encode([{"type": LIST_PROPOSAL_INFO, "value": value}])


class IcpGovernanceTransport(GovernanceTransport):
    def __init__(self, canister_id: str, host: str):
        self.canister_id = canister_id
        self.host = host
        self.agent = Agent(Identity(anonymous=True), Client(url=host))

    @classmethod
    def from_config(cls, config: GovernanceConfig) -> "IcpGovernanceTransport":
        return cls(canister_id=config.require_canister_id(), host=config.host)

    async def list_proposals(self, request: ListProposalsRequest) -> List[ProposalHandle]:
        decoded = await self._query("list_proposals", encode_list_request(request))
        return decode_list_response(decoded)

    async def get_proposal_info(self, proposal_id: int) -> Optional[ProposalDetail]:
        arg = encode([{"type": Types.Nat64, "value": proposal_id}])
        decoded = await self._query("get_proposal_info", arg)
        return decode_info_response(decoded)

    async def _query(self, method: str, arg: bytes) -> Any:
        decoded = await self.agent.query_raw_async(self.canister_id, method, arg)
        # ic-py hands back the reject message as a plain string instead of raising
        if isinstance(decoded, str):
            raise TransportError(f"{method} rejected: {decoded}")
        return decoded
