import asyncio
from typing import Dict, List, Optional, Set

import pytest

from nns_governance import GovernanceConfig, GovernanceContainer
from nns_governance.interfaces import (
    GovernanceTransport, ListProposalsRequest, ProposalDetail, ProposalHandle
)
from nns_governance.registry import ProposalStatus, Topic


class FakeGovernanceTransport(GovernanceTransport):
    """In-memory ledger snapshot applying the canister's own filter dialect."""

    def __init__(
        self,
        proposals: List[ProposalDetail],
        honor_topic_exclusion: bool = True,
        missing_ids: Optional[Set[int]] = None,
        fail_on_id: Optional[int] = None,
        delay: float = 0.0,
    ):
        self.proposals = proposals
        self.honor_topic_exclusion = honor_topic_exclusion
        self.missing_ids = missing_ids or set()
        self.fail_on_id = fail_on_id
        self.delay = delay
        self.list_requests: List[ListProposalsRequest] = []
        self.info_requests: List[int] = []
        self.closed = False

    async def list_proposals(self, request: ListProposalsRequest) -> List[ProposalHandle]:
        self.list_requests.append(request)
        selected = []
        for p in self.proposals:
            if self.honor_topic_exclusion and p.topic in request.exclude_topic:
                continue
            if request.include_status and p.status not in request.include_status:
                continue
            selected.append(ProposalHandle(id=p.id, title=p.title, summary=p.summary))
        return selected[:request.limit]

    async def get_proposal_info(self, proposal_id: int) -> Optional[ProposalDetail]:
        self.info_requests.append(proposal_id)
        if self.delay:
            await asyncio.sleep(self.delay)
        if proposal_id == self.fail_on_id:
            raise ConnectionError("connection reset by peer")
        if proposal_id in self.missing_ids:
            return None
        return next((p for p in self.proposals if p.id == proposal_id), None)

    async def close(self) -> None:
        self.closed = True


def _proposal(pid: int, topic: int, status: int) -> ProposalDetail:
    return ProposalDetail(
        id=pid,
        topic=topic,
        status=status,
        proposal_timestamp_seconds=1_700_000_000 + pid * 600,
        title=f"Proposal {pid}",
        summary=f"Summary for proposal {pid}",
    )


_TOPIC_CYCLE = [
    Topic.IC_OS_VERSION_ELECTION,
    Topic.PROTOCOL_CANISTER_MANAGEMENT,
    Topic.SUBNET_MANAGEMENT,
    Topic.IC_OS_VERSION_DEPLOYMENT,
    Topic.NODE_ADMIN,
    Topic.GOVERNANCE,
]
_STATUS_CYCLE = [
    ProposalStatus.EXECUTED,
    ProposalStatus.OPEN,
    ProposalStatus.EXECUTED,
    ProposalStatus.REJECTED,
    ProposalStatus.ADOPTED,
    ProposalStatus.FAILED,
    ProposalStatus.EXECUTED,
]


def build_snapshot(count: int = 60) -> List[ProposalDetail]:
    """Newest first, like list_proposals."""
    return [
        _proposal(
            pid,
            int(_TOPIC_CYCLE[pid % len(_TOPIC_CYCLE)]),
            int(_STATUS_CYCLE[pid % len(_STATUS_CYCLE)]),
        )
        for pid in range(130_000 + count, 130_000, -1)
    ]


@pytest.fixture()
def snapshot() -> List[ProposalDetail]:
    return build_snapshot()


@pytest.fixture()
def transports() -> List[FakeGovernanceTransport]:
    return []


@pytest.fixture()
def make_container(snapshot, transports):
    def _make(config: Optional[GovernanceConfig] = None, **transport_options) -> GovernanceContainer:
        def _factory(_cfg, _container):
            transport = FakeGovernanceTransport(snapshot, **transport_options)
            transports.append(transport)
            return transport

        config = config or GovernanceConfig(canister_id="rrkah-fqaaa-aaaaa-aaaaq-cai", transport="fake")
        return GovernanceContainer(config, overrides={"fake": _factory})

    return _make


@pytest.fixture()
def engine(make_container):
    return make_container().build_engine()
