from abc import ABC, abstractmethod
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

# ====== Wire models ====== #

class ListProposalsRequest(BaseModel):
    """Arguments of the canister's ``list_proposals`` method (ListProposalInfo)."""
    limit: int = Field(ge=0, le=2**32 - 1)
    exclude_topic: List[int] = Field(default_factory=list)
    include_status: List[int] = Field(default_factory=list)
    include_reward_status: List[int] = Field(default_factory=list)
    omit_large_fields: Optional[bool] = None
    before_proposal: Optional[int] = None
    include_all_manage_neuron_proposals: Optional[bool] = None

class ProposalHandle(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: Optional[int] = None
    title: Optional[str] = None
    summary: Optional[str] = None

class ProposalDetail(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: Optional[int] = None
    topic: int
    status: int
    proposal_timestamp_seconds: int = 0
    title: Optional[str] = None
    summary: Optional[str] = None

# ====== Interfaces ====== #

class GovernanceTransport(ABC):
    """One open connection to the governance canister."""

    @abstractmethod
    async def list_proposals(self, request: ListProposalsRequest) -> List[ProposalHandle]:
        pass

    @abstractmethod
    async def get_proposal_info(self, proposal_id: int) -> Optional[ProposalDetail]:
        pass

    async def close(self) -> None:
        pass
