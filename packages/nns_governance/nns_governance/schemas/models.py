from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional

from ..registry import PROPOSAL_STATUSES, TOPICS

class ProposalSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=0, le=2**64 - 1)
    title: str = ""
    summary: str = ""
    topic: int
    status: int
    timestamp_seconds: int = Field(default=0, ge=0, le=2**64 - 1)

    @property
    def topic_name(self) -> str:
        return TOPICS.describe(self.topic)

    @property
    def status_name(self) -> str:
        return PROPOSAL_STATUSES.describe(self.status)

class ProjectedProposal(BaseModel):
    id: str
    title: str
    summary: str
    topic: str
    status: str
    timestamp: int
    topic_name: str
    status_name: str

class ProjectedResult(BaseModel):
    proposals: List[ProjectedProposal] = Field(default_factory=list)

class MessageContent(BaseModel):
    text: Optional[str] = None
    source: Optional[str] = None

class Message(BaseModel):
    content: MessageContent = Field(default_factory=MessageContent)

class ProviderResult(BaseModel):
    text: str = ""
    values: Dict[str, Any] = Field(default_factory=dict)
    data: Dict[str, Any] = Field(default_factory=dict)
