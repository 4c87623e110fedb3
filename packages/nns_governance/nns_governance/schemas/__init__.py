from .models import (
    ProposalSummary, ProjectedProposal, ProjectedResult,
    Message, MessageContent, ProviderResult
)

__all__ = [
    "ProposalSummary", "ProjectedProposal", "ProjectedResult",
    "Message", "MessageContent", "ProviderResult"
]
