# NNS Governance package

from .command import CommandParser, QueryRequest
from .config import GovernanceConfig
from .container import GovernanceContainer
from .engine import ProposalQueryEngine
from .plugin import GovernancePlugin, GovernanceProvider
from .registry import PROPOSAL_STATUSES, TOPICS, ProposalStatus, Topic

__all__ = [
    "CommandParser",
    "QueryRequest",
    "GovernanceConfig",
    "GovernanceContainer",
    "ProposalQueryEngine",
    "GovernancePlugin",
    "GovernanceProvider",
    "PROPOSAL_STATUSES",
    "TOPICS",
    "ProposalStatus",
    "Topic",
]

__version__ = "0.1.0"
