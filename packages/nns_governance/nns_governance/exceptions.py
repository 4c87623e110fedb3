"""
NNS Governance Exceptions
"""

class GovernanceException(Exception):
    """Base exception for all governance query errors."""
    pass

class MalformedCommandError(GovernanceException):
    """Raised when command text does not match the !proposals grammar and strict parsing is on."""
    pass

class TransportError(GovernanceException):
    """Raised when a remote call to the governance canister cannot complete."""
    pass

class GovernanceTimeoutError(TransportError):
    """Raised when a remote call exceeds the configured request timeout."""
    pass

class ProposalNotFoundError(GovernanceException):
    """Raised when the ledger returns no detail for a listed proposal id."""

    def __init__(self, proposal_id: int):
        super().__init__(f"Proposal {proposal_id} not found")
        self.proposal_id = proposal_id

class ConfigurationError(GovernanceException):
    """Raised when the canister id or other settings are missing or malformed."""
    pass
