"""
Governance Client
Narrow facade over the canister's list_proposals / get_proposal_info methods.
"""

import asyncio
from typing import Awaitable, List, TypeVar

from .exceptions import GovernanceTimeoutError, ProposalNotFoundError, TransportError
from .interfaces import GovernanceTransport, ListProposalsRequest, ProposalDetail, ProposalHandle
from .logger import get_logger

T = TypeVar("T")


class GovernanceClient:
    def __init__(self, transport: GovernanceTransport, timeout: float = 30.0):
        self.logger = get_logger(self.__class__.__name__)
        self.transport = transport
        self.timeout = timeout

    async def list_proposals(self, request: ListProposalsRequest) -> List[ProposalHandle]:
        self.logger.info(
            f"Listing proposals (limit={request.limit})",
            extra={"limit": request.limit},
        )
        return await self._call("list_proposals", self.transport.list_proposals(request))

    async def get_proposal_info(self, proposal_id: int) -> ProposalDetail:
        """
        Fetch the full record for one proposal.

        Raises:
            ProposalNotFoundError: If the ledger has no detail for ``proposal_id``.
            TransportError: If the call fails or times out.
        """
        detail = await self._call(
            "get_proposal_info", self.transport.get_proposal_info(proposal_id)
        )
        if detail is None:
            raise ProposalNotFoundError(proposal_id)
        return detail

    async def close(self) -> None:
        await self.transport.close()

    async def __aenter__(self) -> "GovernanceClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def _call(self, method: str, call: Awaitable[T]) -> T:
        try:
            return await asyncio.wait_for(call, timeout=self.timeout)
        except asyncio.TimeoutError as e:
            raise GovernanceTimeoutError(
                f"{method} did not complete within {self.timeout}s"
            ) from e
        except TransportError:
            raise
        except Exception as e:
            raise TransportError(f"{method} failed: {e}") from e
