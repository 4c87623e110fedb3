"""
Proposal Query Engine
Turns a !proposals command into ledger calls, filters the results and
projects them for the host.
"""

import asyncio
import time
from typing import Callable, List, Optional, Sequence

from .client import GovernanceClient
from .command import CommandParser, QueryRequest
from .exceptions import GovernanceException, MalformedCommandError, ProposalNotFoundError
from .interfaces import ListProposalsRequest, ProposalDetail, ProposalHandle
from .logger import get_logger
from .projection import project
from .registry import TOPICS, EnumRegistry
from .schemas.models import ProjectedResult, ProposalSummary

ClientFactory = Callable[[], GovernanceClient]


class ProposalQueryEngine:
    def __init__(self,
                 client_factory: ClientFactory,
                 parser: Optional[CommandParser] = None,
                 strict_commands: bool = False,
                 detail_concurrency: int = 1,
                 omit_large_fields: Optional[bool] = None,
                 topics: EnumRegistry = TOPICS):
        """
        Args:
            client_factory: Returns a client on a fresh connection; called once per query.
            parser: Command parser, defaults to ``CommandParser()``.
            strict_commands: Raise MalformedCommandError on unrecognized text
                instead of running the default query.
            detail_concurrency: Maximum in-flight get_proposal_info calls.
            omit_large_fields: Forwarded to list_proposals when set.
            topics: Registry whose codes make up the topic exclusion list.
        """
        if detail_concurrency < 1:
            raise ValueError("detail_concurrency must be at least 1")
        self.logger = get_logger(self.__class__.__name__)
        self.client_factory = client_factory
        self.parser = parser or CommandParser()
        self.strict_commands = strict_commands
        self.detail_concurrency = detail_concurrency
        self.omit_large_fields = omit_large_fields
        self.topics = topics

    def parse(self, command_text: Optional[str]) -> QueryRequest:
        request = self.parser.parse(command_text)
        if request is not None:
            return request
        if self.strict_commands:
            raise MalformedCommandError(f"Unrecognized command: {command_text!r}")
        self.logger.info(
            "Command not recognized, running default query",
            extra={"command": command_text},
        )
        return QueryRequest(limit=self.parser.default_limit)

    async def execute(self, command_text: Optional[str]) -> ProjectedResult:
        return await self.query(self.parse(command_text))

    async def query(self, request: QueryRequest) -> ProjectedResult:
        return project(await self.fetch_summaries(request))

    def build_list_request(self, request: QueryRequest) -> ListProposalsRequest:
        """
        Translate engine filters into the ledger's filter dialect.

        The ledger can only exclude topics, so a topic filter becomes "every
        registered topic except this one". Status filtering is inclusion-based.
        """
        exclude_topic: List[int] = []
        if request.topic_filter is not None:
            exclude_topic = [code for code in self.topics.codes() if code != request.topic_filter]
        include_status: List[int] = []
        if request.status_filter is not None:
            include_status = [request.status_filter]
        return ListProposalsRequest(
            limit=request.limit,
            exclude_topic=exclude_topic,
            include_status=include_status,
            omit_large_fields=self.omit_large_fields,
        )

    async def fetch_summaries(self, request: QueryRequest) -> List[ProposalSummary]:
        log_extra = {
            "limit": request.limit,
            "topic_filter": request.topic_filter,
            "status_filter": request.status_filter,
        }
        self.logger.info("Querying governance proposals", extra=log_extra)
        started = time.perf_counter()

        try:
            async with self.client_factory() as client:
                handles = await client.list_proposals(self.build_list_request(request))
                details = await self._fetch_details(client, handles)
        except GovernanceException as e:
            self.logger.error(
                f"Proposal query failed: {str(e)}",
                extra=log_extra,
                exc_info=True
            )
            raise

        summaries = [
            _to_summary(handle, detail)
            for handle, detail in zip(handles, details)
            if detail is not None and _matches(detail, request)
        ]
        self.logger.info(
            f"Returning {len(summaries)} of {len(handles)} listed proposals",
            extra={
                **log_extra,
                "result_count": len(summaries),
                "duration_ms": round((time.perf_counter() - started) * 1000, 2),
            },
        )
        return summaries

    async def _fetch_details(
        self, client: GovernanceClient, handles: Sequence[ProposalHandle]
    ) -> List[Optional[ProposalDetail]]:
        if self.detail_concurrency == 1 or len(handles) < 2:
            return [await self._fetch_detail(client, handle) for handle in handles]

        semaphore = asyncio.Semaphore(self.detail_concurrency)

        async def bounded(handle: ProposalHandle) -> Optional[ProposalDetail]:
            async with semaphore:
                return await self._fetch_detail(client, handle)

        tasks = [asyncio.ensure_future(bounded(handle)) for handle in handles]
        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    async def _fetch_detail(
        self, client: GovernanceClient, handle: ProposalHandle
    ) -> Optional[ProposalDetail]:
        if handle.id is None:
            self.logger.warning("Skipping listed proposal without an id")
            return None
        try:
            return await client.get_proposal_info(handle.id)
        except ProposalNotFoundError:
            self.logger.warning(
                f"No detail for proposal {handle.id}, skipping",
                extra={"proposal_id": handle.id},
            )
            return None


def _matches(detail: ProposalDetail, request: QueryRequest) -> bool:
    if request.topic_filter is not None and detail.topic != request.topic_filter:
        return False
    if request.status_filter is not None and detail.status != request.status_filter:
        return False
    return True


def _to_summary(handle: ProposalHandle, detail: ProposalDetail) -> ProposalSummary:
    return ProposalSummary(
        id=handle.id,
        title=handle.title or detail.title or "",
        summary=handle.summary or detail.summary or "",
        topic=detail.topic,
        status=detail.status,
        timestamp_seconds=detail.proposal_timestamp_seconds,
    )
