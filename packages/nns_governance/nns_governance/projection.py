"""
Result Projection
Maps proposal summaries into the outbound record shape handed to the host.
"""

from typing import Iterable

from .schemas.models import ProjectedProposal, ProjectedResult, ProposalSummary


def project_summary(summary: ProposalSummary) -> ProjectedProposal:
    # topic/status stay numeric so callers can filter on int(record["topic"])
    return ProjectedProposal(
        id=str(summary.id),
        title=summary.title,
        summary=summary.summary,
        topic=str(summary.topic),
        status=str(summary.status),
        timestamp=summary.timestamp_seconds,
        topic_name=summary.topic_name,
        status_name=summary.status_name,
    )


def project(summaries: Iterable[ProposalSummary]) -> ProjectedResult:
    return ProjectedResult(proposals=[project_summary(s) for s in summaries])
