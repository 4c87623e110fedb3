from __future__ import annotations

import re
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_LIMIT = 10
COMMAND_KEYWORD = "!proposals"

# Ledger-native integer widths: limit is nat32, topic/status are int32.
MAX_LIMIT = 2**32 - 1
MAX_CODE = 2**31 - 1

_UINT_PATTERN = re.compile(r"[0-9]+")


class QueryRequest(BaseModel):
    """Structured form of a ``!proposals`` command."""

    model_config = ConfigDict(frozen=True)

    limit: int = Field(default=DEFAULT_LIMIT, ge=0, le=MAX_LIMIT)
    topic_filter: Optional[int] = Field(default=None, ge=0, le=MAX_CODE)
    status_filter: Optional[int] = Field(default=None, ge=0, le=MAX_CODE)


class CommandParser:
    """
    Ordered-field parser for ``!proposals [<limit>] [topic <id>] [status <id>]``.

    Keywords are case-insensitive and tokens are whitespace separated. Fields are
    optional but must appear in that order; anything else is "no command" and
    ``parse`` returns None.
    """

    def __init__(self, default_limit: int = DEFAULT_LIMIT):
        self.default_limit = default_limit

    def parse(self, text: Optional[str]) -> Optional[QueryRequest]:
        if not text:
            return None
        tokens = text.split()
        if not tokens or tokens[0].lower() != COMMAND_KEYWORD:
            return None

        rest: List[str] = tokens[1:]
        limit = self.default_limit
        if rest and _is_uint(rest[0]):
            limit = int(rest.pop(0))
            if limit > MAX_LIMIT:
                return None

        topic_filter = self._take_field(rest, "topic")
        if topic_filter is False:
            return None
        status_filter = self._take_field(rest, "status")
        if status_filter is False:
            return None

        if rest:
            return None
        return QueryRequest(limit=limit, topic_filter=topic_filter, status_filter=status_filter)

    @staticmethod
    def _take_field(rest: List[str], keyword: str):
        """Consume ``<keyword> <uint>`` from the front of rest. False means a malformed field."""
        if not rest or rest[0].lower() != keyword:
            return None
        if len(rest) < 2 or not _is_uint(rest[1]):
            return False
        value = int(rest[1])
        if value > MAX_CODE:
            return False
        del rest[:2]
        return value


def _is_uint(token: str) -> bool:
    return _UINT_PATTERN.fullmatch(token) is not None
