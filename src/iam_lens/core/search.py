"""In-document text search.

Matches are recomputed in full on every query change. The query is a literal
string, matched case-insensitively, and never raises on bad input: an empty,
over-long or uncompilable query simply produces no matches.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional

from ..constants import MAX_QUERY_LENGTH

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchMatch:
    line: int
    start: int
    end: int
    text: str


def find_matches(text: str, query: str) -> List[SearchMatch]:
    """Find every non-overlapping occurrence of ``query`` in ``text``, line by line."""
    query = query.strip()
    if not query or len(query) > MAX_QUERY_LENGTH:
        return []

    try:
        pattern = re.compile(re.escape(query), re.IGNORECASE)
    except re.error as e:
        logger.debug(f"Search query {query!r} did not compile: {e}")
        return []

    matches: List[SearchMatch] = []
    for line_number, line in enumerate(text.split("\n")):
        for found in pattern.finditer(line):
            matches.append(SearchMatch(line_number, found.start(), found.end(), found.group(0)))
    return matches


@dataclass
class LineSearch:
    """Search results over one document plus the current-match pointer.

    ``current`` is -1 whenever there are no matches.
    """

    query: str = ""
    matches: List[SearchMatch] = field(default_factory=list)
    current: int = -1

    def update(self, query: str, text: str) -> bool:
        """Re-run the search; returns True when anything matched."""
        self.query = query.strip()[:MAX_QUERY_LENGTH]
        self.matches = find_matches(text, self.query)
        self.current = 0 if self.matches else -1
        return bool(self.matches)

    def next(self) -> bool:
        if not self.matches:
            return False
        if self.current < 0:
            self.current = 0
        else:
            self.current = (self.current + 1) % len(self.matches)
        return True

    def previous(self) -> bool:
        if not self.matches:
            return False
        count = len(self.matches)
        if self.current < 0:
            self.current = count - 1
        else:
            self.current = (self.current - 1 + count) % count
        return True

    def clear(self) -> None:
        self.query = ""
        self.matches = []
        self.current = -1

    @property
    def current_match(self) -> Optional[SearchMatch]:
        if 0 <= self.current < len(self.matches):
            return self.matches[self.current]
        return None

    def matches_on_line(self, line: int) -> List[SearchMatch]:
        return [m for m in self.matches if m.line == line]

    def status(self) -> str:
        if self.matches:
            return f"({self.current + 1}/{len(self.matches)})"
        if self.query:
            return "(no matches)"
        return ""
