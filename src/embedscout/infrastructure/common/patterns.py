"""Named regex extraction rules.

Each rule wraps one fixed pattern the embed network relies on. A rule never
raises on a mismatch: ``search`` returns None and ``find_all`` returns an
empty list, so markup drift degrades a single record instead of the whole
resolution.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

import structlog

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ExtractionRule:
    """A compiled pattern with a fixed number of capture groups."""

    name: str
    pattern: re.Pattern[str]
    groups: int = 1

    def search(self, text: str) -> tuple[str, ...] | None:
        """Return the captured groups of the first match, or None."""
        match = self.pattern.search(text)
        if match is None:
            log.debug("extraction_rule_no_match", rule=self.name)
            return None
        captured = match.groups()
        if len(captured) < self.groups or any(g is None for g in captured):
            log.debug(
                "extraction_rule_incomplete",
                rule=self.name,
                expected=self.groups,
                got=len(captured),
            )
            return None
        return captured

    def find_all(self, text: str) -> list[tuple[str, ...]]:
        """Return captured groups of every match, in document order."""
        return [m.groups() for m in self.pattern.finditer(text)]


# rcp page: player config assignment ``src: '/prorcp/...'``
RCP_SOURCE = ExtractionRule(
    name="rcp_source",
    pattern=re.compile(r"src:\s*'([^']*)'"),
)

# prorcp page: ``<script src="/path.js?_=version"></script>``
VERSIONED_SCRIPT = ExtractionRule(
    name="versioned_script",
    pattern=re.compile(r'<script\s+src="/([^"]*\.js)\?_=([^"]*)"></script>'),
    groups=2,
)

# player script: ``{}}window[<key>("<seed>")`` installed right after the
# initializer is cleared.
WINDOW_KEY = ExtractionRule(
    name="window_key",
    pattern=re.compile(r'\{\}\}window\[([^"]+)\("([^"]+)"\)'),
    groups=2,
)
