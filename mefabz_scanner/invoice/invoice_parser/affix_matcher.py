"""Case-insensitive brand prefix and color/variant suffix matching."""

from __future__ import annotations

import re

from mefabz_scanner.domain.invoice import MatchConfig

# Never matches; used when no suffix tokens are configured.
_MATCH_NOTHING = re.compile(r"(?!)")


def build_suffix_pattern(suffix_tokens: tuple[str, ...]) -> re.Pattern[str]:
    """
    Compile a word-bounded pattern for any suffix token.

    A trailing closing bracket (optionally after whitespace) is part of the
    match, so "(Red)" truncates after the ")".
    """
    if not suffix_tokens:
        return _MATCH_NOTHING
    alternatives = "|".join(re.escape(token) for token in suffix_tokens)
    return re.compile(rf"\b({alternatives})\b\s*[)\]]?", re.IGNORECASE)


class AffixMatcher:
    """Prefix/suffix queries for one MatchConfig. Stateless after construction."""

    def __init__(self, config: MatchConfig) -> None:
        self.prefixes = config.prefixes
        self.suffix_pattern = build_suffix_pattern(config.suffix_tokens)

    def has_prefix(self, line: str) -> bool:
        """Return True if the line starts with any configured prefix."""
        upper_line = line.strip().upper()
        return any(upper_line.startswith(prefix) for prefix in self.prefixes)

    def find_suffix(self, text: str) -> re.Match[str] | None:
        return self.suffix_pattern.search(text)

    def has_suffix(self, text: str) -> bool:
        return self.find_suffix(text) is not None
