"""Learned conversion patterns.

Maps a normalized signature of a source snippet to the translation that was chosen for
it. Entries never expire; they are removed only by an explicit reset. Two snippets that
differ only in literal values share one entry, which also means structurally similar but
semantically different inputs may reuse each other's translation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from models.conversion_models import KEY_NORMALIZATIONS
from models.re_models import IDENTIFIER_PATTERN, KEYWORD_PATTERN, NUMBER_LITERAL_PATTERN, STRING_LITERAL_PATTERN
from utils.logger_utils import LoggerUtils
from utils.string_utils import StringUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Iterable, Iterator
    from re import Match

__all__: list[str] = ["PatternCache", "generate_pattern_key", "normalize_source"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

# Placeholder tokens that survive the identifier pass of aggressive normalization
_PLACEHOLDERS: Final[frozenset[str]] = frozenset({"STRING", "NUMBER", "KEYWORD"})


def _replace_identifier(match: Match[str]) -> str:
    token: str = match.group(0)
    return token if token in _PLACEHOLDERS else "IDENTIFIER"


def normalize_source(code: str, normalization: str = "structural") -> str:
    """Reduce source code to its structural signature.

    Literals are replaced first, so keyword-like words inside strings do not leak into the
    signature.

    Args:
        code (str): Source code.
        normalization (str): ``structural`` keeps ordinary identifiers; ``aggressive`` replaces them too.

    Returns:
        str: Signature with collapsed whitespace.

    Raises:
        ValueError: If the normalization level is unknown.
    """
    if normalization not in KEY_NORMALIZATIONS:
        msg: str = f"Unknown key normalization: '{normalization}'"
        raise ValueError(msg)

    signature: str = StringUtils.normalize_text(code)
    signature = STRING_LITERAL_PATTERN.sub("STRING", signature)
    signature = NUMBER_LITERAL_PATTERN.sub("NUMBER", signature)
    signature = KEYWORD_PATTERN.sub("KEYWORD", signature)
    if normalization == "aggressive":
        signature = IDENTIFIER_PATTERN.sub(_replace_identifier, signature)
    return StringUtils.compress_blanks(signature)


def generate_pattern_key(code: str, from_lang: str, to_lang: str, normalization: str = "structural") -> str:
    """Build the cache key ``"{from}->{to}:{signature}"`` of a request."""
    return f"{from_lang}->{to_lang}:{normalize_source(code, normalization)}"


class PatternCache:
    """In-memory mapping of pattern keys to chosen translations.

    Mutated only by the policy engine. Insertion order is kept so that the persisted
    snapshot is stable.
    """

    def __init__(self, items: Iterable[Iterable[str]] = ()) -> None:
        self._patterns: dict[str, str] = {}
        for item in items:
            pair: list[str] = list(item)
            if len(pair) != 2:  # noqa: PLR2004
                logger.warning("Skipping malformed cached pattern with %d fields", len(pair))
                continue
            self._patterns[pair[0]] = pair[1]

    def __len__(self) -> int:
        return len(self._patterns)

    def __contains__(self, key: object) -> bool:
        return key in self._patterns

    def __iter__(self) -> Iterator[str]:
        return iter(self._patterns)

    def get(self, key: str) -> str | None:
        return self._patterns.get(key)

    def put(self, key: str, text: str) -> None:
        """Create or overwrite the entry for a key."""
        self._patterns[key] = text
        logger.debug("Pattern learned for key: %s", StringUtils.preview(key))

    def clear(self) -> None:
        self._patterns.clear()

    def to_pairs(self) -> list[list[str]]:
        """Snapshot of the cache as ``[key, text]`` pairs for persistence."""
        return [[key, text] for key, text in self._patterns.items()]
