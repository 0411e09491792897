"""Building blocks shared by the field extractors.

An extractor is a pure function ``(text, context) -> ExtractionResult``. The
text it receives has every span consumed by an earlier extractor blanked out
with spaces of the same length, so match offsets are always offsets into the
original input.
"""

from dataclasses import dataclass, field
from datetime import date
from re import Match, Pattern
from typing import Callable, Generic, Iterator, Optional, Tuple, TypeVar

from ..config import ParserConfig
from ..models import Token, TokenKind, TokenValue
from ..utils.datetime import local_today

T = TypeVar("T")


@dataclass(frozen=True)
class ParseContext:
    """Per-call inputs every extractor may consult."""
    today: date = field(default_factory=local_today)
    config: ParserConfig = field(default_factory=ParserConfig)


@dataclass(frozen=True)
class ExtractionResult(Generic[T]):
    """Outcome of one extractor run."""
    value: Optional[T]
    remaining: str
    tokens: Tuple[Token, ...] = ()

    @property
    def matched(self) -> bool:
        return self.value is not None


Extractor = Callable[[str, Optional[ParseContext]], ExtractionResult]


def blank_span(text: str, start: int, end: int) -> str:
    """Replace ``text[start:end]`` with spaces, preserving every other offset."""
    return text[:start] + " " * (end - start) + text[end:]


def make_token(kind: TokenKind, match: Match, value: TokenValue) -> Token:
    return Token(
        kind=kind,
        raw_text=match.group(0),
        value=value,
        start=match.start(),
        end=match.end(),
    )


def consume(text: str, match: Match, kind: TokenKind, value: T) -> ExtractionResult[T]:
    """Build the result for a single successful match."""
    token = make_token(kind, match, value)
    return ExtractionResult(value, blank_span(text, match.start(), match.end()), (token,))


def no_match(text: str) -> ExtractionResult:
    return ExtractionResult(None, text, ())


def first_valid(pattern: Pattern, text: str,
                convert: Callable[[Match], Optional[T]]) -> Optional[Tuple[Match, T]]:
    """Return the first occurrence of ``pattern`` that ``convert`` accepts.

    ``convert`` returns None for syntactically matching but invalid values
    (day 32, hour 25, ...); such occurrences are skipped and scanning moves on
    to the next one.
    """
    for match in pattern.finditer(text):
        value = convert(match)
        if value is not None:
            return match, value
    return None


def iter_matches(pattern: Pattern, text: str) -> Iterator[Match]:
    """Fresh scan over every non-overlapping occurrence of ``pattern``."""
    return pattern.finditer(text)
