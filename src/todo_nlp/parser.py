"""Natural language parser for quick task entry.

The parser runs a fixed pipeline of field extractors over one line of input::

    tags -> priority -> recurrence -> time -> date

Each stage receives the text left over by the previous one, so a span claimed
by an earlier field can never be matched again by a later one. Whatever
survives all five stages becomes the task title.
"""

import logging
import re
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .config import ParserConfig, ScoringPolicy
from .extractors import (
    Extractor,
    ParseContext,
    extract_date,
    extract_priority,
    extract_recurrence,
    extract_tags,
    extract_time,
)
from .models import ParsedResult, PreviewResult, Token
from .preview import build_preview
from .utils.datetime import local_today

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Stage:
    """One pipeline step: the result field it fills and the extractor behind it."""
    field: str
    extractor: Extractor


# Extraction order is part of the contract: earlier stages win overlapping text
PIPELINE: Tuple[Stage, ...] = (
    Stage("tags", extract_tags),
    Stage("priority", extract_priority),
    Stage("recurrence", extract_recurrence),
    Stage("due_time", extract_time),
    Stage("due_date", extract_date),
)

_LEADING_PUNCTUATION = re.compile(r"^[,.\s]+")
_TRAILING_PUNCTUATION = re.compile(r"[,.\s]+$")


def clean_title(text: str) -> str:
    """Collapse whitespace and strip surrounding commas and periods."""
    title = " ".join(text.split())
    title = _LEADING_PUNCTUATION.sub("", title)
    return _TRAILING_PUNCTUATION.sub("", title)


def calculate_confidence(tokens: Sequence[Token], title: str, original: str,
                         policy: Optional[ScoringPolicy] = None) -> float:
    """Estimate how much of the input was structured, in [0, 1].

    ``title`` is the cleaned leftover text before any fallback to the
    original input.
    """
    policy = policy or ScoringPolicy()
    confidence = 1.0

    if len(title) < policy.short_title_length:
        confidence -= policy.short_title_penalty

    if original and len(title) / len(original) > policy.unparsed_ratio and not tokens:
        confidence -= policy.unparsed_penalty

    confidence += len(tokens) * policy.token_bonus

    return max(0.0, min(1.0, confidence))


class NaturalLanguageParser:
    """Turns one line of task input into a ``ParsedResult``."""

    def __init__(self, config: Optional[ParserConfig] = None,
                 pipeline: Sequence[Stage] = PIPELINE):
        self.config = config or ParserConfig()
        self.pipeline = tuple(pipeline)

    def parse(self, input_text: str, today: Optional[date] = None) -> ParsedResult:
        """Parse natural language input into structured task data.

        Never raises: an unexpected failure is logged and the input comes
        back untouched as the title with zero confidence.
        """
        try:
            return self._parse(input_text, today)
        except Exception as e:
            # Return the raw input instead of crashing the caller
            logger.exception(f"Parsing failed for {input_text!r}: {e}")
            return ParsedResult(title=input_text, original_input=input_text, confidence=0.0)

    def preview(self, input_text: str, today: Optional[date] = None) -> PreviewResult:
        """Parse the input and describe the recognised fields for display."""
        today = today or local_today()
        return build_preview(self.parse(input_text, today), today)

    def _parse(self, input_text: str, today: Optional[date]) -> ParsedResult:
        if not input_text.strip():
            return ParsedResult(title=input_text, original_input=input_text, confidence=0.0)

        context = ParseContext(today=today or local_today(), config=self.config)
        remaining = input_text
        tokens: List[Token] = []
        values: Dict[str, Any] = {}

        for stage in self.pipeline:
            result = stage.extractor(remaining, context)
            remaining = result.remaining
            tokens.extend(result.tokens)
            if result.matched:
                values[stage.field] = result.value

        title = clean_title(remaining)
        confidence = calculate_confidence(tokens, title, input_text, self.config.scoring)

        if not title:
            logger.debug(f"Nothing left for a title in {input_text!r}, using the original input")

        return ParsedResult(
            title=title or input_text,
            original_input=input_text,
            confidence=confidence,
            tokens=tokens,
            **values,
        )


def parse(input_text: str, today: Optional[date] = None,
          config: Optional[ParserConfig] = None) -> ParsedResult:
    """Parse one line of task input.

    Example::

        >>> parse("내일 오후 3시 팀 회의 #업무 중요").due_time
        '15:00'
    """
    return NaturalLanguageParser(config).parse(input_text, today)


def preview(input_text: str, today: Optional[date] = None,
            config: Optional[ParserConfig] = None) -> PreviewResult:
    """Parse one line of task input and format it for display."""
    return NaturalLanguageParser(config).preview(input_text, today)
