"""Hashtag extraction."""

import logging
from typing import List, Optional

from ..models import TokenKind
from ..patterns import TAG_PATTERN
from .base import ExtractionResult, ParseContext, blank_span, iter_matches, make_token

logger = logging.getLogger(__name__)


def extract_tags(text: str, context: Optional[ParseContext] = None) -> ExtractionResult[List[str]]:
    """Extract every ``#tag`` in the text.

    Unlike the other extractors this one scans globally: every occurrence is
    removed and yields a token, while the returned tag list is de-duplicated
    in first-seen order.
    """
    tags: List[str] = []
    tokens = []
    remaining = text

    for match in iter_matches(TAG_PATTERN, text):
        tag = match.group(1)
        if tag not in tags:
            tags.append(tag)
        tokens.append(make_token(TokenKind.TAG, match, tag))
        remaining = blank_span(remaining, match.start(), match.end())

    if not tokens:
        return ExtractionResult(None, text, ())

    logger.debug(f"Extracted tags {tags} from {len(tokens)} occurrence(s)")
    return ExtractionResult(tags, remaining, tuple(tokens))
