"""Priority cue extraction."""

import logging
from typing import Optional

from ..models import Priority, TokenKind
from ..patterns import PRIORITY_PATTERNS
from .base import ExtractionResult, ParseContext, consume, no_match

logger = logging.getLogger(__name__)


def extract_priority(text: str, context: Optional[ParseContext] = None) -> ExtractionResult[Priority]:
    """Extract the first priority cue.

    Cue sets are tried High, Low, Medium. Low goes before Medium because a
    "later" cue such as 나중에 says more than the generic ``!``.
    """
    for priority, pattern in PRIORITY_PATTERNS:
        match = pattern.search(text)
        if match:
            logger.debug(f"Priority {priority.value} from '{match.group(0)}'")
            return consume(text, match, TokenKind.PRIORITY, priority)

    return no_match(text)
