"""Todo NLP - turn a one-line Korean task entry into structured task data."""

__version__ = "0.1.0"
__author__ = "Todo CLI Team"

from .models import (
    ParsedResult,
    PreviewResult,
    Priority,
    RecurrenceRule,
    RecurrenceType,
    Token,
    TokenKind,
)
from .parser import NaturalLanguageParser, parse, preview

__all__ = [
    "NaturalLanguageParser",
    "ParsedResult",
    "PreviewResult",
    "Priority",
    "RecurrenceRule",
    "RecurrenceType",
    "Token",
    "TokenKind",
    "parse",
    "preview",
    "__version__",
]
