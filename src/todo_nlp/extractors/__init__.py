"""Field extractors.

Each extractor is a pure function ``(text, context) -> ExtractionResult`` that
recognises one field, blanks the matched span(s) out of the text and reports
the tokens it consumed.
"""

from .base import ExtractionResult, Extractor, ParseContext
from .dates import extract_date
from .priority import extract_priority
from .recurrence import extract_recurrence
from .tags import extract_tags
from .times import extract_time

__all__ = [
    "ExtractionResult",
    "Extractor",
    "ParseContext",
    "extract_date",
    "extract_priority",
    "extract_recurrence",
    "extract_tags",
    "extract_time",
]
