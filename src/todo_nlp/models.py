"""Data model for parsed task input."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union


class TokenKind(Enum):
    """Field a matched span was interpreted as."""
    DATE = "date"
    TIME = "time"
    PRIORITY = "priority"
    TAG = "tag"
    RECURRENCE = "recurrence"


class Priority(Enum):
    """Task priority levels."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class RecurrenceType(Enum):
    """Types of recurrence patterns"""
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


@dataclass(frozen=True)
class RecurrenceRule:
    """A repeating schedule recognised in the input.

    ``days_of_week`` uses 0=Sunday .. 6=Saturday. When present it takes
    precedence over plain interval semantics.
    """
    type: RecurrenceType
    interval: int = 1
    days_of_week: Optional[Tuple[int, ...]] = None

    def __post_init__(self):
        if self.interval < 1:
            raise ValueError(f"Recurrence interval must be positive, got {self.interval}")
        if self.days_of_week is not None:
            days = tuple(sorted(set(self.days_of_week)))
            if any(day < 0 or day > 6 for day in days):
                raise ValueError(f"Invalid weekday index in {self.days_of_week}")
            object.__setattr__(self, "days_of_week", days)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"type": self.type.value, "interval": self.interval}
        if self.days_of_week is not None:
            data["days_of_week"] = list(self.days_of_week)
        return data


TokenValue = Union[str, Priority, RecurrenceRule]


@dataclass(frozen=True)
class Token:
    """One matched span of the original input and its interpreted value."""
    kind: TokenKind
    raw_text: str
    value: TokenValue
    start: int
    end: int

    def to_dict(self) -> Dict[str, Any]:
        if isinstance(self.value, RecurrenceRule):
            value: Any = self.value.to_dict()
        elif isinstance(self.value, Enum):
            value = self.value.value
        else:
            value = self.value
        return {
            "kind": self.kind.value,
            "raw_text": self.raw_text,
            "value": value,
            "start": self.start,
            "end": self.end,
        }


@dataclass
class ParsedResult:
    """Structured record produced from one line of task input."""
    title: str
    original_input: str
    confidence: float = 0.0
    due_date: Optional[str] = None  # YYYY-MM-DD
    due_time: Optional[str] = None  # HH:MM, 24-hour
    priority: Optional[Priority] = None
    tags: Optional[List[str]] = None
    recurrence: Optional[RecurrenceRule] = None
    tokens: List[Token] = field(default_factory=list)

    def tokens_of(self, kind: TokenKind) -> List[Token]:
        """Return the tokens produced for a single field."""
        return [token for token in self.tokens if token.kind == kind]

    def to_dict(self) -> Dict[str, Any]:
        """Convert the result to a JSON-friendly dictionary."""
        return {
            "title": self.title,
            "due_date": self.due_date,
            "due_time": self.due_time,
            "priority": self.priority.value if self.priority else None,
            "tags": list(self.tags) if self.tags else None,
            "recurrence": self.recurrence.to_dict() if self.recurrence else None,
            "confidence": self.confidence,
            "original_input": self.original_input,
            "tokens": [token.to_dict() for token in self.tokens],
        }


@dataclass
class PreviewResult:
    """Display strings for the fields recognised in an input line."""
    has_date: bool = False
    has_time: bool = False
    has_priority: bool = False
    has_tags: bool = False
    has_recurrence: bool = False

    date_display: Optional[str] = None  # "내일", "12월 20일"
    time_display: Optional[str] = None  # "오후 3시"
    priority_display: Optional[str] = None  # "높음"
    tags_display: Optional[List[str]] = None  # ["#업무", "#회의"]
    recurrence_display: Optional[str] = None  # "매일", "매주 월요일"

    @property
    def has_any(self) -> bool:
        return (self.has_date or self.has_time or self.has_priority
                or self.has_tags or self.has_recurrence)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "has_date": self.has_date,
            "has_time": self.has_time,
            "has_priority": self.has_priority,
            "has_tags": self.has_tags,
            "has_recurrence": self.has_recurrence,
            "date_display": self.date_display,
            "time_display": self.time_display,
            "priority_display": self.priority_display,
            "tags_display": self.tags_display,
            "recurrence_display": self.recurrence_display,
        }
