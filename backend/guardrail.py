import re
from dataclasses import dataclass
from datetime import time
from typing import Optional

from logging_config import get_logger

logger = get_logger("guardrail")

# 3pm, 3 pm, 10:30am
MERIDIEM_TIME_PATTERN = re.compile(r"\b(\d{1,2})(?::(\d{2}))?\s?(am|pm)\b", re.IGNORECASE)
# 14:00, 9:05 (hours 00-23, minutes 00-59)
CLOCK_TIME_PATTERN = re.compile(r"\b([01]?\d|2[0-3]):([0-5]\d)\b")

EVENT_NOUNS = (
    "appointment",
    "meeting",
    "party",
    "event",
    "session",
    "conference",
    "wedding",
    "dinner",
    "lunch",
)
EVENT_NOUN_PATTERN = re.compile(r"\b(" + "|".join(EVENT_NOUNS) + r")\b", re.IGNORECASE)


@dataclass(frozen=True)
class GuardrailSignals:
    """Lexical evidence found in the user's text."""

    has_explicit_time: bool = False
    clock_time: Optional[time] = None  # None when the matched time isn't a real clock reading, e.g. "13pm"
    event_noun: Optional[str] = None

    @property
    def forces_event(self) -> bool:
        return self.has_explicit_time or self.event_noun is not None


def _meridiem_to_time(hour: int, minute: int, meridiem: str) -> Optional[time]:
    if not 1 <= hour <= 12 or minute > 59:
        return None
    hour = hour % 12
    if meridiem.lower() == "pm":
        hour += 12
    return time(hour, minute)


def detect_signals(text: str) -> GuardrailSignals:
    clock_time = None
    has_explicit_time = False

    # First readable time wins; "13pm" counts as a time but has no clock value
    for match in MERIDIEM_TIME_PATTERN.finditer(text):
        has_explicit_time = True
        clock_time = _meridiem_to_time(int(match.group(1)), int(match.group(2) or 0), match.group(3))
        if clock_time is not None:
            break

    if clock_time is None:
        match = CLOCK_TIME_PATTERN.search(text)
        if match:
            has_explicit_time = True
            clock_time = time(int(match.group(1)), int(match.group(2)))

    noun_match = EVENT_NOUN_PATTERN.search(text)
    event_noun = noun_match.group(1).lower() if noun_match else None

    return GuardrailSignals(has_explicit_time, clock_time, event_noun)


def apply_guardrail(data: dict, signals: GuardrailSignals) -> bool:
    """Force the record to an Event when the text carries an explicit time or event noun.

    Never moves a record away from Event. Returns True if the type changed.
    """
    if not signals.forces_event:
        return False

    previous = data.get("type")
    data["type"] = "Event"
    if previous != "Event":
        reason = "explicit time" if signals.has_explicit_time else f"event noun '{signals.event_noun}'"
        logger.info(f"Guardrail forced Event (model said {previous!r}): {reason}")
        return True
    return False
