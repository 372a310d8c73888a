from datetime import date, datetime, time, tzinfo
from typing import Optional

from clock import format_readable, reference_now
from guardrail import GuardrailSignals
from logging_config import get_logger
from models import RECORD_TYPES, ClassifiedRecord
from policies import NormalizationPolicy

logger = get_logger("normalizer")

TEXT_FIELDS = (
    "task_name",
    "event_name",
    "note_title",
    "due_date",
    "datetime",
    "readable_datetime",
    "location",
)

NAME_FIELDS = {
    "Task": "task_name",
    "Event": "event_name",
    "Note": "note_title",
}

NULL_STRINGS = {"null", "none"}


def _clean(value) -> Optional[str]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return str(value)
    if not isinstance(value, str):
        return None
    value = value.strip()
    if not value or value.lower() in NULL_STRINGS:
        return None
    return value


def _coerce_type(value) -> str:
    if isinstance(value, str):
        for record_type in RECORD_TYPES:
            if value.strip().lower() == record_type.lower():
                return record_type
    if value:
        logger.warning(f"Unknown record type {value!r}, defaulting to Note")
    return "Note"


def _parse_timestamp(value: Optional[str]) -> tuple[Optional[datetime], bool]:
    """Parse an ISO date or date-time. Returns (value, has_time)."""
    if not value:
        return None, False
    try:
        return datetime.combine(date.fromisoformat(value), time.min), False
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")), True
    except ValueError:
        return None, False


def _to_zone(value: datetime, tz: tzinfo) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)


def fallback_name(text: str, limit: int, unit: str = "words") -> str:
    """Short name taken from the start of the input text."""
    if unit == "chars":
        name = text.strip()[:limit].rstrip()
    else:
        name = " ".join(text.split()[:limit])
    return name or text


def _normalize_task(record: dict, policy: NormalizationPolicy, tz: tzinfo):
    record["event_name"] = None
    record["note_title"] = None

    placeholder = policy.unscheduled_placeholder
    due = None
    # The model sometimes puts the date under datetime only
    for field in ("due_date", "datetime"):
        if record[field] and record[field] != placeholder:
            due, _ = _parse_timestamp(record[field])
            if due is not None:
                break

    if due is None:
        record["due_date"] = placeholder
        record["datetime"] = placeholder
        record["readable_datetime"] = placeholder
        return

    day = due.astimezone(tz).date() if due.tzinfo else due.date()
    record["due_date"] = day.isoformat()
    if policy.task_datetime == "start_of_day":
        record["datetime"] = datetime.combine(day, time.min, tzinfo=tz).isoformat()
    else:
        record["datetime"] = None
    if not record["readable_datetime"] or record["readable_datetime"] == placeholder:
        record["readable_datetime"] = format_readable(datetime.combine(day, time.min), with_time=False)


def _normalize_event(record: dict, signals: GuardrailSignals, now: datetime):
    record["task_name"] = None
    record["note_title"] = None

    when, has_time = _parse_timestamp(record["datetime"])
    if when is None:
        when, has_time = _parse_timestamp(record["due_date"])
    record["due_date"] = None

    composed = False
    if signals.clock_time is not None and not has_time:
        day = when.date() if when is not None else now.date()
        when = datetime.combine(day, signals.clock_time)
        has_time = composed = True
    elif when is None and signals.has_explicit_time:
        # An unreadable time like "13pm" still schedules the Event on the reference day
        when = datetime.combine(now.date(), time.min)
        composed = True

    if when is None:
        record["datetime"] = None
        return

    when = _to_zone(when, now.tzinfo)
    record["datetime"] = when.isoformat()
    if composed or not record["readable_datetime"]:
        record["readable_datetime"] = format_readable(when, with_time=has_time)


def _normalize_note(record: dict):
    for field in ("task_name", "event_name", "due_date", "datetime", "readable_datetime", "location"):
        record[field] = None


def normalize_record(
    data: dict,
    text: str,
    policy: NormalizationPolicy,
    signals: GuardrailSignals = None,
    now: datetime = None,
) -> ClassifiedRecord:
    """Turn the model's (possibly partial) output into a schema-complete record.

    Only the fields allowed for the final type survive; the required name
    is synthesized from the input when the model left it empty.
    """
    signals = signals or GuardrailSignals()
    now = now or reference_now()

    record_type = _coerce_type(data.get("type"))
    record = {field: _clean(data.get(field)) for field in TEXT_FIELDS}
    record["original_text"] = text

    if record_type == "Task":
        _normalize_task(record, policy, now.tzinfo)
    elif record_type == "Event":
        _normalize_event(record, signals, now)
    else:
        _normalize_note(record)

    name_field = NAME_FIELDS[record_type]
    if not record[name_field]:
        limit = getattr(policy, f"{name_field}_limit")
        record[name_field] = fallback_name(text, limit, policy.fallback_unit)

    return ClassifiedRecord(type=record_type, **record)
