from pydantic import BaseModel, ConfigDict
from typing import Literal, Optional

RecordType = Literal["Task", "Event", "Note"]

RECORD_TYPES: tuple[str, ...] = ("Task", "Event", "Note")


class ClassifiedRecord(BaseModel):
    type: RecordType
    task_name: Optional[str] = None
    event_name: Optional[str] = None
    note_title: Optional[str] = None
    due_date: Optional[str] = None  # YYYY-MM-DD, or the profile's unscheduled placeholder
    datetime: Optional[str] = None  # ISO 8601 with the reference timezone offset
    readable_datetime: Optional[str] = None  # e.g. "Sun, 12/14 3:00 PM"
    location: Optional[str] = None
    original_text: str


class ClassifyRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    text: Optional[str] = None
    prompt: Optional[str] = None  # older clients send the input under this key

    def input_text(self) -> Optional[str]:
        """The submitted text, preferring `text` over `prompt`."""
        for value in (self.text, self.prompt):
            if value and value.strip():
                return value
        return None


class ErrorResponse(BaseModel):
    error: str
