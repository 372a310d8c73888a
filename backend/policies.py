from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict

from errors import ConfigurationError


class NormalizationPolicy(BaseModel):
    """How Task dates and fallback names are normalized.

    The deployed endpoint went through several revisions that disagreed on
    these points; each revision is kept as a named profile below.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    task_datetime: Literal["null", "start_of_day"] = "null"
    unscheduled_placeholder: Optional[str] = None  # written to Task date fields when no date was found
    fallback_unit: Literal["words", "chars"] = "words"
    task_name_limit: int = 4
    event_name_limit: int = 4
    note_title_limit: int = 3


PROFILES: dict[str, NormalizationPolicy] = {
    "standard": NormalizationPolicy(name="standard"),
    "inbox": NormalizationPolicy(
        name="inbox",
        task_datetime="start_of_day",
        unscheduled_placeholder="Inbox",
    ),
    "compact": NormalizationPolicy(
        name="compact",
        fallback_unit="chars",
        task_name_limit=40,
        event_name_limit=40,
        note_title_limit=40,
    ),
}

DEFAULT_PROFILE = "standard"


def get_policy(name: str = DEFAULT_PROFILE) -> NormalizationPolicy:
    try:
        return PROFILES[name.lower()]
    except KeyError:
        raise ConfigurationError(
            f"Unknown normalization profile '{name}' (expected one of: {', '.join(PROFILES)})"
        ) from None
