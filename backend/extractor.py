import json
import re

from logging_config import get_logger

logger = get_logger("extractor")

# Greedy: first "{" through the last "}" in the text
JSON_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")


def _parse_object(text: str) -> dict | None:
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError:
        return None
    return parsed if isinstance(parsed, dict) else None


def extract_record(raw: str) -> dict:
    """Parse the model's reply into a loose record dict.

    Tries the whole reply first, then the outermost brace-delimited
    substring (which also covers code fences and chatty preambles). If
    neither parses to a JSON object, returns an empty dict; the normalizer
    turns that into a valid Note.
    """
    if not raw:
        logger.warning("Empty model response, using empty record")
        return {}

    data = _parse_object(raw.strip())
    if data is not None:
        return data

    match = JSON_OBJECT_PATTERN.search(raw)
    if match:
        data = _parse_object(match.group(0))
        if data is not None:
            logger.info("Recovered JSON object from wrapped model response")
            return data

    logger.warning(f"Failed to parse model response, using empty record: {raw[:200]!r}")
    return {}
