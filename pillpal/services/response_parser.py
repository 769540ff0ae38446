"""
Parses raw model text into an AssistantOutput.
Never raises: malformed output degrades to the best text that can be found.
"""

import json
from typing import Any
from pydantic import ValidationError

from pillpal.models.domain import AssistantOutput
from pillpal.utils.logger import get_logger

logger = get_logger(__name__)

# Candidate order matters: first string-valued field wins, raw text is the last resort.
RESPONSE_FIELD_CANDIDATES = ("response", "answer")


def salvage_output(parsed: Any, raw_text: str) -> AssistantOutput:
    """
    Extracts what it can from parsed JSON that failed shape validation.

    Args:
        parsed: Decoded JSON value of any type
        raw_text: Original text, used when no response field is usable

    Returns:
        AssistantOutput with the first string candidate field (or the raw
        text) and only the string entries of `suggestions`
    """
    fields = parsed if isinstance(parsed, dict) else {}

    response = next(
        (
            fields[name]
            for name in RESPONSE_FIELD_CANDIDATES
            if isinstance(fields.get(name), str)
        ),
        raw_text,
    )

    suggestions = fields.get("suggestions")
    if isinstance(suggestions, list):
        suggestions = [s for s in suggestions if isinstance(s, str)]
    else:
        suggestions = None

    return AssistantOutput(response=response, suggestions=suggestions)


def parse_assistant_output(raw_text: str) -> AssistantOutput:
    """
    Three tiers: valid shape as is, salvage from parseable JSON, raw text.

    Args:
        raw_text: Text returned by the model

    Returns:
        AssistantOutput, always
    """
    try:
        parsed = json.loads(raw_text)
    except (ValueError, RecursionError):
        logger.warning("assistant_output_not_json", length=len(raw_text))
        return AssistantOutput(response=raw_text)

    try:
        return AssistantOutput.model_validate(parsed)
    except ValidationError as e:
        logger.warning(
            "assistant_output_salvaged",
            errors=e.error_count(),
            fields=sorted(parsed) if isinstance(parsed, dict) else type(parsed).__name__,
        )
        return salvage_output(parsed, raw_text)
