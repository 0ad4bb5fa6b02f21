import json
import logging
import re
from typing import Callable, Optional, Tuple

from pydantic import ValidationError

from app.exceptions import ClassificationError, ErrorKind
from app.models import Classification, WasteCategory

logger = logging.getLogger(__name__)

# First flat object in the reply; the model often wraps it in prose or code fences
JSON_OBJECT_PATTERN = re.compile(r"\{[^}]+\}")

# Checked in this order, first hit wins
KEYWORD_PRIORITY: Tuple[WasteCategory, ...] = (
    WasteCategory.BIODEGRADABLE,
    WasteCategory.PLASTIC,
    WasteCategory.METAL,
)

KEYWORD_FALLBACK_CONFIDENCE = 0.75


def parse_strict_json(text: str) -> Optional[Classification]:
    """
    Read the first embedded JSON object as {type, confidence, reasoning}.

    Any object with a "type" key is accepted; the type is taken as-is and
    not checked against WasteCategory, a missing confidence stays None.
    """
    match = JSON_OBJECT_PATTERN.search(text)
    if not match:
        return None

    try:
        record = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        logger.warning(f"Embedded object is not valid JSON: {str(e)}")
        return None

    if not isinstance(record, dict) or "type" not in record:
        return None

    try:
        return Classification(
            category=record["type"],
            confidence=record.get("confidence"),
            reasoning=record.get("reasoning") or "",
        )
    except ValidationError as e:
        logger.warning(f"Embedded object is not a classification record: {str(e)}")
        return None


def parse_keywords(text: str) -> Optional[Classification]:
    """Name the category from the first known material mentioned in the reply."""
    lower_text = text.lower()
    for category in KEYWORD_PRIORITY:
        if category.value in lower_text:
            return Classification(
                category=category.value,
                confidence=KEYWORD_FALLBACK_CONFIDENCE,
                reasoning=text,
            )
    return None


PARSE_STRATEGIES: Tuple[Callable[[str], Optional[Classification]], ...] = (
    parse_strict_json,
    parse_keywords,
)


def parse_response(text: str) -> Classification:
    """
    Turn a free-form model reply into a Classification.

    Args:
        text: Raw reply text from the model

    Returns:
        The result of the first strategy that matches

    Raises:
        ClassificationError: UNPARSABLE_RESPONSE when no strategy matches
    """
    for strategy in PARSE_STRATEGIES:
        classification = strategy(text)
        if classification is not None:
            return classification

    logger.error(f"Could not determine waste type from AI response: {text[:500]}")
    raise ClassificationError(
        ErrorKind.UNPARSABLE_RESPONSE,
        "Invalid classification response from AI",
        detail={"raw_reply": text},
    )
