"""Detect the format of shared text and parse it."""

from __future__ import annotations

import json
import logging
from typing import Any, Callable

from brew_share.schema import BrewingNote, CoffeeBean, Method
from brew_share.text.markers import (
    BREWING_METHOD_HEADER,
    BREWING_METHOD_MARKER,
    BREWING_NOTE_HEADER,
    BREWING_NOTE_MARKER,
    COFFEE_BEAN_HEADER,
    COFFEE_BEAN_MARKER,
    LEGACY_JSON_PATTERN,
)
from brew_share.text.parser import parse_brewing_note_text, parse_coffee_bean_text, parse_method_text

logger = logging.getLogger(__name__)

ParsedRecord = CoffeeBean | Method | BrewingNote
Route = tuple[Callable[[str], bool], Callable[[str], Any]]


def _is_json(text: str) -> bool:
    try:
        json.loads(text)
    except (TypeError, ValueError, RecursionError):
        return False
    return True


def _legacy_json_block(text: str) -> str | None:
    match = LEGACY_JSON_PATTERN.search(text)
    return match.group(1) if match and match.group(1) else None


def _parse_legacy_json(text: str) -> Any:
    return json.loads(_legacy_json_block(text))


def _contains(marker: str) -> Callable[[str], bool]:
    return lambda text: marker in text


# Checked top to bottom; the first matching route wins.
ROUTES: tuple[Route, ...] = (
    (_is_json, json.loads),
    (lambda text: _legacy_json_block(text) is not None, _parse_legacy_json),
    (_contains(COFFEE_BEAN_MARKER), parse_coffee_bean_text),
    (_contains(BREWING_METHOD_MARKER), parse_method_text),
    (_contains(BREWING_NOTE_MARKER), parse_brewing_note_text),
    (_contains(COFFEE_BEAN_HEADER), parse_coffee_bean_text),
    (_contains(BREWING_METHOD_HEADER), parse_method_text),
    (_contains(BREWING_NOTE_HEADER), parse_brewing_note_text),
)


def extract_json_from_text(text: str) -> ParsedRecord | Any | None:
    """Parse pasted text in whatever shareable format it is in.

    Tries, in order: raw JSON, a legacy ``<!--JSON_DATA:...-->`` block, the
    hidden ``@DATA_TYPE:...@`` markers, then the ``【...】`` section headers.

    Args:
        text: Pasted text or JSON.

    Returns:
        The decoded JSON value as-is for JSON input, a CoffeeBean, Method or
        BrewingNote for shared text, or None when the format is not
        recognized or parsing fails.
    """
    try:
        for matches, parse in ROUTES:
            if matches(text):
                return parse(text)
    except Exception:
        logger.debug("shared text could not be parsed", exc_info=True)
        return None

    logger.debug("shared text matched no known format")
    return None
