"""Shareable annotated text format."""

from brew_share.text.formatter import (
    bean_to_readable_text,
    brewing_note_to_readable_text,
    method_to_readable_text,
    to_readable_text,
)
from brew_share.text.parser import parse_brewing_note_text, parse_coffee_bean_text, parse_method_text

__all__ = [
    "bean_to_readable_text",
    "brewing_note_to_readable_text",
    "method_to_readable_text",
    "parse_brewing_note_text",
    "parse_coffee_bean_text",
    "parse_method_text",
    "to_readable_text",
]
