"""Identity generation for imported and parsed records."""

import random
import string
import time

_ID_ALPHABET = string.digits + string.ascii_lowercase


def timestamp_ms() -> int:
    return int(time.time() * 1000)


def new_method_id() -> str:
    """Composite id for JSON imports: ``<epoch-millis>-<base36 suffix>``."""
    suffix = "".join(random.choices(_ID_ALPHABET, k=9))
    return f"{timestamp_ms()}-{suffix}"


def new_text_method_id() -> str:
    return f"method-{timestamp_ms()}"


def new_note_id() -> str:
    return f"note-{timestamp_ms()}"
