"""Lenient parsers for shareable text blocks.

Each field is looked up independently with a single-line, first-match
pattern. A field that is missing or garbled keeps its default; nothing in
here raises on bad input.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

from brew_share import ids
from brew_share.schema import (
    DEFAULT_POUR_TYPE,
    BlendComponent,
    BrewingNote,
    BrewingParams,
    CoffeeBean,
    CoffeeBeanInfo,
    Method,
    MethodParams,
    PourType,
    Stage,
    TasteRatings,
)
from brew_share.text.markers import (
    BEAN_FIELD_LABELS,
    BEAN_NAME_LABEL,
    BEAN_NOTES_LABEL,
    BLEND_SECTION,
    BREWING_METHOD_HEADER,
    CAPACITY_LABEL,
    COFFEE_BEAN_HEADER,
    EQUIPMENT_LABEL,
    FLAVOR_LABEL,
    LEGACY_METHOD_ID_PATTERN,
    METHOD_LABEL,
    NOTES_SECTION,
    PARAM_LABELS,
    PARAMS_SECTION,
    PLACEHOLDERS,
    POUR_TYPE_BY_LABEL,
    POUR_TYPE_KEYWORDS,
    PRICE_LABEL,
    RATING_LABEL,
    ROAST_LEVEL_LABEL,
    SECTION_END,
    STEPS_SECTION,
    TASTE_LABELS,
    TASTE_SECTION,
)

DEFAULT_BEAN_ROAST_LEVEL = "浅度烘焙"
MAX_ESTIMATED_POUR_TIME = 20
POUR_TIME_RATIO = 0.25


@dataclass(frozen=True)
class FieldRule:
    """How to read one labeled value: ``<label><spaces><pattern>``."""

    label: str
    pattern: str = r"(.*)"
    default: str | None = None

    def extract(self, text: str) -> str | None:
        match = re.search(rf"{re.escape(self.label)}[ \t]*{self.pattern}", text)
        if not match:
            return self.default
        value = match.group(1).strip()
        if not value or value in PLACEHOLDERS:
            return self.default
        return value


_BEAN_RULES: dict[str, FieldRule] = {
    "name": FieldRule(COFFEE_BEAN_HEADER, default=""),
    "capacity": FieldRule(CAPACITY_LABEL, r"(\d+)g", default=""),
    "roast_level": FieldRule(ROAST_LEVEL_LABEL, default=DEFAULT_BEAN_ROAST_LEVEL),
    **{field: FieldRule(label) for field, label in BEAN_FIELD_LABELS.items()},
    "price": FieldRule(PRICE_LABEL, r"(\d+)元"),
    "notes": FieldRule(BEAN_NOTES_LABEL),
}
_REMAINING_RULE = FieldRule("剩余", r"(\d+)g")
_FLAVOR_RULE = FieldRule(FLAVOR_LABEL)

_PARAM_RULES: dict[str, FieldRule] = {
    field: FieldRule(label, default="") for field, label in PARAM_LABELS.items()
}
_METHOD_NAME_RULE = FieldRule(BREWING_METHOD_HEADER, default="")

_NOTE_RULES: dict[str, FieldRule] = {
    "equipment": FieldRule(EQUIPMENT_LABEL, default=""),
    "method": FieldRule(METHOD_LABEL, default=""),
}
_BEAN_INFO_RULES: dict[str, FieldRule] = {
    "name": FieldRule(BEAN_NAME_LABEL, default=""),
    "roast_level": FieldRule(ROAST_LEVEL_LABEL, default=""),
}
_TASTE_RULES: dict[str, FieldRule] = {
    field: FieldRule(label, r"(\d{1,3})/5") for field, label in TASTE_LABELS.items()
}
_RATING_RULE = FieldRule(RATING_LABEL, r"(\d{1,3})/5")

_NAMED_COMPONENT = re.compile(r"^\s*\d+\.\s*(.*?)\s*\((\d{1,3})%\)")
_PERCENT_COMPONENT = re.compile(r"^\s*\d+\.\s*(\d{1,3})%\s*(.*)$")
_STEP_START = re.compile(r"^\s*\d+\.\s*\[.*?\]")
_STEP_HEADER = re.compile(r"^\s*\d+\.\s*\[(\d{1,6})分(\d{1,6})秒\]\s*(.*)\s-\s?(.*)$")
# Hand-written steps such as "1. [0分30秒] 焖蒸-30g" without the spaced separator.
_LOOSE_STEP_HEADER = re.compile(r"^\s*\d+\.\s*\[(\d{1,6})分(\d{1,6})秒\]\s*(.*?)\s*-\s*(.*)$")
_POUR_TIME_NOTE = re.compile(r"^\(注水[\d.]+秒\)\s*")
_POUR_TYPE_NOTE = re.compile(r"^\[([^\]]*)\]\s*")


def _apply_rules(text: str, rules: dict[str, FieldRule]) -> dict[str, str | None]:
    return {field: rule.extract(text) for field, rule in rules.items()}


def _section(text: str, title: str) -> str:
    """Text after ``title`` up to the next ``---`` line."""
    return text.split(title, 1)[1].split(SECTION_END, 1)[0]


def _score(rule: FieldRule, text: str) -> int:
    value = rule.extract(text)
    return min(5, int(value)) if value else 0


def parse_coffee_bean_text(text: str) -> CoffeeBean:
    """Parse a ``【咖啡豆】`` block back into a coffee bean."""
    values = _apply_rules(text, _BEAN_RULES)
    remaining = _REMAINING_RULE.extract(text) or values["capacity"]
    flavor_raw = _FLAVOR_RULE.extract(text)
    flavor = [item.strip() for item in flavor_raw.split(",")] if flavor_raw else []

    blend_components = None
    if BLEND_SECTION in text:
        blend_components = _parse_blend_components(_section(text, BLEND_SECTION))

    return CoffeeBean(
        **values,
        remaining=remaining,
        flavor=flavor,
        blend_components=blend_components,
    )


def _parse_blend_components(section: str) -> list[BlendComponent]:
    components: list[BlendComponent] = []
    for line in section.splitlines():
        named = _NAMED_COMPONENT.match(line)
        if named:
            name, percentage = named.group(1).strip(), int(named.group(2))
            details: list[str] = []
        else:
            # The formatter's own shape: "1. 60% 埃塞俄比亚 | 水洗 | 原生种"
            bare = _PERCENT_COMPONENT.match(line)
            if not bare:
                continue
            percentage, name = int(bare.group(1)), bare.group(2).strip()
            details = [part.strip() for part in name.split("|") if part.strip()]

        if not 1 <= percentage <= 100:
            continue
        origin, process, variety = (details + [None, None, None])[:3]
        components.append(
            BlendComponent(
                name=name,
                percentage=percentage,
                origin=origin,
                process=process,
                variety=variety,
            )
        )
    return components


def parse_method_text(text: str) -> Method:
    """Parse a ``【冲煮方案】`` block back into a brewing method.

    The method keeps a legacy ``@METHOD_ID:method-...@`` tag when one is
    embedded, otherwise it gets a fresh ``method-<timestamp>`` id.
    """
    id_match = LEGACY_METHOD_ID_PATTERN.search(text)
    method_id = id_match.group(1) if id_match else ids.new_text_method_id()
    stages = _parse_stages(_section(text, STEPS_SECTION)) if STEPS_SECTION in text else []

    return Method(
        id=method_id,
        name=_METHOD_NAME_RULE.extract(text),
        params=MethodParams(**_apply_rules(text, _PARAM_RULES), stages=stages),
    )


def _parse_stages(section: str) -> list[Stage]:
    lines = [line for line in section.splitlines() if line.strip()]
    stages: list[Stage] = []

    i = 0
    while i < len(lines):
        header = None
        if _STEP_START.match(lines[i]):
            header = _STEP_HEADER.match(lines[i]) or _LOOSE_STEP_HEADER.match(lines[i])
        i += 1
        if not header:
            continue

        # A detail is the single indented line right after its step.
        detail = ""
        if i < len(lines) and lines[i][:1].isspace() and not _STEP_START.match(lines[i]):
            detail = lines[i].strip()
            i += 1

        minutes, seconds, label, water = header.groups()
        label, pour_type_tag = _strip_annotations(label)
        time = int(minutes) * 60 + int(seconds)
        stages.append(
            Stage(
                time=time,
                pour_time=min(MAX_ESTIMATED_POUR_TIME, math.ceil(time * POUR_TIME_RATIO)),
                label=label,
                water=water.strip(),
                detail=detail,
                pour_type=_infer_pour_type(detail, label, pour_type_tag),
            )
        )
    return stages


def _strip_annotations(label: str) -> tuple[str, str | None]:
    """Drop the ``(注水N秒)`` and ``[绕圈注水]`` prefixes the formatter adds."""
    label = _POUR_TIME_NOTE.sub("", label, count=1)
    tag = None
    match = _POUR_TYPE_NOTE.match(label)
    if match and match.group(1) in POUR_TYPE_BY_LABEL:
        tag = match.group(1)
        label = label[match.end():]
    return label.strip(), tag


def _infer_pour_type(detail: str, label: str, tag: str | None) -> PourType:
    for hint in (detail, label):
        for keyword, pour_type in POUR_TYPE_KEYWORDS:
            if keyword in hint:
                return pour_type
    return POUR_TYPE_BY_LABEL.get(tag, DEFAULT_POUR_TYPE)


def parse_brewing_note_text(text: str) -> BrewingNote:
    """Parse a ``【冲煮记录】`` block back into a brewing note.

    Parsed notes always get a fresh ``note-<timestamp>`` id.
    """
    params = _apply_rules(text, _PARAM_RULES) if PARAMS_SECTION in text else {}
    taste = {}
    if TASTE_SECTION in text:
        taste = {field: _score(rule, text) for field, rule in _TASTE_RULES.items()}
    notes = _section(text, NOTES_SECTION).strip() if NOTES_SECTION in text else ""

    timestamp = ids.timestamp_ms()
    return BrewingNote(
        id=ids.new_note_id(),
        timestamp=timestamp,
        **_apply_rules(text, _NOTE_RULES),
        coffee_bean_info=CoffeeBeanInfo(**_apply_rules(text, _BEAN_INFO_RULES)),
        params=BrewingParams(**params),
        taste=TasteRatings(**taste),
        rating=_score(_RATING_RULE, text),
        notes=notes,
    )
