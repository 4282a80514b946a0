"""Render records as shareable annotated text."""

from __future__ import annotations

from brew_share.schema import BrewingNote, BrewingParams, CoffeeBean, Method, MethodParams, Stage, format_number
from brew_share.text.markers import (
    BEAN_FIELD_LABELS,
    BEAN_NAME_LABEL,
    BEAN_NOTES_LABEL,
    BLEND_SECTION,
    BREWING_METHOD_HEADER,
    BREWING_METHOD_MARKER,
    BREWING_NOTE_HEADER,
    BREWING_NOTE_MARKER,
    CAPACITY_LABEL,
    COFFEE_BEAN_HEADER,
    COFFEE_BEAN_MARKER,
    EQUIPMENT_LABEL,
    FLAVOR_LABEL,
    METHOD_LABEL,
    NOT_SET,
    NOTE_SHARE_FOOTER,
    NOTES_SECTION,
    PARAM_LABELS,
    PARAMS_SECTION,
    PRICE_LABEL,
    RATING_LABEL,
    ROAST_LEVEL_LABEL,
    SHARE_FOOTER,
    STEPS_SECTION,
    TASTE_LABELS,
    TASTE_SECTION,
    UNKNOWN,
    pour_type_label,
)


def bean_to_readable_text(bean: CoffeeBean) -> str:
    """Render a coffee bean as a shareable text block."""
    remaining = f" (剩余{bean.remaining}g)" if bean.remaining != bean.capacity else ""
    lines = [
        f"{COFFEE_BEAN_HEADER}{bean.name}",
        f"{CAPACITY_LABEL} {bean.capacity}g{remaining}",
        f"{ROAST_LEVEL_LABEL} {bean.roast_level or UNKNOWN}",
    ]

    for field, label in BEAN_FIELD_LABELS.items():
        value = getattr(bean, field)
        if value:
            lines.append(f"{label} {value}")
    if bean.price:
        lines.append(f"{PRICE_LABEL} {bean.price}元")
    if bean.flavor:
        lines.append(f"{FLAVOR_LABEL} {', '.join(bean.flavor)}")

    if bean.blend_components:
        lines.extend(["", BLEND_SECTION])
        for index, component in enumerate(bean.blend_components, start=1):
            details = [part for part in (component.origin, component.process, component.variety) if part]
            lines.append(f"  {index}. {component.percentage}% {' | '.join(details)}")

    if bean.notes:
        lines.extend(["", f"{BEAN_NOTES_LABEL} {bean.notes}"])

    return _finish(lines, f"\n{SHARE_FOOTER}", COFFEE_BEAN_MARKER)


def method_to_readable_text(method: Method) -> str:
    """Render a brewing method as a shareable text block.

    Unset parameters are written as ``未设置`` so the parser can tell them
    apart from real values.
    """
    params = method.params
    lines = [f"{BREWING_METHOD_HEADER}{method.name}", ""]
    lines.extend(_param_lines(params))

    if params.stages:
        lines.extend(["", STEPS_SECTION, ""])
        for index, stage in enumerate(params.stages, start=1):
            lines.append(format_stage_line(index, stage))
            if stage.detail:
                lines.append(f"   {stage.detail}")
            lines.append("")

    return _finish(lines, SHARE_FOOTER, BREWING_METHOD_MARKER)


def format_stage_line(index: int, stage: Stage) -> str:
    minutes, seconds = divmod(stage.time, 60)
    time_text = f"{int(minutes)}分{format_number(seconds)}秒"
    pour_time_text = f" (注水{format_number(stage.pour_time)}秒)" if stage.pour_time else ""
    pour_type_text = f" [{pour_type_label(stage.pour_type)}]" if stage.pour_type else ""
    return f"{index}. [{time_text}]{pour_time_text}{pour_type_text} {stage.label} - {stage.water}"


def brewing_note_to_readable_text(note: BrewingNote) -> str:
    """Render a brewing note as a shareable text block."""
    bean_info = note.coffee_bean_info
    lines = [
        BREWING_NOTE_HEADER,
        f"{EQUIPMENT_LABEL} {note.equipment or NOT_SET}",
        f"{METHOD_LABEL} {note.method or NOT_SET}",
        f"{BEAN_NAME_LABEL} {bean_info.name or NOT_SET}",
        f"{ROAST_LEVEL_LABEL} {bean_info.roast_level or NOT_SET}",
    ]

    if note.params:
        lines.extend(["", PARAMS_SECTION])
        lines.extend(_param_lines(note.params))

    if note.taste:
        lines.extend(["", TASTE_SECTION])
        for field, label in TASTE_LABELS.items():
            lines.append(f"{label} {getattr(note.taste, field) or 0}/5")

    if note.rating:
        lines.extend(["", f"{RATING_LABEL} {note.rating}/5"])

    if note.notes:
        lines.extend(["", NOTES_SECTION, note.notes])

    return _finish(lines, f"\n{NOTE_SHARE_FOOTER}", BREWING_NOTE_MARKER)


def to_readable_text(record: CoffeeBean | Method | BrewingNote) -> str:
    """Render any shareable record with its matching formatter."""
    if isinstance(record, CoffeeBean):
        return bean_to_readable_text(record)
    if isinstance(record, Method):
        return method_to_readable_text(record)
    if isinstance(record, BrewingNote):
        return brewing_note_to_readable_text(record)
    raise TypeError(f"Unsupported record type: {type(record).__name__}")


def _param_lines(params: MethodParams | BrewingParams) -> list[str]:
    return [f"{label} {getattr(params, field) or NOT_SET}" for field, label in PARAM_LABELS.items()]


def _finish(lines: list[str], footer: str, marker: str) -> str:
    body = "\n".join(lines) + "\n"
    return f"{body}{footer}\n\n{marker}"
