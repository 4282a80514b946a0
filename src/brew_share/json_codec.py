"""JSON import and export of brewing methods."""

from __future__ import annotations

import json
import logging
from typing import Any, Iterable

from pydantic import ValidationError

from brew_share import ids
from brew_share.schema import (
    DEFAULT_POUR_TYPE,
    BrewingParams,
    CoffeeBeanInfo,
    Method,
    MethodParams,
    Stage,
    TasteRatings,
)

logger = logging.getLogger(__name__)

DEFAULT_METHOD_PARAMS: dict[str, str] = {
    "coffee": "15g",
    "water": "225g",
    "ratio": "1:15",
    "grindSize": "中细",
    "temp": "92°C",
}

_PARAM_KEYS = ("coffee", "water", "ratio", "grindSize", "temp")
_STAGE_KEYS = ("time", "pourTime", "label", "water", "detail", "pourType", "valveStatus")

EXAMPLE_METHOD_JSON = """{
  "equipment": "V60",
  "method": "改良分段式一刀流",
  "coffeeBeanInfo": {
    "name": "",
    "roastLevel": "中度烘焙",
    "roastDate": ""
  },
  "params": {
    "coffee": "15g",
    "water": "225g",
    "ratio": "1:15",
    "grindSize": "中细",
    "temp": "94°C",
    "videoUrl": "",
    "stages": [
      {
        "time": 30,
        "pourTime": 15,
        "label": "螺旋焖蒸",
        "water": "45g",
        "detail": "加大注水搅拌力度，充分激活咖啡粉层",
        "pourType": "circle"
      },
      {
        "time": 60,
        "pourTime": 20,
        "label": "快节奏中心注水",
        "water": "90g",
        "detail": "高水位快速注入加速可溶性物质释放",
        "pourType": "center"
      },
      {
        "time": 120,
        "pourTime": 30,
        "label": "分层绕圈注水",
        "water": "225g",
        "detail": "分三次间隔注水控制萃取节奏",
        "pourType": "circle"
      }
    ]
  },
  "currentTaste": {
    "acidity": 3,
    "sweetness": 3,
    "bitterness": 3,
    "body": 3
  },
  "idealTaste": {
    "acidity": 4,
    "sweetness": 4,
    "bitterness": 2,
    "body": 4
  },
  "notes": "",
  "optimizationGoal": "希望增加甜度和醇度，减少苦味，保持适中的酸度"
}"""

BEAN_TEMPLATE_JSON = """{
  "id": "",
  "name": "",
  "image": "",
  "price": "",
  "capacity": "",
  "remaining": "",
  "roastLevel": "浅度烘焙",
  "roastDate": "",
  "flavor": [],
  "origin": "",
  "process": "",
  "variety": "",
  "type": "",
  "notes": ""
}"""


def parse_method_from_json(json_string: str) -> Method | None:
    """Build a Method from an external JSON document.

    The document is untrusted: missing parameters fall back to defaults and
    unknown enum values are coerced. The imported id is never reused; every
    call assigns a fresh one.

    Args:
        json_string: JSON text with a top-level ``method`` or ``equipment``
            and ``params.stages``.

    Returns:
        The parsed Method, or None when the JSON is malformed, has neither
        ``method`` nor ``equipment``, or has no stages.
    """
    try:
        return _build_method(json.loads(json_string))
    except (TypeError, ValueError, RecursionError, ValidationError) as exc:
        logger.debug("method JSON rejected: %s", exc)
        return None


def _build_method(data: Any) -> Method:
    if not isinstance(data, dict):
        raise ValueError("导入的JSON必须是对象")
    if not data.get("method") and not data.get("equipment"):
        raise ValueError("导入的JSON缺少必要字段 (method)")

    params = data.get("params")
    if not isinstance(params, dict):
        params = {}
    raw_stages = params.get("stages")
    stages = [_build_stage(raw) for raw in raw_stages] if isinstance(raw_stages, list) else []
    if not stages:
        raise ValueError("导入的JSON缺少冲煮步骤")

    return Method(
        id=ids.new_method_id(),
        name=data.get("method") or f"{data.get('equipment')}优化方案",
        params=MethodParams(
            **{key: params.get(key) or default for key, default in DEFAULT_METHOD_PARAMS.items()},
            videoUrl=params.get("videoUrl") or "",
            stages=stages,
        ),
    )


def _build_stage(raw: Any) -> Stage:
    if not isinstance(raw, dict):
        raise ValueError(f"冲煮步骤格式无效: {raw!r}")
    return Stage(
        time=raw.get("time") or 0,
        pour_time=raw.get("pourTime") or 0,
        label=raw.get("label") or "",
        water=raw.get("water") or "",
        detail=raw.get("detail") or "",
        pour_type=raw.get("pourType") or DEFAULT_POUR_TYPE,
        valve_status=raw.get("valveStatus") or "",
    )


def generate_optimization_json(
    equipment: str,
    method: str,
    coffee_bean_info: CoffeeBeanInfo,
    params: MethodParams | BrewingParams,
    stages: Iterable[Stage] | None,
    current_taste: TasteRatings,
    ideal_taste: TasteRatings,
    notes: str,
    optimization_goal: str,
) -> str:
    """Assemble the document sent out for recipe optimization."""
    config_object = {
        "equipment": equipment,
        "method": method,
        "coffeeBeanInfo": coffee_bean_info.model_dump(by_alias=True, exclude_none=True),
        "params": {**_dump_params(params), "stages": _dump_stages(stages)},
        "currentTaste": current_taste.model_dump(by_alias=True),
        "idealTaste": ideal_taste.model_dump(by_alias=True),
        "notes": notes,
        "optimizationGoal": optimization_goal,
    }
    return _to_json(config_object)


def method_to_json(method: Method) -> str:
    """Serialize a Method for sharing."""
    config_object = {
        "method": method.name,
        "params": {**_dump_params(method.params), "stages": _dump_stages(method.params.stages)},
    }
    return _to_json(config_object)


def clean_json_for_optimization(json_string: str) -> str:
    """Strip a document down to the keys the optimizer understands.

    Keys missing from the input stay missing. Input that is not a JSON object
    is returned unchanged.
    """
    try:
        data = json.loads(json_string)
    except (TypeError, ValueError, RecursionError):
        return json_string
    if not isinstance(data, dict):
        return json_string

    params = data.get("params")
    if not isinstance(params, dict):
        params = {}
    cleaned_params = _pick(params, _PARAM_KEYS)
    stages = params.get("stages")
    if isinstance(stages, list):
        cleaned_params["stages"] = [_pick(stage, _STAGE_KEYS) if isinstance(stage, dict) else {} for stage in stages]

    cleaned = _pick(data, ("equipment", "method"))
    cleaned["params"] = cleaned_params
    cleaned.update(_pick(data, ("currentTaste", "idealTaste", "notes", "optimizationGoal")))
    return _to_json(cleaned)


def example_method_json() -> str:
    return EXAMPLE_METHOD_JSON


def bean_template_json() -> str:
    """Blank coffee bean document used as an image-recognition template."""
    return BEAN_TEMPLATE_JSON


def _dump_params(params: MethodParams | BrewingParams) -> dict[str, str]:
    dumped = params.model_dump(by_alias=True)
    return {key: dumped[key] for key in _PARAM_KEYS}


def _dump_stages(stages: Iterable[Stage] | None) -> list[dict[str, Any]]:
    return [stage.model_dump(by_alias=True) for stage in stages or []]


def _pick(source: dict[str, Any], keys: Iterable[str]) -> dict[str, Any]:
    return {key: source[key] for key in keys if key in source}


def _to_json(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, indent=2)
