"""Tests for method JSON import and export."""

import json
import re

from brew_share import (
    CoffeeBean,
    CoffeeBeanInfo,
    Method,
    MethodParams,
    Stage,
    TasteRatings,
    clean_json_for_optimization,
    generate_optimization_json,
    method_to_json,
    parse_method_from_json,
)
from brew_share.json_codec import bean_template_json, example_method_json


def _method_json(**params) -> str:
    params.setdefault("stages", [{"time": 30, "label": "焖蒸", "water": "30g"}])
    return json.dumps({"method": "测试方案", "params": params}, ensure_ascii=False)


def test_parse_method_from_json_example():
    """The bundled example document should import as a method."""
    method = parse_method_from_json(example_method_json())

    assert method is not None
    assert method.name == "改良分段式一刀流"
    assert method.params.temp == "94°C"
    assert [s.pour_type for s in method.params.stages] == ["circle", "center", "circle"]
    assert method.params.stages[1].pour_time == 20


def test_parse_method_from_json_applies_defaults():
    """Missing params should fall back to the default recipe values."""
    method = parse_method_from_json(_method_json())

    assert method.params.coffee == "15g"
    assert method.params.water == "225g"
    assert method.params.ratio == "1:15"
    assert method.params.grind_size == "中细"
    assert method.params.temp == "92°C"
    assert method.params.video_url == ""


def test_parse_method_from_json_stage_defaults():
    stage = parse_method_from_json(_method_json(stages=[{}])).params.stages[0]

    assert stage == Stage(time=0, pour_time=0, label="", water="", detail="", pour_type="circle", valve_status="")


def test_parse_method_from_json_rejects_empty_stages():
    assert parse_method_from_json('{"method": "X", "params": {}}') is None
    assert parse_method_from_json('{"method": "X", "params": {"stages": []}}') is None


def test_parse_method_from_json_rejects_missing_name_fields():
    assert parse_method_from_json("{}") is None
    assert parse_method_from_json('{"params": {"stages": [{"time": 30}]}}') is None


def test_parse_method_from_json_rejects_malformed_input():
    """Malformed documents or invalid stages should return None."""
    assert parse_method_from_json("not json") is None
    assert parse_method_from_json("[1, 2]") is None
    assert parse_method_from_json(None) is None
    assert parse_method_from_json('{"method": "X", "params": {"stages": [1]}}') is None
    assert parse_method_from_json('{"method": "X", "params": {"stages": [{"time": "soon"}]}}') is None


def test_parse_method_from_json_names_by_equipment():
    method = parse_method_from_json('{"equipment": "V60", "params": {"stages": [{"time": 30}]}}')

    assert method.name == "V60优化方案"


def test_parse_method_from_json_coerces_enums():
    """Unknown pourType and valveStatus values should be coerced."""
    stages = [
        {"time": 30, "pourType": "spiral", "valveStatus": "halfopen"},
        {"time": 60, "pourType": "ice", "valveStatus": "closed"},
    ]

    method = parse_method_from_json(_method_json(stages=stages))

    assert [(s.pour_type, s.valve_status) for s in method.params.stages] == [("circle", ""), ("ice", "closed")]


def test_parse_method_from_json_coerces_numeric_text():
    method = parse_method_from_json(_method_json(coffee=18, stages=[{"time": 30, "water": 45}]))

    assert method.params.coffee == "18"
    assert method.params.stages[0].water == "45"


def test_parse_method_from_json_always_fresh_id(mocker):
    """Imported methods should never reuse the document id."""
    data = json.dumps({"id": "keep-me", "method": "X", "params": {"stages": [{"time": 30}]}})

    first = parse_method_from_json(data)
    second = parse_method_from_json(data)

    assert first.id != "keep-me"
    assert first.id != second.id

    mocker.patch("brew_share.ids.timestamp_ms", return_value=1700000000000)
    assert re.fullmatch(r"1700000000000-[0-9a-z]{9}", parse_method_from_json(data).id)


def test_method_to_json_shape():
    """method_to_json() should emit the method name, params and stages."""
    method = Method(
        id="m-1",
        name="一刀流",
        params=MethodParams(coffee="15g", water="225g", ratio="1:15", grind_size="中细", temp="92°C",
                            video_url="https://example.com", stages=[Stage(time=30, label="焖蒸", water="30g")]),
    )

    output = method_to_json(method)
    data = json.loads(output)

    assert output.startswith('{\n  "method": "一刀流",\n  "params": {\n    "coffee": "15g"')
    assert list(data) == ["method", "params"]
    assert list(data["params"]) == ["coffee", "water", "ratio", "grindSize", "temp", "stages"]
    assert data["params"]["stages"][0] == {
        "time": 30,
        "pourTime": 0,
        "label": "焖蒸",
        "water": "30g",
        "detail": "",
        "pourType": "circle",
        "valveStatus": "",
    }


def test_method_to_json_parses_back():
    method = parse_method_from_json(example_method_json())

    again = parse_method_from_json(method_to_json(method))

    assert again.name == method.name
    assert again.params.stages == method.params.stages
    assert again.id != method.id


def test_generate_optimization_json():
    """The optimization document should carry beans, params and taste."""
    output = generate_optimization_json(
        "V60",
        "一刀流",
        CoffeeBeanInfo(name="耶加雪菲", roast_level="浅度烘焙"),
        MethodParams(coffee="15g", water="225g", ratio="1:15", grind_size="中细", temp="92°C"),
        [Stage(time=30, label="焖蒸", water="30g")],
        TasteRatings(acidity=3, sweetness=3, bitterness=3, body=3),
        TasteRatings(acidity=4, sweetness=4, bitterness=2, body=4),
        "",
        "更甜",
    )
    data = json.loads(output)

    assert list(data) == [
        "equipment",
        "method",
        "coffeeBeanInfo",
        "params",
        "currentTaste",
        "idealTaste",
        "notes",
        "optimizationGoal",
    ]
    assert data["coffeeBeanInfo"] == {"name": "耶加雪菲", "roastLevel": "浅度烘焙"}
    assert "videoUrl" not in data["params"]
    assert data["params"]["stages"][0]["label"] == "焖蒸"
    assert data["idealTaste"]["bitterness"] == 2
    assert "更甜" in output


def test_generate_optimization_json_without_stages():
    output = generate_optimization_json(
        "V60", "一刀流", CoffeeBeanInfo(), MethodParams(), None, TasteRatings(), TasteRatings(), "", ""
    )

    assert json.loads(output)["params"]["stages"] == []


def test_clean_json_for_optimization_strips_unknown_keys():
    """Keys the optimizer does not read should be removed."""
    raw = json.dumps(
        {
            "id": "drop",
            "equipment": "V60",
            "method": "一刀流",
            "coffeeBeanInfo": {"name": "drop"},
            "params": {
                "coffee": "15g",
                "videoUrl": "drop",
                "stages": [{"time": 30, "label": "焖蒸", "extra": "drop"}],
            },
            "notes": None,
            "optimizationGoal": "更甜",
        }
    )

    cleaned = json.loads(clean_json_for_optimization(raw))

    assert cleaned == {
        "equipment": "V60",
        "method": "一刀流",
        "params": {"coffee": "15g", "stages": [{"time": 30, "label": "焖蒸"}]},
        "notes": None,
        "optimizationGoal": "更甜",
    }


def test_clean_json_for_optimization_keeps_key_order():
    cleaned = json.loads(clean_json_for_optimization(example_method_json()))

    assert list(cleaned) == ["equipment", "method", "params", "currentTaste", "idealTaste", "notes", "optimizationGoal"]
    assert list(cleaned["params"]) == ["coffee", "water", "ratio", "grindSize", "temp", "stages"]


def test_clean_json_for_optimization_returns_bad_input_unchanged():
    assert clean_json_for_optimization("{not json") == "{not json"
    assert clean_json_for_optimization("null") == "null"


def test_bean_template_json_is_a_valid_bean():
    bean = CoffeeBean.model_validate_json(bean_template_json())

    assert bean.roast_level == "浅度烘焙"
    assert bean.flavor == []


def test_parse_method_from_json_rejects_deeply_nested_input():
    """Nesting deeper than the decoder can handle should be rejected, not raised."""
    assert parse_method_from_json("[" * 100000) is None


def test_clean_json_for_optimization_returns_deeply_nested_input_unchanged():
    deep = "[" * 100000

    assert clean_json_for_optimization(deep) == deep
