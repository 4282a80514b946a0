"""Tests for schema models."""

import pytest
from pydantic import ValidationError

from brew_share import BrewingNote, CoffeeBean, Method, Stage, TasteRatings
from brew_share.schema import BlendComponent, format_number


def test_coffee_bean_defaults():
    """CoffeeBean with no data should work."""
    bean = CoffeeBean()
    assert bean.name == ""
    assert bean.capacity == ""
    assert bean.roast_level is None
    assert bean.flavor == []
    assert bean.blend_components is None


def test_method_defaults_have_empty_params():
    method = Method()
    assert method.params.coffee == ""
    assert method.params.video_url == ""
    assert method.params.stages == []


def test_stage_accepts_camel_case_keys():
    stage = Stage.model_validate(
        {"time": 30, "pourTime": 10, "label": "焖蒸", "water": "30g", "pourType": "center", "valveStatus": "open"}
    )
    assert stage.pour_time == 10
    assert stage.pour_type == "center"
    assert stage.valve_status == "open"


def test_stage_dumps_camel_case_keys():
    dumped = Stage(time=30, pour_time=10).model_dump(by_alias=True)
    assert list(dumped) == ["time", "pourTime", "label", "water", "detail", "pourType", "valveStatus"]


def test_stage_coerces_legacy_pour_type():
    assert Stage(pour_type="spiral").pour_type == "circle"
    assert Stage(pour_type=None).pour_type == "circle"


def test_stage_coerces_unknown_valve_status():
    assert Stage(valve_status="halfopen").valve_status == ""
    assert Stage(valve_status="closed").valve_status == "closed"


def test_text_fields_accept_numbers():
    stage = Stage(water=45, label=None)
    bean = CoffeeBean(capacity=200.0, price=88)
    assert stage.water == "45"
    assert stage.label == ""
    assert bean.capacity == "200"
    assert bean.price == "88"


def test_taste_ratings_are_bounded():
    with pytest.raises(ValidationError):
        TasteRatings(acidity=6)


def test_blend_component_percentage_is_bounded():
    with pytest.raises(ValidationError):
        BlendComponent(name="巴西", percentage=0)


def test_brewing_note_keeps_unknown_fields():
    note = BrewingNote.model_validate({"id": "note-1", "coffeeBeanInfo": {"name": "耶加"}, "brewer": "Ann"})
    assert note.coffee_bean_info.name == "耶加"
    assert note.model_extra == {"brewer": "Ann"}


def test_coffee_bean_json_deserialization():
    """CoffeeBean should deserialize from camelCase JSON."""
    json_str = '{"name": "曼特宁", "roastLevel": "深度烘焙", "blendComponents": [{"name": "A", "percentage": 50}]}'
    bean = CoffeeBean.model_validate_json(json_str)
    assert bean.roast_level == "深度烘焙"
    assert bean.blend_components[0].percentage == 50


def test_format_number_drops_trailing_zero():
    assert format_number(30) == "30"
    assert format_number(30.0) == "30"
    assert format_number(30.5) == "30.5"
