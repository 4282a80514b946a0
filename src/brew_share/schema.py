"""Data models for brew-share."""

from typing import Annotated, Literal

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

PourType = Literal["center", "circle", "ice", "other"]
ValveStatus = Literal["open", "closed", ""]

POUR_TYPES: tuple[str, ...] = ("center", "circle", "ice", "other")
VALVE_STATUSES: tuple[str, ...] = ("open", "closed")
DEFAULT_POUR_TYPE: PourType = "circle"


def format_number(value: int | float) -> str:
    """Render a number the way a JavaScript client would (no trailing ``.0``)."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _number_to_text(value):
    # Loosely typed JSON sometimes carries "45" as 45.
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return format_number(value)
    return value


def _none_to_empty(value):
    return "" if value is None else _number_to_text(value)


Text = Annotated[str, BeforeValidator(_none_to_empty)]
OptionalText = Annotated[str | None, BeforeValidator(_number_to_text)]


class _Record(BaseModel):
    """Snake-case attributes, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BlendComponent(_Record):
    """One origin bean inside a blend."""

    name: Text = ""
    percentage: int = Field(ge=1, le=100)
    origin: OptionalText = None
    process: OptionalText = None
    variety: OptionalText = None


class CoffeeBean(_Record):
    """A coffee bean in the user's inventory.

    ``capacity`` and ``remaining`` are grams kept as text, the way the
    inventory forms store them.
    """

    id: Text = ""
    name: Text = ""
    image: OptionalText = None
    price: OptionalText = None
    capacity: Text = ""
    remaining: Text = ""
    roast_level: OptionalText = None
    roast_date: OptionalText = None
    flavor: list[str] = Field(default_factory=list)
    origin: OptionalText = None
    process: OptionalText = None
    variety: OptionalText = None
    type: OptionalText = None
    notes: OptionalText = None
    timestamp: int = 0
    start_day: int | None = None
    end_day: int | None = None
    max_day: int | None = None
    blend_components: list[BlendComponent] | None = None


class Stage(_Record):
    """One pour step of a brewing method.

    ``time`` is the cumulative second at which the stage ends and ``water``
    the cumulative amount poured by then (text with unit, e.g. ``"45g"``).
    """

    time: int | float = 0
    pour_time: int | float = 0
    label: Text = ""
    water: Text = ""
    detail: Text = ""
    pour_type: PourType = DEFAULT_POUR_TYPE
    valve_status: ValveStatus = ""

    @field_validator("pour_type", mode="before")
    @classmethod
    def coerce_pour_type(cls, value):
        """Map legacy or unknown pour types (e.g. ``spiral``) to ``circle``."""
        return value if value in POUR_TYPES else DEFAULT_POUR_TYPE

    @field_validator("valve_status", mode="before")
    @classmethod
    def coerce_valve_status(cls, value):
        return value if value in VALVE_STATUSES else ""


class MethodParams(_Record):
    coffee: Text = ""
    water: Text = ""
    ratio: Text = ""
    grind_size: Text = ""
    temp: Text = ""
    video_url: Text = ""
    stages: list[Stage] = Field(default_factory=list)


class Method(_Record):
    """A brewing method recipe."""

    id: Text = ""
    name: Text = ""
    params: MethodParams = Field(default_factory=MethodParams)


class BrewingParams(_Record):
    """Parameter snapshot stored with a brewing note."""

    coffee: Text = ""
    water: Text = ""
    ratio: Text = ""
    grind_size: Text = ""
    temp: Text = ""


class CoffeeBeanInfo(_Record):
    """Bean snapshot stored with a brewing note, not a live reference."""

    name: Text = ""
    roast_level: Text = ""
    roast_date: OptionalText = None


class TasteRatings(_Record):
    acidity: int = Field(default=0, ge=0, le=5)
    sweetness: int = Field(default=0, ge=0, le=5)
    bitterness: int = Field(default=0, ge=0, le=5)
    body: int = Field(default=0, ge=0, le=5)


class BrewingNote(_Record):
    """A record of one brew and how it tasted."""

    model_config = ConfigDict(extra="allow")

    id: Text = ""
    timestamp: int = 0
    equipment: Text = ""
    method: Text = ""
    params: BrewingParams | None = None
    stages: list[Stage] | None = None
    total_time: int | float | None = None
    coffee_bean_info: CoffeeBeanInfo = Field(default_factory=CoffeeBeanInfo)
    rating: int = Field(default=0, ge=0, le=5)
    taste: TasteRatings | None = None
    notes: Text = ""
