"""brew-share: Share coffee beans, brewing methods and brewing notes as text or JSON."""

from brew_share.core import extract_json_from_text
from brew_share.json_codec import (
    clean_json_for_optimization,
    generate_optimization_json,
    method_to_json,
    parse_method_from_json,
)
from brew_share.schema import (
    BlendComponent,
    BrewingNote,
    BrewingParams,
    CoffeeBean,
    CoffeeBeanInfo,
    Method,
    MethodParams,
    Stage,
    TasteRatings,
)
from brew_share.text import (
    bean_to_readable_text,
    brewing_note_to_readable_text,
    method_to_readable_text,
)

__version__ = "0.1.0"

__all__ = [
    "extract_json_from_text",
    "parse_method_from_json",
    "generate_optimization_json",
    "method_to_json",
    "clean_json_for_optimization",
    "bean_to_readable_text",
    "method_to_readable_text",
    "brewing_note_to_readable_text",
    "BlendComponent",
    "BrewingNote",
    "BrewingParams",
    "CoffeeBean",
    "CoffeeBeanInfo",
    "Method",
    "MethodParams",
    "Stage",
    "TasteRatings",
    "__version__",
]
