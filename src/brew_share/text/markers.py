"""Fixed vocabulary of the shareable text format.

Every string here is part of the format contract: text produced by older
clients has to keep parsing, so none of these may change.
"""

import re

from brew_share.schema import PourType

COFFEE_BEAN_MARKER = "@DATA_TYPE:COFFEE_BEAN@"
BREWING_METHOD_MARKER = "@DATA_TYPE:BREWING_METHOD@"
BREWING_NOTE_MARKER = "@DATA_TYPE:BREWING_NOTE@"

LEGACY_JSON_PATTERN = re.compile(r"<!--JSON_DATA:(.*?)-->", re.DOTALL)
LEGACY_METHOD_ID_PATTERN = re.compile(r"@METHOD_ID:(method-[a-zA-Z0-9-]+)@")

COFFEE_BEAN_HEADER = "【咖啡豆】"
BREWING_METHOD_HEADER = "【冲煮方案】"
BREWING_NOTE_HEADER = "【冲煮记录】"

NOT_SET = "未设置"
UNKNOWN = "未知"
PLACEHOLDERS = frozenset({NOT_SET, UNKNOWN})

SHARE_FOOTER = "--- 复制以上内容可分享和导入 ---"
NOTE_SHARE_FOOTER = "--- 复制全部内容可分享和导入 ---"
SECTION_END = "\n---"

BLEND_SECTION = "拼配成分:"
STEPS_SECTION = "冲煮步骤:"
PARAMS_SECTION = "参数设置:"
TASTE_SECTION = "风味评分:"
NOTES_SECTION = "笔记:"

CAPACITY_LABEL = "容量:"
ROAST_LEVEL_LABEL = "烘焙度:"
PRICE_LABEL = "价格:"
FLAVOR_LABEL = "风味标签:"
BEAN_NOTES_LABEL = "备注:"
EQUIPMENT_LABEL = "设备:"
METHOD_LABEL = "方法:"
BEAN_NAME_LABEL = "咖啡豆:"
RATING_LABEL = "综合评分:"

# Optional one-line bean fields, in display order.
BEAN_FIELD_LABELS: dict[str, str] = {
    "roast_date": "烘焙日期:",
    "origin": "产地:",
    "process": "处理法:",
    "variety": "品种:",
    "type": "类型:",
}

PARAM_LABELS: dict[str, str] = {
    "coffee": "咖啡粉量:",
    "water": "水量:",
    "ratio": "比例:",
    "grind_size": "研磨度:",
    "temp": "水温:",
}

TASTE_LABELS: dict[str, str] = {
    "acidity": "酸度:",
    "sweetness": "甜度:",
    "bitterness": "苦度:",
    "body": "醇厚度:",
}

POUR_TYPE_LABELS: dict[PourType, str] = {
    "center": "中心注水",
    "circle": "绕圈注水",
    "ice": "冰块注水",
    "other": "其他方式",
}
POUR_TYPE_BY_LABEL: dict[str, PourType] = {label: key for key, label in POUR_TYPE_LABELS.items()}

# Keyword hints used when reading pour types back from free text.
POUR_TYPE_KEYWORDS: tuple[tuple[str, PourType], ...] = (
    ("中心", "center"),
    ("中央", "center"),
    ("冰", "ice"),
)


def pour_type_label(pour_type: str | None) -> str:
    return POUR_TYPE_LABELS.get(pour_type, POUR_TYPE_LABELS["circle"])
