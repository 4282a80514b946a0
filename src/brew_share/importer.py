"""Import shared brewing methods into an existing collection."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Iterable

from brew_share import ids
from brew_share.core import extract_json_from_text
from brew_share.exceptions import DuplicateMethodError, EmptyImportError, ImportFormatError
from brew_share.json_codec import parse_method_from_json
from brew_share.schema import Method

logger = logging.getLogger(__name__)


def _parse_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class ImportConfig:
    allow_duplicate_names: bool = False

    @classmethod
    def from_env(cls) -> "ImportConfig":
        return cls(
            allow_duplicate_names=_parse_bool(os.getenv("BREW_SHARE_ALLOW_DUPLICATE_NAMES"), False),
        )


def import_method(
    data: str,
    existing_methods: Iterable[Method] = (),
    *,
    config: ImportConfig | None = None,
) -> Method:
    """Import a method from pasted JSON or shared method text.

    Args:
        data: Method JSON, or a shared ``【冲煮方案】`` text block.
        existing_methods: Methods already in the collection.
        config: Import options. Defaults to ImportConfig().

    Returns:
        The imported Method with a freshly generated id.

    Raises:
        EmptyImportError: If ``data`` is blank.
        ImportFormatError: If ``data`` is not a method with at least one stage.
        DuplicateMethodError: If a method with the same name already exists.
    """
    config = config or ImportConfig()
    if not data or not data.strip():
        raise EmptyImportError("请输入要导入的数据")

    method = parse_method_from_json(data)
    if method is None:
        parsed = extract_json_from_text(data)
        if isinstance(parsed, Method) and parsed.params.stages:
            method = parsed.model_copy(update={"id": ids.new_method_id()})

    if method is None:
        logger.info("method import rejected: unrecognized input")
        raise ImportFormatError("解析JSON失败，请检查格式")

    if not config.allow_duplicate_names and any(m.name == method.name for m in existing_methods):
        logger.info("method import rejected: duplicate name %r", method.name)
        raise DuplicateMethodError(f'已存在同名方案"{method.name}"，请修改后再导入')

    return method
