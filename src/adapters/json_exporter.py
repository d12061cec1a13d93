"""JSON rendering of API resources for `--format json`."""

from __future__ import annotations

import json
from datetime import date
from typing import Any, Iterable

from pydantic import BaseModel


def _dump(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return [_dump(item) for item in value]
    return value


def to_json(payload: BaseModel | Iterable[BaseModel] | Any) -> str:
    """UTF-8 JSON with a stable layout (indent 2, sorted keys)."""

    if not isinstance(payload, (BaseModel, dict, str)) and isinstance(payload, Iterable):
        payload = list(payload)
    return json.dumps(_dump(payload), ensure_ascii=False, indent=2, sort_keys=True)
