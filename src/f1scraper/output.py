"""Writing scraped documents to disk."""

from __future__ import annotations

import json
import logging
import os
import re
from datetime import datetime, timezone
from typing import Any, Sequence

from pydantic import BaseModel, TypeAdapter

logger = logging.getLogger(__name__)

_SIZE_UNITS = ("B", "KB", "MB", "GB")


def to_jsonable(data: BaseModel | Sequence[BaseModel] | Any) -> Any:
    """Convert documents (or lists of them) to plain JSON types."""
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json")
    if isinstance(data, (list, tuple)):
        return [to_jsonable(item) for item in data]
    return TypeAdapter(Any).dump_python(data, mode="json")


def save_json(data: Any, filepath: str, pretty: bool = True, ensure_dir: bool = True) -> str:
    """Write ``data`` as JSON to ``filepath`` and return the path."""
    if ensure_dir:
        directory = os.path.dirname(filepath)
        if directory:
            os.makedirs(directory, exist_ok=True)

    text = json.dumps(to_jsonable(data), indent=2 if pretty else None, ensure_ascii=False)
    with open(filepath, "w", encoding="utf-8") as f:
        f.write(text)
    logger.info("Saved %s", filepath)
    return filepath


def generate_filename(prefix: str, extension: str = "json", include_timestamp: bool = True) -> str:
    """``prefix_2025-03-16T14-05-09.json`` (or ``prefix.json``)."""
    if not include_timestamp:
        return f"{prefix}.{extension}"
    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H-%M-%S")
    return f"{prefix}_{timestamp}.{extension}"


def generate_gp_filename(gp_name: str, year: int, extension: str = "json") -> str:
    """``"Australian Grand Prix", 2025`` -> ``2025_australian-grand-prix.json``."""
    normalized = re.sub(r"\s+", "-", gp_name.lower())
    normalized = re.sub(r"[^a-z0-9-]", "", normalized)
    return f"{year}_{normalized}.{extension}"


def format_file_size(size: float) -> str:
    unit = 0
    while size >= 1024 and unit < len(_SIZE_UNITS) - 1:
        size /= 1024
        unit += 1
    return f"{size:.2f} {_SIZE_UNITS[unit]}"


def _depth(obj: Any, depth: int = 0) -> int:
    if isinstance(obj, dict):
        children = list(obj.values())
    elif isinstance(obj, list):
        children = obj
    else:
        return depth
    if not children:
        return depth
    return max(_depth(child, depth + 1) for child in children)


def json_stats(data: Any) -> dict[str, Any]:
    """Size of the serialized document, its top-level key count and nesting depth."""
    plain = to_jsonable(data)
    size = len(json.dumps(plain, ensure_ascii=False).encode("utf-8"))
    stats: dict[str, Any] = {"size": size, "size_formatted": format_file_size(size)}
    if isinstance(plain, (dict, list)):
        stats["keys"] = len(plain)
        stats["depth"] = _depth(plain)
    return stats
