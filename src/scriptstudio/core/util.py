"""Small utility functions."""

import json
from datetime import datetime
from enum import Enum
from typing import Any

def safe_json(obj: Any) -> str:
    """Safely serialize object to JSON, handling dataclasses, enums and datetimes."""
    def serialize_item(item):
        if isinstance(item, datetime):
            return item.isoformat()
        elif isinstance(item, Enum):
            return item.value
        elif hasattr(item, 'to_dict'):  # result types with their own wire shape
            return serialize_item(item.to_dict())
        elif hasattr(item, '__dict__'):  # dataclass or object
            return {k: serialize_item(v) for k, v in item.__dict__.items()}
        elif isinstance(item, (list, tuple)):
            return [serialize_item(x) for x in item]
        elif isinstance(item, dict):
            return {k: serialize_item(v) for k, v in item.items()}
        else:
            return item

    try:
        return json.dumps(serialize_item(obj), indent=2, ensure_ascii=False)
    except Exception as e:
        return f"<serialization error: {e}>"

def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positive values."""
    return int(value + 0.5)
