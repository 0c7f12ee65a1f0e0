"""Quantity codec for the per-food-item selection stored on a booking.

The persisted form is a JSON object mapping the food item id (as a string)
to an integer quantity, e.g. ``{"1": 2, "3": 1}``. Anything that cannot be
read as such an object decodes to an empty mapping, so every item falls back
to ``DEFAULT_QUANTITY``.
"""
import json
import logging
from typing import Dict, Mapping, Optional

logger = logging.getLogger(__name__)

DEFAULT_QUANTITY = 1


def decode(text: Optional[str]) -> Dict[int, int]:
    """Decode stored quantities; malformed text degrades to ``{}``"""
    if text is None or not text.strip():
        return {}

    try:
        raw = json.loads(text)
    except ValueError:
        logger.warning("Unreadable food quantities %r, using default quantities", text)
        return {}

    if not isinstance(raw, dict):
        logger.warning("Food quantities %r are not an object, using default quantities", text)
        return {}

    quantities: Dict[int, int] = {}
    for key, value in raw.items():
        try:
            item_id = int(key)
        except (TypeError, ValueError):
            logger.warning("Food quantities %r have a non-numeric id, using default quantities", text)
            return {}
        # 2.0 reads as 2, 2.5 is rejected
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        if isinstance(value, bool) or not isinstance(value, int):
            logger.warning("Food quantities %r have a non-integer quantity, using default quantities", text)
            return {}
        # non-positive entries fall back to the default
        if value >= 1:
            quantities[item_id] = value
    return quantities


def encode(quantities: Mapping[int, int]) -> str:
    return json.dumps({str(item_id): qty for item_id, qty in sorted(quantities.items())})


def quantity_for(quantities: Mapping[int, int], item_id: Optional[int]) -> int:
    return quantities.get(item_id, DEFAULT_QUANTITY)
