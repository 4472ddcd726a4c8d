"""Grid layout payload conversion for caller-side persistence."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from gridfit.core.grid import GridEngine
from gridfit.core.models import GridItem

PAYLOAD_VERSION = 1


@dataclass(frozen=True, slots=True)
class ItemRecord:
    """Serializable placed-item record."""

    item_id: str
    x: int
    y: int
    width: int
    height: int


def grid_to_payload(engine: GridEngine) -> dict[str, object]:
    """Convert grid size and placed items to a JSON-serializable payload."""
    return {
        "version": PAYLOAD_VERSION,
        "width": engine.width,
        "height": engine.height,
        "items": [
            {
                "id": item.item_id,
                "anchor": [item.grid_x, item.grid_y],
                "size": [item.width, item.height],
            }
            for item in engine.placed_items
            if item.is_placed
        ],
    }


def _pair(value: object, label: str) -> tuple[int, int]:
    if not isinstance(value, list) or len(value) != 2:
        raise ValueError(f"Item {label} must be a 2-item list.")
    first, second = value
    if not all(isinstance(v, int) and not isinstance(v, bool) for v in (first, second)):
        raise ValueError(f"Item {label} must hold integers.")
    return first, second


def _int_field(payload: dict[str, object], key: str) -> int:
    raw = payload.get(key)
    if not isinstance(raw, (int, str)):
        raise ValueError(f"Payload {key} must be int-compatible.")
    return int(raw)


def payload_to_records(payload: dict[str, object]) -> tuple[int, int, list[ItemRecord]]:
    """Validate a payload and return grid size plus item records."""
    if _int_field(payload, "version") != PAYLOAD_VERSION:
        raise ValueError("Unsupported grid payload version.")
    width = _int_field(payload, "width")
    height = _int_field(payload, "height")

    raw_items = payload.get("items")
    if not isinstance(raw_items, list):
        raise ValueError("Payload items must be a list.")

    records: list[ItemRecord] = []
    seen: set[str] = set()
    for entry in raw_items:
        if not isinstance(entry, dict):
            raise ValueError("Each payload item must be an object.")
        try:
            item_id = str(entry["id"])
            x, y = _pair(entry["anchor"], "anchor")
            item_width, item_height = _pair(entry["size"], "size")
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError("Malformed item entry in grid payload.") from exc
        if item_width < 1 or item_height < 1:
            raise ValueError(f"Item {item_id} footprint must be at least 1x1.")
        if item_id in seen:
            raise ValueError(f"Duplicate item id in grid payload: {item_id}.")
        seen.add(item_id)
        records.append(ItemRecord(item_id=item_id, x=x, y=y, width=item_width, height=item_height))
    return width, height, records


def check_records_fit(width: int, height: int, records: list[ItemRecord]) -> None:
    """Raise ValueError unless every record fits in bounds without overlap."""
    taken = np.zeros((height, width), dtype=bool)
    for record in records:
        if (
            record.x < 0
            or record.y < 0
            or record.x + record.width > width
            or record.y + record.height > height
        ):
            raise ValueError(f"Item {record.item_id} at ({record.x}, {record.y}) is outside {width}x{height}.")
        region = taken[record.y : record.y + record.height, record.x : record.x + record.width]
        if region.any():
            raise ValueError(f"Item {record.item_id} overlaps another item at ({record.x}, {record.y}).")
        region[:] = True


def restore_payload(engine: GridEngine, payload: dict[str, object]) -> list[GridItem]:
    """Replace the engine's layout with the payload's; nothing changes on error."""
    width, height, records = payload_to_records(payload)
    if not engine.config.accepts_size(width, height):
        raise ValueError(f"Payload grid size {width}x{height} is outside configured limits.")
    check_records_fit(width, height, records)

    engine.clear()
    engine.set_grid_size(width, height)
    items: list[GridItem] = []
    for record in records:
        item = GridItem(width=record.width, height=record.height, item_id=record.item_id)
        engine.place(item, record.x, record.y)
        items.append(item)
    return items
