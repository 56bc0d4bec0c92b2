"""Snapshot persistence.

Buildings are stored as the JSON dump of the ``Building`` model. Loading
normalises the raw payload first (unknown enum values, negative numbers,
missing drawing modes, roof fields that contradict the roof type) and then
lets the validators decide whether the result is usable. Nothing here
raises for bad data; failures come back as ``PersistenceResult(ok=False)``.
"""

from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as ModelValidationError

from outline_builder.models.building import Building, DrawingModes
from outline_builder.models.floor import CardinalDirection, RoofOrientation, RoofType
from outline_builder.validators.structural import validate_building

logger = logging.getLogger(__name__)


class PersistenceResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    ok: bool
    building: Building | None = None
    error: str | None = None


def _number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _choice(value: Any, allowed: list[str], default: str) -> str:
    return value if isinstance(value, str) and value in allowed else default


def _normalize_roof(raw: Any, height: float) -> dict[str, Any]:
    raw = raw if isinstance(raw, dict) else {}
    roof_type = _choice(raw.get("type"), [t.value for t in RoofType], RoofType.FLAT.value)

    slope = _number(raw.get("slope_value"))
    ridge = _number(raw.get("ridge_height"))
    parapet = _number(raw.get("parapet_height"))
    slope = slope if slope is not None and slope >= 0 else 0.0
    ridge = ridge if ridge is not None and ridge >= height else max(height, 0.0)
    parapet = parapet if parapet is not None and parapet >= 0 else 0.0

    if roof_type == RoofType.FLAT.value:
        slope = 0.0
        ridge = height + parapet
    else:
        parapet = 0.0

    return {
        "type": roof_type,
        "slope_value": slope,
        "ridge_height": ridge,
        "parapet_height": parapet,
        "low_side_direction": _choice(
            raw.get("low_side_direction"),
            [d.value for d in CardinalDirection],
            CardinalDirection.SOUTH.value,
        ),
        "orientation": _choice(
            raw.get("orientation"),
            [o.value for o in RoofOrientation],
            RoofOrientation.NORTH_SOUTH.value,
        ),
    }


def _normalize_floor(raw: Any) -> Any:
    if not isinstance(raw, dict):
        return raw
    height = _number(raw.get("height"))
    height = height if height is not None and height > 0 else 0.0
    return {
        **raw,
        "height": height,
        "locked": raw.get("locked") if isinstance(raw.get("locked"), bool) else False,
        "roof": _normalize_roof(raw.get("roof"), height),
    }


def normalize_building_payload(raw: Any) -> dict[str, Any]:
    """Coerce a decoded JSON payload into something ``Building`` can parse."""
    raw = raw if isinstance(raw, dict) else {}
    floors = raw.get("floors")
    defaults = DrawingModes().model_dump()
    modes = raw.get("modes") if isinstance(raw.get("modes"), dict) else {}
    selected = raw.get("selected_edge_id")
    return {
        **raw,
        "floors": [_normalize_floor(f) for f in floors] if isinstance(floors, list) else [],
        "modes": {key: modes.get(key, value) for key, value in defaults.items()},
        "selected_edge_id": selected if isinstance(selected, str) else None,
        "last_error": None,
    }


def save_building(building: Building, path: str | Path) -> PersistenceResult:
    try:
        building.save(path)
    except OSError as exc:
        logger.warning("Could not save building to %s: %s", path, exc)
        return PersistenceResult(ok=False, error=f"Failed to save building: {exc}")
    return PersistenceResult(ok=True, building=building)


def load_building(path: str | Path) -> PersistenceResult:
    """Load and validate a snapshot.

    A missing file is not an error: the result is ``ok`` with no building.
    """
    path = Path(path)
    if not path.exists():
        return PersistenceResult(ok=True)

    try:
        payload = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Could not read building from %s: %s", path, exc)
        return PersistenceResult(ok=False, error=f"Failed to parse JSON: {exc}")

    try:
        building = Building.model_validate(normalize_building_payload(payload))
    except ModelValidationError as exc:
        logger.warning("Stored building in %s is malformed: %s", path, exc)
        return PersistenceResult(ok=False, error=f"Stored data is malformed: {exc}")

    errors = [e for e in validate_building(building) if e.severity == "error"]
    if errors:
        message = ", ".join(e.message for e in errors)
        logger.warning("Stored building in %s failed validation: %s", path, message)
        return PersistenceResult(ok=False, error=f"Stored data failed validation: {message}")
    return PersistenceResult(ok=True, building=building)
