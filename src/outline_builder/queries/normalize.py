"""Usable-floor selection shared by the elevation and extrusion queries.

Queries never fail on a bad snapshot. Floors that break a geometric
invariant are dropped; if nothing survives, the default rectangle floor
stands in. Either way the result is flagged ``ok=False`` with the reason.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict

from outline_builder.generators.shell import FALLBACK_TEMPLATE, create_initial_building
from outline_builder.models.building import Building
from outline_builder.models.floor import Floor
from outline_builder.validators.structural import is_floor_usable, validate_building

logger = logging.getLogger(__name__)


class UsableFloors(BaseModel):
    model_config = ConfigDict(frozen=True)

    ok: bool
    floors: list[Floor]
    error: str | None = None


def _sanitized(floors: list[Floor]) -> list[Floor]:
    return [f.model_copy(update={"roof": f.roof.sanitized()}) for f in floors]


def usable_floors(building: Building) -> UsableFloors:
    """Floors safe to project, bottom to top, with roofs sanitised."""
    problems = [e for e in validate_building(building) if e.severity == "error"]
    if not problems:
        return UsableFloors(ok=True, floors=_sanitized(building.floors))

    reason = problems[0].message
    if len(problems) > 1:
        reason += f" (and {len(problems) - 1} more)"

    kept = [f for f in building.floors if is_floor_usable(f)]
    if kept:
        logger.warning(
            "Building failed validation, using %d of %d floors: %s",
            len(kept),
            len(building.floors),
            reason,
        )
        return UsableFloors(ok=False, floors=_sanitized(kept), error=reason)

    logger.warning("No usable floors, substituting the %s template: %s", FALLBACK_TEMPLATE.value, reason)
    fallback = create_initial_building(FALLBACK_TEMPLATE).floors
    return UsableFloors(
        ok=False,
        floors=fallback,
        error=f"{reason}; showing the default {FALLBACK_TEMPLATE.value} instead",
    )
