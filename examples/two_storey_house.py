"""Two-storey house: proof of concept.

Ground floor: U-shaped outline, 600 mm eaves, flat roof
Upper floor: rectangle over the ground floor, gable roof at 10/4

   N
   ↑
   |
   +--- E

Plan y grows southwards, so the north face is the top of the plan.
"""

from pathlib import Path

from outline_builder.edits.actions import apply_actions
from outline_builder.generators.shell import create_initial_building
from outline_builder.persistence import save_building
from outline_builder.queries.elevation import build_elevation_data
from outline_builder.queries.plan_dimensions import build_plan_dimension_groups
from outline_builder.validators.structural import validate_building

building = create_initial_building("u-shape")

building, applied = apply_actions(
    building,
    [
        {"action": "set-uniform-offset", "offset": 600},
        {"action": "add-floor"},
        {"action": "apply-template", "template": "rectangle"},
        {"action": "set-floor-height", "height": 2700},
        {"action": "set-uniform-offset", "offset": 450},
        {"action": "update-roof", "type": "gable", "slope_value": 4, "ridge_height": 2700},
    ],
)
if building.last_error:
    raise SystemExit(f"Action {applied} failed: {building.last_error}")

# --- Validate ---
errors = validate_building(building)
if errors:
    print("⚠️  Validation errors:")
    for e in errors:
        print(f"  [{e.severity}] {e.element_type}: {e.message}")
else:
    print("✅ Validation passed")

# --- Plan dimensions (ground floor) ---
ground = building.floors[0]
for group in build_plan_dimension_groups(ground.polygon, ground.dimensions):
    segments = [label.text for label in group.segment.labels] if group.segment else []
    total = group.total.labels[0].text if group.total else "-"
    print(f"   {group.side:>6}: total {total}  segments {segments}")

# --- Elevations ---
elevations = build_elevation_data(building)
for view in elevations.views:
    print(
        f"   {view.direction:>5}: {view.dimension_label}  "
        f"height {view.total_height:.0f}  roof {view.roof_label}"
    )

# --- Save ---
output = Path(__file__).parent / "output"
output.mkdir(exist_ok=True)
result = save_building(building, output / "two_storey_house.json")
print(f"📁 Saved: {result.ok}")
print(f"   Floors: {building.floor_count()}")
print(f"   Wall height: {building.total_height():.0f} mm")
