"""Building generation tools.

- Template catalog: named footprints with minimum-size metadata
- Shell generator: template → initial single-floor building
"""

from outline_builder.generators.shell import create_initial_building
from outline_builder.generators.templates import (
    build_template_shape,
    get_template,
    list_templates,
    scale_shape,
    validate_template_dimensions,
)

__all__ = [
    "create_initial_building",
    "build_template_shape",
    "get_template",
    "list_templates",
    "scale_shape",
    "validate_template_dimensions",
]
