"""Edit operations.

- polygon: vertex/edge mutations on bare outlines, dimension recompute
- constraints: grid snap and right-angle alignment for dragged vertices
- building: immutable snapshot edits with error reporting
- actions: JSON action schema dispatched onto the building edits
"""
