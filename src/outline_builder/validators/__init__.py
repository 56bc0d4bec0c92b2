"""Structural validation for building snapshots.

- structural: polygon invariants, heights, dimension lock-step, roof ranges,
  active floor reference

Validators never raise; they return a list of ValidationError.
"""
