"""
Gravity Paint
=============

A toy paint simulation: colored particles fall under switchable gravity,
bounce off walls and obstacles, merge when they touch while still wet, and
slowly dry in place.

- paint_core: simulation engine, renderers and export
- paint_config.yaml: every tunable parameter
"""
