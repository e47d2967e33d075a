"""Services Layer — star service and store wiring.

Invariants:
    - Services orchestrate IO around pure core rules
    - The store implementation is chosen once, at startup

Design Decisions:
    - Explicit factory mapping from settings to store (no auto-discovery)
"""
