"""Core Layer — pure domain logic, no IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Identity and merge rules are pure and deterministic given a clock and RNG

Design Decisions:
    - Functional core separated from imperative shell: the service loads,
      calls core rules, then saves
"""
