"""Infrastructure Layer — star stores, database sessions and logging setup.

Invariants:
    - Stores implement core.repository_protocols.StarStore and nothing more
    - IO failures on write paths surface as core.errors.StorageError

Design Decisions:
    - One module per backing medium (file, memory, database)
"""
