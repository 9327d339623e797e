"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Functions are deterministic given their inputs (randomness only in salts/timestamps)

Design Decisions:
    - Functional core separated from imperative shell: services orchestrate IO
      around the rules defined here
"""
