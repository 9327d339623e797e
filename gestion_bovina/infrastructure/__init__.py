"""Infrastructure Layer — record store access and cross-cutting concerns.

Invariants:
    - Infrastructure never contains business rules (those live in core/ and services/)
    - Store errors are mapped to the core error hierarchy before leaving this layer

Design Decisions:
    - Repositories implement core/repository_protocols.py structurally
"""
