"""Services Layer — use-case orchestration over core rules and repositories.

Invariants:
    - Services raise core errors only; they never build HTTP responses
    - Repositories are injected (constructor argument), never created from globals

Design Decisions:
    - One service class per aggregate: AuthService (users/tokens), AnimalService (herd)
"""
