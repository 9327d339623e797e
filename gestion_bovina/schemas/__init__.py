"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (user input, API responses)
    - Wire names follow the public JSON contract (dateBirthday, genre, race, cowState, _id)

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
