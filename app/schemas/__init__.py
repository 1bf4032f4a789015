"""
Schemas Package for PickResults Backend.

This package contains Pydantic models used for:
- Prediction variants and the external game state they are graded against
- Graded outcomes and sync reports
- Request validation and response serialization
"""
