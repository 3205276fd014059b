"""
Pydantic schema definitions for API payloads.

Each domain (users, events, donations, volunteering, contact) defines
its request and response models, plus the closed status enumerations
stored in the database.  Response models never expose password hashes.
"""
