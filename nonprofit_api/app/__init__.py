"""
Application package initializer.

Each domain (events, donations, volunteering, contact, users) has a
service under ``services`` and a router under ``api/v1/endpoints``.
Database access is confined to ``core.storage``.
"""

from .main import app  # noqa: F401
