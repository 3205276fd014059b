"""
Top-level package for the Nonprofit API.

All functionality lives in submodules under ``app``; ``seed`` loads
demo data.
"""

__all__ = []
