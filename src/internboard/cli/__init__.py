"""
internboard CLI Module.

Operator commands for searching posts, geocoding and index management.
"""

from .app import app, run

__all__ = ["app", "run"]
