"""
Configuration for the simulation, database and API.
"""

from .config import Settings, settings

__all__ = ["Settings", "settings"]
