"""Sails artifact generation for sailsgen.

Renders normalized models into Sails model and controller modules.
"""

from .generator import SailsModelGenerator

__all__ = [
    "SailsModelGenerator",
]
