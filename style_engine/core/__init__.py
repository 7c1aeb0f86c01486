"""
Engine facade for the style engine.
"""

from .engine import StyleEngine

__all__ = ['StyleEngine']
