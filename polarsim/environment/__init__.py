"""
Environment models for flight simulation.

This module provides atmospheric models and environmental conditions.
"""

from .atmosphere import StandardAtmosphere

__all__ = ['StandardAtmosphere']
