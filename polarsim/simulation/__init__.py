"""
Simulation driver and glide trim.
"""

from .runner import SimulationRunner, history_to_dataframe
from .trim import find_glide_trim

__all__ = ['SimulationRunner', 'history_to_dataframe', 'find_glide_trim']
