"""
Visualization module.

- Force timeline: both plate channels over time with the cut point marked
"""

from .timeline_plots import plot_force_timeline

__all__ = [
    'plot_force_timeline',
]
