"""
Services module for output collaborators (exports).
"""

from roi_simulator.services.exports import write_projection_csv

__all__ = ["write_projection_csv"]
