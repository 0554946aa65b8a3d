"""
Amplitude-based trilateration of a point source from per-site readings.
"""

from trilateration.contracts import Site, SolverConfig, EstimatedPosition
from trilateration.errors import TrilaterationError, InvalidInput, ConvergenceFailure
from trilateration.solver import estimate_position, pseudo_distances, site_weights

__all__ = [
    "Site", "SolverConfig", "EstimatedPosition",
    "TrilaterationError", "InvalidInput", "ConvergenceFailure",
    "estimate_position", "pseudo_distances", "site_weights",
]

__version__ = "0.1.0"
