from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

@dataclass
class Site:
    id: str
    xy: Tuple[float, float]  # µm, electrode plane

@dataclass
class SolverConfig:
    scale: float = 1000.0          # k in d = k * a^-2
    method: str = "lm"             # scipy.optimize.least_squares method
    xtol: float = 1e-8
    ftol: float = 1e-8
    gtol: float = 1e-8
    max_nfev: Optional[int] = None  # None -> solver default budget

@dataclass(frozen=True)
class EstimatedPosition:
    x: float
    y: float
    cost: float = 0.0   # 0.5 * sum of squared weighted residuals
    nfev: int = 0
    status: int = 1     # least_squares status, > 0 means converged

    @property
    def xy(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y], dtype=np.float64)
