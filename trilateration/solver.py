import logging
import numbers
from typing import Optional, Sequence, Union

import numpy as np
from scipy.optimize import least_squares

from .contracts import Site, SolverConfig, EstimatedPosition
from .errors import InvalidInput, ConvergenceFailure

logger = logging.getLogger(__name__)

_METHODS = ("lm", "trf", "dogbox")
_EPS = np.finfo(np.float64).eps

SiteSet = Union[Sequence[Site], Sequence[Sequence[float]], np.ndarray]


def _as_site_array(sites: SiteSet) -> np.ndarray:
    if isinstance(sites, (list, tuple)) and sites and all(isinstance(s, Site) for s in sites):
        sites = [s.xy for s in sites]
    try:
        X = np.asarray(sites, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidInput(f"sites must be (x, y) pairs: {e}") from e
    if X.size == 0:
        raise InvalidInput("sites is empty")
    if X.ndim != 2 or X.shape[1] != 2:
        raise InvalidInput(f"sites must have shape (n, 2), got {X.shape}")
    if not np.all(np.isfinite(X)):
        raise InvalidInput("sites contain non-finite coordinates")
    return X


def _as_amplitude_array(amplitudes: Sequence[float]) -> np.ndarray:
    try:
        A = np.asarray(amplitudes, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidInput(f"amplitudes must be numbers: {e}") from e
    if A.size == 0:
        raise InvalidInput("amplitudes is empty")
    if A.ndim != 1:
        raise InvalidInput(f"amplitudes must be a vector, got shape {A.shape}")
    if not np.all(np.isfinite(A)):
        raise InvalidInput("amplitudes contain non-finite values")
    if np.any(A == 0.0):
        raise InvalidInput("amplitudes contain zero; pseudo-distance k * a^-2 is undefined")
    if np.any(A < 0.0):
        raise InvalidInput("amplitudes must be positive")
    return A


def pseudo_distances(amplitudes: Sequence[float], scale: float = 1000.0) -> np.ndarray:
    """
    Inverse-square falloff model: d_i = scale * a_i^-2.
    A larger amplitude maps to a shorter distance from the source.
    """
    if (not isinstance(scale, numbers.Real) or isinstance(scale, bool)
            or not (np.isfinite(scale) and scale > 0.0)):
        raise InvalidInput(f"scale must be a positive finite number, got {scale!r}")
    A = _as_amplitude_array(amplitudes)
    return scale * A ** -2


def site_weights(distances: np.ndarray) -> np.ndarray:
    # w_i = 1/d_i: short (loud) targets dominate the fit, so the estimate is
    # pulled toward the site with the largest amplitude.
    return 1.0 / np.asarray(distances, dtype=np.float64)


def _residuals(b: np.ndarray, X: np.ndarray, d: np.ndarray, sqrt_w: np.ndarray) -> np.ndarray:
    r = np.hypot(b[0] - X[:, 0], b[1] - X[:, 1])
    return sqrt_w * (d - r)


def _jacobian(b: np.ndarray, X: np.ndarray, d: np.ndarray, sqrt_w: np.ndarray) -> np.ndarray:
    diff = b[None, :] - X                      # (n,2)
    r = np.maximum(np.hypot(diff[:, 0], diff[:, 1]), 1e-12)
    return -sqrt_w[:, None] * diff / r[:, None]


def _check_config(cfg: SolverConfig) -> None:
    if cfg.method not in _METHODS:
        raise InvalidInput(f"unknown solver method {cfg.method!r}; expected one of {_METHODS}")
    for name in ("xtol", "ftol", "gtol"):
        tol = getattr(cfg, name)
        if not isinstance(tol, numbers.Real) or isinstance(tol, bool) or not tol >= _EPS:
            raise InvalidInput(f"{name} must be a number >= {_EPS:.3g}, got {tol!r}")
    n = cfg.max_nfev
    if n is not None and (not isinstance(n, numbers.Integral) or isinstance(n, bool) or n <= 0):
        raise InvalidInput(f"max_nfev must be None or a positive integer, got {n!r}")


def estimate_position(sites: SiteSet,
                      amplitudes: Sequence[float],
                      initial_guess: Sequence[float],
                      cfg: Optional[SolverConfig] = None) -> EstimatedPosition:
    """
    Weighted nonlinear least-squares trilateration of a point source.

    Fits b = (x, y) minimizing sum_i w_i * (d_i - |b - X_i|)^2 with
    d_i = k * a_i^-2 and w_i = 1/d_i, starting from `initial_guess`.
    Weights are folded into the residuals as sqrt(w_i).

    Raises InvalidInput for unusable inputs and ConvergenceFailure when the
    solver stops before meeting its tolerances.
    """
    cfg = cfg or SolverConfig()
    _check_config(cfg)

    X = _as_site_array(sites)
    A = _as_amplitude_array(amplitudes)
    if len(X) != len(A):
        raise InvalidInput(f"got {len(X)} sites but {len(A)} amplitudes")
    if len(X) < 2:
        raise InvalidInput("at least two sites are needed to fit (x, y)")

    beta0 = np.asarray(initial_guess, dtype=np.float64)
    if beta0.shape != (2,) or not np.all(np.isfinite(beta0)):
        raise InvalidInput(f"initial_guess must be a finite (x, y) pair, got {initial_guess!r}")

    d = pseudo_distances(A, cfg.scale)
    w = site_weights(d)
    # extreme amplitudes overflow d or w even though each a_i is finite
    if not (np.all(np.isfinite(d)) and np.all(np.isfinite(w)) and np.all(d > 0.0)):
        raise InvalidInput(f"amplitudes {A} give pseudo-distances {d} outside the float range")
    sqrt_w = np.sqrt(w)
    logger.debug("fitting %d sites, d=%s, start=%s, method=%s", len(X), d, beta0, cfg.method)

    res = least_squares(
        _residuals, beta0, jac=_jacobian, args=(X, d, sqrt_w),
        method=cfg.method, xtol=cfg.xtol, ftol=cfg.ftol, gtol=cfg.gtol,
        max_nfev=cfg.max_nfev,
    )

    if res.status <= 0 or not np.all(np.isfinite(res.x)):
        logger.warning("trilateration did not converge: status=%d nfev=%d (%s)",
                       res.status, res.nfev, res.message)
        raise ConvergenceFailure(f"solver did not converge: {res.message}",
                                 status=int(res.status), nfev=int(res.nfev))

    sol = EstimatedPosition(x=float(res.x[0]), y=float(res.x[1]),
                            cost=float(res.cost), nfev=int(res.nfev), status=int(res.status))
    logger.debug("estimate=(%.4f, %.4f) cost=%.6g nfev=%d", sol.x, sol.y, sol.cost, sol.nfev)
    return sol
