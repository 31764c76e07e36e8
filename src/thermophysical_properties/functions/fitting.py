from typing import Callable, Sequence
import logging
import numpy as np
from scipy.optimize import least_squares

from thermophysical_properties.helpers import DomainError

logger = logging.getLogger(__name__)


def linear_least_squares(columns: Sequence[np.ndarray], y: np.ndarray) -> np.ndarray:
    """
    Ordinary least squares for y ~ sum_k x_k * columns[k].
    Columns are scaled to unit maximum before the solve, since powers of T span many orders of magnitude
    """
    A = np.column_stack([np.asarray(col, dtype=float) * np.ones_like(y) for col in columns])
    scale = np.max(np.abs(A), axis=0)
    scale[scale == 0.0] = 1.0
    x, *_ = np.linalg.lstsq(A / scale, y, rcond=None)
    return x / scale


def log_samples(y: np.ndarray, family: str) -> np.ndarray:
    if np.any(y <= 0.0):
        raise DomainError(f"Cannot log-linearise {family}: the blended samples must be strictly positive")
    return np.log(y)


def relative_residuals(model: Callable, coefficients: np.ndarray, T: np.ndarray, y: np.ndarray, p: float) -> np.ndarray:
    scale = np.maximum(np.abs(y), 1e-12 * np.max(np.abs(y)))
    with np.errstate(all="ignore"):
        return (model(coefficients, p, T) - y) / scale


def refine(model: Callable, coefficients: Sequence[float], T: np.ndarray, y: np.ndarray, p: float, free: Sequence[int]) -> tuple:
    """
    Nonlinear least-squares polish of the coefficients listed in free, on relative residuals.
    The result is kept only if it lowers the cost of the starting point
    """
    x0 = np.array(coefficients, dtype=float)
    free = list(free)

    def residuals(x):
        c = x0.copy()
        c[free] = x
        r = relative_residuals(model, c, T, y, p)
        return np.where(np.isfinite(r), r, 1e10)

    start = residuals(x0[free])
    start_cost = 0.5 * float(np.dot(start, start))
    if start_cost == 0.0:
        return tuple(x0)
    result = least_squares(residuals, x0[free], x_scale="jac", method="trf")
    if result.cost < start_cost:
        x0[free] = result.x
        logger.debug("Refined %d coefficients: cost %.3e -> %.3e (%s)", len(free), start_cost, result.cost, result.message)
    return tuple(x0)
