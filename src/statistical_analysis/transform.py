import logging
from dataclasses import dataclass

import numpy as np
from scipy import special, stats

from src.statistical_analysis.exceptions import TransformFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PowerTransform:
    """Box-Cox transform parameter estimated from a sample."""

    lmbda: float
    ci_low: float
    ci_high: float
    log_likelihood: float

    def apply(self, values) -> np.ndarray:
        """Map positive values through ``(x**lmbda - 1) / lmbda`` (``log x`` at lmbda = 0)."""
        x = _as_positive_array(values)
        return special.boxcox(x, self.lmbda)


def _as_positive_array(values) -> np.ndarray:
    x = np.asarray(values, dtype=float)
    if x.ndim != 1 or x.size == 0:
        raise TransformFailure("Power transform needs a non-empty one-dimensional sample")
    if not np.all(np.isfinite(x)):
        raise TransformFailure("Sample contains NaN or infinite values")
    if np.any(x <= 0):
        raise TransformFailure("Box-Cox transform requires strictly positive values")
    return x


def estimate_power_transform(values, alpha=0.05) -> PowerTransform:
    """
    Estimate the Box-Cox parameter by maximum likelihood.

    The whole sample is used as one pool; group membership plays no part.

    Parameters
    ----------
    values : array-like
        Strictly positive measurements.
    alpha : float, optional
        The confidence interval of lambda is at level ``1 - alpha``. Defaults to 0.05.

    Returns
    -------
    PowerTransform

    Raises
    ------
    TransformFailure
        If the sample is empty, constant, contains non-positive or non-finite
        values, or the likelihood cannot be maximised.
    """
    if not 0 < alpha < 1:
        raise ValueError("alpha must be between 0 and 1")

    x = _as_positive_array(values)
    if np.ptp(x) == 0:
        raise TransformFailure("Power transform cannot be estimated from constant data")

    try:
        _, lmbda, (ci_low, ci_high) = stats.boxcox(x, alpha=alpha)
    except (ValueError, RuntimeError, FloatingPointError) as e:
        logger.error(f"Box-Cox estimation failed: {e}")
        raise TransformFailure(f"Box-Cox estimation failed: {e}") from e

    if not np.isfinite(lmbda):
        raise TransformFailure(f"Box-Cox estimation did not converge (lambda={lmbda})")

    transform = PowerTransform(
        lmbda=float(lmbda),
        ci_low=float(ci_low),
        ci_high=float(ci_high),
        log_likelihood=float(stats.boxcox_llf(lmbda, x)),
    )

    logger.info(
        f"Box-Cox lambda={transform.lmbda:.4f} "
        f"({1 - alpha:.0%} CI [{transform.ci_low:.4f}, {transform.ci_high:.4f}])"
    )
    return transform


def apply_power_transform(df, transform, value_col="depth", out_col="transformed_depth"):
    """
    Return a copy of ``df`` with ``out_col`` holding the transformed ``value_col``.

    Raises
    ------
    ValueError
        If ``value_col`` is missing.
    TransformFailure
        If any value is not strictly positive and finite.
    """
    if value_col not in df.columns:
        raise ValueError(f"Column '{value_col}' not found in data")

    out = df.copy()
    out[out_col] = transform.apply(df[value_col].to_numpy())

    logger.debug(
        f"Transformed '{value_col}' -> '{out_col}' for {len(out)} observations "
        f"(lambda={transform.lmbda:.4f})"
    )
    return out
