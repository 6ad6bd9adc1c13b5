import logging
from dataclasses import dataclass

import numpy as np
from scipy import stats

from src.statistical_analysis.config import DEFAULT_ALPHA
from src.statistical_analysis.exceptions import InsufficientData

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TestResult:
    """Outcome of a single significance test."""

    __test__ = False  # not a pytest test class

    test_name: str
    statistic: float
    p_value: float
    alpha: float = DEFAULT_ALPHA

    @property
    def rejected(self) -> bool:
        """Whether the null hypothesis is rejected (p <= alpha)."""
        return self.p_value <= self.alpha


@dataclass(frozen=True)
class AssumptionCheck:
    """Homogeneity-of-variance and normality tests for one fitted model."""

    levene: TestResult
    shapiro: TestResult

    @property
    def assumptions_met(self) -> bool:
        return not self.levene.rejected and not self.shapiro.rejected


def _validate_alpha(alpha):
    if not 0 < alpha < 1:
        raise ValueError("alpha must be between 0 and 1")


def _residuals_by_group(model):
    samples = {}
    for level in dict.fromkeys(model.groups.tolist()):
        samples[level] = model.residuals[model.groups == level]
    return samples


def levene_test(model, center="median", alpha=DEFAULT_ALPHA) -> TestResult:
    """
    Levene's test for equal residual variance across the model's groups.

    Parameters
    ----------
    model : FittedModel
        Fitted group model.
    center : {"median", "mean"}, optional
        Centre of the absolute deviations. "median" (default) is the
        Brown-Forsythe variant, "mean" the original Levene test.
    alpha : float, optional
        Significance threshold. Defaults to 0.05.

    Raises
    ------
    ValueError
        If ``center`` or ``alpha`` is invalid.
    InsufficientData
        If fewer than two groups are present or a group has fewer than 2 residuals.
    """
    if center not in ("median", "mean"):
        raise ValueError(f"center must be 'median' or 'mean', got {center!r}")
    _validate_alpha(alpha)

    samples = _residuals_by_group(model)
    if len(samples) < 2:
        raise InsufficientData("Levene's test needs at least two groups")
    for level, values in samples.items():
        if len(values) < 2:
            raise InsufficientData(
                f"Group {level} has {len(values)} residual(s); Levene's test needs at least 2"
            )

    statistic, p_value = stats.levene(*samples.values(), center=center)

    result = TestResult(
        test_name=f"Levene ({center}-centered)",
        statistic=float(statistic),
        p_value=float(p_value),
        alpha=alpha,
    )
    logger.debug(f"Levene's test: F={result.statistic:.4f}, pvalue={result.p_value:.4f}")
    return result


def shapiro_test(model, alpha=DEFAULT_ALPHA) -> TestResult:
    """
    Shapiro-Wilk test for normality of the model residuals.

    Raises
    ------
    InsufficientData
        If there are fewer than 3 residuals.
    """
    _validate_alpha(alpha)

    residuals = np.asarray(model.residuals, dtype=float)
    if len(residuals) < 3:
        raise InsufficientData(
            f"Shapiro-Wilk test needs at least 3 residuals, got {len(residuals)}"
        )

    statistic, p_value = stats.shapiro(residuals)

    result = TestResult(
        test_name="Shapiro-Wilk",
        statistic=float(statistic),
        p_value=float(p_value),
        alpha=alpha,
    )
    logger.debug(f"Shapiro-Wilk test: W={result.statistic:.4f}, pvalue={result.p_value:.4f}")
    return result


def check_assumptions(model, alpha=DEFAULT_ALPHA, center="median") -> AssumptionCheck:
    """Run the variance and normality checks on a fitted model."""
    check = AssumptionCheck(
        levene=levene_test(model, center=center, alpha=alpha),
        shapiro=shapiro_test(model, alpha=alpha),
    )

    logger.info(
        f"Assumption checks for {model.formula}: "
        f"Levene pvalue={check.levene.p_value:.4f}, "
        f"Shapiro-Wilk pvalue={check.shapiro.p_value:.4f}"
    )
    if check.levene.rejected:
        logger.warning(f"Residual variances differ across groups (alpha={alpha})")
    if check.shapiro.rejected:
        logger.warning(f"Residuals deviate from normality (alpha={alpha})")

    return check
