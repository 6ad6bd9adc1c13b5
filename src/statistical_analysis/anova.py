import logging
from dataclasses import dataclass

import statsmodels.api as sm

from src.statistical_analysis.config import DEFAULT_ALPHA
from src.statistical_analysis.exceptions import FitFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnovaTable:
    """One-way ANOVA row for the grouping factor, with its residual row."""

    term: str
    sum_sq: float
    df: int
    f_statistic: float
    p_value: float
    residual_sum_sq: float
    residual_df: int
    alpha: float = DEFAULT_ALPHA

    @property
    def total_sum_sq(self) -> float:
        return self.sum_sq + self.residual_sum_sq

    @property
    def mean_sq(self) -> float:
        return self.sum_sq / self.df

    @property
    def residual_mean_sq(self) -> float:
        return self.residual_sum_sq / self.residual_df

    @property
    def significant(self) -> bool:
        """Whether equal group means are rejected (p < alpha)."""
        return self.p_value < self.alpha


def one_way_anova(model, alpha=DEFAULT_ALPHA) -> AnovaTable:
    """
    Partition the variance of a fitted group model into between- and within-group parts.

    Parameters
    ----------
    model : FittedModel
        Model fitted with ``fit_group_model``.
    alpha : float, optional
        Significance threshold. Defaults to ``DEFAULT_ALPHA``.

    Returns
    -------
    AnovaTable

    Raises
    ------
    FitFailure
        If the model's grouping term is absent from the ANOVA table.
    """
    if not 0 < alpha < 1:
        raise ValueError("alpha must be between 0 and 1")

    table = sm.stats.anova_lm(model.result, typ=2)

    if model.term not in table.index:
        raise FitFailure(f"Term '{model.term}' missing from ANOVA table")

    row = table.loc[model.term]
    resid = table.loc["Residual"]

    anova = AnovaTable(
        term=model.term,
        sum_sq=float(row["sum_sq"]),
        df=int(round(row["df"])),
        f_statistic=float(row["F"]),
        p_value=float(row["PR(>F)"]),
        residual_sum_sq=float(resid["sum_sq"]),
        residual_df=int(round(resid["df"])),
        alpha=alpha,
    )

    logger.info(
        f"ANOVA on {model.response}: F({anova.df}, {anova.residual_df})={anova.f_statistic:.4f}, "
        f"pvalue={anova.p_value:.4g}"
    )
    return anova
