import logging
from dataclasses import dataclass

from src.dataset import load_observations
from src.statistical_analysis.anova import AnovaTable, one_way_anova
from src.statistical_analysis.config import DEFAULT_ALPHA
from src.statistical_analysis.diagnostics import AssumptionCheck, check_assumptions
from src.statistical_analysis.effect_size import eta_squared, omega_squared
from src.statistical_analysis.modeling import FittedModel, fit_group_model
from src.statistical_analysis.summary import GroupSummary, summarize_groups
from src.statistical_analysis.transform import (
    PowerTransform,
    apply_power_transform,
    estimate_power_transform,
)

logger = logging.getLogger(__name__)

GROUP_COL = "year"
VALUE_COL = "depth"
TRANSFORMED_COL = "transformed_depth"


@dataclass(frozen=True)
class AnalysisResult:
    """Everything computed by one run of the beak-depth analysis."""

    summaries: list[GroupSummary]
    raw_model: FittedModel
    raw_checks: AssumptionCheck
    transform: PowerTransform
    transformed_model: FittedModel
    transformed_checks: AssumptionCheck
    anova: AnovaTable
    eta_squared: float
    omega_squared: float
    alpha: float = DEFAULT_ALPHA


def run_analysis(df=None, alpha=DEFAULT_ALPHA) -> AnalysisResult:
    """
    Run the beak-depth analysis from raw observations to effect size.

    Steps, in order: descriptive summary per year, OLS fit of depth on year,
    assumption checks, Box-Cox estimation on the pooled depths, refit on the
    transformed depths, assumption checks again, one-way ANOVA, effect size.

    Parameters
    ----------
    df : pd.DataFrame, optional
        Observations with ``year`` and ``depth`` columns. Defaults to the
        embedded dataset.
    alpha : float, optional
        Significance threshold used by every test. Defaults to
        ``DEFAULT_ALPHA`` (0.05 unless ``FINCH_BEAKS_ALPHA`` is set).

    Returns
    -------
    AnalysisResult

    Raises
    ------
    DataUnavailable
        If the embedded dataset cannot be loaded.
    FitFailure, TransformFailure, InsufficientData
        If a stage cannot be computed. No partial result is returned.
    """
    if not 0 < alpha < 1:
        raise ValueError("alpha must be between 0 and 1")

    if df is None:
        df = load_observations()

    ##############################
    # Descriptive statistics
    ##############################

    summaries = summarize_groups(df, group_col=GROUP_COL, value_col=VALUE_COL)
    for s in summaries:
        logger.info(f"{GROUP_COL}={s.year}: n={s.n}, mean={s.mean:.4f}, sd={s.sd:.4f}")

    ##############################
    # Raw model and its checks
    ##############################

    raw_model = fit_group_model(df, response=VALUE_COL, group=GROUP_COL)
    raw_checks = check_assumptions(raw_model, alpha=alpha)

    ##############################
    # Power transform and refit
    ##############################

    transform = estimate_power_transform(df[VALUE_COL].to_numpy(), alpha=alpha)
    transformed = apply_power_transform(
        df, transform, value_col=VALUE_COL, out_col=TRANSFORMED_COL
    )

    transformed_model = fit_group_model(
        transformed,
        response=TRANSFORMED_COL,
        group=GROUP_COL,
        reference=raw_model.reference,
    )
    transformed_checks = check_assumptions(transformed_model, alpha=alpha)

    if transformed_checks.shapiro.p_value <= raw_checks.shapiro.p_value:
        logger.warning("Power transform did not improve normality of the residuals")

    ##############################
    # ANOVA and effect size
    ##############################

    anova = one_way_anova(transformed_model, alpha=alpha)
    eta_sq = eta_squared(anova)
    omega_sq = omega_squared(anova)

    logger.info(f"Effect size: eta^2={eta_sq:.4f}, omega^2={omega_sq:.4f}")

    return AnalysisResult(
        summaries=summaries,
        raw_model=raw_model,
        raw_checks=raw_checks,
        transform=transform,
        transformed_model=transformed_model,
        transformed_checks=transformed_checks,
        anova=anova,
        eta_squared=eta_sq,
        omega_squared=omega_sq,
        alpha=alpha,
    )
