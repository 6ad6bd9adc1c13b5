"""Statistical analysis of finch beak depths across two years."""

from src.statistical_analysis.anova import AnovaTable, one_way_anova
from src.statistical_analysis.diagnostics import (
    AssumptionCheck,
    TestResult,
    check_assumptions,
    levene_test,
    shapiro_test,
)
from src.statistical_analysis.effect_size import effect_magnitude, eta_squared, omega_squared
from src.statistical_analysis.exceptions import (
    AnalysisError,
    FitFailure,
    InsufficientData,
    TransformFailure,
)
from src.statistical_analysis.modeling import FittedModel, fit_group_model
from src.statistical_analysis.pipeline import AnalysisResult, run_analysis
from src.statistical_analysis.report import generate_markdown_report
from src.statistical_analysis.summary import GroupSummary, summarize_groups, summary_frame
from src.statistical_analysis.transform import (
    PowerTransform,
    apply_power_transform,
    estimate_power_transform,
)

__all__ = [
    # Main pipeline
    "run_analysis",
    "AnalysisResult",
    # Report generation
    "generate_markdown_report",
    # Errors
    "AnalysisError",
    "FitFailure",
    "InsufficientData",
    "TransformFailure",
    # Descriptive statistics
    "GroupSummary",
    "summarize_groups",
    "summary_frame",
    # Linear model
    "FittedModel",
    "fit_group_model",
    # Assumption checks
    "AssumptionCheck",
    "TestResult",
    "check_assumptions",
    "levene_test",
    "shapiro_test",
    # Power transform
    "PowerTransform",
    "apply_power_transform",
    "estimate_power_transform",
    # ANOVA and effect size
    "AnovaTable",
    "one_way_anova",
    "eta_squared",
    "omega_squared",
    "effect_magnitude",
]
