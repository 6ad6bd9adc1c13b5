from src.statistical_analysis.exceptions import InsufficientData

# Conventional thresholds for eta-squared (Cohen, 1988)
MAGNITUDE_THRESHOLDS = [
    (0.01, "negligible"),
    (0.06, "small"),
    (0.14, "medium"),
]


def eta_squared(table) -> float:
    """Proportion of total variance explained by the factor: SS_between / SS_total."""
    if table.total_sum_sq <= 0:
        raise InsufficientData("Total sum of squares is zero; effect size is undefined")
    return table.sum_sq / table.total_sum_sq


def omega_squared(table) -> float:
    """Less biased variant of eta-squared, floored at zero."""
    if table.total_sum_sq <= 0:
        raise InsufficientData("Total sum of squares is zero; effect size is undefined")
    ms_within = table.residual_mean_sq
    omega = (table.sum_sq - table.df * ms_within) / (table.total_sum_sq + ms_within)
    return max(omega, 0.0)


def effect_magnitude(eta_sq: float) -> str:
    """Label an eta-squared value as negligible, small, medium or large."""
    if not 0 <= eta_sq <= 1:
        raise ValueError("eta_sq must be between 0 and 1")
    for threshold, label in MAGNITUDE_THRESHOLDS:
        if eta_sq < threshold:
            return label
    return "large"
