"""
Report generation for the beak-depth analysis.

Renders the structured results of ``run_analysis`` as Markdown tables.
"""

import logging
from datetime import datetime
from pathlib import Path

from src.statistical_analysis.effect_size import effect_magnitude

logger = logging.getLogger(__name__)


def _decision(test) -> str:
    return "Rejected" if test.rejected else "Not rejected"


def _format_p(p_value: float) -> str:
    return "< 0.0001" if p_value < 1e-4 else f"{p_value:.4f}"


def generate_markdown_report(result, output_path: str, plot_path: str = None) -> str:
    """
    Generate a Markdown report from an analysis result.

    Parameters
    ----------
    result : AnalysisResult
        Output of run_analysis().
    output_path : str
        Path to save the Markdown report.
    plot_path : str, optional
        Path to a saved diagnostics figure to embed.

    Returns
    -------
    str
        Path to the generated report.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")

    lines = []

    # Header
    lines.append("# Beak Depth Analysis Report")
    lines.append("")
    lines.append(f"**Generated:** {timestamp}")
    lines.append("")
    lines.append(f"**Significance level:** {result.alpha}")
    lines.append("")

    # Descriptive statistics
    lines.append("## Descriptive Statistics")
    lines.append("")
    lines.append("| Year | n | Mean (mm) | SD (mm) |")
    lines.append("|:-----|:--|:----------|:--------|")
    for s in result.summaries:
        lines.append(f"| {s.year} | {s.n} | {s.mean:.2f} | {s.sd:.2f} |")
    lines.append("")

    # Assumption checks
    lines.append("## Assumption Checks")
    lines.append("")
    lines.append("| Model | Test | Statistic | p-value | H0 |")
    lines.append("|:------|:-----|:----------|:--------|:---|")
    for label, checks in (
        ("Raw depth", result.raw_checks),
        ("Transformed depth", result.transformed_checks),
    ):
        for test in (checks.levene, checks.shapiro):
            lines.append(
                f"| {label} | {test.test_name} | {test.statistic:.4f} | "
                f"{_format_p(test.p_value)} | {_decision(test)} |"
            )
    lines.append("")

    # Power transform
    t = result.transform
    lines.append("## Power Transform")
    lines.append("")
    lines.append("| Lambda | CI lower | CI upper | Log-likelihood |")
    lines.append("|:-------|:---------|:---------|:---------------|")
    lines.append(f"| {t.lmbda:.4f} | {t.ci_low:.4f} | {t.ci_high:.4f} | {t.log_likelihood:.2f} |")
    lines.append("")

    # ANOVA
    a = result.anova
    lines.append("## ANOVA (transformed depth)")
    lines.append("")
    lines.append("| Source | Sum Sq | df | Mean Sq | F | p-value |")
    lines.append("|:-------|:-------|:---|:--------|:--|:--------|")
    lines.append(
        f"| year | {a.sum_sq:.4f} | {a.df} | {a.mean_sq:.4f} | {a.f_statistic:.2f} | "
        f"{_format_p(a.p_value)} |"
    )
    lines.append(
        f"| Residual | {a.residual_sum_sq:.4f} | {a.residual_df} | {a.residual_mean_sq:.4f} | | |"
    )
    lines.append("")

    # Effect size
    lines.append("## Effect Size")
    lines.append("")
    lines.append("| Measure | Value | Magnitude |")
    lines.append("|:--------|:------|:----------|")
    lines.append(
        f"| Eta-squared | {result.eta_squared:.4f} | {effect_magnitude(result.eta_squared)} |"
    )
    lines.append(f"| Omega-squared | {result.omega_squared:.4f} | |")
    lines.append("")

    # Plot
    if plot_path:
        # Use relative path from report location
        plot_rel_path = Path(plot_path).name
        lines.append(f'<img src="figures/{plot_rel_path}" alt="Model diagnostics" height="400">')
        lines.append("")

    # Write report
    report_content = "\n".join(lines)
    output_path.write_text(report_content)

    logger.info(f"Report generated: {output_path}")
    return str(output_path)
