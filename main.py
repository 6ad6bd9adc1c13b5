import argparse
import logging
import pathlib
import sys
from datetime import datetime

from dotenv import load_dotenv

load_dotenv()

from src.dataset import DataUnavailable, load_observations
from src.statistical_analysis.config import DEFAULT_ALPHA, parse_alpha
from src.statistical_analysis.exceptions import AnalysisError
from src.statistical_analysis.pipeline import run_analysis
from src.statistical_analysis.plotting import plot_analysis
from src.statistical_analysis.report import generate_markdown_report
from src.statistical_analysis.summary import summarize_groups


def configure_logging(log_level: str):
    """Configure logging with the specified level."""
    logging.basicConfig(
        level=getattr(logging, log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        force=True,
    )
    return logging.getLogger(__name__)


def _alpha_arg(value: str) -> float:
    """argparse type for --alpha."""
    try:
        return parse_alpha(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def _load(args):
    """Load the dataset named by --data, or the embedded one."""
    if args.data:
        return load_observations(args.data, expected_rows=None)
    return load_observations()


def cmd_analyze(args):
    """Run the beak-depth analysis."""
    logger = configure_logging(args.log_level)

    # Setup report output paths
    report_plots_enabled = args.report and args.report_plots
    if args.report:
        if args.report is True:
            # Default path
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            report_path = pathlib.Path(f"reports/analysis_report_{timestamp}.md")
        else:
            report_path = pathlib.Path(args.report)

        # Create figures directory if report plots are enabled
        if report_plots_enabled:
            figures_dir = report_path.parent / "figures"
            figures_dir.mkdir(parents=True, exist_ok=True)

    try:
        result = run_analysis(_load(args), alpha=args.alpha)
    except (DataUnavailable, AnalysisError) as e:
        logger.error(f"Analysis failed: {e}")
        raise SystemExit(1)

    a = result.anova
    print(
        f"ANOVA on transformed depth: F({a.df}, {a.residual_df}) = {a.f_statistic:.2f}, "
        f"p = {a.p_value:.4g}, eta^2 = {result.eta_squared:.3f}"
    )

    # Handle plotting
    plot_path = None
    try:
        if report_plots_enabled:
            plot_path = str(figures_dir / "model_diagnostics.png")
            plot_analysis(result, save_path=plot_path)
        elif args.plot:
            plot_analysis(result)
    except Exception as e:
        logger.error(f"Plotting failed: {str(e)}")
        plot_path = None

    # Generate report if requested
    if args.report:
        generate_markdown_report(result, str(report_path), plot_path=plot_path)
        logger.info(f"Report generated: {report_path}")


def cmd_describe(args):
    """Print per-year descriptive statistics."""
    logger = configure_logging(args.log_level)

    try:
        summaries = summarize_groups(_load(args))
    except (DataUnavailable, AnalysisError) as e:
        logger.error(f"Could not summarize data: {e}")
        raise SystemExit(1)

    # Print header
    print(f"\n{'Year':<8} {'n':>5} {'Mean':>10} {'SD':>10}")
    print("-" * 36)

    for s in summaries:
        print(f"{s.year:<8} {s.n:>5} {s.mean:>10.3f} {s.sd:>10.3f}")

    print(f"\nTotal: {sum(s.n for s in summaries)} observation(s)")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Finch Beaks - Beak depth analysis for 1976 vs 1978",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Analyze command
    analyze_parser = subparsers.add_parser(
        "analyze", help="Run the full beak-depth analysis"
    )
    analyze_parser.add_argument(
        "--data",
        help="Path to a CSV file with year and depth columns (default: embedded dataset)",
    )
    analyze_parser.add_argument(
        "--alpha",
        type=_alpha_arg,
        default=DEFAULT_ALPHA,
        help=f"Significance level for all tests (default: {DEFAULT_ALPHA})",
    )
    analyze_parser.add_argument(
        "--plot",
        action="store_true",
        help="Show residual and Q-Q diagnostic plots",
    )
    analyze_parser.add_argument(
        "--report",
        nargs="?",
        const=True,
        default=False,
        metavar="PATH",
        help="Generate a Markdown report. Optionally specify output path (default: reports/analysis_report_<timestamp>.md)",
    )
    analyze_parser.add_argument(
        "--report-plots",
        action="store_true",
        help="Include plots in the report (requires --report)",
    )
    analyze_parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set logging level (default: INFO)",
    )
    analyze_parser.set_defaults(func=cmd_analyze)

    # Describe command
    describe_parser = subparsers.add_parser("describe", help="Print per-year summary statistics")
    describe_parser.add_argument(
        "--data",
        help="Path to a CSV file with year and depth columns (default: embedded dataset)",
    )
    describe_parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set logging level (default: WARNING)",
    )
    describe_parser.set_defaults(func=cmd_describe)

    args = parser.parse_args(sys.argv[1:] if argv is None else argv)

    if args.command is None:
        parser.print_help()
        return

    args.func(args)


if __name__ == "__main__":
    main()
