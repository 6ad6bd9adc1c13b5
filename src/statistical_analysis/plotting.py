import logging

import matplotlib.pyplot as plt
from scipy.stats import probplot

logger = logging.getLogger(__name__)


def _plot_residuals_vs_fitted(ax, model, title=None):
    """
    Scatter residuals against fitted values with a zero reference line.

    Parameters
    ----------
    ax : matplotlib.axes.Axes
        Axes object to plot on.
    model : FittedModel
        Model whose residuals are shown.
    title : str, optional
        Axes title. Defaults to the model formula.
    """
    ax.scatter(model.fitted_values, model.residuals, alpha=0.6, edgecolor="black")
    ax.axhline(0, color="r", linestyle="--", linewidth=1)
    ax.set_xlabel("Fitted values")
    ax.set_ylabel("Residuals")
    ax.set_title(title or f"Residuals vs fitted: {model.response}")
    ax.grid(True, alpha=0.3)


def _plot_residual_qq(ax, model, title=None):
    """
    Normal Q-Q plot of the model residuals.

    Parameters
    ----------
    ax : matplotlib.axes.Axes
        Axes object to plot on.
    model : FittedModel
        Model whose residuals are shown.
    title : str, optional
        Axes title.
    """
    probplot(model.residuals, dist="norm", plot=ax)
    ax.set_title(title or f"Normal Q-Q: {model.response}")
    ax.grid(True, alpha=0.3)


def _finish(fig, save_path):
    plt.tight_layout()

    if save_path:
        try:
            plt.savefig(save_path, dpi=150, bbox_inches="tight")
        finally:
            plt.close(fig)
        logger.info(f"Plot saved to {save_path}")
    else:
        plt.show()


def plot_model_diagnostics(model, save_path: str = None):
    """
    Plot residual-vs-fitted and normal Q-Q diagnostics for one fitted model.

    Parameters
    ----------
    model : FittedModel
        Model to diagnose.
    save_path : str, optional
        Path to save the plot image. If None, displays the plot interactively.
    """
    if len(model.residuals) == 0:
        raise RuntimeError("Model has no residuals to plot")

    fig, axes = plt.subplots(1, 2, figsize=(10, 5))
    _plot_residuals_vs_fitted(axes[0], model)
    _plot_residual_qq(axes[1], model)
    _finish(fig, save_path)


def plot_analysis(result, save_path: str = None):
    """
    Plot diagnostics of the raw and the transformed model side by side.

    The top row shows the model on raw depth, the bottom row the model on
    Box-Cox transformed depth.

    Parameters
    ----------
    result : AnalysisResult
        Output of run_analysis.
    save_path : str, optional
        Path to save the plot image. If None, displays the plot interactively.
    """
    fig, axes = plt.subplots(2, 2, figsize=(10, 10))

    lmbda = result.transform.lmbda
    _plot_residuals_vs_fitted(axes[0, 0], result.raw_model, "Residuals vs fitted (raw)")
    _plot_residual_qq(axes[0, 1], result.raw_model, "Normal Q-Q (raw)")
    _plot_residuals_vs_fitted(
        axes[1, 0], result.transformed_model, f"Residuals vs fitted (Box-Cox, lambda={lmbda:.2f})"
    )
    _plot_residual_qq(
        axes[1, 1], result.transformed_model, f"Normal Q-Q (Box-Cox, lambda={lmbda:.2f})"
    )

    _finish(fig, save_path)
