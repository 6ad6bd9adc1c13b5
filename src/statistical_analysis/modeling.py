import logging
from dataclasses import dataclass, field
from typing import Any

import numpy as np
import pandas as pd
import statsmodels.formula.api as smf
from patsy import PatsyError

from src.statistical_analysis.exceptions import FitFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FittedModel:
    """Result of regressing a response on a single treatment-coded factor."""

    formula: str
    response: str
    group: str
    reference: Any
    term: str
    coefficients: dict
    residuals: np.ndarray = field(repr=False, compare=False)
    fitted_values: np.ndarray = field(repr=False, compare=False)
    observed: np.ndarray = field(repr=False, compare=False)
    groups: np.ndarray = field(repr=False, compare=False)
    result: Any = field(repr=False, compare=False)

    @property
    def n_obs(self) -> int:
        return len(self.observed)

    @property
    def intercept(self) -> float:
        return self.coefficients["Intercept"]

    @property
    def slope(self) -> float:
        """Coefficient of the (single) non-reference level."""
        slopes = [v for k, v in self.coefficients.items() if k != "Intercept"]
        return slopes[0]


def _native(value):
    # numpy scalars would otherwise leak their repr into the formula
    return value.item() if isinstance(value, np.generic) else value


def _readonly(values) -> np.ndarray:
    arr = np.array(values, copy=True)
    arr.setflags(write=False)
    return arr


def fit_group_model(df, response="depth", group="year", reference=None) -> FittedModel:
    """
    Fit ``response ~ group`` by ordinary least squares.

    The grouping column is treatment coded. The reference level defaults to
    the first level encountered in ``df``, so the intercept is that group's
    mean and the slope the difference of the other group from it.

    Parameters
    ----------
    df : pd.DataFrame
        Observations (raw or transformed).
    response : str, optional
        Response column. Defaults to "depth".
    group : str, optional
        Categorical predictor column. Defaults to "year".
    reference : optional
        Reference level of the predictor. Defaults to the first level in data order.

    Returns
    -------
    FittedModel

    Raises
    ------
    ValueError
        If a column is missing or the reference level does not occur in the data.
    FitFailure
        If the fit is singular or leaves no residual degrees of freedom.
    """
    for col in (response, group):
        if col not in df.columns:
            raise ValueError(f"Column '{col}' not found in data")

    if df[response].isna().any() or df[group].isna().any():
        raise FitFailure(f"Missing values in '{response}' or '{group}'; cannot fit model")

    levels = [_native(v) for v in pd.unique(df[group])]
    if len(levels) < 2:
        raise FitFailure(
            f"Predictor '{group}' has {len(levels)} level(s); at least 2 are needed"
        )
    if reference is None:
        reference = levels[0]
    reference = _native(reference)
    if reference not in levels:
        raise ValueError(f"Reference level {reference!r} not found in column '{group}'")

    term = f"C({group}, Treatment(reference={reference!r}))"
    formula = f"{response} ~ {term}"

    try:
        result = smf.ols(formula, data=df).fit()
    except (ValueError, np.linalg.LinAlgError, PatsyError) as e:
        logger.error(f"OLS fit failed for {formula}: {e}")
        raise FitFailure(f"OLS fit failed for {formula}: {e}") from e

    exog = result.model.exog
    rank = np.linalg.matrix_rank(exog)
    if rank < exog.shape[1]:
        raise FitFailure(
            f"Design matrix is rank-deficient (rank {rank} < {exog.shape[1]} columns)"
        )
    if result.df_resid <= 0:
        raise FitFailure(
            f"No residual degrees of freedom ({len(df)} observations, {exog.shape[1]} parameters)"
        )

    model = FittedModel(
        formula=formula,
        response=response,
        group=group,
        reference=reference,
        term=term,
        coefficients={name: float(value) for name, value in result.params.items()},
        residuals=_readonly(result.resid.to_numpy(dtype=float)),
        fitted_values=_readonly(result.fittedvalues.to_numpy(dtype=float)),
        observed=_readonly(df[response].to_numpy(dtype=float)),
        groups=_readonly(df[group].to_numpy()),
        result=result,
    )

    logger.info(
        f"Fitted {formula}: intercept={model.intercept:.4f}, slope={model.slope:.4f}, "
        f"R^2={result.rsquared:.4f}"
    )
    return model
