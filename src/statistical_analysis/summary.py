import logging
from dataclasses import dataclass

import numpy as np
import pandas as pd

from src.statistical_analysis.exceptions import InsufficientData

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GroupSummary:
    """Count, mean and sample standard deviation of one group."""

    year: int
    n: int
    mean: float
    sd: float


def summarize_groups(df, group_col="year", value_col="depth"):
    """
    Compute per-group descriptive statistics.

    Parameters
    ----------
    df : pd.DataFrame
        Observations.
    group_col : str, optional
        Column holding the group label. Defaults to "year".
    value_col : str, optional
        Column holding the measurement. Defaults to "depth".

    Returns
    -------
    list[GroupSummary]
        One summary per distinct group, in order of first appearance.

    Raises
    ------
    ValueError
        If either column is missing or the frame is empty.
    InsufficientData
        If any group has fewer than 2 observations.
    """
    if df is None or df.empty:
        raise ValueError("df must not be empty")
    for col in (group_col, value_col):
        if col not in df.columns:
            raise ValueError(f"Column '{col}' not found in data")

    summaries = []
    for group, values in df.groupby(group_col, sort=False)[value_col]:
        values = values.to_numpy(dtype=float)
        if len(values) < 2:
            raise InsufficientData(
                f"Group {group} has {len(values)} observation(s); at least 2 are needed "
                "for a standard deviation"
            )
        summaries.append(
            GroupSummary(
                year=group,
                n=len(values),
                mean=float(np.mean(values)),
                sd=float(np.std(values, ddof=1)),
            )
        )
        logger.debug(f"{group_col}={group}: n={len(values)}, mean={summaries[-1].mean:.3f}")

    return summaries


def summary_frame(summaries) -> pd.DataFrame:
    """Tabulate group summaries for display."""
    return pd.DataFrame(
        [(s.year, s.n, s.mean, s.sd) for s in summaries],
        columns=["year", "n", "mean", "sd"],
    )
