"""Unit tests for src.statistical_analysis.anova and effect_size."""

import pandas as pd
import pytest
from scipy import stats

from src.statistical_analysis.anova import AnovaTable, one_way_anova
from src.statistical_analysis.effect_size import effect_magnitude, eta_squared, omega_squared
from src.statistical_analysis.exceptions import InsufficientData
from src.statistical_analysis.modeling import fit_group_model


def _table(sum_sq, residual_sum_sq, df=1, residual_df=176, p_value=0.01, alpha=0.05):
    if residual_sum_sq > 0:
        f_statistic = (sum_sq / df) / (residual_sum_sq / residual_df)
    else:
        f_statistic = float("nan")
    return AnovaTable(
        term="C(year)",
        sum_sq=sum_sq,
        df=df,
        f_statistic=f_statistic,
        p_value=p_value,
        residual_sum_sq=residual_sum_sq,
        residual_df=residual_df,
        alpha=alpha,
    )


# ─────────────────────────────────────────────────────────────────────────────
# Tests for one_way_anova
# ─────────────────────────────────────────────────────────────────────────────


class TestOneWayAnova:
    def test_degrees_of_freedom(self, raw_model):
        table = one_way_anova(raw_model)
        assert (table.df, table.residual_df) == (1, 176)

    def test_matches_scipy_f_oneway(self, raw_model, observations):
        groups = [g["depth"].to_numpy() for _, g in observations.groupby("year", sort=False)]
        expected = stats.f_oneway(*groups)
        table = one_way_anova(raw_model)
        assert table.f_statistic == pytest.approx(expected.statistic)
        assert table.p_value == pytest.approx(expected.pvalue)

    def test_raw_f_statistic(self, raw_model):
        assert one_way_anova(raw_model).f_statistic == pytest.approx(20.95, abs=0.05)

    def test_f_is_ratio_of_mean_squares(self, raw_model):
        table = one_way_anova(raw_model)
        assert table.f_statistic == pytest.approx(table.mean_sq / table.residual_mean_sq)

    def test_sum_of_squares_partition(self, raw_model, observations):
        table = one_way_anova(raw_model)
        depth = observations["depth"]
        assert table.total_sum_sq == pytest.approx(((depth - depth.mean()) ** 2).sum())

    def test_reference_level_does_not_change_table(self, observations, raw_model):
        flipped = fit_group_model(observations, reference=1978)
        a, b = one_way_anova(raw_model), one_way_anova(flipped)
        assert a.f_statistic == pytest.approx(b.f_statistic)
        assert a.p_value == pytest.approx(b.p_value)

    def test_no_group_difference(self):
        df = pd.DataFrame({"year": [1976, 1976, 1978, 1978], "depth": [9.0, 10.0, 9.0, 10.0]})
        table = one_way_anova(fit_group_model(df))
        assert table.sum_sq == pytest.approx(0.0, abs=1e-12)
        assert not table.significant

    def test_significance_is_strict(self):
        assert not _table(1.0, 10.0, p_value=0.05).significant
        assert _table(1.0, 10.0, p_value=0.049).significant


# ─────────────────────────────────────────────────────────────────────────────
# Tests for effect sizes
# ─────────────────────────────────────────────────────────────────────────────


class TestEffectSize:
    def test_eta_squared(self):
        assert eta_squared(_table(2.0, 8.0)) == pytest.approx(0.2)

    def test_eta_squared_bounds(self):
        assert eta_squared(_table(0.0, 8.0)) == 0.0
        assert eta_squared(_table(8.0, 0.0)) == 1.0

    def test_omega_squared(self):
        table = _table(2.0, 8.0, residual_df=8)
        # (2 - 1 * 1) / (10 + 1)
        assert omega_squared(table) == pytest.approx(1 / 11)

    def test_omega_squared_floored_at_zero(self):
        assert omega_squared(_table(0.01, 8.0, residual_df=8)) == 0.0

    def test_zero_total_raises(self):
        with pytest.raises(InsufficientData):
            eta_squared(_table(0.0, 0.0, residual_df=8))

    @pytest.mark.parametrize(
        "value,label",
        [(0.0, "negligible"), (0.03, "small"), (0.1115, "medium"), (0.2, "large"), (1.0, "large")],
    )
    def test_effect_magnitude(self, value, label):
        assert effect_magnitude(value) == label

    def test_effect_magnitude_out_of_range(self):
        with pytest.raises(ValueError):
            effect_magnitude(1.5)
