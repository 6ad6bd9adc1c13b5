"""Unit tests for src.statistical_analysis.diagnostics."""

from types import SimpleNamespace

import numpy as np
import pandas as pd
import pytest
from scipy import stats

from src.statistical_analysis.diagnostics import (
    TestResult,
    check_assumptions,
    levene_test,
    shapiro_test,
)
from src.statistical_analysis.exceptions import InsufficientData
from src.statistical_analysis.modeling import fit_group_model

# ─────────────────────────────────────────────────────────────────────────────
# Tests on the raw model
# ─────────────────────────────────────────────────────────────────────────────


class TestRawModelDiagnostics:
    """Assumption checks of depth ~ year before transforming."""

    def test_levene_does_not_reject(self, raw_model):
        result = levene_test(raw_model)
        assert result.p_value > 0.05
        assert not result.rejected

    def test_shapiro_rejects_normality(self, raw_model):
        result = shapiro_test(raw_model)
        assert result.p_value < 0.05
        assert result.rejected

    def test_levene_matches_scipy_on_raw_depths(self, raw_model, observations):
        # Shifting each group by its mean leaves median-centred deviations unchanged
        groups = [g["depth"].to_numpy() for _, g in observations.groupby("year", sort=False)]
        expected = stats.levene(*groups, center="median")
        result = levene_test(raw_model)
        assert result.statistic == pytest.approx(expected.statistic)
        assert result.p_value == pytest.approx(expected.pvalue)

    def test_mean_centred_variant(self, raw_model):
        result = levene_test(raw_model, center="mean")
        assert result.test_name == "Levene (mean-centered)"
        assert 0 <= result.p_value <= 1

    def test_check_assumptions_bundles_both_tests(self, raw_model):
        check = check_assumptions(raw_model)
        assert check.levene == levene_test(raw_model)
        assert check.shapiro == shapiro_test(raw_model)
        assert not check.assumptions_met


# ─────────────────────────────────────────────────────────────────────────────
# Tests for the decision rule
# ─────────────────────────────────────────────────────────────────────────────


class TestDecisionRule:
    def test_rejected_at_boundary(self):
        assert TestResult("t", 1.0, 0.05, alpha=0.05).rejected

    def test_not_rejected_above_alpha(self):
        assert not TestResult("t", 1.0, 0.051, alpha=0.05).rejected

    def test_custom_alpha(self, raw_model):
        result = shapiro_test(raw_model, alpha=0.0001)
        assert result.alpha == 0.0001
        assert result.rejected == (result.p_value <= 0.0001)


# ─────────────────────────────────────────────────────────────────────────────
# Tests for input validation
# ─────────────────────────────────────────────────────────────────────────────


class TestDiagnosticsInputValidation:
    def test_singleton_group_raises(self):
        df = pd.DataFrame({"year": [1976, 1976, 1978], "depth": [9.0, 9.5, 10.0]})
        model = fit_group_model(df)
        with pytest.raises(InsufficientData, match="at least 2"):
            levene_test(model)

    def test_too_few_residuals_for_shapiro(self):
        model = SimpleNamespace(
            residuals=np.array([0.1, -0.1]), groups=np.array([1976, 1978])
        )
        with pytest.raises(InsufficientData, match="at least 3"):
            shapiro_test(model)

    def test_single_group_raises(self):
        model = SimpleNamespace(
            residuals=np.array([0.1, -0.1, 0.0]), groups=np.array([1976, 1976, 1976])
        )
        with pytest.raises(InsufficientData, match="two groups"):
            levene_test(model)

    def test_invalid_center_raises(self, raw_model):
        with pytest.raises(ValueError, match="center"):
            levene_test(raw_model, center="trimmed")

    @pytest.mark.parametrize("alpha", [0, 1, -0.5, 1.5])
    def test_invalid_alpha_raises(self, raw_model, alpha):
        with pytest.raises(ValueError, match="alpha"):
            shapiro_test(raw_model, alpha=alpha)
