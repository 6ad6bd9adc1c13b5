"""Unit tests for src.statistical_analysis.modeling."""

import numpy as np
import pandas as pd
import pytest

from src.statistical_analysis.exceptions import FitFailure
from src.statistical_analysis.modeling import fit_group_model
from src.statistical_analysis.summary import summarize_groups

# ─────────────────────────────────────────────────────────────────────────────
# Tests on the embedded dataset
# ─────────────────────────────────────────────────────────────────────────────


class TestFitGroupModel:
    """Treatment-coded OLS of depth on year."""

    def test_reference_is_first_level(self, raw_model):
        assert raw_model.reference == 1976
        assert raw_model.formula == "depth ~ C(year, Treatment(reference=1976))"

    def test_coefficient_names(self, raw_model):
        assert set(raw_model.coefficients) == {
            "Intercept",
            "C(year, Treatment(reference=1976))[T.1978]",
        }

    def test_intercept_is_reference_mean(self, raw_model, observations):
        s1976, s1978 = summarize_groups(observations)
        assert raw_model.intercept == pytest.approx(s1976.mean)
        assert raw_model.slope == pytest.approx(s1978.mean - s1976.mean)

    def test_residuals_sum_to_zero(self, raw_model):
        assert abs(np.mean(raw_model.residuals)) < 1e-9

    def test_fitted_plus_residual_is_observed(self, raw_model, observations):
        np.testing.assert_allclose(
            raw_model.fitted_values + raw_model.residuals,
            observations["depth"].to_numpy(),
            rtol=0,
            atol=1e-12,
        )

    def test_one_residual_per_observation(self, raw_model):
        assert raw_model.n_obs == 178
        assert len(raw_model.residuals) == 178
        assert len(raw_model.groups) == 178

    def test_arrays_are_read_only(self, raw_model):
        with pytest.raises(ValueError):
            raw_model.residuals[0] = 0.0

    def test_other_reference_flips_slope(self, observations, raw_model):
        flipped = fit_group_model(observations, reference=1978)
        assert flipped.slope == pytest.approx(-raw_model.slope)
        np.testing.assert_allclose(flipped.residuals, raw_model.residuals, atol=1e-10)

    def test_input_not_modified(self, observations):
        before = observations.copy()
        fit_group_model(observations)
        pd.testing.assert_frame_equal(observations, before)


# ─────────────────────────────────────────────────────────────────────────────
# Tests for degenerate fits
# ─────────────────────────────────────────────────────────────────────────────


class TestFitFailure:
    def test_single_level_raises(self):
        df = pd.DataFrame({"year": [1976, 1976, 1976], "depth": [9.0, 9.5, 10.0]})
        with pytest.raises(FitFailure, match="at least 2"):
            fit_group_model(df)

    def test_no_residual_degrees_of_freedom_raises(self):
        df = pd.DataFrame({"year": [1976, 1978], "depth": [9.0, 10.0]})
        with pytest.raises(FitFailure, match="residual degrees of freedom"):
            fit_group_model(df)

    def test_missing_values_raise(self):
        df = pd.DataFrame({"year": [1976, 1976, 1978, 1978], "depth": [9.0, np.nan, 10.0, 10.5]})
        with pytest.raises(FitFailure, match="Missing values"):
            fit_group_model(df)

    def test_missing_column_raises_value_error(self):
        df = pd.DataFrame({"year": [1976, 1978], "width": [9.0, 10.0]})
        with pytest.raises(ValueError, match="not found"):
            fit_group_model(df)

    def test_unknown_reference_raises_value_error(self, observations):
        with pytest.raises(ValueError, match="Reference level"):
            fit_group_model(observations, reference=1980)
