import pytest

from src.dataset import load_observations
from src.statistical_analysis.modeling import fit_group_model
from src.statistical_analysis.pipeline import run_analysis


@pytest.fixture(scope="session")
def observations():
    """The embedded beak-depth dataset."""
    return load_observations()


@pytest.fixture(scope="session")
def raw_model(observations):
    """Depth regressed on year, 1976 as reference."""
    return fit_group_model(observations)


@pytest.fixture(scope="session")
def analysis_result(observations):
    """One full pipeline run on the embedded dataset."""
    return run_analysis(observations)
