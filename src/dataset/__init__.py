"""Finch beak-depth dataset: location, row schema and loader.

The embedded ``data/finch_beaks.csv`` is synthetic. Its 178 depths (89 per
year, 0.1 mm resolution) were constructed to reproduce the published summary
statistics of the 1976/1978 Daphne Major Geospiza fortis measurements
(means 9.47 and 10.14 mm, SDs 1.04 and 0.91 mm, left-skewed). They are not the
field measurements. Point ``FINCH_BEAKS_DATA_PATH`` at a CSV of the real data
to analyse it instead.
"""

from src.dataset.config import DATASET_PATH, EXPECTED_ROWS, YEARS
from src.dataset.loader import DataUnavailable, load_observations
from src.dataset.schema import Observation

__all__ = [
    # Config
    "DATASET_PATH",
    "EXPECTED_ROWS",
    "YEARS",
    # Schema
    "Observation",
    # Loader
    "DataUnavailable",
    "load_observations",
]
