import os
import pathlib

_default_data_dir = pathlib.Path(__file__).parent / "data"
DATASET_PATH = pathlib.Path(
    os.getenv("FINCH_BEAKS_DATA_PATH", str(_default_data_dir / "finch_beaks.csv"))
)

# Shape of the embedded dataset: 89 birds measured in each of 1976 and 1978
EXPECTED_ROWS = 178
YEARS = (1976, 1978)
