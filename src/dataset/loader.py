import logging
import pathlib

import pandas as pd
from pydantic import ValidationError

from src.dataset.config import DATASET_PATH, EXPECTED_ROWS
from src.dataset.schema import Observation

logger = logging.getLogger(__name__)

COLUMNS = ["year", "depth"]


class DataUnavailable(Exception):
    """Raised when the beak-depth dataset cannot be loaded."""

    pass


def load_observations(path=None, expected_rows: int | None = EXPECTED_ROWS) -> pd.DataFrame:
    """
    Load the finch beak-depth observations.

    Parameters
    ----------
    path : str or pathlib.Path, optional
        CSV file with ``year`` and ``depth`` columns. Defaults to the embedded
        dataset (overridable through ``FINCH_BEAKS_DATA_PATH``).
    expected_rows : int or None, optional
        Number of rows the file must contain. ``None`` disables the check.

    Returns
    -------
    pd.DataFrame
        One row per observation, in file order, with an integer ``year``
        column and a float ``depth`` column.

    Raises
    ------
    DataUnavailable
        If the file is missing, unreadable, has the wrong columns, contains an
        invalid row, or does not have the expected number of rows.
    """
    path = pathlib.Path(path) if path is not None else DATASET_PATH

    try:
        raw = pd.read_csv(path)
    except FileNotFoundError as e:
        raise DataUnavailable(f"Dataset not found: {path}") from e
    except (pd.errors.EmptyDataError, pd.errors.ParserError, UnicodeDecodeError) as e:
        raise DataUnavailable(f"Dataset could not be parsed: {path} ({e})") from e
    except OSError as e:
        raise DataUnavailable(f"Dataset could not be read: {path} ({e})") from e

    missing = [c for c in COLUMNS if c not in raw.columns]
    if missing:
        raise DataUnavailable(f"Dataset {path} is missing column(s): {', '.join(missing)}")

    records = []
    errors = []
    for idx, row in enumerate(raw[COLUMNS].to_dict(orient="records")):
        try:
            records.append(Observation.model_validate(row))
        except ValidationError as e:
            errors.append(f"row_{idx}: {e.errors()[0]['msg']}")

    if errors:
        raise DataUnavailable(f"Dataset {path} contains invalid rows: " + "; ".join(errors))

    if expected_rows is not None and len(records) != expected_rows:
        raise DataUnavailable(
            f"Dataset {path} has {len(records)} rows, expected {expected_rows}"
        )

    df = pd.DataFrame([r.model_dump() for r in records], columns=COLUMNS)
    df = df.astype({"year": int, "depth": float})

    logger.info(f"Loaded {len(df)} observations from {path.name}")
    logger.debug(f"Observations per year: {df['year'].value_counts(sort=False).to_dict()}")

    return df
