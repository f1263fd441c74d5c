"""CSV ingestion for the auto-mpg dataset."""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from .records import REQUIRED_COLUMNS, Dataset

logger = logging.getLogger(__name__)


def read_rows(data_path: Path) -> list[dict[str, str]]:
    if not data_path.exists():
        raise FileNotFoundError(f"Dataset not found: {data_path}")

    # Keep every field as raw text; "?" and blanks must reach the record parser untouched.
    frame = pd.read_csv(data_path, dtype=str, keep_default_na=False)
    frame.columns = [str(col).strip() for col in frame.columns]

    missing = [col for col in REQUIRED_COLUMNS if col not in frame.columns]
    if missing:
        raise ValueError(f"Dataset {data_path} is missing columns: {', '.join(missing)}")

    return frame[REQUIRED_COLUMNS].to_dict(orient="records")


def load_dataset(data_path: Path) -> Dataset:
    dataset = Dataset.from_rows(read_rows(data_path))
    logger.info("Loaded %d car records from %s", len(dataset), data_path)
    return dataset
