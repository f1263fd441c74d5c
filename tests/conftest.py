"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from src.api.app import create_app
from src.catalog import Dataset, load_dataset

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def make_row(**fields):
    """Build a raw CSV-style row; every value is text, like the loader produces."""
    row = {
        "mpg": "20",
        "cylinders": "4",
        "displacement": "100",
        "horsepower": "90",
        "weight": "2500",
        "acceleration": "15",
        "model year": "75",
        "origin": "1",
        "car name": "test car",
    }
    row.update({key.replace("_", " "): value for key, value in fields.items()})
    return row


@pytest.fixture
def sample_csv():
    return FIXTURES_DIR / "auto-mpg-sample.csv"


@pytest.fixture
def dataset(sample_csv):
    return load_dataset(sample_csv)


@pytest.fixture
def app(sample_csv):
    app = create_app({"TESTING": True, "DATA_PATH": sample_csv})
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def empty_client():
    app = create_app({"TESTING": True}, dataset=Dataset())
    return app.test_client()


@pytest.fixture
def row():
    return make_row


@pytest.fixture
def cars_from():
    def build(*rows):
        return Dataset.from_rows(rows)

    return build
