"""In-memory fuel-economy catalog: records, loading, querying and statistics."""

from .loader import load_dataset
from .query import QuerySpec, list_cars, parse_query
from .records import Car, Dataset
from .stats import compute_statistics, visualization

__all__ = [
    "Car",
    "Dataset",
    "QuerySpec",
    "compute_statistics",
    "list_cars",
    "load_dataset",
    "parse_query",
    "visualization",
]
