"""Filtering, sorting and pagination over the in-memory car list."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Mapping, Sequence

from .records import Car, Dataset

DEFAULT_SORT_BY = "mpg"
DEFAULT_SORT_ORDER = "desc"
DEFAULT_PAGE = 1
DEFAULT_LIMIT = 50

# Transport-layer encodings of "no value".
_ABSENT_TOKENS = {"", "null", "undefined", "none", "nan"}


def _text_key(value: str) -> str:
    return value.casefold()


# Missing horsepower sorts below every real value.
SORT_FIELDS: dict[str, Callable[[Car], Any]] = {
    "id": lambda car: car.id,
    "mpg": lambda car: car.mpg,
    "cylinders": lambda car: car.cylinders,
    "displacement": lambda car: car.displacement,
    "horsepower": lambda car: (car.horsepower is not None, car.horsepower or 0.0),
    "weight": lambda car: car.weight,
    "acceleration": lambda car: car.acceleration,
    "modelYear": lambda car: car.model_year,
    "origin": lambda car: car.origin,
    "originName": lambda car: _text_key(car.origin_name),
    "carName": lambda car: _text_key(car.car_name),
}


def optional_float(raw: object) -> float | None:
    if raw is None:
        return None
    text = str(raw).strip()
    if text.lower() in _ABSENT_TOKENS:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def optional_int(raw: object) -> int | None:
    value = optional_float(raw)
    return None if value is None else int(value)


def optional_text(raw: object) -> str | None:
    if raw is None:
        return None
    text = str(raw)
    if not text.strip() or text.strip().lower() in ("null", "undefined"):
        return None
    return text


def positive_int(raw: object, default: int) -> int:
    value = optional_int(raw)
    return value if value is not None and value > 0 else default


@dataclass(frozen=True)
class QuerySpec:
    """Filter, sort and pagination parameters of one list request."""

    search: str | None = None
    min_mpg: float | None = None
    max_mpg: float | None = None
    cylinders: int | None = None
    origin: int | None = None
    min_year: int | None = None
    max_year: int | None = None
    sort_by: str = DEFAULT_SORT_BY
    sort_order: str = DEFAULT_SORT_ORDER
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    def filters(self) -> dict[str, Any]:
        return {
            "search": self.search,
            "minMpg": self.min_mpg,
            "maxMpg": self.max_mpg,
            "cylinders": self.cylinders,
            "origin": self.origin,
            "minYear": self.min_year,
            "maxYear": self.max_year,
            "sortBy": self.sort_by,
            "sortOrder": self.sort_order,
        }


def parse_query(args: Mapping[str, Any], default_limit: int = DEFAULT_LIMIT) -> QuerySpec:
    """Turn raw query-string values into a QuerySpec.

    Anything malformed collapses to "not provided" or to the default; this
    never raises.
    """
    sort_by = optional_text(args.get("sortBy"))
    if sort_by not in SORT_FIELDS:
        sort_by = DEFAULT_SORT_BY

    sort_order = (optional_text(args.get("sortOrder")) or "").strip().lower()
    if sort_order != "asc":
        sort_order = DEFAULT_SORT_ORDER

    return QuerySpec(
        search=optional_text(args.get("search")),
        min_mpg=optional_float(args.get("minMpg")),
        max_mpg=optional_float(args.get("maxMpg")),
        cylinders=optional_int(args.get("cylinders")),
        origin=optional_int(args.get("origin")),
        min_year=optional_int(args.get("minYear")),
        max_year=optional_int(args.get("maxYear")),
        sort_by=sort_by,
        sort_order=sort_order,
        page=positive_int(args.get("page"), DEFAULT_PAGE),
        limit=positive_int(args.get("limit"), default_limit),
    )


def _predicates(spec: QuerySpec) -> list[Callable[[Car], bool]]:
    checks: list[Callable[[Car], bool]] = []

    if spec.search:
        needle = spec.search.lower()
        checks.append(lambda car: needle in car.car_name.lower())
    if spec.min_mpg is not None:
        checks.append(lambda car: car.mpg >= spec.min_mpg)
    if spec.max_mpg is not None:
        checks.append(lambda car: car.mpg <= spec.max_mpg)
    if spec.cylinders is not None:
        checks.append(lambda car: car.cylinders == spec.cylinders)
    if spec.origin is not None:
        checks.append(lambda car: car.origin == spec.origin)
    if spec.min_year is not None:
        checks.append(lambda car: car.model_year >= spec.min_year)
    if spec.max_year is not None:
        checks.append(lambda car: car.model_year <= spec.max_year)

    return checks


def filter_cars(cars: Iterable[Car], spec: QuerySpec) -> list[Car]:
    checks = _predicates(spec)
    return [car for car in cars if all(check(car) for check in checks)]


def sort_cars(cars: Iterable[Car], sort_by: str = DEFAULT_SORT_BY, sort_order: str = DEFAULT_SORT_ORDER) -> list[Car]:
    """Order cars by a named field; ties always fall back to id ascending."""
    accessor = SORT_FIELDS.get(sort_by, SORT_FIELDS[DEFAULT_SORT_BY])
    by_id = sorted(cars, key=lambda car: car.id)
    # sorted() is stable for reverse=True too, so equal keys keep id order.
    return sorted(by_id, key=accessor, reverse=sort_order != "asc")


def paginate(cars: Sequence[Car], page: int = DEFAULT_PAGE, limit: int = DEFAULT_LIMIT) -> tuple[list[Car], int]:
    page = page if page > 0 else DEFAULT_PAGE
    limit = limit if limit > 0 else DEFAULT_LIMIT
    start = (page - 1) * limit
    return list(cars[start:start + limit]), len(cars)


@dataclass
class CarPage:
    data: list[Car]
    page: int
    limit: int
    total: int
    filters: dict[str, Any] = field(default_factory=dict)

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit)

    def to_dict(self) -> dict[str, Any]:
        return {
            "data": [car.to_dict() for car in self.data],
            "pagination": {
                "page": self.page,
                "limit": self.limit,
                "total": self.total,
                "totalPages": self.total_pages,
            },
            "filters": self.filters,
        }


def list_cars(dataset: Dataset, spec: QuerySpec) -> CarPage:
    matched = filter_cars(dataset, spec)
    ordered = sort_cars(matched, spec.sort_by, spec.sort_order)
    rows, total = paginate(ordered, spec.page, spec.limit)
    return CarPage(data=rows, page=spec.page, limit=spec.limit, total=total, filters=spec.filters())
