"""Typed car records and the immutable dataset that holds them."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping

ORIGIN_NAMES = {
    1: "USA",
    2: "Europe",
    3: "Japan",
}

HORSEPOWER_MISSING = "?"

REQUIRED_COLUMNS = [
    "mpg",
    "cylinders",
    "displacement",
    "horsepower",
    "weight",
    "acceleration",
    "model year",
    "origin",
    "car name",
]


def origin_name(origin: int) -> str:
    return ORIGIN_NAMES.get(origin, "Unknown")


def _to_float(value: object) -> float | None:
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def parse_real(value: object, default: float = 0.0) -> float:
    number = _to_float(value)
    return default if number is None else number


def parse_integer(value: object, default: int = 0) -> int:
    number = _to_float(value)
    return default if number is None else int(number)


def parse_horsepower(value: object) -> float | None:
    if value is not None and str(value).strip() == HORSEPOWER_MISSING:
        return None
    return _to_float(value)


@dataclass(frozen=True)
class Car:
    """One vehicle row after coercion. Immutable once built."""

    id: int
    mpg: float
    cylinders: int
    displacement: float
    horsepower: float | None
    weight: float
    acceleration: float
    model_year: int
    origin: int
    car_name: str

    @property
    def origin_name(self) -> str:
        return origin_name(self.origin)

    @classmethod
    def from_row(cls, row: Mapping[str, Any], car_id: int) -> "Car":
        raw_name = row.get("car name")
        return cls(
            id=car_id,
            mpg=parse_real(row.get("mpg")),
            cylinders=parse_integer(row.get("cylinders")),
            displacement=parse_real(row.get("displacement")),
            horsepower=parse_horsepower(row.get("horsepower")),
            weight=parse_real(row.get("weight")),
            acceleration=parse_real(row.get("acceleration")),
            model_year=parse_integer(row.get("model year")),
            origin=parse_integer(row.get("origin")),
            car_name=str(raw_name).strip() if raw_name is not None else "",
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "mpg": self.mpg,
            "cylinders": self.cylinders,
            "displacement": self.displacement,
            "horsepower": self.horsepower,
            "weight": self.weight,
            "acceleration": self.acceleration,
            "modelYear": self.model_year,
            "origin": self.origin,
            "carName": self.car_name,
            "originName": self.origin_name,
        }


@dataclass(frozen=True)
class Dataset:
    """Read-only collection of cars, built once at startup.

    Ids are dense and 1-based, matching input row order.
    """

    cars: tuple[Car, ...] = ()
    _by_id: Mapping[int, Car] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "cars", tuple(self.cars))
        object.__setattr__(
            self, "_by_id", MappingProxyType({car.id: car for car in self.cars})
        )

    @classmethod
    def from_rows(cls, rows: Iterable[Mapping[str, Any]]) -> "Dataset":
        return cls(
            cars=tuple(Car.from_row(row, index) for index, row in enumerate(rows, start=1))
        )

    def __len__(self) -> int:
        return len(self.cars)

    def __iter__(self) -> Iterator[Car]:
        return iter(self.cars)

    def get(self, car_id: int) -> Car | None:
        return self._by_id.get(car_id)
