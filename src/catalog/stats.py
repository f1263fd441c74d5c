"""Dataset-wide statistics and grouped mpg averages for the charts."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Sequence

from .records import Car


def _mean(values: Sequence[float], digits: int) -> float | None:
    if not values:
        return None
    return round(sum(values) / len(values), digits)


def _value_range(values: Sequence[float]) -> dict[str, float] | None:
    if not values:
        return None
    return {"min": min(values), "max": max(values)}


@dataclass
class Statistics:
    """Snapshot over the full, unfiltered dataset.

    An empty dataset yields total_cars == 0 with every mean and range set
    to None instead of a NaN.
    """

    total_cars: int
    avg_mpg: float | None = None
    mpg_range: dict[str, float] | None = None
    cylinders_distribution: dict[int, int] = field(default_factory=dict)
    origin_distribution: dict[str, int] = field(default_factory=dict)
    year_range: dict[str, int] | None = None
    avg_horsepower: float | None = None
    avg_weight: float | None = None

    @property
    def has_data(self) -> bool:
        return self.total_cars > 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalCars": self.total_cars,
            "noData": not self.has_data,
            "avgMpg": self.avg_mpg,
            "mpgRange": self.mpg_range,
            # JSON object keys are strings.
            "cylindersDistribution": {
                str(cylinders): count for cylinders, count in self.cylinders_distribution.items()
            },
            "originDistribution": dict(self.origin_distribution),
            "yearRange": self.year_range,
            "avgHorsepower": self.avg_horsepower,
            "avgWeight": self.avg_weight,
        }


def compute_statistics(cars: Iterable[Car]) -> Statistics:
    cars = list(cars)
    if not cars:
        return Statistics(total_cars=0)

    mpgs = [car.mpg for car in cars]
    years = [car.model_year for car in cars]
    horsepowers = [car.horsepower for car in cars if car.horsepower is not None]

    return Statistics(
        total_cars=len(cars),
        avg_mpg=_mean(mpgs, 2),
        mpg_range=_value_range(mpgs),
        cylinders_distribution=dict(Counter(car.cylinders for car in cars)),
        origin_distribution=dict(Counter(car.origin_name for car in cars)),
        year_range=_value_range(years),
        avg_horsepower=_mean(horsepowers, 1),
        avg_weight=_mean([car.weight for car in cars], 0),
    )


@dataclass(frozen=True)
class GroupAverage:
    key: int
    avg_mpg: float
    count: int

    def to_dict(self, key_name: str) -> dict[str, Any]:
        return {key_name: self.key, "avgMpg": self.avg_mpg, "count": self.count}


def group_average(cars: Iterable[Car], key_func: Callable[[Car], int]) -> list[GroupAverage]:
    groups: dict[int, list[float]] = {}
    for car in cars:
        groups.setdefault(key_func(car), []).append(car.mpg)

    return [
        GroupAverage(key=key, avg_mpg=round(sum(mpgs) / len(mpgs), 2), count=len(mpgs))
        for key, mpgs in sorted(groups.items())
    ]


def mpg_by_year(cars: Iterable[Car]) -> list[GroupAverage]:
    return group_average(cars, lambda car: car.model_year + 1900)


def mpg_by_cylinders(cars: Iterable[Car]) -> list[GroupAverage]:
    return group_average(cars, lambda car: car.cylinders)


# kind -> (view, JSON key name for the group)
VISUALIZATIONS: dict[str, tuple[Callable[[Iterable[Car]], list[GroupAverage]], str]] = {
    "by-year": (mpg_by_year, "year"),
    "by-cylinders": (mpg_by_cylinders, "cylinders"),
}


def visualization(kind: str, cars: Iterable[Car]) -> list[dict[str, Any]]:
    if kind not in VISUALIZATIONS:
        raise ValueError(f"Unknown visualization: {kind}")
    view, key_name = VISUALIZATIONS[kind]
    return [group.to_dict(key_name) for group in view(cars)]
