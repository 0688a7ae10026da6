"""
Personal statistics data models.

Aggregated check-in counts per operator and per product type for a date
range, as returned by the statistics endpoint.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from .status_data import ProductType


@dataclass(frozen=True)
class OperatorStatistics:
    """Check-ins with a single operator."""

    operator_name: str
    check_in_count: int
    duration: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OperatorStatistics":
        return cls(
            operator_name=data.get("name") or "",
            check_in_count=int(data["count"]),
            duration=int(data.get("duration") or 0),
        )


@dataclass(frozen=True)
class CategoryStatistics:
    """Check-ins with a single product type."""

    product_type: ProductType
    check_in_count: int
    duration: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CategoryStatistics":
        return cls(
            product_type=ProductType.from_api(data.get("name")),
            check_in_count=int(data["count"]),
            duration=int(data.get("duration") or 0),
        )


@dataclass(frozen=True)
class PersonalStatistics:
    """
    Statistics aggregate for the logged-in user.

    Operators and categories keep the order the API returned them in, which
    is also the order bars are drawn in.
    """

    operators: List[OperatorStatistics] = field(default_factory=list)
    categories: List[CategoryStatistics] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PersonalStatistics":
        """
        Build statistics from the API "data" object.

        Raises:
            KeyError: If an entry lacks its count
            ValueError: If a count is not numeric
        """
        return cls(
            operators=[
                OperatorStatistics.from_dict(entry)
                for entry in data.get("operators") or []
            ],
            categories=[
                CategoryStatistics.from_dict(entry)
                for entry in data.get("categories") or []
            ],
        )

    @property
    def total_check_ins(self) -> int:
        """Total check-ins counted across product types."""
        return sum(category.check_in_count for category in self.categories)

    @property
    def is_empty(self) -> bool:
        return not self.operators and not self.categories
