"""
Data models for the Traewelling desktop client.

This module contains the check-in and statistics data structures
returned by the Träwelling API.
"""

from .status_data import (
    Journey,
    ProductType,
    Status,
    StatusBusiness,
    StatusVisibility,
    TripStation,
)
from .statistics_data import CategoryStatistics, OperatorStatistics, PersonalStatistics

__all__ = [
    "Journey",
    "ProductType",
    "Status",
    "StatusBusiness",
    "StatusVisibility",
    "TripStation",
    "CategoryStatistics",
    "OperatorStatistics",
    "PersonalStatistics",
]
