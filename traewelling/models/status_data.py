"""
Status data models and enums.

This module defines the data structures for a check-in as returned by the
Träwelling API: the status itself, the journey with its origin and
destination stations, the user who checked in, tags and events.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, IntEnum
from typing import Any, Dict, List, Optional

from ..utils.helpers import first_present, parse_api_datetime


class ProductType(Enum):
    """Enumeration of transit product types."""

    NATIONAL_EXPRESS = "nationalExpress"
    NATIONAL = "national"
    REGIONAL_EXPRESS = "regionalExp"
    REGIONAL = "regional"
    SUBURBAN = "suburban"
    SUBWAY = "subway"
    TRAM = "tram"
    BUS = "bus"
    FERRY = "ferry"
    TAXI = "taxi"
    PLANE = "plane"
    UNKNOWN = "unknown"

    @classmethod
    def from_api(cls, value: Optional[str]) -> "ProductType":
        """Map an API category string, falling back to UNKNOWN."""
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN

    @property
    def display_name(self) -> str:
        """Human readable name."""
        names = {
            ProductType.NATIONAL_EXPRESS: "High-speed train",
            ProductType.NATIONAL: "Intercity train",
            ProductType.REGIONAL_EXPRESS: "Regional express",
            ProductType.REGIONAL: "Regional train",
            ProductType.SUBURBAN: "Suburban train",
            ProductType.SUBWAY: "Subway",
            ProductType.TRAM: "Tram",
            ProductType.BUS: "Bus",
            ProductType.FERRY: "Ferry",
            ProductType.TAXI: "Taxi",
            ProductType.PLANE: "Plane",
            ProductType.UNKNOWN: "Other",
        }
        return names[self]

    @property
    def icon(self) -> str:
        """Unicode icon for the product type."""
        icons = {
            ProductType.NATIONAL_EXPRESS: "🚄",
            ProductType.NATIONAL: "🚆",
            ProductType.REGIONAL_EXPRESS: "🚆",
            ProductType.REGIONAL: "🚆",
            ProductType.SUBURBAN: "🚈",
            ProductType.SUBWAY: "🚇",
            ProductType.TRAM: "🚊",
            ProductType.BUS: "🚌",
            ProductType.FERRY: "⛴️",
            ProductType.TAXI: "🚕",
            ProductType.PLANE: "✈️",
        }
        return icons.get(self, "🚂")


class StatusBusiness(IntEnum):
    """Travel purpose of a check-in."""

    PRIVATE = 0
    BUSINESS = 1
    COMMUTE = 2

    @property
    def icon(self) -> str:
        icons = {
            StatusBusiness.PRIVATE: "👤",
            StatusBusiness.BUSINESS: "💼",
            StatusBusiness.COMMUTE: "🏢",
        }
        return icons[self]


class StatusVisibility(IntEnum):
    """Who may see a check-in."""

    PUBLIC = 0
    UNLISTED = 1
    FOLLOWERS = 2
    PRIVATE = 3
    AUTHENTICATED = 4

    @classmethod
    def from_api(cls, value: Optional[int]) -> "StatusVisibility":
        try:
            return cls(value)
        except ValueError:
            return cls.PUBLIC

    @property
    def icon(self) -> str:
        icons = {
            StatusVisibility.PUBLIC: "🌐",
            StatusVisibility.UNLISTED: "🔓",
            StatusVisibility.FOLLOWERS: "👥",
            StatusVisibility.PRIVATE: "🔒",
            StatusVisibility.AUTHENTICATED: "🔑",
        }
        return icons[self]


@dataclass(frozen=True)
class TripStation:
    """
    A stop of a trip with planned and real times.
    """

    id: int
    name: str
    ril_identifier: Optional[str]
    arrival_planned: Optional[datetime]
    arrival_real: Optional[datetime]
    departure_planned: Optional[datetime]
    departure_real: Optional[datetime]
    platform: Optional[str] = None
    cancelled: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TripStation":
        return cls(
            id=data["id"],
            name=data["name"],
            ril_identifier=data.get("rilIdentifier"),
            arrival_planned=parse_api_datetime(data.get("arrivalPlanned")),
            arrival_real=parse_api_datetime(data.get("arrivalReal")),
            departure_planned=parse_api_datetime(data.get("departurePlanned")),
            departure_real=parse_api_datetime(data.get("departureReal")),
            platform=data.get("platform"),
            cancelled=bool(data.get("cancelled", False)),
        )


@dataclass(frozen=True)
class Operator:
    """Transit operator running a trip."""

    id: Optional[int]
    identifier: Optional[str]
    name: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Operator":
        return cls(
            id=data.get("id"),
            identifier=data.get("identifier"),
            name=data.get("name", ""),
        )


@dataclass(frozen=True)
class Journey:
    """
    The trip segment a check-in covers.

    Origin and destination carry the timetable data; manual departure and
    arrival are times the user entered to override it.
    """

    trip: str
    product_type: ProductType
    line: str
    line_id: Optional[str]
    journey_number: Optional[int]
    distance: int
    duration: int
    origin: TripStation
    destination: TripStation
    operator: Optional[Operator] = None
    departure_manual: Optional[datetime] = None
    arrival_manual: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Journey":
        operator = data.get("operator")
        return cls(
            trip=str(data.get("trip", "")),
            product_type=ProductType.from_api(data.get("category")),
            line=data.get("lineName", ""),
            line_id=data.get("lineId"),
            journey_number=data.get("journeyNumber"),
            distance=int(data.get("distance") or 0),
            duration=int(data.get("duration") or 0),
            origin=TripStation.from_dict(data["origin"]),
            destination=TripStation.from_dict(data["destination"]),
            operator=Operator.from_dict(operator) if operator else None,
            departure_manual=parse_api_datetime(data.get("manualDeparture")),
            arrival_manual=parse_api_datetime(data.get("manualArrival")),
        )

    @property
    def displayed_departure_real(self) -> Optional[datetime]:
        """Manual departure if entered, else the real departure."""
        return first_present(self.departure_manual, self.origin.departure_real)

    @property
    def displayed_arrival_real(self) -> Optional[datetime]:
        """Manual arrival if entered, else the real arrival."""
        return first_present(self.arrival_manual, self.destination.arrival_real)

    @property
    def effective_departure(self) -> Optional[datetime]:
        """Most specific known departure time."""
        return first_present(
            self.departure_manual,
            self.origin.departure_real,
            self.origin.departure_planned,
        )

    @property
    def effective_arrival(self) -> Optional[datetime]:
        """Most specific known arrival time."""
        return first_present(
            self.arrival_manual,
            self.destination.arrival_real,
            self.destination.arrival_planned,
        )

    def format_line(self) -> str:
        """Line name with journey number when it adds information."""
        if self.journey_number and str(self.journey_number) not in self.line:
            return f"{self.line} ({self.journey_number})"
        return self.line


@dataclass(frozen=True)
class StatusUser:
    id: int
    username: str
    display_name: str
    avatar_url: Optional[str] = None


@dataclass(frozen=True)
class StatusTag:
    key: str
    value: str
    visibility: StatusVisibility = StatusVisibility.PUBLIC

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StatusTag":
        return cls(
            key=data["key"],
            value=str(data.get("value", "")),
            visibility=StatusVisibility.from_api(data.get("visibility", 0)),
        )

    def format(self) -> str:
        """Format the tag as "key: value"."""
        return f"{self.key}: {self.value}"


@dataclass(frozen=True)
class StatusEvent:
    id: int
    name: str
    slug: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StatusEvent":
        return cls(id=data.get("id", 0), name=data.get("name") or "", slug=data.get("slug"))


@dataclass(frozen=True)
class Status:
    """
    Immutable data class representing a single check-in.

    Like state is optional in the API: a status that cannot be liked carries
    no like information at all.
    """

    id: int
    body: str
    business: StatusBusiness
    visibility: StatusVisibility
    created_at: datetime
    user: StatusUser
    journey: Journey
    likes: Optional[int] = None
    liked: Optional[bool] = None
    likeable: Optional[bool] = None
    client_name: Optional[str] = None
    tags: List[StatusTag] = field(default_factory=list)
    event: Optional[StatusEvent] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Status":
        """
        Build a status from an API status object.

        Raises:
            KeyError: If a required field is missing
            ValueError: If a field has an invalid value
        """
        user_data = data.get("userDetails") or {}
        user = StatusUser(
            id=user_data.get("id", data.get("user")),
            username=user_data.get("username", data.get("username", "")),
            display_name=user_data.get("displayName", data.get("username", "")),
            avatar_url=user_data.get("profilePicture", data.get("profilePicture")),
        )
        client = data.get("client") or {}
        event = data.get("event")

        return cls(
            id=data["id"],
            body=data.get("body") or "",
            business=StatusBusiness(data.get("business", 0)),
            visibility=StatusVisibility.from_api(data.get("visibility", 0)),
            created_at=parse_api_datetime(data["createdAt"]),
            user=user,
            journey=Journey.from_dict(data["train"]),
            likes=data.get("likes"),
            liked=data.get("liked"),
            likeable=data.get("isLikable"),
            client_name=client.get("name"),
            tags=[StatusTag.from_dict(tag) for tag in data.get("tags") or []],
            event=StatusEvent.from_dict(event) if event else None,
        )

    @property
    def is_liked(self) -> bool:
        return bool(self.liked)

    @property
    def like_count(self) -> int:
        return self.likes or 0

    @property
    def can_be_liked(self) -> bool:
        """Whether the like toggle should be shown."""
        return self.liked is not None and self.likes is not None and self.likeable is True

    @property
    def has_event(self) -> bool:
        return self.event is not None and bool(self.event.name)

    def is_own_status(self, user_id: Optional[int]) -> bool:
        """Check if the status belongs to the given user."""
        return user_id is not None and self.user.id == user_id

    def is_checked_in_with(self, client_name: str) -> bool:
        """Check if the status was created by the given client application."""
        return self.client_name == client_name
