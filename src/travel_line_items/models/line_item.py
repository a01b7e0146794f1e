#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Line Item Models - typed drafts for Flight, Hotel and Transport submissions.

A draft only lives for the duration of one function call; what gets persisted
is the property payload derived from it.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import ClassVar, List, Optional, Union


class ProductType(str, Enum):
    """Product types a travel line item can have (hs_product_type)."""
    FLIGHT = "Flight"
    HOTEL = "Hotel"
    TRANSPORT = "Transport"

    @classmethod
    def parse(cls, value) -> Optional["ProductType"]:
        try:
            return cls(value)
        except ValueError:
            return None


class PassengerType(str, Enum):
    """Passenger tiers in display order."""
    ADULT = "Adult"
    CHILDREN = "Children"
    INFANT = "Infant"


PASSENGER_ORDER = {passenger.value: index for index, passenger in enumerate(PassengerType)}


class SeatType(str, Enum):
    ECONOMY = "Economy"
    BUSINESS = "Business"
    FIRST_CLASS = "First Class"


class RoomType(str, Enum):
    STANDARD = "Standard"
    DELUXE = "Deluxe"
    SUITE = "Suite"


class TransportType(str, Enum):
    TAXI = "Taxi"
    SHUTTLE = "Shuttle"
    PRIVATE_CAR = "Private Car"


class Amenity(str, Enum):
    """Values accepted by the additional_amenities property."""
    BREAKFAST = "breakfast"
    WIFI = "Wi-Fi"
    PARKING = "parking"


@dataclass
class PassengerTier:
    """One passenger type on a flight booking."""
    passenger_type: PassengerType
    count: int
    unit_price: float = 0.0


@dataclass
class FlightDraft:
    """Flight booking; expands to one line item per passenger tier."""
    product_type: ClassVar[ProductType] = ProductType.FLIGHT

    deal_id: str
    name: str
    flight_number: str
    airline_name: str
    departure_airport: str
    arrival_airport: str
    departure_date_time: str
    arrival_date_time: str
    seat_type: SeatType
    passengers: List[PassengerTier] = field(default_factory=list)
    additional_notes: str = ""
    sku: Optional[str] = None

    @property
    def active_passengers(self) -> List[PassengerTier]:
        """Tiers with at least one passenger, in Adult, Children, Infant order."""
        tiers = [tier for tier in self.passengers if tier.count > 0]
        return sorted(tiers, key=lambda tier: PASSENGER_ORDER[tier.passenger_type.value])


@dataclass
class HotelDraft:
    """Hotel room block."""
    product_type: ClassVar[ProductType] = ProductType.HOTEL

    deal_id: str
    name: str
    hotel_name: str
    hotel_address: str
    check_in_date: date
    check_out_date: date
    room_type: RoomType
    room_count: int
    room_unit_price: float = 0.0
    amenities: List[str] = field(default_factory=list)
    sku: Optional[str] = None


@dataclass
class TransportDraft:
    """Ground transport booking."""
    product_type: ClassVar[ProductType] = ProductType.TRANSPORT

    deal_id: str
    name: str
    transport_type: TransportType
    pickup_location: str
    drop_off_location: str
    vehicle_details: str
    estimated_travel_duration: int
    pickup_date_time: str
    vehicle_count: int
    vehicle_unit_price: float = 0.0
    sku: Optional[str] = None


LineItemDraft = Union[FlightDraft, HotelDraft, TransportDraft]
