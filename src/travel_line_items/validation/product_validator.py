#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Product Validator - per product type validation of line-item form submissions.

Turns the loosely typed parameter object sent by the UI extension into a typed
FlightDraft, HotelDraft or TransportDraft, or into exactly one human readable
failure message. Two submission shapes are supported:

- the legacy single-passenger form (price, quantity and passengerType on the
  item itself), and
- the multi-tier form (adult/child/infant counts for flights, roomCount for
  hotels, vehicleCount for transport, each with a unit price).
"""

import math
from dataclasses import dataclass
from datetime import date, datetime, timezone, tzinfo
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Type, TypeVar

from travel_line_items.errors import ValidationError
from travel_line_items.models.line_item import (
    FlightDraft,
    HotelDraft,
    LineItemDraft,
    PassengerTier,
    PassengerType,
    ProductType,
    RoomType,
    SeatType,
    TransportDraft,
    TransportType,
)
from travel_line_items.models.response import FunctionResponse
from travel_line_items.utils.datetime_utils import (
    combine_date_time,
    format_crm_datetime,
    is_valid_time,
    parse_datetime,
    parse_form_date,
)
from travel_line_items.utils.logger import get_logger

logger = get_logger(__name__)

TIME_FORMAT_HINT = "Use HH:MM (24-hour format)"

E = TypeVar("E", bound=Enum)

# (count field, unit price field, passenger type, label)
PASSENGER_FIELDS = (
    ("adultCount", "adultUnitPrice", PassengerType.ADULT, "Adult"),
    ("childCount", "childUnitPrice", PassengerType.CHILDREN, "Child"),
    ("infantCount", "infantUnitPrice", PassengerType.INFANT, "Infant"),
)


@dataclass
class ValidationResult:
    """Outcome of validating one submission."""
    is_valid: bool
    message: Optional[str] = None
    draft: Optional[LineItemDraft] = None

    @classmethod
    def success(cls, draft: LineItemDraft) -> "ValidationResult":
        return cls(is_valid=True, draft=draft)

    @classmethod
    def failure(cls, message: str) -> "ValidationResult":
        return cls(is_valid=False, message=message)

    def to_response(self) -> FunctionResponse:
        return FunctionResponse.fail(self.message or "Invalid submission")


def is_blank(value: Any) -> bool:
    """Missing in the form sense: None, empty/whitespace strings, empty containers."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) == 0
    return False


def parse_count(value: Any, label: str) -> int:
    """
    Parse a non-negative whole number; blank means 0.

    Raises:
        ValidationError: If the value is not a whole number or is negative
    """
    if is_blank(value):
        return 0
    if isinstance(value, bool):
        raise ValidationError(f"{label} must be a whole number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{label} must be a whole number")
    if math.isnan(number) or not number.is_integer():
        raise ValidationError(f"{label} must be a whole number")
    if number < 0:
        raise ValidationError(f"{label} cannot be negative")
    return int(number)


def parse_price(value: Any, label: str) -> float:
    """
    Parse a non-negative price; blank means 0.0.

    Raises:
        ValidationError: If the value is not numeric or is negative
    """
    if is_blank(value):
        return 0.0
    if isinstance(value, bool):
        raise ValidationError(f"{label} must be a valid number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{label} must be a valid number")
    if math.isnan(number) or math.isinf(number):
        raise ValidationError(f"{label} must be a valid number")
    if number < 0:
        raise ValidationError(f"{label} must be non-negative")
    return number


def _choices(enum_cls: Type[Enum]) -> str:
    values = [member.value for member in enum_cls]
    return f"{', '.join(values[:-1])} or {values[-1]}"


def parse_choice(enum_cls: Type[E], value: Any, label: str) -> E:
    """
    Resolve a select-field value to its enum member.

    Raises:
        ValidationError: "Invalid {label}. Use A, B or C." for unknown values
    """
    try:
        return enum_cls(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {label}. Use {_choices(enum_cls)}.")


def _missing(params: Dict[str, Any], fields: List[str]) -> List[str]:
    return [name for name in fields if is_blank(params.get(name))]


def _raise_missing(kind: str, missing: List[str]) -> None:
    if missing:
        raise ValidationError(f"Missing required {kind} parameters ({', '.join(missing)})")


class ProductValidator:
    """
    Validator for line-item submissions.

    validate() never raises: every problem is reported as a failed
    ValidationResult carrying one message the UI can show verbatim.
    """

    def __init__(self,
                 reject_past_dates: bool = False,
                 today: Optional[date] = None,
                 tz: tzinfo = timezone.utc):
        """
        Initialize the validator.

        Args:
            reject_past_dates: Reject departure, check-in/out and pickup dates before today
            today: Fixed "today" for the past-date check (defaults to the current date in tz)
            tz: Timezone form times are expressed in
        """
        self.reject_past_dates = reject_past_dates
        self._today = today
        self.tz = tz

    @property
    def today(self) -> date:
        return self._today or datetime.now(self.tz).date()

    def validate(self, params: Optional[Dict[str, Any]], legacy: bool = False) -> ValidationResult:
        """
        Validate a submission and build its typed draft.

        Args:
            params: Raw parameters from the UI extension
            legacy: Validate the single-passenger form instead of the multi-tier one

        Returns:
            ValidationResult: Valid result with a draft, or a failure with one message
        """
        params = params or {}
        try:
            product_type = self._check_common(params, legacy)
            if product_type is ProductType.FLIGHT:
                draft = self._validate_flight(params, legacy)
            elif product_type is ProductType.HOTEL:
                draft = self._validate_hotel(params, legacy)
            elif product_type is ProductType.TRANSPORT:
                draft = self._validate_transport(params, legacy)
            else:  # pragma: no cover - ProductType is exhaustive
                raise ValidationError("Invalid product type provided.")
        except ValidationError as e:
            logger.info(f"Rejected {params.get('productType') or 'unknown'} submission: {e}")
            return ValidationResult.failure(str(e))

        return ValidationResult.success(draft)

    # Common checks

    def _check_common(self, params: Dict[str, Any], legacy: bool) -> ProductType:
        required = ["dealId", "name", "productType"]
        if legacy:
            required[2:2] = ["price", "quantity"]
        _raise_missing("common", _missing(params, required))

        product_type = ProductType.parse(params.get("productType"))
        if product_type is None:
            raise ValidationError("Invalid product type provided.")
        return product_type

    def _legacy_quantity_and_price(self, params: Dict[str, Any]) -> Tuple[int, float]:
        quantity = parse_count(params.get("quantity"), "Quantity")
        if quantity < 1:
            raise ValidationError("Quantity must be at least 1")
        return quantity, parse_price(params.get("price"), "Price")

    def _check_not_past(self, day: date, label: str) -> None:
        if self.reject_past_dates and day < self.today:
            raise ValidationError(f"{label} must be today or in the future")

    def _resolve_instant(self, params: Dict[str, Any], prefix: str, label: str) -> Tuple[datetime, str]:
        """
        Resolve <prefix>Date + <prefix>Time, or the combined <prefix>DateTime.

        Returns the instant in the validator's timezone and the string sent to
        HubSpot. A combined value from the UI is passed through unchanged.
        """
        date_value = params.get(f"{prefix}Date")
        time_value = params.get(f"{prefix}Time")
        combined = params.get(f"{prefix}DateTime")

        if not is_blank(date_value) and not is_blank(time_value):
            if not is_valid_time(time_value):
                raise ValidationError(f"Invalid {label.lower()} time format. {TIME_FORMAT_HINT}")
            try:
                instant = combine_date_time(date_value, time_value, tz=self.tz)
                formatted = format_crm_datetime(instant)
            except (OverflowError, ValueError):
                raise ValidationError(f"Invalid {label.lower()} date.")
            if isinstance(combined, str) and not is_blank(combined):
                return instant, combined
            return instant, formatted

        try:
            instant = parse_datetime(combined).astimezone(self.tz)
            formatted = format_crm_datetime(instant)
        except (OverflowError, TypeError, ValueError):
            raise ValidationError(f"Invalid {label.lower()} date and time.")
        if isinstance(combined, str):
            return instant, combined
        return instant, formatted

    @staticmethod
    def _date_time_missing(params: Dict[str, Any], prefix: str, legacy: bool) -> List[str]:
        """The single-passenger form always sends the split date and time fields."""
        if not legacy and not is_blank(params.get(f"{prefix}DateTime")):
            return []
        return _missing(params, [f"{prefix}Date", f"{prefix}Time"])

    # Flight

    def _validate_flight(self, params: Dict[str, Any], legacy: bool) -> FlightDraft:
        missing = _missing(params, ["flightNumber", "airlineName", "departureAirport", "arrivalAirport"])
        missing += self._date_time_missing(params, "departure", legacy)
        missing += self._date_time_missing(params, "arrival", legacy)
        missing += _missing(params, ["seatType"])
        if legacy:
            missing += _missing(params, ["passengerType"])
        _raise_missing("flight", missing)
        seat_type = parse_choice(SeatType, params["seatType"], "seat type")

        departure, departure_value = self._resolve_instant(params, "departure", "Departure")
        arrival, arrival_value = self._resolve_instant(params, "arrival", "Arrival")
        departure_day = departure.date()
        arrival_day = arrival.date()

        self._check_not_past(departure_day, "Departure date")
        self._check_not_past(arrival_day, "Arrival date")
        if arrival_day < departure_day:
            raise ValidationError("Arrival date must be after departure date")
        if arrival_day == departure_day and departure >= arrival:
            raise ValidationError(
                "For flights on the same day, departure time must be earlier than arrival time."
            )

        if legacy:
            passenger_type = parse_choice(PassengerType, params.get("passengerType"), "passenger type")
            quantity, price = self._legacy_quantity_and_price(params)
            passengers = [PassengerTier(passenger_type, quantity, price)]
        else:
            passengers = []
            for count_field, price_field, passenger_type, label in PASSENGER_FIELDS:
                count = parse_count(params.get(count_field), f"{label} count")
                unit_price = parse_price(params.get(price_field), f"{label} unit price")
                passengers.append(PassengerTier(passenger_type, count, unit_price))
            if not any(tier.count >= 1 for tier in passengers):
                raise ValidationError("At least one passenger (Adult, Children, or Infant) is required.")

        return FlightDraft(
            deal_id=str(params["dealId"]),
            name=params["name"],
            flight_number=params["flightNumber"],
            airline_name=params["airlineName"],
            departure_airport=params["departureAirport"],
            arrival_airport=params["arrivalAirport"],
            departure_date_time=departure_value,
            arrival_date_time=arrival_value,
            seat_type=seat_type,
            passengers=passengers,
            additional_notes=params.get("flightAdditionalNotes") or "",
            sku=params.get("sku"),
        )

    # Hotel

    def _validate_hotel(self, params: Dict[str, Any], legacy: bool) -> HotelDraft:
        _raise_missing("hotel", _missing(
            params, ["hotelName", "hotelAddress", "checkInDate", "checkOutDate", "roomType"]
        ))
        room_type = parse_choice(RoomType, params["roomType"], "room type")

        try:
            check_in = parse_form_date(params["checkInDate"])
            check_out = parse_form_date(params["checkOutDate"])
        except ValueError:
            raise ValidationError("Invalid check-in or check-out date.")

        self._check_not_past(check_in, "Check-in date")
        self._check_not_past(check_out, "Check-out date")
        if check_out < check_in:
            raise ValidationError("Check-out date must be after check-in date.")

        if legacy:
            room_count, unit_price = self._legacy_quantity_and_price(params)
            name = params["name"]
        else:
            room_count = parse_count(params.get("roomCount"), "Room count")
            unit_price = parse_price(params.get("roomUnitPrice"), "Room unit price")
            if room_count < 1:
                raise ValidationError("At least one room is required")
            name = f"{params['name']} - {room_type.value}"

        amenities = params.get("amenities")
        if is_blank(amenities):
            amenities = []
        elif not isinstance(amenities, (list, tuple)):
            amenities = [amenities]

        return HotelDraft(
            deal_id=str(params["dealId"]),
            name=name,
            hotel_name=params["hotelName"],
            hotel_address=params["hotelAddress"],
            check_in_date=check_in,
            check_out_date=check_out,
            room_type=room_type,
            room_count=room_count,
            room_unit_price=unit_price,
            amenities=list(amenities),
            sku=params.get("sku"),
        )

    # Transport

    def _validate_transport(self, params: Dict[str, Any], legacy: bool) -> TransportDraft:
        if is_blank(params.get("transportDropOff")) and not is_blank(params.get("dropOff")):
            params = dict(params, transportDropOff=params["dropOff"])

        missing = _missing(params, [
            "transportType", "pickupLocation", "transportDropOff",
            "vehicleDetails", "estimatedTravelDuration",
        ])
        missing += self._date_time_missing(params, "pickup", legacy)
        _raise_missing("transport", missing)
        transport_type = parse_choice(TransportType, params["transportType"], "transport type")

        duration = parse_count(params["estimatedTravelDuration"], "Travel duration")
        pickup, pickup_value = self._resolve_instant(params, "pickup", "Pickup")
        self._check_not_past(pickup.date(), "Pick-up date")

        if legacy:
            vehicle_count, unit_price = self._legacy_quantity_and_price(params)
        else:
            vehicle_count = parse_count(params.get("vehicleCount"), "Vehicle count")
            unit_price = parse_price(params.get("vehicleUnitPrice"), "Vehicle unit price")
            if vehicle_count < 1:
                raise ValidationError("At least one vehicle is required")

        return TransportDraft(
            deal_id=str(params["dealId"]),
            name=params["name"],
            transport_type=transport_type,
            pickup_location=params["pickupLocation"],
            drop_off_location=params["transportDropOff"],
            vehicle_details=params["vehicleDetails"],
            estimated_travel_duration=duration,
            pickup_date_time=pickup_value,
            vehicle_count=vehicle_count,
            vehicle_unit_price=unit_price,
            sku=params.get("sku"),
        )
