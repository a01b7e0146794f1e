#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Line Item Payload Builder

Maps validated drafts to HubSpot line-item properties. The property names
match the custom line-item schema of the portal (flight_number, hotel_name,
pickup_date___time, ...). Input is assumed to have passed ProductValidator.
"""

import random
import time
from typing import Any, Dict, Iterable, List, Optional, Union

from travel_line_items.models.line_item import (
    Amenity,
    FlightDraft,
    HotelDraft,
    LineItemDraft,
    TransportDraft,
)
from travel_line_items.utils.datetime_utils import date_to_utc_midnight_timestamp

ALLOWED_AMENITIES = tuple(amenity.value for amenity in Amenity)
AMENITY_SEPARATOR = ";"


def generate_flight_group_id() -> str:
    """Identifier shared by all line items of one flight booking."""
    return f"{int(time.time() * 1000)}-{random.randint(0, 99999)}"


def filter_amenities(amenities: Union[str, Iterable[str], None]) -> str:
    """
    Keep only allow-listed amenities and join them for a multi-checkbox property.

    Args:
        amenities: A single amenity or a list of them

    Returns:
        str: Surviving amenities joined with ";" (empty string if none)
    """
    if amenities is None:
        return ""
    if isinstance(amenities, str):
        amenities = [amenities]
    return AMENITY_SEPARATOR.join(a for a in amenities if a in ALLOWED_AMENITIES)


def _base_properties(draft: LineItemDraft, name: str, quantity: int, price: float) -> Dict[str, Any]:
    properties = {
        "name": name,
        "hs_product_type": draft.product_type.value,
        "quantity": int(quantity),
        "price": float(price),
    }
    if draft.sku:
        properties["hs_sku"] = draft.sku
    return properties


def build_flight_payloads(draft: FlightDraft, group_id: Optional[str] = None) -> List[Dict[str, Any]]:
    """
    Build one line item per passenger tier with at least one passenger.

    All payloads carry the same flight_group_id so the group can be listed
    and deleted together later.
    """
    group_id = group_id or generate_flight_group_id()
    payloads = []

    for tier in draft.active_passengers:
        properties = _base_properties(draft, draft.name, tier.count, tier.unit_price)
        properties.update({
            "flight_number": draft.flight_number,
            "airline_name": draft.airline_name,
            "departure_airport": draft.departure_airport,
            "arrival_airport": draft.arrival_airport,
            "departure_date___time": draft.departure_date_time,
            "arrival_date___time": draft.arrival_date_time,
            "additional_notes_flight": draft.additional_notes or "",
            "seat_type": draft.seat_type.value,
            "passenger_type": tier.passenger_type.value,
            "flight_group_id": group_id,
        })
        payloads.append(properties)

    return payloads


def build_hotel_payload(draft: HotelDraft) -> Dict[str, Any]:
    """Hotel dates are stored as UTC-midnight epoch millis (HubSpot date properties)."""
    properties = _base_properties(draft, draft.name, draft.room_count, draft.room_unit_price)
    properties.update({
        "hotel_name": draft.hotel_name,
        "hotel_address": draft.hotel_address,
        "check_in_date": date_to_utc_midnight_timestamp(draft.check_in_date),
        "check_out_date": date_to_utc_midnight_timestamp(draft.check_out_date),
        "room_type": draft.room_type.value,
        "additional_amenities": filter_amenities(draft.amenities),
    })
    return properties


def build_transport_payload(draft: TransportDraft) -> Dict[str, Any]:
    properties = _base_properties(draft, draft.name, draft.vehicle_count, draft.vehicle_unit_price)
    properties.update({
        "transport_type": draft.transport_type.value,
        "pickup_location": draft.pickup_location,
        "drop_off_location": draft.drop_off_location,
        "vehicle_type_details": draft.vehicle_details,
        "estimated_travel_duration_minutes": draft.estimated_travel_duration,
        "pickup_date___time": draft.pickup_date_time,
    })
    return properties


def build_payloads(draft: LineItemDraft, group_id: Optional[str] = None) -> List[Dict[str, Any]]:
    """
    Build every line-item payload a draft expands to.

    Raises:
        TypeError: If the draft is not one of the known product variants
    """
    if isinstance(draft, FlightDraft):
        return build_flight_payloads(draft, group_id=group_id)
    if isinstance(draft, HotelDraft):
        return [build_hotel_payload(draft)]
    if isinstance(draft, TransportDraft):
        return [build_transport_payload(draft)]
    raise TypeError(f"Unsupported line item draft: {type(draft).__name__}")
