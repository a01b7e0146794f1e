#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Data models for line-item drafts, option tables and function responses.
"""

from travel_line_items.models.line_item import (
    Amenity,
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

__all__ = [
    "Amenity",
    "FlightDraft",
    "FunctionResponse",
    "HotelDraft",
    "LineItemDraft",
    "PassengerTier",
    "PassengerType",
    "ProductType",
    "RoomType",
    "SeatType",
    "TransportDraft",
    "TransportType",
]
