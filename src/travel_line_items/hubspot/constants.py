#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
HubSpot object types, association type ids and line-item property names.
"""

LINE_ITEMS = "line_items"
DEALS = "deals"
CONTACTS = "contacts"
MEETINGS = "meetings"

HUBSPOT_DEFINED = "HUBSPOT_DEFINED"

# HubSpot-defined association type ids
LINE_ITEM_TO_DEAL = 20
MEETING_TO_CONTACT = 200
MEETING_TO_DEAL = 212

ASSOCIATIONS_PAGE_LIMIT = 500

LINE_ITEM_PROPERTIES = [
    "name",
    "hs_product_type",
    "flight_number",
    "airline_name",
    "departure_airport",
    "arrival_airport",
    "departure_date___time",
    "arrival_date___time",
    "additional_notes_flight",
    "seat_type",
    "passenger_type",
    "quantity",
    "price",
    "hotel_name",
    "hotel_address",
    "check_in_date",
    "check_out_date",
    "room_type",
    "additional_amenities",
    "amount",
    "transport_type",
    "pickup_location",
    "drop_off_location",
    "vehicle_type_details",
    "estimated_travel_duration_minutes",
    "pickup_date___time",
    "createdate",
    "hs_lastmodifieddate",
    "hs_object_id",
    "hs_product_id",
    "flight_group_id",
]

CONTACT_PROPERTIES = ["firstname", "lastname", "email", "phone"]
