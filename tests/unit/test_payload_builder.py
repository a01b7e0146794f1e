#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Unit tests for the line-item payload builder.
"""

import re
import unittest
from datetime import date

from travel_line_items.hubspot.payload_builder import (
    build_flight_payloads,
    build_hotel_payload,
    build_payloads,
    build_transport_payload,
    filter_amenities,
    generate_flight_group_id,
)
from travel_line_items.models.line_item import (
    FlightDraft,
    HotelDraft,
    PassengerTier,
    PassengerType,
    RoomType,
    SeatType,
    TransportDraft,
    TransportType,
)


def make_flight(**overrides) -> FlightDraft:
    values = dict(
        deal_id="123",
        name="LAX to JFK",
        flight_number="AA100",
        airline_name="American Airlines",
        departure_airport="LAX",
        arrival_airport="JFK",
        departure_date_time="2099-06-01T08:00:00.000Z",
        arrival_date_time="2099-06-01T16:30:00.000Z",
        seat_type=SeatType.ECONOMY,
        passengers=[
            PassengerTier(PassengerType.INFANT, 0, 0.0),
            PassengerTier(PassengerType.CHILDREN, 1, 300.0),
            PassengerTier(PassengerType.ADULT, 2, 450.0),
        ],
    )
    values.update(overrides)
    return FlightDraft(**values)


class TestFlightPayloads(unittest.TestCase):
    """Test cases for flight expansion."""

    def test_one_payload_per_active_tier(self):
        payloads = build_flight_payloads(make_flight(), group_id="g-1")

        self.assertEqual(len(payloads), 2)
        self.assertEqual([p["passenger_type"] for p in payloads], ["Adult", "Children"])
        self.assertEqual([p["quantity"] for p in payloads], [2, 1])
        self.assertEqual([p["price"] for p in payloads], [450.0, 300.0])
        self.assertTrue(all(p["flight_group_id"] == "g-1" for p in payloads))

    def test_flight_properties(self):
        payload = build_flight_payloads(make_flight(additional_notes="Window"), group_id="g-1")[0]

        self.assertEqual(payload["name"], "LAX to JFK")
        self.assertEqual(payload["hs_product_type"], "Flight")
        self.assertEqual(payload["flight_number"], "AA100")
        self.assertEqual(payload["airline_name"], "American Airlines")
        self.assertEqual(payload["departure_airport"], "LAX")
        self.assertEqual(payload["arrival_airport"], "JFK")
        self.assertEqual(payload["departure_date___time"], "2099-06-01T08:00:00.000Z")
        self.assertEqual(payload["arrival_date___time"], "2099-06-01T16:30:00.000Z")
        self.assertEqual(payload["seat_type"], "Economy")
        self.assertEqual(payload["additional_notes_flight"], "Window")
        self.assertNotIn("hs_sku", payload)

    def test_generated_group_id_is_shared(self):
        payloads = build_flight_payloads(make_flight())

        group_ids = {p["flight_group_id"] for p in payloads}
        self.assertEqual(len(group_ids), 1)
        self.assertRegex(group_ids.pop(), r"^\d+-\d{1,5}$")

    def test_group_id_format(self):
        self.assertTrue(re.match(r"^\d{13,}-\d{1,5}$", generate_flight_group_id()))


class TestHotelAndTransportPayloads(unittest.TestCase):
    """Test cases for the single line-item products."""

    def test_hotel_payload(self):
        draft = HotelDraft(
            deal_id="123",
            name="Hilton stay - Deluxe",
            hotel_name="Hilton Midtown",
            hotel_address="1335 6th Ave",
            check_in_date=date(2025, 5, 1),
            check_out_date=date(2025, 5, 3),
            room_type=RoomType.DELUXE,
            room_count=2,
            room_unit_price=150.0,
            amenities=["Wi-Fi", "Pool", "breakfast"],
            sku="HTL-1",
        )

        payload = build_hotel_payload(draft)

        self.assertEqual(payload["hs_product_type"], "Hotel")
        self.assertEqual(payload["quantity"], 2)
        self.assertEqual(payload["price"], 150.0)
        self.assertEqual(payload["check_in_date"], 1746057600000)
        self.assertEqual(payload["check_out_date"], 1746230400000)
        self.assertEqual(payload["room_type"], "Deluxe")
        self.assertEqual(payload["additional_amenities"], "Wi-Fi;breakfast")
        self.assertEqual(payload["hs_sku"], "HTL-1")

    def test_transport_payload(self):
        draft = TransportDraft(
            deal_id="123",
            name="Airport transfer",
            transport_type=TransportType.SHUTTLE,
            pickup_location="JFK",
            drop_off_location="Hilton Midtown",
            vehicle_details="Sprinter",
            estimated_travel_duration=45,
            pickup_date_time="2099-06-01T17:15:00.000Z",
            vehicle_count=1,
            vehicle_unit_price=80.0,
        )

        payloads = build_payloads(draft)

        self.assertEqual(len(payloads), 1)
        self.assertEqual(payloads[0], build_transport_payload(draft))
        self.assertEqual(payloads[0]["drop_off_location"], "Hilton Midtown")
        self.assertEqual(payloads[0]["vehicle_type_details"], "Sprinter")
        self.assertEqual(payloads[0]["estimated_travel_duration_minutes"], 45)
        self.assertEqual(payloads[0]["pickup_date___time"], "2099-06-01T17:15:00.000Z")

    def test_filter_amenities(self):
        self.assertEqual(filter_amenities(None), "")
        self.assertEqual(filter_amenities("parking"), "parking")
        self.assertEqual(filter_amenities(["Spa", "WiFi"]), "")

    def test_unknown_draft_type(self):
        with self.assertRaises(TypeError):
            build_payloads({"name": "not a draft"})


if __name__ == "__main__":
    unittest.main()
