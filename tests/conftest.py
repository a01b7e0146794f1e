#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Pytest configuration file for the travel line-item test suite.
"""

import os
import sys
import logging
import pytest
from pathlib import Path
from unittest.mock import MagicMock

# Add the src directory to Python path for accessing travel_line_items
project_root = Path(__file__).parent.parent
src_path = os.path.join(project_root, "src")
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from travel_line_items.hubspot.crm_gateway import CRMGateway
from travel_line_items.utils import logger as logger_module


# Define pytest markers
def pytest_configure(config):
    """Configure pytest."""
    config.addinivalue_line(
        "markers", "integration: mark test as requiring integration setup"
    )
    config.addinivalue_line(
        "markers", "hubspot: mark test as requiring HubSpot access"
    )


@pytest.fixture(scope="function")
def temp_log_path(tmp_path: Path) -> Path:
    """Temporary log file path for testing."""
    return tmp_path / "test.log"


@pytest.fixture(scope="function")
def mock_env_vars(monkeypatch, temp_log_path: Path):
    """
    Set up environment variables for testing.

    Args:
        monkeypatch: Pytest monkeypatch fixture
        temp_log_path: Temporary log file path
    """
    monkeypatch.setenv("PRIVATE_APP_ACCESS_TOKEN", "pat-na1-test-token")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("LOG_FILE_PATH", str(temp_log_path))
    monkeypatch.setenv("LOG_JSON", "false")
    monkeypatch.setenv("HUBSPOT_MAX_WORKERS", "4")
    monkeypatch.setenv("REJECT_PAST_DATES", "true")
    monkeypatch.setenv("MEETING_RECONCILE_ASSOCIATIONS", "true")


@pytest.fixture(scope="function")
def mock_gateway() -> MagicMock:
    """CRMGateway double; configure return values per test."""
    gateway = MagicMock(spec=CRMGateway)
    gateway.max_workers = 4
    return gateway


@pytest.fixture
def flight_params():
    """Multi-tier flight submission: two adults and one child."""
    return {
        "dealId": "123",
        "name": "LAX to JFK",
        "productType": "Flight",
        "flightNumber": "AA100",
        "airlineName": "American Airlines",
        "departureAirport": "LAX",
        "arrivalAirport": "JFK",
        "departureDate": "06/01/2099",
        "departureTime": "08:00",
        "arrivalDate": "06/01/2099",
        "arrivalTime": "16:30",
        "seatType": "Economy",
        "adultCount": 2,
        "adultUnitPrice": 450,
        "childCount": "1",
        "childUnitPrice": "300.50",
        "infantCount": 0,
        "infantUnitPrice": "",
        "flightAdditionalNotes": "Window seats",
    }


@pytest.fixture
def hotel_params():
    """Multi-tier hotel submission."""
    return {
        "dealId": "123",
        "name": "Hilton stay",
        "productType": "Hotel",
        "hotelName": "Hilton Midtown",
        "hotelAddress": "1335 6th Ave, New York",
        "checkInDate": "05/01/2025",
        "checkOutDate": "05/03/2025",
        "roomType": "Deluxe",
        "roomCount": 2,
        "roomUnitPrice": 150,
        "amenities": ["Wi-Fi", "breakfast"],
    }


@pytest.fixture
def transport_params():
    """Multi-tier transport submission using the dropOff alias."""
    return {
        "dealId": "123",
        "name": "Airport transfer",
        "productType": "Transport",
        "transportType": "Shuttle",
        "pickupLocation": "JFK Terminal 4",
        "dropOff": "Hilton Midtown",
        "vehicleDetails": "Mercedes Sprinter",
        "estimatedTravelDuration": "45",
        "pickupDate": "06/01/2099",
        "pickupTime": "17:15",
        "vehicleCount": 1,
        "vehicleUnitPrice": 80,
    }


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers installed by configure_logging after each test."""
    yield
    package_logger = logging.getLogger(logger_module.PACKAGE_LOGGER)
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.propagate = True
    logger_module._active_settings = None
