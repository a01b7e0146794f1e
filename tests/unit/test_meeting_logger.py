#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Unit tests for the meeting logger.
"""

import unittest
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock, call

from travel_line_items.errors import RemoteError, ValidationError
from travel_line_items.hubspot.constants import CONTACTS, MEETINGS
from travel_line_items.hubspot.crm_gateway import CRMGateway, association_spec
from travel_line_items.pipelines.meeting_logger import MEETING_LOGGED, MeetingLogger, form_options


def meeting_params(**overrides):
    params = {
        "attendees": ["1", "2"],
        "attendeeNames": ["Ann Lee", "Bob Ray"],
        "outcome": "Completed",
        "date": "06/01/2099",
        "time": "10:00",
        "duration": "60",
        "description": "Discussed the itinerary",
        "dealId": "123",
    }
    params.update(overrides)
    return params


class TestBuildMeetingProperties(unittest.TestCase):
    """Test cases for meeting form validation."""

    def setUp(self):
        self.logger = MeetingLogger(MagicMock(spec=CRMGateway))

    def test_properties(self):
        properties = self.logger.build_meeting_properties(meeting_params())

        self.assertEqual(properties, {
            "hs_timestamp": "2099-06-01T10:00:00.000Z",
            "hs_meeting_title": "Meeting with Ann Lee, Bob Ray",
            "hs_meeting_body": "Discussed the itinerary",
            "hs_meeting_start_time": "2099-06-01T10:00:00.000Z",
            "hs_meeting_end_time": "2099-06-01T11:00:00.000Z",
            "hs_meeting_outcome": "COMPLETED",
        })

    def test_title_and_owner_overrides(self):
        properties = self.logger.build_meeting_properties(
            meeting_params(title="Kickoff", ownerId=77, outcome="")
        )

        self.assertEqual(properties["hs_meeting_title"], "Kickoff")
        self.assertEqual(properties["hubspot_owner_id"], "77")
        self.assertNotIn("hs_meeting_outcome", properties)

    def test_local_timezone(self):
        logger = MeetingLogger(MagicMock(spec=CRMGateway), tz=timezone(timedelta(hours=2)))
        properties = logger.build_meeting_properties(meeting_params())
        self.assertEqual(properties["hs_meeting_start_time"], "2099-06-01T08:00:00.000Z")

    def test_validation_messages(self):
        cases = [
            (meeting_params(attendees=[]), "At least one attendee is required"),
            (meeting_params(date=""), "Meeting date is required"),
            (meeting_params(time="25:00"), "Invalid time format. Use HH:MM (24-hour format)"),
            (meeting_params(duration="0"), "Duration must be at least 1 minute"),
            (meeting_params(duration="half an hour"), "Duration must be a whole number"),
            (meeting_params(outcome="Postponed"), "Invalid meeting outcome provided."),
            (meeting_params(date="someday"), "Invalid meeting date."),
        ]
        for params, message in cases:
            with self.subTest(message=message):
                with self.assertRaises(ValidationError) as ctx:
                    self.logger.build_meeting_properties(params)
                self.assertEqual(str(ctx.exception), message)


class TestLogMeeting(unittest.TestCase):
    """Test cases for MeetingLogger.log_meeting."""

    def setUp(self):
        self.gateway = MagicMock(spec=CRMGateway)
        self.gateway.create_meeting.return_value = "m1"
        self.gateway.get_associated_ids.return_value = ["1", "2"]
        self.logger = MeetingLogger(self.gateway)

    def test_log_meeting(self):
        response = self.logger.log_meeting(meeting_params())

        self.assertTrue(response.success)
        self.assertEqual(response.message, MEETING_LOGGED)
        self.assertEqual(response.data, {
            "meetingId": "m1",
            "contactIds": ["1", "2"],
            "dealId": "123",
            "addedContactIds": [],
            "removedContactIds": [],
        })

        properties, associations = self.gateway.create_meeting.call_args.args
        self.assertEqual(properties["hs_meeting_outcome"], "COMPLETED")
        self.assertEqual(associations, [
            {"to": {"id": "1"}, "types": [association_spec(200)]},
            {"to": {"id": "2"}, "types": [association_spec(200)]},
            {"to": {"id": "123"}, "types": [association_spec(212)]},
        ])
        self.gateway.remove_association.assert_not_called()
        self.gateway.associate.assert_not_called()

    def test_without_deal(self):
        response = self.logger.log_meeting(meeting_params(dealId=None))

        associations = self.gateway.create_meeting.call_args.args[1]
        self.assertEqual(len(associations), 2)
        self.assertIsNone(response.data["dealId"])

    def test_extra_contact_associations_are_removed(self):
        self.gateway.get_associated_ids.return_value = ["1", "99"]

        response = self.logger.log_meeting(meeting_params())

        self.assertTrue(response.success)
        self.assertEqual(response.data["removedContactIds"], ["99"])
        self.assertEqual(response.data["addedContactIds"], ["2"])
        self.gateway.get_associated_ids.assert_called_once_with(MEETINGS, "m1", CONTACTS)
        self.gateway.remove_association.assert_called_once_with(MEETINGS, "m1", CONTACTS, "99")
        self.gateway.associate.assert_called_once_with(MEETINGS, "m1", CONTACTS, "2", 200)

    def test_reconcile_is_idempotent(self):
        self.gateway.get_associated_ids.return_value = ["1", "2"]

        result = self.logger.reconcile_contact_associations("m1", ["1", "2"])

        self.assertEqual(result, {"addedContactIds": [], "removedContactIds": []})
        self.gateway.remove_association.assert_not_called()
        self.gateway.associate.assert_not_called()

    def test_reconcile_disabled(self):
        logger = MeetingLogger(self.gateway, reconcile_associations=False)

        response = logger.log_meeting(meeting_params())

        self.assertTrue(response.success)
        self.assertNotIn("removedContactIds", response.data)
        self.gateway.get_associated_ids.assert_not_called()

    def test_owner_resolved_from_email(self):
        self.gateway.find_owner_id.return_value = "77"

        self.logger.log_meeting(meeting_params(ownerEmail="agent@example.com"))

        self.gateway.find_owner_id.assert_called_once_with("agent@example.com")
        properties = self.gateway.create_meeting.call_args.args[0]
        self.assertEqual(properties["hubspot_owner_id"], "77")

    def test_invalid_form_makes_no_calls(self):
        response = self.logger.log_meeting(meeting_params(attendees=None))

        self.assertFalse(response.success)
        self.assertEqual(response.message, "At least one attendee is required")
        self.gateway.create_meeting.assert_not_called()

    def test_create_failure(self):
        self.gateway.create_meeting.side_effect = RemoteError(400, body={"message": "bad property"})

        response = self.logger.log_meeting(meeting_params())

        self.assertFalse(response.success)
        self.assertEqual(response.message, "Failed to log meeting")
        self.assertEqual(response.error, {"message": "bad property"})

    def test_reconcile_failure_keeps_meeting_id(self):
        self.gateway.get_associated_ids.side_effect = RemoteError(500, body="server error")

        response = self.logger.log_meeting(meeting_params())

        self.assertFalse(response.success)
        self.assertEqual(response.message, "Meeting logged, but updating its contact associations failed")
        self.assertEqual(response.data["meetingId"], "m1")
        self.assertEqual(response.error, "server error")


class TestFetchContacts(unittest.TestCase):
    """Test cases for MeetingLogger.fetch_contacts."""

    def setUp(self):
        self.gateway = MagicMock(spec=CRMGateway)
        self.logger = MeetingLogger(self.gateway)

    def test_main_and_associated_contacts(self):
        contacts = {
            "1": {"id": "1", "properties": {"firstname": "Ann", "email": "ann@example.com"}},
            "2": {"id": "2", "properties": {"firstname": "Bob", "email": "bob@example.com"}},
        }

        def get_contact(contact_id):
            if contact_id not in contacts:
                raise RemoteError(404, body="not found")
            return contacts[contact_id]

        self.gateway.get_contact.side_effect = get_contact
        self.gateway.get_associated_ids.return_value = ["2", "3"]

        response = self.logger.fetch_contacts("1")

        self.assertTrue(response.success)
        self.assertEqual(response.message, "Retrieved 2 contacts")
        self.assertEqual(response.data, [
            {"objectId": "1", "firstname": "Ann", "email": "ann@example.com", "isMain": True},
            {"objectId": "2", "firstname": "Bob", "email": "bob@example.com", "isMain": False},
        ])
        self.gateway.get_associated_ids.assert_called_once_with(CONTACTS, "1", CONTACTS)
        self.assertEqual(self.gateway.get_contact.call_args_list, [call("1"), call("2"), call("3")])

    def test_missing_contact_id(self):
        response = self.logger.fetch_contacts(None)
        self.assertFalse(response.success)
        self.assertEqual(response.message, "Missing contactId")

    def test_main_contact_failure(self):
        self.gateway.get_contact.side_effect = RemoteError(404, body={"message": "Object not found"})

        response = self.logger.fetch_contacts("1")

        self.assertFalse(response.success)
        self.assertEqual(response.message, "Failed to fetch contact and associations")
        self.assertEqual(response.error, {"message": "Object not found"})


if __name__ == "__main__":
    unittest.main()


class TestFormOptions(unittest.TestCase):
    """Test cases for the meeting form's choices."""

    def test_option_tables(self):
        response = form_options(now=datetime(2025, 5, 1, 10, 5, tzinfo=timezone.utc))

        self.assertTrue(response.success)
        data = response.data
        self.assertEqual(data["outcomes"][0], {"label": "Completed", "value": "COMPLETED"})
        self.assertIn({"label": "No Show", "value": "NO_SHOW"}, data["outcomes"])
        self.assertEqual(len(data["durations"]), 32)
        self.assertEqual(data["durations"][3], {"value": "60", "label": "1 Hour"})
        self.assertEqual(len(data["times"]), 96)
        self.assertEqual(data["defaultTime"], "10:15")

    def test_default_time_in_form_timezone(self):
        eastern = timezone(timedelta(hours=-4))

        response = form_options(now=datetime(2025, 5, 1, 23, 50, tzinfo=timezone.utc), tz=eastern)

        self.assertEqual(response.data["defaultTime"], "20:00")

    def test_default_time_wraps_past_midnight(self):
        response = form_options(now=datetime(2025, 5, 1, 23, 55, tzinfo=timezone.utc))
        self.assertEqual(response.data["defaultTime"], "00:00")
