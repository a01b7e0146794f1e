#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Meeting Logger

Backs the meeting-log card on contact records: lists the contact and the
contacts associated with it, and logs a meeting against the chosen attendees
and, optionally, a deal.

After the meeting is created its contact associations are read back and
brought in line with the attendee list within the same call. HubSpot may add
associations of its own when a meeting is created; those are removed here
rather than by a delayed background job.
"""

from datetime import datetime, timedelta, timezone, tzinfo
from typing import Any, Dict, List, Optional

from travel_line_items.errors import ValidationError
from travel_line_items.hubspot.constants import CONTACTS, MEETING_TO_CONTACT, MEETING_TO_DEAL, MEETINGS
from travel_line_items.hubspot.crm_gateway import CRMGateway, association_spec
from travel_line_items.models.meeting import MeetingOutcome, duration_options, round_up_to_quarter_hour, time_options
from travel_line_items.models.response import FunctionResponse
from travel_line_items.utils.datetime_utils import combine_date_time, format_crm_datetime, is_valid_time, utc_now
from travel_line_items.validation.product_validator import is_blank, parse_count
from travel_line_items.utils.logger import get_logger

logger = get_logger(__name__)

MEETING_LOGGED = "Meeting successfully logged!"


def form_options(now: Optional[datetime] = None, tz: tzinfo = timezone.utc) -> FunctionResponse:
    """
    Choices for the meeting form's select fields and its default start time.

    Args:
        now: Current instant (defaults to the wall clock)
        tz: Timezone the form's times are expressed in

    Returns:
        FunctionResponse: outcomes, durations, times and defaultTime
    """
    local_now = (now or utc_now()).astimezone(tz)
    return FunctionResponse.ok("Meeting form options", data={
        "outcomes": [{"label": outcome.value, "value": outcome.crm_value} for outcome in MeetingOutcome],
        "durations": duration_options(),
        "times": time_options(),
        "defaultTime": round_up_to_quarter_hour(local_now),
    })


def _as_id_list(value: Any) -> List[str]:
    if is_blank(value):
        return []
    if not isinstance(value, (list, tuple, set)):
        value = [value]
    ids = []
    for item in value:
        item_id = str(item).strip()
        if item_id and item_id not in ids:
            ids.append(item_id)
    return ids


class MeetingLogger:
    """Logs meetings and reads the contacts that can attend them."""

    def __init__(self, gateway: CRMGateway, reconcile_associations: bool = True, tz: tzinfo = timezone.utc):
        """
        Initialize the meeting logger.

        Args:
            gateway: Gateway used for every HubSpot call
            reconcile_associations: Remove contact associations that are not attendees after creation
            tz: Timezone the form's date and time are expressed in
        """
        self.gateway = gateway
        self.reconcile_associations = reconcile_associations
        self.tz = tz

    def fetch_contacts(self, contact_id: Optional[str]) -> FunctionResponse:
        """
        The record's contact (isMain) followed by the contacts associated with it.

        Associated contacts that cannot be read are skipped.
        """
        if is_blank(contact_id):
            return FunctionResponse.fail("Missing contactId")

        try:
            main = self.gateway.get_contact(contact_id)
            associated_ids = self.gateway.get_associated_ids(CONTACTS, contact_id, CONTACTS)
        except Exception as e:
            logger.error(f"Error fetching contact {contact_id}: {e}")
            return FunctionResponse.fail(
                "Failed to fetch contact and associations",
                error=getattr(e, "body", None) or str(e),
            )

        contacts = [{"objectId": main["id"], **main["properties"], "isMain": True}]
        for associated_id in associated_ids:
            if associated_id == main["id"]:
                continue
            try:
                contact = self.gateway.get_contact(associated_id)
            except Exception as e:
                logger.warning(f"Failed to fetch associated contact {associated_id}: {e}")
                continue
            contacts.append({"objectId": contact["id"], **contact["properties"], "isMain": False})

        return FunctionResponse.ok(f"Retrieved {len(contacts)} contacts", data=contacts)

    def build_meeting_properties(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """
        Validate the meeting form and build the meeting properties.

        Raises:
            ValidationError: On the first invalid field
        """
        if not _as_id_list(params.get("attendees")):
            raise ValidationError("At least one attendee is required")
        if is_blank(params.get("date")):
            raise ValidationError("Meeting date is required")
        if not is_valid_time(params.get("time")):
            raise ValidationError("Invalid time format. Use HH:MM (24-hour format)")

        duration = parse_count(params.get("duration"), "Duration")
        if duration < 1:
            raise ValidationError("Duration must be at least 1 minute")

        outcome = None
        if not is_blank(params.get("outcome")):
            outcome = MeetingOutcome.parse(params["outcome"])
            if outcome is None:
                raise ValidationError("Invalid meeting outcome provided.")

        try:
            start = combine_date_time(params["date"], params["time"], tz=self.tz)
        except ValueError:
            raise ValidationError("Invalid meeting date.")
        end = start + timedelta(minutes=duration)

        title = params.get("title")
        if is_blank(title):
            names = params.get("attendeeNames") or _as_id_list(params.get("attendees"))
            if isinstance(names, str):
                names = [names]
            title = f"Meeting with {', '.join(str(name) for name in names)}"

        properties = {
            "hs_timestamp": format_crm_datetime(start),
            "hs_meeting_title": title,
            "hs_meeting_body": params.get("description") or "",
            "hs_meeting_start_time": format_crm_datetime(start),
            "hs_meeting_end_time": format_crm_datetime(end),
        }
        if outcome is not None:
            properties["hs_meeting_outcome"] = outcome.crm_value
        if not is_blank(params.get("ownerId")):
            properties["hubspot_owner_id"] = str(params["ownerId"])
        return properties

    def log_meeting(self, params: Dict[str, Any]) -> FunctionResponse:
        """
        Create a meeting for the attendees and optional deal.

        Args:
            params: attendees, outcome, date, time, duration, description,
                    and optionally dealId, title, ownerId or ownerEmail
        """
        try:
            properties = self.build_meeting_properties(params)
        except ValidationError as e:
            return FunctionResponse.fail(str(e))

        attendees = _as_id_list(params.get("attendees"))
        deal_id = params.get("dealId")

        associations = [
            {"to": {"id": contact_id}, "types": [association_spec(MEETING_TO_CONTACT)]}
            for contact_id in attendees
        ]
        if not is_blank(deal_id):
            associations.append({"to": {"id": str(deal_id)}, "types": [association_spec(MEETING_TO_DEAL)]})

        try:
            if "hubspot_owner_id" not in properties and not is_blank(params.get("ownerEmail")):
                owner_id = self.gateway.find_owner_id(params["ownerEmail"])
                if owner_id:
                    properties["hubspot_owner_id"] = owner_id
            meeting_id = self.gateway.create_meeting(properties, associations)
        except Exception as e:
            logger.error(f"Error logging meeting: {e}")
            return FunctionResponse.fail(
                "Failed to log meeting",
                error=getattr(e, "body", None) or str(e),
            )

        data = {"meetingId": meeting_id, "contactIds": attendees, "dealId": deal_id}
        if self.reconcile_associations:
            try:
                data.update(self.reconcile_contact_associations(meeting_id, attendees))
            except Exception as e:
                logger.error(f"Meeting {meeting_id} created but reconciling associations failed: {e}")
                return FunctionResponse(
                    success=False,
                    message="Meeting logged, but updating its contact associations failed",
                    data=data,
                    error=getattr(e, "body", None) or str(e),
                )

        return FunctionResponse.ok(MEETING_LOGGED, data=data)

    def reconcile_contact_associations(self, meeting_id: str, attendees: List[str]) -> Dict[str, List[str]]:
        """
        Make the meeting's contact associations match the attendee list.

        Idempotent: running it again on a reconciled meeting changes nothing.

        Returns:
            Dict: addedContactIds and removedContactIds
        """
        current = self.gateway.get_associated_ids(MEETINGS, meeting_id, CONTACTS)
        wanted = set(attendees)

        removed = [contact_id for contact_id in current if contact_id not in wanted]
        existing = set(current)
        added = [contact_id for contact_id in attendees if contact_id not in existing]

        for contact_id in removed:
            self.gateway.remove_association(MEETINGS, meeting_id, CONTACTS, contact_id)
        for contact_id in added:
            self.gateway.associate(MEETINGS, meeting_id, CONTACTS, contact_id, MEETING_TO_CONTACT)

        if removed or added:
            logger.info(f"Meeting {meeting_id}: removed {len(removed)} and added {len(added)} contact associations")
        return {"addedContactIds": added, "removedContactIds": removed}
