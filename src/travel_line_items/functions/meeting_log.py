#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
MeetingLog: backs the meeting-log card on contact records.

Actions:
    fetchContact - the record's contact and its associated contacts
    logMeeting   - create a meeting for the selected attendees
    formOptions  - outcome, duration and time choices plus the default time
"""

from typing import Any, Dict

from travel_line_items.config import AppConfig
from travel_line_items.functions.base import build_gateway, serverless_function
from travel_line_items.models.response import FunctionResponse
from travel_line_items.pipelines.meeting_logger import MeetingLogger, form_options

ACTIONS = ("fetchContact", "logMeeting", "formOptions")


@serverless_function("MeetingLog")
def main(params: Dict[str, Any], config: AppConfig) -> FunctionResponse:
    action = params.pop("action", None)
    if action not in ACTIONS:
        return FunctionResponse.fail(
            f"Unsupported action: {action!r}. Expected one of: {', '.join(ACTIONS)}"
        )

    if action == "formOptions":
        return form_options()

    meeting_logger = MeetingLogger(
        build_gateway(config),
        reconcile_associations=config.reconcile_meeting_associations,
    )
    if action == "fetchContact":
        return meeting_logger.fetch_contacts(params.get("contactId"))
    return meeting_logger.log_meeting(params)
