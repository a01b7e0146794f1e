#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
HubSpot CRM Gateway

Thin wrapper around the HubSpot API client for the calls the line-item and
meeting functions make. There is no retry here: every operation can be
retried by the caller, and SDK errors surface as RemoteError with the HTTP
status and HubSpot's error body.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, Iterable, List, Optional, Union

import hubspot
from hubspot.crm.associations.v4.exceptions import ApiException as AssociationsApiException
from hubspot.crm.contacts.exceptions import ApiException as ContactsApiException
from hubspot.crm.line_items.exceptions import ApiException as LineItemsApiException
from hubspot.crm.objects.meetings.exceptions import ApiException as MeetingsApiException
from hubspot.crm.owners.exceptions import ApiException as OwnersApiException

from travel_line_items.errors import RemoteError, ValidationError
from travel_line_items.hubspot.constants import (
    ASSOCIATIONS_PAGE_LIMIT,
    CONTACT_PROPERTIES,
    HUBSPOT_DEFINED,
    LINE_ITEM_PROPERTIES,
    LINE_ITEM_TO_DEAL,
)
from travel_line_items.utils.logger import get_logger, log_integration_event, log_sensitive

logger = get_logger(__name__)

DEFAULT_MAX_WORKERS = 8

API_EXCEPTIONS = (
    AssociationsApiException,
    ContactsApiException,
    LineItemsApiException,
    MeetingsApiException,
    OwnersApiException,
)


def line_item_id(item: Union[str, int, Dict[str, Any]]) -> str:
    """Id of a line item given either the id itself or its property dict."""
    if isinstance(item, dict):
        value = item.get("hs_object_id") or item.get("id")
    else:
        value = item
    if value is None or str(value).strip() == "":
        raise ValidationError("Line item is missing hs_object_id")
    return str(value)


def association_spec(association_type_id: int, category: str = HUBSPOT_DEFINED) -> Dict[str, Any]:
    return {"associationCategory": category, "associationTypeId": association_type_id}


class CRMGateway:
    """
    Gateway for the HubSpot CRM objects this project touches.

    Handles line items, deal/contact/meeting associations, meetings, contacts
    and owners.
    """

    def __init__(self,
                 access_token: Optional[str] = None,
                 client: Optional[Any] = None,
                 max_workers: int = DEFAULT_MAX_WORKERS):
        """
        Initialize the gateway.

        Args:
            access_token: Private app access token (ignored when client is given)
            client: Pre-built hubspot.Client, mainly for tests
            max_workers: Upper bound for parallel calls in fan-out operations
        """
        if client is None:
            if not access_token:
                raise ValueError("HubSpot access token is required")
            client = hubspot.Client.create(access_token=access_token)
            log_sensitive(logger, logging.DEBUG,
                          f"Initialized HubSpot client with token {access_token}",
                          token=access_token)
        self.client = client
        self.max_workers = max(1, max_workers)

    def _call(self, operation: str, request_func, *args, **kwargs) -> Any:
        """
        Make an API request, converting SDK errors to RemoteError.

        Args:
            operation: Short name used in log lines
            request_func: SDK method to call
        """
        try:
            return request_func(*args, **kwargs)
        except API_EXCEPTIONS as e:
            error = RemoteError.from_api_exception(e)
            logger.error(f"HubSpot API error during {operation}: HTTP {error.status} {error.body}")
            raise error from e

    # Line items

    def create_line_item(self, properties: Dict[str, Any], deal_id: str) -> Dict[str, Any]:
        """
        Create a line item associated with a deal.

        Args:
            properties: Line-item properties
            deal_id: Deal the line item belongs to

        Returns:
            Dict: The created HubSpot object
        """
        payload = {
            "properties": properties,
            "associations": [
                {
                    "to": {"id": str(deal_id)},
                    "types": [association_spec(LINE_ITEM_TO_DEAL)],
                }
            ],
        }
        response = self._call(
            "create_line_item",
            self.client.crm.line_items.basic_api.create,
            simple_public_object_input_for_create=payload,
        )
        result = response.to_dict() if hasattr(response, "to_dict") else response
        log_integration_event(
            "hubspot", "create_line_item",
            f"Created line item {result.get('id')} '{properties.get('name')}' on deal {deal_id}"
        )
        return result

    def get_line_item(self, item_id: str, properties: Optional[List[str]] = None) -> Optional[Dict[str, Any]]:
        """
        Fetch one line item's properties.

        Returns:
            Optional[Dict]: The properties, or None if the fetch failed
        """
        try:
            response = self._call(
                "get_line_item",
                self.client.crm.line_items.basic_api.get_by_id,
                line_item_id=str(item_id),
                properties=properties or LINE_ITEM_PROPERTIES,
            )
        except Exception as e:
            logger.warning(f"Error fetching details for line item {item_id}: {getattr(e, 'body', None) or e}")
            return None
        return dict(response.properties or {})

    def delete_line_item(self, item_id: str) -> None:
        self._call(
            "delete_line_item",
            self.client.crm.line_items.basic_api.archive,
            line_item_id=str(item_id),
        )

    def delete_line_items(self, items: Iterable[Union[str, Dict[str, Any]]]) -> List[str]:
        """
        Delete line items in parallel.

        Every delete is attempted. If any of them fails the whole operation
        fails with the first failure in submission order.

        Args:
            items: Line-item ids or property dicts carrying hs_object_id

        Returns:
            List[str]: Deleted ids
        """
        if isinstance(items, (str, bytes, dict)):
            raise ValidationError("Line items must be given as a list")
        ids = [line_item_id(item) for item in items]
        if not ids:
            return []

        with ThreadPoolExecutor(max_workers=min(self.max_workers, len(ids))) as executor:
            futures = [executor.submit(self.delete_line_item, item_id) for item_id in ids]

        failures = [future.exception() for future in futures if future.exception() is not None]
        if failures:
            logger.error(f"{len(failures)} of {len(ids)} line item deletes failed")
            raise failures[0]

        log_integration_event("hubspot", "delete_line_items", f"Deleted {len(ids)} line items")
        return ids

    # Associations

    def get_associated_ids(self, from_object_type: str, object_id: str, to_object_type: str) -> List[str]:
        """
        List ids of objects associated with a record, following pagination.

        Args:
            from_object_type: Source object type (e.g. 'deals')
            object_id: The source record id
            to_object_type: Target object type (e.g. 'line_items')
        """
        ids: List[str] = []
        after = None
        while True:
            kwargs = {"limit": ASSOCIATIONS_PAGE_LIMIT}
            if after:
                kwargs["after"] = after
            page = self._call(
                "get_associations",
                self.client.crm.associations.v4.basic_api.get_page,
                object_type=from_object_type,
                object_id=str(object_id),
                to_object_type=to_object_type,
                **kwargs,
            )
            ids.extend(str(result.to_object_id) for result in page.results or [])

            paging = getattr(page, "paging", None)
            next_page = getattr(paging, "next", None) if paging else None
            after = getattr(next_page, "after", None) if next_page else None
            if not after:
                return ids

    def associate(self,
                  from_object_type: str,
                  from_id: str,
                  to_object_type: str,
                  to_id: str,
                  association_type_id: int,
                  category: str = HUBSPOT_DEFINED) -> None:
        """Create a labelled association between two records."""
        self._call(
            "associate",
            self.client.crm.associations.v4.basic_api.create,
            object_type=from_object_type,
            object_id=str(from_id),
            to_object_type=to_object_type,
            to_object_id=str(to_id),
            association_spec=[association_spec(association_type_id, category)],
        )
        log_integration_event(
            "hubspot", "associate",
            f"Associated {from_object_type} {from_id} with {to_object_type} {to_id}"
        )

    def remove_association(self, from_object_type: str, from_id: str, to_object_type: str, to_id: str) -> None:
        """Remove every association between two records."""
        self._call(
            "remove_association",
            self.client.crm.associations.v4.basic_api.archive,
            object_type=from_object_type,
            object_id=str(from_id),
            to_object_type=to_object_type,
            to_object_id=str(to_id),
        )
        log_integration_event(
            "hubspot", "remove_association",
            f"Removed association {from_object_type} {from_id} -> {to_object_type} {to_id}"
        )

    # Meetings, contacts and owners

    def create_meeting(self, properties: Dict[str, Any], associations: List[Dict[str, Any]]) -> str:
        """
        Create a meeting engagement.

        Args:
            properties: Meeting properties (hs_timestamp, hs_meeting_title, ...)
            associations: [{"to": {"id": ...}, "types": [association_spec(...)]}]

        Returns:
            str: The new meeting id
        """
        response = self._call(
            "create_meeting",
            self.client.crm.objects.meetings.basic_api.create,
            simple_public_object_input_for_create={
                "properties": properties,
                "associations": associations,
            },
        )
        meeting_id = str(response.id)
        log_integration_event("hubspot", "create_meeting", f"Created meeting {meeting_id}")
        return meeting_id

    def get_contact(self, contact_id: str, properties: Optional[List[str]] = None) -> Dict[str, Any]:
        """
        Get a contact by id.

        Returns:
            Dict: {"id": ..., "properties": {...}}
        """
        contact = self._call(
            "get_contact",
            self.client.crm.contacts.basic_api.get_by_id,
            contact_id=str(contact_id),
            properties=properties or CONTACT_PROPERTIES,
        )
        return {"id": str(contact.id), "properties": dict(contact.properties or {})}

    def find_owner_id(self, email: str) -> Optional[str]:
        """
        Look up a HubSpot user (owner) by email.

        Returns:
            Optional[str]: Owner id if found, None otherwise
        """
        page = self._call(
            "find_owner",
            self.client.crm.owners.owners_api.get_page,
            email=email,
            limit=1,
        )
        results = page.results or []
        if not results:
            logger.warning(f"No HubSpot owner found for {email}")
            return None
        return str(results[0].id)
