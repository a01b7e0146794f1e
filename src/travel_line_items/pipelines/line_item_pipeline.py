#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Line Item Submission Pipeline

Runs a form submission through validation, payload building and the CRM
gateway, and summarizes the result as a FunctionResponse.
"""

from typing import Any, Dict, List, Optional

from travel_line_items.errors import RemoteError, ValidationError
from travel_line_items.hubspot.crm_gateway import CRMGateway, line_item_id
from travel_line_items.hubspot.payload_builder import build_payloads
from travel_line_items.models.response import FunctionResponse
from travel_line_items.validation.product_validator import ProductValidator, is_blank
from travel_line_items.utils.logger import get_logger

logger = get_logger(__name__)

DELETE_ERROR_MESSAGES = {
    404: "One or more line items not found",
    401: "Authentication failed",
}
DELETE_GENERIC_ERROR = "An unexpected error occurred while deleting line items"
INVALID_LINE_ITEMS = "lineItems must be a list of line items or line-item ids"


def _error_details(error: Exception) -> Dict[str, Any]:
    if isinstance(error, RemoteError):
        return error.details()
    return {"status": 500, "details": str(error)}


class LineItemPipeline:
    """
    Pipeline for creating and deleting travel line items on a deal.

    Responsible for validating submissions, expanding them into line-item
    payloads and issuing the HubSpot calls.
    """

    def __init__(self, gateway: CRMGateway, validator: Optional[ProductValidator] = None):
        """
        Initialize the pipeline.

        Args:
            gateway: Gateway used for every HubSpot call
            validator: Validator for submissions (defaults to one without the past-date check)
        """
        self.gateway = gateway
        self.validator = validator or ProductValidator()

    def add_line_item(self, params: Dict[str, Any]) -> FunctionResponse:
        """
        Create one line item from the single-passenger form.

        Args:
            params: Raw form parameters (price, quantity, passengerType on the item)

        Returns:
            FunctionResponse: The created object, or the failure with HubSpot's error body
        """
        result = self.validator.validate(params, legacy=True)
        if not result.is_valid:
            return result.to_response()

        draft = result.draft
        properties = build_payloads(draft)[0]
        try:
            created = self.gateway.create_line_item(properties, draft.deal_id)
        except Exception as e:
            logger.error(f"Error adding line item '{draft.name}' to deal {draft.deal_id}: {e}")
            return FunctionResponse.fail(
                "Failed to add line item",
                error=getattr(e, "body", None) or str(e),
            )

        return FunctionResponse.ok(
            f"Line item '{properties['name']}' added to deal {draft.deal_id}",
            data=created,
        )

    def add_line_items(self, params: Dict[str, Any]) -> FunctionResponse:
        """
        Create the line items of a multi-tier submission.

        Flights expand to one line item per passenger type sharing a
        flight_group_id. Creates run one after another; if one fails the
        response lists what was already created.
        """
        result = self.validator.validate(params, legacy=False)
        if not result.is_valid:
            return result.to_response()

        draft = result.draft
        payloads = build_payloads(draft)
        created: List[Dict[str, Any]] = []

        for properties in payloads:
            try:
                created.append(self.gateway.create_line_item(properties, draft.deal_id))
            except Exception as e:
                logger.error(
                    f"Error creating {draft.product_type.value} line item '{properties['name']}' "
                    f"on deal {draft.deal_id} after {len(created)} of {len(payloads)}: {e}"
                )
                error = _error_details(e)
                error["created"] = [item.get("id") for item in created]
                return FunctionResponse.fail("Failed to create line item", error=error)

        logger.info(f"Created {len(created)} {draft.product_type.value} line items on deal {draft.deal_id}")
        return FunctionResponse.ok("Line items created successfully.", data=created)

    def delete_line_items(self, params: Dict[str, Any]) -> FunctionResponse:
        """
        Delete a line item or a whole flight group.

        Args:
            params: {"lineItems": [...], "dealId": ..., "isFlightGroup": bool, "productType": str}
        """
        line_items = params.get("lineItems")
        deal_id = params.get("dealId")
        if is_blank(line_items) or is_blank(deal_id):
            return FunctionResponse.fail("Missing required parameters: lineItems or dealId")
        if isinstance(line_items, dict) or (isinstance(line_items, int) and not isinstance(line_items, bool)):
            line_items = [line_items]
        if not isinstance(line_items, (list, tuple)):
            return FunctionResponse.fail(INVALID_LINE_ITEMS)
        line_items = list(line_items)

        try:
            self.gateway.delete_line_items(line_items)
        except ValidationError as e:
            return FunctionResponse.fail(str(e))
        except Exception as e:
            status = getattr(e, "status", None)
            logger.error(f"Error deleting line items on deal {deal_id}: {e}")
            return FunctionResponse.fail(
                DELETE_ERROR_MESSAGES.get(status, DELETE_GENERIC_ERROR),
                error=_error_details(e),
            )

        if params.get("isFlightGroup"):
            message = f"Successfully deleted flight group with {len(line_items)} passengers"
        else:
            product_type = params.get("productType") or _first_product_type(line_items)
            message = f"Successfully deleted {product_type} line item" if product_type else "Successfully deleted line item"

        return FunctionResponse.ok(message, data={
            "dealId": deal_id,
            "deletedItems": [
                {
                    "id": line_item_id(item),
                    "type": item.get("hs_product_type") if isinstance(item, dict) else None,
                    "name": item.get("name") if isinstance(item, dict) else None,
                }
                for item in line_items
            ],
        })


def _first_product_type(line_items: List[Any]) -> Optional[str]:
    for item in line_items:
        if isinstance(item, dict) and item.get("hs_product_type"):
            return item["hs_product_type"]
    return None
