#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Line Item Aggregator

Lists the line items of a deal grouped the way the deal sidebar shows them:
by product type, and flights additionally by flight group.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional

from travel_line_items.hubspot.constants import DEALS, LINE_ITEMS
from travel_line_items.hubspot.crm_gateway import CRMGateway
from travel_line_items.models.line_item import PASSENGER_ORDER, ProductType
from travel_line_items.models.response import FunctionResponse
from travel_line_items.utils.logger import get_logger

logger = get_logger(__name__)

UNKNOWN = "Unknown"


def _passenger_sort_key(item: Dict[str, Any]) -> int:
    return PASSENGER_ORDER.get(item.get("passenger_type"), len(PASSENGER_ORDER))


def group_line_items(items: List[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Group line-item property dicts by hs_product_type.

    Flights become {flight_group_id: [items]} with each group ordered Adult,
    Children, Infant; every other type is a flat list. Missing product types
    and group ids fall under "Unknown".
    """
    grouped: Dict[str, Any] = {}

    for item in items:
        product_type = item.get("hs_product_type") or UNKNOWN
        if product_type == ProductType.FLIGHT.value:
            group_id = item.get("flight_group_id") or UNKNOWN
            grouped.setdefault(product_type, {}).setdefault(group_id, []).append(item)
        else:
            grouped.setdefault(product_type, []).append(item)

    for flight_group in grouped.get(ProductType.FLIGHT.value, {}).values():
        flight_group.sort(key=_passenger_sort_key)

    return grouped


class LineItemAggregator:
    """Fetches and groups all line items associated with a deal."""

    def __init__(self, gateway: CRMGateway):
        self.gateway = gateway

    def fetch_line_items(self, deal_id: str) -> List[Dict[str, Any]]:
        """
        Fetch every line item on a deal.

        Detail fetches run concurrently; the ones that fail are dropped.
        """
        ids = self.gateway.get_associated_ids(DEALS, deal_id, LINE_ITEMS)
        if not ids:
            return []

        workers = min(self.gateway.max_workers, len(ids))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            details: List[Optional[Dict[str, Any]]] = list(executor.map(self.gateway.get_line_item, ids))

        items = [item for item in details if item is not None]
        if len(items) < len(ids):
            logger.warning(f"Skipped {len(ids) - len(items)} of {len(ids)} line items on deal {deal_id}")
        return items

    def get_deal_line_items(self, deal_id: str) -> FunctionResponse:
        """
        List a deal's line items grouped by product type.

        Returns:
            FunctionResponse: Grouped line items, or a failure with the underlying error
        """
        try:
            items = self.fetch_line_items(deal_id)
        except Exception as e:
            logger.error(f"Error retrieving line items for deal {deal_id}: {getattr(e, 'body', None) or e}")
            return FunctionResponse.fail(
                "Failed to retrieve line items",
                error=getattr(e, "body", None) or str(e),
            )

        return FunctionResponse.ok(
            f"Line items retrieved and grouped successfully for deal {deal_id}",
            data=group_line_items(items),
        )
