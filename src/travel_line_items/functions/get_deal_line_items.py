#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
getLineItems: list a deal's line items grouped by product type and flight group.
"""

from typing import Any, Dict

from travel_line_items.config import AppConfig
from travel_line_items.functions.base import build_gateway, serverless_function
from travel_line_items.models.response import FunctionResponse
from travel_line_items.pipelines.line_item_aggregator import LineItemAggregator
from travel_line_items.validation.product_validator import is_blank


@serverless_function("getLineItems")
def main(params: Dict[str, Any], config: AppConfig) -> FunctionResponse:
    deal_id = params.get("dealId")
    if is_blank(deal_id):
        return FunctionResponse.fail("Missing required parameter: dealId")

    return LineItemAggregator(build_gateway(config)).get_deal_line_items(str(deal_id))
