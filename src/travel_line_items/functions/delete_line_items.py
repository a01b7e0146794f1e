#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
deleteLineItems: delete one line item or every line item of a flight group.
"""

from typing import Any, Dict

from travel_line_items.config import AppConfig
from travel_line_items.functions.base import build_gateway, serverless_function
from travel_line_items.models.response import FunctionResponse
from travel_line_items.pipelines.line_item_pipeline import LineItemPipeline
from travel_line_items.validation.product_validator import is_blank


@serverless_function("deleteLineItems")
def main(params: Dict[str, Any], config: AppConfig) -> FunctionResponse:
    if is_blank(params.get("lineItems")) or is_blank(params.get("dealId")):
        return FunctionResponse.fail("Missing required parameters: lineItems or dealId")

    return LineItemPipeline(build_gateway(config)).delete_line_items(params)
