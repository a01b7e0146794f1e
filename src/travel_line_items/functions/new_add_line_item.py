#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
newAddLineItem: create the line items of a multi-tier submission.

A flight becomes one line item per passenger type (sharing a flight group
id); a hotel or transport booking becomes a single line item.
"""

from typing import Any, Dict

from travel_line_items.config import AppConfig
from travel_line_items.functions.base import build_gateway, serverless_function
from travel_line_items.models.response import FunctionResponse
from travel_line_items.pipelines.line_item_pipeline import LineItemPipeline
from travel_line_items.validation.product_validator import ProductValidator


@serverless_function("newAddLineItem")
def main(params: Dict[str, Any], config: AppConfig) -> FunctionResponse:
    validator = ProductValidator(reject_past_dates=config.reject_past_dates)
    return LineItemPipeline(build_gateway(config), validator).add_line_items(params)
