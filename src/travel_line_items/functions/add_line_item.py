#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
addLineItem: create one line item from the single-passenger form.
"""

from typing import Any, Dict

from travel_line_items.config import AppConfig
from travel_line_items.functions.base import build_gateway, serverless_function
from travel_line_items.models.response import FunctionResponse
from travel_line_items.pipelines.line_item_pipeline import LineItemPipeline
from travel_line_items.validation.product_validator import ProductValidator


@serverless_function("addLineItem")
def main(params: Dict[str, Any], config: AppConfig) -> FunctionResponse:
    return LineItemPipeline(build_gateway(config), ProductValidator()).add_line_item(params)
