#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Serverless function entry points called by the deal and contact UI extensions.

Each module exposes main(context) returning a {success, message, data?, error?} dict.
"""

FUNCTIONS = {
    "addLineItem": "travel_line_items.functions.add_line_item",
    "newAddLineItem": "travel_line_items.functions.new_add_line_item",
    "deleteLineItems": "travel_line_items.functions.delete_line_items",
    "getLineItems": "travel_line_items.functions.get_deal_line_items",
    "MeetingLog": "travel_line_items.functions.meeting_log",
}
