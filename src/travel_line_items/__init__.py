#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Travel line-item functions for HubSpot deals.

Validates Flight, Hotel and Transport form submissions, shapes them into
HubSpot line-item properties and creates, reads and deletes them on a deal.
"""

__version__ = "0.1.0"
