#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
HubSpot integration package: property payloads for line items and a thin
gateway over the HubSpot CRM API.
"""
