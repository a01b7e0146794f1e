#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Pipelines that orchestrate validation, payload building and HubSpot calls.
"""
