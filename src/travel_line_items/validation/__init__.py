#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Validation of line-item form submissions.
"""

from travel_line_items.validation.product_validator import ProductValidator, ValidationResult

__all__ = ["ProductValidator", "ValidationResult"]
