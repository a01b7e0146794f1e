#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Error types shared by the validator, the CRM gateway and the function entry points.
"""

import json
from typing import Any, Optional


class LineItemError(Exception):
    """Base class for all errors raised by this package."""


class ValidationError(LineItemError):
    """Missing or malformed input. Always reported back as a failure envelope."""


class ConfigurationError(LineItemError):
    """Required configuration (the private app token) is missing."""


class RemoteError(LineItemError):
    """A HubSpot API call failed."""

    def __init__(self, status: Optional[int], body: Any = None, message: Optional[str] = None):
        self.status = status
        self.body = body
        super().__init__(message or f"HubSpot API error (HTTP {status})")

    @classmethod
    def from_api_exception(cls, exc: Exception) -> "RemoteError":
        """
        Build a RemoteError from a hubspot-api-client ApiException.

        The SDK keeps the raw response body as a string; it is decoded when it
        holds JSON so callers get HubSpot's error object back.
        """
        status = getattr(exc, "status", None)
        body = getattr(exc, "body", None)
        if isinstance(body, (bytes, bytearray)):
            body = body.decode("utf-8", errors="replace")
        if isinstance(body, str) and body:
            try:
                body = json.loads(body)
            except ValueError:
                pass
        if not body:
            body = getattr(exc, "reason", None) or str(exc)
        return cls(status=status, body=body)

    def details(self) -> dict:
        return {"status": self.status or 500, "details": self.body}
