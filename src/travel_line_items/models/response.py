#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Response envelope returned by every function entry point.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel


class FunctionResponse(BaseModel):
    """The {success, message, data?, error?} envelope the UI extensions render."""

    success: bool
    message: str
    data: Optional[Any] = None
    error: Optional[Any] = None

    @classmethod
    def ok(cls, message: str, data: Any = None) -> "FunctionResponse":
        return cls(success=True, message=message, data=data)

    @classmethod
    def fail(cls, message: str, error: Any = None) -> "FunctionResponse":
        return cls(success=False, message=message, error=error)

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict with unset optional keys left out."""
        return self.model_dump(exclude_none=True)
