#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Shared plumbing for the function entry points.
"""

import functools
from typing import Any, Callable, Dict, Optional

from travel_line_items.config import AppConfig, get_config
from travel_line_items.errors import ConfigurationError, RemoteError
from travel_line_items.hubspot.crm_gateway import CRMGateway
from travel_line_items.models.response import FunctionResponse
from travel_line_items.utils.logger import configure_logging, get_logger

logger = get_logger(__name__)

Handler = Callable[[Dict[str, Any], AppConfig], FunctionResponse]


def get_parameters(context: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    parameters = (context or {}).get("parameters")
    return dict(parameters) if isinstance(parameters, dict) else {}


def build_gateway(config: AppConfig) -> CRMGateway:
    """Gateway authenticated with the token from this invocation's config."""
    return CRMGateway(access_token=config.require_access_token(), max_workers=config.max_workers)


def serverless_function(name: str) -> Callable[[Handler], Callable[..., Dict[str, Any]]]:
    """
    Wrap a handler as a function entry point.

    The wrapped main(context) reads fresh configuration, configures
    logging from it and passes the parameters to the handler. It always
    returns an envelope dict: nothing raised by the handler escapes.
    """
    def decorator(handler: Handler) -> Callable[..., Dict[str, Any]]:
        @functools.wraps(handler)
        def main(context: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
            try:
                config = get_config()
                configure_logging(config)
                response = handler(get_parameters(context), config)
            except ConfigurationError as e:
                logger.error(f"{name}: configuration error: {e}")
                response = FunctionResponse.fail("Server configuration error", error=str(e))
            except RemoteError as e:
                logger.error(f"{name}: HubSpot error: {e}")
                response = FunctionResponse.fail("HubSpot request failed", error=e.details())
            except Exception as e:
                logger.exception(f"{name}: unexpected error")
                response = FunctionResponse.fail("An unexpected error occurred", error=str(e))
            return response.to_dict()

        return main

    return decorator
