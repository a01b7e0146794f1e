#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Command-line entry point for invoking the functions locally.

Runs a function the same way the UI extension would, with a JSON parameter
object, and prints the response envelope.

Usage:
  travel-line-items invoke getLineItems --params '{"dealId": "123"}'
  travel-line-items invoke newAddLineItem --params-file submission.json
  travel-line-items check-config
"""

import sys
import json
import argparse
import importlib
from typing import Any, Dict, List, Optional

from travel_line_items import __version__
from travel_line_items.config import get_config
from travel_line_items.functions import FUNCTIONS
from travel_line_items.utils.logger import configure_logging, get_logger

logger = get_logger(__name__)


def setup_argparse() -> argparse.ArgumentParser:
    """
    Set up command-line argument parsing.

    Returns:
        argparse.ArgumentParser: Configured argument parser
    """
    parser = argparse.ArgumentParser(
        description="Travel line-item functions for HubSpot deals",
    )
    parser.add_argument(
        "command",
        choices=["invoke", "check-config", "list-functions"],
        help="Command to execute",
    )
    parser.add_argument(
        "function",
        nargs="?",
        choices=sorted(FUNCTIONS),
        help="Function to invoke",
    )
    parser.add_argument(
        "--params",
        type=str,
        help="Function parameters as a JSON object",
    )
    parser.add_argument(
        "--params-file",
        type=str,
        help="Path to a JSON file holding the function parameters",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def load_parameters(params: Optional[str], params_file: Optional[str]) -> Dict[str, Any]:
    """
    Read the parameter object from --params or --params-file.

    Raises:
        ValueError: If the input is not a JSON object
    """
    if params_file:
        with open(params_file, "r", encoding="utf-8") as f:
            data = json.load(f)
    elif params:
        data = json.loads(params)
    else:
        data = {}
    if not isinstance(data, dict):
        raise ValueError("Function parameters must be a JSON object")
    return data


def invoke(function: str, parameters: Dict[str, Any]) -> Dict[str, Any]:
    """Run a function entry point with the given parameters."""
    module = importlib.import_module(FUNCTIONS[function])
    return module.main({"parameters": parameters})


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        int: Exit code (0 when the command, or the invoked function, succeeded)
    """
    args = setup_argparse().parse_args(argv)
    config = get_config()

    if args.command == "list-functions":
        for name, module in sorted(FUNCTIONS.items()):
            print(f"{name}\t{module}")
        return 0

    if args.command == "check-config":
        errors = config.validate()
        for error in errors:
            print(f"Configuration error: {error}", file=sys.stderr)
        return 1 if errors else 0

    if not args.function:
        print("A function name is required for 'invoke'", file=sys.stderr)
        return 2

    try:
        parameters = load_parameters(args.params, args.params_file)
    except (OSError, ValueError) as e:
        print(f"Invalid parameters: {e}", file=sys.stderr)
        return 2

    configure_logging(config)
    logger.info(f"Invoking {args.function}")
    response = invoke(args.function, parameters)
    print(json.dumps(response, indent=2, default=str))
    return 0 if response.get("success") else 1


if __name__ == "__main__":
    sys.exit(main())
