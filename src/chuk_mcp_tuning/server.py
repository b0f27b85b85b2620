#!/usr/bin/env python3
"""
Entry point for the CHUK Tuning MCP Server.

Supports stdio and http transports. Project directories for custom tuning
systems and MIDI output can be set on the command line or through
CHUK_TUNING_SYSTEMS_DIR / CHUK_TUNING_OUTPUT_DIR.
"""

import argparse
import asyncio
import logging
import os

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Command-line options for the server."""
    parser = argparse.ArgumentParser(description="CHUK Tuning MCP Server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "http"],
        default="stdio",
        help="Transport mode (default: stdio)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="HTTP port (only for http transport)",
    )
    parser.add_argument(
        "--systems-dir",
        help="Directory of project tuning systems (default: ./systems)",
    )
    parser.add_argument(
        "--output-dir",
        help="Directory for rendered MIDI files (default: ./output)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def main() -> None:
    """Main entry point with transport detection."""
    args = build_parser().parse_args()

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.systems_dir:
        os.environ["CHUK_TUNING_SYSTEMS_DIR"] = args.systems_dir
    if args.output_dir:
        os.environ["CHUK_TUNING_OUTPUT_DIR"] = args.output_dir

    # Import after argument parsing so the server sees the configured paths
    from chuk_mcp_tuning.async_server import mcp

    if args.transport == "stdio":
        logger.info("Starting CHUK Tuning MCP Server (stdio)")
        asyncio.run(mcp.run_stdio())
    else:
        logger.info(f"Starting CHUK Tuning MCP Server (http:{args.port})")
        asyncio.run(mcp.run_http(port=args.port))


if __name__ == "__main__":
    main()
