"""Argument parsing, credential setup commands, and server bootstrap."""

from __future__ import annotations

import argparse
import getpass
import logging
import sys

from dotenv import find_dotenv, load_dotenv

from . import __version__
from .config import AppConfig, load_config
from .credentials import CredentialStore, mask_key, resolve_api_key
from .exceptions import ConfigError, RenderAPIError, RenderMCPError
from .logging_config import configure_logging
from .render.client import RenderClient

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="render-mcp",
        description="Render.com MCP server for AI assistants",
    )
    parser.add_argument(
        "-c", "--config",
        help="Path to an optional YAML settings file",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    sub = parser.add_subparsers(dest="command", metavar="command")
    sub.add_parser("start", help="Start the MCP server on stdio (default)")
    configure = sub.add_parser("configure", help="Configure your Render API key")
    configure.add_argument("--api-key", help="Your Render API key (prompted for when omitted)")
    sub.add_parser("config", help="Show current configuration")
    sub.add_parser("doctor", help="Run diagnostics on your setup")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    load_dotenv(find_dotenv(usecwd=True))

    try:
        config = load_config(args.config)
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 1

    configure_logging(config.logging)
    store = CredentialStore.from_config(config.credentials)

    commands = {
        None: cmd_start,
        "start": cmd_start,
        "configure": cmd_configure,
        "config": cmd_config,
        "doctor": cmd_doctor,
    }

    try:
        return commands[args.command](args, config, store)
    except RenderMCPError as exc:
        logger.error("Fatal error: %s", exc)
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted")
        return 0


def run() -> None:
    sys.exit(main())


def cmd_start(args: argparse.Namespace, config: AppConfig, store: CredentialStore) -> int:
    from .server import run_server  # keeps the mcp import off the setup commands' path

    api_key = resolve_api_key(config.credentials, store)
    logger.info("Starting Render MCP server against %s", config.api.base_url)
    run_server(config, api_key)
    return 0


def cmd_configure(args: argparse.Namespace, config: AppConfig, store: CredentialStore) -> int:
    api_key = args.api_key
    if not api_key:
        api_key = getpass.getpass("Enter your Render API key: ").strip()
    if not api_key:
        print("API key is required", file=sys.stderr)
        return 1

    client = RenderClient(api_key, config.api)
    try:
        valid = client.test_connection()
    finally:
        client.close()

    if not valid:
        print("Failed to configure API key: Invalid API key", file=sys.stderr)
        return 1

    path = store.save(api_key)
    print(f"Configuration saved to {path}")
    print("API key configured successfully")
    return 0


def cmd_config(args: argparse.Namespace, config: AppConfig, store: CredentialStore) -> int:
    api_key = store.load()
    if api_key is None:
        print('No configuration found. Run "render-mcp configure" to set up.')
        return 0

    print("Current configuration:")
    print(f"Config file: {store.path}")
    print(f"API Key: {mask_key(api_key)}")
    return 0


def cmd_doctor(args: argparse.Namespace, config: AppConfig, store: CredentialStore) -> int:
    print("Running diagnostics...")

    if not store.exists():
        print("Config file: Not found")
        print('Run "render-mcp configure" to set up your API key')
        return 1
    print("Config file: Found")

    api_key = store.load()
    if not api_key:
        print("API key: Not configured")
        print('Run "render-mcp configure" to set up your API key')
        return 1
    print("API key: Configured")

    client = RenderClient(api_key, config.api)
    try:
        connected = client.test_connection()
        print(f"API connection: {'Success' if connected else 'Failed'}")
        if not connected:
            return 1

        try:
            client.list_services(limit=1)
        except RenderAPIError as exc:
            print("API permissions: Failed")
            print(f"Error: {exc}")
            return 1
        print("API permissions: Valid")
    finally:
        client.close()

    return 0
