#!/usr/bin/env python3
"""
Command line interface for ReState.
Seeds the Appwrite collections and browses listings from the terminal.
"""

import argparse
import asyncio
import json
import logging
import os
import random
import sys
import webbrowser
from typing import Any, Callable, List, Optional, TextIO

from restate.appwrite import AppwriteClient, create_client
from restate.config import Settings, settings as default_settings
from restate.models.property import ALL_CATEGORIES, category_names
from restate.services.auth import AuthService, SessionState
from restate.services.property import PropertyService
from restate.services.seed import SeedService

logger = logging.getLogger(__name__)


async def open_system_browser(url: str, redirect_uri: str) -> Optional[str]:
    """Open the login page and ask for the URL the browser landed on."""
    webbrowser.open(url)
    print(f"Complete the login in your browser. You will be redirected to {redirect_uri}")
    result = await asyncio.to_thread(input, "Paste the full redirect URL: ")
    return result.strip() or None


class CommandRunner:
    """Runs CLI commands against Appwrite and writes JSON to `out`."""

    def __init__(
        self,
        config: Optional[Settings] = None,
        client_factory: Callable[..., AppwriteClient] = create_client,
        out: TextIO = sys.stdout
    ):
        self.config = config or default_settings
        self.client_factory = client_factory
        self.out = out

    def connect(self, **kwargs: Any) -> AppwriteClient:
        return self.client_factory(self.config, **kwargs)

    def emit(self, payload: Any) -> None:
        if hasattr(payload, "model_dump"):
            payload = payload.model_dump(mode="json")
        elif isinstance(payload, list):
            payload = [item.model_dump(mode="json") if hasattr(item, "model_dump") else item for item in payload]
        self.out.write(json.dumps(payload, indent=2) + "\n")

    async def seed(self, random_seed: Optional[int] = None) -> bool:
        if not self.config.appwrite_api_key:
            logger.warning("APPWRITE_API_KEY is not set; seeding will likely be rejected")
        async with self.connect(use_api_key=True) as client:
            rng = random.Random(random_seed)
            report = await SeedService(client, self.config, rng=rng).seed()
        self.emit(report.summary())
        return True

    async def latest(self) -> bool:
        async with self.connect() as client:
            self.emit(await PropertyService(client, self.config).get_latest_properties())
        return True

    async def properties(self, filter: str, query: Optional[str], limit: Optional[int]) -> bool:
        async with self.connect() as client:
            self.emit(await PropertyService(client, self.config).get_properties(filter=filter, query=query, limit=limit))
        return True

    async def property(self, property_id: str) -> bool:
        async with self.connect() as client:
            property_obj = await PropertyService(client, self.config).get_property_by_id(property_id)
        if property_obj is None:
            logger.error(f"Property {property_id} not found")
            return False
        self.emit(property_obj)
        return True

    async def agent(self, agent_id: str) -> bool:
        async with self.connect() as client:
            agent = await PropertyService(client, self.config).get_agent_by_id(agent_id)
        if agent is None:
            logger.error(f"Agent {agent_id} not found")
            return False
        self.emit(agent)
        return True

    async def login(self, open_browser=open_system_browser) -> bool:
        if not self.config.appwrite_api_key:
            logger.warning("APPWRITE_API_KEY is not set; Appwrite will not return the session secret")
        async with self.connect() as client, self.connect(use_api_key=True) as server_client:
            success = await AuthService(client, self.config, server_client=server_client).login(open_browser)
            self.emit({"success": success, "session": client.session})
        return success

    async def logout(self, session: Optional[str]) -> bool:
        async with self.connect(session=session) as client:
            success = await AuthService(client, self.config).logout()
        self.emit({"success": success})
        return success

    async def whoami(self, session: Optional[str]) -> bool:
        async with self.connect(session=session) as client:
            state = SessionState(AuthService(client, self.config))
            await state.refresh()
        self.emit({"is_logged_in": state.is_logged_in, "user": state.user.model_dump() if state.user else None})
        return state.is_logged_in


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="restate", description="ReState listings on Appwrite")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--session",
        default=os.environ.get("APPWRITE_SESSION"),
        help="Session secret (defaults to $APPWRITE_SESSION)"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    seed_parser = subparsers.add_parser("seed", help="Wipe and regenerate sample data")
    seed_parser.add_argument("--random-seed", type=int, default=None, help="Seed for reproducible data")
    seed_parser.add_argument("--confirm", action="store_true", help="Confirm deleting existing documents")

    subparsers.add_parser("latest", help="List featured properties")

    properties_parser = subparsers.add_parser("properties", help="Search properties")
    properties_parser.add_argument("--filter", default=ALL_CATEGORIES, choices=category_names())
    properties_parser.add_argument("--query", default=None, help="Substring of the property name")
    properties_parser.add_argument("--limit", type=int, default=None)

    property_parser = subparsers.add_parser("property", help="Show a property with reviews and gallery")
    property_parser.add_argument("property_id")

    agent_parser = subparsers.add_parser("agent", help="Show an agent")
    agent_parser.add_argument("agent_id")

    subparsers.add_parser("login", help="Sign in with Google")
    subparsers.add_parser("logout", help="End the current session")
    subparsers.add_parser("whoami", help="Show the signed-in user")

    return parser


async def run(args: argparse.Namespace, runner: CommandRunner) -> bool:
    if args.command == "seed":
        return await runner.seed(args.random_seed)
    if args.command == "latest":
        return await runner.latest()
    if args.command == "properties":
        return await runner.properties(args.filter, args.query, args.limit)
    if args.command == "property":
        return await runner.property(args.property_id)
    if args.command == "agent":
        return await runner.agent(args.agent_id)
    if args.command == "login":
        return await runner.login()
    if args.command == "logout":
        return await runner.logout(args.session)
    if args.command == "whoami":
        return await runner.whoami(args.session)
    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    if not args.command:
        parser.print_help()
        return 0

    if args.command == "seed" and not args.confirm:
        print("Seeding deletes every document in the listing collections; pass --confirm")
        return 1

    try:
        return 0 if asyncio.run(run(args, CommandRunner())) else 1
    except Exception as e:
        logger.error(f"Command failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
