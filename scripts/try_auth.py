#!/usr/bin/env python3
# =============================================================================
# scripts/try_auth.py - Register or Log In Against a Running API
# =============================================================================
# Small client for manual testing. Prints the returned user as JSON, or
# the human-readable error message extracted from the failure.
#
# Usage:
#   poetry run python scripts/try_auth.py register jane@example.com s3cret --first-name Jane
#   poetry run python scripts/try_auth.py login jane@example.com s3cret
#
# The API base URL comes from --api-url or STOREFRONT_API_URL (.env is loaded).
# =============================================================================

import argparse
import json
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv()

import httpx

from lib.errors import handle_http_error

DEFAULT_API_URL = "http://127.0.0.1:8787"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Register or log in a storefront user")
    parser.add_argument("action", choices=["register", "login"])
    parser.add_argument("email")
    parser.add_argument("password")
    parser.add_argument("--first-name", default=None)
    parser.add_argument("--last-name", default=None)
    parser.add_argument(
        "--api-url",
        default=os.environ.get("STOREFRONT_API_URL", DEFAULT_API_URL),
    )
    return parser.parse_args(argv)


def run(args: argparse.Namespace) -> dict:
    """Call the API and return the decoded user. Raises on HTTP errors."""
    with httpx.Client(base_url=args.api_url, timeout=10) as client:
        if args.action == "register":
            response = client.post("/auth", json={
                "email": args.email,
                "first_name": args.first_name,
                "last_name": args.last_name,
                "password": args.password,
            })
        else:
            response = client.get("/auth", params={
                "email": args.email,
                "password": args.password,
            })
        response.raise_for_status()
        return response.json()


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        user = run(args)
    except httpx.HTTPError as e:
        print(f"Error: {handle_http_error(e)}", file=sys.stderr)
        return 1

    print(json.dumps(user, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
