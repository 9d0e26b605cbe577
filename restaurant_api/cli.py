"""Command-line interface for the Restaurant API - HTTP client for server API."""

import argparse
import json
import logging
import sys

import httpx

from restaurant_api.config import get_config, setup_logging

logger = logging.getLogger(__name__)


class RestaurantClientError(Exception):
    """The server answered with an error status."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"{message} (status {status_code})")
        self.status_code = status_code
        self.message = message


class RestaurantClient:
    """Thin HTTP client for the restaurant endpoints."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Server URL, e.g. http://localhost:3000
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self._client = httpx.Client(
            base_url=base_url, timeout=timeout, transport=transport
        )

    def __enter__(self) -> "RestaurantClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def list_restaurants(self) -> list[dict]:
        return self._request("GET", "/restaurants")

    def get_restaurant(self, restaurant_id: str) -> dict:
        return self._request("GET", f"/restaurants/{restaurant_id}")

    def create_restaurant(self, name: str, cuisine: str, has_takeout: bool) -> dict:
        return self._request(
            "POST",
            "/restaurants",
            json={"name": name, "cuisine": cuisine, "hasTakeout": has_takeout},
        )

    def update_restaurant(self, restaurant_id: str, **changes) -> None:
        """Send a partial update. Keyword arguments use wire field names."""
        self._request("PATCH", f"/restaurants/{restaurant_id}", json=changes)

    def delete_restaurant(self, restaurant_id: str) -> None:
        self._request("DELETE", f"/restaurants/{restaurant_id}")

    def _request(self, method: str, url: str, **kwargs):
        response = self._client.request(method, url, **kwargs)
        if response.is_error:
            raise RestaurantClientError(response.status_code, _error_message(response))
        if response.status_code == httpx.codes.NO_CONTENT or not response.content:
            return None
        return response.json()


def _error_message(response: httpx.Response) -> str:
    if response.headers.get("content-type", "").startswith("application/json"):
        data = response.json()
        if isinstance(data, dict):
            return data.get("message") or data.get("detail") or response.text
    return response.text


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="restaurants", description="Manage restaurants on a Restaurant API server"
    )
    parser.add_argument("--url", help="Server URL (defaults to SERVER_URL)")
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("list", help="List all restaurants")

    get_cmd = commands.add_parser("get", help="Show one restaurant")
    get_cmd.add_argument("id")

    add_cmd = commands.add_parser("add", help="Create a restaurant")
    add_cmd.add_argument("--name", required=True)
    add_cmd.add_argument("--cuisine", required=True)
    add_cmd.add_argument(
        "--takeout", action=argparse.BooleanOptionalAction, default=False
    )

    update_cmd = commands.add_parser("update", help="Change fields of a restaurant")
    update_cmd.add_argument("id")
    update_cmd.add_argument("--name")
    update_cmd.add_argument("--cuisine")
    update_cmd.add_argument("--takeout", action=argparse.BooleanOptionalAction)

    delete_cmd = commands.add_parser("delete", help="Delete a restaurant")
    delete_cmd.add_argument("id")

    return parser


def run_command(client: RestaurantClient, args: argparse.Namespace):
    """Execute one parsed command and return what should be printed."""
    if args.command == "list":
        return client.list_restaurants()
    if args.command == "get":
        return client.get_restaurant(args.id)
    if args.command == "add":
        return client.create_restaurant(args.name, args.cuisine, args.takeout)
    if args.command == "update":
        changes = {"name": args.name, "cuisine": args.cuisine, "hasTakeout": args.takeout}
        client.update_restaurant(args.id, **{k: v for k, v in changes.items() if v is not None})
        return {"message": f"Restaurant '{args.id}' updated"}
    if args.command == "delete":
        client.delete_restaurant(args.id)
        return {"message": f"Restaurant '{args.id}' deleted"}
    raise ValueError(f"Unknown command: {args.command}")


def main(argv: list[str] | None = None, transport: httpx.BaseTransport | None = None) -> int:
    """Main entry point for the CLI."""
    args = build_parser().parse_args(argv)

    config = get_config()
    setup_logging(config)
    base_url = args.url or config.server_url

    try:
        with RestaurantClient(base_url, transport=transport) as client:
            result = run_command(client, args)
    except RestaurantClientError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    except httpx.ConnectError:
        logger.exception("Cannot connect to server")
        print(f"Cannot connect to server at {base_url}", file=sys.stderr)
        print("Make sure the server is running:", file=sys.stderr)
        print("  python -m restaurant_api.server", file=sys.stderr)
        return 2

    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
