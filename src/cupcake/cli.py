"""Command-line interface for cupcake."""

import argparse
import json
import logging
import os
import sys

from . import __version__
from .config_store import CONFIG_ENV_VAR, ConfigStore, load_config
from .errors import CupcakeError, InvalidSelectionError
from .models import ShopConfig
from .order import OrderState, calculate_price
from .session import OrderSession
from .summary import ConsoleShareTarget, RecordingShareTarget
from .utils import format_amount, format_price, format_quantity, use_system_locale


def get_config(args: argparse.Namespace) -> ShopConfig:
    """Load the shop config named by --config, $CUPCAKE_CONFIG or the defaults."""
    return load_config(args.config)


def resolve_flavor(config: ShopConfig, name: str) -> str:
    """Match a flavor name case-insensitively against the configured flavors."""
    for flavor in config.flavors:
        if flavor.lower() == name.strip().lower():
            return flavor
    return name


def cmd_options(args: argparse.Namespace) -> int:
    """List quantities, flavors and pickup dates."""
    try:
        config = get_config(args)
        state = OrderState(config).current_state()

        if args.json:
            data = {
                "quantity_options": [
                    {**o.to_dict(), "price": format_amount(calculate_price(o.quantity, config))}
                    for o in config.quantity_options
                ],
                "flavors": config.flavors,
                "pickup_options": list(state.pickup_options),
            }
            print(json.dumps(data, indent=2))
            return 0

        print("Quantities:")
        for opt in config.quantity_options:
            price = format_price(calculate_price(opt.quantity, config), config.currency_symbol)
            print(f"  {opt.quantity:>3}  {opt.label:<20} {price}")
        print()
        print("Flavors:")
        for flavor in config.flavors:
            print(f"  {flavor}")
        print()
        print("Pickup dates:")
        for i, day in enumerate(state.pickup_options):
            print(f"  [{i}] {day}")
        return 0

    except CupcakeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_quote(args: argparse.Namespace) -> int:
    """Print the subtotal for a quantity."""
    try:
        config = get_config(args)
        order = OrderState(config)
        order.set_quantity(args.quantity)
        state = order.current_state()
        print(f"{format_quantity(state.quantity)}: {state.formatted_price}")
        return 0

    except CupcakeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_order(args: argparse.Namespace) -> int:
    """Walk the whole flow and send the order summary."""
    try:
        config = get_config(args)
        share = RecordingShareTarget() if args.json else ConsoleShareTarget()
        session = OrderSession.create(config, share=share)
        flow, order = session.flow, session.order

        flow.select_quantity(args.quantity)
        flow.select_flavor(resolve_flavor(config, args.flavor))
        flow.next()

        pickup_options = order.current_state().pickup_options
        if not 0 <= args.pickup < len(pickup_options):
            raise InvalidSelectionError(
                "pickup", args.pickup, range(len(pickup_options))
            )
        flow.select_pickup_date(pickup_options[args.pickup])
        flow.next()

        summary = flow.send()
        if args.json:
            print(json.dumps(summary.to_dict(), indent=2))
        return 0

    except CupcakeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_init_config(args: argparse.Namespace) -> int:
    """Write the built-in shop config to a file."""
    try:
        store = ConfigStore(args.path)
        config = store.init(force=args.force)

        print(f"Wrote shop config to {store.config_path}")
        print(f"  {len(config.quantity_options)} quantities, {len(config.flavors)} flavors")
        return 0

    except CupcakeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_serve(args: argparse.Namespace) -> int:
    """Start the API server."""
    try:
        import uvicorn

        if args.config:
            # Read by the API on first request, including under --reload
            os.environ[CONFIG_ENV_VAR] = args.config
        # Fail fast on a broken config
        get_config(args)

        print("Starting cupcake API server...")
        print(f"API docs: http://{args.host}:{args.port}/docs")
        print()

        # When reload is enabled, uvicorn requires the app as an import string
        app_target = "cupcake.api:app" if args.reload else None
        if app_target is None:
            from .api import app
            app_target = app

        uvicorn.run(
            app_target,
            host=args.host,
            port=args.port,
            reload=args.reload,
            workers=1,  # Sessions live in process memory
        )
        return 0

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="cupcake",
        description="Configure a cupcake order, see the subtotal and share the summary.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", help=f"Shop config JSON (default: ${CONFIG_ENV_VAR} or built-in)"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # options
    options_parser = subparsers.add_parser(
        "options", help="List quantities, flavors and pickup dates"
    )
    options_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # quote
    quote_parser = subparsers.add_parser("quote", help="Show the subtotal for a quantity")
    quote_parser.add_argument("quantity", type=int, help="Number of cupcakes")

    # order
    order_parser = subparsers.add_parser("order", help="Place an order and share the summary")
    order_parser.add_argument(
        "--quantity", "-q", type=int, required=True, help="Number of cupcakes"
    )
    order_parser.add_argument("--flavor", "-f", required=True, help="Flavor name")
    order_parser.add_argument(
        "--pickup", "-p", type=int, default=0,
        help="Pickup date index as listed by 'cupcake options' (default: 0, today)"
    )
    order_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # init-config
    init_parser = subparsers.add_parser(
        "init-config", help="Write the default shop config to a file"
    )
    init_parser.add_argument("path", help="Where to write the config JSON")
    init_parser.add_argument(
        "--force", action="store_true", help="Overwrite existing config"
    )

    # serve
    serve_parser = subparsers.add_parser("serve", help="Start the API server")
    serve_parser.add_argument(
        "--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)"
    )
    serve_parser.add_argument(
        "--port", type=int, default=8000, help="Port to bind to (default: 8000)"
    )
    serve_parser.add_argument(
        "--reload", action="store_true", help="Enable auto-reload for development"
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    use_system_locale()

    if not args.command:
        parser.print_help()
        return 0

    commands = {
        "options": cmd_options,
        "quote": cmd_quote,
        "order": cmd_order,
        "init-config": cmd_init_config,
        "serve": cmd_serve,
    }

    cmd_func = commands.get(args.command)
    if cmd_func:
        return cmd_func(args)

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
