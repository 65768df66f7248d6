import argparse
import json
import sys
from typing import Optional, Sequence

from rich import print as rprint
from rich.console import Console
from rich.table import Table

from .api.main import configure_logging, run
from .config import Settings, build_portal_config
from .core.exceptions import PortalException
from .core.models import Application
from .service import PortalService, parse_groups_header


def render_table(apps: Sequence[Application]) -> Table:
    table = Table(title=f"{len(apps)} application(s)")
    table.add_column("Title", style="bold")
    table.add_column("URL", style="cyan")
    table.add_column("Groups")
    table.add_column("Description")
    for app in apps:
        table.add_row(app.title, app.url, ",".join(app.groups) or "(public)", app.description)
    return table


def apps_command(args: argparse.Namespace, settings: Settings) -> int:
    """Print the applications a user with the given groups would see."""
    try:
        service = PortalService(build_portal_config(settings))
        caller_groups = (
            parse_groups_header(args.groups)
            if args.groups is not None
            else service.caller_groups(None)
        )
        apps = service.list_applications(caller_groups)
    except PortalException as e:
        rprint(f"[bold red]Error:[/bold red] {e}")
        return 1

    if args.json:
        print(json.dumps([app.model_dump() for app in apps], indent=2))
    else:
        Console().print(render_table(apps))
    return 0


def serve_command(args: argparse.Namespace, settings: Settings) -> int:
    overrides = {}
    if args.host:
        overrides["HOST"] = args.host
    if args.port:
        overrides["PORT"] = args.port
    run(settings.model_copy(update=overrides), reload=args.reload)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="homeportal", description="Application portal backend")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the HTTP server")
    serve.add_argument("--host", help="Bind address (default: HOST setting)")
    serve.add_argument("--port", type=int, help="Bind port (default: PORT setting)")
    serve.add_argument("--reload", action="store_true", help="Reload on code changes")
    serve.set_defaults(handler=serve_command)

    apps = subparsers.add_parser("apps", help="List the applications visible to a set of groups")
    apps.add_argument(
        "--groups",
        help="Comma-separated caller groups, as the proxy header would carry them "
        "(default: demo groups in demo mode, otherwise none)",
    )
    apps.add_argument("--json", action="store_true", help="Print JSON instead of a table")
    apps.set_defaults(handler=apps_command)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings()
    configure_logging(settings.LOG_LEVEL if settings.debug else "WARNING")
    return args.handler(args, settings)


if __name__ == "__main__":
    sys.exit(main())
