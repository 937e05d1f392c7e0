#!/usr/bin/env python3
"""
AIDOI Portal - command line entry point.

Score metadata files, inspect credentials and peek at admin stats
without opening the portal.
"""

import json
import os
import sys
from pathlib import Path

import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich import box

from config import configure_logging, load_config
from models import RUBRIC_FIELDS, SECTIONS, AidoiMetadata
from registry import ELIGIBILITY_THRESHOLD, compute_admin_stats, completion, decode_role, pending_users, read_claims, score
from repositories import BackendError, close_session, get_repository

console = Console()

TOKEN_ENV = "AIDOI_TOKEN"


def load_metadata_file(path: Path) -> dict:
    """Read AIDOI metadata from YAML or JSON."""
    with open(path) as f:
        if path.suffix.lower() == ".json":
            data = json.load(f)
        else:
            data = yaml.safe_load(f)
    if not isinstance(data, dict):
        return {}
    # Accept a full AIDOI record as well as bare metadata
    if isinstance(data.get("metadata"), dict):
        return data["metadata"]
    return data


def score_table(metadata: AidoiMetadata) -> Table:
    result = score(metadata)

    table = Table(title=metadata.title or "AIDOI eligibility", box=box.ROUNDED)
    table.add_column("Section")
    table.add_column("Items", justify="right")
    table.add_column("Score", justify="right")
    table.add_column("Max", justify="right")

    for section in SECTIONS:
        table.add_row(
            f"{section.key.upper()}  {section.title}",
            str(len(section.field_names)),
            str(result.section(section.key)),
            str(section.max_score),
        )
    table.add_row("[bold]Total[/bold]", str(len(RUBRIC_FIELDS)), f"[bold]{result.total}[/bold]", str(result.max_total))
    return table


def cmd_score(args) -> int:
    path = Path(args.file)
    if not path.exists():
        console.print(f"[red]No such file: {path}[/red]")
        return 1

    raw = load_metadata_file(path)
    try:
        metadata = AidoiMetadata.model_validate(raw)
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        console.print(f"[red]Invalid metadata in {path}: {fields}[/red]")
        return 1

    result = score(metadata)

    console.print(score_table(metadata))
    console.print(f"[dim]Answered: {completion(raw) * 100:.0f}% of rubric items[/dim]")
    if result.is_eligible:
        console.print(Panel(f"[green]Eligible[/green] - {result.total} points", box=box.ROUNDED))
    else:
        console.print(Panel(f"[yellow]Not eligible[/yellow] - {result.total} points ({ELIGIBILITY_THRESHOLD} needed)", box=box.ROUNDED))
    return 0


def cmd_whoami(args) -> int:
    token = args.token or os.environ.get(TOKEN_ENV, "")
    if not token:
        console.print(f"[yellow]No credential. Pass --token or set {TOKEN_ENV}.[/yellow]")
        return 1

    role = decode_role(token)
    claims = read_claims(token) or {}
    console.print(f"Role: [bold]{role.label}[/bold]")
    if claims.get("email"):
        console.print(f"[dim]{claims.get('first_name', '')} {claims.get('last_name', '')} <{claims['email']}>[/dim]")
    console.print("[dim]Decoded locally, signature not verified.[/dim]")
    return 0


def _repository(args):
    token = args.token or os.environ.get(TOKEN_ENV, "")
    if not token:
        console.print(f"[red]No credential. Pass --token or set {TOKEN_ENV}.[/red]")
        return None
    return get_repository(token)


def cmd_stats(args) -> int:
    repo = _repository(args)
    if repo is None:
        return 1

    try:
        users = repo.users.list(page=0, limit=100)
        orgs = repo.organizations.list(page=0, limit=100)
        aidois = repo.aidois.list(page=0, limit=100)
    except BackendError as e:
        console.print(f"[red]Backend error ({e.status_code}): {e.message}[/red]")
        return 1

    stats = compute_admin_stats(
        users.records, orgs.records, aidois.records,
        total_users=users.total, total_organizations=orgs.total, total_aidois=aidois.total,
    )

    table = Table(title="Registry stats", box=box.ROUNDED)
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Users", str(stats.total_users))
    table.add_row("Organizations", f"{stats.total_organizations} ({stats.active_organizations} active)")
    table.add_row("AIDOIs", f"{stats.total_aidois} ({stats.active_aidois} active)")
    table.add_row("Pending approvals", str(stats.pending_approvals))
    for role, count in stats.users_by_role.items():
        table.add_row(f"  role: {role}", str(count))
    console.print(table)

    if stats.top_organizations_by_aidois:
        top = Table(title="Top organizations", box=box.SIMPLE)
        top.add_column("Organization")
        top.add_column("AIDOIs", justify="right")
        for entry in stats.top_organizations_by_aidois:
            top.add_row(entry.organization_name, str(entry.count))
        console.print(top)
    return 0


def cmd_pending(args) -> int:
    repo = _repository(args)
    if repo is None:
        return 1

    try:
        users = repo.users.list(page=0, limit=100).records
    except BackendError as e:
        console.print(f"[red]Backend error ({e.status_code}): {e.message}[/red]")
        return 1

    pending = pending_users(users)
    if not pending:
        console.print("[dim]No pending requests.[/dim]")
        return 0

    table = Table(title=f"{len(pending)} pending", box=box.ROUNDED)
    table.add_column("ID", style="dim")
    table.add_column("Name")
    table.add_column("Email")
    for user in pending:
        table.add_row(user.id, user.full_name, user.email)
    console.print(table)
    return 0


def cmd_serve(args) -> int:
    from app import app

    port = args.port or app.config["PORTAL"].port
    console.print(f"[dim]Portal on http://localhost:{port}[/dim]")
    try:
        app.run(port=port)
    finally:
        close_session()
    return 0


def cli(argv=None) -> int:
    """Main CLI entry point."""
    import argparse

    parser = argparse.ArgumentParser(
        description="AIDOI Portal - eligibility scoring and registry admin",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command")

    p_score = sub.add_parser("score", help="Score an AIDOI metadata file (YAML/JSON)")
    p_score.add_argument("file")
    p_score.set_defaults(func=cmd_score)

    for name, func, help_text in (
        ("whoami", cmd_whoami, "Show the role a credential claims"),
        ("stats", cmd_stats, "Registry statistics (admin)"),
        ("pending", cmd_pending, "Users awaiting Org Admin approval (admin)"),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("--token", help=f"Credential (default: ${TOKEN_ENV})")
        p.set_defaults(func=func)

    p_serve = sub.add_parser("serve", help="Run the portal web API")
    p_serve.add_argument("--port", type=int)
    p_serve.set_defaults(func=cmd_serve)

    args = parser.parse_args(argv)

    cfg = load_config()
    configure_logging("DEBUG" if args.verbose else cfg.log_level)

    if not getattr(args, "func", None):
        parser.print_help()
        return 0
    return args.func(args)


if __name__ == "__main__":
    sys.exit(cli())
