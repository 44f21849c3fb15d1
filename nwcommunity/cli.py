"""nwc CLI: operator tooling for the Northwest Community core."""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from nwcommunity import __version__
from nwcommunity.config import Settings, get_settings
from nwcommunity.errors import FlagNotFoundError, StoreCorruptError, UnauthorizedError, ValidationError
from nwcommunity.log import configure_logging
from nwcommunity.moderation.models import TextContext

console = Console()


def _review_log(settings: Settings):
    from nwcommunity.audit.review_log import ReviewAuditLog

    return ReviewAuditLog(Path(settings.data_dir) / "audit_logs")


def _recorder(settings: Settings):
    from nwcommunity.moderation.flag_store import FlagStore
    from nwcommunity.moderation.recorder import FlagRecorder

    data_dir = Path(settings.data_dir)
    return FlagRecorder(
        FlagStore(data_dir / "moderation"),
        audit=_review_log(settings),
    )


def _members(settings: Settings):
    from nwcommunity.auth.store import MemberStore

    return MemberStore(Path(settings.data_dir) / "auth")


@click.group()
@click.version_option(version=__version__)
@click.pass_context
def main(ctx: click.Context):
    """nwc: Northwest Community operator tools.

    Review flagged content, check text against the community policy,
    sanitize rich text and tidy city lists.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    ctx.obj = settings


# ── Flags ────────────────────────────────────────────────────────────


@main.group()
def flags():
    """Review moderation flags."""


@flags.command("list")
@click.option("--status", "status_filter", default=None,
              type=click.Choice(["pending", "reviewed", "resolved"]))
@click.option("--limit", default=50, show_default=True)
@click.pass_obj
def flags_list(settings: Settings, status_filter: str | None, limit: int):
    """List flagged content, newest first."""
    items = _recorder(settings).list_flags(status=status_filter, limit=limit)
    if not items:
        console.print("[yellow]No flagged content.[/]")
        return

    table = Table(title=f"Flagged Content ({len(items)})")
    table.add_column("ID", style="dim")
    table.add_column("Type", style="cyan")
    table.add_column("Reason")
    table.add_column("Snippet")
    table.add_column("Status")
    table.add_column("Created", style="dim")

    status_style = {"pending": "yellow", "reviewed": "green", "resolved": "dim"}
    for item in items:
        table.add_row(
            item.id[:12],
            item.content_type.value,
            item.reason.value,
            (item.snippet or "—")[:50],
            f"[{status_style[item.status.value]}]{item.status.value}[/]",
            item.created_at[:19],
        )
    console.print(table)


@flags.command("update")
@click.argument("flag_id")
@click.argument("status")
@click.option("--actor", default="cli-admin", show_default=True, help="Name recorded in the audit log")
@click.pass_obj
def flags_update(settings: Settings, flag_id: str, status: str, actor: str):
    """Move FLAG_ID to STATUS (reviewed or resolved)."""
    try:
        flag = _recorder(settings).update_status(flag_id, status, actor=actor)
    except ValidationError as exc:
        console.print(f"[red]Rejected:[/] {exc.message}")
        raise SystemExit(1)
    except (FlagNotFoundError, UnauthorizedError, StoreCorruptError) as exc:
        console.print(f"[red]{exc}[/]")
        raise SystemExit(1)
    console.print(f"[green]✓[/] {flag.id} is now [bold]{flag.status.value}[/]")


@flags.command("history")
@click.argument("flag_id")
@click.pass_obj
def flags_history(settings: Settings, flag_id: str):
    """Show the review decisions recorded for FLAG_ID."""
    entries = _review_log(settings).transitions(flag_id=flag_id)
    if not entries:
        console.print("[yellow]No review decisions recorded.[/]")
        return
    for e in reversed(entries):
        console.print(f"{e.timestamp[:19]}  {e.from_status} -> {e.to_status}  [dim]{e.actor}[/]")


# ── Text policy ──────────────────────────────────────────────────────


@main.command("check-text")
@click.argument("text")
@click.option("--context", "context", default=TextContext.comment.value,
              type=click.Choice([c.value for c in TextContext]))
def check_text_cmd(text: str, context: str):
    """Check TEXT against the community text policy (nothing is flagged)."""
    from nwcommunity.moderation.text_policy import check_text

    result = check_text(text, context)
    if result.allowed:
        console.print("[green]✓ Allowed[/]")
        return
    console.print(f"[red]✗ Blocked[/] ({result.flag_reason.value}): {result.reason}")
    raise SystemExit(1)


# ── Content transforms ───────────────────────────────────────────────


@main.command()
@click.argument("source", type=click.File("r"), default="-")
def sanitize(source):
    """Sanitize rich text from SOURCE (default: stdin)."""
    from nwcommunity.content.sanitizer import sanitize_html

    click.echo(sanitize_html(source.read()))


@main.command()
@click.argument("source", type=click.File("r"), default="-")
def cities(source):
    """Deduplicate city names, one per line, from SOURCE (default: stdin)."""
    from nwcommunity.content.cities import dedupe_cities

    for city in dedupe_cities(source.read().splitlines()):
        click.echo(city)


# ── Members & sessions ───────────────────────────────────────────────


@main.group()
def member():
    """Manage members and sessions."""


@member.command("create")
@click.argument("email")
@click.option("--name", default="", help="Display name")
@click.pass_obj
def member_create(settings: Settings, email: str, name: str):
    """Create (or look up) a member by EMAIL."""
    m = _members(settings).get_or_create_member(email, display_name=name)
    console.print(f"[green]✓[/] {m.email} ({m.id})")


@member.command("session")
@click.argument("email")
@click.option("--hours", default=24, show_default=True)
@click.pass_obj
def member_session(settings: Settings, email: str, hours: int):
    """Issue a session token for the member with EMAIL."""
    store = _members(settings)
    m = store.get_member_by_email(email)
    if m is None:
        console.print(f"[red]No member with email {email}[/]")
        raise SystemExit(1)
    session = store.create_session(m.id, expires_in_hours=hours)
    console.print(f"Cookie [bold]{settings.session_cookie}[/] = {session.token}")
    console.print(f"[dim]Expires {session.expires_at}[/]")


if __name__ == "__main__":
    main()
