"""User management commands."""

import click
from fintrack.cli.error_handling import handle_domain_error
from fintrack.cli.resolution import user_or_exit
from fintrack.domain.user import UserService


@click.group()
def user_group():
    """Manage users."""
    pass


@user_group.command("create")
@click.argument("email")
@click.option("--first-name", required=True, help="First name")
@click.option("--last-name", required=True, help="Last name")
@click.option(
    "--password-hash",
    required=True,
    envvar="FINTRACK_PASSWORD_HASH",
    help="Pre-computed password hash (at least 32 characters)",
)
@click.pass_context
def create_user(ctx, email: str, first_name: str, last_name: str, password_hash: str):
    """Register a new user.

    Passwords are never hashed here; pass the hash produced by your
    authentication layer.

    Examples:
        fintrack user create jane@example.com --first-name Jane --last-name Doe \\
            --password-hash "$HASH"
    """
    service = UserService(ctx.obj["db"])
    try:
        user = service.register_user(email, password_hash, first_name, last_name)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created user '{user.email}' (ID: {user.id})")


@user_group.command("list")
@click.pass_context
def list_users(ctx):
    """List all users."""
    users = UserService(ctx.obj["db"]).list_users()
    if not users:
        click.echo("No users found.")
        return

    click.echo("\nUsers:")
    click.echo("-" * 80)
    for u in users:
        status = "active" if u.is_active else "inactive"
        confirmed = "confirmed" if u.email_confirmed else "unconfirmed"
        click.echo(f"{u.id} | {u.email:30s} | {u.full_name:20s} | {status}, {confirmed}")


@user_group.command("confirm")
@click.argument("user")
@click.pass_context
def confirm_user(ctx, user: str):
    """Confirm a user's email address.

    USER can be an email address or ID.
    """
    found = user_or_exit(ctx, user)
    try:
        UserService(ctx.obj["db"]).confirm_email(found.id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Confirmed email '{found.email}'")


@user_group.command("rename")
@click.argument("user")
@click.option("--first-name", required=True, help="New first name")
@click.option("--last-name", required=True, help="New last name")
@click.pass_context
def rename_user(ctx, user: str, first_name: str, last_name: str):
    """Change a user's first and last name."""
    found = user_or_exit(ctx, user)
    try:
        updated = UserService(ctx.obj["db"]).update_name(found.id, first_name, last_name)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Renamed user to '{updated.full_name}'")


@user_group.command("login")
@click.argument("user")
@click.pass_context
def login_user(ctx, user: str):
    """Record a login for an active user."""
    found = user_or_exit(ctx, user)
    try:
        updated = UserService(ctx.obj["db"]).record_login(found.id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Recorded login for '{updated.email}' at {updated.last_login_at:%Y-%m-%d %H:%M:%S} UTC")


def register_commands(cli):
    """Register user commands with main CLI."""
    cli.add_command(user_group, name="user")
