"""Category management commands."""

from collections import defaultdict
from typing import Optional
from uuid import UUID

import click
from fintrack.cli.error_handling import handle_domain_error
from fintrack.cli.resolution import category_or_exit, user_option, user_or_exit
from fintrack.domain.category import CategoryService
from fintrack.domain.entities import Category


def print_category_tree(
    children: dict[Optional[UUID], list[Category]],
    parent_id: Optional[UUID] = None,
    indent: int = 0,
) -> None:
    """Recursively print category tree."""
    for cat in children.get(parent_id, []):
        prefix = "  " * indent
        details = [f"ID: {cat.id}"]
        if cat.color:
            details.append(cat.color)
        if not cat.is_active:
            details.append("inactive")
        click.echo(f"{prefix}{cat.name} ({', '.join(details)})")
        print_category_tree(children, cat.id, indent + 1)


@click.group()
def category_group():
    """Manage categories."""
    pass


@category_group.command("list")
@user_option
@click.pass_context
def list_categories(ctx, user_ref: str):
    """List a user's categories in tree format."""
    user = user_or_exit(ctx, user_ref)
    categories = CategoryService(ctx.obj["db"]).list_categories(user_id=user.id)
    if not categories:
        click.echo("No categories found. Use 'category create' to add one.")
        return

    children = defaultdict(list)
    for cat in categories:
        children[cat.parent_category_id].append(cat)

    click.echo("\nCategories:")
    print_category_tree(children)


@category_group.command("create")
@click.argument("name")
@click.option("--parent", help="Parent category path (e.g., 'Food & Dining')")
@click.option("--description", help="Category description")
@click.option("--icon", help="Icon name")
@click.option("--color", help="Color as #RGB or #RRGGBB")
@user_option
@click.pass_context
def create_category(
    ctx,
    name: str,
    parent: str | None,
    description: str | None,
    icon: str | None,
    color: str | None,
    user_ref: str,
):
    """Create a new category.

    Examples:
        fintrack category create "Food & Dining" --color "#FF8800" --user jane@example.com
        fintrack category create Groceries --parent "Food & Dining" --user jane@example.com
    """
    user = user_or_exit(ctx, user_ref)
    parent_id = category_or_exit(ctx, user, parent).id if parent else None

    try:
        cat = CategoryService(ctx.obj["db"]).create_category(
            user.id,
            name,
            description=description,
            parent_category_id=parent_id,
            icon=icon,
            color=color,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    parent_str = f" under '{parent}'" if parent else ""
    click.echo(f"Created category '{cat.name}'{parent_str} (ID: {cat.id})")


@category_group.command("update")
@click.argument("category")
@click.option("--name", help="New name")
@click.option("--description", help="New description, or empty string to clear")
@click.option("--icon", help="New icon, or empty string to clear")
@click.option("--color", help="New color, or empty string to clear")
@click.option("--parent", help="New parent category path, or empty string for top level")
@user_option
@click.pass_context
def update_category(
    ctx,
    category: str,
    name: str | None,
    description: str | None,
    icon: str | None,
    color: str | None,
    parent: str | None,
    user_ref: str,
):
    """Update a category.

    Updates only the fields that are provided. CATEGORY can be a path or ID.

    Examples:
        fintrack category update Groceries --color "#00AA00" --user jane@example.com
        fintrack category update Groceries --parent "" --user jane@example.com
    """
    user = user_or_exit(ctx, user_ref)
    cat = category_or_exit(ctx, user, category)
    service = CategoryService(ctx.obj["db"])

    try:
        service.update_category(cat.id, name=name, description=description, icon=icon, color=color)
        if parent is not None:
            parent_id = category_or_exit(ctx, user, parent).id if parent else None
            service.set_parent(cat.id, parent_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated category '{service.format_category_path(cat.id)}'")


@category_group.command("activate")
@click.argument("category")
@user_option
@click.pass_context
def activate_category(ctx, category: str, user_ref: str):
    """Reactivate a category."""
    user = user_or_exit(ctx, user_ref)
    cat = category_or_exit(ctx, user, category)
    try:
        CategoryService(ctx.obj["db"]).activate_category(cat.id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Activated category '{cat.name}'")


@category_group.command("deactivate")
@click.argument("category")
@user_option
@click.pass_context
def deactivate_category(ctx, category: str, user_ref: str):
    """Deactivate a category."""
    user = user_or_exit(ctx, user_ref)
    cat = category_or_exit(ctx, user, category)
    try:
        CategoryService(ctx.obj["db"]).deactivate_category(cat.id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deactivated category '{cat.name}'")


@category_group.command("delete")
@click.argument("category")
@user_option
@click.option("--yes", is_flag=True, help="Skip confirmation prompt")
@click.pass_context
def delete_category(ctx, category: str, user_ref: str, yes: bool):
    """Delete a category.

    Refused while transactions, recurring transactions or subcategories
    still reference it.
    """
    user = user_or_exit(ctx, user_ref)
    cat = category_or_exit(ctx, user, category)

    if not yes and not click.confirm(f"Are you sure you want to delete category '{cat.name}'?"):
        click.echo("Deletion cancelled.")
        return

    try:
        CategoryService(ctx.obj["db"]).delete_category(cat.id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted category '{cat.name}'")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
