import os
import click
from decimal import Decimal
from flask import current_app
from flask.cli import with_appcontext
from flask_migrate import upgrade as alembic_upgrade, stamp as alembic_stamp, migrate as alembic_migrate

from app.services import catalog, settings as settings_service
from app.services.errors import ValidationError
from app.utils.db import transactional

# A starter menu for a fresh database
STARTER_MENU = [
    {"name": "Chocolate Chip Cookies", "emoji": "🍪", "price": Decimal("3.50"),
     "description": "Half dozen, chewy middle.", "options": "Classic, Sea salt"},
    {"name": "Sourdough Loaf", "emoji": "🍞", "price": Decimal("9.00"),
     "description": "Naturally leavened, baked the morning of pickup."},
    {"name": "Cinnamon Rolls", "emoji": "🥐", "price": Decimal("5.00"),
     "description": "Cream cheese frosting.", "options": "Single, Box of 4"},
]


def _assert_safe_for_upgrade():
    # Prevent accidental prod upgrades unless explicitly allowed
    env = (current_app.config.get("ENV") or "").lower()
    app_env = (os.getenv("APP_ENV") or "").lower()
    if app_env == "production" or env == "production":
        if (os.getenv("ALLOW_DB_MIGRATIONS") or "").lower() not in ("1", "true", "yes"):
            raise click.ClickException("Refusing to run DB migration in production without ALLOW_DB_MIGRATIONS=true")


@click.command("db-migrate-safe")
@click.option("-m", "--message", default="auto migration", help="Migration message")
@with_appcontext
def db_migrate_safe(message):
    """Generate a new migration script from current models."""
    alembic_migrate(message=message)
    click.echo("Migration script generated.")


@click.command("db-upgrade-safe")
@with_appcontext
def db_upgrade_safe():
    """Apply migrations to the configured database."""
    _assert_safe_for_upgrade()
    alembic_upgrade()
    click.echo("Database upgraded.")


@click.command("db-stamp-safe")
@click.option("--revision", default="head", help="Revision to stamp, default 'head'")
@with_appcontext
def db_stamp_safe(revision):
    """Mark the database at a given revision without running migrations."""
    _assert_safe_for_upgrade()
    alembic_stamp(revision)
    click.echo(f"Database stamped at {revision}.")


@click.command("seed-menu")
@click.option("--force", is_flag=True, help="Seed even if the menu already has items")
@with_appcontext
def seed_menu(force):
    """Insert the starter menu."""
    if catalog.list_items() and not force:
        click.echo("Menu already has items; use --force to add the starter menu anyway.")
        return
    with transactional("Failed to seed menu"):
        for entry in STARTER_MENU:
            catalog.add_item(**entry)
    click.echo(f"Seeded {len(STARTER_MENU)} menu items.")


@click.command("toggle-blocked-date")
@click.argument("date_string")
@with_appcontext
def toggle_blocked_date(date_string):
    """Block a date for orders, or unblock it if it is already blocked."""
    try:
        with transactional("Error saving blocked dates"):
            blocked = settings_service.toggle_blocked_date(date_string)
    except ValidationError as e:
        raise click.ClickException(str(e))
    state = "blocked" if date_string in blocked else "available"
    click.echo(f"{date_string} is now {state}.")


def register_cli(app):
    app.cli.add_command(db_migrate_safe)
    app.cli.add_command(db_upgrade_safe)
    app.cli.add_command(db_stamp_safe)
    app.cli.add_command(seed_menu)
    app.cli.add_command(toggle_blocked_date)
