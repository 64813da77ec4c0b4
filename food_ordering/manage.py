"""
Management commands
"""
import click

from food_ordering.core.config import settings
from food_ordering.core.database import SessionLocal, create_tables, drop_tables
from food_ordering.core.logging import setup_logging
from food_ordering.seed import seed_database


@click.group()
def cli():
    """Food ordering API management"""
    setup_logging()


@cli.command("init-db")
def init_db():
    """Create database tables"""
    create_tables()
    click.echo("Database tables created!")


@cli.command("drop-db")
@click.confirmation_option(prompt="Drop every table?")
def drop_db():
    """Drop all database tables"""
    drop_tables()
    click.echo("Database tables dropped.")


@cli.command("seed")
def seed():
    """Create tables and insert demo users, restaurants and menus"""
    create_tables()
    db = SessionLocal()
    try:
        created = seed_database(db)
    finally:
        db.close()
    click.echo(
        f"Seeded {created['users']} users, {created['restaurants']} restaurants, "
        f"{created['menu_items']} menu items"
    )


@cli.command("runserver")
@click.option("--host", default="0.0.0.0", show_default=True)
@click.option("--port", default=8000, show_default=True, type=int)
@click.option("--reload", is_flag=True, help="Restart on code changes")
def runserver(host, port, reload):
    """Serve the API with uvicorn"""
    import uvicorn

    uvicorn.run(
        "food_ordering.main:app",
        host=host,
        port=port,
        reload=reload,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    cli()
