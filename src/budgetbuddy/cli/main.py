"""Main CLI entry point."""

import click
from budgetbuddy.database.factories import DB_PATH_ENV, create_sqlite_database
from budgetbuddy.log import DEFAULT_LOG_LEVEL, LOG_LEVEL_ENV, configure_logging

# Import and register all commands at module level
from budgetbuddy.cli.commands import (
    dashboard,
    freedom,
    goal,
    projection,
    recurring,
    transaction,
    wealth,
)

USER_ENV = "BUDGETBUDDY_USER"
DEFAULT_USER = "local"


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help=f"Path to database file (overrides {DB_PATH_ENV} environment variable)",
    envvar=DB_PATH_ENV,
)
@click.option(
    "--user",
    default=DEFAULT_USER,
    show_default=True,
    help="User whose ledger to operate on",
    envvar=USER_ENV,
)
@click.option(
    "--log-level",
    default=DEFAULT_LOG_LEVEL,
    show_default=True,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging verbosity (written to stderr)",
    envvar=LOG_LEVEL_ENV,
)
@click.pass_context
def cli(ctx, db_path: str | None, user: str, log_level: str):
    """BudgetBuddy - Personal budgeting engine.

    Track transactions, schedule recurring income and bills, follow savings
    goals and see how healthy your finances are.
    """
    ctx.ensure_object(dict)
    configure_logging(log_level)
    ctx.obj["user_id"] = user

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
transaction.register_commands(cli)
recurring.register_commands(cli)
goal.register_commands(cli)
dashboard.register_commands(cli)
projection.register_commands(cli)
freedom.register_commands(cli)
wealth.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
