"""Projection command."""

import click
from budgetbuddy.domain.dashboard import DashboardService
from budgetbuddy.utils.money import format_currency


@click.command("projection")
@click.pass_context
def projection(ctx):
    """Annualize active recurring rules into income and expense totals."""
    db = ctx.obj["db"]
    service = DashboardService(db)

    result = service.get_projection(ctx.obj["user_id"])

    click.echo("Annual projection")
    click.echo("=" * 40)
    click.echo(f"  Income:           {format_currency(result.annual_income):>14}")
    click.echo(f"  Expenses:         {format_currency(result.annual_expenses):>14}")
    click.echo(f"  Net:              {format_currency(result.net_annual):>14}")
    click.echo(f"  Monthly income:   {format_currency(result.monthly_income):>14}")
    click.echo(f"  Monthly expenses: {format_currency(result.monthly_expenses):>14}")


def register_commands(cli):
    """Register projection command with main CLI."""
    cli.add_command(projection)
