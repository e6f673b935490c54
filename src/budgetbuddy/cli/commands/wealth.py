"""Wealth projection command."""

import click
from budgetbuddy.domain.wealth import project_wealth
from budgetbuddy.utils.money import format_currency


@click.command("wealth")
@click.option("--savings", type=float, default=0.0, help="Current savings")
@click.option("--income", type=float, required=True, help="Monthly income")
@click.option(
    "--rate",
    type=click.FloatRange(0, 100),
    default=20.0,
    show_default=True,
    help="Percent of income saved each month",
)
@click.option(
    "--return",
    "annual_return",
    type=float,
    default=7.0,
    show_default=True,
    help="Expected annual return in percent",
)
@click.option("--years", type=click.IntRange(1, 50), default=10, show_default=True)
def wealth(savings: float, income: float, rate: float, annual_return: float, years: int):
    """Project savings growth with monthly compounding."""
    result = project_wealth(
        current_savings=savings,
        monthly_income=income,
        savings_rate_percent=rate,
        annual_return_percent=annual_return,
        years=years,
    )

    click.echo(f"Saving {format_currency(result.monthly_savings)} per month")
    click.echo(f"{'Year':<6} {'Balance':>16} {'Contributed':>16}")
    for point in result.points:
        if point.month % 12 == 0:
            click.echo(
                f"{point.month // 12:<6} {format_currency(point.balance):>16} "
                f"{format_currency(point.contributions):>16}"
            )
    click.echo(f"\nTotal returns: {format_currency(result.total_returns)}")


def register_commands(cli):
    """Register wealth command with main CLI."""
    cli.add_command(wealth)
