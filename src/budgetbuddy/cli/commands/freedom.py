"""Freedom calculator command."""

import click
from budgetbuddy.domain.entities import ExpenseBreakdown, FreedomInputs
from budgetbuddy.domain.freedom import NEVER, freedom_status, simulate
from budgetbuddy.utils.money import format_currency


@click.command("freedom")
@click.option("--age", type=click.IntRange(18, 100), required=True, help="Current age")
@click.option("--savings", type=float, default=0.0, help="Current savings")
@click.option("--income", type=float, required=True, help="Monthly take-home income")
@click.option("--housing", type=float, default=0.0, help="Monthly housing costs")
@click.option("--lifestyle", type=float, default=0.0, help="Monthly lifestyle spending")
@click.option("--transport", type=float, default=0.0, help="Monthly transport costs")
def freedom(
    age: int,
    savings: float,
    income: float,
    housing: float,
    lifestyle: float,
    transport: float,
):
    """Estimate the age at which savings cover living expenses.

    The simulation does not touch the ledger.

    Examples:
        budgetbuddy freedom --age 30 --savings 10000 --income 5000 --housing 1500 --lifestyle 1000 --transport 500
    """
    result = simulate(
        FreedomInputs(
            age=age,
            current_savings=savings,
            monthly_income=income,
            expenses=ExpenseBreakdown(housing=housing, lifestyle=lifestyle, transport=transport),
        )
    )

    click.echo(f"Freedom score: {result.freedom_score}/100 ({freedom_status(result.freedom_score)})")
    click.echo("=" * 50)
    if result.years_to_freedom >= NEVER:
        click.echo("  Freedom age:        never at current savings")
    else:
        click.echo(
            f"  Freedom age:        {result.freedom_age} (in {result.years_to_freedom} years)"
        )
    click.echo(f"  Freedom number:     {format_currency(result.freedom_number)}")
    click.echo(f"  Progress:           {result.actual_progress:.1f}%")
    click.echo(f"  Peer percentile:    {result.percentile}")
    click.echo(f"  Years behind ideal: {result.years_behind:.1f}")
    click.echo(f"  Opportunity cost:   {format_currency(result.opportunity_cost)}")

    risks = result.risk_indicators
    click.echo("\nRisks:")
    click.echo(f"  Housing cost at 40:  {format_currency(risks.rent_at_40)}/month")
    click.echo(f"  Expense ratio:       {risks.expense_ratio_percent}% of income")
    if risks.emergency_fund_short:
        click.echo("  Emergency fund covers less than 6 months of expenses")
    if risks.still_working_at_70:
        click.echo("  Still working at 70")


def register_commands(cli):
    """Register freedom command with main CLI."""
    cli.add_command(freedom)
