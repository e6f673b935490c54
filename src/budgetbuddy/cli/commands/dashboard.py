"""Dashboard command."""

import click
from budgetbuddy.domain.dashboard import DashboardService
from budgetbuddy.domain.health import health_status
from budgetbuddy.utils.money import format_currency


@click.command("dashboard")
@click.pass_context
def dashboard(ctx):
    """Show the financial health score, key metrics and insights."""
    db = ctx.obj["db"]
    service = DashboardService(db)

    result = service.get_health(ctx.obj["user_id"])
    metrics = result.key_metrics

    click.echo(f"Health score: {result.health_score}/100 ({health_status(result.health_score)})")
    click.echo("=" * 50)
    click.echo(f"  Monthly income:    {format_currency(metrics.monthly_income):>14}")
    click.echo(f"  Monthly expenses:  {format_currency(metrics.monthly_expenses):>14}")
    click.echo(f"  Savings:           {format_currency(metrics.monthly_savings):>14}")
    click.echo(f"  Net cash flow:     {format_currency(metrics.net_cash_flow):>14}")
    click.echo(f"  Savings rate:      {metrics.savings_rate:>13.1f}%")
    click.echo(f"  Runway (months):   {metrics.monthly_runway:>14.1f}")
    click.echo(f"  Active goals:      {metrics.active_goals_count:>14}")

    if result.shortcomings:
        click.echo("\nNeeds attention:")
        for item in result.shortcomings:
            click.echo(f"  [{item.severity.value}] {item.message} -> {item.action}")

    if result.recommendations:
        click.echo("\nRecommendations:")
        for item in result.recommendations:
            click.echo(f"  - {item.message}")


def register_commands(cli):
    """Register dashboard command with main CLI."""
    cli.add_command(dashboard)
