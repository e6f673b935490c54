"""Recurring rule commands."""

import click
from budgetbuddy.cli.error_handling import handle_domain_error, parse_or_exit
from budgetbuddy.domain.entities import Frequency
from budgetbuddy.domain.errors import DomainError
from budgetbuddy.domain.recurring import RecurringRuleService
from budgetbuddy.utils.amount_parser import parse_amount
from budgetbuddy.utils.date_parser import parse_date
from budgetbuddy.utils.money import format_currency


@click.group()
def recurring_group():
    """Manage recurring income, bills and savings."""
    pass


@recurring_group.command("add")
@click.option("--description", required=True, help="Description copied onto each transaction")
@click.option("--amount", required=True, help="Amount per period")
@click.option("--category", required=True, help="Category copied onto each transaction")
@click.option(
    "--frequency",
    required=True,
    type=click.Choice([f.value for f in Frequency], case_sensitive=False),
    help="How often the rule runs",
)
@click.option("--day", "recur_day", type=int, help="Day of month (monthly, quarterly, yearly)")
@click.option(
    "--start",
    "start_date",
    default="today",
    show_default=True,
    help="First eligible date; fixes the weekday of daily/weekly/biweekly rules",
)
@click.pass_context
def add_rule(
    ctx,
    description: str,
    amount: str,
    category: str,
    frequency: str,
    recur_day: int | None,
    start_date: str,
):
    """Create a recurring rule.

    Examples:
        budgetbuddy recurring add --description Rent --amount 1500 --category Expenses --frequency monthly --day 1
        budgetbuddy recurring add --description Paycheck --amount 2100 --category Income --frequency biweekly --start 2026-01-09
    """
    db = ctx.obj["db"]
    service = RecurringRuleService(db)

    start = parse_or_exit(ctx, parse_date, start_date, "start date")
    parsed_amount = parse_or_exit(ctx, parse_amount, amount, "amount")

    try:
        rule = service.create_rule(
            user_id=ctx.obj["user_id"],
            description=description,
            amount=parsed_amount,
            category=category,
            frequency=frequency,
            start_date=start,
            recur_day=recur_day,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(
        f"Created recurring rule {rule.id}: {rule.description} "
        f"{format_currency(rule.amount)} {rule.frequency}, next run {rule.next_run_date}"
    )


@recurring_group.command("list")
@click.option("--active-only", is_flag=True, help="Hide deactivated rules")
@click.pass_context
def list_rules(ctx, active_only: bool):
    """List recurring rules ordered by next run date."""
    db = ctx.obj["db"]
    service = RecurringRuleService(db)

    rules = service.list_rules(ctx.obj["user_id"], active_only=active_only)
    if not rules:
        click.echo("No recurring rules found.")
        return

    click.echo(
        f"{'ID':<6} {'Next run':<12} {'Frequency':<10} {'Amount':>12} {'Category':<20} Description"
    )
    click.echo("-" * 80)
    for rule in rules:
        status = "" if rule.is_active else " (inactive)"
        click.echo(
            f"{rule.id:<6} {rule.next_run_date.isoformat():<12} {rule.frequency:<10} "
            f"{format_currency(rule.amount):>12} {rule.category[:20]:<20} "
            f"{rule.description}{status}"
        )


@recurring_group.command("run")
@click.option("--as-of", help="Reference date (defaults to today)")
@click.pass_context
def run_rules(ctx, as_of: str | None):
    """Create every transaction owed by active rules up to today."""
    db = ctx.obj["db"]
    service = RecurringRuleService(db)

    now = parse_or_exit(ctx, parse_date, as_of, "date") if as_of else None
    result = service.process_due_rules(ctx.obj["user_id"], now=now)

    if result.transactions:
        click.echo(f"Created {len(result.transactions)} transaction(s):")
        for txn in result.transactions:
            click.echo(f"  {txn.date} {format_currency(txn.amount):>12} {txn.description}")
    else:
        click.echo("No recurring transactions due.")

    for error in result.errors:
        click.echo(f"Rule {error.rule_id}: {error.message}", err=True)
    for rule_id in result.review_rule_ids:
        click.echo(f"Rule {rule_id} needs manual review", err=True)

    if result.errors:
        ctx.exit(1)


@recurring_group.command("deactivate")
@click.argument("rule_id", type=int)
@click.pass_context
def deactivate_rule(ctx, rule_id: int):
    """Stop a rule from creating transactions."""
    db = ctx.obj["db"]
    service = RecurringRuleService(db)

    try:
        service.deactivate_rule(ctx.obj["user_id"], rule_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Deactivated recurring rule {rule_id}")


@recurring_group.command("delete")
@click.argument("rule_id", type=int)
@click.option("--yes", is_flag=True, help="Skip confirmation")
@click.pass_context
def delete_rule(ctx, rule_id: int, yes: bool):
    """Delete a rule. Transactions it already created are kept."""
    db = ctx.obj["db"]
    service = RecurringRuleService(db)

    if not yes and not click.confirm(f"Delete recurring rule {rule_id}?"):
        click.echo("Cancelled.")
        return

    try:
        service.delete_rule(ctx.obj["user_id"], rule_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Deleted recurring rule {rule_id}")


def register_commands(cli: click.Group) -> None:
    """Register recurring commands with main CLI."""
    cli.add_command(recurring_group, name="recurring")
