"""Savings goal commands."""

from decimal import Decimal

import click
from budgetbuddy.cli.error_handling import handle_domain_error, parse_or_exit
from budgetbuddy.domain.errors import DomainError
from budgetbuddy.domain.goal import GoalService
from budgetbuddy.utils.amount_parser import parse_amount
from budgetbuddy.utils.date_parser import parse_date
from budgetbuddy.utils.money import format_currency


@click.group()
def goal_group():
    """Manage savings goals."""
    pass


@goal_group.command("add")
@click.argument("name")
@click.option("--target", required=True, help="Amount to reach")
@click.option("--initial", default="0", help="Amount already saved")
@click.option("--deadline", help="Target date")
@click.option("--icon", default="🎯", help="Display icon")
@click.option("--color", default="#10b981", help="Display color")
@click.pass_context
def add_goal(
    ctx, name: str, target: str, initial: str, deadline: str | None, icon: str, color: str
):
    """Create a savings goal.

    Examples:
        budgetbuddy goal add Vacation --target 3000
        budgetbuddy goal add "Emergency Fund" --target 10000 --initial 2500 --deadline 2027-06-30
    """
    db = ctx.obj["db"]
    service = GoalService(db)

    target_amount = parse_or_exit(ctx, parse_amount, target, "target")
    initial_amount = parse_or_exit(ctx, parse_amount, initial, "initial amount")
    parsed_deadline = parse_or_exit(ctx, parse_date, deadline, "deadline") if deadline else None

    try:
        goal = service.create_goal(
            user_id=ctx.obj["user_id"],
            name=name,
            target_amount=target_amount,
            initial_amount=initial_amount,
            deadline=parsed_deadline,
            category=icon,
            color=color,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(
        f"Created goal '{goal.name}' (ID: {goal.id}): "
        f"{format_currency(goal.current_amount)} of {format_currency(goal.target_amount)}"
    )


@goal_group.command("list")
@click.pass_context
def list_goals(ctx):
    """List goals with their progress."""
    db = ctx.obj["db"]
    service = GoalService(db)

    goals = service.list_goals(ctx.obj["user_id"])
    if not goals:
        click.echo("No goals found.")
        return

    for goal in goals:
        deadline = f" by {goal.deadline}" if goal.deadline else ""
        done = " (complete)" if goal.is_complete else ""
        click.echo(
            f"{goal.id:<4} {goal.category} {goal.name}: "
            f"{format_currency(goal.current_amount)} / {format_currency(goal.target_amount)} "
            f"({goal.progress_percent:.0f}%){deadline}{done}"
        )


@goal_group.command("contribute")
@click.argument("goal_id", type=int)
@click.argument("amount")
@click.option("--date", "txn_date", default="today", show_default=True, help="Contribution date")
@click.option("--description", help="Transaction description")
@click.pass_context
def contribute(ctx, goal_id: int, amount: str, txn_date: str, description: str | None):
    """Add money to a goal."""
    db = ctx.obj["db"]
    service = GoalService(db)

    parsed_amount: Decimal = parse_or_exit(ctx, parse_amount, amount, "amount")
    parsed_date = parse_or_exit(ctx, parse_date, txn_date, "date")

    try:
        goal = service.contribute(
            ctx.obj["user_id"],
            goal_id,
            parsed_amount,
            txn_date=parsed_date,
            description=description,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(
        f"'{goal.name}' is at {format_currency(goal.current_amount)} "
        f"of {format_currency(goal.target_amount)} ({goal.progress_percent:.0f}%)"
    )
    if goal.is_complete:
        click.echo("Goal reached!")


@goal_group.command("sync")
@click.pass_context
def sync_goals(ctx):
    """Recompute goal progress from the ledger."""
    db = ctx.obj["db"]
    service = GoalService(db)

    goals = service.recalculate_goal_amounts(ctx.obj["user_id"])
    click.echo(f"Reconciled {len(goals)} goal(s)")


@goal_group.command("delete")
@click.argument("goal_id", type=int)
@click.option("--yes", is_flag=True, help="Skip confirmation")
@click.pass_context
def delete_goal(ctx, goal_id: int, yes: bool):
    """Delete a goal. Its contributions stay in the ledger."""
    db = ctx.obj["db"]
    service = GoalService(db)

    if not yes and not click.confirm(f"Delete goal {goal_id}?"):
        click.echo("Cancelled.")
        return

    try:
        service.delete_goal(ctx.obj["user_id"], goal_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Deleted goal {goal_id}")


def register_commands(cli: click.Group) -> None:
    """Register goal commands with main CLI."""
    cli.add_command(goal_group, name="goal")
