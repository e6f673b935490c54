"""Transaction management commands."""

import click
from budgetbuddy.cli.error_handling import handle_domain_error, parse_or_exit
from budgetbuddy.domain.entities import DEFAULT_CATEGORIES
from budgetbuddy.domain.errors import DomainError
from budgetbuddy.domain.transaction import TransactionService
from budgetbuddy.utils.amount_parser import parse_amount
from budgetbuddy.utils.date_parser import parse_date
from budgetbuddy.utils.money import format_currency


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("add")
@click.option(
    "--date",
    "txn_date",
    default="today",
    show_default=True,
    help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')",
)
@click.option("--amount", required=True, help="Transaction amount (e.g., 123.45)")
@click.option("--description", required=True, help="Transaction description")
@click.option(
    "--category",
    required=True,
    help=f"Category ({', '.join(DEFAULT_CATEGORIES)} or 'Goal: <name>')",
)
@click.pass_context
def add_transaction(ctx, txn_date: str, amount: str, description: str, category: str):
    """Add a transaction manually.

    The sign is set by the category: expenses are stored negative,
    everything else positive.

    Examples:
        budgetbuddy transaction add --amount 3200 --description Salary --category Income
        budgetbuddy transaction add --date yesterday --amount 54.20 --description Groceries --category Expenses
    """
    db = ctx.obj["db"]
    service = TransactionService(db)

    parsed_date = parse_or_exit(ctx, parse_date, txn_date, "date")
    parsed_amount = parse_or_exit(ctx, parse_amount, amount, "amount")

    try:
        txn = service.create_transaction(
            user_id=ctx.obj["user_id"],
            date=parsed_date,
            amount=parsed_amount,
            description=description,
            category=category,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(
        f"Created transaction {txn.id}: {txn.date} {format_currency(txn.amount)} "
        f"{txn.description} [{txn.category}]"
    )


@transaction_group.command("list")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@click.option("--category", help="Only show this category")
@click.pass_context
def list_transactions(ctx, start_date: str | None, end_date: str | None, category: str | None):
    """View transactions, newest first."""
    db = ctx.obj["db"]
    service = TransactionService(db)

    start = parse_or_exit(ctx, parse_date, start_date, "start date") if start_date else None
    end = parse_or_exit(ctx, parse_date, end_date, "end date") if end_date else None

    transactions = service.list_transactions(
        ctx.obj["user_id"], start_date=start, end_date=end, category=category
    )
    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo(f"{'ID':<6} {'Date':<12} {'Amount':>14} {'Category':<24} Description")
    click.echo("-" * 80)
    for txn in transactions:
        marker = " (recurring)" if txn.is_recurring else ""
        click.echo(
            f"{txn.id:<6} {txn.date.isoformat():<12} {format_currency(txn.amount):>14} "
            f"{txn.category[:24]:<24} {txn.description}{marker}"
        )
    click.echo(f"\nTotal: {len(transactions)} transaction(s)")


@transaction_group.command("update")
@click.argument("transaction_id", type=int)
@click.option("--date", "txn_date", help="New date")
@click.option("--amount", help="New amount")
@click.option("--description", help="New description")
@click.option("--category", help="New category")
@click.pass_context
def update_transaction(
    ctx,
    transaction_id: int,
    txn_date: str | None,
    amount: str | None,
    description: str | None,
    category: str | None,
):
    """Update a transaction. Only the fields provided are changed."""
    db = ctx.obj["db"]
    service = TransactionService(db)

    parsed_date = parse_or_exit(ctx, parse_date, txn_date, "date") if txn_date else None
    parsed_amount = parse_or_exit(ctx, parse_amount, amount, "amount") if amount else None

    try:
        service.update_transaction(
            ctx.obj["user_id"],
            transaction_id,
            date=parsed_date,
            amount=parsed_amount,
            description=description,
            category=category,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Updated transaction {transaction_id}")


@transaction_group.command("recategorize")
@click.argument("transaction_id", type=int)
@click.argument("category")
@click.pass_context
def recategorize_transaction(ctx, transaction_id: int, category: str):
    """Move a transaction to another category.

    Examples:
        budgetbuddy transaction recategorize 12 "Goal: Vacation"
    """
    db = ctx.obj["db"]
    service = TransactionService(db)

    try:
        txn = service.update_category(ctx.obj["user_id"], transaction_id, category)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Transaction {txn.id} moved to {txn.category}")


@transaction_group.command("delete")
@click.argument("transaction_id", type=int)
@click.option("--yes", is_flag=True, help="Skip confirmation")
@click.pass_context
def delete_transaction(ctx, transaction_id: int, yes: bool):
    """Delete a transaction."""
    db = ctx.obj["db"]
    service = TransactionService(db)

    if not yes and not click.confirm(f"Delete transaction {transaction_id}?"):
        click.echo("Cancelled.")
        return

    try:
        service.delete_transaction(ctx.obj["user_id"], transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Deleted transaction {transaction_id}")


def register_commands(cli: click.Group) -> None:
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
