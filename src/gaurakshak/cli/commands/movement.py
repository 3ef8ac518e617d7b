"""Animal movement commands."""

import click
from gaurakshak.cli.account_resolution import resolve_animal_or_exit
from gaurakshak.cli.error_handling import handle_domain_error
from gaurakshak.cli.output import echo_table
from gaurakshak.cli.value_parsing import parse_date_or_exit
from gaurakshak.domain.entities import MovementType
from gaurakshak.domain.errors import DomainError
from gaurakshak.domain.movement import STATUS_IN, MovementService
from gaurakshak.reporting.export import movement_history_table, write_csv

MOVEMENT_TYPES = [t.value for t in MovementType]


@click.group()
def movement_group():
    """Record animals entering and leaving the gaushala."""
    pass


@movement_group.command("add")
@click.argument("animal", metavar="ANIMAL")
@click.argument("movement_type", metavar="TYPE", type=click.Choice(MOVEMENT_TYPES, case_sensitive=False))
@click.option("--reason", required=True, help="Reason (e.g. Rescued, Purchased, Sold, Died)")
@click.option("--date", "movement_date", default="today", show_default=True, help="Movement date")
@click.pass_context
def add_movement(ctx, animal: str, movement_type: str, reason: str, movement_date: str):
    """Record an Entry or Exit for an animal.

    ANIMAL can be a tag number or ID. An Entry is only accepted for an
    animal that is currently out, and an Exit for one that is in.

    Examples:
        gaurakshak movement add IN-1001 Entry --reason Rescued --date 2024-01-01
        gaurakshak movement add IN-1001 Exit --reason Donated
    """
    db = ctx.obj["db"]
    service = MovementService(db)
    animal_id = resolve_animal_or_exit(ctx, db, animal)
    day = parse_date_or_exit(ctx, movement_date)

    try:
        movement_id = service.record_movement(animal_id, movement_type, day, reason)
        click.echo(f"Recorded {movement_type} of animal {animal} on {day} (ID: {movement_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@movement_group.command("list")
@click.option("--type", "movement_type", type=click.Choice(MOVEMENT_TYPES, case_sensitive=False))
@click.option("--tag", "tag_search", help="Only animals whose tag number contains this text")
@click.option("--csv", "csv_path", type=click.Path(dir_okay=False), help="Also write the history to a CSV file")
@click.pass_context
def list_movements(ctx, movement_type: str | None, tag_search: str | None, csv_path: str | None):
    """Show movement history, newest first."""
    service = MovementService(ctx.obj["db"])

    entries = service.list_movements(movement_type=movement_type, tag_search=tag_search)
    if not entries:
        click.echo("No movements found.")
        return

    headers, rows = movement_history_table(entries)
    echo_table(headers, rows)
    if csv_path:
        write_csv(csv_path, headers, rows)
        click.echo(f"Wrote {csv_path}")


@movement_group.command("update")
@click.argument("movement_id", type=int)
@click.option("--animal", help="Animal tag number or ID")
@click.option("--type", "movement_type", type=click.Choice(MOVEMENT_TYPES, case_sensitive=False))
@click.option("--date", "movement_date", help="Movement date")
@click.option("--reason", help="Reason")
@click.pass_context
def update_movement(
    ctx,
    movement_id: int,
    animal: str | None,
    movement_type: str | None,
    movement_date: str | None,
    reason: str | None,
):
    """Correct a recorded movement."""
    db = ctx.obj["db"]
    service = MovementService(db)
    animal_id = resolve_animal_or_exit(ctx, db, animal) if animal is not None else None
    day = parse_date_or_exit(ctx, movement_date) if movement_date else None

    try:
        service.update_movement(
            movement_id,
            animal_id=animal_id,
            movement_type=movement_type,
            movement_date=day,
            reason=reason,
        )
        click.echo(f"Updated movement {movement_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@movement_group.command("delete")
@click.argument("movement_id", type=int)
@click.pass_context
def delete_movement(ctx, movement_id: int):
    """Delete a movement."""
    service = MovementService(ctx.obj["db"])

    try:
        service.delete_movement(movement_id)
        click.echo(f"Deleted movement {movement_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@movement_group.command("status")
@click.argument("animal", metavar="ANIMAL", required=False)
@click.pass_context
def movement_status(ctx, animal: str | None):
    """Show whether animals are currently in or out.

    With ANIMAL, show just that animal.
    """
    db = ctx.obj["db"]
    service = MovementService(db)
    statuses = service.current_status()

    if animal is not None:
        animal_id = resolve_animal_or_exit(ctx, db, animal)
        click.echo(f"{animal}: {statuses[animal_id]}")
        return

    if not statuses:
        click.echo("No animals found.")
        return

    present = sum(1 for status in statuses.values() if status == STATUS_IN)
    for animal_obj in db.list_animals():
        click.echo(f"{animal_obj.govt_tag_no:15s} {statuses[animal_obj.id]}")
    click.echo(f"\n{present} of {len(statuses)} animals currently in the gaushala")


def register_commands(cli):
    """Register movement commands with main CLI."""
    cli.add_command(movement_group, name="movement")
