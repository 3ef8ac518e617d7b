"""Animal registry commands."""

import csv

import click
from gaurakshak.cli.account_resolution import resolve_animal_or_exit
from gaurakshak.cli.error_handling import handle_domain_error
from gaurakshak.cli.output import echo_table
from gaurakshak.cli.value_parsing import parse_date_or_exit
from gaurakshak.domain.animal import AGE_BUCKETS, AnimalService
from gaurakshak.domain.entities import Gender, HealthStatus
from gaurakshak.domain.errors import DomainError
from gaurakshak.domain.movement import MovementService
from gaurakshak.reporting.export import animal_registry_table, write_csv

GENDERS = [g.value for g in Gender]
HEALTH_STATUSES = [h.value for h in HealthStatus]


@click.group()
def animal_group():
    """Manage the animal registry."""
    pass


@animal_group.command("register")
@click.option("--type", "animal_type", required=True, help="Animal type (e.g. Cow, Bull, Calf)")
@click.option("--tag", "govt_tag_no", required=True, help="Government tag number")
@click.option("--breed", required=True, help="Breed")
@click.option("--gender", type=click.Choice(GENDERS, case_sensitive=False), required=True)
@click.option("--year-of-birth", type=int, required=True, help="Year of birth")
@click.option("--color", default="", help="Color")
@click.option("--health", "health_status", type=click.Choice(HEALTH_STATUSES, case_sensitive=False),
              default=HealthStatus.HEALTHY.value, show_default=True)
@click.option("--tag-color", default="", help="Tag color")
@click.option("--mark", "identification_mark", help="Identification mark")
@click.option("--image", "image_url", help="Image path or URL")
@click.pass_context
def register_animal(ctx, **fields):
    """Register a new animal.

    Examples:
        gaurakshak animal register --type Cow --tag IN-1001 --breed Gir --gender Female --year-of-birth 2019
    """
    service = AnimalService(ctx.obj["db"])

    try:
        animal_id = service.register_animal(**fields)
        click.echo(f"Registered animal '{fields['govt_tag_no']}' (ID: {animal_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@animal_group.command("list")
@click.option("--type", "animal_type", help="Animal type")
@click.option("--breed", help="Breed")
@click.option("--color", help="Color")
@click.option("--health", "health_status", type=click.Choice(HEALTH_STATUSES, case_sensitive=False))
@click.option("--age", "age_bucket", type=click.Choice(list(AGE_BUCKETS)), help="Age bucket in years")
@click.option("--search", help="Match any field containing this text")
@click.option("--csv", "csv_path", type=click.Path(dir_okay=False), help="Also write the list to a CSV file")
@click.pass_context
def list_animals(ctx, csv_path: str | None, **filters):
    """List registered animals with their current in/out status."""
    db = ctx.obj["db"]
    service = AnimalService(db)

    try:
        animals = service.list_animals(**filters)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not animals:
        click.echo("No animals found.")
        return

    statuses = MovementService(db).current_status()
    headers, rows = animal_registry_table(animals, statuses)
    echo_table(headers, rows)
    click.echo(f"\nShowing {len(animals)} of {len(service.list_animals())} animals")
    if csv_path:
        write_csv(csv_path, headers, rows)
        click.echo(f"Wrote {csv_path}")


@animal_group.command("update")
@click.argument("animal", metavar="ANIMAL")
@click.option("--type", "animal_type", help="Animal type")
@click.option("--tag", "govt_tag_no", help="Government tag number")
@click.option("--breed", help="Breed")
@click.option("--gender", type=click.Choice(GENDERS, case_sensitive=False))
@click.option("--year-of-birth", type=int)
@click.option("--color", help="Color")
@click.option("--health", "health_status", type=click.Choice(HEALTH_STATUSES, case_sensitive=False))
@click.option("--tag-color", help="Tag color")
@click.option("--mark", "identification_mark", help="Identification mark")
@click.option("--image", "image_url", help="Image path or URL")
@click.pass_context
def update_animal(ctx, animal: str, **fields):
    """Update an animal's details.

    ANIMAL can be a tag number or ID. Only the given fields change.
    """
    db = ctx.obj["db"]
    service = AnimalService(db)
    animal_id = resolve_animal_or_exit(ctx, db, animal)

    changes = {key: value for key, value in fields.items() if value is not None}
    if not changes:
        click.echo("Nothing to update.")
        return

    try:
        service.update_animal(animal_id, **changes)
        click.echo(f"Updated animal {animal_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@animal_group.command("delete")
@click.argument("animal", metavar="ANIMAL")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_animal(ctx, animal: str, yes: bool):
    """Delete an animal that has no movements or milk records."""
    db = ctx.obj["db"]
    service = AnimalService(db)
    animal_id = resolve_animal_or_exit(ctx, db, animal)
    animal_obj = service.get_animal(animal_id)

    if not yes and not click.confirm(f"Delete animal '{animal_obj.govt_tag_no}' (ID: {animal_id})?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_animal(animal_id)
        click.echo(f"Animal {animal_obj.govt_tag_no} has been deleted.")
    except DomainError as e:
        handle_domain_error(ctx, e)


@animal_group.command("import")
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def import_animals(ctx, csv_file: str):
    """Import animals from a CSV file.

    The file needs the columns TYPE, TAG NO, BREED, COLOR, GENDER,
    YEAR OF BIRTH, HEALTH STATUS, TAG COLOR and IDENTIFICATION MARK.
    Nothing is imported if any tag number is duplicated.
    """
    service = AnimalService(ctx.obj["db"])

    with open(csv_file, newline="", encoding="utf-8-sig") as f:
        rows = list(csv.DictReader(f))

    try:
        ids = service.import_animals(rows)
        click.echo(f"{len(ids)} animal records have been imported.")
    except DomainError as e:
        handle_domain_error(ctx, e)


@animal_group.command("exit")
@click.argument("animal", metavar="ANIMAL")
@click.option("--reason", required=True, help="Reason for exit (e.g. Sold, Died, Donated)")
@click.option("--date", "exit_date", help="Exit date (defaults to today)")
@click.pass_context
def mark_exit(ctx, animal: str, reason: str, exit_date: str | None):
    """Mark an animal as having left the gaushala."""
    db = ctx.obj["db"]
    service = AnimalService(db)
    animal_id = resolve_animal_or_exit(ctx, db, animal)
    day = parse_date_or_exit(ctx, exit_date) if exit_date else None

    try:
        service.mark_exit(animal_id, reason=reason, exit_date=day)
        click.echo(f"Animal {service.get_animal(animal_id).govt_tag_no} has been marked as exited.")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register animal commands with main CLI."""
    cli.add_command(animal_group, name="animal")
