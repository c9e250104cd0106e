"""
Custom Flask CLI commands.

These commands are registered with the app via ``register_commands()``
in the application factory. Run them with ``flask <command_name>``.

Usage::

    flask api-check                                   # Verify the roster API answers
    flask export-roster --entity employees --format xlsx --output staff.xlsx
"""

import click
from flask import current_app
from flask.cli import with_appcontext

from roster.services import department_service, employee_service, export_service
from roster.services.api_client import ApiError
from roster.services.department_service import DepartmentDirectory


@click.command("api-check")
@with_appcontext
def api_check_command():
    """
    Verify connectivity to the roster API.

    Calls both list endpoints and reports how many records each returned.
    Useful for confirming ROSTER_API_BASE_URL in your .env is correct.
    """
    click.echo("=" * 60)
    click.echo("  Roster Admin: API Connectivity Check")
    click.echo("=" * 60)

    base_url = current_app.config["ROSTER_API_BASE_URL"]
    click.echo(f"\n  Base URL: {base_url}\n")

    # -- Step 1: Departments -----------------------------------------------
    click.echo("[1/2] Fetching departments...")
    try:
        departments = department_service.get_departments()
        click.secho(f"      ✓ {len(departments)} department(s).", fg="green")
    except ApiError as exc:
        click.secho(f"      ✗ Request failed: {exc}", fg="red")
        click.echo("\n  Troubleshooting tips:")
        click.echo("    - Is the API server running?")
        click.echo("    - Does ROSTER_API_BASE_URL include the right port and prefix?")
        raise SystemExit(1) from exc

    # -- Step 2: Employees -------------------------------------------------
    click.echo("[2/2] Fetching employees...")
    try:
        employees = employee_service.get_employees()
        click.secho(f"      ✓ {len(employees)} employee(s).", fg="green")
    except ApiError as exc:
        click.secho(f"      ✗ Request failed: {exc}", fg="red")
        raise SystemExit(1) from exc

    click.echo("\n" + "=" * 60)
    click.secho("  All checks passed. API is reachable.", fg="green", bold=True)
    click.echo("=" * 60)


@click.command("export-roster")
@click.option(
    "--entity",
    type=click.Choice(["departments", "employees"]),
    default="employees",
    show_default=True,
)
@click.option(
    "--format",
    "fmt",
    type=click.Choice(sorted(export_service.FORMATS)),
    default="csv",
    show_default=True,
)
@click.option("--output", type=click.Path(dir_okay=False, writable=True), required=True)
@with_appcontext
def export_roster_command(entity, fmt, output):
    """Write departments or employees to a CSV or Excel file."""
    try:
        if entity == "departments":
            buffer = export_service.export_departments(
                department_service.get_departments(), fmt
            )
        else:
            employees = employee_service.get_employees()
            directory = DepartmentDirectory()
            directory.load()
            if directory.error:
                click.secho(
                    f"Warning: department names unavailable: {directory.error}",
                    fg="yellow",
                    err=True,
                )
            buffer = export_service.export_employees(employees, directory, fmt)
    except ApiError as exc:
        raise click.ClickException(f"Export failed: {exc}") from exc

    with open(output, "wb") as handle:
        handle.write(buffer.getvalue())
    click.echo(f"Wrote {entity} to {output}")


def register_commands(app):
    """Register all custom CLI commands with the Flask application."""
    app.cli.add_command(api_check_command)
    app.cli.add_command(export_roster_command)
