# commands.py

import click
from flask import current_app
from flask.cli import AppGroup
from extensions import db
from apartment_database import ApartmentRecord
from services.apartment_service import ApartmentService
from services.common.result import Result


apartments_cli = AppGroup('apartments', help='Manage apartment owners and residents.')


def _apartment_service() -> ApartmentService:
    return current_app.services.get('apartment')


def _fail(result: Result) -> None:
    """Report a failed result to the operator and exit non-zero."""
    click.echo(f'Error: {result.error}', err=True)
    raise click.exceptions.Exit(1)


def _describe(record: ApartmentRecord) -> str:
    owner_is_resident = 'Yes' if record.same_flag else 'No'
    return f'{record.label()} | Owner is Resident: {owner_is_resident}'


@apartments_cli.command('init-db')
def init_db_command():
    """Create the apartments table if it does not exist"""
    db.create_all()
    click.echo('Database initialized')


@apartments_cli.command('save')
@click.argument('apartment_id')
@click.option('--owner', default='', help='Owner name')
@click.option('--resident', default='', help='Resident name (empty means Vacant)')
def save_command(apartment_id, owner, resident):
    """Add an apartment or update an existing one"""
    result = _apartment_service().save_apartment(
        ApartmentRecord(id=apartment_id, owner=owner, resident=resident)
    )
    if result.is_failure:
        _fail(result)
    click.echo(f'Saved {_describe(result.data)}')


@apartments_cli.command('delete')
@click.argument('apartment_id')
@click.option('--yes', is_flag=True, help='Do not ask for confirmation')
def delete_command(apartment_id, yes):
    """Delete an apartment"""
    if not yes and not click.confirm(f'Are you sure you want to delete Apartment {apartment_id}?'):
        click.echo('Aborted')
        return

    result = _apartment_service().delete_apartment(apartment_id)
    if result.is_failure:
        _fail(result)
    if result.data:
        click.echo(f'Deleted apartment {apartment_id}')
    else:
        click.echo(f'Apartment {apartment_id} does not exist, nothing deleted')


@apartments_cli.command('show')
@click.argument('apartment_id')
def show_command(apartment_id):
    """Show one apartment by ID"""
    result = _apartment_service().get_apartment(apartment_id)
    if result.is_failure:
        _fail(result)
    click.echo(_describe(result.data))


@apartments_cli.command('at')
@click.argument('index', type=int)
def at_command(index):
    """Show the apartment at a zero-based position in the list"""
    result = _apartment_service().get_apartment_at(index)
    if result.is_failure:
        _fail(result)
    click.echo(_describe(result.data))


@apartments_cli.command('list')
@click.option('--page', default=1, show_default=True, type=int)
@click.option('--per-page', default=20, show_default=True, type=int)
@click.option('--search', default=None, help='Only apartments whose ID, owner or resident match')
def list_command(page, per_page, search):
    """List apartments in ID order"""
    service = _apartment_service()
    if search:
        result = service.search_apartments(search)
        if result.is_failure:
            _fail(result)
        for record in result.data:
            click.echo(record.label())
        click.echo(f'{len(result.data)} matching apartments')
        return

    result = service.list_apartments(page=page, per_page=per_page)
    if result.is_failure:
        _fail(result)
    for record in result.data:
        click.echo(record.label())
    click.echo(f'Page {result.page} of {max(result.total_pages, 1)} ({result.total} apartments)')


@apartments_cli.command('count')
def count_command():
    """Print the number of stored apartments"""
    result = _apartment_service().count_apartments()
    if result.is_failure:
        _fail(result)
    click.echo(result.data)


@apartments_cli.command('import')
@click.argument('path', type=click.Path(dir_okay=False))
def import_command(path):
    """Import apartments from a .csv or .xlsx file"""
    result = _apartment_service().import_apartments(path)
    if result.is_failure:
        _fail(result)
    summary = result.data
    click.echo('Data has been imported successfully')
    click.echo(f'Imported {summary.imported} rows, skipped {summary.skipped} malformed rows')


@apartments_cli.command('export')
@click.argument('path', type=click.Path(dir_okay=False))
def export_command(path):
    """Export all apartments to a .csv or .xlsx file"""
    result = _apartment_service().export_apartments(path)
    if result.is_failure:
        _fail(result)
    click.echo('Data has been exported successfully')
    click.echo(f'Exported {result.data.exported} apartments to {path}')


def init_app(app):
    """Register commands with the Flask app"""
    app.cli.add_command(apartments_cli)
