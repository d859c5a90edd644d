import click
from flask import current_app
from flask.cli import AppGroup

from .errors import VersionParameterError
from .jira_service import ProjectContext
from .parameters import get_definition_by_name

versions_cli = AppGroup('versions', help="Inspect and set Jira release version parameters.")


def _definition(name):
    try:
        return get_definition_by_name(current_app.config['PARAMETERS'], name)
    except KeyError as e:
        raise click.ClickException(e.args[0]) from e


@versions_cli.command('list')
@click.argument('name')
@click.option('--project', default='default', help="Pipeline project the versions are listed for.")
def list_command(name, project):
    """Print the versions offered for parameter NAME."""
    definition = _definition(name)
    context = ProjectContext(name=project, jira_site=current_app.config.get('JIRA_SITE'))
    try:
        results = definition.candidate_list(context)
    except VersionParameterError as e:
        raise click.ClickException(str(e)) from e
    for result in results:
        click.echo(result.display_name)


@versions_cli.command('select')
@click.argument('name')
@click.argument('value')
def select_command(name, value):
    """Set parameter NAME to VALUE as given on the command line."""
    parameter_value = _definition(name).value_from_command_line(value)
    for key, val in parameter_value.build_variables().items():
        click.echo(f"{key}={val}")
