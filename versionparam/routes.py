import traceback

from flask import Blueprint, current_app, jsonify, request

from .config import DISPLAY_NAME
from .errors import ConfigurationError, ConnectivityError
from .jira_service import ProjectContext

bp = Blueprint('main', __name__)


# --- Helpers ---
def get_definitions():
    return current_app.config['PARAMETERS']


def get_project_context():
    """Builds the explicit context for this request from the query string and app config."""
    return ProjectContext(name=request.args.get('project', 'default'),
                          jira_site=current_app.config.get('JIRA_SITE'))


def _unknown_parameter(name):
    return _error(f"Parameter '{name}' not found in configuration.", 404)


def _error(message, status):
    return jsonify({'error': message}), status


@bp.errorhandler(ConfigurationError)
def handle_configuration_error(e):
    current_app.logger.error(f"Configuration error: {e}")
    return _error(str(e), 500)


@bp.errorhandler(ConnectivityError)
def handle_connectivity_error(e):
    current_app.logger.error(f"Jira connectivity error: {e}\n{traceback.format_exc()}")
    return _error(str(e), 502)


# --- Routes ---
@bp.route('/parameters')
def list_parameters():
    definitions = get_definitions()
    return jsonify({
        'displayName': DISPLAY_NAME,
        'parameters': [definition.to_dict() for definition in definitions.values()],
    })


@bp.route('/parameters/<name>/versions')
def list_versions(name):
    definitions = get_definitions()
    if name not in definitions:
        return _unknown_parameter(name)

    definition = definitions[name]
    context = get_project_context()

    results = definition.candidate_list(context)
    current_app.logger.info(f"Parameter '{name}' offers {len(results)} versions for project '{context.name}'.")
    return jsonify({
        'parameter': definition.name,
        'versions': [result.to_dict() for result in results],
    })


@bp.route('/parameters/<name>/value', methods=['POST'])
def submit_value(name):
    definitions = get_definitions()
    if name not in definitions:
        return _unknown_parameter(name)

    definition = definitions[name]

    if request.is_json:
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            return _error("Expected a JSON object with 'name' and 'value'.", 400)
        try:
            value = definition.value_from_structured_submission(payload)
        except ValueError as e:
            return _error(str(e), 400)
    else:
        value = definition.value_from_single_submission(request.form.getlist(definition.name))

    if value is None:
        return _error(f"Exactly one value is required for parameter '{name}'.", 400)

    current_app.logger.info(f"Parameter set: {value}")
    return jsonify(value.to_dict())
