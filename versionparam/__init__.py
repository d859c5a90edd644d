import os
from flask import Flask
from dotenv import load_dotenv

from .config import PARAMETER_DEFINITIONS


def create_app(test_config=None):
    load_dotenv()

    app = Flask(__name__)

    from .jira_service import JiraSite
    definitions = PARAMETER_DEFINITIONS
    project_key = os.getenv("JIRA_PROJECT_KEY")
    if project_key:
        definitions = [dict(d, jiraProjectKey=project_key) for d in definitions]
    app.config['PARAMETER_DEFINITIONS'] = definitions
    app.config['JIRA_SITE'] = JiraSite.from_env()
    if test_config is not None:
        app.config.update(test_config)

    if not app.debug and not app.testing:
        import logging
        from logging import FileHandler
        file_handler = FileHandler('error.log')
        file_handler.setLevel(logging.WARNING)
        app.logger.addHandler(file_handler)

    from .parameters import load_definitions
    app.config['PARAMETERS'] = load_definitions(app.config['PARAMETER_DEFINITIONS'])

    with app.app_context():
        from . import routes
        from .cli import versions_cli
        app.register_blueprint(routes.bp)
        app.cli.add_command(versions_cli)

    return app
