import atexit
import logging
from pathlib import Path

import click
from flasgger import Swagger
from flask import Flask

from taskman.api.routes import api
from taskman.config import SWAGGER_CONFIG, Config
from taskman.logging_setup import configure_logging
from taskman.models import db
from taskman.repository import TaskRepository
from taskman.service import TaskService
from taskman.sweeper import Sweeper

logger = logging.getLogger(__name__)

SWAGGER_TEMPLATE = {
    'definitions': {
        'TaskInput': {
            'type': 'object',
            'properties': {
                'title': {'type': 'string', 'example': 'Test Task'},
                'description': {'type': 'string', 'example': 'Test description'},
                'status': {'type': 'integer', 'enum': [0, 1, 2], 'example': 0},
            },
        },
        'Task': {
            'type': 'object',
            'properties': {
                'id': {'type': 'integer', 'example': 1},
                'title': {'type': 'string', 'example': 'Test Task'},
                'description': {'type': 'string', 'example': 'Test description'},
                'status': {'type': 'integer', 'enum': [0, 1, 2], 'example': 0},
                'created_at': {
                    'type': 'string',
                    'format': 'date-time',
                    'example': '2025-06-22T13:12:30.374820+00:00',
                },
            },
        },
    },
}


def create_app(test_config=None):
    app = Flask(__name__)

    db_path = Path(app.root_path) / "tasks.db"

    app.config.from_object(Config)
    app.config["SQLALCHEMY_DATABASE_URI"] = f"sqlite:///{db_path}"
    app.config.from_prefixed_env()
    if test_config is not None:
        app.config.from_mapping(test_config)

    configure_logging(
        app.config['LOG_FILE'],
        level=app.config['LOG_LEVEL'],
        console=app.config['LOG_CONSOLE'],
    )

    # pretty-printed bodies, fields in declaration order
    app.json.compact = False
    app.json.sort_keys = False

    app.register_blueprint(api)
    Swagger(app, config=SWAGGER_CONFIG, template=SWAGGER_TEMPLATE)

    db.init_app(app)

    with app.app_context():
        db.create_all()
        logger.info('Database ready: %s', db.engine.url)

    repository = TaskRepository(db)
    service = TaskService(repository)
    app.extensions['task_service'] = service
    app.extensions['task_sweeper'] = Sweeper(
        service,
        app=app,
        interval_seconds=app.config['SWEEP_INTERVAL_SECONDS'],
    )

    @app.cli.command('sweep')
    def sweep_command():
        """Delete completed tasks once and exit."""
        deleted = app.extensions['task_sweeper'].sweep()
        click.echo(f'Deleted {deleted} completed task(s)')

    return app


if __name__ == '__main__':
    app = create_app()
    sweeper = app.extensions['task_sweeper']
    sweeper.start()
    atexit.register(sweeper.stop)
    logger.info('Server starting on :8080')
    app.run(port=8080, threaded=True)
