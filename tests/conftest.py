import pytest

from task_app import create_app
from taskman.models import db
from taskman.repository import DataAccessError, TaskRepository
from taskman.service import TaskService


@pytest.fixture()
def app(tmp_path):
    """
    Application on a throwaway sqlite file and log file.

    The sweeper is built but never started; tests drive passes directly.
    """
    app = create_app(
        {
            'TESTING': True,
            'SQLALCHEMY_DATABASE_URI': f"sqlite:///{tmp_path / 'tasks.db'}",
            'LOG_FILE': str(tmp_path / 'logs.txt'),
            'LOG_CONSOLE': False,
        }
    )
    yield app
    with app.app_context():
        db.session.remove()
        db.engine.dispose()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def ctx(app):
    with app.app_context():
        yield


@pytest.fixture()
def repository(ctx):
    return TaskRepository(db)


@pytest.fixture()
def service(repository):
    return TaskService(repository)


class FailingService:
    """Service stand-in whose every call fails like an unreachable store."""

    def __getattr__(self, name):
        def fail(*args, **kwargs):
            raise DataAccessError(f'{name} failed')

        return fail


@pytest.fixture()
def failing_service(app):
    fake = FailingService()
    app.extensions['task_service'] = fake
    return fake
