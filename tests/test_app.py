import pytest
from sqlalchemy.exc import OperationalError

from task_app import create_app


def test_unreachable_store_aborts_startup(tmp_path):
    with pytest.raises(OperationalError):
        create_app(
            {
                'TESTING': True,
                'SQLALCHEMY_DATABASE_URI': f"sqlite:///{tmp_path / 'missing' / 'tasks.db'}",
                'LOG_FILE': str(tmp_path / 'logs.txt'),
                'LOG_CONSOLE': False,
            }
        )


def test_app_wires_service_and_sweeper(app):
    assert 'task_service' in app.extensions
    assert not app.extensions['task_sweeper'].running
