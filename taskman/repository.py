import logging
from contextlib import contextmanager

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError

from taskman.models import Task, TaskStatus

logger = logging.getLogger(__name__)


class DataAccessError(Exception):
    """Raised when the task store cannot complete a statement."""


class TaskRepository:
    """
    Statements against the ``tasks`` table.

    Every method issues a single statement through the Flask-SQLAlchemy
    session bound to the current application context and commits it.
    """

    def __init__(self, db):
        self._db = db

    @property
    def session(self):
        return self._db.session

    @contextmanager
    def _guard(self, action):
        try:
            yield
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.debug('Statement failed during %s: %s', action, exc)
            raise DataAccessError(f'failed to {action}') from exc

    def create(self, task):
        with self._guard('create task'):
            self.session.add(task)
            self.session.commit()
        return task

    def get_all(self):
        with self._guard('list tasks'):
            return list(self.session.execute(select(Task)).scalars())

    def get_by_id(self, task_id):
        with self._guard('get task'):
            return self.session.execute(
                select(Task).where(Task.id == task_id)
            ).scalar_one_or_none()

    def update(self, task):
        with self._guard('update task'):
            result = self.session.execute(
                update(Task)
                .where(Task.id == task.id)
                .values(
                    title=task.title,
                    description=task.description,
                    status=task.status,
                )
            )
            self.session.commit()
        return result.rowcount

    def delete(self, task_id):
        with self._guard('delete task'):
            result = self.session.execute(delete(Task).where(Task.id == task_id))
            self.session.commit()
        return result.rowcount

    def get_completed(self):
        with self._guard('list completed tasks'):
            stmt = select(Task).where(Task.status == TaskStatus.COMPLETED.value)
            return list(self.session.execute(stmt).scalars())
