from datetime import datetime, timezone

from taskman.models import Task


def utcnow():
    return datetime.now(timezone.utc)


class TaskService:
    """Task operations used by the HTTP handlers and the sweeper."""

    def __init__(self, repository, clock=utcnow):
        self._repository = repository
        self._clock = clock

    def create_task(self, title, description, status):
        task = Task(
            title=title,
            description=description,
            status=status,
            created_at=self._clock(),
        )
        return self._repository.create(task)

    def get_all_tasks(self):
        return self._repository.get_all()

    def get_task_by_id(self, task_id):
        return self._repository.get_by_id(task_id)

    def update_task(self, task_id, title, description, status):
        task = Task(id=task_id, title=title, description=description, status=status)
        return self._repository.update(task)

    def delete_task(self, task_id):
        return self._repository.delete(task_id)

    def get_completed_tasks(self):
        return self._repository.get_completed()
