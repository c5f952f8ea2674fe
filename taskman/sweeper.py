import logging
import threading

from taskman.config import SWEEP_INTERVAL_SECONDS
from taskman.repository import DataAccessError


class Sweeper:
    """
    Background purge of completed tasks.

    Every ``interval_seconds`` the worker thread fetches the completed tasks
    once, prints each one and deletes it. A failed delete is logged and the
    rest of the batch is still processed. Passes run one after another on the
    same thread, so a slow pass delays the next tick instead of overlapping it.
    """

    def __init__(self, service, app=None, interval_seconds=SWEEP_INTERVAL_SECONDS, logger=None):
        self._service = service
        self._app = app
        self._interval = float(interval_seconds)
        self._logger = logger or logging.getLogger(__name__)
        self._stop = threading.Event()
        self._thread = None

    @property
    def running(self):
        return self._thread is not None and self._thread.is_alive()

    def start(self):
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name='task-sweeper', daemon=True)
        self._thread.start()
        self._logger.info('Sweeper started, interval %.0fs', self._interval)

    def stop(self, timeout=10.0):
        if self._thread is None:
            return
        self._stop.set()
        self._thread.join(timeout=timeout)
        self._thread = None
        self._logger.info('Sweeper stopped')

    def _run(self):
        while not self._stop.wait(self._interval):
            try:
                self._tick()
            except Exception:
                self._logger.exception('Sweep pass failed')

    def _tick(self):
        if self._app is None:
            self.sweep()
            return
        with self._app.app_context():
            self.sweep()

    def sweep(self):
        """Run a single pass and return the number of tasks deleted."""
        try:
            tasks = self._service.get_completed_tasks()
        except DataAccessError:
            self._logger.exception('Failed to retrieve completed tasks')
            return 0

        if not tasks:
            self._logger.info('No completed tasks found')
            return 0

        print('Completed tasks found:')
        deleted = 0
        for task in tasks:
            print(
                f'ID: {task.id}, Title: {task.title}, Description: {task.description}, '
                f'Status: {task.status}, Created At: {task.created_at}'
            )
            try:
                self._service.delete_task(task.id)
            except DataAccessError:
                self._logger.exception('Failed to delete task %s', task.id)
                continue
            deleted += 1
            self._logger.info('Deleted completed task %s', task.id)
        return deleted
