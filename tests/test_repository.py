from datetime import datetime, timezone

import pytest

from taskman.models import Task, TaskStatus, db
from taskman.repository import DataAccessError


def _task(title='Write report', status=TaskStatus.NEW):
    return Task(
        title=title,
        description='quarterly numbers',
        status=int(status),
        created_at=datetime.now(timezone.utc),
    )


def test_create_writes_generated_id_back(repository):
    first = repository.create(_task('a'))
    second = repository.create(_task('b'))

    assert first.id > 0
    assert second.id > 0
    assert first.id != second.id


def test_get_all_empty_table_returns_empty_list(repository):
    assert repository.get_all() == []


def test_get_by_id_missing_is_none(repository):
    assert repository.get_by_id(999999) is None


def test_update_applies_fields_by_id(repository):
    task = repository.create(_task())

    changed = Task(id=task.id, title='Renamed', description='', status=int(TaskStatus.IN_PROGRESS))
    assert repository.update(changed) == 1

    stored = repository.get_by_id(task.id)
    assert stored.title == 'Renamed'
    assert stored.description == ''
    assert stored.status == TaskStatus.IN_PROGRESS


def test_update_and_delete_of_missing_row_report_zero(repository):
    missing = Task(id=4242, title='x', description='y', status=0)

    assert repository.update(missing) == 0
    assert repository.delete(4242) == 0


def test_get_completed_filters_on_status_two(repository):
    repository.create(_task('new', TaskStatus.NEW))
    repository.create(_task('busy', TaskStatus.IN_PROGRESS))
    done = repository.create(_task('done', TaskStatus.COMPLETED))

    assert [t.id for t in repository.get_completed()] == [done.id]


def test_unknown_status_values_are_stored_as_given(repository):
    task = repository.create(_task(status=7))

    assert repository.get_by_id(task.id).status == 7
    assert repository.get_completed() == []


def test_store_failures_surface_as_data_access_error(repository):
    db.drop_all()

    with pytest.raises(DataAccessError):
        repository.get_all()
    with pytest.raises(DataAccessError):
        repository.create(_task())

    # the session is usable again after the rollback
    db.create_all()
    assert repository.get_all() == []
