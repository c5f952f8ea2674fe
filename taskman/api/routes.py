import logging
import re

from flask import Blueprint, current_app, jsonify, request

from taskman.repository import DataAccessError

logger = logging.getLogger(__name__)

api = Blueprint('api', __name__)

TASK_FIELDS = (('title', str, ''), ('description', str, ''), ('status', int, 0))

# ids and status are stored as signed 64-bit integers
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

# json.loads joins valid surrogate pairs, so anything left here is unpaired
_LONE_SURROGATE = re.compile('[\ud800-\udfff]')


class InvalidTaskBody(ValueError):
    pass


def _service():
    return current_app.extensions['task_service']


def _clean_text(value):
    return _LONE_SURROGATE.sub('\ufffd', value)


def _decode_task_body():
    payload = request.get_json(force=True, silent=True)
    if not isinstance(payload, dict):
        raise InvalidTaskBody('body must be a JSON object')

    fields = {}
    for name, kind, default in TASK_FIELDS:
        value = payload.get(name)
        if value is None:
            fields[name] = default
        elif isinstance(value, bool) or not isinstance(value, kind):
            raise InvalidTaskBody(f'{name} must be of type {kind.__name__}')
        elif kind is str:
            fields[name] = _clean_text(value)
        elif not INT64_MIN <= value <= INT64_MAX:
            raise InvalidTaskBody(f'{name} is out of range')
        else:
            fields[name] = value
    return fields


def _parse_task_id(raw_id):
    # unusable ids fall through as 0, which never matches a stored row
    try:
        task_id = int(raw_id)
    except ValueError:
        logger.warning('Non-numeric task id %r, using 0', raw_id)
        return 0
    if not INT64_MIN <= task_id <= INT64_MAX:
        logger.warning('Task id %r out of range, using 0', raw_id)
        return 0
    return task_id


def _error(message, status):
    return jsonify({'error': message}), status


@api.route('/tasks', methods=['POST'])
def create_task():
    """Create a new task
    ---
    tags:
      - tasks
    consumes:
      - application/json
    parameters:
      - in: body
        name: task
        required: true
        schema:
          $ref: '#/definitions/TaskInput'
    responses:
      201:
        description: The created task
        schema:
          $ref: '#/definitions/Task'
      400:
        description: Invalid request
      500:
        description: Failed to create task
    """
    try:
        fields = _decode_task_body()
    except InvalidTaskBody as exc:
        logger.error('Invalid request body: %s', exc)
        return _error('Invalid request', 400)

    try:
        task = _service().create_task(fields['title'], fields['description'], fields['status'])
    except DataAccessError:
        logger.exception('Failed to create task')
        return _error('Failed to create task', 500)

    logger.info('Task created: %s', task.id)
    return jsonify(task.to_dict()), 201


@api.route('/tasks', methods=['GET'])
def get_all_tasks():
    """Get all tasks
    ---
    tags:
      - tasks
    responses:
      200:
        description: All stored tasks
        schema:
          type: array
          items:
            $ref: '#/definitions/Task'
      500:
        description: Internal server error
    """
    try:
        tasks = _service().get_all_tasks()
    except DataAccessError:
        logger.exception('Failed to retrieve tasks')
        return _error('Internal server error', 500)

    logger.info('Retrieved all tasks (%d)', len(tasks))
    return jsonify([task.to_dict() for task in tasks])


@api.route('/tasks/<task_id>', methods=['GET'])
def get_task(task_id):
    """Get a task by ID
    ---
    tags:
      - tasks
    parameters:
      - in: path
        name: task_id
        type: integer
        required: true
    responses:
      200:
        description: The task
        schema:
          $ref: '#/definitions/Task'
      404:
        description: Task not found
      500:
        description: Internal server error
    """
    task_id = _parse_task_id(task_id)
    try:
        task = _service().get_task_by_id(task_id)
    except DataAccessError:
        logger.exception('Failed to retrieve task %s', task_id)
        return _error('Internal server error', 500)

    if task is None:
        logger.warning('Task not found: %s', task_id)
        return _error('Task not found', 404)

    logger.info('Retrieved task: %s', task_id)
    return jsonify(task.to_dict())


@api.route('/tasks/<task_id>', methods=['PUT'])
def update_task(task_id):
    """Update a task
    ---
    tags:
      - tasks
    consumes:
      - application/json
    parameters:
      - in: path
        name: task_id
        type: integer
        required: true
      - in: body
        name: task
        required: true
        schema:
          $ref: '#/definitions/TaskInput'
    responses:
      200:
        description: Task updated
        schema:
          type: string
          example: Task updated
      400:
        description: Invalid request
      500:
        description: Internal server error
    """
    task_id = _parse_task_id(task_id)
    try:
        fields = _decode_task_body()
    except InvalidTaskBody as exc:
        logger.error('Invalid request body: %s', exc)
        return _error('Invalid request', 400)

    try:
        updated = _service().update_task(
            task_id, fields['title'], fields['description'], fields['status']
        )
    except DataAccessError:
        logger.exception('Failed to update task %s', task_id)
        return _error('Internal server error', 500)

    if not updated:
        logger.warning('Update matched no task: %s', task_id)
    else:
        logger.info('Task updated: %s', task_id)
    return jsonify('Task updated')


@api.route('/tasks/<task_id>', methods=['DELETE'])
def delete_task(task_id):
    """Delete a task
    ---
    tags:
      - tasks
    parameters:
      - in: path
        name: task_id
        type: integer
        required: true
    responses:
      200:
        description: Task deleted
        schema:
          type: string
          example: Task deleted
      500:
        description: Internal server error
    """
    task_id = _parse_task_id(task_id)
    try:
        deleted = _service().delete_task(task_id)
    except DataAccessError:
        logger.exception('Failed to delete task %s', task_id)
        return _error('Internal server error', 500)

    if not deleted:
        logger.warning('Delete matched no task: %s', task_id)
    else:
        logger.info('Task deleted: %s', task_id)
    return jsonify('Task deleted')
