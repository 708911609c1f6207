import logging
from datetime import datetime, timezone

from flask import Blueprint, jsonify, request
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from tasktracker import handlers
from tasktracker.errors import TaskTrackerError
from tasktracker.rpc.router import Router
from tasktracker.schemas import (
    CreateTaskInput,
    DeleteTaskInput,
    GetTaskByIdInput,
    ToggleTaskInput,
    UpdateTaskInput,
)
from tasktracker.timeutil import to_iso

logger = logging.getLogger(__name__)

rpc = Blueprint('rpc', __name__, url_prefix='/rpc')
router = Router()


@router.query('healthcheck')
def healthcheck():
    return {'status': 'ok', 'timestamp': to_iso(datetime.now(timezone.utc))}


@router.mutation('createTask', CreateTaskInput)
def create_task(data):
    return handlers.create_task(data).to_dict()


@router.query('getTasks')
def get_tasks():
    return [task.to_dict() for task in handlers.get_tasks()]


@router.query('getTaskById', GetTaskByIdInput)
def get_task_by_id(data):
    task = handlers.get_task_by_id(data.id)
    return task.to_dict() if task is not None else None


@router.mutation('updateTask', UpdateTaskInput)
def update_task(data):
    return handlers.update_task(data).to_dict()


@router.mutation('toggleTask', ToggleTaskInput)
def toggle_task(data):
    return handlers.toggle_task(data).to_dict()


@router.mutation('deleteTask', DeleteTaskInput)
def delete_task(data):
    return handlers.delete_task(data)


@rpc.route('/<procedure>', methods=['GET', 'POST'])
def dispatch(procedure):
    proc = router.get(procedure)
    if request.method != proc.http_method:
        return _error_response(
            'METHOD_NOT_SUPPORTED',
            f'Unsupported {request.method} request to {proc.kind} procedure "{proc.name}"',
            405,
        )

    if proc.http_method == 'GET':
        raw = request.args.get('input')
    else:
        raw = request.get_data(as_text=True)

    return jsonify({'result': {'data': proc.call(raw)}})


def _error_response(code, message, status, issues=None):
    body = {'code': code, 'message': message}
    if issues is not None:
        body['issues'] = issues
    return jsonify({'error': body}), status


@rpc.errorhandler(TaskTrackerError)
def handle_tracker_error(exc):
    return _error_response(exc.code, str(exc), exc.status, getattr(exc, 'issues', None))


@rpc.errorhandler(SQLAlchemyError)
def handle_store_error(exc):
    logger.error('Store failure on %s: %s', request.path, exc)
    return _error_response('INTERNAL_SERVER_ERROR', str(exc), 500)


@rpc.errorhandler(Exception)
def handle_unexpected_error(exc):
    if isinstance(exc, HTTPException):
        return exc
    logger.exception('Unhandled error on %s', request.path)
    return _error_response('INTERNAL_SERVER_ERROR', str(exc) or exc.__class__.__name__, 500)
