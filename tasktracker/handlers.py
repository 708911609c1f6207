"""Task handlers.

Each handler performs exactly one statement against the ``tasks`` table and
commits it. Store failures are logged, rolled back and re-raised unchanged.
"""
import logging

from sqlalchemy.exc import SQLAlchemyError

from tasktracker.errors import TaskNotFoundError
from tasktracker.models import db, Task
from tasktracker.timeutil import utcnow

logger = logging.getLogger(__name__)


def create_task(data):
    now = utcnow()
    task = Task(
        title=data.title,
        description=data.description or None,
        due_date=data.due_date,
        reminder_date=data.reminder_date,
        completed=False,
        created_at=now,
        updated_at=now,
    )
    try:
        db.session.add(task)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception('Task creation failed')
        raise
    logger.debug('Task created id=%s', task.id)
    return task


def get_tasks():
    stmt = db.select(Task).order_by(Task.created_at.desc(), Task.id.desc())
    try:
        return db.session.scalars(stmt).all()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception('Failed to fetch tasks')
        raise


def get_task_by_id(task_id):
    """Return the task or None; a missing id is not an error here."""
    try:
        return db.session.get(Task, task_id)
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception('Failed to get task id=%s', task_id)
        raise


def update_task(data):
    values = data.changes()
    values['updated_at'] = utcnow()
    stmt = (
        db.update(Task)
        .where(Task.id == data.id)
        .values(**values)
        .returning(Task)
        .execution_options(populate_existing=True)
    )
    task = _execute_returning(stmt, data.id, 'Task update failed')
    logger.debug('Task updated id=%s fields=%s', data.id, sorted(values))
    return task


def toggle_task(data):
    # single conditional UPDATE so concurrent toggles cannot read the same value
    stmt = (
        db.update(Task)
        .where(Task.id == data.id)
        .values(completed=db.not_(Task.completed), updated_at=utcnow())
        .returning(Task)
        .execution_options(populate_existing=True)
    )
    task = _execute_returning(stmt, data.id, 'Task toggle failed')
    logger.debug('Task toggled id=%s', data.id)
    return task


def delete_task(data):
    stmt = db.delete(Task).where(Task.id == data.id).returning(Task.id)
    _execute_returning(stmt, data.id, 'Task deletion failed')
    logger.debug('Task deleted id=%s', data.id)
    return {'success': True}


def _execute_returning(stmt, task_id, failure_message):
    try:
        row = db.session.execute(stmt).scalar_one_or_none()
        if row is None:
            db.session.rollback()
            raise TaskNotFoundError(task_id)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception(failure_message + ' id=%s', task_id)
        raise
    return row
