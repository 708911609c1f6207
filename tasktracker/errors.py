class TaskTrackerError(Exception):
    """Base class for errors reported to RPC callers."""

    code = 'INTERNAL_SERVER_ERROR'
    status = 500


class TaskNotFoundError(TaskTrackerError):
    code = 'NOT_FOUND'
    status = 404

    def __init__(self, task_id):
        self.task_id = task_id
        super().__init__(f'Task with ID {task_id} not found')


class InputValidationError(TaskTrackerError):
    """Malformed procedure input, rejected before any store access."""

    code = 'BAD_REQUEST'
    status = 400

    def __init__(self, message, issues=None):
        super().__init__(message)
        self.issues = issues or []

    @classmethod
    def from_pydantic(cls, exc):
        issues = [
            {
                'path': list(err['loc']),
                'message': err['msg'],
                'code': err['type'],
            }
            for err in exc.errors()
        ]
        return cls('Input validation failed', issues)


class UnknownProcedureError(TaskTrackerError):
    code = 'NOT_FOUND'
    status = 404

    def __init__(self, name):
        self.name = name
        super().__init__(f'No procedure found on path "{name}"')
