class TaskError(Exception):
    """Base class for request-local errors. Each maps to one HTTP status."""

    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class MalformedIdError(TaskError):
    def __init__(self, raw_id: str) -> None:
        super().__init__("Invalid id")
        self.raw_id = raw_id


class InvalidInputError(TaskError):
    pass


class TaskNotFoundError(TaskError):
    status_code = 404

    def __init__(self, task_id: int) -> None:
        super().__init__("Task not found")
        self.task_id = task_id
