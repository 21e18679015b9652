import logging
import threading
from typing import Any

from .errors import TaskNotFoundError
from .models import Task, TaskCreate, TaskPatch, parse_create, parse_patch

logger = logging.getLogger(__name__)

SEED_TASKS = (
    ("Test task", False),
    ("Another task", True),
)


class TaskStore:
    """
    In-memory task collection and id counter.

    Every read and write goes through one lock, so ids stay unique and
    strictly increasing when FastAPI serves requests from its thread pool.
    Callers always receive copies; stored records are never handed out.
    """

    def __init__(self) -> None:
        self._tasks: list[Task] = []
        self._next_id = 1
        self._lock = threading.Lock()

    @classmethod
    def with_seed_tasks(cls) -> "TaskStore":
        store = cls()
        for title, completed in SEED_TASKS:
            task = store.create(title)
            if completed:
                store.update(task.id, TaskPatch(completed=True))
        return store

    def __len__(self) -> int:
        return self.count()

    @property
    def next_id(self) -> int:
        with self._lock:
            return self._next_id

    def count(self) -> int:
        with self._lock:
            return len(self._tasks)

    def _find(self, task_id: int) -> Task:
        for task in self._tasks:
            if task.id == task_id:
                return task
        logger.debug("Task %s not found", task_id)
        raise TaskNotFoundError(task_id)

    def list_all(self) -> list[Task]:
        with self._lock:
            return [task.model_copy() for task in self._tasks]

    def get(self, task_id: int) -> Task:
        with self._lock:
            return self._find(task_id).model_copy()

    def create(self, title: Any) -> Task:
        if isinstance(title, TaskCreate):
            data = title
        else:
            data = parse_create({"title": title})
        with self._lock:
            task = Task(id=self._next_id, title=data.title)
            self._next_id += 1
            self._tasks.append(task)
        logger.info("Created task %s", task.id)
        return task.model_copy()

    def update(self, task_id: int, patch: TaskPatch | dict[str, Any] | None = None) -> Task:
        with self._lock:
            task = self._find(task_id)
            # Whole patch is validated before the first field is applied.
            changes = parse_patch(patch if patch is not None else {}).changes()
            for key, value in changes.items():
                setattr(task, key, value)
            snapshot = task.model_copy()
        if changes:
            logger.info("Updated task %s fields=%s", task_id, sorted(changes))
        return snapshot

    def delete(self, task_id: int) -> Task:
        with self._lock:
            task = self._find(task_id)
            self._tasks.remove(task)
        logger.info("Deleted task %s", task_id)
        return task.model_copy()
