import logging

from todo_service.core.errors import DecodeError, EncodeError, StoreIOError
from todo_service.models import Task, TaskList, Void
from todo_service.store.task_store import TaskStore

logger = logging.getLogger(__name__)


def _wrap(context: str, err: StoreIOError | DecodeError | EncodeError):
    """Re-raise a store error with a description of the failed step, same kind."""
    return type(err)(f"{context}: {err}")


class TaskService:
    @staticmethod
    def add_task(text: str, store: TaskStore) -> Task:
        task = Task(title=text, done=False)
        try:
            store.append(task)
        except (StoreIOError, DecodeError, EncodeError) as e:
            raise _wrap("could not add task", e) from e
        logger.info("Added task %r", task.title)
        return task

    @staticmethod
    def list_tasks(store: TaskStore) -> TaskList:
        try:
            return TaskList(tasks=store.scan_all())
        except (StoreIOError, DecodeError, EncodeError) as e:
            raise _wrap("could not list tasks", e) from e

    # whole list is rewritten even when nothing matched
    @staticmethod
    def mark_done(query: str, store: TaskStore) -> TaskList:
        with store.lock:
            try:
                tasks = store.scan_all()
            except (StoreIOError, DecodeError, EncodeError) as e:
                raise _wrap("could not load the tasks", e) from e

            updated = []
            for task in tasks:
                if task.title == query:
                    task.done = True
                    updated.append(task)

            try:
                store.rewrite_all(tasks)
            except (StoreIOError, DecodeError, EncodeError) as e:
                raise _wrap("could not write tasks", e) from e

        logger.info("Marked %d task(s) titled %r as done", len(updated), query)
        return TaskList(tasks=updated)

    @staticmethod
    def drop_tasks(store: TaskStore) -> Void:
        try:
            store.drop_store()
        except StoreIOError as e:
            raise _wrap("could not drop database", e) from e
        return Void()
