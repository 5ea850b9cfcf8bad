from functools import lru_cache

from todo_service.core.config import SettingsDep
from todo_service.store.task_store import TaskStore


# One store per path so concurrent requests share its lock
@lru_cache
def open_store(path: str) -> TaskStore:
    return TaskStore(path)


# Dependency for getting the task store
def get_store(settings: SettingsDep) -> TaskStore:
    return open_store(settings.db_file_path)
