from fastapi import APIRouter, Depends

from todo_service.database import get_store
from todo_service.models import Task, TaskList, Text, Void
from todo_service.services.task_service import TaskService
from todo_service.store.task_store import TaskStore

router = APIRouter(prefix="/tasks", tags=["tasks"])

# Plain (non-async) handlers: store I/O is blocking, so FastAPI runs each
# call in its threadpool.


@router.post("/add", response_model=Task)
def add(text: Text, store: TaskStore = Depends(get_store)):
    """Append a new, not-done task"""
    return TaskService.add_task(text.text, store)


@router.post("/list", response_model=TaskList)
def list_tasks(void: Void | None = None, store: TaskStore = Depends(get_store)):
    """All tasks in append order"""
    return TaskService.list_tasks(store)


@router.post("/done", response_model=TaskList)
def done(text: Text, store: TaskStore = Depends(get_store)):
    """Mark every task titled exactly `text` as done; returns the updated ones"""
    return TaskService.mark_done(text.text, store)


@router.post("/drop", response_model=Void)
def drop(void: Void | None = None, store: TaskStore = Depends(get_store)):
    """Delete the whole store"""
    return TaskService.drop_tasks(store)
