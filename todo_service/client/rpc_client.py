import logging
from typing import TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from todo_service.core.errors import RemoteCallError
from todo_service.models import Task, TaskList, Text, Void

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class TodoClient:
    """
    Remote-call client for the todo service.

    Every call shares the same deadline (`timeout`, seconds). Any failure,
    whether transport, deadline, server-side or a malformed reply, is raised
    as RemoteCallError.

    Pass `http_client` to reuse an existing httpx.Client (its base_url and
    timeout are then left as configured).
    """

    def __init__(
        self,
        base_url: str = "http://127.0.0.1:8888",
        timeout: float = 2.0,
        http_client: httpx.Client | None = None,
    ):
        self._owns_client = http_client is None
        self._http = http_client or httpx.Client(
            base_url=base_url, timeout=httpx.Timeout(timeout)
        )

    def __enter__(self) -> "TodoClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._http.close()

    def _call(self, path: str, request: BaseModel, reply: type[M]) -> M:
        logger.debug("Calling %s", path)
        try:
            response = self._http.post(path, json=request.model_dump())
        except httpx.TimeoutException as e:
            raise RemoteCallError(f"deadline exceeded calling {path}") from e
        except httpx.HTTPError as e:
            raise RemoteCallError(f"unable to contact the server: {e}") from e

        if response.is_error:
            try:
                detail = response.json()["detail"]
            except (ValueError, KeyError, TypeError):
                detail = response.text
            raise RemoteCallError(
                f"{path} failed with status {response.status_code}: {detail}",
                status_code=response.status_code,
            )

        try:
            return reply.model_validate_json(response.content)
        except ValidationError as e:
            raise RemoteCallError(f"unexpected reply from {path}: {e}") from e

    def add(self, text: str) -> Task:
        return self._call("/tasks/add", Text(text=text), Task)

    def list(self) -> TaskList:
        return self._call("/tasks/list", Void(), TaskList)

    def done(self, query: str) -> TaskList:
        return self._call("/tasks/done", Text(text=query), TaskList)

    def drop(self) -> Void:
        return self._call("/tasks/drop", Void(), Void)
