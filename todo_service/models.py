from pydantic import BaseModel, ConfigDict, Field


class Task(BaseModel):
    """A title plus a completion flag. Identity is the title."""

    model_config = ConfigDict(extra="forbid")

    title: str
    done: bool = False


class TaskList(BaseModel):
    """Tasks in store (append) order"""

    tasks: list[Task] = Field(default_factory=list)


class Text(BaseModel):
    """Request message for Add and Done"""

    text: str


class Void(BaseModel):
    """Empty request/response message"""

    pass
