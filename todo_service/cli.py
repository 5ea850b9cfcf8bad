"""
Command-line client.

    todo add <text>      add a task
    todo list            list all tasks
    todo done <query>    mark every task titled <query> as done
    todo drop            delete all tasks

Each command is exactly one remote call. Failures are logged and turn into a
non-zero exit status: 2 for bad arguments, 1 for failed calls.
"""

import argparse
import logging
import sys

from todo_service.client.rpc_client import TodoClient
from todo_service.core.config import get_settings
from todo_service.core.errors import ArgumentError, RemoteCallError
from todo_service.core.logging_setup import setup_logging
from todo_service.models import Task

logger = logging.getLogger(__name__)

DONE_MARKER = "✅ "
PENDING_MARKER = "  "


class _Parser(argparse.ArgumentParser):
    def error(self, message):
        raise ArgumentError(message)


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = _Parser(prog="todo", description="Track tasks on a todo server.")
    parser.add_argument(
        "--server",
        default=settings.server_url,
        help="server URL (default: %(default)s)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=settings.call_timeout_seconds,
        help="deadline for the remote call, in seconds (default: %(default)s)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")

    commands = parser.add_subparsers(dest="command", metavar="command", parser_class=_Parser)
    commands.required = True

    add = commands.add_parser("add", help="add a task")
    add.add_argument("text")
    commands.add_parser("list", help="list all tasks")
    done = commands.add_parser("done", help="mark matching tasks as done")
    done.add_argument("query")
    commands.add_parser("drop", help="delete all tasks")
    return parser


def format_task(task: Task) -> str:
    marker = DONE_MARKER if task.done else PENDING_MARKER
    return f"{marker} {task.title}"


def run_command(args: argparse.Namespace, client: TodoClient) -> None:
    if args.command == "add":
        task = client.add(args.text)
        print(f"task {task.title} added")
    elif args.command == "list":
        for task in client.list().tasks:
            print(format_task(task))
    elif args.command == "done":
        updated = client.done(args.query)
        print(f"{len(updated.tasks)} tasks have been updated")
    elif args.command == "drop":
        client.drop()
        print("The tasks have been successfully dropped")
    else:
        raise ArgumentError(f"unknown command: {args.command}")


FAILURE_MESSAGES = {
    "add": "could not add task",
    "list": "could not list tasks",
    "done": "could not mark tasks as done",
    "drop": "could not drop database",
}


def main(argv: list[str] | None = None, client: TodoClient | None = None) -> int:
    setup_logging(get_settings().log_level)

    try:
        args = build_parser().parse_args(argv)
    except ArgumentError as e:
        logger.error("%s", e)
        return 2

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    owned = client is None
    if owned:
        client = TodoClient(base_url=args.server, timeout=args.timeout)

    try:
        run_command(args, client)
    except RemoteCallError as e:
        logger.error("%s: %s", FAILURE_MESSAGES[args.command], e)
        return 1
    finally:
        if owned:
            client.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
