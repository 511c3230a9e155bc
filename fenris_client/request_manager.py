"""Turning tokenised user commands into protocol requests."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Sequence


class RequestType(Enum):
    """Kinds of request the server understands."""

    PING = auto()
    CREATE_FILE = auto()
    READ_FILE = auto()
    WRITE_FILE = auto()
    APPEND_FILE = auto()
    DELETE_FILE = auto()
    INFO_FILE = auto()
    CREATE_DIR = auto()
    LIST_DIR = auto()
    CHANGE_DIR = auto()
    DELETE_DIR = auto()
    TERMINATE = auto()


@dataclass
class Request:
    """A single request sent to the server."""

    command: RequestType
    filename: str = ""
    data: bytes = b""


class InvalidRequestError(ValueError):
    """Raised when a command cannot be turned into a request."""


_COMMANDS = {
    "ping": RequestType.PING,
    "create": RequestType.CREATE_FILE,
    "cat": RequestType.READ_FILE,
    "write": RequestType.WRITE_FILE,
    "append": RequestType.APPEND_FILE,
    "rm": RequestType.DELETE_FILE,
    "info": RequestType.INFO_FILE,
    "mkdir": RequestType.CREATE_DIR,
    "ls": RequestType.LIST_DIR,
    "cd": RequestType.CHANGE_DIR,
    "rmdir": RequestType.DELETE_DIR,
    "terminate": RequestType.TERMINATE,
}

_NO_ARGUMENTS = {RequestType.PING, RequestType.TERMINATE}

_WITH_CONTENT = {
    RequestType.CREATE_FILE: "create",
    RequestType.WRITE_FILE: "write",
    RequestType.APPEND_FILE: "append",
}

_MISSING_ARGUMENT = {
    RequestType.CREATE_FILE: "create command requires a filename",
    RequestType.READ_FILE: "read command requires a filename",
    RequestType.WRITE_FILE: "write command requires a filename and content "
    "(or -f <filepath>)",
    RequestType.APPEND_FILE: "append command requires a filename and content "
    "(or -f <filepath>)",
    RequestType.DELETE_FILE: "delete_file command requires a filename",
    RequestType.INFO_FILE: "info command requires a filename",
    RequestType.CREATE_DIR: "mkdir command requires a directory name",
    RequestType.CHANGE_DIR: "cd command requires a directory name",
    RequestType.DELETE_DIR: "rmdir command requires a directory name",
}

# Commands whose arguments must include content as well as a filename.
_MIN_ARGUMENTS = {
    RequestType.WRITE_FILE: 2,
    RequestType.APPEND_FILE: 2,
}


class RequestManager:
    """Builds :class:`Request` objects from command words."""

    def __init__(self, logger_name: str = "RequestManager") -> None:
        self._logger = logging.getLogger(logger_name)

    def generate_request(self, args: Sequence[str]) -> Request:
        """Build a request from a command and its arguments.

        Raises InvalidRequestError for an unknown command or missing arguments.
        """
        if not args:
            raise InvalidRequestError("no command provided")

        cmd, *rest = args

        if cmd == "upload":
            if len(rest) < 2:
                raise InvalidRequestError(
                    "upload command requires a local file path and remote filename"
                )
            return self._upload_request(rest[0], rest[1])

        try:
            command = _COMMANDS[cmd]
        except KeyError:
            raise InvalidRequestError(f"unknown command '{cmd}'") from None

        if command in _NO_ARGUMENTS:
            return Request(command)

        if command is RequestType.LIST_DIR:
            return Request(command, rest[0] if rest else ".")

        if len(rest) < _MIN_ARGUMENTS.get(command, 1):
            raise InvalidRequestError(_MISSING_ARGUMENT[command])

        filename, *content_args = rest
        if command in _WITH_CONTENT:
            data = self._content(content_args, _WITH_CONTENT[command])
            return Request(command, filename, data)
        return Request(command, filename)

    def _content(self, parts: Sequence[str], purpose: str) -> bytes:
        """Content given inline, or read from a local file after ``-f``."""
        if not parts:
            return b""
        if parts[0] == "-f" and len(parts) > 1:
            path = parts[1]
            try:
                with open(path, "rb") as handle:
                    return handle.read()
            except OSError:
                self._logger.warning(
                    "could not open file '%s' for %s content", path, purpose
                )
                return b""
        return " ".join(parts).encode()

    def _upload_request(self, local_path: str, remote_filename: str) -> Request:
        request = Request(RequestType.WRITE_FILE, remote_filename)
        try:
            with open(local_path, "rb") as handle:
                request.data = handle.read()
        except OSError:
            self._logger.error("could not open local file '%s' for upload", local_path)
        else:
            self._logger.info(
                "read %d bytes from '%s' for upload", len(request.data), local_path
            )
        return request