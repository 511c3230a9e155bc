"""Turning server responses into lines of text for the user."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable, Iterable

_logger = logging.getLogger("ResponseManager")

_KB = 1024.0
_MB = _KB * 1024.0
_GB = _MB * 1024.0
_TB = _GB * 1024.0

_BINARY_SAMPLE_SIZE = 1024
_TEXT_CONTROL_BYTES = frozenset(b"\n\r\t")


class ResponseType(Enum):
    """Kinds of response the server sends."""

    PONG = auto()
    FILE_INFO = auto()
    FILE_CONTENT = auto()
    DIR_LISTING = auto()
    SUCCESS = auto()
    ERROR = auto()
    TERMINATED = auto()


@dataclass
class FileInfo:
    """Metadata of one file or directory on the server."""

    name: str
    size: int = 0
    modified_time: int = 0
    is_directory: bool = False
    permissions: int = 0


@dataclass
class DirectoryListing:
    """The entries of a directory on the server."""

    entries: list[FileInfo] = field(default_factory=list)


@dataclass
class Response:
    """A single response received from the server."""

    type: ResponseType | int
    success: bool = False
    data: bytes = b""
    error_message: str = ""
    file_info: FileInfo | None = None
    directory_listing: DirectoryListing | None = None

    @property
    def text(self) -> str:
        """The data field decoded as text."""
        return self.data.decode("utf-8", errors="replace")


def format_file_size(size_bytes: int) -> str:
    """Render a byte count with a binary unit and two decimals."""
    if size_bytes < _KB:
        return f"{size_bytes} B"
    for limit, divisor, unit in ((_MB, _KB, "KB"), (_GB, _MB, "MB"), (_TB, _GB, "GB")):
        if size_bytes < limit:
            return f"{size_bytes / divisor:.2f} {unit}"
    return f"{size_bytes / _TB:.2f} TB"


def format_timestamp(timestamp: int) -> str:
    """Render seconds since the epoch as local 'YYYY-mm-dd HH:MM:SS'."""
    try:
        return time.strftime("%Y-%m-%d %H:%M:%S", time.localtime(timestamp))
    except (OverflowError, OSError, ValueError) as exc:
        _logger.warning("Failed to convert timestamp %s: %s", timestamp, exc)
        return "Invalid timestamp"


def format_permissions(permissions: int) -> str:
    """Render permission bits as 'rwxrwxrwx (octal)'."""
    flags = "".join(
        letter if permissions & (1 << bit) else "-"
        for bit, letter in zip(range(8, -1, -1), "rwxrwxrwx")
    )
    return f"{flags} ({permissions:o})"


def _is_binary(data: bytes) -> bool:
    return any(
        byte == 0 or (byte < 32 and byte not in _TEXT_CONTROL_BYTES)
        for byte in data[:_BINARY_SAMPLE_SIZE]
    )


class ResponseManager:
    """Formats responses; the first line of every result is 'Success' or 'Error'."""

    def __init__(self, logger_name: str = "ResponseManager") -> None:
        self._logger = logging.getLogger(logger_name)
        self._handlers: dict[ResponseType, Callable[[Response], Iterable[str]]] = {
            ResponseType.PONG: self._pong,
            ResponseType.FILE_INFO: self._file_info,
            ResponseType.FILE_CONTENT: self._file_content,
            ResponseType.DIR_LISTING: self._directory_listing,
            ResponseType.SUCCESS: self._success,
            ResponseType.ERROR: self._error,
            ResponseType.TERMINATED: self._terminated,
        }

    def handle_response(self, response: Response) -> list[str]:
        """Status line followed by the lines to show for this response."""
        result = ["Success" if response.success else "Error"]
        handler = self._handlers.get(response.type)  # type: ignore[arg-type]
        if handler is None:
            self._logger.warning("Received unknown response type: %s", response.type)
            result.append("Unknown response type")
        else:
            result.extend(handler(response))
        self._logger.debug("Response handling produced %d lines", len(result))
        return result

    def _pong(self, response: Response) -> list[str]:
        lines = ["Server is alive"]
        if response.data:
            lines.append("Message: " + response.text)
        return lines

    def _file_info(self, response: Response) -> list[str]:
        info = response.file_info
        if info is None:
            self._logger.warning("FILE_INFO response without file_info field")
            return ["Error: File info missing in response"]
        lines = [
            "File: " + info.name,
            "Size: " + format_file_size(info.size),
            "Modified: " + format_timestamp(info.modified_time),
            "Type: " + ("Directory" if info.is_directory else "File"),
        ]
        if info.permissions:
            lines.append("Permissions: " + format_permissions(info.permissions))
        return lines

    def _file_content(self, response: Response) -> list[str]:
        data = response.data
        if not data:
            return ["(Empty file)"]
        if _is_binary(data):
            return [f"(Binary data, {format_file_size(len(data))})"]
        lines = response.text.split("\n")
        if lines[-1] == "":
            lines.pop()
        return lines

    def _directory_listing(self, response: Response) -> list[str]:
        listing = response.directory_listing
        if listing is None:
            if response.data:
                self._logger.warning("Directory listing missing, using data field")
                return [response.text]
            self._logger.error("Directory listing response has no listing or data")
            return ["Error: Directory listing missing in response"]

        if not listing.entries:
            return ["(Empty directory)"]

        sizes = [format_file_size(entry.size) for entry in listing.entries]
        name_width = max(len(entry.name) for entry in listing.entries) + 2
        size_width = max(len(size) for size in sizes) + 2

        header = f"{'Name':<{name_width}}{'Size':<{size_width}}{'Modified':<20}Type"
        lines = [header, "-" * len(header)]
        for entry, size in zip(listing.entries, sizes):
            kind = "Directory" if entry.is_directory else "File"
            lines.append(
                f"{entry.name:<{name_width}}{size:<{size_width}}"
                f"{format_timestamp(entry.modified_time):<20}{kind}"
            )
        return lines

    def _success(self, response: Response) -> list[str]:
        if response.data:
            return [response.text]
        return ["Operation completed successfully"]

    def _error(self, response: Response) -> list[str]:
        if response.error_message:
            self._logger.warning("Error response: %s", response.error_message)
            return ["Error: " + response.error_message]
        if response.data:
            self._logger.warning("Error response (in data field): %s", response.text)
            return ["Error: " + response.text]
        return ["Unknown error occurred"]

    def _terminated(self, response: Response) -> list[str]:
        self._logger.info("Connection termination acknowledged by server")
        lines = ["Server connection terminated"]
        if response.data:
            lines.append("Reason: " + response.text)
        return lines