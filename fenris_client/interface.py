"""Text user interface for the interactive client."""

from __future__ import annotations

import re
import sys
from typing import Sequence, TextIO

DEFAULT_IP = "127.0.0.1"
DEFAULT_PORT = "7777"

_OCTET = r"(25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)"
_IPV4_PATTERN = re.compile(rf"{_OCTET}\.{_OCTET}\.{_OCTET}\.{_OCTET}")
_HOSTNAME_PATTERN = re.compile(
    r"([a-zA-Z0-9]([a-zA-Z0-9\-]{0,61}[a-zA-Z0-9])?\.)+[a-zA-Z]{2,}"
)

VALID_COMMANDS = frozenset(
    {
        "cd", "ls", "cat", "upload", "ping", "write", "append",
        "rm", "info", "mkdir", "rmdir", "help", "exit",
    }
)

COMMAND_DESCRIPTIONS = {
    "cd": "Change the current directory (cd <directory>)",
    "ls": "List contents of a directory (ls [directory])",
    "cat": "Display contents of a file (cat <file>)",
    "upload": "Upload a local file to the server (upload <local_file> "
    "<remote_filename>)",
    "ping": "Check if server is responsive (ping)",
    "write": "Create a new file with content (write <file> <content>)",
    "rm": "Remove a file (rm <file>)",
    "info": "Display file information (info <file>)",
    "mkdir": "Create a new directory (mkdir <directory>)",
    "rmdir": "Remove a directory (rmdir <directory>)",
    "help": "Display available commands (help)",
    "exit": "Exit the client (exit)",
}

# command -> (min_args, max_args)
_ARGUMENT_LIMITS = {
    "cd": (1, 1),
    "ls": (0, 1),
    "cat": (1, 1),
    "upload": (2, 2),
    "ping": (0, 0),
    "write": (2, 2),
    "append": (2, 2),
    "rm": (1, 1),
    "info": (1, 1),
    "mkdir": (1, 1),
    "rmdir": (1, 1),
    "help": (0, 0),
    "exit": (0, 0),
}


class TUI:
    """Prompts the user and prints results on a pair of text streams."""

    def __init__(self, input_stream: TextIO | None = None,
                 output_stream: TextIO | None = None) -> None:
        self._in = input_stream if input_stream is not None else sys.stdin
        self._out = output_stream if output_stream is not None else sys.stdout
        self._current_dir = "/"

    def _print(self, text: str = "") -> None:
        print(text, file=self._out)

    def _prompt(self, text: str) -> str:
        self._out.write(text)
        self._out.flush()
        return self._in.readline().rstrip("\r\n")

    def get_server_ip(self) -> str:
        """Ask for the server address, falling back to localhost."""
        ip = self._prompt("Enter server IP address: ")

        if ip == "localhost":
            return DEFAULT_IP

        if not ip:
            ip = DEFAULT_IP
            self._print(f"Using default IP: {ip}")
        elif not (_IPV4_PATTERN.fullmatch(ip) or _HOSTNAME_PATTERN.fullmatch(ip)):
            self._print("Invalid IP address or hostname format. Using default instead.")
            ip = DEFAULT_IP
            self._print(f"Using default IP: {ip}")
        return ip

    def get_port_number(self) -> str:
        """Ask for the server port, falling back to the default port."""
        port = self._prompt("Enter server port number: ")
        if not port or not all(c in "0123456789" for c in port) or not (
            1 <= int(port) <= 65535
        ):
            self._print(f"Invalid port number. Using default port {DEFAULT_PORT}.")
            return DEFAULT_PORT
        return port

    def get_command(self) -> list[str]:
        """Read one command line; an invalid, empty or help command yields []."""
        line = self._prompt(f"fenris:{self._current_dir}> ")
        parts = line.split()
        if not parts or not self.validate_command(parts):
            return []
        if parts[0] == "help":
            self.display_help()
            return []
        return parts

    def validate_command(self, command_parts: Sequence[str]) -> bool:
        """Check the command name and its argument count, reporting problems."""
        if not command_parts:
            return False

        cmd = command_parts[0]
        arg_count = len(command_parts) - 1

        if cmd not in VALID_COMMANDS:
            self._print(f"Invalid command: {cmd}")
            return False

        limits = _ARGUMENT_LIMITS.get(cmd)
        if limits is not None:
            min_args, max_args = limits
            if not min_args <= arg_count <= max_args:
                if min_args == max_args:
                    plural = "s" if min_args != 1 else ""
                    self._print(
                        f"Error: {cmd} requires exactly {min_args} argument{plural}"
                    )
                else:
                    self._print(
                        f"Error: {cmd} requires between {min_args} and "
                        f"{max_args} arguments"
                    )
                return False
        return True

    def display_result(self, success: bool, result: str) -> None:
        """Print a result line."""
        self._print(result if result else "Command completed successfully.")

    def update_current_directory(self, new_dir: str) -> None:
        """Remember the directory shown in the prompt, normalised to start with '/'."""
        directory = new_dir if new_dir.startswith("/") else "/" + new_dir
        if len(directory) > 1 and directory.endswith("/"):
            directory = directory[:-1]
        self._current_dir = directory

    def get_current_directory(self) -> str:
        """The directory shown in the prompt."""
        return self._current_dir

    def display_help(self) -> None:
        """Print the sorted list of commands with their descriptions."""
        width = max(len(cmd) for cmd in COMMAND_DESCRIPTIONS) + 4
        self._out.write("\nAvailable Commands:\n")
        self._out.write("==================\n")
        for cmd in sorted(COMMAND_DESCRIPTIONS):
            self._print(f"{cmd:<{width}}{COMMAND_DESCRIPTIONS[cmd]}")
        self._print()