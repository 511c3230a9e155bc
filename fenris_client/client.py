"""The interactive client loop tying the interface to the server connection."""

from __future__ import annotations

import logging
import time
from typing import Callable, Protocol, Sequence

from fenris_client.interface import TUI
from fenris_client.request_manager import InvalidRequestError, Request, RequestManager
from fenris_client.response_manager import Response, ResponseManager


class UserInterface(Protocol):
    """What the client needs from the user interface."""

    def get_server_ip(self) -> str: ...
    def get_port_number(self) -> str: ...
    def get_command(self) -> list[str]: ...
    def display_result(self, success: bool, result: str) -> None: ...
    def update_current_directory(self, new_dir: str) -> None: ...
    def display_help(self) -> None: ...


class ConnectionManager(Protocol):
    """What the client needs from a server connection.

    ``connect``, ``send_request`` and ``receive_response`` raise
    ConnectionError (or OSError) on failure.
    """

    address: str
    port: str

    def has_connection_info(self) -> bool: ...
    def set_connection_info(self, hostname: str, port: str) -> None: ...
    def reset_connection_info(self) -> None: ...
    def connect(self) -> None: ...
    def is_connected(self) -> bool: ...
    def disconnect(self) -> None: ...
    def send_request(self, request: Request) -> None: ...
    def receive_response(self) -> Response: ...


class Client:
    """Reads commands from the user, sends them to the server, shows results."""

    def __init__(
        self,
        logger_name: str = "fenris_client",
        *,
        connection_manager: ConnectionManager | None = None,
        tui: UserInterface | None = None,
        connection_factory: Callable[[], ConnectionManager] | None = None,
        retry_delay: float = 2.0,
    ) -> None:
        self._logger = logging.getLogger(logger_name)
        self._connection_manager = connection_manager
        self._connection_factory = connection_factory
        self._tui: UserInterface | None = tui if tui is not None else TUI()
        self._request_manager = RequestManager()
        self._response_manager = ResponseManager(logger_name)
        self._retry_delay = retry_delay
        self._exit_requested = False
        self._logger.info("fenris client initialized")

    def __enter__(self) -> Client:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Disconnect from the server if still connected."""
        cm = self._connection_manager
        if cm is not None and cm.is_connected():
            cm.disconnect()
            self._logger.info("disconnected from server")
        self._logger.info("fenris client shutting down")

    def connect_to_server(self) -> bool:
        """Connect, asking the user for the address if none is known."""
        cm = self._connection_manager
        if cm is not None and cm.is_connected():
            return True

        if cm is None:
            if self._connection_factory is None:
                raise RuntimeError("no connection manager configured")
            cm = self._connection_manager = self._connection_factory()

        if not cm.has_connection_info():
            server_ip = self._tui.get_server_ip()
            server_port = self._tui.get_port_number()
            cm.set_connection_info(server_ip, server_port)
            self._logger.info("using server at %s:%s", server_ip, server_port)

        address, port = cm.address, cm.port
        self._logger.info("attempting to connect to server at %s:%s", address, port)
        try:
            cm.connect()
        except (ConnectionError, OSError) as exc:
            self._logger.error(
                "failed to connect to server at %s:%s: %s", address, port, exc
            )
            self._tui.display_result(
                False,
                "Failed to connect to server. Please try a different address or port.",
            )
            cm.reset_connection_info()
            return False

        self._logger.info("successfully connected to server at %s:%s", address, port)
        self._tui.display_result(True, "connected to server")
        return True

    def process_command(self, command_parts: Sequence[str]) -> bool:
        """Handle one command; returns False once the user asks to exit."""
        if not command_parts:
            return True

        cmd = command_parts[0]
        if cmd == "exit":
            self._logger.info("exit command received")
            self._exit_requested = True
            return False

        if cmd == "help":
            self._tui.display_help()
            return True

        try:
            request = self._request_manager.generate_request(command_parts)
        except InvalidRequestError as exc:
            self._logger.error("%s", exc)
            self._tui.display_result(False, "Invalid command or arguments")
            return True

        cm = self._connection_manager
        try:
            cm.send_request(request)
        except (ConnectionError, OSError) as exc:
            self._logger.error("failed to send request to server: %s", exc)
            self._tui.display_result(False, "Failed to send request to server")
            return True

        try:
            response = cm.receive_response()
        except (ConnectionError, OSError) as exc:
            self._logger.error("failed to receive response from server: %s", exc)
            self._tui.display_result(False, "Failed to receive response from server")
            return True

        status, *lines = self._response_manager.handle_response(response)
        success = status == "Success"
        for line in lines:
            self._tui.display_result(success, line)
        if not lines:
            self._tui.display_result(
                success,
                "Operation completed successfully" if success else "Operation failed",
            )

        if cmd == "cd" and success and len(command_parts) > 1:
            self._tui.update_current_directory(response.text)

        return True

    def run(self) -> None:
        """Main loop: stay connected and process commands until exit."""
        self._logger.info("fenris client starting")

        if self._tui is None:
            self._logger.error("TUI not initialized, cannot run client")
            self._exit_requested = True
            return

        while not self._exit_requested:
            cm = self._connection_manager
            if cm is None or not cm.is_connected():
                if not self.connect_to_server():
                    time.sleep(self._retry_delay)
                    continue

            try:
                if not self.process_command(self._tui.get_command()):
                    break
            except Exception as exc:  # keep the session alive on any failure
                self._logger.error("exception during command processing: %s", exc)
                self._tui.display_result(False, f"internal error: {exc}")

        cm = self._connection_manager
        if cm is not None and cm.is_connected():
            cm.disconnect()
            self._logger.info("disconnected from server")
            self._tui.display_result(True, "Disconnected from server")

        self._logger.info("fenris client exiting")

    def set_connection_manager(self, connection_manager: ConnectionManager) -> None:
        """Use this connection from now on."""
        self._connection_manager = connection_manager

    def set_tui(self, tui: UserInterface) -> None:
        """Use this user interface from now on."""
        self._tui = tui

    def is_exit_requested(self) -> bool:
        """Whether the user has asked to exit."""
        return self._exit_requested