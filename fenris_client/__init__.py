"""Client logic for a remote file server: prompt, requests and response formatting."""

__version__ = "0.1.0"

__all__ = ["client", "interface", "request_manager", "response_manager"]