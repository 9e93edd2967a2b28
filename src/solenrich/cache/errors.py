"""Cache error types."""


class CacheBackendError(Exception):
    """Raised by a remote backend when the store rejects a command."""

    def __init__(self, command: str, detail: str) -> None:
        self.command = command
        self.detail = detail
        super().__init__(f"{command} failed: {detail}")
