NOT_FOUND_MESSAGE = (
    "Database not found. Share it with your integration: open the database "
    "→ ⋯ → Connections → Add → select your integration."
)


class SyncError(RuntimeError):
    kind = "sync"

    def __init__(self, message: str):  # noqa: D401
        super().__init__(message)
        self.message = message


class ConfigurationError(SyncError):
    kind = "configuration"


class TransportError(SyncError):
    kind = "transport"


class RemoteError(SyncError):
    kind = "remote"

    def __init__(
        self,
        status: int,
        body: str = "",
        *,
        prefix: str = "Notion API",
        limit: int = 100,
        explain_not_found: bool = True,
    ):
        self.status = status
        self.body = body or ""
        if explain_not_found and self.not_found:
            message = NOT_FOUND_MESSAGE
        else:
            message = f"{prefix}: {status} {self.body[:limit]}"
        super().__init__(message)

    @property
    def not_found(self) -> bool:
        return self.status == 404 or "could not find" in self.body or "locate database" in self.body


__all__ = ["SyncError", "ConfigurationError", "TransportError", "RemoteError", "NOT_FOUND_MESSAGE"]
