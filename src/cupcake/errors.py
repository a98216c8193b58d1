"""Custom exceptions for cupcake."""

from typing import Any, Iterable


class CupcakeError(Exception):
    """Base exception for all cupcake errors."""

    pass


class InvalidSelectionError(CupcakeError):
    """Raised when an order field is set to a value outside its allowed set."""

    def __init__(self, field: str, value: Any, allowed: Iterable[Any] | None = None):
        self.field = field
        self.value = value
        self.allowed = list(allowed) if allowed is not None else None
        msg = f"Invalid {field}: {value!r}"
        if self.allowed:
            msg = f"{msg} (expected one of: {', '.join(str(a) for a in self.allowed)})"
        super().__init__(msg)


class InvalidTransitionError(CupcakeError):
    """Raised when a navigation action is not allowed on the current screen."""

    def __init__(self, screen: str, action: str, reason: str | None = None):
        self.screen = screen
        self.action = action
        msg = f"Cannot {action} from {screen}"
        if reason:
            msg = f"{msg} ({reason})"
        super().__init__(msg)


class SessionNotFoundError(CupcakeError):
    """Raised when an order session ID doesn't exist."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Session not found: {session_id}")


class ConfigNotFoundError(CupcakeError):
    """Raised when the shop config file doesn't exist."""

    def __init__(self, path: str | None = None):
        self.path = path
        msg = "Shop config not found. Run 'cupcake init-config' first."
        if path:
            msg = f"Shop config not found at {path}. Run 'cupcake init-config {path}' first."
        super().__init__(msg)


class ConfigExistsError(CupcakeError):
    """Raised when trying to init but config already exists."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Config already exists at {path}. Use --force to overwrite.")


class InvalidSchemaVersionError(CupcakeError):
    """Raised when config has an unsupported schema version."""

    def __init__(self, found: int, supported: int):
        self.found = found
        self.supported = supported
        super().__init__(
            f"Unsupported schema version {found}. This tool supports version {supported}."
        )


class InvalidConfigError(CupcakeError):
    """Raised when a shop config is structurally invalid."""

    def __init__(self, reason: str, path: str | None = None):
        self.reason = reason
        self.path = path
        msg = f"Invalid shop config: {reason}"
        if path:
            msg = f"Invalid shop config at {path}: {reason}"
        super().__init__(msg)
