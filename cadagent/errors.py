from __future__ import annotations

from typing import Optional


class CadAgentError(Exception):
    """Base class for everything the assistant reports back to the command line."""


class DecodeError(CadAgentError):
    """The plan text could not be turned into a Plan. Nothing was drawn."""

    INVALID_JSON = "invalid_json"
    INVALID_ROOT = "invalid_root"
    EMPTY = "empty"

    def __init__(self, reason: str, message: str):
        super().__init__(message)
        self.reason = reason


class ExecutionError(CadAgentError):
    """An action failed hard; the whole plan transaction was rolled back."""

    def __init__(self, message: str, index: Optional[int] = None, action: Optional[str] = None):
        super().__init__(message)
        self.index = index
        self.action = action


class TransactionError(CadAgentError):
    pass


class TransportError(CadAgentError):
    """The text-completion service could not be reached or answered with an error."""


class ApiKeyError(TransportError):
    pass
