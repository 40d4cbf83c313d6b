"""Command side of the catalog's CQRS layer.

Commands are immutable requests to change the catalog. The bus routes each
one to the single handler registered for its type, runs it through any
middleware, and always hands back a CommandResult; handler exceptions are
logged and turned into failed results.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Awaitable, Callable, Dict, Generic, List, Optional, TypeVar
from uuid import uuid4

from ..events import DomainEvent

logger = logging.getLogger(__name__)

C = TypeVar("C", bound="Command")
R = TypeVar("R", bound="CommandResult")

Middleware = Callable[[Callable[..., Awaitable[Any]]], Callable[..., Awaitable[Any]]]


def elapsed_ms(start: datetime) -> float:
    """Milliseconds since ``start``."""
    return (datetime.now() - start).total_seconds() * 1000


def apply_middleware(handle: Callable, middleware: List[Middleware]) -> Callable:
    """Wrap ``handle`` so the first registered middleware runs outermost."""
    for wrap in reversed(middleware):
        handle = wrap(handle)
    return handle


@dataclass(frozen=True, slots=True)
class Command:
    """Base command; the id ties a result back to its command."""

    command_id: str = field(default_factory=lambda: str(uuid4()))


class CommandHandler(ABC, Generic[C, R]):
    """Handles one command type."""

    @abstractmethod
    async def handle(self, command: C) -> R:
        """Apply the command and report the outcome."""

    @abstractmethod
    def can_handle(self, command_type: type) -> bool:
        """Check if this handler can handle the given command type."""


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Outcome of a dispatched command."""

    success: bool
    command_id: str
    message: Optional[str] = None
    errors: List[str] = field(default_factory=list)
    events: List[DomainEvent] = field(default_factory=list)
    result_data: Dict[str, Any] = field(default_factory=dict)
    execution_time_ms: Optional[float] = None

    @classmethod
    def failed(cls, command: "Command", message: Optional[str], *errors: str) -> "CommandResult":
        """Build a failed result for ``command``."""
        return cls(
            success=False,
            command_id=command.command_id,
            message=message,
            errors=list(errors),
        )


class CommandBus:
    """Routes commands to their handlers."""

    def __init__(self):
        self._handlers: Dict[type, CommandHandler] = {}
        self._middleware: List[Middleware] = []

    def register(self, command_type: type, handler: CommandHandler) -> None:
        self._handlers[command_type] = handler

    def register_middleware(self, middleware: Middleware) -> None:
        """Add a wrapper around every handler call."""
        self._middleware.append(middleware)

    async def dispatch(self, command: Command) -> CommandResult:
        """Run ``command`` through its handler; never raises."""
        command_type = type(command)
        handler = self._handlers.get(command_type)
        if handler is None:
            return CommandResult.failed(
                command, None, f"No handler registered for command type: {command_type.__name__}"
            )

        start = datetime.now()
        try:
            result = await apply_middleware(handler.handle, self._middleware)(command)
        except Exception as e:
            logger.exception("Command %s failed", command_type.__name__)
            return replace(CommandResult.failed(command, None, str(e)), execution_time_ms=elapsed_ms(start))

        return replace(result, execution_time_ms=elapsed_ms(start))
