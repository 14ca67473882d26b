"""
Command context management using ContextVar for async-safe context propagation.
"""

from contextvars import ContextVar
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CommandContext:
    """Identifies the command and portfolio being processed, attached to log records"""
    command: str
    portfolio_id: Optional[str] = None
    portfolio_name: Optional[str] = None


# Context variable to store the current command across async boundaries
current_context: ContextVar[Optional[CommandContext]] = ContextVar('current_context', default=None)


def set_current_context(context: CommandContext) -> None:
    """Set the current command context."""
    current_context.set(context)


def get_current_context() -> Optional[CommandContext]:
    """Get the current command context."""
    return current_context.get()


def clear_current_context() -> None:
    """Clear the current command context."""
    current_context.set(None)
