"""
CLI command protocol: a command reads a portfolio file, runs against the
service container and reports back a CommandResult.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from portfolio_app.core.service_container import ServiceContainer


class CommandStatus(Enum):
    SUCCESS = "success"
    FAILED = "failed"


@dataclass
class CommandResult:
    """Outcome of a command; message is printed on success, error on failure"""
    status: CommandStatus
    message: Optional[str] = None
    data: Optional[Dict[str, Any]] = None
    error: Optional[str] = None

    @property
    def exit_code(self) -> int:
        return 0 if self.status == CommandStatus.SUCCESS else 1

    @classmethod
    def failed(cls, error: str) -> 'CommandResult':
        return cls(status=CommandStatus.FAILED, error=error)


class Command(ABC):
    """A CLI subcommand operating on one portfolio file"""

    command_type: str = ''

    def __init__(self, portfolio_path: str | Path):
        self.portfolio_path = Path(portfolio_path)

    @abstractmethod
    async def execute(self, services: 'ServiceContainer') -> CommandResult:
        """Run against the container's services; expected failures come back as FAILED results"""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(portfolio_path={str(self.portfolio_path)!r})"
