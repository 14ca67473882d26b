"""
Import portfolio command implementation.
"""

from typing import TYPE_CHECKING
from portfolio_base import PortfolioImportError
from portfolio_app.commands.base import Command, CommandResult, CommandStatus
from portfolio_app.context import CommandContext, set_current_context, clear_current_context
from portfolio_app.logger import AppLogger

if TYPE_CHECKING:
    from portfolio_app.core.service_container import ServiceContainer

app_logger = AppLogger(__name__)


class ImportPortfolioCommand(Command):
    """Validate a portfolio file and store it in the cache"""

    command_type = "import"

    async def execute(self, services: 'ServiceContainer') -> CommandResult:
        set_current_context(CommandContext(command=self.command_type))
        try:
            portfolio = services.importer().load_file(self.portfolio_path)
            stored = services.cache_service().save_portfolio(portfolio)
            return CommandResult(
                status=CommandStatus.SUCCESS,
                message=f"Imported portfolio '{stored.name}' ({len(stored.etfs)} ETFs) as {stored.id}",
                data={"portfolio_id": stored.id}
            )
        except PortfolioImportError as e:
            app_logger.log_error(f"Import failed: {e}")
            return CommandResult.failed(str(e))
        finally:
            clear_current_context()
