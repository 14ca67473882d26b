"""
Report command implementation.
"""

from datetime import date
from typing import Dict, List, Optional, TYPE_CHECKING
from portfolio_base import PortfolioImportError
from drift_calculator import DriftCalculationResult
from portfolio_app.commands.base import Command, CommandResult, CommandStatus
from portfolio_app.context import CommandContext, set_current_context, clear_current_context
from portfolio_app.logger import AppLogger
from portfolio_app.services.portfolio_service import PortfolioReport

if TYPE_CHECKING:
    from portfolio_app.core.service_container import ServiceContainer

app_logger = AppLogger(__name__)


def _money(amount: float, symbol: str) -> str:
    return f"{symbol}{amount:,.2f}"


def _compensation(amount: Optional[float], drift_amount: float, wanted_sign: int, symbol: str) -> str:
    """Show an amount only on rows where the strategy acts: buys below target, sells above"""
    if amount is None:
        return "n/a"
    if drift_amount * wanted_sign <= 0 or not amount:
        return "-"
    return _money(abs(amount), symbol)


def format_drift(title: str, result: DriftCalculationResult, allocation: Dict[str, float],
                 targets: Dict[str, float], max_drift: float, symbol: str) -> List[str]:
    lines = [title, f"  {'':1} {'category':<20} {'current':>9} {'target':>9} {'drift':>9} "
                    f"{'amount':>14} {'buy only':>14} {'sell only':>14}"]
    for row in result.rows:
        flag = "!" if row.exceeds(max_drift) else " "
        lines.append(
            f"  {flag} {row.category:<20} {allocation.get(row.category, 0.0):>8.2f}% "
            f"{targets.get(row.category, 0.0):>8.2f}% {row.percentage:>8.2f}% "
            f"{_money(row.drift_amount, symbol):>14} "
            f"{_compensation(row.amount_to_buy_to_compensate, row.drift_amount, -1, symbol):>14} "
            f"{_compensation(row.amount_to_sell_to_compensate, row.drift_amount, 1, symbol):>14}"
        )
    for warning in result.warnings:
        lines.append(f"  note: {warning}")
    return lines


def format_report(report: PortfolioReport, targets_by_asset_class: Dict[str, float],
                  targets_by_country: Dict[str, float], symbol: str = "€") -> str:
    """Plain text rendering of a portfolio report"""
    prices_date = report.prices_date.isoformat() if report.prices_date else "n/a"
    lines = [
        f"{report.portfolio_name} as of {report.as_of.isoformat()} (prices {prices_date})",
        f"  value {_money(report.value, symbol)}   cost {_money(report.cost, symbol)}   "
        f"gain {_money(report.gain, symbol)}",
        "",
        "ETFs",
    ]
    for etf in report.etfs:
        lines.append(
            f"  {etf.isin:<14} {etf.name[:32]:<32} {etf.category:<12} {etf.quantity:>10.2f} "
            f"{_money(etf.paid_value, symbol):>14} {_money(etf.current_value, symbol):>14}"
        )
    lines.append("")
    lines += format_drift("Asset class drift", report.asset_class_drift, report.asset_class_allocation,
                          targets_by_asset_class, report.max_drift, symbol)
    lines.append("")
    lines += format_drift(f"Country drift (equity {_money(report.equity_value, symbol)})", report.country_drift,
                          report.country_allocation, targets_by_country, report.max_drift, symbol)
    return "\n".join(lines)


class ReportCommand(Command):
    """Import a portfolio, load its prices and print value, allocation and drift"""

    command_type = "report"

    def __init__(self, portfolio_path: str, as_of: Optional[date] = None,
                 force_refresh: bool = False, offline: bool = False):
        super().__init__(portfolio_path)
        self.as_of = as_of
        self.force_refresh = force_refresh
        self.offline = offline

    async def execute(self, services: 'ServiceContainer') -> CommandResult:
        set_current_context(CommandContext(command=self.command_type))
        price_service = services.price_service()
        try:
            portfolio = services.importer().load_file(self.portfolio_path)
            set_current_context(CommandContext(
                command=self.command_type, portfolio_id=portfolio.id, portfolio_name=portfolio.name
            ))

            portfolio_service = services.portfolio_service()
            portfolio_service.set_portfolio(portfolio)
            await portfolio_service.refresh_prices(force_refresh=self.force_refresh, offline=self.offline)

            report = portfolio_service.report(self.as_of)
            breaches = (report.asset_class_drift.rows_exceeding(report.max_drift)
                        + report.country_drift.rows_exceeding(report.max_drift))
            if breaches:
                app_logger.log_warning(
                    f"{len(breaches)} categories drift beyond {report.max_drift}%: "
                    f"{', '.join(row.category for row in breaches)}"
                )

            text = format_report(
                report,
                portfolio.target_asset_class_allocation,
                portfolio.target_country_allocation,
                services.config().display.currency_symbol,
            )
            return CommandResult(
                status=CommandStatus.SUCCESS,
                message=text,
                data={"report": report}
            )
        except PortfolioImportError as e:
            app_logger.log_error(f"Report failed: {e}")
            return CommandResult.failed(str(e))
        finally:
            await price_service.close()
            clear_current_context()
