"""
Service container using dependency-injector for the portfolio application
"""
from dependency_injector import containers, providers
from app_config import AppConfig
from drift_calculator import DriftCalculator
from price_connectors import create_price_client
from portfolio_app.services.cache_service import FileCacheService
from portfolio_app.services.portfolio_importer import PortfolioImporter
from portfolio_app.services.price_service import PriceService
from portfolio_app.services.portfolio_service import PortfolioService


class ServiceContainer(containers.DeclarativeContainer):
    """DI Container for the portfolio application"""

    # Configuration, override with the loaded AppConfig
    config = providers.Object(AppConfig())

    importer = providers.Factory(
        PortfolioImporter,
        default_data_source=config.provided.prices.default_data_source
    )

    cache_service = providers.Singleton(
        FileCacheService,
        directory=config.provided.cache.directory,
        ttl_hours=config.provided.cache.ttl_hours
    )

    # Called with a data source tag to build the matching client
    price_client = providers.Factory(
        create_price_client,
        prices_config=config.provided.prices
    )

    price_service = providers.Singleton(
        PriceService,
        cache=cache_service,
        client_factory=price_client.provider
    )

    drift_calculator = providers.Singleton(DriftCalculator)

    portfolio_service = providers.Singleton(
        PortfolioService,
        config=config,
        price_service=price_service,
        drift_calculator=drift_calculator
    )
