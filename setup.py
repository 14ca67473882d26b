from setuptools import setup, find_packages

setup(
    name="etf-portfolio-tracker",
    version="1.0.0",
    author="ETF Portfolio Tracker Team",
    description="ETF portfolio valuation, allocation and drift rebalancing engine",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    package_data={
        "portfolio_base": ["py.typed"],
        "drift_calculator": ["py.typed"],
        "price_connectors": ["py.typed"],
    },
    install_requires=[
        "pydantic==2.11.7",
        "PyYAML==6.0.2",
        "aiohttp==3.12.15",
        "python-dateutil==2.9.0.post0",
        "dependency-injector==4.48.1",
    ],
    extras_require={
        "test": [
            "pytest==8.4.1",
            "pytest-asyncio==1.1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "etf-portfolio=portfolio_app.main:main",
        ],
    },
    python_requires=">=3.11",
)
