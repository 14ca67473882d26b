from datetime import date, datetime
from typing import Annotated, Dict, List, Optional, Literal
from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator
from pydantic.alias_generators import to_camel

# Category and country identifiers: stripped, non-empty strings
CategoryKey = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
CountryKey = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

DataSource = Literal['borsaitaliana', 'justetf']

# Occurrences per year that split the calendar year into whole months
VALID_SIP_FREQUENCIES = (1, 2, 3, 4, 6, 12)

EQUITY_CATEGORY = 'stocks'


class _CamelModel(BaseModel):
    """Base for models read from camelCase documents"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


# Holdings models
class Transaction(_CamelModel):
    """A recorded buy (positive quantity) or sell (negative quantity)"""
    date: date
    quantity: float
    price: float


class RecurringPlan(_CamelModel):
    """Systematic investment plan: fixed quantity bought every 12/frequency months"""
    quantity: float
    frequency: int = 12  # occurrences per year: 12=monthly, 6=bimonthly, 3=quarterly, 1=yearly
    start_date: date

    @field_validator('frequency')
    @classmethod
    def validate_frequency(cls, v: int) -> int:
        if v not in VALID_SIP_FREQUENCIES:
            raise ValueError(
                f"Invalid frequency {v}. Must be one of {', '.join(str(f) for f in VALID_SIP_FREQUENCIES)}"
            )
        return v

    @property
    def period_months(self) -> int:
        """Months between two consecutive purchases"""
        return 12 // self.frequency


class AssetClass(_CamelModel):
    """Asset class of an ETF (e.g. name "US Large Cap", category "stocks")"""
    name: str
    category: CategoryKey


class Etf(_CamelModel):
    """An ETF holding, identified by its ISIN"""
    isin: str
    name: str
    data_source: DataSource = 'borsaitaliana'
    asset_class: AssetClass
    countries: Dict[CountryKey, float] = Field(default_factory=dict)  # country -> percent of equity exposure
    transactions: List[Transaction] = Field(default_factory=list)
    sip: Optional[RecurringPlan] = None

    @property
    def category(self) -> str:
        return self.asset_class.category


class Portfolio(_CamelModel):
    """Portfolio definition with target allocations and holdings"""
    id: str
    name: str
    target_asset_class_allocation: Dict[CategoryKey, float] = Field(default_factory=dict)  # category -> percent
    target_country_allocation: Dict[CountryKey, float] = Field(default_factory=dict)  # country -> percent
    max_drift: float = 0.0  # percent, e.g. 10 means 10%
    etfs: Dict[str, Etf] = Field(default_factory=dict)


# Market data models
class PricePoint(_CamelModel):
    """Daily closing price"""
    date: date
    price: float


class PriceHistory(_CamelModel):
    """Current price plus the daily series it was taken from"""
    price: float
    timestamp: datetime
    history: List[PricePoint] = Field(default_factory=list)

    @property
    def last_date(self) -> Optional[date]:
        return self.history[-1].date if self.history else None
