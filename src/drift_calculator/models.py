from typing import List, Optional
from pydantic import BaseModel, Field

class EtfSnapshot(BaseModel):
    """Current state of a single ETF holding"""
    isin: str
    name: str
    category: str
    quantity: float
    paid_value: float
    current_value: float

class DriftRow(BaseModel):
    """Drift of one category against its target and the amounts that compensate it"""
    category: str
    drift_amount: float  # positive is above target, so to sell
    percentage: float  # drift relative to the target weight, 100 when the target is 0
    amount_to_buy_to_compensate: Optional[float] = None  # None when buying alone cannot reach the target
    amount_to_sell_to_compensate: Optional[float] = None  # None when selling alone cannot reach the target

    def exceeds(self, max_drift: float) -> bool:
        """True when the drift percentage is beyond the tolerated band"""
        return abs(self.percentage) > max_drift

class DriftCalculationResult(BaseModel):
    """Result of drift calculation with strategy feasibility"""
    rows: List[DriftRow]
    buy_feasible: bool
    sell_feasible: bool
    buy_blockers: List[str] = Field(default_factory=list)  # held categories without a target
    sell_blockers: List[str] = Field(default_factory=list)  # target categories without holdings
    warnings: List[str] = Field(default_factory=list)

    def rows_exceeding(self, max_drift: float) -> List[DriftRow]:
        """Rows whose drift is beyond max_drift percent"""
        return [row for row in self.rows if row.exceeds(max_drift)]
