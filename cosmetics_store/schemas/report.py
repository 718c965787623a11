from pydantic import BaseModel


class RevenueReport(BaseModel):
    """Revenue figures over the whole ledger."""

    total: float
    formatted: str
    sales_count: int
    revenue_by_category: dict[str, float]
    units_by_category: dict[str, int]
