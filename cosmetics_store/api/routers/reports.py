from fastapi import APIRouter, Depends

from cosmetics_store.api.deps import get_service
from cosmetics_store.schemas.report import RevenueReport
from cosmetics_store.services.inventory import InventoryLedgerService

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/revenue", response_model=RevenueReport)
def get_revenue_report(service: InventoryLedgerService = Depends(get_service)):
    return RevenueReport(
        total=service.revenue_total(),
        formatted=service.total_revenue(),
        sales_count=len(service.list_sales()),
        revenue_by_category=service.revenue_by_category(),
        units_by_category=service.units_sold_by_category(),
    )
