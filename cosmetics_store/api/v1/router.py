from fastapi import APIRouter

from cosmetics_store.api.routers import products, reports, sales

api_router = APIRouter()

api_router.include_router(products.router)
api_router.include_router(sales.router)
api_router.include_router(reports.router)
