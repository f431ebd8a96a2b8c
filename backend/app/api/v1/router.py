from fastapi import APIRouter

from app.api.v1 import branch_offices, delivery_routes, invoices, nodes, products, providers, upload

api_router = APIRouter()

api_router.include_router(nodes.router, prefix="/neo4j", tags=["neo4j"])
api_router.include_router(products.router, prefix="/product", tags=["product"])
api_router.include_router(providers.router, prefix="/providers", tags=["provider"])
api_router.include_router(branch_offices.router, prefix="/branchoffice", tags=["branch office"])
api_router.include_router(invoices.router, prefix="/invoices", tags=["invoice"])
api_router.include_router(delivery_routes.router, prefix="/route", tags=["route"])
api_router.include_router(upload.router, prefix="/Info", tags=["import"])
