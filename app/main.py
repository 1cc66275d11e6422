from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.orm import Session

from app.common.error_handlers import register_error_handlers
from app.core.config import settings
from app.core.dependencies import get_db
from app.api.v1 import (
    product,
    transaction,
    customer,
    verisiye,
    expense_product,
    balance_sheet,
    kasa_report,
)
from app.logger_config import logger

app = FastAPI(title=f"{settings.SHOP_NAME} API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Register API routers
app.include_router(product.router, prefix="/api/v1/products", tags=["products"])
app.include_router(
    transaction.router, prefix="/api/v1/transactions", tags=["transactions"])
app.include_router(
    customer.router, prefix="/api/v1/verisiye/customers", tags=["verisiye"])
app.include_router(verisiye.router, prefix="/api/v1/verisiye", tags=["verisiye"])
app.include_router(
    expense_product.router, prefix="/api/v1/kasa/expense-products", tags=["kasa"])
app.include_router(
    balance_sheet.router, prefix="/api/v1/kasa/balance-sheets", tags=["kasa"])
app.include_router(
    kasa_report.router, prefix="/api/v1/kasa/reports", tags=["kasa"])


@app.get("/")
def read_root():
    return {"message": f"Welcome to the {settings.SHOP_NAME} APIs!"}


@app.get("/health")
def health(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"Health check failed: {str(e)}")
        return JSONResponse(
            status_code=503,
            content={"status": "error", "database": "unreachable"},
        )
    return {"status": "ok", "database": "connected"}
