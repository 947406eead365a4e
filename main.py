import logging
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

import db
from db import init_db
from routes import budgets, dashboard, goals, obligations, reports, transactions
from services.errors import (
    BudgetError,
    NotFound,
    PermissionDenied,
    ValidationError,
    InactiveObligation,
    WriteFailed,
)

app = FastAPI(title="Gestor Financeiro")


@app.on_event("startup")
def startup():
    init_db()


# domain error -> HTTP status; first match wins
ERROR_STATUS = [
    (NotFound, 404),
    (PermissionDenied, 403),
    (ValidationError, 400),
    (InactiveObligation, 400),
    (WriteFailed, 500),
]


@app.exception_handler(BudgetError)
async def budget_error_handler(request: Request, exc: BudgetError):
    status_code = next((code for cls, code in ERROR_STATUS if isinstance(exc, cls)), 400)
    if status_code >= 500:
        logging.error(f"{request.method} {request.url.path} failed: {exc}")
    else:
        logging.warning(f"{request.method} {request.url.path} rejected: {exc}")
    return JSONResponse(status_code=status_code, content={"error": str(exc)})


@app.get("/api/health")
def health():
    return {
        "status": "OK",
        "timestamp": datetime.now().isoformat(),
        "database": db.DB_FILE,
    }


app.include_router(dashboard.router)
app.include_router(transactions.router)
app.include_router(obligations.router)
app.include_router(budgets.router)
app.include_router(goals.router)
app.include_router(reports.router)


if __name__ == "__main__":
    import os
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=int(os.getenv("PORT", "3001")))
