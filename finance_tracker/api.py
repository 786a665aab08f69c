from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .models.summary import Summary
from .models.transaction import TransactionCreate, TransactionRecord
from .repository import TransactionRepository

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

# /summary has no method check
SUMMARY_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def get_repository(request: Request) -> TransactionRepository:
    return request.app.state.repository


def create_app(repository: TransactionRepository) -> FastAPI:
    """Build the API around an already connected repository."""
    app = FastAPI(title="Finance Tracker API")
    app.state.repository = repository

    # Allow all origins, on every response including errors
    @app.middleware("http")
    async def add_cors_headers(request: Request, call_next):
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(f"Unhandled error on {request.method} {request.url.path}")
            response = PlainTextResponse("Internal Server Error", status_code=500)
        response.headers.update(CORS_HEADERS)
        return response

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.debug(f"Rejected request to {request.url.path}: {exc.errors()}")
        return PlainTextResponse("Invalid input", status_code=400)

    @app.get("/health")
    def health_check():
        return {"status": "healthy"}

    @app.get("/transactions", response_model=List[TransactionRecord])
    def list_transactions(repo: TransactionRepository = Depends(get_repository)):
        try:
            return repo.get_all()
        except SQLAlchemyError as e:
            logger.error(f"Error listing transactions: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    @app.post("/transactions", status_code=201)
    def create_transaction(payload: TransactionCreate,
                           repo: TransactionRepository = Depends(get_repository)):
        try:
            repo.create(
                amount=payload.amount,
                category=payload.category,
                description=payload.description,
                type=payload.type
            )
        except SQLAlchemyError as e:
            logger.error(f"Error creating transaction: {e}")
            raise HTTPException(status_code=500, detail="DB error")
        return Response(status_code=201)

    @app.delete("/transactions", status_code=204)
    def delete_transaction(id: Optional[int] = None,
                           repo: TransactionRepository = Depends(get_repository)):
        if id is None:
            raise HTTPException(status_code=400, detail="ID required")
        try:
            repo.delete(id)
        except SQLAlchemyError as e:
            logger.error(f"Error deleting transaction {id}: {e}")
            raise HTTPException(status_code=500, detail="Delete failed")
        return Response(status_code=204)

    @app.options("/transactions")
    def transactions_preflight():
        return Response(status_code=200)

    @app.api_route("/summary", methods=SUMMARY_METHODS, response_model=Summary)
    def get_summary(repo: TransactionRepository = Depends(get_repository)):
        try:
            return repo.get_summary()
        except SQLAlchemyError as e:
            logger.error(f"Error computing summary: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    return app
