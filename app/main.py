import logging
from functools import lru_cache

import uvicorn
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware

from config import get_settings
from adapters import PaymentAdapter, PaymentError
from adapters.docdata import get_adapter

settings = get_settings()

# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL.upper())
logger = logging.getLogger("docdata-payment-service")


class EndpointFilter(logging.Filter):
    """Filter out noisy health check access logs."""

    def filter(self, record: logging.LogRecord) -> bool:  # pragma: no cover - logging filter
        return "GET /health" not in record.getMessage()


logging.getLogger("uvicorn.access").addFilter(EndpointFilter())


@lru_cache(maxsize=1)
def get_provider() -> PaymentAdapter:
    return get_adapter(settings)


app = FastAPI(
    title="Docdata Payment Service",
    version="1.0.0",
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check():
    return {"status": "healthy", "service": "docdata-payment-service"}


@app.api_route("/webhooks/docdata", methods=["GET", "POST"])
async def docdata_webhook(request: Request):
    """Handle Docdata status update callbacks.

    Docdata only tells us which order changed; the actual state is read back
    with a status call.
    """
    order_id = request.query_params.get("order_id")
    if not order_id:
        raise HTTPException(status_code=400, detail="Missing order_id")

    logger.info("Received Docdata update for order %s", order_id)
    try:
        provider = get_provider()
        result = await provider.accept_notification(order_id)
    except PaymentError as exc:
        logger.error("Status check for order %s failed: %s", order_id, exc)
        raise HTTPException(status_code=502, detail=f"Status check failed: {exc}")

    if result["status"] == "completed":
        logger.info("Order %s paid", order_id)
    elif result["status"] == "cancelled":
        logger.warning("Order %s cancelled", order_id)
    elif result["status"] == "failed":
        logger.warning("Order %s failed", order_id)

    return {"received": True, **result}


@app.get("/")
async def root():
    return {
        "message": "Docdata Payment Service API",
        "test_mode": settings.DOCDATA_TEST_MODE,
    }


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.HTTP_PORT,
        reload=True,
        log_level=settings.LOG_LEVEL.lower()
    )
