# Main application file

import logging
import time

import uvicorn

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from dealership.core.config import settings
from dealership.core.rate_limiter import limiter
from dealership.database import Base, engine
from dealership.models import customers, detail_sales, employees, motorcycles, sales  # noqa: F401
from dealership.routers import (
    customers as customers_router,
    detail_sales as detail_sales_router,
    employees as employees_router,
    motorcycles as motorcycles_router,
    sales as sales_router,
)


# LOGGING CONFIGURATION

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s | %(levelname)s | %(message)s",
)

logger = logging.getLogger("dealership")


# DATABASE

Base.metadata.create_all(bind=engine)


# APP INIT

app = FastAPI(
    title="Motorcycle Dealership API",
    description="Motorcycles, customers, employees and sales for a motorcycle dealership",
    version="1.0.0",
    debug=settings.DEBUG,
)


# CORS

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type"],
)


# RATE LIMITING

app.state.limiter = limiter
app.add_exception_handler(
    RateLimitExceeded,
    _rate_limit_exceeded_handler
)


# REQUEST LOGGING MIDDLEWARE

@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()

    response = await call_next(request)

    duration = round((time.time() - start_time) * 1000, 2)

    logger.info(
        f"{request.method} {request.url.path} "
        f"Status: {response.status_code} "
        f"Time: {duration}ms"
    )

    return response


# ROUTERS

app.include_router(motorcycles_router.router, prefix=settings.API_PREFIX)
app.include_router(customers_router.router, prefix=settings.API_PREFIX)
app.include_router(employees_router.router, prefix=settings.API_PREFIX)
app.include_router(sales_router.router, prefix=settings.API_PREFIX)
app.include_router(detail_sales_router.router, prefix=settings.API_PREFIX)


# ROOT

@app.get("/")
def root():
    logger.info("Health check endpoint called")
    return {"message": "Motorcycle Dealership API is running"}


def run():
    uvicorn.run(
        "dealership.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
