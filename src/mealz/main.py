"""FastAPI application entry point."""

import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from mealz.config import get_settings
from mealz.logging_config import LoggingContext, configure_logging, get_logger
from mealz.plan.generator import MealPlanGenerator
from mealz.routers import cards_router, meal_plans_router
from mealz.store import CardStore, read_cards_file

# Configure logging on module load
configure_logging()
logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def build_card_store() -> CardStore:
    """Create the card store, seeded from the configured cards file if any."""
    store = CardStore()
    cards_file = get_settings().cards_file
    if cards_file:
        loaded = store.load(read_cards_file(cards_file))
        logger.info(f"Seeded {len(loaded)} cards from {cards_file}")
    return store


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler for startup and shutdown events."""
    logger.info("Starting Mealz API")

    store = build_card_store()
    app.state.card_store = store
    app.state.plan_generator = MealPlanGenerator(store)

    yield

    # The store is volatile: everything is dropped on shutdown
    logger.info(f"Shutting down Mealz API, discarding {len(store)} cards")


app = FastAPI(
    title="Mealz API",
    description="Meal cards and randomized meal plan ideas",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def bind_request_id(request: Request, call_next) -> Response:
    """Attach a request id to the logging context and the response."""
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
    with LoggingContext(request_id=request_id):
        response = await call_next(request)
    response.headers[REQUEST_ID_HEADER] = request_id
    return response


app.include_router(cards_router)
app.include_router(meal_plans_router)


@app.get("/health")
async def health_check() -> dict:
    """Basic health check endpoint."""
    return {"status": "ok", "service": "mealz-api"}


@app.get("/")
async def root() -> dict:
    """Root endpoint with API information."""
    return {
        "name": "Mealz API",
        "version": "0.1.0",
        "docs": "/docs",
        "health": "/health",
    }
