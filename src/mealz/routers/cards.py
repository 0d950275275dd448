"""API routes for meal card management."""

from typing import NoReturn

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from mealz.dependencies import get_card_store
from mealz.logging_config import get_logger
from mealz.models import Card
from mealz.store import (
    CardNotFoundError,
    CardStore,
    CardStoreError,
    DuplicateCardError,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/cards", tags=["cards"])


# =============================================================================
# Request/Response Schemas
# =============================================================================


class CardCreateRequest(BaseModel):
    """Request to create a meal card."""

    name: str = Field(..., min_length=1, max_length=200)
    tags: list[str] = Field(default_factory=list)
    ingredients: list[str] = Field(default_factory=list)
    max_batch_size: int | None = Field(None, description="Defaults to 1 (non-batchable)")


class CardUpdateRequest(BaseModel):
    """Partial update: omitted or null fields keep their current value."""

    name: str | None = Field(None, min_length=1, max_length=200)
    tags: list[str] | None = None
    ingredients: list[str] | None = None
    max_batch_size: int | None = None


class CardListResponse(BaseModel):
    """All cards in the store."""

    cards: list[Card]
    total: int


# =============================================================================
# Helper Functions
# =============================================================================


def raise_for_store_error(error: CardStoreError) -> NoReturn:
    """Translate a card store error into the matching HTTP error."""
    if isinstance(error, CardNotFoundError):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(error, DuplicateCardError):
        code = status.HTTP_409_CONFLICT
    else:
        code = status.HTTP_400_BAD_REQUEST
    raise HTTPException(status_code=code, detail=str(error)) from error


# =============================================================================
# Endpoints
# =============================================================================


@router.post("", response_model=Card, status_code=status.HTTP_201_CREATED)
def create_card(
    request: CardCreateRequest,
    store: CardStore = Depends(get_card_store),
) -> Card:
    """Create a meal card. The store assigns the identifier."""
    try:
        return store.add(
            request.name,
            tags=request.tags,
            ingredients=request.ingredients,
            max_batch_size=request.max_batch_size,
        )
    except CardStoreError as e:
        logger.info(f"Card creation rejected: {e}")
        raise_for_store_error(e)


@router.get("", response_model=CardListResponse)
def list_cards(store: CardStore = Depends(get_card_store)) -> CardListResponse:
    """List all meal cards in insertion order."""
    cards = store.list_cards()
    return CardListResponse(cards=cards, total=len(cards))


@router.get("/{card_id}", response_model=Card)
def get_card(card_id: int, store: CardStore = Depends(get_card_store)) -> Card:
    """Get a single meal card."""
    try:
        return store.get(card_id)
    except CardStoreError as e:
        raise_for_store_error(e)


@router.patch("/{card_id}", response_model=Card)
def update_card(
    card_id: int,
    request: CardUpdateRequest,
    store: CardStore = Depends(get_card_store),
) -> Card:
    """Update the supplied fields of a meal card."""
    try:
        return store.update(
            card_id,
            name=request.name,
            tags=request.tags,
            ingredients=request.ingredients,
            max_batch_size=request.max_batch_size,
        )
    except CardStoreError as e:
        logger.info(f"Card {card_id} update rejected: {e}")
        raise_for_store_error(e)


@router.delete("/{card_id}", response_model=Card)
def delete_card(card_id: int, store: CardStore = Depends(get_card_store)) -> Card:
    """Remove a meal card and return it."""
    try:
        return store.remove(card_id)
    except CardStoreError as e:
        raise_for_store_error(e)
