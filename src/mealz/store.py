"""Volatile in-memory card store with sequential identifiers."""

import json
import threading
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from mealz.logging_config import get_logger
from mealz.models import Card

logger = get_logger(__name__)

CARD_FIELDS = ("name", "tags", "ingredients", "max_batch_size")


class CardStoreError(Exception):
    """Base exception for card store errors."""


class CardNotFoundError(CardStoreError):
    """Raised when no card has the requested identifier."""

    def __init__(self, card_id: int):
        super().__init__(f"Card {card_id} not found")
        self.card_id = card_id


class InvalidCardError(CardStoreError):
    """Raised when card values fail validation."""


class DuplicateCardError(CardStoreError):
    """Raised when a card name is already taken."""

    def __init__(self, name: str):
        super().__init__(f"A card named '{name}' already exists")
        self.name = name


def _describe_validation_error(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        location = ".".join(str(p) for p in err["loc"])
        parts.append(f"{location}: {err['msg']}" if location else err["msg"])
    return "; ".join(parts)


class CardStore:
    """
    Owns the meal cards and issues monotonically increasing identifiers.

    Structural mutations and reads are serialized with a re-entrant lock, so a
    single store can back concurrent API requests. Every card handed out is a
    copy: callers get a consistent snapshot and cannot mutate the store behind
    its back.
    """

    def __init__(self) -> None:
        self._cards: list[Card] = []
        self._next_id = 1
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._cards)

    # -------------------------------------------------------------------------
    # CRUD
    # -------------------------------------------------------------------------

    def add(
        self,
        name: str,
        tags: Iterable[str] | None = None,
        ingredients: Iterable[str] | None = None,
        max_batch_size: int | None = None,
    ) -> Card:
        """Create a card with the next identifier. Batch size defaults to 1."""
        with self._lock:
            card = self._build(
                id=self._next_id,
                name=name,
                tags=tags,
                ingredients=ingredients,
                max_batch_size=1 if max_batch_size is None else max_batch_size,
            )
            self._ensure_unique_name(card.name)
            self._cards.append(card)
            self._next_id += 1

        logger.info(f"Added card {card.id} '{card.name}'")
        return card.model_copy(deep=True)

    def list_cards(self) -> list[Card]:
        """Snapshot of all cards in insertion order."""
        with self._lock:
            return [card.model_copy(deep=True) for card in self._cards]

    def get(self, card_id: int) -> Card:
        """Get a card by identifier."""
        with self._lock:
            return self._find(card_id).model_copy(deep=True)

    def update(
        self,
        card_id: int,
        name: str | None = None,
        tags: Iterable[str] | None = None,
        ingredients: Iterable[str] | None = None,
        max_batch_size: int | None = None,
    ) -> Card:
        """
        Replace only the supplied fields of a card.

        The new values are validated as a whole before anything is written, so
        a failed update leaves the store unchanged.
        """
        supplied = {
            "name": name,
            "tags": tags,
            "ingredients": ingredients,
            "max_batch_size": max_batch_size,
        }
        changes = {field: value for field, value in supplied.items() if value is not None}

        with self._lock:
            card = self._find(card_id)
            candidate = self._build(**{**card.model_dump(), **changes})
            if "name" in changes:
                self._ensure_unique_name(candidate.name, exclude_id=card_id)
            for field in changes:
                setattr(card, field, getattr(candidate, field))

        logger.info(f"Updated card {card_id}: {', '.join(changes) or 'no changes'}")
        return card.model_copy(deep=True)

    def remove(self, card_id: int) -> Card:
        """Remove a card and return it."""
        with self._lock:
            card = self._find(card_id)
            self._cards.remove(card)

        logger.info(f"Removed card {card_id} '{card.name}'")
        return card

    def load(self, entries: Iterable[Mapping[str, Any]]) -> list[Card]:
        """
        Bulk-add card definitions (mappings of name/tags/ingredients/max_batch_size).

        All or nothing: if any entry is rejected, the store and its next
        identifier are restored to their state before the call.
        """
        added = []
        with self._lock:
            saved_cards, saved_next_id = list(self._cards), self._next_id
            try:
                for position, entry in enumerate(entries):
                    added.append(self._add_entry(position, entry))
            except CardStoreError:
                self._cards, self._next_id = saved_cards, saved_next_id
                logger.warning(f"Bulk load rolled back after {len(added)} cards")
                raise
        return added

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _add_entry(self, position: int, entry: Any) -> Card:
        if not isinstance(entry, Mapping):
            raise InvalidCardError(f"Card entry {position} is not an object")
        unknown = set(entry) - set(CARD_FIELDS)
        if unknown:
            raise InvalidCardError(
                f"Card entry {position} has unknown fields: {', '.join(sorted(unknown))}"
            )
        if "name" not in entry:
            raise InvalidCardError(f"Card entry {position} has no name")
        return self.add(**entry)

    def _find(self, card_id: int) -> Card:
        for card in self._cards:
            if card.id == card_id:
                return card
        raise CardNotFoundError(card_id)

    def _ensure_unique_name(self, name: str, exclude_id: int | None = None) -> None:
        folded = name.casefold()
        for card in self._cards:
            if card.id != exclude_id and card.name.casefold() == folded:
                raise DuplicateCardError(name)

    @staticmethod
    def _build(**values: Any) -> Card:
        try:
            return Card.model_validate(values)
        except ValidationError as e:
            raise InvalidCardError(_describe_validation_error(e)) from e


def read_cards_file(path: Path) -> list[dict[str, Any]]:
    """Read card definitions from a JSON file holding a list of objects."""
    try:
        with Path(path).open(encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise InvalidCardError(f"Could not read cards file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise InvalidCardError(f"Invalid JSON in cards file {path}: {e}") from e

    if not isinstance(data, list):
        raise InvalidCardError(f"Cards file {path} must contain a JSON list")
    return data
