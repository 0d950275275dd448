"""Candidate filtering of meal cards."""

from collections.abc import Iterable

from mealz.models import BatchMode, Card, CardFilters, FilterMode


def _set_matches(wanted: set[str], present: set[str], mode: FilterMode) -> bool:
    if not wanted:
        return True
    if mode == FilterMode.ALL:
        return wanted <= present
    return not wanted.isdisjoint(present)


def _batch_matches(card: Card, mode: BatchMode) -> bool:
    if mode == BatchMode.ONLY:
        return card.max_batch_size > 1
    if mode == BatchMode.PREVENT:
        return card.max_batch_size <= 1
    return True


def card_matches(card: Card, filters: CardFilters) -> bool:
    """Check a single card against every predicate family of the filters."""
    name_match = (
        not filters.name_contains or filters.name_contains.lower() in card.name.lower()
    )
    return (
        name_match
        and _batch_matches(card, filters.batch_mode)
        and _set_matches(filters.tag_filters, card.tags, filters.tag_mode)
        and _set_matches(filters.ingredient_filters, card.ingredients, filters.ingredient_mode)
        and (filters.allow_jokers or not card.is_joker)
    )


def find_candidates(cards: Iterable[Card], filters: CardFilters) -> list[Card]:
    """Return the admissible cards, in their original order. May be empty."""
    return [card for card in cards if card_matches(card, filters)]
