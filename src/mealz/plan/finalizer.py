"""Turns a raw schedule into the user-facing idea list."""

from mealz.models import Card

IDEAS_TRIMMED_WARNING = "Note: Jokers and duplicates have been removed from the final idea list."


def finalize_ideas(entries: list[Card]) -> tuple[list[Card], list[str]]:
    """
    Drop jokers and repeated cards, keeping first occurrences in order.

    Returns the idea list and the warnings produced by this step.
    """
    ideas: list[Card] = []
    seen_ids: set[int] = set()
    for card in entries:
        if card.is_joker or card.id in seen_ids:
            continue
        seen_ids.add(card.id)
        ideas.append(card)

    warnings = [IDEAS_TRIMMED_WARNING] if len(ideas) < len(entries) else []
    return ideas, warnings
