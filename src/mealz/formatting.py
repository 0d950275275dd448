"""Plain-text rendering of cards and plans for the command line."""

from mealz.models import Card, GenerationResult

SEPARATOR = "-" * 25


def format_card(card: Card) -> str:
    """Render a card as a short multi-line block."""
    lines = [
        f"[{card.id}] {card.name}",
        f"  Tags: {', '.join(sorted(card.tags)) or '-'}",
        f"  Ingredients: {', '.join(sorted(card.ingredients)) or '-'}",
        f"  Max batch size: {card.max_batch_size}",
    ]
    return "\n".join(lines)


def format_card_library(cards: list[Card]) -> str:
    if not cards:
        return "No meal cards found."
    blocks = ["--- Meal Card Library ---"]
    for card in cards:
        blocks.append(format_card(card))
        blocks.append(SEPARATOR)
    return "\n".join(blocks)


def format_generation_result(result: GenerationResult) -> str:
    """Render the idea list followed by any warnings."""
    ideas = result.ideas
    lines = ["--- Meal Ideas ---"]
    if ideas:
        lines.extend(f"{n}. {card.name} [{card.id}]" for n, card in enumerate(ideas, start=1))
    else:
        lines.append("No meal ideas.")

    if result.warnings:
        lines.append("")
        lines.append("Warnings:")
        lines.extend(f"  ! {warning}" for warning in result.warnings)
    return "\n".join(lines)
