"""Constrained selection of meals from a shuffled inventory."""

from collections import Counter
from dataclasses import dataclass, field

from mealz.logging_config import get_logger
from mealz.models import Card

logger = get_logger(__name__)

OUT_OF_PORTIONS_WARNING = "Ran out of meal portions. Plan stopped at {count} meals."
CONSTRAINTS_RELAXED_WARNING = (
    "Could not satisfy all constraints (e.g., repetition). "
    "The remaining plan may have duplicates."
)


@dataclass
class RawSchedule:
    """Scheduler output before jokers and duplicates are removed."""

    entries: list[Card] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def relaxed(self) -> bool:
        """True if a constraint had to be violated to make progress."""
        return CONSTRAINTS_RELAXED_WARNING in self.warnings


def build_raw_schedule(
    inventory: list[Card],
    number_of_meals: int,
    no_consecutive: bool = False,
    max_repeats_per_plan: int = 0,
) -> RawSchedule:
    """
    Draw up to ``number_of_meals`` entries from ``inventory``.

    Each step takes the first entry, in current inventory order, that is
    neither a consecutive repeat (when ``no_consecutive``) nor over the
    per-plan repeat limit (when ``max_repeats_per_plan`` > 0). When no entry
    qualifies, the first remaining entry is taken anyway and a warning is
    recorded. Running out of entries stops the schedule with a warning.

    The caller's list is left untouched.
    """
    remaining = list(inventory)
    schedule = RawSchedule()
    plan_counts: Counter[int] = Counter()

    def allowed(card: Card) -> bool:
        last = schedule.entries[-1] if schedule.entries else None
        consecutive = no_consecutive and last is not None and last.id == card.id
        over_limit = max_repeats_per_plan > 0 and plan_counts[card.id] >= max_repeats_per_plan
        return not consecutive and not over_limit

    while len(schedule.entries) < number_of_meals:
        if not remaining:
            schedule.warnings.append(OUT_OF_PORTIONS_WARNING.format(count=len(schedule.entries)))
            logger.info(f"Inventory exhausted after {len(schedule.entries)} meals")
            break

        index = next((i for i, card in enumerate(remaining) if allowed(card)), None)
        if index is None:
            schedule.warnings.append(CONSTRAINTS_RELAXED_WARNING)
            logger.debug(f"No admissible entry among {len(remaining)}, taking the first")
            index = 0

        chosen = remaining.pop(index)
        plan_counts[chosen.id] += 1
        schedule.entries.append(chosen)

    return schedule
