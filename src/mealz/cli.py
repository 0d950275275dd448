"""Command-line interface for managing meal cards and generating plans.

The card store lives only for the duration of one invocation. Use --cards (or
MEALZ_CARDS_FILE) to seed it from a JSON file before the command runs:

    mealz --cards cards.json list
    mealz --cards cards.json plan -n 5 --no-consecutive -t vegan --tag-mode all
    mealz --cards cards.json serve --port 8000
"""

import argparse
import os
import sys
from collections.abc import Callable
from pathlib import Path

from mealz.config import get_settings
from mealz.formatting import format_card, format_card_library, format_generation_result
from mealz.logging_config import LoggingContext, configure_logging, get_logger
from mealz.models import BatchMode, CardFilters, FilterMode, PlanConstraints
from mealz.plan.generator import MealPlanGenerator, NoCandidatesError
from mealz.plan.inventory import make_rng
from mealz.store import CardStore, CardStoreError, read_cards_file

logger = get_logger(__name__)


def parse_csv(value: str | None) -> set[str] | None:
    """Split a comma-separated option into a set of stripped, non-empty entries."""
    if value is None:
        return None
    return {part.strip() for part in value.split(",") if part.strip()}


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {number}")
    return number


def _positive_int(value: str) -> int:
    number = _non_negative_int(value)
    if number == 0:
        raise argparse.ArgumentTypeError("must be >= 1")
    return number


# =============================================================================
# Command handlers
# =============================================================================


def cmd_add(args: argparse.Namespace, store: CardStore) -> int:
    card = store.add(
        args.name,
        tags=parse_csv(args.tags),
        ingredients=parse_csv(args.ingredients),
        max_batch_size=args.batch,
    )
    print(f"Card '{card.name}' (ID: {card.id}) created successfully.")
    return 0


def cmd_list(args: argparse.Namespace, store: CardStore) -> int:
    print(format_card_library(store.list_cards()))
    return 0


def cmd_show(args: argparse.Namespace, store: CardStore) -> int:
    print(format_card(store.get(args.card_id)))
    return 0


def cmd_update(args: argparse.Namespace, store: CardStore) -> int:
    card = store.update(
        args.card_id,
        name=args.name,
        tags=parse_csv(args.tags),
        ingredients=parse_csv(args.ingredients),
        max_batch_size=args.batch,
    )
    print(f"Card {card.id} updated.")
    print(format_card(card))
    return 0


def cmd_remove(args: argparse.Namespace, store: CardStore) -> int:
    card = store.remove(args.card_id)
    print(f"Card '{card.name}' (ID: {card.id}) removed.")
    return 0


def cmd_plan(args: argparse.Namespace, store: CardStore) -> int:
    settings = get_settings()
    filters = CardFilters(
        name_contains=args.name_contains,
        tag_filters=parse_csv(args.tags) or set(),
        tag_mode=FilterMode(args.tag_mode),
        ingredient_filters=parse_csv(args.ingredients) or set(),
        ingredient_mode=FilterMode(args.ingredient_mode),
        allow_jokers=args.allow_jokers,
        batch_mode=BatchMode(args.batch_mode),
    )
    constraints = PlanConstraints(
        number_of_meals=(
            args.count if args.count is not None else settings.default_number_of_meals
        ),
        filters=filters,
        no_consecutive=args.no_consecutive,
        max_repeats_per_plan=args.max_repeats,
    )
    seed = args.seed if args.seed is not None else settings.random_seed
    generator = MealPlanGenerator(store, rng=make_rng(seed))
    print(format_generation_result(generator.generate_plan(constraints)))
    return 0


def cmd_serve(args: argparse.Namespace, store: CardStore) -> int:
    import uvicorn

    # The API process builds its own store and generator from settings
    handoff = {"MEALZ_CARDS_FILE": args.cards, "MEALZ_RANDOM_SEED": args.seed}
    for var, value in handoff.items():
        if value is not None:
            os.environ[var] = str(value)
    get_settings.cache_clear()
    settings = get_settings()
    uvicorn.run(
        "mealz.main:app",
        host=args.host or settings.host,
        port=args.port or settings.port,
    )
    return 0


# =============================================================================
# Parser
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mealz",
        description="Store meal cards and generate randomized meal plan ideas.",
    )
    parser.add_argument("--cards", type=Path, help="JSON file of cards to load first")
    parser.add_argument("--seed", type=int, help="Shuffle seed for reproducible plans")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")

    sub = parser.add_subparsers(dest="command", required=True, metavar="command")

    def add_command(name: str, handler: Callable, help_text: str) -> argparse.ArgumentParser:
        command = sub.add_parser(name, help=help_text, description=help_text)
        command.set_defaults(handler=handler)
        return command

    add = add_command("add", cmd_add, "Add a new meal card.")
    add.add_argument("name", help="The name of the meal")
    add.add_argument("-t", "--tags", help="Comma-separated tags")
    add.add_argument("-i", "--ingredients", help="Comma-separated ingredients")
    add.add_argument("-b", "--batch", type=_positive_int, help="Max batch size (default 1)")

    add_command("list", cmd_list, "List all meal cards.")

    show = add_command("show", cmd_show, "Show one meal card.")
    show.add_argument("card_id", type=int)

    update = add_command("update", cmd_update, "Update fields of a meal card.")
    update.add_argument("card_id", type=int)
    update.add_argument("--name", help="New name")
    update.add_argument("-t", "--tags", help="Replacement comma-separated tags")
    update.add_argument("-i", "--ingredients", help="Replacement comma-separated ingredients")
    update.add_argument("-b", "--batch", type=_positive_int, help="New max batch size")

    remove = add_command("remove", cmd_remove, "Remove a meal card.")
    remove.add_argument("card_id", type=int)

    modes = [m.value for m in FilterMode]
    plan = add_command("plan", cmd_plan, "Generate meal plan ideas.")
    plan.add_argument("-n", "--count", type=_non_negative_int, help="Number of meals")
    plan.add_argument("--name-contains", default="", help="Case-insensitive name substring")
    plan.add_argument("-t", "--tags", help="Comma-separated tag filter")
    plan.add_argument("--tag-mode", choices=modes, default=FilterMode.ANY.value)
    plan.add_argument("-i", "--ingredients", help="Comma-separated ingredient filter")
    plan.add_argument("--ingredient-mode", choices=modes, default=FilterMode.ANY.value)
    plan.add_argument("--allow-jokers", action="store_true", help="Include joker cards")
    plan.add_argument(
        "--batch-mode",
        choices=[m.value for m in BatchMode],
        default=BatchMode.ALLOW.value,
    )
    plan.add_argument("--no-consecutive", action="store_true", help="Avoid back-to-back repeats")
    plan.add_argument(
        "--max-repeats",
        type=_non_negative_int,
        default=0,
        help="Max times one card may appear (0 = unlimited)",
    )

    serve = add_command("serve", cmd_serve, "Run the HTTP API.")
    serve.add_argument("--host", help="Bind host")
    serve.add_argument("--port", type=int, help="Bind port")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the CLI and return the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(log_level=args.log_level)

    with LoggingContext(command=args.command):
        store = CardStore()
        try:
            cards_file = args.cards or get_settings().cards_file
            if cards_file and args.command != "serve":
                loaded = store.load(read_cards_file(cards_file))
                logger.info(f"Loaded {len(loaded)} cards from {cards_file}")
            return args.handler(args, store)
        except (CardStoreError, NoCandidatesError) as e:
            logger.debug(f"Command failed: {e}")
            print(f"Error: {e}", file=sys.stderr)
            return 1
