"""Plan the coming week from the configured sources and print it as JSON."""
import argparse
import asyncio
import json
import sys

from bonusplan.config import settings
from bonusplan.errors import PlannerError
from bonusplan.logging import configure_logging, get_logger
from bonusplan.services.pipeline import build_week_plan

logger = get_logger("bonusplan.cli")


def _dump(plan) -> object:
    if isinstance(plan, dict):
        return {
            day: meal.model_dump(mode="json", by_alias=True) if meal else None
            for day, meal in plan.items()
        }
    return [meal.model_dump(mode="json", by_alias=True) if meal else None for meal in plan]


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="bonusplan", description=__doc__)
    parser.add_argument("--mode", choices=("rank", "match"), default=settings.ranking_mode)
    parser.add_argument("--seed", type=int, default=settings.random_seed)
    parser.add_argument(
        "--sort-week",
        action=argparse.BooleanOptionalAction,
        default=settings.sort_week_by_preparation_time,
        help="plan the days with the least preparation time first",
    )
    args = parser.parse_args(argv)

    configure_logging(settings.log_level)
    try:
        run = asyncio.run(build_week_plan(mode=args.mode, seed=args.seed, sort_week=args.sort_week))
    except PlannerError as e:
        logger.error("plan.failed error=%s", e)
        return 1
    json.dump(_dump(run.plan), sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
