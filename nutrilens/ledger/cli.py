# -*- coding: utf-8 -*-
"""
Command line client for a running NutriLens server.

Usage:
    nutrilens-scan pizza.jpg --meal-type Dinner --diet-goal "Keto / Low Carb"
    python -m nutrilens.ledger.cli salad.png soup.jpg --url http://localhost:5000/api/analyze
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from ..analysis.models import DEFAULT_DIET_GOAL, DEFAULT_MEAL_TYPE, DietGoal, MealType
from ..config import settings
from .models import NutritionRecord
from .session import ScanSession
from .storage import macro_breakdown


def print_record(record: NutritionRecord) -> None:
    print(f"{record.food_name or 'Unknown food'}")
    if record.description:
        print(f"  {record.description}")
    print(f"  Calories: {record.calories or '-'}")
    macros = macro_breakdown(record)
    print(f"  Protein {macros['proteins']}g | Carbs {macros['carbs']}g | Fats {macros['fats']}g")
    for warning in record.warnings:
        print(f"  ! {warning}")
    for alt in record.healthier_alternatives:
        print(f"  -> {alt}")


def cmd_scan(args: argparse.Namespace) -> int:
    session = ScanSession(api_url=args.url)
    failures = 0

    for raw_path in args.images:
        path = Path(raw_path)
        if not path.is_file():
            print(f"Error: Image not found: {path}")
            failures += 1
            continue

        session.select_path(path)
        session.meal_type = args.meal_type
        session.diet_goal = args.diet_goal

        entry = session.analyze()
        if entry is None:
            print(f"{path.name}: {session.error}")
            failures += 1
            continue

        print_record(entry.record)
        print("-" * 50)

    if len(session.ledger):
        print(f"Scans this session: {len(session.ledger)}")
        print(f"Today's calories: {session.ledger.daily_total()} kcal")

    return 1 if failures else 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Analyze food photos with a NutriLens server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("images", nargs="+", help="Image file(s) to analyze")
    parser.add_argument(
        "--meal-type",
        default=DEFAULT_MEAL_TYPE,
        help=f"Meal context, e.g. {', '.join(m.value for m in MealType)}",
    )
    parser.add_argument(
        "--diet-goal",
        default=DEFAULT_DIET_GOAL,
        help=f"Diet goal, e.g. {', '.join(g.value for g in DietGoal)}",
    )
    parser.add_argument(
        "--url",
        default=settings.api_url,
        help="Analyze endpoint (default: NUTRILENS_API_URL)",
    )

    args = parser.parse_args(argv)
    return cmd_scan(args)


if __name__ == "__main__":
    sys.exit(main())
