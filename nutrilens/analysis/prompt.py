# -*- coding: utf-8 -*-
"""Analysis — extraction prompt for the vision model."""

from __future__ import annotations

from typing import Tuple

REPLY_KEYS: Tuple[str, ...] = (
    "foodName",
    "calories",
    "proteins",
    "carbs",
    "fats",
    "description",
    "warnings",
)

_SCHEMA = (
    "{\n"
    '  "foodName": "Name of the food",\n'
    '  "calories": "Total calories (e.g. 250 kcal)",\n'
    '  "proteins": "Total proteins in grams (e.g. 10g)",\n'
    '  "carbs": "Total carbohydrates in grams (e.g. 30g)",\n'
    '  "fats": "Total fats in grams (e.g. 5g)",\n'
    '  "description": "A very brief 1-sentence description of the food",\n'
    '  "warnings": ["Short warning", "..."]\n'
    "}"
)


def build_prompt(meal_type: str, diet_goal: str) -> str:
    """Return the extraction instruction for one image.

    ``meal_type`` and ``diet_goal`` are inserted verbatim. The output depends
    only on the two arguments.
    """
    keys = ", ".join(REPLY_KEYS)
    return (
        "Analyze this image of food. Identify the food item(s) and provide a nutritional breakdown.\n"
        "\n"
        "Context:\n"
        f"- Meal type: {meal_type}\n"
        f"- Diet goal: {diet_goal}\n"
        "\n"
        "Rules:\n"
        "1) The calories, proteins, carbs and fats values must describe ONLY the physical food "
        "and the portion visible in the image. Do NOT adjust them based on the time of day, "
        "the meal type or the diet goal.\n"
        "2) \"warnings\" is a list of short strings. Add a warning ONLY when the food is "
        "exceptionally high in sugar, fat, carbohydrates or calories relative to dietary "
        f"guidance for a {meal_type} meal, taking the \"{diet_goal}\" goal into account. "
        "Otherwise \"warnings\" MUST be an empty list [].\n"
        "3) Numeric values are strings with a unit suffix, e.g. \"250 kcal\" or \"12g\".\n"
        "\n"
        f"Return ONLY a single valid JSON object with exactly these keys and no others: {keys}.\n"
        "Structure:\n"
        f"{_SCHEMA}\n"
        "Do not wrap the JSON in markdown or code fences and do not add any text before or after it."
    )
