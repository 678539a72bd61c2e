"""Configuration for the budgeting core.

Labels and thresholds that affect grouping or scoring live here so that
callers can override them from the environment instead of patching code.
"""

import os
from typing import Tuple

# Grouping label for records without a category
UNCATEGORIZED_LABEL: str = os.getenv("BUDGET_UNCATEGORIZED_LABEL", "Uncategorized")

# Reported as the most common category when there is nothing to count
NO_CATEGORY_LABEL: str = os.getenv("BUDGET_NO_CATEGORY_LABEL", "None")

# Category filter sentinel meaning "do not filter"
ALL_CATEGORIES: str = "All Categories"

CURRENCY: str = os.getenv("BUDGET_CURRENCY", "USD")

CATEGORIES: Tuple[str, ...] = (
    "groceries",
    "household",
    "transport",
    "eating out",
    "health",
    "gifts",
    "bills",
    "other",
)

# Sunday-first, matches first_weekday()
DAY_NAMES: Tuple[str, ...] = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)

# (ratio above which the row applies, score, status, message), checked in order
HEALTH_THRESHOLDS: Tuple[Tuple[float, int, str, str], ...] = (
    (1.5, 20, "danger", "Spending way above budget pace!"),
    (1.2, 40, "warning", "Spending faster than budget allows"),
    (1.0, 70, "good", "Slightly above budget pace"),
    (0.8, 90, "excellent", "Great budget control!"),
)
HEALTH_DEFAULT: Tuple[int, str, str] = (100, "excellent", "Perfect budget control!")
HEALTH_NO_BUDGET: Tuple[int, str, str] = (100, "excellent", "No budget set")
