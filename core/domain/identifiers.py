from __future__ import annotations

import random
from datetime import date
from uuid import uuid4


def generate_id() -> str:
    return str(uuid4())


def generate_fl_number(today: date | None = None, rng: random.Random | None = None) -> str:
    """Client-side FL number: FL-<year>-<4 random digits>. Not guaranteed unique."""
    year = (today or date.today()).year
    suffix = (rng or random).randint(1000, 9999)
    return f"FL-{year}-{suffix}"


def sequential_fl_number(year: int, existing_count: int) -> str:
    return f"FL-{year}-{existing_count + 1:04d}"


__all__ = ["generate_id", "generate_fl_number", "sequential_fl_number"]
