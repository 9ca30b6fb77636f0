"""Total professional experience computed from experience entry dates."""

from datetime import date
from typing import Iterable, Optional, Tuple

from resume_match_ai.schemas.match_result import UserExperience
from resume_match_ai.schemas.profile import ExperienceEntry
from resume_match_ai.utils.date_parser import PRESENT, months_between, to_year_month, today_year_month


def _entry_months(entry: ExperienceEntry, today: Tuple[int, int]) -> Optional[int]:
    start = to_year_month(entry.start_date)
    if start is None:
        return None
    if entry.current or entry.end_date == PRESENT:
        end = today
    else:
        end = to_year_month(entry.end_date)
    if end is None:
        return None
    months = months_between(start, end)
    # end before start: discarded
    return months if months >= 0 else None


def compute_experience_duration(
    entries: Iterable[ExperienceEntry], now: Optional[date] = None
) -> UserExperience:
    """Sum of months over entries with parseable dates; current entries run until now."""
    entries = list(entries)
    today = today_year_month(now)
    total_months = 0
    for entry in entries:
        months = _entry_months(entry, today)
        if months is not None:
            total_months += months
    return UserExperience(
        total_years=total_months // 12,
        total_months=total_months,
        position_count=len(entries),
        has_detailed_experience=any(to_year_month(e.start_date) for e in entries),
    )
