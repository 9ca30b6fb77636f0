"""Parse employment/education durations from résumé text into MM/YYYY ranges."""

import re
from datetime import date
from typing import NamedTuple, Optional, Tuple

PRESENT = "Present"

_MONTHS_ABBR = r"(?:jan|feb|mar|apr|may|jun|jul|aug|sep|sept|oct|nov|dec)"
_MONTHS_FULL = r"(?:january|february|march|april|may|june|july|august|september|october|november|december)"
_MONTH = rf"(?<![A-Za-z])(?:{_MONTHS_FULL}|{_MONTHS_ABBR})\.?"
_NUM_MONTH = r"(?<!\d)(?:0?[1-9]|1[0-2])"
_YEAR = r"(?:19|20)\d{2}"
_SEP = r"\s*(?:-|–|—|to|until|till)\s*"
_OPEN_END = r"(?:present|current|now|today)"

# Jan 2019 - Mar 2021 / 01/2019 - 03/2021 / Jan 2019 - Present / Jan 2019 - 2021
_MONTH_RANGE = re.compile(
    rf"(?P<m1>{_MONTH}|{_NUM_MONTH}\s*/)\s*(?P<y1>{_YEAR}){_SEP}"
    rf"(?:(?P<open>{_OPEN_END})|(?:(?P<m2>{_MONTH}|{_NUM_MONTH}\s*/)\s*)?(?P<y2>{_YEAR}))",
    re.IGNORECASE,
)
# 2018 - 2020 / 2018 - Present
_YEAR_RANGE = re.compile(
    rf"(?<!\d)(?P<y1>{_YEAR}){_SEP}(?:(?P<open>{_OPEN_END})|(?P<y2>{_YEAR}))(?!\d)",
    re.IGNORECASE,
)
# Nov-Dec 2024
_SHORT_MONTH_RANGE = re.compile(
    rf"(?P<m1>{_MONTH}){_SEP}(?P<m2>{_MONTH})\s*,?\s*(?P<y>{_YEAR})",
    re.IGNORECASE,
)
# Jan 2021 (single month + year)
_SINGLE_MONTH_YEAR = re.compile(rf"(?P<m>{_MONTH})\s*,?\s*(?P<y>{_YEAR})", re.IGNORECASE)
_SINGLE_YEAR = re.compile(rf"(?<!\d)(?P<y>{_YEAR})(?!\d)")

_MM_YYYY = re.compile(r"^(0[1-9]|1[0-2])/(\d{4})$")


class DateRange(NamedTuple):
    """Normalized duration: dates are 'MM/YYYY', 'Present' (end only) or ''."""

    start_date: str = ""
    end_date: str = ""
    current: bool = False
    matched_text: str = ""
    is_range: bool = False

    @property
    def parsed(self) -> bool:
        return bool(self.start_date)


def _month_num(token: str) -> int:
    token = token.strip().rstrip("/.").strip().lower()
    if token.isdigit():
        return int(token)
    months = [
        "jan", "feb", "mar", "apr", "may", "jun",
        "jul", "aug", "sep", "oct", "nov", "dec",
    ]
    for i, m in enumerate(months, 1):
        if token.startswith(m):
            return i
    raise KeyError(token)


def _fmt(month: int, year: str) -> str:
    return f"{month:02d}/{year}"


def contains_present(text: str) -> bool:
    """'current' on an entry is decided by this test alone, independent of parsed dates."""
    return bool(re.search(r"present", text or "", re.IGNORECASE))


def parse_duration(text: str) -> DateRange:
    """
    Find the first duration expression in text.
    Priority: month+year range, year-only range, short month range, single month+year, single year.
    Returns an empty DateRange (current=False) when nothing parses.
    """
    if not text or not text.strip():
        return DateRange()
    current = contains_present(text)

    m = _MONTH_RANGE.search(text)
    if m:
        try:
            start = _fmt(_month_num(m.group("m1")), m.group("y1"))
            if m.group("open"):
                end = PRESENT
            elif m.group("m2"):
                end = _fmt(_month_num(m.group("m2")), m.group("y2"))
            else:
                end = _fmt(12, m.group("y2"))
            return DateRange(start, end, current, m.group(0), True)
        except KeyError:
            pass

    m = _YEAR_RANGE.search(text)
    if m:
        end = PRESENT if m.group("open") else _fmt(12, m.group("y2"))
        return DateRange(_fmt(1, m.group("y1")), end, current, m.group(0), True)

    # Before the single year, which would otherwise take "Nov-Dec 2024"
    m = _SHORT_MONTH_RANGE.search(text)
    if m:
        try:
            start = _fmt(_month_num(m.group("m1")), m.group("y"))
            end = _fmt(_month_num(m.group("m2")), m.group("y"))
            return DateRange(start, end, current, m.group(0), True)
        except KeyError:
            pass

    m = _SINGLE_MONTH_YEAR.search(text)
    if m:
        try:
            month = _month_num(m.group("m"))
            return DateRange(_fmt(month, m.group("y")), _fmt(month, m.group("y")), current, m.group(0), False)
        except KeyError:
            pass

    m = _SINGLE_YEAR.search(text)
    if m:
        return DateRange(_fmt(1, m.group("y")), _fmt(12, m.group("y")), current, m.group(0), False)

    return DateRange()


def is_valid_month_year(value: str) -> bool:
    return bool(_MM_YYYY.match(value or ""))


def to_year_month(value: str) -> Optional[Tuple[int, int]]:
    """'MM/YYYY' -> (year, month); anything else -> None."""
    m = _MM_YYYY.match((value or "").strip())
    if not m:
        return None
    return int(m.group(2)), int(m.group(1))


def months_between(start: Tuple[int, int], end: Tuple[int, int]) -> int:
    return (end[0] - start[0]) * 12 + (end[1] - start[1])


def today_year_month(now: Optional[date] = None) -> Tuple[int, int]:
    now = now or date.today()
    return now.year, now.month
