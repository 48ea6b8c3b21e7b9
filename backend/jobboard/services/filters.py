"""
Filter Parameter Normalizer

Turns raw query parameters (as sent by the job listing page) into a typed
``FilterOptions`` value. Malformed input never raises: every field degrades
to "absent" or to its default.

Recognized keys (camelCase as sent by the UI, snake_case also accepted):
    search, domain, skill, jobType, experienceLevel, locationType,
    minSalary, maxSalary, remote, postedWithin, sortBy, sortDir,
    page, pageSize

Usage:
    filters = parse_filter_params(request.query_params.multi_items())
    filters.page        # >= 1
    filters.min_salary  # int or None, never 0 for "abc"
"""

from dataclasses import dataclass, replace
from typing import Any, Iterable, Mapping, Optional, Tuple, Union

SORT_FIELDS = ("postedDate", "salary", "title", "viewCount")
SORT_DIRECTIONS = ("asc", "desc")

DEFAULT_SORT_BY = "postedDate"
DEFAULT_SORT_DIR = "desc"
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

# Larger values cannot be bound as INTEGER or subtracted from today
MAX_SALARY = 2**31 - 1
MAX_POSTED_WITHIN_DAYS = 36500
MAX_PAGE = 2**31 - 1

TRUTHY = {"true", "1", "yes", "on"}

RawValue = Union[str, list, tuple, None]
RawParams = Union[Mapping[str, RawValue], Iterable[Tuple[str, str]]]

# query key -> FilterOptions attribute
_TEXT_KEYS = {
    "search": "search",
    "domain": "domain",
    "skill": "skill",
    "jobType": "job_type",
    "experienceLevel": "experience_level",
    "locationType": "location_type",
}

_INT_KEYS = {
    "minSalary": "min_salary",
    "maxSalary": "max_salary",
    "postedWithin": "posted_within",
    "page": "page",
    "pageSize": "page_size",
}


@dataclass(frozen=True)
class FilterOptions:
    """
    Typed, request-scoped job search filters.

    ``None`` always means "not filtered on". Pagination and sort fields
    always carry a usable value.
    """
    search: Optional[str] = None
    domain: Optional[str] = None
    skill: Optional[str] = None
    job_type: Optional[str] = None
    experience_level: Optional[str] = None
    location_type: Optional[str] = None
    min_salary: Optional[int] = None
    max_salary: Optional[int] = None
    remote: Optional[bool] = None
    posted_within: Optional[int] = None
    sort_by: str = DEFAULT_SORT_BY
    sort_dir: str = DEFAULT_SORT_DIR
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    def with_page(self, page: int) -> "FilterOptions":
        return replace(self, page=max(1, page))

    def active_filters(self) -> dict:
        """Filters that narrow the result set, keyed by attribute name."""
        narrowing = (
            "search", "domain", "skill", "job_type", "experience_level",
            "location_type", "min_salary", "max_salary", "remote", "posted_within",
        )
        return {
            name: getattr(self, name)
            for name in narrowing
            if getattr(self, name) is not None
        }


def _snake(key: str) -> str:
    out = []
    for ch in key:
        if ch.isupper():
            out.append("_")
            out.append(ch.lower())
        else:
            out.append(ch)
    return "".join(out)


def _first(value: Any) -> Optional[str]:
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _parse_int(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        pass
    try:
        number = float(value)
    except ValueError:
        return None
    if number != number or number in (float("inf"), float("-inf")):
        return None
    return int(number)


def _collect(raw: RawParams) -> dict:
    """Flatten a mapping or a sequence of pairs into key -> first value."""
    items = raw.items() if isinstance(raw, Mapping) else raw
    collected: dict = {}
    for key, value in items:
        if key in collected:
            continue
        first = _first(value)
        if first is not None:
            collected[key] = first
    return collected


def _lookup(params: dict, key: str) -> Optional[str]:
    if key in params:
        return params[key]
    return params.get(_snake(key))


def parse_filter_params(
    raw: RawParams,
    default_page_size: int = DEFAULT_PAGE_SIZE,
    max_page_size: int = MAX_PAGE_SIZE,
) -> FilterOptions:
    """
    Normalize untyped request parameters into FilterOptions.

    Args:
        raw: Mapping of key -> str | list[str] | None, or (key, value) pairs
        default_page_size: Page size used when none (or garbage) is given
        max_page_size: Upper clamp for pageSize

    Returns:
        FilterOptions; unknown keys are ignored and invalid values are absent
    """
    params = _collect(raw)
    values: dict = {}

    for key, attr in _TEXT_KEYS.items():
        text = _lookup(params, key)
        if text is not None:
            values[attr] = text

    numbers = {attr: _parse_int(_lookup(params, key)) for key, attr in _INT_KEYS.items()}

    for attr in ("min_salary", "max_salary"):
        if numbers[attr] is not None and 0 <= numbers[attr] <= MAX_SALARY:
            values[attr] = numbers[attr]

    if numbers["posted_within"] is not None and 0 < numbers["posted_within"] <= MAX_POSTED_WITHIN_DAYS:
        values["posted_within"] = numbers["posted_within"]

    remote = _lookup(params, "remote")
    if remote is not None and remote.lower() in TRUTHY:
        values["remote"] = True

    sort_by = _lookup(params, "sortBy")
    values["sort_by"] = sort_by if sort_by in SORT_FIELDS else DEFAULT_SORT_BY

    sort_dir = _lookup(params, "sortDir")
    sort_dir = sort_dir.lower() if sort_dir else None
    values["sort_dir"] = sort_dir if sort_dir in SORT_DIRECTIONS else DEFAULT_SORT_DIR

    page = numbers["page"]
    values["page"] = min(max(1, page), MAX_PAGE) if page is not None else 1

    page_size = numbers["page_size"]
    if page_size is None or page_size < 1:
        page_size = default_page_size
    values["page_size"] = min(page_size, max_page_size)

    return FilterOptions(**values)
