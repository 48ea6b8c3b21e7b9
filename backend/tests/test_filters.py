"""
Tests for the filter parameter normalizer.

Tests cover:
- camelCase and snake_case keys, multi-value parameters
- Numeric parsing (garbage, floats, negatives)
- Page and page size clamping
- Sort key/direction validation
"""

import pytest

from jobboard.services.filters import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE,
    MAX_POSTED_WITHIN_DAYS,
    MAX_SALARY,
    FilterOptions,
    parse_filter_params,
)


class TestTextFilters:
    def test_empty_params_give_defaults(self):
        filters = parse_filter_params({})
        assert filters == FilterOptions()
        assert filters.page == 1
        assert filters.page_size == DEFAULT_PAGE_SIZE
        assert filters.sort_by == "postedDate"
        assert filters.sort_dir == "desc"
        assert filters.active_filters() == {}

    def test_camel_case_keys(self):
        filters = parse_filter_params({
            "jobType": "Full-time",
            "experienceLevel": "Senior",
            "locationType": "Hybrid",
            "search": "python",
        })
        assert filters.job_type == "Full-time"
        assert filters.experience_level == "Senior"
        assert filters.location_type == "Hybrid"
        assert filters.search == "python"

    def test_snake_case_keys_accepted(self):
        filters = parse_filter_params({"job_type": "Contract", "min_salary": "50000"})
        assert filters.job_type == "Contract"
        assert filters.min_salary == 50000

    def test_blank_text_is_absent(self):
        filters = parse_filter_params({"search": "   ", "domain": ""})
        assert filters.search is None
        assert filters.domain is None

    def test_list_value_uses_first_element(self):
        filters = parse_filter_params({"domain": ["Engineering", "Design"]})
        assert filters.domain == "Engineering"

    def test_pairs_use_first_occurrence(self):
        filters = parse_filter_params([("skill", "Python"), ("skill", "Go")])
        assert filters.skill == "Python"

    def test_unknown_keys_ignored(self):
        filters = parse_filter_params({"foo": "bar", "page": "2"})
        assert filters.page == 2
        assert filters.active_filters() == {}


class TestNumericFilters:
    def test_garbage_salary_is_absent(self):
        filters = parse_filter_params({"minSalary": "abc", "maxSalary": "lots"})
        assert filters.min_salary is None
        assert filters.max_salary is None

    def test_float_salary_truncated(self):
        assert parse_filter_params({"minSalary": "50000.75"}).min_salary == 50000

    def test_negative_salary_dropped(self):
        assert parse_filter_params({"minSalary": "-5"}).min_salary is None

    def test_nan_and_infinity_rejected(self):
        assert parse_filter_params({"minSalary": "nan"}).min_salary is None
        assert parse_filter_params({"maxSalary": "inf"}).max_salary is None

    def test_posted_within_must_be_positive(self):
        assert parse_filter_params({"postedWithin": "0"}).posted_within is None
        assert parse_filter_params({"postedWithin": "7"}).posted_within == 7

    def test_posted_within_beyond_date_range_is_absent(self):
        assert parse_filter_params({"postedWithin": str(MAX_POSTED_WITHIN_DAYS)}).posted_within == MAX_POSTED_WITHIN_DAYS
        assert parse_filter_params({"postedWithin": "1000000"}).posted_within is None

    def test_salary_beyond_integer_column_is_absent(self):
        assert parse_filter_params({"minSalary": str(MAX_SALARY)}).min_salary == MAX_SALARY
        assert parse_filter_params({"minSalary": "99999999999999999999"}).min_salary is None
        assert parse_filter_params({"maxSalary": str(MAX_SALARY + 1)}).max_salary is None

    @pytest.mark.parametrize("value,expected", [
        ("true", True),
        ("1", True),
        ("yes", True),
        ("false", None),
        ("0", None),
        ("maybe", None),
    ])
    def test_remote_flag(self, value, expected):
        assert parse_filter_params({"remote": value}).remote is expected


class TestPagination:
    @pytest.mark.parametrize("raw,expected", [
        ("0", 1),
        ("-3", 1),
        ("abc", 1),
        ("4", 4),
        ("2.9", 2),
        ("99999999999999999999", MAX_PAGE),
    ])
    def test_page_clamped(self, raw, expected):
        assert parse_filter_params({"page": raw}).page == expected

    def test_page_size_default_and_clamp(self):
        assert parse_filter_params({"pageSize": "0"}).page_size == DEFAULT_PAGE_SIZE
        assert parse_filter_params({"pageSize": "x"}).page_size == DEFAULT_PAGE_SIZE
        assert parse_filter_params({"pageSize": "500"}).page_size == 100
        assert parse_filter_params({"pageSize": "25"}).page_size == 25

    def test_custom_page_size_limits(self):
        filters = parse_filter_params({"pageSize": "80"}, default_page_size=20, max_page_size=50)
        assert filters.page_size == 50
        assert parse_filter_params({}, default_page_size=20).page_size == 20

    def test_with_page(self):
        filters = parse_filter_params({"jobType": "Contract"})
        assert filters.with_page(3).page == 3
        assert filters.with_page(0).page == 1
        assert filters.with_page(3).job_type == "Contract"


class TestSorting:
    def test_valid_sort(self):
        filters = parse_filter_params({"sortBy": "salary", "sortDir": "ASC"})
        assert filters.sort_by == "salary"
        assert filters.sort_dir == "asc"

    def test_invalid_sort_falls_back(self):
        filters = parse_filter_params({"sortBy": "dropTable", "sortDir": "sideways"})
        assert filters.sort_by == "postedDate"
        assert filters.sort_dir == "desc"
