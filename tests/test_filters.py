"""Criteria building, paging and boundary parsing."""
from datetime import date, datetime

import pytest

from order_core.domain.enums import OrderStatus, PaymentStatus
from order_core.domain.errors import ValidationError
from order_core.domain.filters import (
    OrderFilter,
    KeywordCriterion,
    CustomerCriterion,
    StatusCriterion,
    PaymentStatusCriterion,
    DateRangeCriterion,
)
from order_core.domain.paging import normalize_paging
from order_core.domain.validators import resolve_status, resolve_payment_status, parse_date
from order_core.utils.settings import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, MAX_PAGE_NUMBER


class TestOrderFilter:
    def test_absent_inputs_add_no_criteria(self):
        assert OrderFilter.build().is_empty
        assert OrderFilter.build(keyword="   ").is_empty

    def test_every_input_becomes_one_criterion(self):
        order_filter = OrderFilter.build(
            keyword="  ORD-1 ",
            customer_id="u-1",
            status=OrderStatus.SHIPPED,
            payment_status=PaymentStatus.PAID,
            start_date=date(2026, 3, 1),
            end_date=date(2026, 3, 31),
        )

        assert order_filter.criteria == (
            KeywordCriterion("ord-1"),
            CustomerCriterion("u-1"),
            StatusCriterion(OrderStatus.SHIPPED),
            PaymentStatusCriterion(PaymentStatus.PAID),
            DateRangeCriterion(
                start=datetime(2026, 3, 1, 0, 0, 0),
                end=datetime(2026, 3, 31, 23, 59, 59, 999999),
            ),
        )

    def test_and_returns_a_new_filter(self):
        base = OrderFilter.build(status=OrderStatus.PENDING)
        extended = base.and_(CustomerCriterion("u-2"))

        assert len(base.criteria) == 1
        assert len(extended.criteria) == 2

    def test_open_ended_date_range(self):
        criterion = DateRangeCriterion.from_dates(None, date(2026, 3, 5))
        assert criterion.start is None
        assert criterion.end == datetime(2026, 3, 5, 23, 59, 59, 999999)

    def test_end_before_start_is_rejected(self):
        with pytest.raises(ValidationError):
            OrderFilter.build(start_date=date(2026, 3, 5), end_date=date(2026, 3, 4))


class TestPaging:
    def test_defaults(self):
        page = normalize_paging()
        assert (page.page, page.size, page.sort_by, page.sort_dir) == (0, DEFAULT_PAGE_SIZE, "created_at", "desc")
        assert page.descending

    def test_clamps_size_and_negative_page(self):
        page = normalize_paging(page=-3, size=MAX_PAGE_SIZE + 50)
        assert page.page == 0
        assert page.size == MAX_PAGE_SIZE

    def test_offset(self):
        assert normalize_paging(page=2, size=5).offset == 10

    def test_clamps_huge_page_number(self):
        page = normalize_paging(page=10**19, size=MAX_PAGE_SIZE)
        assert page.page == MAX_PAGE_NUMBER
        assert page.offset < 2**63

    def test_sort_direction_is_case_insensitive(self):
        assert normalize_paging(sort_dir="ASC").sort_dir == "asc"

    @pytest.mark.parametrize("kwargs", [{"sort_by": "password"}, {"sort_dir": "sideways"}])
    def test_rejects_unknown_sort(self, kwargs):
        with pytest.raises(ValidationError):
            normalize_paging(**kwargs)


class TestBoundaryParsing:
    def test_status_tokens_are_case_insensitive(self):
        assert resolve_status("shipped") is OrderStatus.SHIPPED
        assert resolve_payment_status(" Paid ") is PaymentStatus.PAID

    def test_blank_tokens_mean_no_filter(self):
        assert resolve_status(None) is None
        assert resolve_payment_status("") is None

    def test_required_token(self):
        with pytest.raises(ValidationError):
            resolve_status(" ", required=True)

    @pytest.mark.parametrize("token", ["LOST", "paid"])
    def test_unknown_status_token(self, token):
        with pytest.raises(ValidationError):
            resolve_status(token)

    def test_unknown_payment_token(self):
        with pytest.raises(ValidationError):
            resolve_payment_status("CHARGED_BACK")

    def test_parse_date(self):
        assert parse_date("2026-03-01") == date(2026, 3, 1)
        assert parse_date(None) is None

    @pytest.mark.parametrize("value", ["03/01/2026", "2026-13-01", "yesterday"])
    def test_malformed_date(self, value):
        with pytest.raises(ValidationError):
            parse_date(value)
