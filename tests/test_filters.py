from datetime import date

import pytest
from pydantic import ValidationError as SchemaValidationError

from pocketbook.core.errors import ValidationError
from pocketbook.models.category import CategoryType
from pocketbook.models.enums import TransactionType
from pocketbook.schemas.transaction import TransactionFilter
from pocketbook.services.filters import count_transactions, list_transactions


@pytest.fixture
def three_january(owner, make_category, make_transaction):
    food = make_category(owner)
    return [
        make_transaction(owner, food, "10", date(2024, 1, 10)),
        make_transaction(owner, food, "15", date(2024, 1, 15)),
        make_transaction(owner, food, "20", date(2024, 1, 20)),
    ]


def _dates(transactions):
    return [t.transaction_date for t in transactions]


class TestPagination:
    def test_limit_and_offset(self, store, owner, three_january):
        result = list_transactions(store, owner, TransactionFilter(limit=2, offset=1))

        assert _dates(result) == [date(2024, 1, 15), date(2024, 1, 10)]

    def test_no_pagination_returns_everything_descending(self, store, owner, three_january):
        result = list_transactions(store, owner, TransactionFilter())

        assert _dates(result) == [date(2024, 1, 20), date(2024, 1, 15), date(2024, 1, 10)]

    def test_offset_without_limit(self, store, owner, three_january):
        result = list_transactions(store, owner, TransactionFilter(offset=2))

        assert _dates(result) == [date(2024, 1, 10)]

    def test_limit_without_offset(self, store, owner, three_january):
        result = list_transactions(store, owner, TransactionFilter(limit=1))

        assert _dates(result) == [date(2024, 1, 20)]

    def test_offset_past_the_end(self, store, owner, three_january):
        assert list_transactions(store, owner, TransactionFilter(offset=5)) == []

    def test_each_call_recomputes(self, store, owner, three_january, make_category, make_transaction):
        filters = TransactionFilter(limit=1)
        first = list_transactions(store, owner, filters)
        newer = make_transaction(owner, make_category(owner), "1", date(2024, 2, 1))
        second = list_transactions(store, owner, filters)

        assert first[0].transaction_date == date(2024, 1, 20)
        assert second[0].id == newer.id

    def test_invalid_limit_rejected(self):
        with pytest.raises(SchemaValidationError):
            TransactionFilter(limit=0)

    def test_invalid_limit_rejected_by_engine(self, store, owner):
        filters = TransactionFilter.model_construct(limit=0)
        with pytest.raises(ValidationError):
            list_transactions(store, owner, filters)


class TestFilters:
    def test_date_bounds_are_inclusive(self, store, owner, three_january):
        filters = TransactionFilter(start_date=date(2024, 1, 10), end_date=date(2024, 1, 15))

        result = list_transactions(store, owner, filters)

        assert _dates(result) == [date(2024, 1, 15), date(2024, 1, 10)]

    def test_fields_are_anded(self, store, owner, make_category, make_transaction):
        salary = make_category(owner, "Salario", CategoryType.income)
        food = make_category(owner, "Comida")
        match = make_transaction(owner, food, "5", date(2024, 1, 5), TransactionType.expense)
        make_transaction(owner, food, "6", date(2024, 1, 6), TransactionType.income)
        make_transaction(owner, salary, "7", date(2024, 1, 7), TransactionType.expense)
        make_transaction(owner, food, "8", date(2024, 3, 1), TransactionType.expense)

        filters = TransactionFilter(
            start_date=date(2024, 1, 1),
            end_date=date(2024, 1, 31),
            category_id=food.id,
            type=TransactionType.expense,
        )
        result = list_transactions(store, owner, filters)

        assert [t.id for t in result] == [match.id]
        assert count_transactions(store, owner, filters) == 1

    def test_same_date_breaks_ties_by_id_desc(self, store, owner, make_category, make_transaction):
        food = make_category(owner)
        first = make_transaction(owner, food, "1", date(2024, 1, 1))
        second = make_transaction(owner, food, "2", date(2024, 1, 1))
        third = make_transaction(owner, food, "3", date(2024, 1, 1))

        result = list_transactions(store, owner, TransactionFilter())

        assert [t.id for t in result] == [third.id, second.id, first.id]

    def test_count_ignores_pagination(self, store, owner, three_january):
        assert count_transactions(store, owner, TransactionFilter(limit=1, offset=1)) == 3

    def test_reversed_range_is_rejected(self, store, owner):
        filters = TransactionFilter(start_date=date(2024, 2, 1), end_date=date(2024, 1, 1))

        with pytest.raises(ValidationError):
            list_transactions(store, owner, filters)


class TestOwnerIsolation:
    @pytest.mark.parametrize(
        "filters",
        [
            TransactionFilter(),
            TransactionFilter(type=TransactionType.expense),
            TransactionFilter(start_date=date(2024, 1, 1), end_date=date(2024, 12, 31)),
            TransactionFilter(limit=10, offset=0),
        ],
    )
    def test_other_owner_rows_never_listed(self, store, owner, other_owner, make_category, make_transaction, filters):
        mine = make_category(owner)
        theirs = make_category(other_owner)
        make_transaction(owner, mine, "1", date(2024, 1, 1))
        make_transaction(other_owner, theirs, "2", date(2024, 1, 2))

        result = list_transactions(store, owner, filters)

        assert {t.user_id for t in result} == {owner}

    def test_filtering_by_foreign_category_returns_nothing(
        self, store, owner, other_owner, make_category, make_transaction
    ):
        theirs = make_category(other_owner)
        make_transaction(other_owner, theirs, "2", date(2024, 1, 2))

        assert list_transactions(store, owner, TransactionFilter(category_id=theirs.id)) == []
