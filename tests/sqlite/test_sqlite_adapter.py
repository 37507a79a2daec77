# tests/sqlite/test_sqlite_adapter.py
from datetime import date, datetime

import pytest

from qs_filter.base.interfaces import FilterAdapter
from qs_filter.base.predicates import (
    ComparisonKind,
    FilterSpecification,
    Predicate,
    SortDirection,
)
from qs_filter.sqlite.adapter import (
    SqliteFilterAdapter,
    SqlQueryParts,
    escape_like,
    quote_identifier,
    to_sql_param,
)


@pytest.fixture
def adapter() -> SqliteFilterAdapter:
    return SqliteFilterAdapter()


def test_is_a_filter_adapter(adapter):
    assert isinstance(adapter, FilterAdapter)


def test_quote_identifier():
    assert quote_identifier("age") == '"age"'
    assert quote_identifier('we"ird') == '"we""ird"'


def test_escape_like():
    assert escape_like("50%_off\\") == "50\\%\\_off\\\\"


@pytest.mark.parametrize(
    "value, expected",
    [
        (True, 1),
        (False, 0),
        (date(2022, 7, 6), "2022-07-06"),
        (datetime(2022, 7, 6, 10, 0), "2022-07-06T10:00:00"),
        (5, 5),
        ("x", "x"),
        (None, None),
    ],
)
def test_to_sql_param(value, expected):
    assert to_sql_param(value) == expected


@pytest.mark.parametrize(
    "predicate, sql, params",
    [
        (Predicate(ComparisonKind.EQ, 22), '"f" = ?', [22]),
        (Predicate(ComparisonKind.EQ, None), '"f" IS NULL', []),
        (Predicate(ComparisonKind.NE, None), '"f" IS NOT NULL', []),
        (Predicate(ComparisonKind.NE, False), '"f" != ?', [0]),
        (Predicate(ComparisonKind.IS_NULL), '"f" IS NULL', []),
        (Predicate(ComparisonKind.IS_NOT_NULL), '"f" IS NOT NULL', []),
        (Predicate(ComparisonKind.GT, 1), '"f" > ?', [1]),
        (Predicate(ComparisonKind.GTE, 1), '"f" >= ?', [1]),
        (Predicate(ComparisonKind.LT, 1), '"f" < ?', [1]),
        (Predicate(ComparisonKind.LTE, 1), '"f" <= ?', [1]),
        (Predicate(ComparisonKind.STARTSWITH, "s"), '"f" LIKE ? ESCAPE \'\\\'', ["s%"]),
        (Predicate(ComparisonKind.ENDSWITH, "a"), '"f" LIKE ? ESCAPE \'\\\'', ["%a"]),
        (Predicate(ComparisonKind.CONTAINS, "5%"), '"f" LIKE ? ESCAPE \'\\\'', ["%5\\%%"]),
        (Predicate(ComparisonKind.BETWEEN, (20, 30)), '"f" BETWEEN ? AND ?', [20, 30]),
        (Predicate(ComparisonKind.BETWEEN, (20, None)), '"f" >= ?', [20]),
        (Predicate(ComparisonKind.BETWEEN, (None, 30)), '"f" <= ?', [30]),
        (Predicate(ComparisonKind.BETWEEN, (None, None)), "1=1", []),
        (Predicate(ComparisonKind.IN, [1, 2]), '"f" IN (?, ?)', [1, 2]),
        (Predicate(ComparisonKind.NIN, [1]), '"f" NOT IN (?)', [1]),
        (Predicate(ComparisonKind.IN, []), "0=1", []),
        (Predicate(ComparisonKind.NIN, []), "1=1", []),
        (Predicate(ComparisonKind.IN, [1, None]), '("f" IN (?) OR "f" IS NULL)', [1]),
        (Predicate(ComparisonKind.NIN, [1, None]), '("f" NOT IN (?) AND "f" IS NOT NULL)', [1]),
        (Predicate(ComparisonKind.IN, [None]), '"f" IS NULL', []),
    ],
)
def test_translate_predicate(adapter, predicate, sql, params):
    assert adapter.translate_predicate("f", predicate) == (sql, params)


def test_date_only_predicates_compare_truncated_column(adapter):
    eq = Predicate(ComparisonKind.EQ, "2022-07-06", date_only=True)
    assert adapter.translate_predicate("lastLogin", eq) == ('date("lastLogin") = ?', ["2022-07-06"])

    between = Predicate(ComparisonKind.BETWEEN, ("2022-05-10", "2022-06-30"), date_only=True)
    assert adapter.translate_predicate("lastLogin", between) == (
        'date("lastLogin") >= ? AND date("lastLogin") <= ?',
        ["2022-05-10", "2022-06-30"],
    )


def test_translate_spec(adapter):
    spec = FilterSpecification(
        predicates={
            "age": Predicate(ComparisonKind.GT, 20),
            "anything": Predicate(ComparisonKind.BETWEEN, (None, None)),
            "name": Predicate(ComparisonKind.STARTSWITH, "s"),
        },
        order=[("age", SortDirection.ASC), ("name", SortDirection.DESC)],
        offset=25,
        limit=25,
    )
    parts = adapter.translate(spec)
    assert parts == SqlQueryParts(
        where='("age" > ?) AND ("name" LIKE ? ESCAPE \'\\\')',
        params=[20, "s%"],
        order_by='"age" ASC, "name" DESC',
        limit=25,
        offset=25,
    )


def test_translate_empty_spec_matches_everything(adapter):
    assert adapter.translate(FilterSpecification()) == SqlQueryParts()


def test_translate_rejects_other_types(adapter):
    with pytest.raises(TypeError, match="FilterSpecification"):
        adapter.translate({"age": "5"})


def test_build_select(adapter):
    spec = FilterSpecification(
        predicates={"age": Predicate(ComparisonKind.EQ, 22)},
        order=[("name", SortDirection.DESC)],
        offset=0,
        limit=5,
    )
    sql, params = adapter.build_select("customers", spec, columns=("id", "name"))
    assert sql == (
        'SELECT "id", "name" FROM "customers" WHERE ("age" = ?) '
        'ORDER BY "name" DESC LIMIT ? OFFSET ?'
    )
    assert params == [22, 5, 0]


def test_build_count_ignores_pagination(adapter):
    spec = FilterSpecification(
        predicates={"age": Predicate(ComparisonKind.EQ, 22)}, offset=25, limit=25
    )
    assert adapter.build_count("customers", spec) == (
        'SELECT COUNT(*) FROM "customers" WHERE ("age" = ?)',
        [22],
    )
