"""
Date-range predicates for year/month/day partitioned tables.

Tables written with partitionBy("year", "month", "day") can only be pruned
when the filter is expressed on those integer columns. This module turns a
pair of dates into such a filter:

    date_range_to_sql("2017-01-09", "2019-04-10")
    # (year = 2017 and month = 1 and day >= 9) or year = 2018
    #   or (year = 2019 and ((month < 4) or (month = 4 and day <= 10)))

The filter is built as a small expression tree first and rendered last, so
the same compiled range can be rendered to SQL text, evaluated in Python
against a (year, month, day) triple, or turned into a Spark Column.

The rendered text is consumed by existing queries, so its exact shape
(spacing, parentheses, clause order) must not change. That shape does not
match every day of the range: the months after the start month of the
first year, and whole months between two boundary months of one year, are
left out. Use compile_exact_date_range() / exact_date_range_to_sql() when
every day between the two dates has to match.
"""

import operator
from dataclasses import dataclass
from functools import reduce
from typing import Dict, Tuple, Union
import logging

from pyspark.sql import Column
from pyspark.sql import functions as F

from .dates import CalendarDate, normalize, parse_date

logger = logging.getLogger(__name__)

YEAR, MONTH, DAY = "year", "month", "day"

_OPERATORS = {
    "=": operator.eq,
    "<": operator.lt,
    ">": operator.gt,
    ">=": operator.ge,
    "<=": operator.le,
}


# =============================================================================
# EXPRESSION TREE
# =============================================================================

@dataclass(frozen=True)
class Comparison:
    """A single `column <op> value` clause."""
    column: str
    value: int

    symbol = ""

    def render(self) -> str:
        return f"{self.column} {self.symbol} {self.value}"

    def evaluate(self, row: Dict[str, int]) -> bool:
        return _OPERATORS[self.symbol](row[self.column], self.value)

    def to_column(self) -> Column:
        return _OPERATORS[self.symbol](F.col(self.column), self.value)


class Equals(Comparison):
    symbol = "="


class LessThan(Comparison):
    symbol = "<"


class GreaterThan(Comparison):
    symbol = ">"


class AtLeast(Comparison):
    symbol = ">="


class AtMost(Comparison):
    symbol = "<="


@dataclass(frozen=True)
class Between:
    """Inclusive `column between low and high`."""
    column: str
    low: int
    high: int

    def render(self) -> str:
        return f"{self.column} between {self.low} and {self.high}"

    def evaluate(self, row: Dict[str, int]) -> bool:
        return self.low <= row[self.column] <= self.high

    def to_column(self) -> Column:
        return F.col(self.column).between(self.low, self.high)


@dataclass(frozen=True)
class In:
    column: str
    values: Tuple[int, ...]

    def render(self) -> str:
        return f"{self.column} in ({','.join(str(v) for v in self.values)})"

    def evaluate(self, row: Dict[str, int]) -> bool:
        return row[self.column] in self.values

    def to_column(self) -> Column:
        return F.col(self.column).isin(list(self.values))


@dataclass(frozen=True)
class And:
    terms: Tuple["Predicate", ...]

    def render(self) -> str:
        return " and ".join(term.render() for term in self.terms)

    def evaluate(self, row: Dict[str, int]) -> bool:
        return all(term.evaluate(row) for term in self.terms)

    def to_column(self) -> Column:
        return reduce(operator.and_, (term.to_column() for term in self.terms))


@dataclass(frozen=True)
class Or:
    terms: Tuple["Predicate", ...]

    def render(self) -> str:
        return " or ".join(term.render() for term in self.terms)

    def evaluate(self, row: Dict[str, int]) -> bool:
        return any(term.evaluate(row) for term in self.terms)

    def to_column(self) -> Column:
        return reduce(operator.or_, (term.to_column() for term in self.terms))


@dataclass(frozen=True)
class Group:
    """Parenthesized sub-expression. Only affects rendering."""
    inner: "Predicate"

    def render(self) -> str:
        return f"({self.inner.render()})"

    def evaluate(self, row: Dict[str, int]) -> bool:
        return self.inner.evaluate(row)

    def to_column(self) -> Column:
        return self.inner.to_column()


Predicate = Union[Comparison, Between, In, And, Or, Group]


def all_of(*terms: Predicate) -> And:
    return And(tuple(terms))


def any_of(*terms: Predicate) -> Or:
    return Or(tuple(terms))


def render(predicate: Predicate) -> str:
    """Render a predicate to its SQL text."""
    return predicate.render()


def evaluate(predicate: Predicate, year: int, month: int, day: int) -> bool:
    """Evaluate a predicate against a single (year, month, day) triple."""
    return predicate.evaluate({YEAR: year, MONTH: month, DAY: day})


def to_column(predicate: Predicate) -> Column:
    """Convert a predicate to a Spark boolean Column."""
    return predicate.to_column()


# =============================================================================
# COMPILER
# =============================================================================

def _single_month(lo: CalendarDate, hi: CalendarDate) -> Predicate:
    if lo.day == hi.day:
        return all_of(Equals(YEAR, lo.year), Equals(MONTH, lo.month), Equals(DAY, lo.day))

    return Group(all_of(
        Equals(YEAR, lo.year),
        Equals(MONTH, lo.month),
        Between(DAY, lo.day, hi.day),
    ))


def _boundary_months(lo: CalendarDate, hi: CalendarDate) -> Predicate:
    # Only the two boundary months are matched. Months strictly between
    # them are not included, e.g. 2018-01-15..2018-04-15 misses Feb and Mar.
    # _exact_within_year() is the variant that includes them.
    return Group(all_of(
        Equals(YEAR, lo.year),
        Group(any_of(
            Group(all_of(Equals(MONTH, lo.month), AtLeast(DAY, lo.day))),
            Group(all_of(Equals(MONTH, hi.month), AtMost(DAY, hi.day))),
        )),
    ))


def _low_year(lo: CalendarDate) -> Predicate:
    # Bounds the starting month only: later months of the low year are not
    # matched, so this clause is narrower than the range. Kept for output
    # compatibility; compile_exact_date_range() covers the whole low year.
    return Group(all_of(Equals(YEAR, lo.year), Equals(MONTH, lo.month), AtLeast(DAY, lo.day)))


def _middle_years(lo: CalendarDate, hi: CalendarDate):
    years = tuple(range(lo.year + 1, hi.year))

    if not years:
        return None
    if len(years) == 1:
        return Equals(YEAR, years[0])
    return In(YEAR, years)


def _high_year(hi: CalendarDate) -> Predicate:
    return Group(all_of(
        Equals(YEAR, hi.year),
        Group(any_of(
            Group(LessThan(MONTH, hi.month)),
            Group(all_of(Equals(MONTH, hi.month), AtMost(DAY, hi.day))),
        )),
    ))


def compile_date_range(date1: str, date2: str) -> Predicate:
    """
    Compile two dates into a year/month/day predicate tree.

    The dates may be given in either order.

    Args:
        date1: Some date ('yyyy-mm-dd')
        date2: Some date ('yyyy-mm-dd')

    Returns:
        Predicate tree over the year, month and day columns

    Raises:
        FormatError: If either date cannot be parsed
    """
    lo, hi = normalize(parse_date(date1), parse_date(date2))

    if lo.year == hi.year:
        if lo.month == hi.month:
            return _single_month(lo, hi)
        return _boundary_months(lo, hi)

    middle = _middle_years(lo, hi)
    clauses = [_low_year(lo)]
    if middle is not None:
        clauses.append(middle)
    clauses.append(_high_year(hi))

    return any_of(*clauses)


def date_range_to_sql(date1: str, date2: str) -> str:
    """
    Convert a date range into its corresponding SQL filter.

    date_range_to_sql("2015-01-09", "2019-04-10") returns:
    "(year = 2015 and month = 1 and day >= 9) or year in (2016,2017,2018)
    or (year = 2019 and ((month < 4) or (month = 4 and day <= 10)))"

    Args:
        date1: Some date ('yyyy-mm-dd')
        date2: Some date ('yyyy-mm-dd')

    Returns:
        SQL filter in string form
    """
    sql = render(compile_date_range(date1, date2))
    logger.debug(f"Compiled date range {date1}, {date2}: {sql}")
    return sql


# =============================================================================
# EXACT COMPILER
# =============================================================================

def _exact_within_year(lo: CalendarDate, hi: CalendarDate) -> Predicate:
    clauses = [Group(all_of(Equals(MONTH, lo.month), AtLeast(DAY, lo.day)))]
    if hi.month - lo.month > 1:
        clauses.append(Group(all_of(GreaterThan(MONTH, lo.month), LessThan(MONTH, hi.month))))
    clauses.append(Group(all_of(Equals(MONTH, hi.month), AtMost(DAY, hi.day))))

    return Group(all_of(Equals(YEAR, lo.year), Group(any_of(*clauses))))


def _exact_low_year(lo: CalendarDate) -> Predicate:
    return Group(all_of(
        Equals(YEAR, lo.year),
        Group(any_of(
            Group(GreaterThan(MONTH, lo.month)),
            Group(all_of(Equals(MONTH, lo.month), AtLeast(DAY, lo.day))),
        )),
    ))


def compile_exact_date_range(date1: str, date2: str) -> Predicate:
    """
    Compile two dates into a predicate matching every day between them.

    Same clause grammar as compile_date_range(), so it still prunes
    year/month/day partitions, but without the skipped months.

    Raises:
        FormatError: If either date cannot be parsed
    """
    lo, hi = normalize(parse_date(date1), parse_date(date2))

    if lo.year == hi.year:
        if lo.month == hi.month:
            return _single_month(lo, hi)
        return _exact_within_year(lo, hi)

    middle = _middle_years(lo, hi)
    clauses = [_exact_low_year(lo)]
    if middle is not None:
        clauses.append(middle)
    clauses.append(_high_year(hi))

    return any_of(*clauses)


def exact_date_range_to_sql(date1: str, date2: str) -> str:
    """SQL text of compile_exact_date_range()."""
    sql = render(compile_exact_date_range(date1, date2))
    logger.debug(f"Compiled exact date range {date1}, {date2}: {sql}")
    return sql
