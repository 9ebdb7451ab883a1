"""Tests for column, DataFrame and schema helpers."""

import pytest
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel
from pyspark.sql import functions as F
from pyspark.sql.types import (
    ArrayType,
    BooleanType,
    DateType,
    DecimalType,
    DoubleType,
    LongType,
    MapType,
    StringType,
    StructField,
    StructType,
    TimestampType,
)

from src.functions import add_columns, distinct_rows, nvl, rename_columns, schema_for, to_date_str


@dataclass
class SampleRecord:
    x: str
    y: int


class Color(str, Enum):
    RED = "red"
    BLUE = "blue"


@dataclass
class Nested:
    name: Optional[str]
    scores: List[float]


class SampleModel(BaseModel):
    id: int
    label: Optional[str] = None
    color: Color
    created: datetime
    day: date
    price: Decimal
    active: bool
    tags: Dict[str, int]
    nested: Nested


class TestNvl:
    """Tests for null replacement."""

    def test_nvl_with_literal(self, spark):
        df = spark.createDataFrame([("a",), ("b",), (None,)], "value string")
        result = df.select(nvl("value", "c").alias("value"))
        assert sorted(r.value for r in result.collect()) == ["a", "b", "c"]

    def test_nvl_with_column(self, spark):
        df = spark.createDataFrame([("a", "a1"), (None, "b1")], "a string, b string")
        result = df.withColumn("a", nvl(F.col("a"), F.col("b")))
        assert sorted((r.a, r.b) for r in result.collect()) == [("a", "a1"), ("b1", "b1")]


class TestToDateStr:
    """Tests for building date strings from partition columns."""

    def test_pads_month_and_day(self, spark):
        df = spark.createDataFrame([(2019, 1, 5), (2018, 11, 30)], "year int, month int, day int")
        result = df.select(to_date_str("year", "month", "day").alias("d"))
        assert sorted(r.d for r in result.collect()) == ["2018-11-30", "2019-01-05"]

    def test_null_part_gives_null(self, spark):
        df = spark.createDataFrame([(2019, None, 5)], "year int, month int, day int")
        row = df.select(to_date_str(F.col("year"), F.col("month"), F.col("day")).alias("d")).first()
        assert row.d is None


class TestDistinctRows:
    """Tests for window-based deduplication."""

    def test_removes_duplicates(self, spark):
        df = spark.createDataFrame([("a",), ("b",), ("a",)], "value string")
        result = distinct_rows(df, ["value"], ["value"])
        assert sorted(r.value for r in result.collect()) == ["a", "b"]

    def test_keeps_first_by_order(self, spark):
        df = spark.createDataFrame([("a", 7), ("b", 3), ("a", 2)], "x string, y int")
        result = distinct_rows(df, [F.col("x")], [F.col("y").desc()])
        assert sorted((r.x, r.y) for r in result.collect()) == [("a", 7), ("b", 3)]

    def test_keeps_columns_unchanged(self, spark):
        df = spark.createDataFrame([("a", 1, 10), ("a", 2, 20)], "x string, rn0 int, rn1 int")
        result = distinct_rows(df, ["x"], [F.col("rn0").asc()])
        assert result.columns == ["x", "rn0", "rn1"]
        assert [(r.rn0, r.rn1) for r in result.collect()] == [(1, 10)]


class TestBulkColumns:
    """Tests for add_columns and rename_columns."""

    def test_add_columns(self, spark):
        df = spark.createDataFrame([(1,)], "a int")
        result = add_columns(df, ("b", F.col("a") + 1), ("c", F.col("b") * 10))
        row = result.first()
        assert result.columns == ["a", "b", "c"]
        assert (row.a, row.b, row.c) == (1, 2, 20)

    def test_add_no_columns(self, spark):
        df = spark.createDataFrame([(1,)], "a int")
        assert add_columns(df).columns == ["a"]

    def test_rename_columns(self, spark):
        df = spark.createDataFrame([(1, 2)], "a int, b int")
        result = rename_columns(df, ("a", "x"), ("b", "y"))
        assert result.columns == ["x", "y"]

    def test_rename_chained(self, spark):
        df = spark.createDataFrame([(1,)], "a int")
        assert rename_columns(df, ("a", "b"), ("b", "c")).columns == ["c"]

    def test_rename_missing_column_is_noop(self, spark):
        df = spark.createDataFrame([(1,)], "a int")
        assert rename_columns(df, ("missing", "x")).columns == ["a"]


class TestSchemaFor:
    """Tests for schema derivation from Python types."""

    def test_dataclass_schema(self):
        assert schema_for(SampleRecord) == StructType([
            StructField("x", StringType(), False),
            StructField("y", LongType(), False),
        ])

    def test_pydantic_schema(self):
        schema = schema_for(SampleModel)

        assert schema["id"] == StructField("id", LongType(), False)
        assert schema["label"] == StructField("label", StringType(), True)
        assert schema["color"].dataType == StringType()
        assert schema["created"].dataType == TimestampType()
        assert schema["day"].dataType == DateType()
        assert schema["price"].dataType == DecimalType(38, 18)
        assert schema["active"].dataType == BooleanType()
        assert schema["tags"].dataType == MapType(StringType(), LongType(), False)
        assert schema["nested"].dataType == StructType([
            StructField("name", StringType(), True),
            StructField("scores", ArrayType(DoubleType(), False), False),
        ])

    def test_schema_matches_dataframe(self, spark):
        df = spark.createDataFrame([("a", 7), ("b", 3)], schema_for(SampleRecord))
        assert df.schema == schema_for(SampleRecord)
        assert df.count() == 2

    def test_unsupported_type(self):
        @dataclass
        class Unsupported:
            value: object

        with pytest.raises(TypeError):
            schema_for(Unsupported)

    def test_not_a_model(self):
        with pytest.raises(TypeError):
            schema_for(int)
