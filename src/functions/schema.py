"""
Schema introspection.

Builds a Spark StructType from a dataclass or a pydantic model, so a
Dataset's schema can be declared once as a Python type and reused when
reading files or creating DataFrames.
"""

import dataclasses
import types
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, List, Tuple, Union, get_args, get_origin, get_type_hints

from pydantic import BaseModel
from pyspark.sql.types import (
    ArrayType,
    BinaryType,
    BooleanType,
    DataType,
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

_UNION_TYPES = (Union, getattr(types, "UnionType", Union))

ATOMIC_TYPES = {
    str: StringType(),
    int: LongType(),
    float: DoubleType(),
    bool: BooleanType(),
    bytes: BinaryType(),
    datetime: TimestampType(),
    date: DateType(),
    Decimal: DecimalType(38, 18),
}


def _unwrap_optional(annotation: Any) -> Tuple[Any, bool]:
    """Return (inner type, nullable) for Optional[X] / X | None."""
    if get_origin(annotation) in _UNION_TYPES:
        args = [a for a in get_args(annotation) if a is not type(None)]
        if len(args) == 1:
            return args[0], len(args) < len(get_args(annotation))
        raise TypeError(f"Union types are not supported in a schema: {annotation}")
    return annotation, False


def _model_fields(model: type) -> List[Tuple[str, Any]]:
    if isinstance(model, type) and issubclass(model, BaseModel):
        return [(name, field.annotation) for name, field in model.model_fields.items()]
    if dataclasses.is_dataclass(model):
        hints = get_type_hints(model)
        return [(f.name, hints[f.name]) for f in dataclasses.fields(model)]
    raise TypeError(f"Cannot derive a schema from {model!r}: expected a dataclass or pydantic model")


def _is_model(tp: Any) -> bool:
    return isinstance(tp, type) and (issubclass(tp, BaseModel) or dataclasses.is_dataclass(tp))


def _data_type(annotation: Any) -> Tuple[DataType, bool]:
    tp, nullable = _unwrap_optional(annotation)
    origin = get_origin(tp)

    if origin in (list, tuple, set, frozenset):
        args = get_args(tp)
        if not args:
            raise TypeError(f"Missing element type for {tp}")
        element, element_nullable = _data_type(args[0])
        return ArrayType(element, containsNull=element_nullable), nullable

    if origin is dict:
        key_arg, value_arg = get_args(tp)
        key, _ = _data_type(key_arg)
        value, value_nullable = _data_type(value_arg)
        return MapType(key, value, valueContainsNull=value_nullable), nullable

    if isinstance(tp, type) and issubclass(tp, Enum):
        return (LongType() if issubclass(tp, int) else StringType()), nullable

    if _is_model(tp):
        return schema_for(tp), nullable

    if tp in ATOMIC_TYPES:
        return ATOMIC_TYPES[tp], nullable

    raise TypeError(f"No Spark type for annotation {annotation!r}")


def schema_for(model: type) -> StructType:
    """
    Return the Spark schema for a dataclass or pydantic model.

    Optional[...] fields become nullable; every other field is not nullable.

    Args:
        model: The type whose schema is to be returned

    Returns:
        StructType for a DataFrame built from instances of that type

    Raises:
        TypeError: If a field's annotation has no Spark equivalent
    """
    fields = []
    for name, annotation in _model_fields(model):
        data_type, nullable = _data_type(annotation)
        fields.append(StructField(name, data_type, nullable))
    return StructType(fields)
