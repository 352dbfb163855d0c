from __future__ import annotations

import enum
from collections.abc import Collection, Mapping
from dataclasses import dataclass, field
from functools import cached_property
from types import NoneType, UnionType

import numpy as np
from typing_extensions import (
    Any,
    Annotated,
    ClassVar,
    Dict,
    Literal,
    Optional,
    Tuple,
    Type,
    TypeVar,
    Union,
    get_args,
    get_origin,
)

PRIMITIVE_WRAPPERS: Dict[Type, Type] = {
    np.bool_: bool,
    np.int8: int,
    np.str_: str,
    np.int16: int,
    np.int32: int,
    np.int64: int,
    np.float32: float,
    np.float64: float,
}
"""
The fixed-width scalar kinds and the builtin type each of them is boxed into.
"""


def is_primitive(cls: Any) -> bool:
    return cls in PRIMITIVE_WRAPPERS


def primitive_to_wrapper(cls: Type) -> Type:
    """
    :param cls: A raw type.
    :return: The builtin wrapper of `cls` if it is a primitive scalar kind, `cls` itself otherwise.
    """
    return PRIMITIVE_WRAPPERS.get(cls, cls)


NUMERIC_PROMOTIONS: Dict[Type, Tuple[Type, ...]] = {
    float: (int,),
    complex: (int, float),
}
"""
The builtin numeric types and the narrower types whose values they accept, `bool` excluded.
"""


def is_union(origin: Any) -> bool:
    return origin is Union or origin is UnionType


def raw_type_of(hint: Any) -> Type:
    """
    Reduce a type hint to the class that values of that hint are instances of.

    Optional hints are reduced to their non-None member, parameterized generics to their origin and anything that
    is not a class (Any, wide unions, literals) to `object`.

    :param hint: The resolved type hint.
    :return: The raw type.
    """
    if hint is Any or hint is object:
        return object
    if hint is None or hint is NoneType:
        return NoneType
    if isinstance(hint, TypeVar):
        return object if hint.__bound__ is None else raw_type_of(hint.__bound__)
    origin = get_origin(hint)
    if origin is Annotated:
        return raw_type_of(get_args(hint)[0])
    if is_union(origin):
        members = [arg for arg in get_args(hint) if arg is not NoneType]
        if len(members) == 1:
            return raw_type_of(members[0])
        return object
    if origin is not None:
        return origin if isinstance(origin, type) else object
    if isinstance(hint, type):
        return hint
    return object


def admits(hint: Any, value: Any) -> bool:
    """
    Check whether `value` can be passed where `hint` is declared.
    Only the raw type is checked, type arguments of generics are not.
    A primitive scalar kind also admits values of its wrapper type, `float` admits `int` and `complex` admits `int`
    and `float`.
    """
    if hint is Any or hint is object:
        return True
    if isinstance(hint, TypeVar):
        return hint.__bound__ is None or admits(hint.__bound__, value)
    origin = get_origin(hint)
    if origin is Annotated:
        return admits(get_args(hint)[0], value)
    if is_union(origin):
        return any(admits(arg, value) for arg in get_args(hint))
    if origin is Literal:
        return value in get_args(hint)
    if value is None:
        return hint is None or hint is NoneType
    raw_type = raw_type_of(hint)
    wrapper = primitive_to_wrapper(raw_type)
    if not isinstance(value, bool) and isinstance(
        value, NUMERIC_PROMOTIONS.get(wrapper, ())
    ):
        return True
    try:
        return isinstance(value, (raw_type, wrapper))
    except TypeError:
        # protocols that are not runtime checkable
        return True


def is_assignable(source: Type, target: Type) -> bool:
    """
    :return: Whether values of the raw type `source` can be passed where `target` is declared.
        Protocols that are not runtime checkable cannot be checked and accept everything.
    """
    if source is target:
        return True
    try:
        return issubclass(source, target)
    except TypeError:
        return True


class CollectionCheck(enum.Enum):
    """
    How a multi-valued property is tested against a value.
    """

    SIZE = "size"
    """
    The collection has exactly `value` elements.
    """
    CONTAINS = "contains"
    """
    `value` is an element of the collection.
    """


@dataclass(frozen=True)
class CollectionCheckInfo:
    """
    Describes how a collection valued property is checked by consumers of a type descriptor.
    """

    check: CollectionCheck
    value: Any
    element_type: Optional[Type] = None
    """
    The declared element type of the collection, if known.
    """

    def matches(self, collection: Optional[Collection]) -> bool:
        if collection is None:
            return self.check is CollectionCheck.SIZE and self.value == 0
        if self.check is CollectionCheck.SIZE:
            return len(collection) == self.value
        if self.element_type is not None and not admits(self.element_type, self.value):
            return False
        return self.value in collection


@dataclass
class TypeDescriptor:
    """
    Describes the declared type of a property as seen through one of its accessors.
    """

    type_class: Type
    """
    The raw type, e.g. `list` for `List[int]`.
    """
    generic_type: Any = None
    """
    The declared type hint including type arguments. Defaults to the raw type.
    """
    wrapped_type_class: Optional[Type] = None
    """
    The builtin wrapper if the raw type is a primitive scalar kind, otherwise the raw type itself.
    """
    collection_check_info: Optional[CollectionCheckInfo] = field(
        default=None, compare=False
    )
    """
    Attached by callers that evaluate multi-valued properties. Never computed here.
    """

    non_collection_types: ClassVar[Tuple[Type, ...]] = (str, bytes, bytearray, Mapping)
    """
    Collections that are treated as single values.
    """

    def __post_init__(self):
        if self.generic_type is None:
            self.generic_type = self.type_class
        if self.wrapped_type_class is None:
            self.wrapped_type_class = primitive_to_wrapper(self.type_class)

    @classmethod
    def from_hint(cls, hint: Any) -> TypeDescriptor:
        raw_type = raw_type_of(hint)
        return cls(raw_type, hint, primitive_to_wrapper(raw_type))

    @property
    def is_primitive(self) -> bool:
        return is_primitive(self.type_class)

    @cached_property
    def is_collection(self) -> bool:
        return issubclass(self.type_class, Collection) and not issubclass(
            self.type_class, self.non_collection_types
        )

    @cached_property
    def contained_type(self) -> Any:
        if not self.is_collection:
            raise ValueError(f"{self.generic_type} is not a collection type")
        args = get_args(self.generic_type)
        if not args:
            return Any
        return args[0]
