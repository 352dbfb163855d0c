from types import NoneType

import numpy as np
import pytest
from typing_extensions import Any, List, Literal, Optional, Set, Union, TypeVar

from beanprobe.type_descriptor import (
    CollectionCheck,
    CollectionCheckInfo,
    TypeDescriptor,
    admits,
    is_assignable,
    primitive_to_wrapper,
    raw_type_of,
)
from .dataset.example_beans import Shape, Circle, Named

BoundToShape = TypeVar("BoundToShape", bound=Shape)


def test_raw_type_of():
    assert raw_type_of(int) is int
    assert raw_type_of(List[int]) is list
    assert raw_type_of(Optional[str]) is str
    assert raw_type_of(int | None) is int
    assert raw_type_of(Union[int, str]) is object
    assert raw_type_of(Any) is object
    assert raw_type_of(None) is NoneType
    assert raw_type_of(BoundToShape) is Shape
    assert raw_type_of(Literal["a", "b"]) is object


def test_primitive_to_wrapper():
    assert primitive_to_wrapper(np.int32) is int
    assert primitive_to_wrapper(np.float32) is float
    assert primitive_to_wrapper(np.bool_) is bool
    assert primitive_to_wrapper(str) is str
    assert primitive_to_wrapper(Circle) is Circle


def test_admits():
    assert admits(str, "x")
    assert not admits(str, 1)
    assert not admits(str, None)
    assert admits(Optional[str], None)
    assert admits(np.int32, 3)
    assert admits(np.int32, np.int32(3))
    assert not admits(np.int32, 3.5)
    assert admits(List[int], [1, 2])
    assert admits(Any, object())
    assert admits(Shape, Circle())
    assert not admits(Circle, Shape())
    assert admits(Union[int, str], "x")
    assert not admits(Literal["a"], "b")


def test_admits_numeric_promotion():
    assert admits(float, 5)
    assert admits(np.float32, 5)
    assert not admits(float, True)
    assert admits(complex, 1.5)
    assert admits(complex, 2)
    assert not admits(complex, False)
    assert not admits(int, 1.0)
    assert not admits(float, "5")


def test_admits_protocols_that_are_not_runtime_checkable():
    assert admits(Named, object())
    assert admits(Named, 1)
    assert admits(Optional[Named], None)


def test_is_assignable():
    assert is_assignable(int, int)
    assert is_assignable(Circle, Shape)
    assert not is_assignable(Shape, Circle)
    assert is_assignable(Named, Named)
    assert is_assignable(Circle, Named)


def test_descriptor_of_primitive():
    descriptor = TypeDescriptor.from_hint(np.int32)
    assert descriptor.type_class is np.int32
    assert descriptor.wrapped_type_class is int
    assert descriptor.generic_type is np.int32
    assert descriptor.is_primitive
    assert not descriptor.is_collection


def test_descriptor_defaults():
    descriptor = TypeDescriptor(str)
    assert descriptor.generic_type is str
    assert descriptor.wrapped_type_class is str
    assert descriptor.collection_check_info is None


def test_descriptor_of_collection():
    descriptor = TypeDescriptor.from_hint(Set[Circle])
    assert descriptor.type_class is set
    assert descriptor.generic_type == Set[Circle]
    assert descriptor.is_collection
    assert descriptor.contained_type is Circle

    assert not TypeDescriptor.from_hint(str).is_collection
    with pytest.raises(ValueError):
        TypeDescriptor.from_hint(str).contained_type


def test_collection_check_info():
    size_check = CollectionCheckInfo(CollectionCheck.SIZE, 2)
    assert size_check.matches(["a", "b"])
    assert not size_check.matches(["a"])
    assert CollectionCheckInfo(CollectionCheck.SIZE, 0).matches(None)

    contains_check = CollectionCheckInfo(CollectionCheck.CONTAINS, "a", element_type=str)
    assert contains_check.matches(["a", "b"])
    assert not contains_check.matches(["b"])
    assert not contains_check.matches(None)
    assert not CollectionCheckInfo(CollectionCheck.CONTAINS, 1, str).matches([1])


def test_collection_check_info_is_attached_after_the_fact():
    descriptor = TypeDescriptor.from_hint(List[str])
    info = CollectionCheckInfo(CollectionCheck.SIZE, 1, element_type=descriptor.contained_type)
    descriptor.collection_check_info = info
    assert descriptor.collection_check_info is info
    assert descriptor == TypeDescriptor.from_hint(List[str])
