from __future__ import annotations

import enum
from dataclasses import dataclass
from functools import cached_property

from typing_extensions import Any, Callable, Type, Tuple, Optional

from .type_descriptor import TypeDescriptor, raw_type_of
from .utils import get_full_class_name

GETTER_PREFIXES: Tuple[str, ...] = ("get", "is")
SETTER_PREFIXES: Tuple[str, ...] = ("set", "is")


class AccessorKind(enum.Enum):
    GETTER = "getter"
    SETTER = "setter"


def property_name_of(accessor_name: str) -> str:
    """
    Normalize the name of an accessor method to the name of the property it accesses.

    The name is lower-cased and the `is` or `get`/`set` prefix is stripped, together with the underscore that
    follows it in snake_case names. `getFirstName`, `get_first_name` and `setFirstName` map to `firstname`,
    `first_name` and `firstname` respectively.

    :param accessor_name: The method name, which must start with one of the accessor prefixes.
    :return: The property name.
    """
    result = accessor_name.lower()
    if result.startswith("is"):
        result = result[2:]
    else:
        result = result[3:]
    if result.startswith("_"):
        result = result[1:]
    return result


@dataclass(frozen=True, eq=False)
class Accessor:
    """
    A getter or a setter discovered on a class.
    Accessors compare by identity, an accessor is a reference to exactly one invocable implementation.
    """

    kind: AccessorKind
    name: str
    """
    The attribute name the accessor was found under.
    """
    property_name: str
    """
    The normalized name of the property.
    """
    value_hint: Any
    """
    The return type hint of a getter or the parameter type hint of a setter.
    """
    function: Callable
    """
    The plain function, called with the instance as first argument.
    """
    owner: Type
    """
    The class that declares the accessor.
    """

    @cached_property
    def value_type(self) -> Type:
        return raw_type_of(self.value_hint)

    @property
    def is_getter(self) -> bool:
        return self.kind is AccessorKind.GETTER

    @property
    def is_setter(self) -> bool:
        return self.kind is AccessorKind.SETTER

    def type_descriptor(self) -> TypeDescriptor:
        return TypeDescriptor.from_hint(self.value_hint)

    def invoke(self, instance: Any, value: Optional[Any] = None) -> Any:
        """
        Call the accessor on `instance`. Setters receive `value`, getters ignore it.
        Exceptions raised by the accessor propagate unchanged.
        """
        if self.is_setter:
            return self.function(instance, value)
        return self.function(instance)

    def __repr__(self):
        return (
            f"{get_full_class_name(self.owner)}.{self.name}"
            f"({self.kind.value}: {get_full_class_name(self.value_hint)})"
        )
