from __future__ import annotations

import inspect
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from functools import singledispatchmethod
from types import NoneType

from typing_extensions import (
    Any,
    Callable,
    Dict,
    Iterator,
    List,
    Optional,
    Self,
    Tuple,
    Type,
    get_type_hints,
)

from .accessor import (
    Accessor,
    AccessorKind,
    GETTER_PREFIXES,
    SETTER_PREFIXES,
    property_name_of,
)
from .failures import TypeResolutionError
from .type_descriptor import raw_type_of

logger = logging.getLogger(__name__)


@dataclass
class DiscoveredAccessors:
    """
    Getter and setter candidates of a class, grouped by property name.
    Every list keeps the discovery order, which decides ties during pairing.
    """

    getters: Dict[str, List[Accessor]] = field(default_factory=dict)
    setters: Dict[str, List[Accessor]] = field(default_factory=dict)
    accessors: List[Accessor] = field(default_factory=list)
    """
    All candidates in discovery order.
    """

    def add(self, accessor: Accessor):
        table = self.getters if accessor.is_getter else self.setters
        table.setdefault(accessor.property_name, []).append(accessor)
        self.accessors.append(accessor)

    @property
    def paired_names(self) -> List[str]:
        """
        The property names that have both getter and setter candidates, in getter discovery order.
        """
        return [name for name in self.getters if name in self.setters]


@dataclass
class AccessorIntrospector(ABC):
    """Strategy that discovers the getters and setters of a class."""

    @abstractmethod
    def discover(self, owner_cls: Type) -> DiscoveredAccessors:
        """Return the getter and setter candidates of `owner_cls`."""
        raise NotImplementedError


@dataclass
class MethodAccessorIntrospector(AccessorIntrospector):
    """
    Discover public methods named like getters (`get*`, `is*`) and setters (`set*`, `is*`).

    Methods are visited along the MRO starting at the class itself, so an override hides the method it overrides.
    Within a class, methods are visited in declaration order.
    Setters written as `functools.singledispatchmethod` contribute one candidate per registered type.
    A one-parameter `set*` or `is*` method without return annotation counts as a setter, typed by its parameter
    annotation or `Any` without one. An unannotated `is_member(self, item)` therefore becomes an `object` setter of
    `member`.
    """

    def discover(self, owner_cls: Type) -> DiscoveredAccessors:
        result = DiscoveredAccessors()
        for name, member, declaring_cls in self.public_members(owner_cls):
            for accessor in self.accessors_of_member(
                owner_cls, declaring_cls, name, member
            ):
                logger.debug(f"Discovered {accessor}")
                result.add(accessor)
        return result

    @staticmethod
    def public_members(owner_cls: Type) -> Iterator[Tuple[str, Any, Type]]:
        """
        :return: Name, raw class attribute and declaring class of every public attribute of `owner_cls`.
        """
        seen = set()
        for klass in owner_cls.__mro__:
            if klass is object:
                continue
            for name, member in vars(klass).items():
                if name in seen:
                    continue
                seen.add(name)
                if not name.startswith("_"):
                    yield name, member, klass

    def accessors_of_member(
        self, owner_cls: Type, declaring_cls: Type, name: str, member: Any
    ) -> List[Accessor]:
        if isinstance(member, singledispatchmethod):
            return self.overloaded_setters(owner_cls, declaring_cls, name, member)
        if not inspect.isfunction(member):
            return []
        parameters = parameters_of(member)
        if parameters is None or not property_name_of_prefixed(name):
            return []
        if not parameters and name.startswith(GETTER_PREFIXES):
            hints = resolve_type_hints(owner_cls, declaring_cls, name, member)
            return [
                Accessor(
                    AccessorKind.GETTER,
                    name,
                    property_name_of(name),
                    hints.get("return", Any),
                    member,
                    declaring_cls,
                )
            ]
        if self.is_setter(owner_cls, declaring_cls, name, member, parameters):
            hints = resolve_type_hints(owner_cls, declaring_cls, name, member)
            return [
                Accessor(
                    AccessorKind.SETTER,
                    name,
                    property_name_of(name),
                    hints.get(parameters[0].name, Any),
                    member,
                    declaring_cls,
                )
            ]
        return []

    def is_setter(
        self,
        owner_cls: Type,
        declaring_cls: Type,
        name: str,
        function: Callable,
        parameters: List[inspect.Parameter],
    ) -> bool:
        if not name.startswith(SETTER_PREFIXES) or len(parameters) != 1:
            return False
        if parameters[0].kind not in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            return False
        hints = resolve_type_hints(owner_cls, declaring_cls, name, function)
        return returns_nothing_or_self(hints.get("return", NoneType), declaring_cls)

    def overloaded_setters(
        self,
        owner_cls: Type,
        declaring_cls: Type,
        name: str,
        member: singledispatchmethod,
    ) -> List[Accessor]:
        """
        One setter candidate per type registered on a single dispatch method.
        The fallback registered for `object` is not a candidate.
        """
        if not name.startswith(SETTER_PREFIXES) or not property_name_of_prefixed(
            name
        ):
            return []
        result = []
        for registered_type, function in member.dispatcher.registry.items():
            if registered_type is object:
                continue
            parameters = parameters_of(function)
            if parameters is None or not self.is_setter(
                owner_cls, declaring_cls, name, function, parameters
            ):
                continue
            result.append(
                Accessor(
                    AccessorKind.SETTER,
                    name,
                    property_name_of(name),
                    registered_type,
                    function,
                    declaring_cls,
                )
            )
        return result


@dataclass
class PropertyAwareIntrospector(MethodAccessorIntrospector):
    """
    Discover accessor methods plus Python properties.

    The `fget` of a property is a getter and its `fset` a setter of the property's own name.
    An unannotated `fset` takes the type declared by the `fget`.
    """

    def accessors_of_member(
        self, owner_cls: Type, declaring_cls: Type, name: str, member: Any
    ) -> List[Accessor]:
        if not isinstance(member, property):
            return super().accessors_of_member(owner_cls, declaring_cls, name, member)
        result = []
        property_name = name.lower()
        getter_hint = Any
        if member.fget is not None:
            hints = resolve_type_hints(owner_cls, declaring_cls, name, member.fget)
            getter_hint = hints.get("return", Any)
            result.append(
                Accessor(
                    AccessorKind.GETTER,
                    name,
                    property_name,
                    getter_hint,
                    member.fget,
                    declaring_cls,
                )
            )
        if member.fset is not None:
            parameters = parameters_of(member.fset) or []
            hints = resolve_type_hints(owner_cls, declaring_cls, name, member.fset)
            setter_hint = getter_hint
            if parameters and parameters[0].name in hints:
                setter_hint = hints[parameters[0].name]
            result.append(
                Accessor(
                    AccessorKind.SETTER,
                    name,
                    property_name,
                    setter_hint,
                    member.fset,
                    declaring_cls,
                )
            )
        return result


def property_name_of_prefixed(name: str) -> bool:
    """
    :return: Whether `name` starts with an accessor prefix and names a non-empty property.
    """
    return name.startswith(GETTER_PREFIXES + SETTER_PREFIXES) and bool(
        property_name_of(name)
    )


def parameters_of(function: Callable) -> Optional[List[inspect.Parameter]]:
    """
    :return: The parameters of a method without the instance parameter, or None if it cannot take an instance.
    """
    try:
        parameters = list(inspect.signature(function).parameters.values())
    except (TypeError, ValueError):
        return None
    if not parameters:
        return None
    return parameters[1:]


def returns_nothing_or_self(return_hint: Any, declaring_cls: Type) -> bool:
    if return_hint is Self:
        return True
    return raw_type_of(return_hint) in (NoneType, declaring_cls)


def resolve_type_hints(
    owner_cls: Type, declaring_cls: Type, name: str, function: Callable
) -> Dict[str, Any]:
    """
    Resolve the annotations of an accessor.
    Names that are not visible from the module of the function are looked up among the owner and declaring class.
    """
    try:
        return get_type_hints(function)
    except NameError:
        local_namespace = {
            owner_cls.__name__: owner_cls,
            declaring_cls.__name__: declaring_cls,
        }
    try:
        return get_type_hints(function, localns=local_namespace)
    except NameError as e:
        logger.error(f"Error resolving accessor {owner_cls}.{name}: {e}")
        raise TypeResolutionError(owner_cls, name, e.name) from e
