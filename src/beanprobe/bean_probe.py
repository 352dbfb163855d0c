from __future__ import annotations

import inspect
from dataclasses import dataclass, field, InitVar

from typing_extensions import (
    Any,
    Generic,
    KeysView,
    List,
    Mapping,
    Optional,
    Self,
    Tuple,
    Type,
    TypeVar,
    Union,
)

from . import logger
from .accessor import Accessor
from .accessor_introspector import AccessorIntrospector, MethodAccessorIntrospector
from .failures import (
    BeanProbeError,
    InvalidArgument,
    NoBoundInstance,
    NoDefaultConstructor,
    PropertyNotFound,
    TypeMismatch,
)
from .pairing import AccessorTables, pair_accessors
from .type_descriptor import TypeDescriptor, admits
from .utils import get_full_class_name

T = TypeVar("T")


@dataclass(eq=False)
class BeanProbe(Generic[T]):
    """
    Name based access to the properties of objects of one class.

    The getters and setters of the class are discovered and paired once, when the probe is created from either the
    class or an instance of it. Afterward, the probe can be rebound to other instances of the same class with `swap`
    or to a fresh instance with `instantiate`, reusing the accessor tables.

    Getters are looked up by the lower-cased name. Values read and written through the probe go through the
    accessor methods, so any exception an accessor raises reaches the caller unchanged.
    The probe holds no lock, share it between threads only if the bound instance is not swapped concurrently.
    """

    subject: InitVar[Union[Type[T], T]]
    """
    The class to introspect, or an instance of it which is then bound to the probe.
    """

    introspector: AccessorIntrospector = field(
        default_factory=MethodAccessorIntrospector, repr=False
    )
    """
    The strategy that discovers the getters and setters of the subject type.
    """

    subject_type: Type[T] = field(init=False)
    """
    The introspected class.
    """

    instance: Optional[T] = field(init=False, default=None)
    """
    The object whose properties are read and written, if any.
    """

    _tables: AccessorTables = field(init=False, repr=False)
    _accessors: Tuple[Accessor, ...] = field(init=False, repr=False)

    def __post_init__(self, subject: Union[Type[T], T]):
        if subject is None:
            raise InvalidArgument("subject")
        if inspect.isclass(subject):
            self.subject_type = subject
        else:
            self.subject_type = type(subject)
            self.instance = subject
        try:
            discovered = self.introspector.discover(self.subject_type)
            self._tables = pair_accessors(discovered)
        except BeanProbeError as e:
            logger.error(f"Error introspecting {self.subject_type}: {e}")
            raise
        self._accessors = tuple(discovered.accessors)

    @property
    def bean(self) -> Optional[T]:
        return self.instance

    @property
    def accessors(self) -> Tuple[Accessor, ...]:
        """
        Every discovered getter and setter candidate in discovery order, including the ones that lost during
        pairing. Use them with `get_accessor_value` and `set_accessor_value`.
        """
        return self._accessors

    @property
    def getter_names(self) -> KeysView[str]:
        return self._tables.getters.keys()

    @property
    def setter_names(self) -> KeysView[str]:
        return self._tables.setters.keys()

    def get_getter_names(self) -> KeysView[str]:
        return self.getter_names

    def get_setter_names(self) -> KeysView[str]:
        return self.setter_names

    def type_info(self, name: str) -> TypeDescriptor:
        """
        Describe the type of a property.

        The getter is looked up by the lower-cased name, the setter by the name as given.

        :param name: The property name.
        :return: The type descriptor built from the getter return type or, without a getter, the setter parameter
            type.
        :raises PropertyNotFound: If neither a getter nor a setter is known under the name.
        """
        accessor = self._tables.getters.get(name.lower())
        if accessor is None:
            accessor = self._tables.setters.get(name)
        if accessor is None:
            raise self._property_not_found(name)
        return accessor.type_descriptor()

    def get_value(self, name: str) -> Any:
        """
        Read a property of the bound instance.

        :param name: The property name, case-insensitive.
        :return: What the getter returns.
        :raises PropertyNotFound: If no getter is known under the name.
        """
        getter = self._tables.getters.get(name.lower())
        if getter is None:
            raise self._property_not_found(name, kind="Getter")
        return self.get_accessor_value(getter)

    def get_accessor_value(self, getter: Accessor) -> Any:
        if not getter.is_getter:
            raise InvalidArgument("getter", f"{getter} is not a getter")
        return getter.invoke(self._bound_instance())

    def set_value(self, name: str, value: Any) -> Self:
        """
        Write a property of the bound instance.

        :param name: The property name, case-insensitive.
        :param value: The new value.
        :return: This probe.
        :raises PropertyNotFound: If no setter is known under the name.
        :raises TypeMismatch: If the value does not fit the setter parameter type.
        """
        setter = self._tables.setters.get(name.lower())
        if setter is None:
            raise self._property_not_found(name, kind="Setter")
        return self.set_accessor_value(setter, value)

    def set_accessor_value(self, setter: Accessor, value: Any) -> Self:
        if not setter.is_setter:
            raise InvalidArgument("setter", f"{setter} is not a setter")
        instance = self._bound_instance()
        if not admits(setter.value_hint, value):
            raise TypeMismatch(
                setter.property_name,
                setter.value_hint,
                type(value),
                reason=f"Argument {value!r} does not match the parameter of {setter}",
            )
        setter.invoke(instance, value)
        return self

    def set_values(self, values: Mapping[str, Any]) -> Self:
        """
        Set several properties in the iteration order of `values`.
        The first failing setter stops the remaining ones, already set values are kept.
        """
        for name, value in values.items():
            self.set_value(name, value)
        return self

    def instantiate(self) -> Self:
        """
        Bind a new instance of the subject type created without arguments.

        :raises NoDefaultConstructor: If the constructor has required parameters.
        """
        required_parameters = required_parameters_of(self.subject_type)
        if required_parameters:
            raise NoDefaultConstructor(self.subject_type, required_parameters)
        self.instance = self.subject_type()
        return self

    def swap(self, new_instance: T) -> Self:
        """
        Bind another instance of the subject type, keeping the accessor tables.

        :raises InvalidArgument: If `new_instance` is None or not an instance of the subject type.
        """
        if new_instance is None:
            raise InvalidArgument("new_instance")
        if not isinstance(new_instance, self.subject_type):
            raise InvalidArgument(
                "new_instance",
                f"is not an instance of {get_full_class_name(self.subject_type)}",
            )
        self.instance = new_instance
        return self

    def _bound_instance(self) -> T:
        if self.instance is None:
            raise NoBoundInstance(self.subject_type)
        return self.instance

    def _property_not_found(self, name: str, kind: str = "Accessor") -> PropertyNotFound:
        return PropertyNotFound(
            name, list(self.getter_names), list(self.setter_names), kind=kind
        )


def required_parameters_of(cls: Type) -> List[str]:
    """
    :return: The names of the constructor parameters of `cls` that have no default value.
    """
    try:
        parameters = inspect.signature(cls).parameters.values()
    except (TypeError, ValueError):
        return []
    return [
        parameter.name
        for parameter in parameters
        if parameter.default is inspect.Parameter.empty
        and parameter.kind
        not in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
    ]
