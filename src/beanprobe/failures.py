"""
This module defines the exception types raised by the beanprobe package.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from typing_extensions import Type, List, Optional, Any

from .utils import DataclassException, get_full_class_name, class_names


@dataclass
class BeanProbeError(DataclassException):
    """
    Base class of all errors raised by a bean probe itself.
    Errors raised inside the body of a getter or setter are never wrapped in one of these.
    """

    ...


@dataclass
class InvalidArgument(BeanProbeError, ValueError):
    """
    Raised when the subject or the rebind target of a bean probe is missing or of the wrong kind.
    """

    argument_name: str
    """
    The name of the offending argument.
    """
    reason: str = "is None"

    def __post_init__(self):
        self.message = f"{self.argument_name} {self.reason}"
        super().__post_init__()


@dataclass
class AccessorMismatch(BeanProbeError):
    """
    Raised when the getter return types and the setter parameter types of a property do not share a single type.
    """

    property_name: str
    getter_types: List[Type] = field(default_factory=list)
    """
    The raw return types of all getter candidates, in discovery order.
    """
    setter_types: List[Type] = field(default_factory=list)
    """
    The raw parameter types of all setter candidates, in discovery order.
    """

    def __post_init__(self):
        self.message = (
            f"Accessor '{self.property_name}' type mismatch, getter types are "
            f"{class_names(self.getter_types)} while setter types are "
            f"{class_names(self.setter_types)}"
        )
        super().__post_init__()


@dataclass
class TypeMismatch(BeanProbeError, TypeError):
    """
    Raised when a setter cannot accept what a getter returns, or when a value does not fit the parameter type of the
    setter it is passed to.
    """

    property_name: str
    expected_type: Any
    """
    The setter parameter type, or its declared type hint when a value is rejected.
    """
    actual_type: Type
    """
    The getter return type, or the runtime type of the value that was set.
    """
    reason: Optional[str] = None
    """
    Why a value was rejected. Left empty when a getter/setter pair is rejected.
    """

    def __post_init__(self):
        if self.reason is None:
            self.message = (
                f"Accessor '{self.property_name}' type mismatch, getter type is "
                f"{get_full_class_name(self.actual_type)} while setter type is "
                f"{get_full_class_name(self.expected_type)}"
            )
        else:
            self.message = (
                f"{self.reason}; setter parameter type: {get_full_class_name(self.expected_type)}, "
                f"set value type: {get_full_class_name(self.actual_type)}"
            )
        super().__post_init__()


@dataclass
class PropertyNotFound(BeanProbeError, LookupError):
    """
    Raised when a name matches neither a known getter nor a known setter.
    """

    property_name: str
    known_getters: List[str] = field(default_factory=list)
    known_setters: List[str] = field(default_factory=list)
    kind: str = "Accessor"
    """
    What was looked up, used in the message.
    """

    def __post_init__(self):
        self.message = (
            f"{self.kind} '{self.property_name}' not found, known setters are: {self.known_setters}, "
            f"known getters are: {self.known_getters}"
        )
        super().__post_init__()


@dataclass
class NoBoundInstance(BeanProbeError):
    """
    Raised when a value is read or written before any instance was bound to the probe.
    """

    subject_type: Type

    def __post_init__(self):
        self.message = (
            f"No instance of {get_full_class_name(self.subject_type)} is bound, "
            f"call instantiate() or swap() first"
        )
        super().__post_init__()


@dataclass
class NoDefaultConstructor(BeanProbeError):
    """
    Raised when the subject type cannot be constructed without arguments.
    """

    subject_type: Type
    required_parameters: List[str] = field(default_factory=list)

    def __post_init__(self):
        self.message = (
            f"{get_full_class_name(self.subject_type)} has no default constructor, "
            f"required parameters are {self.required_parameters}"
        )
        super().__post_init__()


@dataclass
class TypeResolutionError(BeanProbeError, TypeError):
    """
    Error raised when the type annotation of an accessor cannot be resolved.
    """

    owner: Type
    accessor_name: str
    unresolved_name: Any = None

    def __post_init__(self):
        self.message = (
            f"Could not resolve type {self.unresolved_name} of accessor "
            f"{get_full_class_name(self.owner)}.{self.accessor_name}"
        )
        super().__post_init__()
