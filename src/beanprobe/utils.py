from __future__ import annotations

from dataclasses import dataclass, field

from typing_extensions import Type, Iterable, List


@dataclass
class DataclassException(Exception):
    """
    A base exception class for dataclass-based exceptions.
    The way this is used is by inheriting from it and setting the `message` field in the __post_init__ method,
    then calling the super().__post_init__() method.
    """

    message: str = field(kw_only=True, default=None)

    def __post_init__(self):
        super().__init__(self.message)


def get_full_class_name(cls: Type) -> str:
    """
    Returns the full name of a class, including the module name.
    Builtins are returned by their bare name, type hints that are not classes by their representation.

    :param cls: The class.
    :return: The full name of the class
    """
    if not isinstance(cls, type):
        return repr(cls)
    name = getattr(cls, "__qualname__", None) or getattr(cls, "__name__", None)
    if name is None:
        return repr(cls)
    if cls.__module__ == "builtins":
        return name
    return cls.__module__ + "." + name


def class_names(classes: Iterable[Type]) -> List[str]:
    return [get_full_class_name(cls) for cls in classes]
