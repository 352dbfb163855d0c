from __future__ import annotations

from functools import singledispatchmethod

import numpy as np
from typing_extensions import List, Optional, Protocol, Self, Union


class Person:
    def __init__(self, name: str = "", age: int = 0):
        self._name = name
        self._age = age

    def get_name(self) -> str:
        return self._name

    def set_name(self, name: str) -> None:
        self._name = name

    def get_age(self) -> int:
        return self._age

    def set_age(self, age: int) -> None:
        self._age = age


class Employee(Person):
    def __init__(self, name: str = "", age: int = 0, employer: str = ""):
        super().__init__(name, age)
        self._employer = employer

    def get_name(self) -> str:
        return self._name.upper()

    def get_employer(self) -> str:
        return self._employer

    def set_employer(self, employer: str) -> Self:
        self._employer = employer
        return self


class Account:
    """
    Accessors named in camelCase, with a fixed-width scalar amount.
    """

    def __init__(self):
        self._amount = np.int32(0)
        self._active = False
        self._tags: List[str] = []

    def getAmount(self) -> np.int32:
        return self._amount

    def setAmount(self, amount: np.int32) -> None:
        self._amount = amount

    def isActive(self) -> bool:
        return self._active

    def setActive(self, active: bool) -> Account:
        self._active = active
        return self

    def getTags(self) -> List[str]:
        return self._tags

    def setTags(self, tags: List[str]) -> Self:
        self._tags = tags
        return self


class OverloadedValue:
    def __init__(self):
        self._value = ""

    def get_value(self) -> str:
        return self._value

    @singledispatchmethod
    def set_value(self, value):
        raise NotImplementedError(f"Cannot set {type(value)}")

    @set_value.register
    def _(self, value: int) -> None:
        self._value = f"#{value}"

    @set_value.register
    def _(self, value: str) -> None:
        self._value = value


class Foo: ...


class Bar: ...


class Mismatched:
    def get_thing(self) -> Foo:
        return Foo()

    def set_thing(self, thing: Bar) -> None: ...


class Shape: ...


class Circle(Shape): ...


class Square(Shape): ...


class Drawing:
    """
    Both pairs share the types Square and Circle, but the first getter and the first setter disagree.
    """

    def getShape(self) -> Square:
        return Square()

    def get_shape(self) -> Circle:
        return Circle()

    def setShape(self, shape: Circle) -> None: ...

    def set_shape(self, shape: Square) -> None: ...


class Canvas:
    def __init__(self):
        self._shape: Shape = Shape()

    def getShape(self) -> Circle:
        return Circle()

    def get_shape(self) -> Shape:
        return self._shape

    def setShape(self, shape: Shape) -> None:
        self._shape = shape


class Versioned:
    """
    A getter written twice without a setter, and a setter without a getter.
    """

    def __init__(self):
        self.label = None

    def get_version(self) -> int:
        return 1

    def getVersion(self) -> str:
        return "v2"

    def set_label(self, label: str) -> None:
        self.label = label


class Contact:
    def __init__(self):
        self._email: Optional[str] = None

    def get_email(self) -> Optional[str]:
        return self._email

    def set_email(self, email: Optional[str]) -> None:
        self._email = email


class Temperature:
    def __init__(self, celsius: float = 0.0):
        self._celsius = celsius

    @property
    def celsius(self) -> float:
        return self._celsius

    @celsius.setter
    def celsius(self, value):
        self._celsius = value

    @property
    def kelvin(self) -> float:
        return self._celsius + 273.15


class AccessorFailure(Exception):
    """
    Raised from inside accessor bodies.
    """


class Fragile:
    def get_broken(self) -> int:
        raise AccessorFailure("getter failed")

    def set_broken(self, value: int) -> None:
        raise AccessorFailure("setter failed")

    def get_strict(self) -> int:
        return 0

    def set_strict(self, value: int) -> None:
        raise TypeError("strict setter refuses every value")


class NeedsArguments:
    def __init__(self, required: str):
        self._required = required

    def get_required(self) -> str:
        return self._required


class NotABean:
    def compute(self) -> int:
        return 42

    def get(self) -> int:
        return 0

    def get_with_argument(self, argument: int) -> int:
        return argument

    def set_with_two_arguments(self, first: int, second: int) -> None: ...

    def set_returning_value(self, value: int) -> int:
        return value

    @staticmethod
    def get_static() -> int:
        return 0


class Unresolvable:
    def get_ghost(self) -> DoesNotExist:  # noqa: F821
        return None


class Named(Protocol):
    def describe(self) -> str: ...


class Badge:
    def describe(self) -> str:
        return "badge"


class Holder:
    def __init__(self):
        self._named = None

    def get_named(self) -> Named:
        return self._named

    def set_named(self, named: Named) -> None:
        self._named = named


class NamedSink:
    def __init__(self):
        self.named = None

    def set_named(self, named: Named) -> None:
        self.named = named


class Priced:
    def __init__(self):
        self._price = 0.0
        self._amplitude = 0j

    def get_price(self) -> float:
        return self._price

    def set_price(self, price: float) -> None:
        self._price = price

    def get_amplitude(self) -> complex:
        return self._amplitude

    def set_amplitude(self, amplitude: complex) -> None:
        self._amplitude = amplitude


class Keyed:
    def __init__(self):
        self._key = 0

    def get_key(self) -> Union[int, str]:
        return self._key

    def set_key(self, key: Union[int, str]) -> None:
        self._key = key


class Membership:
    def get_member(self) -> str:
        return "member"

    def is_member(self, item):
        return item == "member"
