"""
Pairing of getter and setter candidates into the accessor tables of a bean probe.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType

from typing_extensions import Dict, List, Mapping, Type, Iterable

from .accessor import Accessor
from .accessor_introspector import DiscoveredAccessors
from .failures import AccessorMismatch, TypeMismatch
from .type_descriptor import is_assignable

logger = logging.getLogger(__name__)


@dataclass
class AccessorTables:
    """
    The getter and the setter chosen for every property name.
    """

    _getters: Dict[str, Accessor] = field(default_factory=dict, repr=False)
    _setters: Dict[str, Accessor] = field(default_factory=dict, repr=False)

    @property
    def getters(self) -> Mapping[str, Accessor]:
        return MappingProxyType(self._getters)

    @property
    def setters(self) -> Mapping[str, Accessor]:
        return MappingProxyType(self._setters)

    @property
    def paired_names(self) -> List[str]:
        return [name for name in self._getters if name in self._setters]


def pair_accessors(discovered: DiscoveredAccessors) -> AccessorTables:
    """
    Build the accessor tables from the discovered candidates and validate every getter/setter pair.

    :param discovered: The candidates grouped by property name.
    :return: The tables.
    :raises AccessorMismatch: If the getter and setter candidates of a property share no type.
    :raises TypeMismatch: If a chosen setter cannot accept what the chosen getter returns.
    """
    tables = AccessorTables()
    register_all(discovered.getters, tables._getters)
    register_all(discovered.setters, tables._setters)
    for property_name in discovered.paired_names:
        getter, setter = select_pair(
            property_name,
            discovered.getters[property_name],
            discovered.setters[property_name],
        )
        tables._getters[property_name] = getter
        tables._setters[property_name] = setter
    check_pairs(tables)
    return tables


def register_all(
    candidates: Dict[str, List[Accessor]], table: Dict[str, Accessor]
):
    """
    Write every candidate into the table, the last candidate of a property name wins.
    """
    for property_name, accessors in candidates.items():
        for accessor in accessors:
            table[property_name] = accessor


def select_pair(
    property_name: str, getters: List[Accessor], setters: List[Accessor]
) -> tuple[Accessor, Accessor]:
    """
    Choose the first getter and the first setter whose type is declared on both sides.
    """
    getter_types = [getter.value_type for getter in getters]
    setter_types = [setter.value_type for setter in setters]
    common_types = intersection(getter_types, setter_types)
    if not common_types:
        raise AccessorMismatch(property_name, getter_types, setter_types)
    getter = first_with_type_in(getters, common_types)
    setter = first_with_type_in(setters, common_types)
    logger.debug(
        f"Paired '{property_name}': {getter} with {setter}, common types {common_types}"
    )
    return getter, setter


def intersection(left: Iterable[Type], right: Iterable[Type]) -> List[Type]:
    right = set(right)
    result = []
    for type_ in left:
        if type_ in right and type_ not in result:
            result.append(type_)
    return result


def first_with_type_in(accessors: List[Accessor], types: List[Type]) -> Accessor:
    return next(accessor for accessor in accessors if accessor.value_type in types)


def check_pairs(tables: AccessorTables):
    """
    Check that the setter of every paired property accepts what its getter returns.
    """
    for property_name in tables.paired_names:
        getter_type = tables.getters[property_name].value_type
        setter_type = tables.setters[property_name].value_type
        if not is_assignable(getter_type, setter_type):
            raise TypeMismatch(property_name, setter_type, getter_type)
