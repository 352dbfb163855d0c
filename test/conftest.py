import logging

import pytest

from beanprobe import BeanProbe
from .dataset.example_beans import Person, Account


def pytest_configure(config):
    logging.getLogger("numpy").setLevel(logging.WARNING)


@pytest.fixture
def person() -> Person:
    return Person(name="Ada", age=36)


@pytest.fixture
def person_probe(person) -> BeanProbe[Person]:
    return BeanProbe(person)


@pytest.fixture
def account_probe() -> BeanProbe[Account]:
    return BeanProbe(Account).instantiate()
