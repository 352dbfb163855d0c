import importlib.metadata
import logging

__version__ = importlib.metadata.version("beanprobe")


logger = logging.Logger("beanprobe")
logger.setLevel(logging.INFO)

from .bean_probe import BeanProbe
from .type_descriptor import TypeDescriptor, CollectionCheck, CollectionCheckInfo
from .accessor_introspector import (
    MethodAccessorIntrospector,
    PropertyAwareIntrospector,
)
