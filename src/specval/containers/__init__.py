from specval.containers.entity import Entity
from specval.containers.value import OptionalContainer, ValueContainer

__all__ = ["Entity", "OptionalContainer", "ValueContainer"]
