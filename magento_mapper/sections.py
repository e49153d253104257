from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .errors import ConfigurationError
from .paths import split_path


class Placement(Enum):
    MERGE_AT_ROOT = 'merge_at_root'
    NEST_UNDER_KEY = 'nest_under_key'
    APPEND_TO_LIST = 'append_to_list'


@dataclass(frozen=True)
class Section:
    """Describes where the values of one mapping section end up in the payload.

    Path-addressed sections (merge/nest) take dotted destination keys; list
    sections take flat attribute codes and append ``{attribute_code, value}``.
    """

    name: str
    placement: Placement
    output_key: Optional[str] = None

    def __post_init__(self):
        if self.placement is not Placement.MERGE_AT_ROOT and not self.output_key:
            raise ConfigurationError(f"Section '{self.name}' needs an output_key for {self.placement.value}")

    @property
    def is_path_addressed(self) -> bool:
        return self.placement is not Placement.APPEND_TO_LIST

    def destination(self, key: str) -> Tuple[str, ...]:
        if not self.is_path_addressed:
            if not isinstance(key, str) or not key:
                raise ConfigurationError(f"Attribute code in section '{self.name}' must be a non-empty string")
            return (self.output_key,)
        parts = split_path(key)
        if self.placement is Placement.NEST_UNDER_KEY:
            return (self.output_key,) + parts
        return parts


CORE = Section('core', Placement.MERGE_AT_ROOT)
EXTENSION_ATTRIBUTES = Section('extensionAttributes', Placement.NEST_UNDER_KEY, 'extension_attributes')
CUSTOM_ATTRIBUTES = Section('customAttributes', Placement.APPEND_TO_LIST, 'custom_attributes')

DEFAULT_SECTIONS = (CORE, EXTENSION_ATTRIBUTES, CUSTOM_ATTRIBUTES)
