from .config import MappingConfig, MappingEntry
from .engine import TransformEngine, create_engine
from .errors import (ConfigurationError, MapperError, MappingLoadError,
                     MissingRequiredFieldError, PathConflictError)
from .instructions import ABSENT, Constant, FieldReference, Resolver
from .loader import MappingLoader
from .sections import (CORE, CUSTOM_ATTRIBUTES, DEFAULT_SECTIONS, EXTENSION_ATTRIBUTES,
                       Placement, Section)

__all__ = [
    "ABSENT", "CORE", "CUSTOM_ATTRIBUTES", "ConfigurationError", "Constant", "DEFAULT_SECTIONS",
    "EXTENSION_ATTRIBUTES", "FieldReference", "MapperError", "MappingConfig", "MappingEntry",
    "MappingLoadError", "MappingLoader", "MissingRequiredFieldError", "PathConflictError",
    "Placement", "Resolver", "Section", "TransformEngine", "create_engine",
]
