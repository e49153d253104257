import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from jsonschema import validate, ValidationError

from .config import MappingConfig
from .errors import ConfigurationError, MappingLoadError
from .instructions import Constant, Resolver

logger = logging.getLogger(__name__)

DEFAULT_SCHEMA = Path(__file__).parent / 'schema' / 'mapping_schema.json'
SECTION_NAMES = ('core', 'extensionAttributes', 'customAttributes')


def _reject_duplicates(pairs):
    out = {}
    for k, v in pairs:
        if k in out:
            raise MappingLoadError(f"Duplicate key '{k}' in mapping file")
        out[k] = v
    return out


class MappingLoader:
    @staticmethod
    def load(path: str, resolvers: Optional[Dict[str, Callable]] = None, context: Any = None,
             schema_path: Optional[str] = None) -> MappingConfig:
        p = Path(path)
        if not p.exists():
            raise MappingLoadError(f"Mapping file not found: {path}")
        try:
            data = json.loads(p.read_text(encoding='utf-8'), object_pairs_hook=_reject_duplicates)
        except UnicodeDecodeError as e:
            raise MappingLoadError(f"Mapping file {path} is not valid UTF-8: {e}") from e
        except json.JSONDecodeError as e:
            raise MappingLoadError(f"Invalid JSON in {path}: {e}") from e
        schema = json.loads(Path(schema_path or DEFAULT_SCHEMA).read_text(encoding='utf-8'))
        try:
            validate(instance=data, schema=schema)
        except ValidationError as e:
            raise MappingLoadError(f"Schema validation failed: {e.message}") from e

        resolvers = resolvers or {}
        mapping = {}
        for name in SECTION_NAMES:
            if name in data:
                mapping[name] = [(k, MappingLoader._instruction(v, resolvers)) for k, v in data[name].items()]
        try:
            config = MappingConfig(mapping, context=context)
        except ConfigurationError as e:
            raise MappingLoadError(str(e)) from e
        logger.info("Loaded mapping %s (version %s, %d entries)", p.name, data.get('version'), len(config))
        return config

    @staticmethod
    def _instruction(raw: Any, resolvers: Dict[str, Callable]):
        if isinstance(raw, str):
            return raw
        if 'const' in raw:
            return Constant(raw['const'])
        name = raw['resolver']
        if name not in resolvers:
            raise MappingLoadError(f"Unknown resolver: {name}")
        return Resolver(resolvers[name], takes_context=raw.get('context', False))
