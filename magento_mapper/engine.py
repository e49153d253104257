"""Transform engine: source record -> Magento product payload.

Every mapping entry is resolved concurrently with ``asyncio.gather``; once all
of them have joined, the non-absent values are written into the payload in
declaration order, then the required identifier is checked.
"""

import asyncio
import logging
from typing import Any, Dict, List, Mapping, Tuple

from .config import MappingConfig, MappingEntry
from .errors import MissingRequiredFieldError
from .instructions import ABSENT, Resolver, resolve
from .paths import get_path, set_path, split_path
from .sections import Placement

logger = logging.getLogger(__name__)


class TransformEngine:
    def __init__(self, config: MappingConfig, root_key: str = 'product', required_field: str = 'sku'):
        self.config = config
        self.root_key = root_key
        self.required_field = required_field
        self._required_path = split_path(required_field)

    async def transform(self, source: Mapping[str, Any]) -> Dict[str, Any]:
        entries = list(self.config.entries())
        try:
            values = await asyncio.gather(*(self._resolve_entry(e, source) for e in entries))
        except Exception as e:
            logger.error("Transform aborted: %s: %s", type(e).__name__, e)
            raise

        resolved = [(e, v) for e, v in zip(entries, values) if v is not ABSENT]
        body = self._assemble(resolved)

        identifier = get_path(body, self._required_path)
        if not identifier:
            raise MissingRequiredFieldError(self.required_field)
        logger.info("Transformed %s=%r: %d of %d fields set",
                    self.required_field, identifier, len(resolved), len(entries))
        return {self.root_key: body}

    async def _resolve_entry(self, entry: MappingEntry, source: Mapping[str, Any]) -> Any:
        value = await resolve(entry.instruction, source, self.config.context)
        if value is ABSENT:
            logger.debug("%s.%s resolved to nothing, skipped", entry.section.name, entry.key)
        elif isinstance(entry.instruction, Resolver):
            logger.debug("%s.%s resolved by %s", entry.section.name, entry.key, entry.instruction.name)
        return value

    def _assemble(self, resolved: List[Tuple[MappingEntry, Any]]) -> Dict[str, Any]:
        body: Dict[str, Any] = {}
        for section in self.config.sections:
            if section.placement is Placement.APPEND_TO_LIST:
                body[section.output_key] = []
        for entry, value in resolved:
            if entry.section.placement is Placement.APPEND_TO_LIST:
                body[entry.section.output_key].append({'attribute_code': entry.key, 'value': value})
            else:
                set_path(body, entry.destination, value)
        return body


def create_engine(mapping: Any, **kwargs) -> TransformEngine:
    """Build an engine from a ``MappingConfig`` or a raw section dict.

    ``sections`` and ``context`` are passed on to ``MappingConfig``; the rest to
    ``TransformEngine``.
    """
    config = MappingConfig.coerce(mapping, kwargs.pop('sections', None), kwargs.pop('context', None))
    return TransformEngine(config, **kwargs)
