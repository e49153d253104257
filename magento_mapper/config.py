import logging
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, NamedTuple, Optional, Sequence, Tuple

from .errors import ConfigurationError, PathConflictError
from .instructions import Instruction, as_instruction
from .sections import DEFAULT_SECTIONS, Section

logger = logging.getLogger(__name__)


class MappingEntry(NamedTuple):
    section: Section
    key: str
    instruction: Instruction
    destination: Tuple[str, ...]


class MappingConfig:
    """Validated, immutable mapping from source records to payload fields.

    ``mapping`` maps a section name to its entries, given either as a mapping of
    destination key -> instruction or as ``(key, instruction)`` pairs. Pairs are
    checked for duplicate keys; declaration order is kept either way.

    ``context`` is handed to every resolver built with ``Resolver.with_context``.
    """

    def __init__(self, mapping: Mapping[str, Any], sections: Sequence[Section] = DEFAULT_SECTIONS,
                 context: Any = None):
        self._sections = tuple(sections)
        self._context = context
        by_name = {}
        for s in self._sections:
            if s.name in by_name:
                raise ConfigurationError(f"Section '{s.name}' declared twice")
            by_name[s.name] = s

        unknown = [name for name in mapping if name not in by_name]
        if unknown:
            raise ConfigurationError(f"Unknown mapping section(s): {', '.join(sorted(unknown))}")

        entries: Dict[str, Tuple[MappingEntry, ...]] = {}
        for section in self.sections:
            raw = mapping.get(section.name) or {}
            entries[section.name] = tuple(self._build_section(section, raw))
        self._entries = MappingProxyType(entries)
        self._check_destinations()
        logger.debug("Built mapping config with %d entries across %d sections",
                     len(self), len(self.sections))

    @staticmethod
    def _build_section(section: Section, raw: Any) -> List[MappingEntry]:
        malformed = ConfigurationError(f"Section '{section.name}' entries must be a mapping or (key, instruction) pairs")
        if isinstance(raw, (str, bytes)):
            raise malformed
        try:
            pairs = list(raw.items()) if isinstance(raw, Mapping) else list(raw)
        except (TypeError, AttributeError) as e:
            raise malformed from e
        seen = set()
        out = []
        for pair in pairs:
            if isinstance(pair, (str, bytes)) or not isinstance(pair, (tuple, list)) or len(pair) != 2:
                raise malformed
            key, instr = pair
            if not isinstance(key, str):
                raise ConfigurationError(f"Destination key in section '{section.name}' must be a string, got {key!r}")
            if key in seen:
                raise ConfigurationError(f"Duplicate destination key '{key}' in section '{section.name}'")
            seen.add(key)
            try:
                instruction = as_instruction(instr)
            except ConfigurationError as e:
                raise ConfigurationError(f"{section.name}.{key}: {e}") from e
            out.append(MappingEntry(section, key, instruction, section.destination(key)))
        return out

    def _check_destinations(self) -> None:
        # a destination may not be equal to, or a prefix of, another one
        claimed: List[Tuple[Tuple[str, ...], str]] = []
        for section in self.sections:
            if section.is_path_addressed:
                for e in self._entries[section.name]:
                    claimed.append((e.destination, f"{section.name}.{e.key}"))
            else:
                claimed.append(((section.output_key,), f"{section.name} list '{section.output_key}'"))
        claimed.sort(key=lambda c: c[0])
        for (a, a_label), (b, b_label) in zip(claimed, claimed[1:]):
            if b[:len(a)] == a:
                raise PathConflictError('.'.join(b), f"'{a_label}' and '{b_label}' write to overlapping paths")

    @property
    def sections(self) -> Tuple[Section, ...]:
        return self._sections

    @property
    def context(self) -> Any:
        return self._context

    def section_entries(self, name: str) -> Tuple[MappingEntry, ...]:
        return self._entries[name]

    def entries(self) -> Iterator[MappingEntry]:
        for section in self.sections:
            yield from self._entries[section.name]

    def __len__(self) -> int:
        return sum(len(v) for v in self._entries.values())

    @classmethod
    def coerce(cls, mapping: Any, sections: Optional[Sequence[Section]] = None, context: Any = None) -> 'MappingConfig':
        if isinstance(mapping, cls):
            if sections is not None or context is not None:
                raise ConfigurationError("sections/context are fixed once a MappingConfig is built")
            return mapping
        return cls(mapping, sections if sections is not None else DEFAULT_SECTIONS, context)
