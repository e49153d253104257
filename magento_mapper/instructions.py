import inspect
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Union

from .errors import ConfigurationError

# resolvers return this to leave a field out of the payload
ABSENT = None


@dataclass(frozen=True)
class FieldReference:
    name: str

    def __post_init__(self):
        if not self.name:
            raise ConfigurationError("Field reference needs a source key")


@dataclass(frozen=True)
class Constant:
    value: Any


@dataclass(frozen=True)
class Resolver:
    func: Callable[..., Any]
    takes_context: bool = False

    def __post_init__(self):
        if not callable(self.func):
            raise ConfigurationError(f"Resolver must wrap a callable, got {self.func!r}")

    @classmethod
    def with_context(cls, func: Callable[..., Any]) -> 'Resolver':
        return cls(func, takes_context=True)

    @property
    def name(self) -> str:
        return getattr(self.func, '__qualname__', repr(self.func))


Instruction = Union[FieldReference, Constant, Resolver]


def as_instruction(value: Any) -> Instruction:
    if isinstance(value, (FieldReference, Constant, Resolver)):
        return value
    if isinstance(value, str):
        return FieldReference(value)
    if callable(value):
        return Resolver(value)
    raise ConfigurationError(f"Unsupported source instruction: {value!r}")


async def resolve(instruction: Instruction, source: Mapping[str, Any], context: Any = None) -> Any:
    match instruction:
        case FieldReference(name=name):
            return source.get(name, ABSENT)
        case Constant(value=value):
            return value
        case Resolver(func=func, takes_context=takes_context):
            result = func(source, context) if takes_context else func(source)
            if inspect.isawaitable(result):
                result = await result
            return result
        case _:
            raise ConfigurationError(f"Unsupported source instruction: {instruction!r}")
