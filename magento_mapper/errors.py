class MapperError(Exception):
    pass


class ConfigurationError(MapperError):
    pass


class PathConflictError(ConfigurationError):
    def __init__(self, path, message=None):
        self.path = path
        super().__init__(message or f"Path conflict at '{path}'")


class MissingRequiredFieldError(MapperError):
    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Mapping failed to generate a value for required field '{field}'")


class MappingLoadError(MapperError):
    pass
