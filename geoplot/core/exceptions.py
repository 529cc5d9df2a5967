class MapError(Exception):
    """Base class for errors raised while building or rendering a map."""


class UnknownIconError(MapError, KeyError):
    """An icon handle was not issued by the map it is used with."""


class MapRenderError(MapError):
    """Rendering failed; no part of the page has been written."""


class TemplateRenderError(MapRenderError):
    pass


class SerializationError(MapRenderError):
    pass


class IdentifierGenerationError(MapRenderError):
    pass


class MapWriteError(MapRenderError):
    pass
