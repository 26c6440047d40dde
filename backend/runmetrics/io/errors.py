class RouteImportError(Exception):
    """A recorded activity file could not be read into coordinate points."""
