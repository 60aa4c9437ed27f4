"""
errors.py

Exception hierarchy for the mosaic pipeline.

- ConfigError: invalid parameters, reported before any work begins
- CatalogError / EmptyCatalog: no usable tiles, aborts the run
- PerTileDecodeError: one tile file is unusable, skipped by the catalog loader
- SourceDecodeError: the input image cannot be decoded, aborts the run
- SpatialQueryError: malformed nearest-neighbour query (programming error)
"""


class MosaicError(Exception):
    pass


class ConfigError(MosaicError, ValueError):
    pass


class CatalogError(MosaicError):
    pass


class EmptyCatalog(CatalogError):
    def __init__(self, path: str):
        super().__init__(f"no usable tile images found in '{path}'")
        self.path = path


class PerTileDecodeError(MosaicError):
    def __init__(self, name: str, reason: Exception):
        super().__init__(f"ignore file:{name} with reason:{reason}")
        self.name = name
        self.reason = reason


class SourceDecodeError(MosaicError):
    pass


class SpatialQueryError(MosaicError):
    pass
