"""
Exception types raised by the frequency resampling core.
"""


class FrequencyResampleError(Exception):
    """Base class for all resampling errors."""


class ConfigurationError(FrequencyResampleError, ValueError):
    """
    Invalid run configuration, detected before any tile is processed.

    Raised for non-positive zoom ratio components, malformed ratio strings,
    unusable filter kernels, or a periodization zoom strategy selected
    without a loaded filter.
    """


class GeometryError(FrequencyResampleError, IndexError):
    """
    Tile geometry contract violation.

    Indicates an inconsistency between the planned regions and the buffers
    they address (programmer error, not bad input data).
    """


class EngineError(FrequencyResampleError, RuntimeError):
    """The resampling engine failed on a tile. Fatal for the whole run."""
