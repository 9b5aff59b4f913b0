"""Generate typing.Protocol interfaces from the method set of a class."""

__version__ = "0.1.0"
