from builderize._driver import ConvertOptions, Driver, convert

from builderize import builders
from builderize import signatures
from builderize import syntax
from builderize import layout
from builderize import diagnostics
from builderize import driver

__all__ = [
    "builders", "signatures", "syntax", "layout", "diagnostics", "driver",
    "ConvertOptions", "Driver", "convert",
]
