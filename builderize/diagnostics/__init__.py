from builderize._diagnostics import (
    BuilderizeError,
    SchemaDiscoveryError,
    UnrecognizedNodeError,
    UnsupportedLayoutError,
    ReplacementParseError,
    VerificationError,
)

__all__ = [
    "BuilderizeError", "SchemaDiscoveryError", "UnrecognizedNodeError",
    "UnsupportedLayoutError", "ReplacementParseError", "VerificationError",
]
