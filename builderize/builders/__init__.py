from builderize._builders import (
    Builders,
    BuilderArgumentError,
    DEPRECATED_KINDS,
    lower_camel,
    make_builder,
    node_classes,
    program,
)

__all__ = [
    "Builders", "BuilderArgumentError", "DEPRECATED_KINDS",
    "lower_camel", "make_builder", "node_classes", "program",
]
