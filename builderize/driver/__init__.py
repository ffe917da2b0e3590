from builderize._driver import (
    ConvertOptions,
    Driver,
    convert,
    main,
    parse_replacements,
    signature_provider,
)

__all__ = [
    "ConvertOptions", "Driver", "convert", "main",
    "parse_replacements", "signature_provider",
]
