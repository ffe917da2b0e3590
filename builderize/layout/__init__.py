from builderize._layout import (
    Renderer,
    is_multiline,
    literal_text,
    quote,
    render,
)

__all__ = [
    "Renderer", "is_multiline", "literal_text", "quote", "render",
]
