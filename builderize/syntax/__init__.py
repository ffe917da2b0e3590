from builderize._syntax import (
    ConstructionExpr,
    Statement,
    Call,
    Member,
    Ref,
    Array,
    Literal,
    ReplacementTable,
    TreeSynthesizer,
    is_opaque,
    parse_fragment,
    synthesize,
)

__all__ = [
    "ConstructionExpr", "Statement", "Call", "Member", "Ref", "Array", "Literal",
    "ReplacementTable", "TreeSynthesizer",
    "is_opaque", "parse_fragment", "synthesize",
]
