from builderize._signatures import (
    Signature,
    SignatureProvider,
    SchemaSignatureProvider,
    ReflectiveSignatureProvider,
    TableSignatureProvider,
    SignatureResolver,
    ZERO_FIELD_KINDS,
    generate_signature_table,
    parse_signature,
)

__all__ = [
    "Signature", "SignatureProvider", "SchemaSignatureProvider",
    "ReflectiveSignatureProvider", "TableSignatureProvider", "SignatureResolver",
    "ZERO_FIELD_KINDS", "generate_signature_table", "parse_signature",
]
