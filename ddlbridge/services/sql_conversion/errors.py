"""
Error taxonomy for schema conversion.

Only ``UnsupportedDialect`` ever escapes ``translate()``; everything else is
raised and caught inside the pipeline so that one bad statement or column never
aborts the rest of the script.
"""


class SchemaConversionError(Exception):
    """Base class for all conversion errors."""


class NoTableFound(SchemaConversionError):
    """The statement does not start with a ``CREATE TABLE ... (`` header."""


class MalformedStatement(SchemaConversionError):
    """The table body could not be tokenised (e.g. an unterminated literal)."""


class UnrecognizedType(SchemaConversionError):
    """A column's type keyword is outside the recognised vocabulary."""

    def __init__(self, type_name: str):
        super().__init__(f"Unrecognized column type: {type_name!r}")
        self.type_name = type_name


class MalformedDefault(SchemaConversionError):
    """A ``DEFAULT`` clause has no value."""


class MalformedEnum(SchemaConversionError):
    """An ``ENUM``/``SET`` type has no quoted literal list."""


class UnsupportedDialect(SchemaConversionError, ValueError):
    """The target dialect identifier is not one of the supported ones."""

    def __init__(self, dialect: str):
        super().__init__(f"Unsupported target dialect: {dialect!r}")
        self.dialect = dialect
