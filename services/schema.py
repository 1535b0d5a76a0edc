"""Chapter frontmatter schema and validation."""

CHAPTER_SCHEMA = {
    "title":         str,
    "description":   str,
    "chapterNumber": int,
}


class ContentError(Exception):
    """Base exception for content loading errors."""


class SchemaValidationError(ContentError):
    """A document's frontmatter does not match its collection schema."""

    kind = "invalid"

    def __init__(self, message: str, field: str | None = None, source: str | None = None):
        self.field = field
        self.source = source
        prefix = f"{source}: " if source else ""
        super().__init__(prefix + message)
        self.message = message

    def to_dict(self) -> dict:
        return {
            "source": self.source,
            "field": self.field,
            "kind": self.kind,
            "message": self.message,
        }


class MissingFieldError(SchemaValidationError):
    kind = "missing"


class TypeMismatchError(SchemaValidationError):
    kind = "type_mismatch"


def _type_matches(value, expected: type) -> bool:
    # bool is a subclass of int but never a chapter number
    if expected is int:
        return isinstance(value, int) and not isinstance(value, bool)
    return isinstance(value, expected)


def _check_field(fm: dict, field: str, expected: type, source: str | None):
    value = fm.get(field)
    if value is None:
        return MissingFieldError(f"Missing required field: {field!r}", field, source)
    if not _type_matches(value, expected):
        got = type(value).__name__
        return TypeMismatchError(
            f"Field {field!r} must be {expected.__name__}, got {got}", field, source
        )
    return None


def collect_errors(fm, source: str | None = None, schema: dict = None) -> list[SchemaValidationError]:
    """Return every schema violation in fm. Empty list means valid."""
    schema = CHAPTER_SCHEMA if schema is None else schema
    if not isinstance(fm, dict):
        got = type(fm).__name__
        return [TypeMismatchError(f"Frontmatter must be a mapping, got {got}", None, source)]

    errors = []
    for field, expected in schema.items():
        err = _check_field(fm, field, expected, source)
        if err is not None:
            errors.append(err)
    return errors


def validate_chapter(fm, source: str | None = None, schema: dict = None) -> dict:
    """Validate fm against schema and return exactly the schema fields.

    Values are returned unchanged. Raises the first SchemaValidationError
    found, checking fields in schema order.
    """
    schema = CHAPTER_SCHEMA if schema is None else schema
    errors = collect_errors(fm, source, schema)
    if errors:
        raise errors[0]
    return {field: fm[field] for field in schema}
