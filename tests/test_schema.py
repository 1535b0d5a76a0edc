"""Unit tests for chapter frontmatter validation."""

import pytest

from services.schema import (
    MissingFieldError,
    SchemaValidationError,
    TypeMismatchError,
    collect_errors,
    validate_chapter,
)

VALID = {
    "title": "Using Reflect",
    "description": "Use Reflect API...",
    "chapterNumber": 4,
}

# ---------------------------------------------------------------------------
# validate_chapter — accepted
# ---------------------------------------------------------------------------


def test_validate_ok_returns_input_unchanged():
    assert validate_chapter(dict(VALID)) == VALID


def test_validate_does_not_trim():
    fm = {"title": "  Padded  ", "description": "desc\n", "chapterNumber": 1}
    assert validate_chapter(fm) == fm


def test_validate_empty_strings_accepted():
    result = validate_chapter({"title": "", "description": "desc", "chapterNumber": 1})
    assert result["title"] == ""


def test_validate_drops_unknown_fields():
    fm = {**VALID, "draft": True}
    assert validate_chapter(fm) == VALID


def test_validate_idempotent():
    assert validate_chapter(dict(VALID)) == validate_chapter(dict(VALID))


def test_validate_negative_and_zero_chapter_numbers():
    for n in (0, -1):
        assert validate_chapter({**VALID, "chapterNumber": n})["chapterNumber"] == n


# ---------------------------------------------------------------------------
# validate_chapter — rejected
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("field", ["title", "description", "chapterNumber"])
def test_validate_missing_field(field):
    fm = {k: v for k, v in VALID.items() if k != field}
    with pytest.raises(MissingFieldError) as exc:
        validate_chapter(fm)
    assert exc.value.field == field
    assert exc.value.kind == "missing"


def test_validate_none_counts_as_missing():
    with pytest.raises(MissingFieldError):
        validate_chapter({**VALID, "description": None})


def test_validate_missing_description_scenario():
    with pytest.raises(MissingFieldError) as exc:
        validate_chapter({"title": "Using Reflect", "chapterNumber": 4})
    assert exc.value.field == "description"


@pytest.mark.parametrize("value", ["four", 4.0, 4.5, True, False, [4]])
def test_validate_chapter_number_not_integer(value):
    with pytest.raises(TypeMismatchError) as exc:
        validate_chapter({"title": "Chapter", "description": "desc", "chapterNumber": value})
    assert exc.value.field == "chapterNumber"
    assert exc.value.kind == "type_mismatch"


@pytest.mark.parametrize("field", ["title", "description"])
def test_validate_text_field_wrong_type(field):
    with pytest.raises(TypeMismatchError) as exc:
        validate_chapter({**VALID, field: 42})
    assert exc.value.field == field


def test_validate_error_names_source():
    with pytest.raises(SchemaValidationError) as exc:
        validate_chapter({"title": "X"}, source="03-traps")
    assert exc.value.source == "03-traps"
    assert "03-traps" in str(exc.value)


def test_validate_first_field_in_schema_order():
    with pytest.raises(MissingFieldError) as exc:
        validate_chapter({})
    assert exc.value.field == "title"


def test_validate_not_a_mapping():
    with pytest.raises(TypeMismatchError) as exc:
        validate_chapter(["title", "description"])
    assert exc.value.field is None


# ---------------------------------------------------------------------------
# collect_errors
# ---------------------------------------------------------------------------


def test_collect_errors_valid():
    assert collect_errors(VALID) == []


def test_collect_errors_reports_every_field():
    errors = collect_errors({"title": 1, "chapterNumber": "one"})
    assert [(e.field, e.kind) for e in errors] == [
        ("title", "type_mismatch"),
        ("description", "missing"),
        ("chapterNumber", "type_mismatch"),
    ]


def test_collect_errors_to_dict():
    (err,) = collect_errors({**VALID, "chapterNumber": "four"}, source="intro")
    data = err.to_dict()
    assert data["field"] == "chapterNumber"
    assert data["kind"] == "type_mismatch"
    assert data["source"] == "intro"
    assert "int" in data["message"]


def test_collect_errors_custom_schema():
    schema = {"title": str}
    assert collect_errors({"title": "Only"}, schema=schema) == []


def test_collect_errors_empty_schema_is_respected():
    assert collect_errors({}, schema={}) == []
    assert validate_chapter({"title": "T"}, schema={}) == {}


# ---------------------------------------------------------------------------
# Order independence
# ---------------------------------------------------------------------------

RECORDS = [
    ("intro", {"title": "Introduction", "description": "What is a Proxy", "chapterNumber": 1}),
    ("no-desc", {"title": "Using Reflect", "chapterNumber": 4}),
    ("traps", {"title": "Traps", "description": "get and set", "chapterNumber": 2}),
    ("bad-number", {"title": "Chapter", "description": "desc", "chapterNumber": "four"}),
    ("empty", {"title": "", "description": "desc", "chapterNumber": 3}),
]


def _outcomes(records):
    results = {}
    for source, fm in records:
        try:
            results[source] = ("accepted", validate_chapter(fm, source=source))
        except SchemaValidationError as e:
            results[source] = ("rejected", e.to_dict())
    return results


def test_validate_order_independent():
    forward = _outcomes(RECORDS)
    backward = _outcomes(list(reversed(RECORDS)))
    assert forward == backward
    assert forward["no-desc"] == (
        "rejected",
        {
            "source": "no-desc",
            "field": "description",
            "kind": "missing",
            "message": "Missing required field: 'description'",
        },
    )
    assert forward["bad-number"][1]["kind"] == "type_mismatch"
    assert forward["traps"] == ("accepted", dict(RECORDS[2][1]))
