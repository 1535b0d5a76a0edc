"""Collection endpoints: list collections, list chapters, read a chapter, validate frontmatter."""

from flask import Blueprint, jsonify, request

from services.collection import (
    DEFAULT_REGISTRY,
    CollectionBuildError,
    UnknownCollectionError,
    build_collection,
)
from services.content import FrontmatterError, parse_frontmatter
from services.schema import collect_errors, validate_chapter

bp = Blueprint("collections", __name__)


def _build(name: str):
    """Build a collection, returning (collection, None) or (None, error_response)."""
    try:
        return build_collection(name, DEFAULT_REGISTRY), None
    except UnknownCollectionError as e:
        return None, (jsonify({"error": str(e)}), 404)
    except CollectionBuildError as e:
        return None, (
            jsonify({"error": str(e), "collection": e.name, "rejected": e.diagnostics}),
            422,
        )


@bp.route("/api/collections")
def collections_index():
    """Every registered collection with admitted and rejected counts."""
    items = []
    for name in DEFAULT_REGISTRY:
        collection, err = _build(name)
        if err:
            return err
        items.append(
            {"name": name, "count": len(collection), "rejected": len(collection.rejected)}
        )
    return jsonify(items)


@bp.route("/api/collections/<name>")
def collection_get(name):
    """Chapters of a collection in course order (frontmatter only)."""
    collection, err = _build(name)
    if err:
        return err
    return jsonify(collection.to_dict())


@bp.route("/api/collections/<name>/<path:slug>")
def chapter_get(name, slug):
    """One chapter: frontmatter plus raw markdown body."""
    collection, err = _build(name)
    if err:
        return err
    doc = collection.get(slug)
    if doc is None:
        return jsonify({"error": f"Not found: {name}/{slug}"}), 404
    return jsonify(doc.to_dict(include_body=True))


@bp.route("/api/validate", methods=["POST"])
def validate():
    """Validate a frontmatter mapping, or the header of a markdown document.

    Body: {"frontmatter": {...}} or {"content": "<markdown>"}.
    """
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return jsonify({"error": "JSON object required"}), 400

    if "content" in data:
        content = data["content"]
        if not isinstance(content, str):
            return jsonify({"error": "content must be a string"}), 400
        try:
            fm, _ = parse_frontmatter(content)
        except FrontmatterError as e:
            errors = [{"field": None, "kind": "frontmatter", "message": str(e)}]
            return jsonify({"ok": False, "errors": errors}), 422
    elif "frontmatter" in data:
        fm = data["frontmatter"]
    else:
        return jsonify({"error": "frontmatter or content required"}), 400

    errors = collect_errors(fm)
    if errors:
        payload = [{k: v for k, v in e.to_dict().items() if k != "source"} for e in errors]
        return jsonify({"ok": False, "errors": payload}), 422
    return jsonify({"ok": True, "data": validate_chapter(fm)})
