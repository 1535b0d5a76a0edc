"""Content collections: registry, build, and lookup."""

import logging
import os
from dataclasses import dataclass, field

from config import CONTENT_DIR, ON_ERROR
from services.content import (
    ContentDocument,
    FrontmatterError,
    iter_markdown_files,
    load_document,
    safe_path,
    slug_for,
)
from services.schema import CHAPTER_SCHEMA, ContentError, SchemaValidationError

log = logging.getLogger(__name__)

# Collection name → schema. Passed explicitly to the build functions.
DEFAULT_REGISTRY = {
    "js-proxy": CHAPTER_SCHEMA,
}


class UnknownCollectionError(ContentError):
    """Raised when a collection name is not in the registry."""


class CollectionBuildError(ContentError):
    """Raised when one or more documents are rejected under the "fail" policy."""

    def __init__(self, name: str, diagnostics: list[dict]):
        self.name = name
        self.diagnostics = diagnostics
        super().__init__(f"Collection {name!r}: {len(diagnostics)} document(s) rejected")


@dataclass
class Collection:
    name: str
    documents: dict[str, ContentDocument] = field(default_factory=dict)
    rejected: list[dict] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.documents)

    def get(self, slug: str) -> ContentDocument | None:
        return self.documents.get(slug)

    def sorted(self) -> list[ContentDocument]:
        """Documents in course order: chapterNumber, then slug."""
        return sorted(self.documents.values(), key=lambda d: (d.chapter_number, d.slug))

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "count": len(self.documents),
            "documents": [d.to_dict() for d in self.sorted()],
            "rejected": self.rejected,
        }


def _diagnostic(slug: str, err: ContentError) -> dict:
    if isinstance(err, SchemaValidationError):
        diag = err.to_dict()
        diag["slug"] = slug
        del diag["source"]
        return diag
    return {"slug": slug, "field": None, "kind": "frontmatter", "message": str(err)}


def build_collection(
    name: str,
    registry: dict = None,
    content_dir: str = None,
    on_error: str = None,
) -> Collection:
    """Load and validate every document of a collection.

    on_error="fail" scans the whole collection and raises CollectionBuildError
    listing every rejected document. on_error="skip" logs and records each
    rejection on the returned Collection and admits the rest.
    """
    registry = DEFAULT_REGISTRY if registry is None else registry
    content_dir = content_dir or CONTENT_DIR
    on_error = on_error or ON_ERROR

    if name not in registry:
        raise UnknownCollectionError(f"Unknown collection: {name!r}")
    schema = registry[name]

    collection_dir, err = safe_path(name, content_dir)
    if err:
        raise UnknownCollectionError(f"Invalid collection name: {name!r}")

    collection = Collection(name=name)
    if not os.path.isdir(collection_dir):
        log.warning("Collection %r has no directory at %s", name, collection_dir)
        return collection

    for abs_path in iter_markdown_files(collection_dir):
        slug = slug_for(abs_path, collection_dir)
        try:
            collection.documents[slug] = load_document(abs_path, slug, schema)
        except (SchemaValidationError, FrontmatterError) as e:
            log.warning("Rejected %s/%s: %s", name, slug, e)
            collection.rejected.append(_diagnostic(slug, e))

    if collection.rejected and on_error == "fail":
        raise CollectionBuildError(name, collection.rejected)

    log.info(
        "Built collection %r: %d admitted, %d rejected",
        name,
        len(collection.documents),
        len(collection.rejected),
    )
    return collection


def build_all(registry: dict = None, content_dir: str = None, on_error: str = None) -> dict:
    """Build every registered collection. Returns {name: Collection}."""
    registry = DEFAULT_REGISTRY if registry is None else registry
    return {
        name: build_collection(name, registry, content_dir, on_error) for name in registry
    }
