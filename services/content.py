"""Content file operations: path resolution, frontmatter parsing, document loading."""

import os
from dataclasses import dataclass

import yaml

from services.schema import ContentError, validate_chapter


class FrontmatterError(ContentError):
    """Raised when a frontmatter block is present but cannot be parsed."""


@dataclass(frozen=True)
class ContentDocument:
    slug: str
    title: str
    description: str
    chapter_number: int
    body: str = ""

    def frontmatter(self) -> dict:
        return {
            "title": self.title,
            "description": self.description,
            "chapterNumber": self.chapter_number,
        }

    def to_dict(self, include_body: bool = False) -> dict:
        data = {"slug": self.slug, **self.frontmatter()}
        if include_body:
            data["body"] = self.body
        return data


def safe_path(rel_path: str, base_dir: str) -> tuple[str, str | None]:
    """Resolve and validate that path stays within base_dir. Returns (abs_path, error)."""
    abs_path = os.path.realpath(os.path.join(base_dir, rel_path))
    base_real = os.path.realpath(base_dir)
    if abs_path != base_real and not abs_path.startswith(base_real + os.sep):
        return abs_path, "Path traversal detected"
    return abs_path, None


def parse_frontmatter(content: str) -> tuple[dict, str]:
    """Extract YAML frontmatter and body from file content.

    Content without a delimited header (or with an unclosed one) yields
    ({}, content). A header that is not valid YAML, or is not a mapping,
    raises FrontmatterError.
    """
    lines = content.split("\n")
    if lines[0].strip() != "---":
        return {}, content

    end_idx = None
    for i, line in enumerate(lines[1:], 1):
        if line.strip() == "---":
            end_idx = i
            break

    if end_idx is None:
        return {}, content

    try:
        frontmatter = yaml.safe_load("\n".join(lines[1:end_idx]))
    except yaml.YAMLError as e:
        raise FrontmatterError(f"Invalid YAML frontmatter: {e}") from e

    if frontmatter is None:
        frontmatter = {}
    if not isinstance(frontmatter, dict):
        got = type(frontmatter).__name__
        raise FrontmatterError(f"Frontmatter must be a mapping, got {got}")

    body = "\n".join(lines[end_idx + 1 :]).lstrip("\n")
    return frontmatter, body


def slug_for(abs_path: str, collection_dir: str) -> str:
    """Slug = path relative to the collection directory, no .md, '/' separated."""
    rel_path = os.path.relpath(abs_path, collection_dir)
    return os.path.splitext(rel_path)[0].replace(os.sep, "/")


def document_from_text(content: str, slug: str, schema: dict = None) -> ContentDocument:
    """Parse and validate one markdown document. Raises ContentError subclasses."""
    try:
        fm, body = parse_frontmatter(content)
    except FrontmatterError as e:
        raise FrontmatterError(f"{slug}: {e}") from e
    data = validate_chapter(fm, source=slug, schema=schema)
    return ContentDocument(
        slug=slug,
        title=data["title"],
        description=data["description"],
        chapter_number=data["chapterNumber"],
        body=body,
    )


def load_document(abs_path: str, slug: str, schema: dict = None) -> ContentDocument:
    """Read a markdown file from disk and validate its frontmatter."""
    try:
        with open(abs_path, encoding="utf-8") as f:
            content = f.read()
    except UnicodeDecodeError as e:
        raise FrontmatterError(f"{slug}: file is not valid UTF-8") from e
    return document_from_text(content, slug, schema)


def iter_markdown_files(collection_dir: str):
    """Yield absolute paths of .md files under collection_dir in sorted order, skipping dot dirs."""
    for root, dirs, files in os.walk(collection_dir):
        dirs[:] = sorted(d for d in dirs if not d.startswith("."))
        for fname in sorted(files):
            if fname.endswith(".md"):
                yield os.path.join(root, fname)
