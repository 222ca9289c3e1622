"""JSON artifact writers: category indices, content chunks, tags, search, recent"""

import json
from pathlib import Path
from typing import Any, Sequence

from rstpub.core.models import Book, CategoryEnum, Document, SearchDocument, TagEntry


CHUNKS_DIR = "content-chunks"
TAGS_FILE = "tags.json"
SEARCH_FILE = "search-index.json"
RECENT_FILE = "recent.json"


def document_record(doc: Document) -> dict[str, Any]:
    """Serialize a document with its front-matter fields flattened to top-level keys."""
    record: dict[str, Any] = {"id": doc.id, "category": doc.category.value}
    record.update(doc.frontmatter.model_dump())
    record["content"] = [b.model_dump(mode="json") for b in doc.content]
    record["snippet_refs"] = list(doc.snippet_refs)
    record["unresolved"] = doc.unresolved_refs()
    if isinstance(doc, Book):
        record["sections"] = [s.model_dump(mode="json") for s in doc.sections]
    return record


def write_json(path: Path, data: Any) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding='utf-8')
    return path


def write_category_index(
    docs: Sequence[Document],
    category: CategoryEnum,
    output_dir: Path,
    chunk_size: int = 1000,
    ) -> list[Path]:
    """Write <dir>-index.json plus chunk_size slices under content-chunks/.

    Returns the written paths, index file first.
    """
    items = [document_record(d) for d in docs]
    paths = [write_json(output_dir / f"{category.dirname}-index.json", {"items": items, "total": len(items)})]
    for n, start in enumerate(range(0, len(items), chunk_size), start=1):
        chunk_path = output_dir / CHUNKS_DIR / f"{category.dirname}-chunk-{n}.json"
        paths.append(write_json(chunk_path, items[start:start + chunk_size]))
    return paths


def write_tag_index(entries: Sequence[TagEntry], output_dir: Path) -> Path:
    return write_json(output_dir / TAGS_FILE, [e.model_dump(mode="json") for e in entries])


def write_search_index(documents: Sequence[SearchDocument], output_dir: Path) -> Path:
    return write_json(output_dir / SEARCH_FILE, [d.model_dump(mode="json") for d in documents])


def write_recent(recent: dict[str, list[dict]], output_dir: Path) -> Path:
    return write_json(output_dir / RECENT_FILE, recent)


def load_search_index(output_dir: Path) -> list[SearchDocument]:
    """Read search-index.json back into models."""
    data = json.loads((output_dir / SEARCH_FILE).read_text(encoding='utf-8'))
    return [SearchDocument.model_validate(d) for d in data]
