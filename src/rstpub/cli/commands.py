"""CLI command implementations"""

import json
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from rstpub.config import Settings, load_config
from rstpub.core.export import document_record, load_search_index
from rstpub.core.indexes import search
from rstpub.core.models import FRONTMATTER_MODELS, CategoryEnum, Document
from rstpub.core.parse import parse_file
from rstpub.core.pipeline import run_compile


LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling, then configure logging."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
    return settings


def build_cmd(
    content: Annotated[Optional[str], typer.Option("--content-dir", help="Content root directory")] = None,
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    chunk_size: Annotated[Optional[int], typer.Option("--chunk-size", help="Items per content chunk file")] = None,
    strict: Annotated[bool, typer.Option("--strict-snippets", help="Disable substring snippet matching")] = False,
    ):
    """Compile every category and write category, tag, search, and recent indices."""
    settings = _settings(overrides={
        "content_dir": content, "output_dir": out, "chunk_size": chunk_size,
        "fuzzy_snippets": False if strict else None,
    })
    output_dir = Path(settings.output_dir)
    try:
        written = run_compile(
            Path(settings.content_dir), output_dir,
            settings.chunk_size, settings.recent_limit, settings.fuzzy_snippets,
        )
    except FileNotFoundError as e:
        _fail(str(e))
    except OSError as e:
        _fail("Writing output failed", e)
    for name, path in written:
        typer.echo(f"  {name} -> {path}")
    typer.echo(f"Wrote {len(written)} artifact(s) to {output_dir}/")


def parse_cmd(
    path: Annotated[Path, typer.Argument(help="Document to parse")],
    category: Annotated[CategoryEnum, typer.Option("--category", help="Front-matter schema to apply")] = CategoryEnum.article,
    ):
    """Parse a single document and print it as JSON (no snippet resolution)."""
    _settings()
    try:
        parsed = parse_file(path, FRONTMATTER_MODELS[category])
    except (OSError, UnicodeDecodeError) as e:
        _fail(f"Cannot read {path}", e)
    doc = Document(
        id=path.stem,
        category=category,
        frontmatter=parsed.frontmatter,
        content=parsed.content,
        snippet_refs=parsed.snippet_refs,
    )
    typer.echo(json.dumps(document_record(doc), indent=2, ensure_ascii=False))


def search_cmd(
    query: Annotated[str, typer.Argument(help="Substring to look for")],
    category: Annotated[Optional[CategoryEnum], typer.Option("--category", help="Restrict to one category")] = None,
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Directory holding search-index.json")] = None,
    ):
    """Search a previously built search index by title, content, and tags."""
    settings = _settings(overrides={"output_dir": out})
    try:
        documents = load_search_index(Path(settings.output_dir))
    except (OSError, ValueError) as e:
        _fail("Cannot load search index; run 'rstpub build' first", e)

    results = search(documents, query, category)
    if not results:
        typer.echo(f"No results for '{query}'.")
        raise typer.Exit(1)
    for d in results:
        typer.echo(f"  [{d.category.value}] {d.title} -> {d.url}")
    typer.echo(f"{len(results)} result(s)")
