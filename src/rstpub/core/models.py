"""Data models for parsed documents, content blocks, and derived indices"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, SerializeAsAny


class CategoryEnum(str, Enum):
    """Content categories, one subtree of the content directory each"""
    article = "article"
    snippet = "snippet"
    project = "project"
    book = "book"

    @property
    def dirname(self) -> str:
        """Directory (and output file prefix) for this category, e.g. 'articles'."""
        return f"{self.value}s"


# --- front matter ---

class FrontMatter(BaseModel):
    """Fields common to every category; unknown keys are ignored."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    title:  str = ""
    date:   str = ""            # ISO date string as authored
    tags:   list[str] = []
    author: str = ""


class ArticleFrontMatter(FrontMatter):
    description: str = ""
    cover_image: str = ""


class SnippetFrontMatter(FrontMatter):
    snippet_id: str = ""


class ProjectFrontMatter(FrontMatter):
    github_url:  str = ""
    demo_url:    str = ""
    description: str = ""


class BookFrontMatter(FrontMatter):
    description: str = ""
    cover_image: str = ""


FRONTMATTER_MODELS: dict[CategoryEnum, type[FrontMatter]] = {
    CategoryEnum.article: ArticleFrontMatter,
    CategoryEnum.snippet: SnippetFrontMatter,
    CategoryEnum.project: ProjectFrontMatter,
    CategoryEnum.book:    BookFrontMatter,
}


# --- content blocks ---

class HeadingBlock(BaseModel):
    type: Literal["heading"] = "heading"
    level: int                  # 2 for '=', 3 for '-', 4 for '~'
    text: str
    anchor: str


class ParagraphBlock(BaseModel):
    type: Literal["paragraph"] = "paragraph"
    text: str


class ListItem(BaseModel):
    text: str
    children: Optional["ListBlock"] = None


class ListBlock(BaseModel):
    type: Literal["list"] = "list"
    ordered: bool = False
    items: list[ListItem] = []


class TableBlock(BaseModel):
    type: Literal["table"] = "table"
    header: list[str] = []
    rows: list[list[str]] = []


class CodeBlock(BaseModel):
    """Verbatim code; one directive indent level stripped, nothing else."""
    type: Literal["code-block"] = "code-block"
    language: str = "text"
    body: str


class SnippetRef(BaseModel):
    """Placeholder for a snippet that has not been (or could not be) resolved."""
    type: Literal["snippet-ref"] = "snippet-ref"
    snippet_id: str


class EmbeddedSnippet(BaseModel):
    type: Literal["embedded-snippet"] = "embedded-snippet"
    snippet_id: str
    title: str
    body: list["ContentBlock"] = []


class TocTree(BaseModel):
    type: Literal["toctree"] = "toctree"
    entries: list[str] = []


ContentBlock = Annotated[
    Union[
        HeadingBlock,
        ParagraphBlock,
        ListBlock,
        TableBlock,
        CodeBlock,
        SnippetRef,
        EmbeddedSnippet,
        TocTree,
    ],
    Field(discriminator="type"),
]

# Prose blocks: the structured forms of a plain-text run.
TextBlock = Union[HeadingBlock, ParagraphBlock, ListBlock, TableBlock]

ListItem.model_rebuild()
EmbeddedSnippet.model_rebuild()


# --- documents ---

@dataclass
class ParsedDoc:
    """Parser output for one raw document; not persisted."""
    frontmatter:  FrontMatter
    content:      list = field(default_factory=list)     # ContentBlock instances in reading order
    snippet_refs: list[str] = field(default_factory=list)


class Document(BaseModel):
    """A compiled document: identity, front matter, and resolved content."""
    id: str
    category: CategoryEnum
    frontmatter: SerializeAsAny[FrontMatter] = FrontMatter()
    content: list[ContentBlock] = []
    snippet_refs: list[str] = []    # every snippet id referenced in the source

    @property
    def title(self) -> str:
        return self.frontmatter.title

    def unresolved_refs(self) -> list[str]:
        """Snippet ids still present as unresolved placeholders."""
        return [b.snippet_id for b in self.content if isinstance(b, SnippetRef)]


class Section(BaseModel):
    """One book section; owned by its Book."""
    id: str
    title: str
    content: list[ContentBlock] = []


BOOK_INDEX = "index"          # file stem and section id of a book's landing document


class Book(Document):
    category: CategoryEnum = CategoryEnum.book
    sections: list[Section] = []


# --- derived indices ---

class TagRef(BaseModel):
    id: str
    title: str
    category: CategoryEnum


class TagEntry(BaseModel):
    name: str
    count: int = 0
    items: list[TagRef] = []


class SearchDocument(BaseModel):
    id: str
    category: CategoryEnum
    title: str
    content: str
    tags: list[str] = []
    date: str = ""
    url: str
