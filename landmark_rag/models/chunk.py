"""
Chunk domain model.

Represents a retrievable passage of a source article with a deterministic,
url-safe ID, and the fetched article it was cut from.

Dependencies: pydantic
System role: Document chunk data structure
"""

from pydantic import BaseModel, ConfigDict, Field


class Document(BaseModel):
    """Source article fetched before chunking."""

    id: str = Field(description="Url-safe document identifier")
    title: str = Field(description="Article title")
    content: str = Field(description="Plain-text article body with wiki-style headings")
    page_url: str = Field(description="Canonical page URL")


class DocumentChunk(BaseModel):
    """Immutable chunk of a document; re-indexing replaces it by id."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Deterministic chunk identifier (title_section_NN slug)")
    title: str = Field(description="Title of the source document")
    section: str = Field(description="Section heading the chunk belongs to")
    sequence: int = Field(description="1-based position within the section", ge=1)
    content: str = Field(description="Trimmed chunk text")
    source_ref: str = Field(description="Locator back to origin (page URL + section anchor)")

    def embedding_text(self) -> str:
        """Text sent to the embedding capability at index time."""
        return f"{self.title} > {self.section}\n\n{self.content}"
