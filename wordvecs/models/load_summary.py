"""Models for vocabulary loading"""

from pydantic import BaseModel, Field


class LoadSummary(BaseModel):
    """Result of a completed load pass"""

    path: str = Field(description="Model file that was loaded")
    word_count: int = Field(ge=0, description="Entry count declared in the header")
    vector_size: int = Field(ge=0, description="Vector dimensionality declared in the header")
    entries_read: int = Field(ge=0, description="Records decoded from the file")
    vocabulary_size: int = Field(ge=0, description="Distinct tokens in the vocabulary")
    duplicate_tokens: int = Field(ge=0, description="Records that overwrote an earlier token")
    zero_norm_vectors: int = Field(ge=0, description="Vectors left unnormalized (zero norm)")
    bytes_read: int = Field(ge=0, description="Bytes consumed from the file")
    duration_seconds: float = Field(ge=0.0, description="Duration in seconds")
