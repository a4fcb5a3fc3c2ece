"""Model file header"""

from pydantic import BaseModel, Field

# Header fields are read into a signed 32-bit range
MAX_HEADER_VALUE = 2**31 - 1


class ModelHeader(BaseModel):
    """Counts declared at the top of a word2vec binary file"""

    model_config = {"frozen": True}

    word_count: int = Field(
        ge=0,
        le=MAX_HEADER_VALUE,
        description="Declared number of entries (an upper bound, not a guarantee)",
    )
    vector_size: int = Field(
        ge=0, le=MAX_HEADER_VALUE, description="Dimensionality of every vector in the file"
    )
