"""Query request models"""

from pydantic import BaseModel, Field

from wordvecs.config import config


class NeighborQuery(BaseModel):
    """Request for the tokens closest to a vocabulary token"""

    token: str = Field(min_length=1, description="Vocabulary token to search around")
    limit: int = Field(
        default_factory=lambda: config.neighbor_count,
        ge=1,
        le=1000,
        description="Maximum number of results to return",
    )
    min_score: float | None = Field(
        default=None, ge=-1.0, le=1.0, description="Minimum similarity score threshold"
    )


class AnalogyQuery(BaseModel):
    """Request for tokens closest to sum(positive) - sum(negative)"""

    positive: list[str] = Field(min_length=1, description="Tokens added to the query vector")
    negative: list[str] = Field(
        default_factory=list, description="Tokens subtracted from the query vector"
    )
    limit: int = Field(
        default_factory=lambda: config.neighbor_count,
        ge=1,
        le=1000,
        description="Maximum number of results to return",
    )
