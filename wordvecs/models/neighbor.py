"""Similarity result models"""

from pydantic import BaseModel, Field


class Neighbor(BaseModel):
    """Vocabulary token returned in response to a query"""

    token: str = Field(description="The matching vocabulary token")
    score: float = Field(description="Dot product with the query vector (higher is closer)")
    rank: int = Field(ge=1, description="Position in result list (1-indexed)")


class QueryInfo(BaseModel):
    """Metadata about the query execution"""

    original_query: str = Field(description="The query that was executed")
    in_vocabulary: bool = Field(description="Whether every query token was found")
    total_results: int = Field(ge=0, description="Number of results returned")
    query_time_ms: float = Field(ge=0.0, description="Query execution time in milliseconds")


class NeighborQueryOutput(BaseModel):
    """Complete output from a similarity query"""

    results: list[Neighbor] = Field(description="Ranked list of neighbors")
    query_info: QueryInfo = Field(description="Metadata about the query")
