"""Data models for word vector loading and queries"""

from wordvecs.models.header import ModelHeader
from wordvecs.models.load_summary import LoadSummary
from wordvecs.models.neighbor import Neighbor, NeighborQueryOutput, QueryInfo
from wordvecs.models.query import AnalogyQuery, NeighborQuery

__all__ = [
    "ModelHeader",
    "LoadSummary",
    "Neighbor",
    "NeighborQueryOutput",
    "QueryInfo",
    "NeighborQuery",
    "AnalogyQuery",
]
