"""Search service for querying a loaded vocabulary"""

import time

from wordvecs.models.neighbor import Neighbor, NeighborQueryOutput, QueryInfo
from wordvecs.models.query import AnalogyQuery, NeighborQuery
from wordvecs.services.telemetry import TelemetryService, get_telemetry_service
from wordvecs.services.vocabulary import Vocabulary


class SearchService:
    """Handle similarity queries against a Vocabulary"""

    def __init__(self, vocabulary: Vocabulary, telemetry: TelemetryService | None = None):
        self.vocabulary = vocabulary
        self.telemetry = telemetry or get_telemetry_service()

    def query(self, query: NeighborQuery) -> NeighborQueryOutput:
        """
        Find the tokens closest to a vocabulary token

        Args:
            query: NeighborQuery with the token and result limits

        Returns:
            NeighborQueryOutput: Ranked neighbors with metadata
        """
        error: Exception | None = None
        response = None

        try:
            with self.telemetry.span("nearest_neighbors", {"query.limit": query.limit}):
                start_time = time.perf_counter()
                raw_results = self.vocabulary.nearest_neighbors(query.token, query.limit)
                output = self._format(
                    raw_results,
                    original_query=query.token,
                    in_vocabulary=query.token in self.vocabulary,
                    min_score=query.min_score,
                    start_time=start_time,
                )
            response = output.model_dump()
            return output
        except Exception as e:
            error = e
            raise
        finally:
            self.telemetry.log_query(
                operation="nearest_neighbors",
                query=query.token,
                parameters={"limit": query.limit, "min_score": query.min_score},
                response=response,
                error=error,
            )

    def analogy(self, query: AnalogyQuery) -> NeighborQueryOutput:
        """
        Find the tokens closest to sum(positive) - sum(negative)

        Args:
            query: AnalogyQuery with positive and negative tokens

        Returns:
            NeighborQueryOutput: Ranked neighbors with metadata
        """
        error: Exception | None = None
        response = None
        query_text = " ".join(
            [f"+{token}" for token in query.positive] + [f"-{token}" for token in query.negative]
        )

        try:
            with self.telemetry.span("analogy", {"query.limit": query.limit}):
                start_time = time.perf_counter()
                raw_results = self.vocabulary.analogy(
                    query.positive, query.negative, count=query.limit
                )
                output = self._format(
                    raw_results,
                    original_query=query_text,
                    in_vocabulary=all(
                        token in self.vocabulary for token in query.positive + query.negative
                    ),
                    min_score=None,
                    start_time=start_time,
                )
            response = output.model_dump()
            return output
        except Exception as e:
            error = e
            raise
        finally:
            self.telemetry.log_query(
                operation="analogy",
                query=query_text,
                parameters={"limit": query.limit},
                response=response,
                error=error,
            )

    def _format(
        self,
        raw_results: list[tuple[str, float]],
        original_query: str,
        in_vocabulary: bool,
        min_score: float | None,
        start_time: float,
    ) -> NeighborQueryOutput:
        results: list[Neighbor] = []
        for token, score in raw_results:
            # Results are sorted, so everything after the first miss is lower
            if min_score is not None and score < min_score:
                break
            results.append(Neighbor(token=token, score=score, rank=len(results) + 1))

        query_info = QueryInfo(
            original_query=original_query,
            in_vocabulary=in_vocabulary,
            total_results=len(results),
            query_time_ms=(time.perf_counter() - start_time) * 1000,
        )
        return NeighborQueryOutput(results=results, query_info=query_info)
