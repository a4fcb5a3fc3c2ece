"""OpenTelemetry logging and tracing for vocabulary loads and queries"""

import json
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any

from opentelemetry import trace
from opentelemetry._logs import SeverityNumber, set_logger_provider
from opentelemetry.exporter.otlp.proto.http._log_exporter import OTLPLogExporter
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk._logs import LoggerProvider
from opentelemetry.sdk._logs.export import BatchLogRecordProcessor
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from wordvecs.config import config
from wordvecs.models.load_summary import LoadSummary

logger = logging.getLogger(__name__)


class TelemetryService:
    """Handle OpenTelemetry logging and tracing for loads and queries"""

    def __init__(self):
        self.logging_enabled = config.otel_logging_enabled
        self.tracing_enabled = config.otel_tracing_enabled
        self.logger_provider = None
        self.tracer_provider = None
        self.otel_logger = None
        self.tracer = None

        if self.logging_enabled:
            try:
                self._initialize_logging()
            except Exception as e:
                logger.warning(f"Failed to initialize OTel logging: {e}. Logging disabled.")
                self.logging_enabled = False

        if self.tracing_enabled:
            try:
                self._initialize_tracing()
            except Exception as e:
                logger.warning(f"Failed to initialize OTel tracing: {e}. Tracing disabled.")
                self.tracing_enabled = False

    def _resource(self) -> Resource:
        return Resource(
            attributes={
                SERVICE_NAME: config.otel_service_name,
                SERVICE_VERSION: config.otel_service_version,
            }
        )

    def _initialize_logging(self) -> None:
        """Initialize OpenTelemetry logging with OTLP log exporter"""
        self.logger_provider = LoggerProvider(resource=self._resource())

        log_endpoint = config.otel_endpoint
        if not log_endpoint.endswith("/v1/logs"):
            log_endpoint = f"{log_endpoint.rstrip('/')}/v1/logs"

        self.logger_provider.add_log_record_processor(
            BatchLogRecordProcessor(OTLPLogExporter(endpoint=log_endpoint))
        )
        set_logger_provider(self.logger_provider)
        self.otel_logger = self.logger_provider.get_logger(__name__)

        logger.info(f"OpenTelemetry logging initialized with endpoint: {log_endpoint}")

    def _initialize_tracing(self) -> None:
        """Initialize OpenTelemetry tracing with OTLP trace exporter"""
        self.tracer_provider = TracerProvider(resource=self._resource())

        trace_endpoint = config.otel_endpoint
        if not trace_endpoint.endswith("/v1/traces"):
            trace_endpoint = f"{trace_endpoint.rstrip('/')}/v1/traces"

        self.tracer_provider.add_span_processor(
            BatchSpanProcessor(OTLPSpanExporter(endpoint=trace_endpoint))
        )
        trace.set_tracer_provider(self.tracer_provider)
        self.tracer = self.tracer_provider.get_tracer(__name__)

        logger.info(f"OpenTelemetry tracing initialized with endpoint: {trace_endpoint}")

    @contextmanager
    def span(self, name: str, attributes: dict[str, Any] | None = None) -> Iterator[Any]:
        """
        Trace a block of work

        Yields the active span, or None when tracing is disabled.
        """
        if not self.tracing_enabled or self.tracer is None:
            yield None
            return

        with self.tracer.start_as_current_span(name, attributes=attributes) as current:
            yield current

    def log_query(
        self,
        operation: str,
        query: str | None,
        parameters: dict[str, Any],
        response: dict[str, Any] | None = None,
        error: Exception | None = None,
    ) -> None:
        """
        Log a similarity query and its response to OpenTelemetry

        Args:
            operation: Name of the query operation (nearest_neighbors, analogy)
            query: The query text
            parameters: All parameters passed to the operation
            response: The response data (if successful)
            error: The error (if failed)
        """
        if not self.logging_enabled or not self.otel_logger:
            return

        try:
            # Low-cardinality attributes only
            attributes: dict[str, str | int | float | bool] = {
                "query.operation": operation,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            }

            if parameters.get("limit") is not None:
                attributes["query.param.limit"] = int(parameters["limit"])
            if parameters.get("min_score") is not None:
                attributes["query.param.min_score"] = float(parameters["min_score"])

            success = error is None
            attributes["response.success"] = success

            log_body_parts = [f"[{operation}]", "SUCCESS" if success else "FAILED"]

            if query:
                truncated_query = query if len(query) <= 200 else query[:200] + "..."
                log_body_parts.append(f'query="{truncated_query}"')
                if config.otel_log_full_results:
                    attributes["query.full_text"] = query

            if response:
                results = response.get("results", [])
                attributes["response.result_count"] = len(results)
                if results and results[0].get("score") is not None:
                    attributes["response.top_score"] = float(results[0]["score"])

                query_info = response.get("query_info", {})
                if "query_time_ms" in query_info:
                    attributes["response.query_time_ms"] = float(query_info["query_time_ms"])
                if "in_vocabulary" in query_info:
                    attributes["response.in_vocabulary"] = bool(query_info["in_vocabulary"])

                query_time = query_info.get("query_time_ms", 0)
                log_body_parts.append(f"results={len(results)} time={query_time:.1f}ms")

                if config.otel_log_full_results:
                    attributes["response.results_json"] = json.dumps(results, default=str)

            if error:
                attributes["error.type"] = type(error).__name__
                error_message = str(error)
                if len(error_message) > 500:
                    error_message = error_message[:500] + "..."
                attributes["error.message"] = error_message
                log_body_parts.append(f"error={type(error).__name__}")

            self._emit(" ".join(log_body_parts), attributes, error is not None)

        except Exception as e:
            # Don't let telemetry errors break the application
            logger.warning(f"Failed to log telemetry: {e}")

    def log_load(
        self,
        path: str,
        summary: LoadSummary | None = None,
        error: Exception | None = None,
    ) -> None:
        """
        Log the outcome of a vocabulary load to OpenTelemetry

        Args:
            path: Model file that was loaded
            summary: Load summary (if successful)
            error: The error (if failed)
        """
        if not self.logging_enabled or not self.otel_logger:
            return

        try:
            attributes: dict[str, str | int | float | bool] = {
                "load.path": path,
                "response.success": error is None,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            }
            log_body_parts = ["[load_vocabulary]", "SUCCESS" if error is None else "FAILED"]

            if summary:
                attributes["load.entries_read"] = summary.entries_read
                attributes["load.vocabulary_size"] = summary.vocabulary_size
                attributes["load.vector_size"] = summary.vector_size
                attributes["load.duration_seconds"] = summary.duration_seconds
                log_body_parts.append(
                    f"words={summary.vocabulary_size} time={summary.duration_seconds:.2f}s"
                )

            if error:
                attributes["error.type"] = type(error).__name__
                attributes["error.message"] = str(error)[:500]
                log_body_parts.append(f"error={type(error).__name__}")

            self._emit(" ".join(log_body_parts), attributes, error is not None)

        except Exception as e:
            logger.warning(f"Failed to log telemetry: {e}")

    def _emit(
        self, body: str, attributes: dict[str, str | int | float | bool], failed: bool
    ) -> None:
        severity = logging.ERROR if failed else logging.INFO
        self.otel_logger.emit(
            body=body,
            severity_number=SeverityNumber(self._severity_to_number(severity)),
            attributes=attributes,
            timestamp=int(datetime.now(timezone.utc).timestamp() * 1e9),
        )

    def _severity_to_number(self, level: int) -> int:
        """Convert Python logging level to OpenTelemetry severity number"""
        if level >= logging.CRITICAL:
            return 21  # FATAL
        elif level >= logging.ERROR:
            return 17  # ERROR
        elif level >= logging.WARNING:
            return 13  # WARN
        elif level >= logging.INFO:
            return 9  # INFO
        else:
            return 5  # DEBUG


# Global telemetry service instance
_telemetry_service: TelemetryService | None = None


def get_telemetry_service() -> TelemetryService:
    """Get or create the global telemetry service instance"""
    global _telemetry_service
    if _telemetry_service is None:
        _telemetry_service = TelemetryService()
    return _telemetry_service
