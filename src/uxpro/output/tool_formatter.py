"""
Tool Output Formatter for uxpro

Renders every tool response (search hits, design systems, classifications,
statistics or errors) as one JSON envelope that agents can rely on. The
envelope is validated with jsonschema before it leaves the process.
"""

import json
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence, Union

import jsonschema

from ..core.error_handling import SearchError
from ..core.search import SearchHit

ToolPayload = Union[Sequence[SearchHit], Dict[str, Any], SearchError]


class ToolOutputFormatter:
    """
    Formats tool responses into structured JSON.

    The envelope always has ``metadata``, ``results``, ``error`` and
    ``hints``; exactly one of ``results`` and ``error`` is non-null.
    """

    TOOL_OUTPUT_SCHEMA = {
        "$schema": "http://json-schema.org/draft-07/schema#",
        "type": "object",
        "properties": {
            "metadata": {
                "type": "object",
                "properties": {
                    "tool": {"type": "string"},
                    "query": {"type": ["string", "null"]},
                    "timestamp": {"type": "string", "format": "date-time"},
                    "elapsed_ms": {"type": "number", "minimum": 0},
                    "total_results": {"type": "integer", "minimum": 0},
                    "format_version": {"type": "string"},
                },
                "required": [
                    "tool",
                    "query",
                    "timestamp",
                    "elapsed_ms",
                    "total_results",
                    "format_version",
                ],
            },
            "results": {
                "type": ["array", "object", "null"],
                "items": {
                    "type": "object",
                    "properties": {
                        "data": {"type": "object"},
                        "score": {"type": "number", "minimum": 0},
                    },
                    "required": ["data", "score"],
                },
            },
            "error": {"type": ["string", "null"]},
            "hints": {
                "type": "object",
                "properties": {
                    "detected_domains": {"type": "array"},
                    "detected_stacks": {"type": "array"},
                    "detected_platform": {"type": ["object", "null"]},
                    "tips": {"type": "array", "items": {"type": "string"}},
                },
                "required": ["detected_domains", "detected_stacks", "detected_platform", "tips"],
            },
        },
        "required": ["metadata", "results", "error", "hints"],
    }

    def __init__(self, validate_schema: bool = True):
        """
        Args:
            validate_schema: Whether to validate output against the JSON schema
        """
        self.validate_schema = validate_schema
        self.format_version = "1.0.0"

    def build(
        self,
        tool: str,
        payload: ToolPayload,
        query: Optional[str] = None,
        elapsed_seconds: float = 0.0,
    ) -> Dict[str, Any]:
        """Build the envelope as a dictionary (validated when enabled)."""
        error: Optional[str] = None
        results: Any
        if isinstance(payload, SearchError):
            error = payload.error
            results = None
            total = 0
        elif isinstance(payload, dict):
            results = payload
            total = 1
        else:
            results = [hit.to_dict() for hit in payload]
            total = len(results)

        output = {
            "metadata": {
                "tool": tool,
                "query": query,
                "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
                "elapsed_ms": round(max(elapsed_seconds, 0.0) * 1000, 3),
                "total_results": total,
                "format_version": self.format_version,
            },
            "results": results,
            "error": error,
            "hints": self._hints(payload, error),
        }

        if self.validate_schema:
            try:
                jsonschema.validate(output, self.TOOL_OUTPUT_SCHEMA)
            except jsonschema.ValidationError as e:
                raise jsonschema.ValidationError(
                    f"Tool output schema validation failed: {e.message}"
                )
        return output

    def format(
        self,
        tool: str,
        payload: ToolPayload,
        query: Optional[str] = None,
        elapsed_seconds: float = 0.0,
    ) -> str:
        """Format a tool response as a JSON string."""
        return json.dumps(
            self.build(tool, payload, query, elapsed_seconds), indent=2, ensure_ascii=False
        )

    def _hints(self, payload: ToolPayload, error: Optional[str]) -> Dict[str, Any]:
        hints: Dict[str, Any] = {
            "detected_domains": [],
            "detected_stacks": [],
            "detected_platform": None,
            "tips": [],
        }
        if error is not None:
            hints["tips"].append(self._error_tip(error))
            return hints

        if isinstance(payload, dict):
            if isinstance(payload.get("platform"), dict):
                hints["detected_platform"] = payload["platform"]
            return hints

        hits: List[SearchHit] = list(payload)
        if not hits:
            hints["tips"].append(
                "No matches; try broader design terms or the search-all tool"
            )
            return hints

        first = hits[0].data
        hints["detected_domains"] = list(first.get("_detected_domains", []))
        hints["detected_stacks"] = list(first.get("_detected_stacks", []))
        hints["detected_platform"] = first.get("_detected_platform")
        return hints

    def _error_tip(self, error: str) -> str:
        if error.startswith("Unknown stack") or error.startswith("Unknown platform"):
            return "Use one of the names listed in the error message"
        if "not initialized" in error:
            return "The data file for this domain is missing or empty; run validate-data"
        return "Check the query and max_results arguments"

    def validate_output(self, output_json: str) -> bool:
        """Return True when ``output_json`` matches the envelope schema."""
        try:
            jsonschema.validate(json.loads(output_json), self.TOOL_OUTPUT_SCHEMA)
            return True
        except (jsonschema.ValidationError, json.JSONDecodeError):
            return False

    def get_schema(self) -> Dict[str, Any]:
        return self.TOOL_OUTPUT_SCHEMA.copy()
