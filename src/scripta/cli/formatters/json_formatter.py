"""JSON output formatter for CLI."""

from __future__ import annotations

import json
from typing import Any

from scripta.cli.formatters.base import OutputFormat, OutputFormatter


class JsonFormatter(OutputFormatter[Any]):
    """Generic JSON formatter for CLI output."""

    def format(self, data: Any, format_type: OutputFormat = OutputFormat.JSON) -> str:  # noqa: ARG002
        """Format data as JSON.

        Pydantic models are dumped with their camelCase aliases so the output
        matches the saved record format.

        Args:
            data: Data to format
            format_type: Output format type (ignored, always JSON)

        Returns:
            JSON string
        """
        return json.dumps(self._plain(data), default=str, indent=2)

    def _plain(self, data: Any) -> Any:
        if hasattr(data, "model_dump"):
            return data.model_dump(mode="json", by_alias=True)
        if isinstance(data, dict):
            return {str(k): self._plain(v) for k, v in data.items()}
        if isinstance(data, list | tuple):
            return [self._plain(item) for item in data]
        return data

    def format_success(self, message: str, data: Any = None) -> str:
        """Format a success response.

        Args:
            message: Success message
            data: Optional additional data

        Returns:
            JSON string
        """
        response: dict[str, Any] = {"success": True, "message": message}
        if data is not None:
            response["data"] = self._plain(data)
        return json.dumps(response, default=str, indent=2)

    def format_error_response(self, error: str | Exception, code: int = 1) -> str:
        """Format an error response.

        Args:
            error: Error message or exception
            code: Error code

        Returns:
            JSON string
        """
        error_msg = getattr(error, "message", None) or str(error)
        response = {"success": False, "error": error_msg, "code": code}
        return json.dumps(response, indent=2)
