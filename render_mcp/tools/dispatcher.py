"""Call-by-name dispatch from MCP tool calls to Render API handlers."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any

from mcp import types
from pydantic import ValidationError

from ..exceptions import InvalidParamsError, RenderMCPError, UnknownToolError
from ..render.client import RenderClient
from .catalog import ToolParams, ToolSpec, build_catalog

logger = logging.getLogger(__name__)


def _format_validation_error(exc: ValidationError) -> str:
    problems = []
    for err in exc.errors():
        loc = [str(part) for part in err["loc"]]
        if loc and loc[0] == "params":
            loc = loc[1:]
        where = ".".join(loc) or "params"
        problems.append(f"{where}: {err['msg']}")
    return "; ".join(problems)


def text_result(text: str, is_error: bool = False) -> types.CallToolResult:
    """The single-text-block envelope used for every response."""
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=text)],
        isError=is_error,
    )


class ToolDispatcher:
    """Validates tool calls once and routes them to the matching Render client operation.

    Every outcome, including failures, comes back as a CallToolResult; no
    exception escapes `call`.
    """

    def __init__(self, client: RenderClient, catalog: dict[str, ToolSpec] | None = None):
        self._client = client
        self._catalog = catalog if catalog is not None else build_catalog()

    @property
    def tool_names(self) -> list[str]:
        return list(self._catalog)

    def list_tools(self) -> list[types.Tool]:
        return [
            types.Tool(name=spec.name, description=spec.description, inputSchema=spec.input_schema())
            for spec in self._catalog.values()
        ]

    def parse(self, name: str, arguments: dict[str, Any] | None) -> tuple[ToolSpec, ToolParams]:
        """Resolve the tool and validate its arguments into a typed parameter record."""
        spec = self._catalog.get(name)
        if spec is None:
            raise UnknownToolError(f"Unknown tool: {name}")

        if not arguments or arguments.get("params") is None:
            raise InvalidParamsError("Tool arguments are required")

        try:
            params = spec.parse(arguments)
        except ValidationError as exc:
            raise InvalidParamsError(
                f"Invalid params for {name}: {_format_validation_error(exc)}"
            ) from exc
        return spec, params

    async def call(self, name: str, arguments: dict[str, Any] | None) -> types.CallToolResult:
        start = time.monotonic()
        try:
            spec, params = self.parse(name, arguments)
            text = await asyncio.to_thread(spec.handler, self._client, params)
        except RenderMCPError as exc:
            logger.warning(
                "Tool %s failed: %s", name, exc,
                extra={"tool": name, "is_error": True,
                       "elapsed_seconds": round(time.monotonic() - start, 3)},
            )
            return text_result(f"Error: {exc}", is_error=True)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Unexpected error in tool %s", name, extra={"tool": name, "is_error": True})
            return text_result(f"Error: {exc}", is_error=True)

        logger.info(
            "Tool %s completed", name,
            extra={"tool": name, "is_error": False,
                   "elapsed_seconds": round(time.monotonic() - start, 3)},
        )
        return text_result(text)
