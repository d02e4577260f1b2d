"""Custom exception hierarchy for the Render MCP server."""


class RenderMCPError(Exception):
    """Base exception for all server errors."""


class ConfigError(RenderMCPError):
    """Invalid or missing configuration."""


class CredentialsNotFoundError(ConfigError):
    """No Render API key in the environment or the credential store."""


class RenderAPIError(RenderMCPError):
    """Error communicating with the Render API."""

    def __init__(self, message: str, status_code: int | None = None, response_body: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body


class UpstreamHttpError(RenderAPIError):
    """The Render API answered with a non-2xx status."""


class UpstreamUnreachableError(RenderAPIError):
    """The request was sent but no response came back."""

    def __init__(self, message: str = "No response received from Render API"):
        super().__init__(message)


class RequestSetupError(RenderAPIError):
    """The request failed before it could be sent."""


class UnexpectedShapeError(RenderAPIError):
    """A 2xx response whose body does not have the documented shape."""


class ToolError(RenderMCPError):
    """A tool call rejected by the adapter before reaching the Render API."""


class UnknownToolError(ToolError):
    """No tool with the requested name is registered."""


class InvalidParamsError(ToolError):
    """Tool arguments are missing or do not match the tool's schema."""


class LocalValidationError(ToolError):
    """Arguments are well-formed but inconsistent for the requested action."""
