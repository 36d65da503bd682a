"""
Shared helpers for building tool results.

Tools never raise to the host: failures become `isError=True` results
carrying a readable message.
"""

from mcp.types import CallToolResult, TextContent


def text_result(text: str) -> CallToolResult:
    return CallToolResult(content=[TextContent(type="text", text=text)])


def error_result(text: str) -> CallToolResult:
    return CallToolResult(content=[TextContent(type="text", text=text)], isError=True)


def project_not_found(name_or_id: str) -> CallToolResult:
    return error_result(
        f'Project "{name_or_id}" not found. '
        "Please check the project name or ID and try again."
    )


def result_text(result: CallToolResult) -> str:
    """Concatenate the text blocks of a result."""
    return "".join(c.text for c in result.content if isinstance(c, TextContent))
