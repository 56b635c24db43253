"""
Type definitions for Google Services MCP Server.

Holds the tool descriptor, the per-tool argument records produced by the
validator, and the protocol error taxonomy.
"""

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from mcp.types import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    METHOD_NOT_FOUND,
    ErrorData,
    Tool,
)


# --- Tool Descriptor ---
@dataclass(frozen=True)
class ToolDescriptor:
    """A named, schema-described tool in the catalog."""

    name: str
    description: str
    input_schema: dict[str, Any]
    arguments: type

    @property
    def properties(self) -> dict[str, dict[str, Any]]:
        return self.input_schema.get("properties", {})

    @property
    def required(self) -> list[str]:
        return list(self.input_schema.get("required", []))

    def to_tool(self) -> Tool:
        """Render the descriptor as an MCP tool definition."""
        return Tool(
            name=self.name,
            description=self.description,
            inputSchema=copy.deepcopy(self.input_schema),
        )


# --- Argument Records ---
@dataclass(frozen=True, kw_only=True)
class ToolArgs:
    """Base for validated tool arguments.

    Fields not declared by a tool's schema are kept in ``extra``.
    """

    extra: dict[str, Any] = field(default_factory=dict)


# Drive
@dataclass(frozen=True, kw_only=True)
class CreateFolderArgs(ToolArgs):
    name: str
    parent_id: str | None = None


@dataclass(frozen=True, kw_only=True)
class ListFilesArgs(ToolArgs):
    query: str | None = None
    max_results: int | float | None = None
    folder_id: str | None = None


@dataclass(frozen=True, kw_only=True)
class MoveFileArgs(ToolArgs):
    file_id: str
    new_parent_id: str


@dataclass(frozen=True, kw_only=True)
class DeleteFileArgs(ToolArgs):
    file_id: str


# Sheets
@dataclass(frozen=True, kw_only=True)
class CreateSpreadsheetArgs(ToolArgs):
    title: str
    sheet_names: list[str] | None = None


@dataclass(frozen=True, kw_only=True)
class ReadSheetArgs(ToolArgs):
    spreadsheet_id: str
    range: str


@dataclass(frozen=True, kw_only=True)
class WriteSheetArgs(ToolArgs):
    """Used by both sheets_write and sheets_append."""

    spreadsheet_id: str
    range: str
    values: list[Any]
    value_input_option: str | None = None  # RAW, USER_ENTERED


# Slides
@dataclass(frozen=True, kw_only=True)
class CreatePresentationArgs(ToolArgs):
    title: str


@dataclass(frozen=True, kw_only=True)
class AddSlideArgs(ToolArgs):
    presentation_id: str
    layout_id: str | None = None


@dataclass(frozen=True, kw_only=True)
class AddTextArgs(ToolArgs):
    presentation_id: str
    slide_id: str
    text: str
    x: float | None = None
    y: float | None = None
    width: float | None = None
    height: float | None = None


@dataclass(frozen=True, kw_only=True)
class AddImageArgs(ToolArgs):
    presentation_id: str
    slide_id: str
    image_url: str
    x: float | None = None
    y: float | None = None
    width: float | None = None
    height: float | None = None


# Docs
@dataclass(frozen=True, kw_only=True)
class CreateDocumentArgs(ToolArgs):
    title: str


@dataclass(frozen=True, kw_only=True)
class ReadDocumentArgs(ToolArgs):
    document_id: str


@dataclass(frozen=True, kw_only=True)
class WriteDocumentArgs(ToolArgs):
    document_id: str
    text: str
    index: int | float | None = None


@dataclass(frozen=True, kw_only=True)
class ReplaceTextArgs(ToolArgs):
    document_id: str
    search_text: str
    replace_text: str


# Forms
@dataclass(frozen=True, kw_only=True)
class CreateFormArgs(ToolArgs):
    title: str
    description: str | None = None


@dataclass(frozen=True, kw_only=True)
class AddQuestionArgs(ToolArgs):
    form_id: str
    question_type: str
    title: str
    options: list[str] | None = None
    required: bool | None = None


@dataclass(frozen=True, kw_only=True)
class FormIdArgs(ToolArgs):
    """Used by forms_get_responses and forms_get_form."""

    form_id: str


# --- Protocol Errors ---
class ErrorKind(str, Enum):
    """Closed set of error kinds reported in the error envelope."""

    METHOD_NOT_FOUND = "MethodNotFound"
    MISSING_REQUIRED_FIELD = "MissingRequiredField"
    INVALID_FIELD_TYPE = "InvalidFieldType"
    INVALID_ENUM_VALUE = "InvalidEnumValue"
    INTERNAL_ERROR = "InternalError"


class ProtocolError(Exception):
    """Base for errors translated into an error envelope by the dispatcher."""

    kind: ErrorKind = ErrorKind.INTERNAL_ERROR
    code: int = INTERNAL_ERROR

    def __init__(self, message: str, **context: Any):
        super().__init__(message)
        self.message = message
        self.context = context

    def to_error_data(self) -> ErrorData:
        return ErrorData(
            code=self.code,
            message=self.message,
            data={"kind": self.kind.value, **self.context},
        )


class MethodNotFound(ProtocolError):
    """Unknown top-level method, or unknown tool name under tools/call."""

    kind = ErrorKind.METHOD_NOT_FOUND
    code = METHOD_NOT_FOUND

    @classmethod
    def for_method(cls, method: Any) -> "MethodNotFound":
        return cls(f"Unknown method: {method}", method=method)

    @classmethod
    def for_tool(cls, tool_name: Any) -> "MethodNotFound":
        return cls(f"Unknown tool: {tool_name}", toolName=tool_name)


class ValidationError(ProtocolError):
    """Arguments rejected before any remote call."""

    code = INVALID_PARAMS


class MissingRequiredField(ValidationError):
    kind = ErrorKind.MISSING_REQUIRED_FIELD

    def __init__(self, field_name: str):
        super().__init__(f"Missing required field: {field_name}", field=field_name)
        self.field = field_name


class InvalidFieldType(ValidationError):
    kind = ErrorKind.INVALID_FIELD_TYPE

    def __init__(self, field_name: str, expected: str, actual: str):
        super().__init__(
            f"Invalid type for field '{field_name}': expected {expected}, got {actual}",
            field=field_name,
            expected=expected,
            actual=actual,
        )
        self.field = field_name


class InvalidEnumValue(ValidationError):
    kind = ErrorKind.INVALID_ENUM_VALUE

    def __init__(self, field_name: str, value: Any, allowed: list[Any]):
        super().__init__(
            f"Invalid value for field '{field_name}': {value!r} "
            f"(allowed: {', '.join(map(str, allowed))})",
            field=field_name,
            value=value,
            allowed=list(allowed),
        )
        self.field = field_name


class InternalError(ProtocolError):
    """Fault raised while executing a tool, session construction included."""

    kind = ErrorKind.INTERNAL_ERROR
    code = INTERNAL_ERROR

    def __init__(self, tool_name: str, cause: str):
        super().__init__(f"Error executing {tool_name}: {cause}", toolName=tool_name)
        self.tool_name = tool_name


class ConfigurationError(Exception):
    """Raised when the environment lacks settings needed to reach Google APIs."""
