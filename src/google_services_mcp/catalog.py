"""
Tool catalog for Google Services MCP Server.

The order of TOOLS is part of the public contract: tools are grouped by
service family (Drive, Sheets, Slides, Docs, Forms) and listed in that order.
"""

from typing import Any

from google_services_mcp.types import (
    AddImageArgs,
    AddQuestionArgs,
    AddSlideArgs,
    AddTextArgs,
    CreateDocumentArgs,
    CreateFolderArgs,
    CreateFormArgs,
    CreatePresentationArgs,
    CreateSpreadsheetArgs,
    DeleteFileArgs,
    FormIdArgs,
    ListFilesArgs,
    MoveFileArgs,
    ReadDocumentArgs,
    ReadSheetArgs,
    ReplaceTextArgs,
    ToolDescriptor,
    WriteDocumentArgs,
    WriteSheetArgs,
)

VALUE_INPUT_OPTIONS = ["RAW", "USER_ENTERED"]

QUESTION_TYPES = [
    "MULTIPLE_CHOICE",
    "TEXT",
    "PARAGRAPH_TEXT",
    "MULTIPLE_CHOICE_GRID",
    "CHECKBOX",
    "LINEAR_SCALE",
    "DATE",
    "TIME",
]


def _string(description: str, enum: list[str] | None = None) -> dict[str, Any]:
    prop: dict[str, Any] = {"type": "string", "description": description}
    if enum:
        prop["enum"] = list(enum)
    return prop


def _number(description: str) -> dict[str, Any]:
    return {"type": "number", "description": description}


def _boolean(description: str) -> dict[str, Any]:
    return {"type": "boolean", "description": description}


def _array(description: str, items: str | None = None) -> dict[str, Any]:
    prop: dict[str, Any] = {"type": "array"}
    if items:
        prop["items"] = {"type": items}
    prop["description"] = description
    return prop


def _tool(
    name: str,
    description: str,
    arguments: type,
    properties: dict[str, dict[str, Any]],
    required: list[str] | None = None,
) -> ToolDescriptor:
    schema: dict[str, Any] = {"type": "object", "properties": properties}
    if required:
        schema["required"] = required
    return ToolDescriptor(
        name=name,
        description=description,
        input_schema=schema,
        arguments=arguments,
    )


def _placement(properties: dict[str, dict[str, Any]]) -> dict[str, dict[str, Any]]:
    """Add the optional x/y/width/height fields shared by slide elements."""
    return {
        **properties,
        "x": _number("X position (optional)"),
        "y": _number("Y position (optional)"),
        "width": _number("Width (optional)"),
        "height": _number("Height (optional)"),
    }


def _sheet_values_properties(verb: str) -> dict[str, dict[str, Any]]:
    return {
        "spreadsheetId": _string("Spreadsheet ID"),
        "range": _string(f'Range to {verb} (e.g., "Sheet1!A1")'),
        "values": _array("Array of arrays containing the data"),
        "valueInputOption": _string(
            "How values should be interpreted", enum=VALUE_INPUT_OPTIONS
        ),
    }


TOOLS: tuple[ToolDescriptor, ...] = (
    # === DRIVE ===
    _tool(
        "drive_create_folder",
        "Create a new folder in Google Drive",
        CreateFolderArgs,
        {
            "name": _string("Folder name"),
            "parentId": _string("Parent folder ID (optional)"),
        },
        required=["name"],
    ),
    _tool(
        "drive_list_files",
        "List files in Google Drive",
        ListFilesArgs,
        {
            "query": _string("Search query (optional)"),
            "maxResults": _number("Max results (default: 10)"),
            "folderId": _string("Folder ID to search in (optional)"),
        },
    ),
    _tool(
        "drive_move_file",
        "Move a file to a different folder",
        MoveFileArgs,
        {
            "fileId": _string("File ID to move"),
            "newParentId": _string("New parent folder ID"),
        },
        required=["fileId", "newParentId"],
    ),
    _tool(
        "drive_delete_file",
        "Delete a file from Google Drive",
        DeleteFileArgs,
        {"fileId": _string("File ID to delete")},
        required=["fileId"],
    ),
    # === SHEETS ===
    _tool(
        "sheets_create",
        "Create a new Google Sheets spreadsheet",
        CreateSpreadsheetArgs,
        {
            "title": _string("Spreadsheet title"),
            "sheetNames": _array("Sheet names (optional)", items="string"),
        },
        required=["title"],
    ),
    _tool(
        "sheets_read",
        "Read data from a Google Sheets spreadsheet",
        ReadSheetArgs,
        {
            "spreadsheetId": _string("Spreadsheet ID"),
            "range": _string('Range to read (e.g., "Sheet1!A1:C10")'),
        },
        required=["spreadsheetId", "range"],
    ),
    _tool(
        "sheets_write",
        "Write data to a Google Sheets spreadsheet",
        WriteSheetArgs,
        _sheet_values_properties("write"),
        required=["spreadsheetId", "range", "values"],
    ),
    _tool(
        "sheets_append",
        "Append data to a Google Sheets spreadsheet",
        WriteSheetArgs,
        _sheet_values_properties("append to"),
        required=["spreadsheetId", "range", "values"],
    ),
    # === SLIDES ===
    _tool(
        "slides_create",
        "Create a new Google Slides presentation",
        CreatePresentationArgs,
        {"title": _string("Presentation title")},
        required=["title"],
    ),
    _tool(
        "slides_add_slide",
        "Add a new slide to a presentation",
        AddSlideArgs,
        {
            "presentationId": _string("Presentation ID"),
            "layoutId": _string("Layout ID (optional)"),
        },
        required=["presentationId"],
    ),
    _tool(
        "slides_add_text",
        "Add text to a slide",
        AddTextArgs,
        _placement(
            {
                "presentationId": _string("Presentation ID"),
                "slideId": _string("Slide ID"),
                "text": _string("Text to add"),
            }
        ),
        required=["presentationId", "slideId", "text"],
    ),
    _tool(
        "slides_add_image",
        "Add an image to a slide",
        AddImageArgs,
        _placement(
            {
                "presentationId": _string("Presentation ID"),
                "slideId": _string("Slide ID"),
                "imageUrl": _string("Image URL"),
            }
        ),
        required=["presentationId", "slideId", "imageUrl"],
    ),
    # === DOCS ===
    _tool(
        "docs_create",
        "Create a new Google Docs document",
        CreateDocumentArgs,
        {"title": _string("Document title")},
        required=["title"],
    ),
    _tool(
        "docs_read",
        "Read content from a Google Docs document",
        ReadDocumentArgs,
        {"documentId": _string("Document ID")},
        required=["documentId"],
    ),
    _tool(
        "docs_write",
        "Write text to a Google Docs document",
        WriteDocumentArgs,
        {
            "documentId": _string("Document ID"),
            "text": _string("Text to insert"),
            "index": _number("Index to insert at (default: end)"),
        },
        required=["documentId", "text"],
    ),
    _tool(
        "docs_replace_text",
        "Replace text in a Google Docs document",
        ReplaceTextArgs,
        {
            "documentId": _string("Document ID"),
            "searchText": _string("Text to search for"),
            "replaceText": _string("Text to replace with"),
        },
        required=["documentId", "searchText", "replaceText"],
    ),
    # === FORMS ===
    _tool(
        "forms_create",
        "Create a new Google Form",
        CreateFormArgs,
        {
            "title": _string("Form title"),
            "description": _string("Form description (optional)"),
        },
        required=["title"],
    ),
    _tool(
        "forms_add_question",
        "Add a question to a Google Form",
        AddQuestionArgs,
        {
            "formId": _string("Form ID"),
            "questionType": _string("Type of question", enum=QUESTION_TYPES),
            "title": _string("Question title"),
            "options": _array("Options for multiple choice questions", items="string"),
            "required": _boolean("Whether the question is required"),
        },
        required=["formId", "questionType", "title"],
    ),
    _tool(
        "forms_get_responses",
        "Get responses from a Google Form",
        FormIdArgs,
        {"formId": _string("Form ID")},
        required=["formId"],
    ),
    _tool(
        "forms_get_form",
        "Get form details and structure",
        FormIdArgs,
        {"formId": _string("Form ID")},
        required=["formId"],
    ),
)

_BY_NAME = {tool.name: tool for tool in TOOLS}


def list_tools() -> tuple[ToolDescriptor, ...]:
    """Return every tool descriptor in catalog order."""
    return TOOLS


def get_tool(name: str) -> ToolDescriptor | None:
    """Look up a tool descriptor by name."""
    return _BY_NAME.get(name)
