"""
Tool handlers for Google Services MCP Server.

HANDLERS binds every catalog tool name to the coroutine that serves it.
"""

from typing import Any, Awaitable, Callable

from google_services_mcp.api import documents, drive, forms, sheets, slides
from google_services_mcp.session import CapabilitySession

Handler = Callable[[Any, CapabilitySession], Awaitable[Any]]

HANDLERS: dict[str, Handler] = {
    # Drive
    "drive_create_folder": drive.create_folder,
    "drive_list_files": drive.list_files,
    "drive_move_file": drive.move_file,
    "drive_delete_file": drive.delete_file,
    # Sheets
    "sheets_create": sheets.create_spreadsheet,
    "sheets_read": sheets.read_sheet,
    "sheets_write": sheets.write_sheet,
    "sheets_append": sheets.append_sheet,
    # Slides
    "slides_create": slides.create_presentation,
    "slides_add_slide": slides.add_slide,
    "slides_add_text": slides.add_text,
    "slides_add_image": slides.add_image,
    # Docs
    "docs_create": documents.create_document,
    "docs_read": documents.read_document,
    "docs_write": documents.write_document,
    "docs_replace_text": documents.replace_text,
    # Forms
    "forms_create": forms.create_form,
    "forms_add_question": forms.add_question,
    "forms_get_responses": forms.get_responses,
    "forms_get_form": forms.get_form,
}
