"""
Google Sheets operations for Google Services MCP Server.
"""

from typing import Any

from google_services_mcp.session import CapabilitySession
from google_services_mcp.types import (
    CreateSpreadsheetArgs,
    ReadSheetArgs,
    WriteSheetArgs,
)
from google_services_mcp.utils import log

DEFAULT_VALUE_INPUT_OPTION = "USER_ENTERED"


def _update_counts(updates: dict) -> dict:
    return {
        "updatedCells": updates.get("updatedCells"),
        "updatedColumns": updates.get("updatedColumns"),
        "updatedRows": updates.get("updatedRows"),
    }


async def create_spreadsheet(
    args: CreateSpreadsheetArgs, session: CapabilitySession
) -> dict:
    """
    Create a new spreadsheet.

    Args:
        args: Title and optional sheet names (one sheet per name, in order)
        session: Capability session

    Returns:
        spreadsheetId, spreadsheetUrl and title
    """
    log(f'Creating spreadsheet "{args.title}"')

    body: dict[str, Any] = {"properties": {"title": args.title}}
    if args.sheet_names:
        body["sheets"] = [{"properties": {"title": name}} for name in args.sheet_names]

    response = await session.execute(
        session.sheets.spreadsheets().create(
            body=body, fields="spreadsheetId,spreadsheetUrl,properties"
        )
    )

    return {
        "spreadsheetId": response.get("spreadsheetId"),
        "spreadsheetUrl": response.get("spreadsheetUrl"),
        "title": response.get("properties", {}).get("title"),
    }


async def read_sheet(args: ReadSheetArgs, session: CapabilitySession) -> dict:
    """Read the values in a range."""
    log(f"Reading range {args.range} from spreadsheet {args.spreadsheet_id}")

    response = await session.execute(
        session.sheets.spreadsheets()
        .values()
        .get(spreadsheetId=args.spreadsheet_id, range=args.range)
    )

    return {
        "range": response.get("range"),
        "values": response.get("values", []),
    }


async def write_sheet(args: WriteSheetArgs, session: CapabilitySession) -> dict:
    """
    Overwrite the values in a range.

    valueInputOption defaults to USER_ENTERED, so formulas and dates are
    parsed as if typed into the UI.
    """
    log(f"Writing to range {args.range} in spreadsheet {args.spreadsheet_id}")

    response = await session.execute(
        session.sheets.spreadsheets()
        .values()
        .update(
            spreadsheetId=args.spreadsheet_id,
            range=args.range,
            valueInputOption=args.value_input_option or DEFAULT_VALUE_INPUT_OPTION,
            body={"values": args.values},
        )
    )

    return _update_counts(response)


async def append_sheet(args: WriteSheetArgs, session: CapabilitySession) -> dict:
    """Append rows after the last row of the table found in the range."""
    log(f"Appending to range {args.range} in spreadsheet {args.spreadsheet_id}")

    response = await session.execute(
        session.sheets.spreadsheets()
        .values()
        .append(
            spreadsheetId=args.spreadsheet_id,
            range=args.range,
            valueInputOption=args.value_input_option or DEFAULT_VALUE_INPUT_OPTION,
            body={"values": args.values},
        )
    )

    return _update_counts(response.get("updates", {}))
