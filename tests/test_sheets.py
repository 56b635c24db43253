"""
Tests for Google Sheets handlers.
"""

import pytest

from google_services_mcp.api import sheets
from google_services_mcp.types import (
    CreateSpreadsheetArgs,
    ReadSheetArgs,
    WriteSheetArgs,
)


class TestCreateSpreadsheet:
    @pytest.mark.asyncio
    async def test_create_with_sheet_names(self, session):
        spreadsheets = session.sheets.spreadsheets.return_value
        spreadsheets.create.return_value.execute.return_value = {
            "spreadsheetId": "S1",
            "spreadsheetUrl": "https://docs.google.com/spreadsheets/d/S1",
            "properties": {"title": "Budget", "locale": "en_US"},
        }

        result = await sheets.create_spreadsheet(
            CreateSpreadsheetArgs(title="Budget", sheet_names=["2024", "2025"]), session
        )

        assert result == {
            "spreadsheetId": "S1",
            "spreadsheetUrl": "https://docs.google.com/spreadsheets/d/S1",
            "title": "Budget",
        }
        spreadsheets.create.assert_called_once_with(
            body={
                "properties": {"title": "Budget"},
                "sheets": [
                    {"properties": {"title": "2024"}},
                    {"properties": {"title": "2025"}},
                ],
            },
            fields="spreadsheetId,spreadsheetUrl,properties",
        )

    @pytest.mark.asyncio
    async def test_create_without_sheet_names(self, session):
        spreadsheets = session.sheets.spreadsheets.return_value
        spreadsheets.create.return_value.execute.return_value = {"spreadsheetId": "S1"}

        result = await sheets.create_spreadsheet(CreateSpreadsheetArgs(title="Empty"), session)

        assert "sheets" not in spreadsheets.create.call_args.kwargs["body"]
        assert result["title"] is None


class TestValues:
    """Tests for reading, writing and appending values."""

    @pytest.mark.asyncio
    async def test_read(self, session):
        values = session.sheets.spreadsheets.return_value.values.return_value
        values.get.return_value.execute.return_value = {
            "range": "Sheet1!A1:B2", "values": [["a", "b"], ["1", "2"]],
        }

        result = await sheets.read_sheet(
            ReadSheetArgs(spreadsheet_id="S1", range="Sheet1!A1:B2"), session
        )

        assert result == {"range": "Sheet1!A1:B2", "values": [["a", "b"], ["1", "2"]]}
        values.get.assert_called_once_with(spreadsheetId="S1", range="Sheet1!A1:B2")

    @pytest.mark.asyncio
    async def test_read_empty_range(self, session):
        values = session.sheets.spreadsheets.return_value.values.return_value
        values.get.return_value.execute.return_value = {"range": "Sheet1!Z1"}

        result = await sheets.read_sheet(ReadSheetArgs(spreadsheet_id="S1", range="Z1"), session)

        assert result["values"] == []

    @pytest.mark.asyncio
    async def test_write_defaults_to_user_entered(self, session):
        values = session.sheets.spreadsheets.return_value.values.return_value
        values.update.return_value.execute.return_value = {
            "updatedCells": 4, "updatedColumns": 2, "updatedRows": 2, "spreadsheetId": "S1",
        }

        result = await sheets.write_sheet(
            WriteSheetArgs(spreadsheet_id="S1", range="A1", values=[[1, 2], [3, 4]]), session
        )

        assert result == {"updatedCells": 4, "updatedColumns": 2, "updatedRows": 2}
        values.update.assert_called_once_with(
            spreadsheetId="S1",
            range="A1",
            valueInputOption="USER_ENTERED",
            body={"values": [[1, 2], [3, 4]]},
        )

    @pytest.mark.asyncio
    async def test_append_reads_nested_updates(self, session):
        values = session.sheets.spreadsheets.return_value.values.return_value
        values.append.return_value.execute.return_value = {
            "tableRange": "Sheet1!A1:B2",
            "updates": {"updatedCells": 2, "updatedColumns": 2, "updatedRows": 1},
        }

        result = await sheets.append_sheet(
            WriteSheetArgs(
                spreadsheet_id="S1", range="A1", values=[["x", "y"]], value_input_option="RAW"
            ),
            session,
        )

        assert result == {"updatedCells": 2, "updatedColumns": 2, "updatedRows": 1}
        assert values.append.call_args.kwargs["valueInputOption"] == "RAW"
