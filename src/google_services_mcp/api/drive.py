"""
Google Drive operations for Google Services MCP Server.

Handles creating folders and listing, moving and deleting files.
"""

from typing import Any

from google_services_mcp.api.helpers import FOLDER_MIME_TYPE
from google_services_mcp.session import CapabilitySession
from google_services_mcp.types import (
    CreateFolderArgs,
    DeleteFileArgs,
    ListFilesArgs,
    MoveFileArgs,
)
from google_services_mcp.utils import log

DEFAULT_PAGE_SIZE = 10

FILE_FIELDS = "files(id, name, mimeType, webViewLink, createdTime, modifiedTime)"


async def create_folder(args: CreateFolderArgs, session: CapabilitySession) -> dict:
    """
    Create a new folder in Google Drive.

    Args:
        args: Folder name and optional parent folder ID (None for root)
        session: Capability session

    Returns:
        The new folder's id, name and webViewLink
    """
    log(
        f'Creating folder "{args.name}" '
        f'{"in parent " + args.parent_id if args.parent_id else "in root"}'
    )

    metadata: dict[str, Any] = {
        "name": args.name,
        "mimeType": FOLDER_MIME_TYPE,
    }
    if args.parent_id:
        metadata["parents"] = [args.parent_id]

    response = await session.execute(
        session.drive.files().create(body=metadata, fields="id, name, webViewLink")
    )

    return {
        "id": response.get("id"),
        "name": response.get("name"),
        "webViewLink": response.get("webViewLink"),
    }


def build_list_query(args: ListFilesArgs) -> str:
    """
    Build the Drive search query for drive_list_files.

    A folder ID scopes the listing to that folder and takes precedence over
    any free-text query.
    """
    if args.folder_id:
        return f"'{args.folder_id}' in parents"
    return args.query or ""


async def list_files(args: ListFilesArgs, session: CapabilitySession) -> list[dict]:
    """
    List files in Google Drive.

    Args:
        args: Optional query, folder ID and result cap (default 10)
        session: Capability session

    Returns:
        List of file resources (id, name, mimeType, webViewLink, times)
    """
    query = build_list_query(args)
    page_size = args.max_results or DEFAULT_PAGE_SIZE
    log(f"Listing Drive files. Query: {query or 'none'}, Max: {page_size}")

    list_params: dict[str, Any] = {"pageSize": page_size, "fields": FILE_FIELDS}
    if query:
        list_params["q"] = query

    response = await session.execute(session.drive.files().list(**list_params))
    return response.get("files", [])


async def move_file(args: MoveFileArgs, session: CapabilitySession) -> dict:
    """
    Move a file to a different folder.

    Fetches the file's current parents, then replaces them with the new
    parent. The two calls are not atomic: if the update fails the file keeps
    its old parents.
    """
    log(f"Moving file {args.file_id} to folder {args.new_parent_id}")

    file_metadata = await session.execute(
        session.drive.files().get(fileId=args.file_id, fields="parents")
    )
    previous_parents = ",".join(file_metadata.get("parents") or [])

    update_params = {
        "fileId": args.file_id,
        "addParents": args.new_parent_id,
        "fields": "id, parents",
    }
    if previous_parents:
        update_params["removeParents"] = previous_parents

    response = await session.execute(session.drive.files().update(**update_params))

    return {
        "success": True,
        "fileId": response.get("id"),
        "newParents": response.get("parents"),
    }


async def delete_file(args: DeleteFileArgs, session: CapabilitySession) -> dict:
    """Permanently delete a file (bypasses the trash)."""
    log(f"Deleting file {args.file_id}")

    await session.execute(session.drive.files().delete(fileId=args.file_id))

    return {
        "success": True,
        "message": f"File {args.file_id} deleted successfully",
    }
