"""
Google Docs operations for Google Services MCP Server.

Document indexing uses 1-based positions (index 1 is start of document).
"""

from google_services_mcp.api.helpers import extract_text
from google_services_mcp.session import CapabilitySession
from google_services_mcp.types import (
    CreateDocumentArgs,
    ReadDocumentArgs,
    ReplaceTextArgs,
    WriteDocumentArgs,
)
from google_services_mcp.utils import log


async def _batch_update(
    session: CapabilitySession, document_id: str, requests: list[dict]
) -> dict:
    return await session.execute(
        session.docs.documents().batchUpdate(
            documentId=document_id, body={"requests": requests}
        )
    )


async def create_document(args: CreateDocumentArgs, session: CapabilitySession) -> dict:
    """Create a blank document with the given title."""
    log(f'Creating document "{args.title}"')

    response = await session.execute(
        session.docs.documents().create(body={"title": args.title})
    )

    return {
        "documentId": response.get("documentId"),
        "title": response.get("title"),
        "revisionId": response.get("revisionId"),
    }


async def read_document(args: ReadDocumentArgs, session: CapabilitySession) -> dict:
    """
    Read the plain text of a document.

    Args:
        args: Document ID
        session: Capability session

    Returns:
        documentId, title, textContent and revisionId
    """
    log(f"Reading document {args.document_id}")

    response = await session.execute(
        session.docs.documents().get(documentId=args.document_id)
    )

    return {
        "documentId": response.get("documentId"),
        "title": response.get("title"),
        "textContent": extract_text(response),
        "revisionId": response.get("revisionId"),
    }


async def write_document(args: WriteDocumentArgs, session: CapabilitySession) -> dict:
    """
    Insert text into a document.

    Inserts at index 1 when no index is given.
    """
    index = args.index or 1
    log(f"Inserting text into document {args.document_id} at index {index}")

    response = await _batch_update(
        session,
        args.document_id,
        [{"insertText": {"location": {"index": index}, "text": args.text}}],
    )

    # batchUpdate replies carry no revision; the documentId is reported instead
    return {"success": True, "revisionId": response.get("documentId")}


async def replace_text(args: ReplaceTextArgs, session: CapabilitySession) -> dict:
    """Replace every occurrence of a string, ignoring case."""
    log(f'Replacing "{args.search_text}" in document {args.document_id}')

    response = await _batch_update(
        session,
        args.document_id,
        [
            {
                "replaceAllText": {
                    "containsText": {"text": args.search_text, "matchCase": False},
                    "replaceText": args.replace_text,
                }
            }
        ],
    )

    replies = response.get("replies") or [{}]
    occurrences = replies[0].get("replaceAllText", {}).get("occurrencesChanged")

    return {"success": True, "replacements": occurrences or 0}
