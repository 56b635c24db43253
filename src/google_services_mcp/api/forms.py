"""
Google Forms operations for Google Services MCP Server.
"""

from google_services_mcp.api.helpers import build_question_item
from google_services_mcp.session import CapabilitySession
from google_services_mcp.types import AddQuestionArgs, CreateFormArgs, FormIdArgs
from google_services_mcp.utils import log


async def create_form(args: CreateFormArgs, session: CapabilitySession) -> dict:
    """
    Create a new form.

    Args:
        args: Title and optional description
        session: Capability session

    Returns:
        formId, title and responderUri
    """
    log(f'Creating form "{args.title}"')

    info = {"title": args.title}
    if args.description is not None:
        info["description"] = args.description

    response = await session.execute(session.forms.forms().create(body={"info": info}))

    return {
        "formId": response.get("formId"),
        "title": response.get("info", {}).get("title"),
        "responderUri": response.get("responderUri"),
    }


async def add_question(args: AddQuestionArgs, session: CapabilitySession) -> dict:
    """
    Add a question at the top of a form.

    The question type is translated into the Forms API item shape by
    helpers.build_question_item.
    """
    log(f"Adding {args.question_type} question to form {args.form_id}")

    item = build_question_item(args)
    response = await session.execute(
        session.forms.forms().batchUpdate(
            formId=args.form_id,
            body={
                "requests": [
                    {"createItem": {"item": item, "location": {"index": 0}}}
                ]
            },
        )
    )

    replies = response.get("replies") or [{}]
    return {
        "success": True,
        "itemId": replies[0].get("createItem", {}).get("itemId"),
    }


async def get_responses(args: FormIdArgs, session: CapabilitySession) -> dict:
    log(f"Listing responses for form {args.form_id}")

    response = await session.execute(
        session.forms.forms().responses().list(formId=args.form_id)
    )
    responses = response.get("responses") or []

    return {"responses": responses, "totalResponses": len(responses)}


def _question_type(item: dict) -> str | None:
    question = item.get("questionItem", {}).get("question", {})
    # Reports the first key of the question object as-is. The Forms API
    # usually lists questionId first, so most items report that
    for key in question:
        return key
    return None


async def get_form(args: FormIdArgs, session: CapabilitySession) -> dict:
    """
    Get a form's metadata and item list.

    Each item is summarized as itemId, title and questionType.
    """
    log(f"Getting form {args.form_id}")

    response = await session.execute(session.forms.forms().get(formId=args.form_id))

    return {
        "formId": response.get("formId"),
        "info": response.get("info"),
        "items": [
            {
                "itemId": item.get("itemId"),
                "title": item.get("title"),
                "questionType": _question_type(item),
            }
            for item in response.get("items") or []
        ],
        "responderUri": response.get("responderUri"),
    }
