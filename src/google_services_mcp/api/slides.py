"""
Google Slides operations for Google Services MCP Server.

Page elements get generated object ids ('slide_<ms>', 'textbox_<ms>',
'image_<ms>') so the caller can reference them in later calls.
"""

from google_services_mcp.api.helpers import build_element_properties, new_object_id
from google_services_mcp.session import CapabilitySession
from google_services_mcp.types import (
    AddImageArgs,
    AddSlideArgs,
    AddTextArgs,
    CreatePresentationArgs,
)
from google_services_mcp.utils import log

# Default geometry in points: (width, height) and (x, y)
TEXT_BOX_SIZE = (300, 50)
TEXT_BOX_POSITION = (50, 50)
IMAGE_SIZE = (200, 200)
IMAGE_POSITION = (100, 100)


async def _batch_update(
    session: CapabilitySession, presentation_id: str, requests: list[dict]
) -> dict:
    return await session.execute(
        session.slides.presentations().batchUpdate(
            presentationId=presentation_id, body={"requests": requests}
        )
    )


async def create_presentation(
    args: CreatePresentationArgs, session: CapabilitySession
) -> dict:
    """
    Create a new presentation.

    Returns:
        presentationId, title and the initial slides (slideId, layoutId)
    """
    log(f'Creating presentation "{args.title}"')

    response = await session.execute(
        session.slides.presentations().create(body={"title": args.title})
    )

    return {
        "presentationId": response.get("presentationId"),
        "title": response.get("title"),
        "slides": [
            {
                "slideId": slide.get("objectId"),
                "layoutId": slide.get("slideProperties", {}).get("layoutObjectId"),
            }
            for slide in response.get("slides", [])
        ],
    }


async def add_slide(args: AddSlideArgs, session: CapabilitySession) -> dict:
    log(f"Adding slide to presentation {args.presentation_id}")

    create_slide: dict = {"objectId": new_object_id("slide")}
    if args.layout_id:
        create_slide["slideLayoutReference"] = {"layoutId": args.layout_id}

    response = await _batch_update(
        session, args.presentation_id, [{"createSlide": create_slide}]
    )

    return {"slideId": response["replies"][0]["createSlide"]["objectId"]}


async def add_text(args: AddTextArgs, session: CapabilitySession) -> dict:
    """
    Add a text box with the given text to a slide.

    Args:
        args: Target slide, text, and optional position/size in points
            (defaults: 300x50 at 50,50)
        session: Capability session

    Returns:
        The new text box id
    """
    log(f"Adding text box to slide {args.slide_id}")

    text_box_id = new_object_id("textbox")
    requests = [
        {
            "createShape": {
                "objectId": text_box_id,
                "shapeType": "TEXT_BOX",
                "elementProperties": build_element_properties(
                    args.slide_id,
                    args.width,
                    args.height,
                    args.x,
                    args.y,
                    default_size=TEXT_BOX_SIZE,
                    default_position=TEXT_BOX_POSITION,
                ),
            }
        },
        {
            "insertText": {
                "objectId": text_box_id,
                "text": args.text,
            }
        },
    ]

    await _batch_update(session, args.presentation_id, requests)

    return {"textBoxId": text_box_id, "success": True}


async def add_image(args: AddImageArgs, session: CapabilitySession) -> dict:
    """
    Add an image from a public URL to a slide.

    Position and size default to 200x200 points at 100,100.
    """
    log(f"Adding image to slide {args.slide_id}")

    image_id = new_object_id("image")
    requests = [
        {
            "createImage": {
                "objectId": image_id,
                "url": args.image_url,
                "elementProperties": build_element_properties(
                    args.slide_id,
                    args.width,
                    args.height,
                    args.x,
                    args.y,
                    default_size=IMAGE_SIZE,
                    default_position=IMAGE_POSITION,
                ),
            }
        }
    ]

    await _batch_update(session, args.presentation_id, requests)

    return {"imageId": image_id, "success": True}
