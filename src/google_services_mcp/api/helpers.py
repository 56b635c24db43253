"""
Helper functions for building Google API requests.

Shared by the handler modules: object id generation, slide element
geometry, document text extraction and the form question-type table.
"""

import time
from typing import Any, Callable

from google_services_mcp.types import AddQuestionArgs

FOLDER_MIME_TYPE = "application/vnd.google-apps.folder"


def new_object_id(prefix: str) -> str:
    """
    Generate an object id for a new Slides page element.

    Args:
        prefix: Element kind, e.g. 'slide', 'textbox', 'image'

    Returns:
        '<prefix>_<milliseconds since epoch>'
    """
    return f"{prefix}_{time.time_ns() // 1_000_000}"


def _or_default(value: float | None, default: float) -> float:
    # Zero falls back to the default, like an unset value
    return value or default


def build_element_properties(
    page_object_id: str,
    width: float | None,
    height: float | None,
    x: float | None,
    y: float | None,
    default_size: tuple[float, float],
    default_position: tuple[float, float],
) -> dict[str, Any]:
    """
    Build the elementProperties of a page element placed on a slide.

    Sizes and translations are in points.
    """
    return {
        "pageObjectId": page_object_id,
        "size": {
            "width": {"magnitude": _or_default(width, default_size[0]), "unit": "PT"},
            "height": {"magnitude": _or_default(height, default_size[1]), "unit": "PT"},
        },
        "transform": {
            "scaleX": 1,
            "scaleY": 1,
            "translateX": _or_default(x, default_position[0]),
            "translateY": _or_default(y, default_position[1]),
            "unit": "PT",
        },
    }


def extract_text(document: dict) -> str:
    """
    Concatenate the text runs of every body paragraph, in document order.

    Args:
        document: Document resource from documents.get

    Returns:
        Plain text content (empty string for an empty body)
    """
    text = ""
    for element in document.get("body", {}).get("content", []):
        paragraph = element.get("paragraph")
        if not paragraph:
            continue
        for paragraph_element in paragraph.get("elements", []):
            content = paragraph_element.get("textRun", {}).get("content")
            if content:
                text += content
    return text


# --- Form question types ---


def _choice_options(args: AddQuestionArgs) -> list[dict[str, str]]:
    return [{"value": option} for option in args.options or []]


def _radio(args: AddQuestionArgs) -> dict:
    return {"choiceQuestion": {"type": "RADIO", "options": _choice_options(args)}}


def _checkbox(args: AddQuestionArgs) -> dict:
    return {"choiceQuestion": {"type": "CHECKBOX", "options": _choice_options(args)}}


def _short_text(args: AddQuestionArgs) -> dict:
    return {"textQuestion": {}}


def _paragraph_text(args: AddQuestionArgs) -> dict:
    return {"textQuestion": {"paragraph": True}}


def _linear_scale(args: AddQuestionArgs) -> dict:
    return {"scaleQuestion": {"low": 1, "high": 5}}


def _date(args: AddQuestionArgs) -> dict:
    return {"dateQuestion": {}}


def _time(args: AddQuestionArgs) -> dict:
    return {"timeQuestion": {}}


# Question-type value -> Forms API question fields
QUESTION_BUILDERS: dict[str, Callable[[AddQuestionArgs], dict]] = {
    "MULTIPLE_CHOICE": _radio,
    "CHECKBOX": _checkbox,
    "TEXT": _short_text,
    "PARAGRAPH_TEXT": _paragraph_text,
    "LINEAR_SCALE": _linear_scale,
    "DATE": _date,
    "TIME": _time,
}


def build_question_item(args: AddQuestionArgs) -> dict:
    """
    Translate a tool question type into a Forms API item.

    MULTIPLE_CHOICE_GRID becomes a question group with a single row titled
    by the question and one radio column per option. Every other type is a
    single question item built from QUESTION_BUILDERS.

    Raises:
        ValueError: If the question type has no translation
    """
    required = bool(args.required)

    if args.question_type == "MULTIPLE_CHOICE_GRID":
        return {
            "title": args.title,
            "questionGroupItem": {
                "questions": [
                    {"required": required, "rowQuestion": {"title": args.title}}
                ],
                "grid": {
                    "columns": {"type": "RADIO", "options": _choice_options(args)}
                },
            },
        }

    builder = QUESTION_BUILDERS.get(args.question_type)
    if builder is None:
        raise ValueError(f"Unsupported question type: {args.question_type}")

    return {
        "title": args.title,
        "questionItem": {"question": {"required": required, **builder(args)}},
    }
