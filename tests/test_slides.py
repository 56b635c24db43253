"""
Tests for Google Slides handlers.
"""

from unittest.mock import patch

import pytest

from google_services_mcp.api import slides
from google_services_mcp.api.helpers import build_element_properties, new_object_id
from google_services_mcp.types import (
    AddImageArgs,
    AddSlideArgs,
    AddTextArgs,
    CreatePresentationArgs,
)


def _fixed_id(prefix: str) -> str:
    return f"{prefix}_1700000000000"


class TestCreatePresentation:
    @pytest.mark.asyncio
    async def test_create(self, session):
        presentations = session.slides.presentations.return_value
        presentations.create.return_value.execute.return_value = {
            "presentationId": "P1",
            "title": "Lecture 1",
            "slides": [
                {"objectId": "p", "slideProperties": {"layoutObjectId": "L1"}},
            ],
        }

        result = await slides.create_presentation(
            CreatePresentationArgs(title="Lecture 1"), session
        )

        assert result == {
            "presentationId": "P1",
            "title": "Lecture 1",
            "slides": [{"slideId": "p", "layoutId": "L1"}],
        }
        presentations.create.assert_called_once_with(body={"title": "Lecture 1"})


class TestAddSlide:
    @pytest.mark.asyncio
    @patch("google_services_mcp.api.slides.new_object_id", side_effect=_fixed_id)
    async def test_add_with_layout(self, mock_id, session):
        presentations = session.slides.presentations.return_value
        presentations.batchUpdate.return_value.execute.return_value = {
            "replies": [{"createSlide": {"objectId": "slide_1700000000000"}}],
        }

        result = await slides.add_slide(
            AddSlideArgs(presentation_id="P1", layout_id="L2"), session
        )

        assert result == {"slideId": "slide_1700000000000"}
        presentations.batchUpdate.assert_called_once_with(
            presentationId="P1",
            body={
                "requests": [
                    {
                        "createSlide": {
                            "objectId": "slide_1700000000000",
                            "slideLayoutReference": {"layoutId": "L2"},
                        }
                    }
                ]
            },
        )

    @pytest.mark.asyncio
    async def test_add_without_layout(self, session):
        presentations = session.slides.presentations.return_value
        presentations.batchUpdate.return_value.execute.return_value = {
            "replies": [{"createSlide": {"objectId": "slide_1"}}],
        }

        await slides.add_slide(AddSlideArgs(presentation_id="P1"), session)

        request = presentations.batchUpdate.call_args.kwargs["body"]["requests"][0]
        assert "slideLayoutReference" not in request["createSlide"]


class TestAddText:
    @pytest.mark.asyncio
    @patch("google_services_mcp.api.slides.new_object_id", side_effect=_fixed_id)
    async def test_default_geometry(self, mock_id, session):
        presentations = session.slides.presentations.return_value
        presentations.batchUpdate.return_value.execute.return_value = {"replies": [{}, {}]}

        result = await slides.add_text(
            AddTextArgs(presentation_id="P1", slide_id="S1", text="Hello"), session
        )

        assert result == {"textBoxId": "textbox_1700000000000", "success": True}
        requests = presentations.batchUpdate.call_args.kwargs["body"]["requests"]
        create_shape = requests[0]["createShape"]
        assert create_shape["shapeType"] == "TEXT_BOX"
        assert create_shape["elementProperties"] == {
            "pageObjectId": "S1",
            "size": {
                "width": {"magnitude": 300, "unit": "PT"},
                "height": {"magnitude": 50, "unit": "PT"},
            },
            "transform": {
                "scaleX": 1, "scaleY": 1, "translateX": 50, "translateY": 50, "unit": "PT",
            },
        }
        assert requests[1] == {
            "insertText": {"objectId": "textbox_1700000000000", "text": "Hello"}
        }


class TestAddImage:
    @pytest.mark.asyncio
    @patch("google_services_mcp.api.slides.new_object_id", side_effect=_fixed_id)
    async def test_custom_geometry(self, mock_id, session):
        presentations = session.slides.presentations.return_value
        presentations.batchUpdate.return_value.execute.return_value = {"replies": [{}]}

        result = await slides.add_image(
            AddImageArgs(
                presentation_id="P1",
                slide_id="S1",
                image_url="https://example.com/a.png",
                x=10,
                y=20,
                width=320,
                height=240,
            ),
            session,
        )

        assert result == {"imageId": "image_1700000000000", "success": True}
        create_image = presentations.batchUpdate.call_args.kwargs["body"]["requests"][0][
            "createImage"
        ]
        assert create_image["url"] == "https://example.com/a.png"
        assert create_image["elementProperties"]["size"]["width"]["magnitude"] == 320
        assert create_image["elementProperties"]["transform"]["translateY"] == 20


class TestElementHelpers:
    def test_zero_falls_back_to_default(self):
        properties = build_element_properties(
            "S1", 0, None, 0, 5, default_size=(200, 200), default_position=(100, 100)
        )

        assert properties["size"]["width"]["magnitude"] == 200
        assert properties["transform"]["translateX"] == 100
        assert properties["transform"]["translateY"] == 5

    def test_object_id_format(self):
        object_id = new_object_id("image")

        prefix, millis = object_id.split("_")
        assert prefix == "image"
        assert millis.isdigit()
