"""
Pytest configuration and fixtures for Google Services MCP Server tests.
"""

from unittest.mock import MagicMock

import pytest

from google_services_mcp.dispatcher import Dispatcher
from google_services_mcp.session import CapabilitySession, SessionProvider


@pytest.fixture
def session():
    """
    Provide a capability session whose API clients are mocks.
    """
    return CapabilitySession(
        credentials=MagicMock(),
        drive=MagicMock(),
        sheets=MagicMock(),
        slides=MagicMock(),
        docs=MagicMock(),
        forms=MagicMock(),
    )


@pytest.fixture
def session_factory(session):
    """
    Provide a session factory that records how often it is called.
    """
    return MagicMock(return_value=session)


@pytest.fixture
def dispatcher(session_factory):
    """
    Provide a dispatcher backed by the mock session.
    """
    return Dispatcher(SessionProvider(session_factory))


@pytest.fixture
def sample_document_content():
    """
    Provide sample document content matching Google Docs API structure.
    """
    return {
        "body": {
            "content": [
                {"sectionBreak": {}},
                {
                    "paragraph": {
                        "elements": [
                            {
                                "startIndex": 1,
                                "endIndex": 25,
                                "textRun": {"content": "This is a test sentence."},
                            }
                        ]
                    }
                },
            ]
        },
    }


@pytest.fixture
def sample_document_with_multiple_runs():
    """
    Provide sample document with text split across multiple text runs.
    """
    return {
        "body": {
            "content": [
                {
                    "paragraph": {
                        "elements": [
                            {"textRun": {"content": "This "}},
                            {"textRun": {"content": "is a "}},
                            {"textRun": {"content": "test case"}},
                        ]
                    }
                }
            ]
        },
    }
