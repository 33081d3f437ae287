"""Root pytest configuration and fixtures.

This module provides:
- Environment setup (loads .env)
- Shared document fixtures for schema, validation and CLI tests
"""

from typing import Any

import pytest
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


# =============================================================================
# Common Test Fixtures
# =============================================================================


@pytest.fixture
def sample_document_dict() -> dict[str, Any]:
    """Create the canonical Container > [Text, Button] document.

    Returns:
        A fresh wire dict; tests may mutate it.
    """
    return {
        "schemaVersion": "0.1.0",
        "root": {
            "type": "Container",
            "children": [
                {"type": "Text", "props": {"text": "Hi"}},
                {"type": "Button", "props": {"text": "OK", "ariaLabel": "Confirm"}},
            ],
        },
    }


@pytest.fixture
def rich_document_dict() -> dict[str, Any]:
    """Create a document exercising every node feature.

    Returns:
        A fresh wire dict with slots, bindings, events, meta, ext,
        extension types and passthrough props. Every interactive node is
        labelled, so it is structurally valid and has no accessibility issues.
    """
    return {
        "schemaVersion": "0.1.0",
        "meta": {"name": "Settings", "locale": "en-US"},
        "root": {
            "id": "settings",
            "type": "Card",
            "props": {
                "ariaLabel": "Settings",
                "className": "panel",
                "style": {"padding": 16, "elevated": True},
                "variant": "outlined",
            },
            "slots": {
                "header": {
                    "type": "Row",
                    "children": [
                        {"type": "Icon", "props": {"src": "gear.svg", "ariaLabel": "Settings icon"}},
                        {"type": "Text", "props": {"text": "Preferences"}},
                    ],
                },
                "actions": [
                    {
                        "id": "save",
                        "type": "Button",
                        "props": {"text": "Save", "ariaLabel": "Save settings", "role": "button"},
                        "events": {
                            "onClick": {"type": "submit", "name": "saveSettings", "params": {"confirm": True}},
                        },
                    },
                    {
                        "type": "Link",
                        "props": {"href": "/help", "ariaLabel": "Help", "tabIndex": 0},
                    },
                ],
            },
            "children": [
                {
                    "key": "notifications",
                    "type": "Switch",
                    "props": {"ariaLabel": "Notifications", "value": True},
                    "bindings": {
                        "value": {"path": "/user/notifications", "type": "boolean", "default": False},
                    },
                    "events": {"onChange": {"type": "action", "name": "toggleNotifications"}},
                },
                {
                    "type": "Select",
                    "props": {"ariaLabel": "Theme", "placeholder": "Choose a theme", "value": "dark"},
                    "bindings": {
                        "value": {"path": "/user/theme", "type": "string", "transform": "lower"},
                    },
                },
                {"type": "x-color-wheel", "props": {"hue": 210}, "ext": {"vendor": "acme"}},
                {"type": "custom:preview", "meta": {"generatedBy": "agent", "step": 3}},
            ],
        },
    }
