"""Shared pytest fixtures for fuzzycomplete tests."""

import pytest


@pytest.fixture
def items() -> list[dict]:
    """Four records that all share the 'value' prefix."""
    return [
        {"id": 0, "name": "value0"},
        {"id": 1, "name": "value1"},
        {"id": 2, "name": "value2"},
        {"id": 3, "name": "value3"},
    ]


@pytest.fixture
def movies() -> list[dict]:
    """Records with a title and a description field."""
    return [
        {
            "id": 0,
            "title": "Sunset Boulevard",
            "description": "A dead screenwriter narrates how he got there",
        },
        {
            "id": 1,
            "title": "Dead Poets Society",
            "description": "A boarding school English master inspires his students through poetry",
        },
        {
            "id": 2,
            "title": "The Matrix",
            "description": "A hacker learns the world is a simulation",
        },
    ]
