"""Root conftest: shared test configuration and type schemas."""

import os

import pytest

# Ensure tests never reach a real database
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from typegate.core.type_schema import TypeSchema  # noqa: E402


@pytest.fixture
def person_schema() -> TypeSchema:
    return TypeSchema.model_validate({
        "polymorphic": False,
        "fields": {
            "name": {"title": "Name", "type": "text", "required": True},
            "email": {"title": "Email", "type": "email"},
            "age": {"title": "Age", "type": "integer", "min": 0},
        },
    })


@pytest.fixture
def content_schema() -> TypeSchema:
    return TypeSchema.model_validate({
        "polymorphic": True,
        "subtypes": {
            "article": {
                "fields": {
                    "title": {"title": "Title", "type": "string", "required": True},
                    "body": {"title": "Body", "type": "text"},
                },
            },
            "link": {
                "fields": {
                    "url": {"title": "URL", "type": "text", "required": True},
                },
            },
        },
    })


@pytest.fixture
def fieldless_schema() -> TypeSchema:
    return TypeSchema.model_validate({"polymorphic": False})
