"""Test fixtures for record_search tests."""

import os

# Set ENVIRONMENT before importing any modules that use record_search.core.config
os.environ.setdefault("ENVIRONMENT", "test")

from datetime import datetime

import pytest
from pydantic import BaseModel

from record_search.store import RecordStore


class Article(BaseModel):
    id: str
    title: str
    content: str
    author: str
    tags: list[str] | None = None
    status: str
    views: int = 0
    deleted_at: datetime | None = None


ARTICLES = [
    {
        "id": "1",
        "title": "Introduction to TypeScript",
        "content": "TypeScript is a typed superset of JavaScript that compiles to plain JavaScript.",
        "author": "John Doe",
        "tags": ["typescript", "javascript"],
        "status": "published",
        "views": 100,
    },
    {
        "id": "2",
        "title": "Advanced TypeScript Patterns",
        "content": "Learn advanced patterns and best practices for TypeScript development.",
        "author": "Jane Smith",
        "tags": ["typescript", "patterns"],
        "status": "published",
        "views": 250,
    },
    {
        "id": "3",
        "title": "Getting Started with React",
        "content": "React is a JavaScript library for building user interfaces.",
        "author": "John Doe",
        "tags": ["react"],
        "status": "published",
        "views": 500,
    },
    {
        "id": "4",
        "title": "TypeScript with React",
        "content": "How to use TypeScript in your React projects for better type safety.",
        "author": "Jane Smith",
        "tags": ["typescript", "react"],
        "status": "draft",
        "views": 50,
    },
    {
        "id": "5",
        "title": "Python Basics",
        "content": "An introduction to Python programming language.",
        "author": "Bob Wilson",
        "status": "published",
        "views": 75,
    },
    {
        "id": "6",
        "title": "Deleted Article",
        "content": "This article was deleted.",
        "author": "Admin",
        "status": "archived",
        "views": 10,
        "deleted_at": "2024-01-01T00:00:00",
    },
]


@pytest.fixture
def articles():
    """Fresh copies of the sample article records."""
    return [dict(a) for a in ARTICLES]


@pytest.fixture
def store(articles):
    """A RecordStore seeded with the sample articles."""
    s = RecordStore()
    s.put_many("articles", articles)
    return s


@pytest.fixture
def article_schema():
    return Article
