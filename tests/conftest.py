"""Shared fixtures."""

import copy

import pytest

CONTEXT = {
    "root": "/path/to/book",
    "config": {
        "book": {
            "authors": ["AUTHOR"],
            "language": "en",
            "multilingual": False,
            "src": "src",
            "title": "TITLE",
        },
        "preprocessor": {"pagebreaks": {}},
    },
    "renderer": "html",
    "mdbook_version": "0.4.21",
}

BOOK = {
    "sections": [
        {
            "Chapter": {
                "name": "Chapter 1",
                "content": "# Chapter 1\n{{---}}",
                "number": [1],
                "sub_items": [],
                "path": "chapter_1.md",
                "source_path": "chapter_1.md",
                "parent_names": [],
            }
        }
    ],
    "__non_exhaustive": None,
}


@pytest.fixture
def context_data():
    """Preprocessor context as mdBook sends it."""
    return copy.deepcopy(CONTEXT)


@pytest.fixture
def book_json():
    """Single-chapter book as mdBook sends it."""
    return copy.deepcopy(BOOK)
