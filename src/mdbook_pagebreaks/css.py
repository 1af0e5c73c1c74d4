"""Stylesheet generator for the page-break div."""

import importlib.resources
from pathlib import Path
from typing import Union

from .exceptions import PreprocessorError

CSS_FILENAME = "mdbook-pagebreaks.css"


def load_css() -> str:
    """Return the packaged page-break stylesheet."""
    data_path = importlib.resources.files("mdbook_pagebreaks").joinpath(
        "data/pagebreaks.css"
    )
    return data_path.read_text(encoding="utf-8")


def generate_css(output_dir: Union[str, Path] = ".") -> Path:
    """Write the page-break stylesheet into a directory.

    Add the generated file to ``output.html.additional-css`` in book.toml.

    Args:
        output_dir: Directory to write into (default: current directory)

    Returns:
        Path of the written stylesheet

    Raises:
        PreprocessorError: If the file cannot be written
    """
    output_path = Path(output_dir) / CSS_FILENAME
    try:
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(load_css())
    except OSError as e:
        raise PreprocessorError(f"Error writing {output_path}: {e}") from e

    return output_path
