"""Sphinx configuration for capstan documentation.

Initializes metadata, extensions, and build parameters.
"""

from __future__ import annotations

import importlib.util
import sys
import warnings
from datetime import date
from pathlib import Path
from typing import Final

PROJECT_ROOT: Final[Path] = Path(__file__).resolve().parent.parent
SRC_PATH: Final[Path] = PROJECT_ROOT / "src"

sys.path.insert(0, str(SRC_PATH))

import capstan  # noqa: E402

CURRENT_YEAR: Final[int] = date.today().year

project = "capstan"
author = "capstan developers"
copyright = f"{CURRENT_YEAR}, capstan developers"  # pylint: disable=redefined-builtin

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.autosummary",
    "sphinx.ext.mathjax",
    "sphinx.ext.napoleon",
    "sphinx.ext.viewcode",
    "sphinx.ext.intersphinx",
    "myst_parser",
]

OPTIONAL_EXTENSIONS: Final[list[str]] = ["myst_parser"]

for ext in OPTIONAL_EXTENSIONS:
    if importlib.util.find_spec(ext) is None:
        warnings.warn(
            f"Skipping optional Sphinx extension {ext!r}: module not found.",
            stacklevel=1,
        )
        extensions = [e for e in extensions if e != ext]

intersphinx_mapping = {
    "python": ("https://docs.python.org/3", None),
    "numpy": ("https://numpy.org/doc/stable", None),
    "scipy": ("https://docs.scipy.org/doc/scipy/", None),
}

templates_path = ["_templates"]
exclude_patterns: list[str] = ["_build", "Thumbs.db", ".DS_Store"]

source_suffix = {
    ".rst": "restructuredtext",
    ".md": "markdown",
}

master_doc = "index"

napoleon_google_docstring = True
napoleon_numpy_docstring = False
napoleon_include_init_with_doc = True
napoleon_attr_annotations = True

autosummary_generate = True
autodoc_typehints = "description"
autodoc_member_order = "bysource"

myst_enable_extensions = [
    "colon_fence",
    "dollarmath",
]

html_theme = "sphinx_rtd_theme"
if importlib.util.find_spec("sphinx_rtd_theme") is None:
    warnings.warn(
        "sphinx_rtd_theme not found. Falling back to 'alabaster'.",
        stacklevel=1,
    )
    html_theme = "alabaster"
html_show_sourcelink = True

version = capstan.__version__
release = capstan.__version__
