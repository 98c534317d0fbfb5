from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version as pkg_version

project = "fweh"
author = "fweh contributors"

try:
    release = pkg_version("fweh")
except PackageNotFoundError:
    release = "0.0.0"
version = release

extensions = [
    "myst_parser",
    "sphinx.ext.autodoc",
    "sphinx.ext.napoleon",
]

templates_path = ["_templates"]
exclude_patterns = ["_build", "Thumbs.db", ".DS_Store"]

myst_enable_extensions = [
    "colon_fence",
    "deflist",
]

html_theme = "furo"
html_static_path: list[str] = []
