"""Sphinx configuration for the toutf8 API reference."""

import toutf8

project = "toutf8"
copyright = "2026, toutf8 contributors"
author = "toutf8 contributors"
release = toutf8.__version__
version = ".".join(release.split(".")[:2])

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.autosummary",
    "sphinx.ext.intersphinx",
    "sphinx_copybutton",
]

root_doc = "index"
exclude_patterns = ["_build"]

# One page per module listed in index.rst.
autosummary_generate = True
autodoc_default_options = {
    "members": True,
    "show-inheritance": True,
    "exclude-members": "__init__, __post_init__",
}
autodoc_member_order = "bysource"
autodoc_typehints = "description"

html_theme = "furo"
html_title = f"toutf8 {release}"

# Strip the shell and interpreter prompts from copied examples.
copybutton_prompt_text = r"\$ |>>> "
copybutton_prompt_is_regexp = True

intersphinx_mapping = {
    "python": ("https://docs.python.org/3", None),
    "chardet": ("https://chardet.readthedocs.io/en/latest", None),
}
