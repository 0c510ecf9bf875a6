# Sphinx configuration for the ring-road traffic simulator docs.
#
# Build with:  sphinx-build -b html docs/source docs/build

import os
import sys
import sphinx_rtd_dark_mode

# Project root holds the sim/ and ui/ packages.
sys.path.insert(0, os.path.abspath("../.."))

project = 'Ring Road Traffic'
copyright = '2026, Ring Road Team'
author = 'Ring Road Team'
release = '0.1'

# -- General configuration ---------------------------------------------------

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.napoleon",   # NumPy-style Parameters / Returns sections
    "sphinx.ext.viewcode",
    "sphinx_rtd_dark_mode",
]

templates_path = ['_templates']
exclude_patterns = []
autodoc_member_order = "bysource"

# -- HTML output -------------------------------------------------------------

html_theme = "sphinx_rtd_theme"
default_dark_mode = True
html_static_path = []

# The renderer needs a display; mock it so sim/ docs build anywhere.
autodoc_mock_imports = ["pygame"]
