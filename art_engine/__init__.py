"""ANSI art engine — CP437/ECMA-48 art files to text, HTML and PNG."""

__version__ = "0.1.0"
