"""
docdown - Documentation-to-Markdown README renderer

Renders a package's reference documentation (doc comment, exported names,
runnable examples) into a single Markdown README.
"""

__version__ = "1.0.0"

from .lib import ReadmeBuilder, MarkdownRenderer, ExampleRenderer, LOG, state_connectToLogger

__all__ = ["ReadmeBuilder", "MarkdownRenderer", "ExampleRenderer", "LOG", "state_connectToLogger", "__version__"]
