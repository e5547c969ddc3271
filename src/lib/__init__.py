"""
docdown rendering library

Symbol matching, prose conversion, example printing and README assembly.
"""

__version__ = "1.0.0"

from .symbols import SymbolMatcher, symbolMatcher_build
from .docblocks import blocks_parse
from .markdown import MarkdownRenderer, emptyLines_squeeze
from .printer import SourcePrinter
from .examples import ExampleRenderer, RenderedExample
from .readme import ReadmeBuilder
from .loader import model_load
from .errors import (
    RenderError,
    UnsupportedFragmentKind,
    PrettyPrintFailure,
    PatternConstructionFailure,
    TemplateFailure,
    ModelLoadError,
)
from .log import LOG, state_connectToLogger

__all__ = [
    "SymbolMatcher",
    "symbolMatcher_build",
    "blocks_parse",
    "MarkdownRenderer",
    "emptyLines_squeeze",
    "SourcePrinter",
    "ExampleRenderer",
    "RenderedExample",
    "ReadmeBuilder",
    "model_load",
    "RenderError",
    "UnsupportedFragmentKind",
    "PrettyPrintFailure",
    "PatternConstructionFailure",
    "TemplateFailure",
    "ModelLoadError",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
