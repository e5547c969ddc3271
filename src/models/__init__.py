"""
Models package for docdown

Contains the Source Documentation Model and the pipeline state.
"""

from .state import ProgramState, pipeline
from .source import (
    Span,
    CommentBlock,
    Statement,
    Block,
    Decl,
    FuncDecl,
    Program,
    ExampleUnit,
    Paragraph,
    Heading,
    Preformatted,
    PackageModel,
)

__all__ = [
    "ProgramState",
    "pipeline",
    "Span",
    "CommentBlock",
    "Statement",
    "Block",
    "Decl",
    "FuncDecl",
    "Program",
    "ExampleUnit",
    "Paragraph",
    "Heading",
    "Preformatted",
    "PackageModel",
]
