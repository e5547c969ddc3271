"""
Exceptions raised by the rendering pipeline

Every error is deterministic for a given input, so none of them is retried:
the first one raised aborts the whole README.
"""

from typing import Optional


class RenderError(Exception):
    """Base class for rendering failures"""
    pass


class UnsupportedFragmentKind(RenderError):
    """Raised when an example's code is neither a statement block nor a program"""

    def __init__(self, kind: str, example: Optional[str] = None):
        self.kind = kind
        self.example = example
        where = f" in example '{example}'" if example else ""
        super().__init__(f"Cannot render code fragment of kind '{kind}'{where}")


class PrettyPrintFailure(RenderError):
    """Raised when the source printer rejects a malformed fragment"""

    def __init__(self, message: str, fragment: Optional[str] = None):
        self.message = message
        self.fragment = fragment
        if fragment:
            message = f"{message} (example '{fragment}')"
        super().__init__(message)


class PatternConstructionFailure(RenderError):
    """Raised when the symbol pattern does not compile"""
    pass


class TemplateFailure(RenderError):
    """Raised when the README template cannot be parsed or rendered"""
    pass


class ModelLoadError(Exception):
    """Raised when a documentation model file cannot be read or validated"""
    pass
