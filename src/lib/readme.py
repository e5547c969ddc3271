"""
README assembly

Stitches the rendered pieces of a package into one Markdown document with a
Jinja2 template, then squeezes redundant blank lines out of the result.

The template sees:
    readme          Readme (name, is_command, author, examples)
    pkg             PackageModel
    fence_language  info string for example code fences
    godoc_url       documentation site base URL

and two filters:
    markdown        PackageModel or doc text -> Markdown (symbols wrapped)
    fence(lang)     text -> fenced code block

Everything that can fail (symbol pattern, examples) is rendered before the
template runs, so a failure never leaves a partial README behind.
"""

import re
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

import jinja2
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from ..models.source import PackageModel
from .docblocks import blocks_parse
from .errors import TemplateFailure
from .examples import ExampleRenderer, RenderedExample
from .log import LOG, WARN
from .markdown import MarkdownRenderer, emptyLines_squeeze
from .symbols import symbolMatcher_build

RX_GITHUB_AUTHOR = re.compile(r"^github\.com/([^/]+)")

DEFAULT_TEMPLATE = """\
# {{ readme.name }}

{% if not readme.is_command and pkg.import_path %}
[![GoDoc]({{ godoc_url }}/{{ pkg.import_path }}?status.svg)]({{ godoc_url }}/{{ pkg.import_path }})
{% endif %}

{{ pkg | markdown }}

{% if readme.is_command %}
## Installation

    go get -u {{ pkg.import_path }}

{% endif %}
{% if readme.examples %}
## Examples
{% for example in readme.examples %}

### {{ example.name }}

{{ example.code | fence(fence_language) }}
{% if example.output %}

{{ "Unordered output:" if example.unordered else "Output:" }}

{{ example.output | fence("") }}
{% endif %}
{% endfor %}
{% endif %}

{% if pkg.notes %}
## TODO

{% for note in pkg.notes %}
- {{ note }}
{% endfor %}
{% endif %}

{% if readme.author %}
## Author

{{ readme.author }} <https://github.com/{{ readme.author }}>
{% endif %}
"""


def fence(text: str, language: str = "") -> str:
    """
    Wrap text in a fenced code block

    Example:
        >>> fence("x := 1", "go")
        '```go\\nx := 1\\n```\\n'
    """
    if not text.endswith("\n"):
        text += "\n"
    return f"```{language}\n{text}```\n"


def fenceLanguage_resolve(language: str) -> str:
    """
    Return `language` if Pygments knows it, otherwise "" (plain fence)
    """
    if not language:
        return ""
    try:
        get_lexer_by_name(language)
    except ClassNotFound:
        WARN(f"Unknown fence language '{language}', using a plain fence")
        return ""
    return language


@dataclass(frozen=True)
class Readme:
    """Template view of the documented package"""
    pkg: PackageModel
    examples: Tuple[RenderedExample, ...] = ()

    @property
    def is_command(self) -> bool:
        return self.pkg.name == "main"

    @property
    def name(self) -> str:
        """Package name, or the last import path element for commands"""
        if self.is_command and self.pkg.import_path:
            return self.pkg.import_path.rstrip("/").split("/")[-1]
        return self.pkg.name

    @property
    def author(self) -> Optional[str]:
        match = RX_GITHUB_AUTHOR.match(self.pkg.import_path)
        return match.group(1) if match else None


class ReadmeBuilder:
    """
    Builds the README of one package

    A new symbol matcher is built for every build() call from the model's
    current exported names.
    """

    def __init__(
        self,
        model: PackageModel,
        template_source: Optional[str] = None,
        example_renderer: Optional[ExampleRenderer] = None,
    ) -> None:
        """
        Args:
            model: Source Documentation Model of the package
            template_source: Jinja2 template text (defaults to DEFAULT_TEMPLATE)
            example_renderer: Renderer for examples (defaults from settings)
        """
        self.model = model
        self.template_source = template_source if template_source is not None else DEFAULT_TEMPLATE
        self.example_renderer = example_renderer or ExampleRenderer()

    def build(self) -> str:
        """
        Render the complete README

        Raises:
            RenderError: Any rendering failure; nothing is returned partially
        """
        from ..config import appsettings

        matcher = symbolMatcher_build(self.model.exported_names())
        markdown = MarkdownRenderer(matcher, from_html=self.model.doc_format == "html")

        examples: List[RenderedExample] = [
            self.example_renderer.example_render(unit) for unit in self.model.examples
        ]
        LOG(f"Rendered {len(examples)} examples", level=2)

        def markdown_filter(value: Any) -> str:
            if isinstance(value, PackageModel):
                return markdown.render(value.doc_blocks())
            return markdown.render(blocks_parse(str(value)))

        env = jinja2.Environment(
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=jinja2.StrictUndefined,
        )
        env.filters["markdown"] = markdown_filter
        env.filters["fence"] = fence

        readme = Readme(pkg=self.model, examples=tuple(examples))
        try:
            template = env.from_string(self.template_source)
            text = template.render(
                readme=readme,
                pkg=self.model,
                fence_language=fenceLanguage_resolve(appsettings.fence_language),
                godoc_url=appsettings.godoc_url.rstrip("/"),
            )
        except jinja2.TemplateError as e:
            raise TemplateFailure(f"README template failed: {e}") from e

        return emptyLines_squeeze(text)
