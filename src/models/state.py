"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

from pathlib import Path
from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, Dict, Callable, TYPE_CHECKING
from dataclasses import dataclass, field

if TYPE_CHECKING:
    from .source import PackageModel


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the rendering pipeline (state bus pattern).

    This dataclass carries all program state through the functional pipeline,
    with each stage adding new fields as rendering progresses.

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity, inputFile, templateFile, outputFile
        - env_check: modelSourceFile, templateSource, readmeOutputFile, envOK
        - model_read: packageModel
        - readme_render: readmeText
        - readme_write: renderResult
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Directory containing the documentation model file
        outputdir: Directory where the README is written
        verbosity: Logging verbosity level (1-3)
        inputFile: Model filename (relative to inputdir)
        templateFile: Optional template filename (relative to inputdir)
        outputFile: README filename (relative to outputdir)
        envOK: Environment validation passed
        modelSourceFile: Resolved path to the model file
        templateSource: Custom template text, None for the default template
        readmeOutputFile: Resolved path of the README to write
        packageModel: Loaded Source Documentation Model
        readmeText: Rendered Markdown document
        renderResult: Rendering results (output_file, example_count, status)
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    inputFile: str = field(default="docmodel.json")
    templateFile: Optional[str] = field(default=None)
    outputFile: str = field(default="README.md")

    # Pipeline state
    envOK: bool = field(default=False)
    modelSourceFile: Path = field(default=Path("/"))
    templateSource: Optional[str] = field(default=None)
    readmeOutputFile: Path = field(default=Path("/"))
    packageModel: Optional["PackageModel"] = field(default=None)
    readmeText: Optional[str] = field(default=None)
    renderResult: Optional[Dict[str, Any]] = field(default=None)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and directory paths.

        Args:
            options: Parsed CLI arguments (inputFile, templateFile, etc.)
            inputdir: Directory containing the model file
            outputdir: Directory for the rendered README

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        import dataclasses

        options_dict = vars(options)
        valid_fields = {f.name for f in dataclasses.fields(cls)}

        # Namespace may carry options that are not state fields
        filtered_options = {k: v for k, v in options_dict.items() if k in valid_fields}

        merged_args = {**filtered_options, "inputdir": inputdir, "outputdir": outputdir}
        return cls(**merged_args)

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ProgramState) -> ProgramState that receives
    the output of the previous stage and returns a new state.

    Example:
        final_state = pipeline(
            initial_state,
            env_check,
            model_read,
            readme_render,
            readme_write,
            results_report
        )

    This is equivalent to:
        results_report(readme_write(readme_render(model_read(env_check(initial_state)))))
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
