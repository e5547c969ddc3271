#!/usr/bin/env python3
"""
docdown - Documentation-to-Markdown README renderer

Renders a package's reference documentation into a single Markdown README
from a Source Documentation Model file: the package doc comment, its
exported names and its runnable examples.

As an aside, this codebase leverages the ChRIS "plugin" concept/pattern as
general purpose python app development framework.

Philosophy:
    - Docs are the source: the README is generated, never edited by hand
    - Best-effort prose: code-like tokens become inline code, nothing is
      resolved semantically
    - Examples print as they run: expected output is shown apart from code
    - All or nothing: any rendering error aborts before the README is written

Usage:
    docdown inputdir/ outputdir/ --inputFile docmodel.json

    The rendered README is written to outputdir/README.md.

Examples:
    # Basic rendering
    docdown . out/ --inputFile docmodel.json

    # YAML model and a custom Jinja2 template
    docdown docs/ . --inputFile model.yaml --templateFile README.md.j2

    # Verbose output
    docdown . out/ -vv
"""

import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

from chris_plugin import chris_plugin
from .lib import ReadmeBuilder, model_load, __version__, LOG, state_connectToLogger
from .lib.errors import ModelLoadError, RenderError
from .models import ProgramState, pipeline


DISPLAY_TITLE = r"""
     _            _
  __| | ___   ___| | _____      ___ __
 / _` |/ _ \ / __| |/ _ \ \ /\ / / '_ \
| (_| | (_) | (__| | (_) \ V  V /| | | |
 \__,_|\___/ \___|_|\___/ \_/\_/ |_| |_|

  Documentation-to-Markdown README renderer
"""

parser = ArgumentParser(
    description="docdown - render package documentation into a Markdown README",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--inputFile",
    default="docmodel.json",
    type=str,
    help="Documentation model file, JSON or YAML (relative to inputdir)",
)

parser.add_argument(
    "--templateFile",
    default=None,
    type=str,
    help="Jinja2 README template (relative to inputdir). Defaults to the built-in template",
)

parser.add_argument(
    "--outputFile",
    default="README.md",
    type=str,
    help="README filename within outputdir",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate environment and resolve all file paths.

    Args:
        inputstate: Initial program state with CLI options

    Returns:
        ProgramState with added fields:
            - modelSourceFile: Resolved path to the model file
            - templateSource: Custom template text, or None
            - readmeOutputFile: Path of the README to write
            - envOK: True if environment is valid

    Exits:
        1 if the model or template file is missing
    """
    state = inputstate.copy()

    if state.verbosity >= 2:
        LOG(DISPLAY_TITLE, level=2)

    LOG("Checking environment...", level=2)

    model_file = state.inputdir / state.inputFile
    if not model_file.exists():
        print(f"Error: Model file not found: {model_file}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    state.modelSourceFile = model_file
    LOG(f"Model file: {model_file}", level=2)

    if state.templateFile:
        template_file = state.inputdir / state.templateFile
        try:
            state.templateSource = template_file.read_text(encoding="utf-8")
        except OSError as e:
            print(f"Error reading template file: {e}", file=sys.stderr)
            state.envOK = False
            sys.exit(1)
        LOG(f"Template file: {template_file}", level=2)

    state.outputdir.mkdir(parents=True, exist_ok=True)
    state.readmeOutputFile = state.outputdir / state.outputFile
    LOG(f"Output file: {state.readmeOutputFile}", level=2)

    state.envOK = True
    return state


def model_read(inputstate: ProgramState) -> ProgramState:
    """
    Load the Source Documentation Model.

    Returns:
        ProgramState with added field:
            - packageModel: PackageModel loaded from modelSourceFile

    Exits:
        1 if the model cannot be read or validated
    """
    state = inputstate.copy()

    LOG("Loading documentation model...", level=1)
    try:
        state.packageModel = model_load(state.modelSourceFile)
    except ModelLoadError as e:
        print(f"Model error: {e}", file=sys.stderr)
        sys.exit(1)

    LOG(
        f"Package '{state.packageModel.name}': "
        f"{len(state.packageModel.exported_names())} exported names, "
        f"{len(state.packageModel.examples)} examples",
        level=2,
    )
    return state


def readme_render(inputstate: ProgramState) -> ProgramState:
    """
    Render the README text from the loaded model.

    Returns:
        ProgramState with added field:
            - readmeText: Complete Markdown document

    Exits:
        1 if any rendering step fails (no partial README is produced)
    """
    state = inputstate.copy()

    LOG("Rendering README...", level=1)

    if state.packageModel is None:
        print("Error: No documentation model available", file=sys.stderr)
        sys.exit(1)

    try:
        builder = ReadmeBuilder(state.packageModel, template_source=state.templateSource)
        state.readmeText = builder.build()
    except RenderError as e:
        print(f"Render error: {e}", file=sys.stderr)
        if state.verbosity >= 3:
            import traceback

            traceback.print_exc()
        sys.exit(1)

    LOG(f"Rendered {len(state.readmeText)} characters", level=2)
    return state


def readme_write(inputstate: ProgramState) -> ProgramState:
    """
    Write the rendered README to disk.

    Returns:
        ProgramState with added field:
            - renderResult: Dict containing status, output_file, example_count

    Exits:
        1 if the file cannot be written
    """
    state = inputstate.copy()

    if state.readmeText is None:
        print("Error: Nothing rendered", file=sys.stderr)
        sys.exit(1)

    try:
        state.readmeOutputFile.write_text(state.readmeText, encoding="utf-8")
    except OSError as e:
        print(f"Error writing README: {e}", file=sys.stderr)
        sys.exit(1)

    LOG(f"Wrote {state.readmeOutputFile}", level=2)
    state.renderResult = {
        "status": True,
        "output_file": str(state.readmeOutputFile),
        "example_count": len(state.packageModel.examples) if state.packageModel else 0,
    }
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display rendering results to the user.

    Exits:
        1 if renderResult is None
    """
    state: ProgramState = inputstate.copy()
    if not state.renderResult:
        print("Error: Rendering failed", file=sys.stderr)
        sys.exit(1)

    if state.verbosity >= 1:
        LOG("\n✓ README rendered!", level=1)
        LOG(f"  Output: {state.renderResult['output_file']}", level=1)
        LOG(f"  Examples: {state.renderResult['example_count']}", level=1)
    return state


@chris_plugin(
    parser=parser,
    title="docdown - Documentation-to-Markdown README renderer",
    category="Documentation",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - render a README from a documentation model.

    Orchestrates the pipeline:
        1. env_check: Validate paths and environment
        2. model_read: Load the documentation model
        3. readme_render: Render the Markdown README
        4. readme_write: Write the README to outputdir
        5. results_report: Display results to user

    Args:
        options: CLI arguments from argparse
        inputdir: Directory containing the model (and template) files
        outputdir: Directory where the README will be written
    """

    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    state_connectToLogger(state)

    pipeline(state, env_check, model_read, readme_render, readme_write, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
