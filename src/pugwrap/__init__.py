"""pugwrap - Python interface to the pug template compiler.

Builds the pug command line from a typed option set, feeds it a template
from a file or a string, and returns the rendered markup or raises a
CompileError.

    from pugwrap import PugOptions, evaluate_string_with_options

    html = evaluate_string_with_options(
        "h1 hello #{language}",
        PugOptions().with_object({"language": "pug"}),
    )
"""

from pugwrap.compiler import (
    PugCompiler,
    evaluate,
    evaluate_string,
    evaluate_string_with_options,
    evaluate_with_options,
)
from pugwrap.errors import CompileError, CompilerIOError, CompilerReportedError
from pugwrap.options import PugOptions
from pugwrap.payload import JsonPayload, PathPayload, RawPayload

__version__ = "0.1.0"

__all__ = [
    "CompileError",
    "CompilerIOError",
    "CompilerReportedError",
    "JsonPayload",
    "PathPayload",
    "PugCompiler",
    "PugOptions",
    "RawPayload",
    "evaluate",
    "evaluate_string",
    "evaluate_string_with_options",
    "evaluate_with_options",
]
