"""Command-line option set for the pug compiler.

Options are built with chained calls and serialized into the ordered
argument tokens pug expects:

    options = PugOptions().pretty().with_object({"title": "Home"})
    options.to_args()
    # ('--obj', '\\'{"title":"Home"}\\'', '--pretty')
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, Iterator

from pugwrap.payload import Payload, as_payload, lossy_path_str

if TYPE_CHECKING:
    from pugwrap.config import DefaultsConfig


@dataclass
class PugOptions:
    """Flags forwarded to the pug executable.

    No combination is validated here; contradictory flags (a version query
    together with a payload, for example) reach pug as given.

    Attributes:
        version: Ask pug for its version instead of compiling
        payload: Local data made available to the template
        source_path: Template filename, used by pug to resolve includes
        output_dir: Output directory hint
        suppress_debug: Compile without debugging instrumentation
        emit_client_bundle: Compile a client-side template function
        read_stdin: Deliver the template over stdin (wiring only, no flag)
        pretty_print: Pretty-print the resulting markup
        doctype: Doctype override
    """

    version: bool = False
    payload: Payload | None = None
    source_path: Path | None = None
    output_dir: Path | None = None
    suppress_debug: bool = False
    emit_client_bundle: bool = False
    read_stdin: bool = False
    pretty_print: bool = False
    doctype: str | None = None

    def version_query(self) -> "PugOptions":
        self.version = True
        return self

    def with_object(self, obj: Any) -> "PugOptions":
        """Attach template data (payload, str, path or structured value)."""
        self.payload = as_payload(obj)
        return self

    def with_path(self, path: str | os.PathLike[str]) -> "PugOptions":
        self.source_path = Path(path)
        return self

    def out_dir(self, path: str | os.PathLike[str]) -> "PugOptions":
        self.output_dir = Path(path)
        return self

    def no_debug(self) -> "PugOptions":
        self.suppress_debug = True
        return self

    def client(self) -> "PugOptions":
        self.emit_client_bundle = True
        return self

    def stdin(self) -> "PugOptions":
        self.read_stdin = True
        return self

    def pretty(self) -> "PugOptions":
        self.pretty_print = True
        return self

    def doctype_as(self, doctype: str) -> "PugOptions":
        self.doctype = doctype
        return self

    def to_args(self) -> tuple[str, ...]:
        """Serialize active options into pug's argument tokens.

        Order is fixed: --version, --obj, --path, --out, --pretty,
        --no-debug, --client, --doctype.

        Returns:
            Tuple of argument tokens
        """
        args: list[str] = []

        if self.version:
            args.append("--version")

        if self.payload is not None:
            args.extend(["--obj", self.payload.to_token()])

        if self.source_path is not None:
            args.extend(["--path", lossy_path_str(self.source_path)])

        if self.output_dir is not None:
            args.extend(["--out", lossy_path_str(self.output_dir)])

        if self.pretty_print:
            args.append("--pretty")

        if self.suppress_debug:
            args.append("--no-debug")

        if self.emit_client_bundle:
            args.append("--client")

        if self.doctype is not None:
            args.extend(["--doctype", self.doctype])

        return tuple(args)

    def __iter__(self) -> Iterator[str]:
        return iter(self.to_args())

    @classmethod
    def from_config(cls, defaults: "DefaultsConfig") -> "PugOptions":
        """Build an option set from the configuration file's defaults.

        Args:
            defaults: Defaults block of the loaded configuration

        Returns:
            New PugOptions instance
        """
        options = cls()
        if defaults.pretty:
            options.pretty()
        if defaults.no_debug:
            options.no_debug()
        if defaults.client:
            options.client()
        if defaults.doctype:
            options.doctype_as(defaults.doctype)
        if defaults.out_dir:
            options.out_dir(defaults.out_dir)
        if defaults.obj is not None:
            options.with_object(defaults.obj)
        return options
