"""pugwrap configuration system.

Configuration is YAML-based; CLI flags override the defaults per run.
Supports environment variable substitution (${VAR}) in config files.

Configuration file discovery (in priority order):
1. CLI --config argument
2. ./.pugwrap/config.yaml
3. ./pugwrap.yaml
"""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

# =============================================================================
# Configuration Dataclasses
# =============================================================================


@dataclass
class CompilerConfig:
    """External compiler configuration.

    Attributes:
        executable: pug executable name (looked up on PATH) or path
    """

    executable: str = "pug"

    def __post_init__(self) -> None:
        if not self.executable:
            raise ValueError("Compiler executable must not be empty")


@dataclass
class DefaultsConfig:
    """Default compiler options applied to every render.

    Attributes:
        pretty: Pretty-print markup
        no_debug: Compile without debug instrumentation
        client: Compile a client-side template function
        doctype: Doctype override
        out_dir: Output directory hint
        obj: Template data (mapping/list as structured value, string as raw text)
    """

    pretty: bool = False
    no_debug: bool = False
    client: bool = False
    doctype: str | None = None
    out_dir: str | None = None
    obj: Any = None


@dataclass
class PugwrapConfig:
    """Top-level pugwrap configuration.

    Attributes:
        compiler: Executable settings
        defaults: Default option set
    """

    compiler: CompilerConfig = field(default_factory=CompilerConfig)
    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)

    _config_path: Path | None = field(default=None, repr=False)

    @property
    def config_path(self) -> Path | None:
        """Get the path to the config file that was loaded."""
        return self._config_path


# =============================================================================
# Environment Variable Substitution
# =============================================================================


def substitute_env_vars(value: Any) -> Any:
    """Substitute environment variables in config values.

    Supports ${VAR} syntax, e.g. ${PUG_BIN} -> value of PUG_BIN.

    Args:
        value: Config value (string, dict, list, or other)

    Returns:
        Value with environment variables substituted
    """
    if isinstance(value, str):
        pattern = re.compile(r"\$\{([^}]+)\}")

        def replace_var(match: re.Match[str]) -> str:
            var_name = match.group(1)
            env_value = os.environ.get(var_name)
            if env_value is None:
                raise ValueError(f"Environment variable not set: {var_name}")
            return env_value

        return pattern.sub(replace_var, value)

    elif isinstance(value, dict):
        return {k: substitute_env_vars(v) for k, v in value.items()}

    elif isinstance(value, list):
        return [substitute_env_vars(v) for v in value]

    return value


# =============================================================================
# Config File Discovery
# =============================================================================


def find_config_file(start_path: Path | None = None) -> Path | None:
    """Find configuration file in standard locations.

    Args:
        start_path: Starting directory for search (defaults to cwd)

    Returns:
        Path to config file if found, None otherwise
    """
    if start_path is None:
        start_path = Path.cwd()

    start_path = start_path.resolve()

    candidates = [
        start_path / ".pugwrap" / "config.yaml",
        start_path / "pugwrap.yaml",
    ]

    for candidate in candidates:
        if candidate.exists():
            return candidate

    return None


# =============================================================================
# Config Loading
# =============================================================================


def _flag(section: dict[str, Any], key: str) -> bool:
    """Read an on/off option; YAML strings such as "false" are rejected."""
    value = section.get(key, False)
    if not isinstance(value, bool):
        raise ValueError(f"defaults.{key} must be true or false (got {value!r})")
    return value


def load_config_from_dict(data: dict[str, Any]) -> PugwrapConfig:
    """Load configuration from a dictionary.

    Args:
        data: Configuration dictionary

    Returns:
        PugwrapConfig instance
    """
    data = substitute_env_vars(data)

    config = PugwrapConfig()

    if "compiler" in data:
        compiler_data = data["compiler"] or {}
        config.compiler = CompilerConfig(
            executable=compiler_data.get("executable", config.compiler.executable),
        )

    if "defaults" in data:
        defaults_data = data["defaults"] or {}
        config.defaults = DefaultsConfig(
            pretty=_flag(defaults_data, "pretty"),
            no_debug=_flag(defaults_data, "no_debug"),
            client=_flag(defaults_data, "client"),
            doctype=defaults_data.get("doctype"),
            out_dir=defaults_data.get("out_dir"),
            obj=defaults_data.get("obj"),
        )

    return config


def load_config(
    config_path: Path | None = None,
    auto_discover: bool = True,
) -> PugwrapConfig:
    """Load configuration from file.

    Args:
        config_path: Explicit path to config file
        auto_discover: Whether to search for config file if not specified

    Returns:
        PugwrapConfig instance

    Raises:
        FileNotFoundError: If config_path specified but doesn't exist
    """
    if config_path is not None:
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        found_path = config_path
    elif auto_discover:
        found_path = find_config_file()
    else:
        found_path = None

    if found_path is not None:
        with open(found_path) as f:
            data = yaml.safe_load(f) or {}
        config = load_config_from_dict(data)
        config._config_path = found_path
    else:
        config = PugwrapConfig()

    return config


def create_default_config() -> str:
    """Create default configuration YAML content.

    Returns:
        YAML string with default configuration and comments
    """
    return '''# pugwrap configuration

# External compiler
compiler:
  executable: "pug"   # name on PATH, a path, or "${PUG_BIN}"

# Options applied to every render (CLI flags override)
defaults:
  pretty: false
  no_debug: false
  client: false
  # doctype: "html"
  # out_dir: "dist"
  # obj:
  #   title: "Home"
'''
