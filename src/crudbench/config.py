"""Benchmark configuration and workload profile loading.

Handles:
- Loading benchmark profiles from YAML files.
- Parsing inline workload definitions from CLI arguments.
- Merging CLI options with profile defaults.
- Validating the final configuration before execution.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from crudbench.insights import HEAVY_LABEL, LIGHT_LABEL, TOTAL_LABEL
from crudbench.logging import get_logger

log = get_logger("config")

# Above this many iterations the run gets slow for little statistical gain.
MAX_RECOMMENDED_ITERATIONS = 10


# ---------------------------------------------------------------------------
# Workload and benchmark configuration
# ---------------------------------------------------------------------------


@dataclass
class WorkloadDef:
    """A labeled workload: one command that runs a CRUD sequence."""

    name: str
    command: str = ""
    description: str = ""
    env: dict[str, str] = field(default_factory=dict)
    cwd: str | None = None


@dataclass
class BenchConfig:
    """Resolved configuration for a benchmark run."""

    name: str = ""
    description: str = ""

    # Workloads in execution and display order
    workloads: dict[str, WorkloadDef] = field(default_factory=dict)

    # Iteration control
    iterations: int = 5  # Number of measured iterations
    warmup: int = 0  # Number of warm-up iterations
    timeout: int = 600  # Per-workload timeout in seconds

    # Labels used by the report
    total_label: str = TOTAL_LABEL
    light_label: str = LIGHT_LABEL
    heavy_label: str = HEAVY_LABEL

    # Where to save the raw samples; None means do not save
    output_path: Path | None = None


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


@dataclass
class ValidationError:
    """A single configuration validation error."""

    field: str
    message: str
    severity: str = "error"  # "error" or "warning"


def validate_config(config: BenchConfig) -> list[ValidationError]:
    """Validate a benchmark configuration.

    Returns a list of validation errors.  Empty list means valid.
    """
    errors: list[ValidationError] = []

    if not config.workloads:
        errors.append(
            ValidationError(
                field="workloads",
                message=(
                    "No workloads defined. "
                    "Use --profile or --workload to define at least one."
                ),
            )
        )

    for name, wl in config.workloads.items():
        if not name or not name.strip():
            errors.append(
                ValidationError(field="workloads", message="Workload names must be non-empty.")
            )
        if not wl.command:
            errors.append(
                ValidationError(
                    field=f"workloads.{name}.command",
                    message=f"Workload '{name}' has no command.",
                )
            )

    if config.total_label in config.workloads:
        errors.append(
            ValidationError(
                field="workloads",
                message=(
                    f"Workload name '{config.total_label}' is reserved for the "
                    f"per-iteration total."
                ),
            )
        )

    if config.iterations < 1:
        errors.append(
            ValidationError(
                field="iterations",
                message=f"Need at least 1 measured iteration (got {config.iterations}).",
            )
        )
    elif config.iterations > MAX_RECOMMENDED_ITERATIONS:
        errors.append(
            ValidationError(
                field="iterations",
                message=(
                    f"{config.iterations} iterations requested; more than "
                    f"{MAX_RECOMMENDED_ITERATIONS} makes heavy workloads very slow."
                ),
                severity="warning",
            )
        )

    if config.warmup < 0:
        errors.append(
            ValidationError(
                field="warmup",
                message=f"Warmup iterations cannot be negative (got {config.warmup}).",
            )
        )

    if config.timeout <= 0:
        errors.append(
            ValidationError(
                field="timeout",
                message=f"Timeout must be positive (got {config.timeout}).",
            )
        )

    # Insights need both tiers; without them the report still works.
    for label in (config.light_label, config.heavy_label):
        if config.workloads and label not in config.workloads:
            errors.append(
                ValidationError(
                    field="workloads",
                    message=f"No '{label}' workload; insights will be omitted.",
                    severity="warning",
                )
            )

    return errors


# ---------------------------------------------------------------------------
# YAML profile loading
# ---------------------------------------------------------------------------


def load_profile(profile_path: Path) -> dict[str, Any]:
    """Load a benchmark profile from a YAML file.

    Profile format::

        name: "Postgres CRUD tiers"
        description: "optional description"
        iterations: 5
        warmup: 1
        timeout: 600

        workloads:
          Lightweight:
            command: "npx ts-node src/lightweight.ts"
          Medium:
            command: "npx ts-node src/medium.ts"
          Heavy:
            command: "npx ts-node src/heavy.ts"
            env:
              BATCH_SIZE: "500"

    Returns:
        The parsed YAML as a dict.
    """
    if not profile_path.exists():
        raise FileNotFoundError(f"Profile not found: {profile_path}")

    data = yaml.safe_load(profile_path.read_text())

    if not isinstance(data, dict):
        raise ValueError(f"Profile must be a YAML mapping, got {type(data).__name__}")

    return data


def config_from_profile(
    profile_data: dict[str, Any],
    *,
    cli_overrides: dict[str, Any] | None = None,
) -> BenchConfig:
    """Build a BenchConfig from a parsed YAML profile.

    CLI overrides take precedence over profile values for name,
    iterations, warmup, timeout and output_path.

    Args:
        profile_data: Parsed YAML profile dict.
        cli_overrides: Dict of CLI option values that override
            profile defaults.  Keys match BenchConfig field names.

    Returns:
        BenchConfig with workloads and settings populated.
    """
    cli = cli_overrides or {}

    def _pick(key: str, default: Any) -> Any:
        if cli.get(key) is not None:
            return cli[key]
        return profile_data.get(key, default)

    config = BenchConfig(
        name=cli.get("name") or profile_data.get("name", ""),
        description=profile_data.get("description", ""),
        iterations=_pick("iterations", 5),
        warmup=_pick("warmup", 0),
        timeout=_pick("timeout", 600),
        total_label=profile_data.get("total_label", TOTAL_LABEL),
        light_label=profile_data.get("light_label", LIGHT_LABEL),
        heavy_label=profile_data.get("heavy_label", HEAVY_LABEL),
    )

    workloads_data = profile_data.get("workloads") or {}
    if not isinstance(workloads_data, dict):
        raise ValueError("Profile 'workloads' must be a mapping of label -> definition")

    for name, wl_data in workloads_data.items():
        if isinstance(wl_data, str):
            wl_data = {"command": wl_data}
        if not isinstance(wl_data, dict):
            raise ValueError(f"Workload '{name}' must be a mapping, got {type(wl_data).__name__}")

        env_data = wl_data.get("env") or {}
        if not isinstance(env_data, dict):
            raise ValueError(
                f"Workload '{name}' env must be a mapping, got {type(env_data).__name__}"
            )

        config.workloads[str(name)] = WorkloadDef(
            name=str(name),
            command=wl_data.get("command", ""),
            description=wl_data.get("description", ""),
            env={str(k): str(v) for k, v in env_data.items()},
            cwd=wl_data.get("cwd"),
        )

    log.debug("Profile defines %d workload(s): %s", len(config.workloads), list(config.workloads))

    if cli.get("output_path"):
        config.output_path = Path(cli["output_path"])
    elif profile_data.get("output"):
        config.output_path = Path(profile_data["output"])

    return config


# ---------------------------------------------------------------------------
# Inline workload parsing
# ---------------------------------------------------------------------------


def parse_inline_workload(spec: str) -> WorkloadDef:
    """Parse an inline workload specification from CLI.

    Format: ``"label:key=value,key=value,..."`` or the shorthand
    ``"label=command"``.

    Supported keys: command, description, cwd, env.KEY

    Examples::

        "Lightweight=npx ts-node src/lightweight.ts"
        "Heavy:command=psql -f heavy.sql,env.PGDATABASE=bench"

    Returns:
        WorkloadDef with parsed values.
    """
    colon = spec.find(":")
    equals = spec.find("=")
    if equals != -1 and (colon == -1 or equals < colon):
        name, command = spec.split("=", 1)
        name = name.strip()
        if not name:
            raise ValueError("Workload name cannot be empty.")
        return WorkloadDef(name=name, command=command.strip())

    if colon == -1:
        raise ValueError(
            f"Invalid workload spec: '{spec}'. Expected 'label=command' or 'label:key=value,...'"
        )

    name, rest = spec.split(":", 1)
    name = name.strip()
    if not name:
        raise ValueError("Workload name cannot be empty.")

    wl = WorkloadDef(name=name)

    for pair in _split_pairs(rest.strip()):
        if "=" not in pair:
            raise ValueError(f"Invalid key=value pair in workload '{name}': '{pair}'")
        key, value = pair.split("=", 1)
        key = key.strip()
        value = value.strip()

        if key == "command":
            wl.command = value
        elif key == "description":
            wl.description = value
        elif key == "cwd":
            wl.cwd = value
        elif key.startswith("env."):
            wl.env[key[4:]] = value
        else:
            raise ValueError(
                f"Unknown workload key '{key}' in workload '{name}'. "
                f"Valid keys: command, description, cwd, env.KEY"
            )

    return wl


def _split_pairs(text: str) -> list[str]:
    """Split key=value pairs on commas.

    Segments without ``=`` are rejoined to the preceding segment since
    they belong to a value that contained a comma.
    """
    pairs: list[str] = []
    for part in text.split(","):
        part = part.strip()
        if not part:
            continue
        if "=" in part or not pairs:
            pairs.append(part)
        else:
            pairs[-1] += "," + part
    return pairs
