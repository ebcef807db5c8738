# overflowguard
#
# Copyright (C) 2025 Genome Research Ltd.
#
# Author: Alex Byrne <ab63@sanger.ac.uk>
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

# pyright: reportImplicitStringConcatenation=false

import copy
import json
import logging
import sys
import tomllib
from collections.abc import Iterable
from pathlib import Path
from typing import Any, cast, override

import click

from overflowguard import __version__
from overflowguard.config import DEFAULT_CONFIG, ConfigError, dump_config, load_config
from overflowguard.const import Direction, NumericTypes, ReportFormat
from overflowguard.harness import run_tests
from overflowguard.report import BANNER_END, BANNER_START, json_lines, text_lines

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s ¦ %(levelname)-8s ¦ %(message)s", datefmt="%I:%M:%S"
)


EXIT_SUCCESS = 0
EXIT_FAILURE = 1

BOTH_DIRECTIONS = "both"


existing_file_path = click.Path(
    exists=True, file_okay=True, dir_okay=False, readable=True, resolve_path=True, path_type=Path
)

writeable_file_path = click.Path(
    dir_okay=False,
    writable=True,
    resolve_path=True,
)


class ConfigFile(click.ParamType):
    name: str = "config-file"

    @override
    def convert(self, value: Any, param: Any, ctx: Any):
        path = cast(Path, existing_file_path.convert(value, param, ctx))
        data = path.read_bytes()
        ext = path.suffix.lower()
        try:
            if ext == ".toml":
                return tomllib.loads(data.decode("utf-8"))
            elif ext == ".json":
                return json.loads(data)
            else:
                self.fail("Expected .toml or .json", param, ctx)
        except click.BadParameter:
            raise
        except Exception as ex:
            self.fail(f"Failed to parse {path.name}: {ex}", param, ctx)


def _coerce_value(path: str, raw: str) -> Any:
    s = raw.strip()

    try:
        return json.loads(s)
    except json.JSONDecodeError:
        logging.warning(
            f'--set {path}: could not interpret value "{raw}" as JSON-format value, assuming string'
        )
        return s


def _set_dleaf(targetd: dict[str, Any], path: str, value: Any) -> None:
    """
    Set obj[path] = value where path is 'a.b' and only override existing leaf.
    """
    if not path or "." in (path[0], path[-1]):
        raise click.BadParameter(f"Invalid path for --set: {path!r}")

    dot_segments = path.split(".")
    if any(seg == "" for seg in dot_segments):
        raise click.BadParameter(f"Invalid path (empty segment) for --set: {path!r}")
    d_recursor: dict[str, Any] = targetd

    # walk all but last key
    for seg in dot_segments[:-1]:
        if not isinstance(d_recursor, dict):
            raise click.BadParameter(f"--set {path}: '{seg}' is not a mapping/dict in config")  # pyright: ignore[reportUnreachable]
        if seg not in d_recursor:
            raise click.BadParameter(f"--set {path}: missing key '{seg}' in config")
        d_recursor = d_recursor[seg]

    terminal_key = dot_segments[-1]
    if not isinstance(d_recursor, dict):
        raise click.BadParameter(f"--set {path}: parent of '{terminal_key}' is not a dict")  # pyright: ignore[reportUnreachable]
    if terminal_key not in d_recursor:
        raise click.BadParameter(f"--set {path}: missing key '{terminal_key}' in config")
    if isinstance(d_recursor[terminal_key], dict):
        raise click.BadParameter(
            f"--set {path}: final target is a mapping/dict; only leaf values may be overridden"
        )

    # override
    d_recursor[terminal_key] = value


def _resolve_configd_callback(ctx: Any, param: Any, values: Iterable[dict[str, Any]]):  # pyright: ignore[reportUnusedParameter]
    """
    Merge config files over the defaults
    """
    merged: dict[str, Any] = {}

    for configd in values:
        if not isinstance(configd, dict):
            raise click.BadParameter("-c/--config: config must be a table/object at the top level")  # pyright: ignore[reportUnreachable]
        for key, val in configd.items():
            if key in merged:
                raise click.BadParameter(
                    f"-c/--config: top-level key {key} appears in more than one config. Top-level keys may not be split across config files"
                )
            merged[key] = val

    for key, val in DEFAULT_CONFIG.items():
        if key not in merged:
            merged[key] = copy.deepcopy(val)
            logging.debug(f"{key} configuration not provided; using defaults")
        elif isinstance(merged[key], dict):
            # fill unset leaves from the defaults, so that --set may target them
            merged[key] = copy.deepcopy(val) | merged[key]
        else:
            raise click.BadParameter(f"-c/--config: top-level key {key} must be a table/object")

    return merged


@click.command(
    epilog="Range violations are reported as results; the exit status is 0 whenever the tests ran.",
    options_metavar="[--help] [OPTIONS]",
)
@click.version_option(__version__, "-v", "--version", message="%(version)s")
@click.option(
    "-c",
    "--config",
    "configd",
    multiple=True,
    metavar="FILEPATH",
    type=ConfigFile(),
    help="path to config TOML/s or JSON/s from which the run will be configured. May be provided multiple times; individual configs can be provided for each top level key (harness, report).",
    callback=_resolve_configd_callback,
)
@click.option(
    "--set",
    "overrides",
    nargs=2,
    multiple=True,
    type=(str, click.UNPROCESSED),
    help="Override values in the resolved config. Uses dot paths for the key, and JSON format for the value, e.g., --set harness.steps 7. May be provided multiple times.",
)
@click.option(
    "-t",
    "--type",
    "types",
    multiple=True,
    type=click.Choice([str(nt) for nt in NumericTypes]),
    help="numeric type to test, named as in C (e.g. 'unsigned char'). May be provided multiple times. Default all.",
)
@click.option(
    "-d",
    "--direction",
    type=click.Choice([*[str(d) for d in Direction], BOTH_DIRECTIONS]),
    help="run only the overflow (repeated addition) or underflow (repeated subtraction) tests, or both.",
)
@click.option(
    "-s",
    "--steps",
    type=int,
    metavar="N",
    help="number of steps expected to remain within range; the step size is max / N.",
)
@click.option(
    "-f",
    "--format",
    "output_format",
    type=click.Choice([str(rf) for rf in ReportFormat]),
    help="report as console text or as JSON lines.",
)
@click.option(
    "-o",
    "--output-config",
    "output_config_path",
    metavar="FILEPATH",
    type=writeable_file_path,
    help="log run configuration back to a new JSON file.",
)
@click.option(
    "-q",
    "--quiet",
    count=True,
    help="be quiet (-q to not log INFO level messages, -qq to additionally not log WARN).",
    default=False,
)
def overflowguard_cli(
    configd: dict[str, Any],
    overrides: tuple[tuple[str, str], ...],
    types: tuple[str, ...],
    direction: str | None,
    steps: int | None,
    output_format: str | None,
    output_config_path: str | None,
    quiet: int,
) -> None:
    """
    Demonstrate bounds-checked accumulation. For each numeric type, add max / N to 0 and subtract max / N from max,
    N and N + 1 times, stopping before any step that would overflow or underflow, and report the outcome.
    """
    for keypath, raw in overrides:
        _set_dleaf(configd, keypath, _coerce_value(keypath, raw))

    # dedicated options take precedence over config files and --set
    if types:
        configd["harness"]["types"] = list(types)
    if direction is not None:
        configd["harness"]["directions"] = (
            [str(d) for d in Direction] if direction == BOTH_DIRECTIONS else [direction]
        )
    if steps is not None:
        configd["harness"]["steps"] = steps
    if output_format is not None:
        configd["report"]["format"] = output_format

    try:
        config = load_config(configd)
    except ConfigError as er:
        logging.error(f"failed to validate configuration, reporting: {er}")
        sys.exit(EXIT_FAILURE)

    if output_config_path:
        try:
            with open(output_config_path, "w") as output_json:
                json.dump(dump_config(config), output_json, sort_keys=False, indent="  ")
        except Exception as e:
            logging.error(msg="failed to write output JSON, reporting: {}".format(e))
            sys.exit(EXIT_FAILURE)

    text_out = config.report.format == ReportFormat.TEXT
    if text_out:
        click.echo(BANNER_START)

    for run_direction, reports in run_tests(
        config.harness.types, config.harness.directions, config.harness.steps, quiet
    ):
        lines = text_lines(run_direction, reports) if text_out else json_lines(reports)
        for line in lines:
            click.echo(line)

    if text_out:
        click.echo()
        click.echo(BANNER_END)

    if not quiet:
        logging.info("overflowguard complete")
    sys.exit(EXIT_SUCCESS)


if __name__ == "__main__":
    overflowguard_cli()
