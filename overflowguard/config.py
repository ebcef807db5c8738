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
# SECTION: Params --------------------------------
# run configuration is validated by pydantic models,
# one per top level config key, so options are used with dot syntax downstream
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from overflowguard.const import DEFAULT_STEPS, Direction, NumericTypes, ReportFormat

# pyright: reportExplicitAny=false


DEFAULT_CONFIG: dict[str, Any] = {
    "harness": {
        "steps": DEFAULT_STEPS,
        "types": [str(nt) for nt in NumericTypes],
        "directions": [str(d) for d in Direction],
    },
    "report": {"format": str(ReportFormat.TEXT)},
}


class ConfigError(Exception):
    pass


class _Params(BaseModel):
    model_config: ConfigDict = ConfigDict(  # pyright: ignore[reportIncompatibleVariableOverride]
        strict=True, frozen=True, extra="forbid"
    )


class HarnessParams(_Params):
    # enums and sequences arrive as strings and lists from TOML/JSON
    steps: int = Field(default=DEFAULT_STEPS, gt=0)
    types: tuple[NumericTypes, ...] = Field(default=tuple(NumericTypes), min_length=1, strict=False)
    directions: tuple[Direction, ...] = Field(default=tuple(Direction), min_length=1, strict=False)


class ReportParams(_Params):
    format: ReportFormat = Field(default=ReportFormat.TEXT, strict=False)


@dataclass(frozen=True, slots=True)
class RunConfig:
    harness: HarnessParams
    report: ReportParams


_SECTIONS: dict[str, type[_Params]] = {
    "harness": HarnessParams,
    "report": ReportParams,
}


def load_config(configd: Mapping[str, Any]) -> RunConfig:
    """
    Validate a (merged) config mapping, raising ConfigError describing every problem found.
    """
    unknown = set(configd) - set(_SECTIONS)
    if unknown:
        raise ConfigError(f"unrecognised top-level config keys {sorted(unknown)!r} - expected any of {list(_SECTIONS)!r}")

    validated: dict[str, _Params] = {}
    for section, model in _SECTIONS.items():
        sectiond = configd.get(section, {})
        if not isinstance(sectiond, Mapping):
            raise ConfigError(f"config key {section!r} must be a table/mapping, received {type(sectiond).__name__}")
        try:
            validated[section] = model.model_validate(dict(sectiond))
        except ValidationError as ex:
            errl = ex.errors()
            msg_nerr = f"{len(errl)} errors in {section!r} config:\n"
            msg_locl = ""
            for errd in errl:
                loc = ".".join(str(part) for part in errd["loc"])
                submsg = f"{loc!r} - {errd['msg']}\n"
                msg_locl += submsg
            raise ConfigError(msg_nerr + msg_locl) from ex

    return RunConfig(
        harness=validated["harness"],  # pyright: ignore[reportArgumentType]
        report=validated["report"],  # pyright: ignore[reportArgumentType]
    )


def dump_config(config: RunConfig) -> dict[str, Any]:
    return {
        "harness": config.harness.model_dump(mode="json"),
        "report": config.report.model_dump(mode="json"),
    }
