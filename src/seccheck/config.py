# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models for the seccheck command."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .tools import supported_languages


class OutputConfig(BaseModel):
    """Console presentation preferences."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    emoji: bool = True
    color: bool = True
    banner: bool = True


class ExecutionConfig(BaseModel):
    """Analyzer process behaviour."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    timeout: float | None = Field(default=None, gt=0)
    propagate_exit_status: bool = False


class Config(BaseModel):
    """Resolved configuration for a single seccheck run."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    output: OutputConfig = Field(default_factory=OutputConfig)
    execution: ExecutionConfig = Field(default_factory=ExecutionConfig)
    executables: dict[str, str] = Field(default_factory=dict)

    @field_validator("executables", mode="before")
    @classmethod
    def _normalise_executables(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return value
        normalised = {str(key).lower(): entry for key, entry in value.items()}
        unknown = sorted(set(normalised) - set(supported_languages()))
        if unknown:
            allowed = ", ".join(supported_languages())
            raise ValueError(f"unknown language tag(s) {', '.join(unknown)}; expected one of: {allowed}")
        return normalised

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="python")


__all__ = ["Config", "ExecutionConfig", "OutputConfig"]
