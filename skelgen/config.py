"""skelgen configuration.

Typed options for a generation run.  Options use a Pydantic v2 model so they
can be validated at construction time and read from environment variables
without boiler-plate.
"""

from __future__ import annotations

import os

from pydantic import BaseModel, Field

_TRUTHY = {"1", "true", "yes", "on"}


class GenerateOptions(BaseModel):
    """Options supplied by the caller of a generation run.

    Instances are typically created once by the CLI entry point (or a program
    embedding the engine) and handed to ``Root``.
    """

    overwrite: bool = Field(default=False, description="Overwrite existing files")
    dry_run: bool = Field(
        default=False,
        description="Report what would change without touching the filesystem",
    )
    working_directory: str = Field(
        default="",
        description="Directory generated paths are relative to (empty means '.')",
    )

    @property
    def work_dir(self) -> str:
        """The working directory with the empty default resolved to ``"."``."""
        return self.working_directory or "."

    @classmethod
    def from_env(cls) -> "GenerateOptions":
        """Build options from environment variables.

        Recognised variables (all optional):
            SKELGEN_OVERWRITE, SKELGEN_DRY_RUN, SKELGEN_WORKDIR.
        """
        return cls(
            overwrite=os.environ.get("SKELGEN_OVERWRITE", "").lower() in _TRUTHY,
            dry_run=os.environ.get("SKELGEN_DRY_RUN", "").lower() in _TRUTHY,
            working_directory=os.environ.get("SKELGEN_WORKDIR", ""),
        )
