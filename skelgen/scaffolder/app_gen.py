"""Built-in templates: "new app" and "init".

:func:`new_app_template` stamps out a command-line application package::

    <name>/__main__.py     rendered from templates/app/__main__.py.j2, formatted
    <name>/LICENSE.txt     only when ``license`` is set

and adds the runtime dependencies the chosen extensions need with ``uv add``.
:func:`new_init_template` adds skelgen itself to an existing project.
"""

from __future__ import annotations

import os

from pydantic import BaseModel, Field

from skelgen.config import GenerateOptions

from .deps_gen import UvAdd
from .files import Contents, File, Format, Template
from .generator import Data, Generator, Root
from .templates import TemplateRenderer

LICENSE_TEXT = "No license is available with this build."

FRAMEWORK_PACKAGE = "skelgen"


class AppExtensions(BaseModel):
    color: bool = Field(default=False, description="Colour console output with rich")
    table: bool = Field(default=False, description="Table output with rich")


class AppDependencies(BaseModel):
    http: bool = Field(default=False, description="Add a dependency on httpx")


class AppSpec(BaseModel):
    """Pydantic model describing the app to scaffold.

    Bound as ``App`` while the template runs, so names and bodies refer to
    ``{{ App.name }}``, ``{{ App.extensions.color }}`` and so on.
    """

    name: str = Field(
        default_factory=lambda: os.path.basename(os.getcwd()),
        description="App name (used for the package directory)",
    )
    help_text: str = Field(default="", description="Help text shown by --help")
    comment: str = Field(default="", description="Comment placed at the top of the module")
    version: str = Field(default="", description="Version string reported by --version")
    license: bool = Field(default=False, description="Write a LICENSE.txt file")
    extensions: AppExtensions = Field(default_factory=AppExtensions)
    dependencies: AppDependencies = Field(default_factory=AppDependencies)

    def packages(self) -> list[str]:
        """Return the distributions the generated app imports."""
        packages: list[str] = []
        if self.extensions.color or self.extensions.table:
            packages.append("rich")
        if self.dependencies.http:
            packages.append("httpx")
        return packages


def new_app_template(
    spec: AppSpec,
    options: GenerateOptions | None = None,
    renderer: TemplateRenderer | None = None,
) -> Root:
    """Build the generator tree for a new app described by *spec*."""
    renderer = renderer or TemplateRenderer()

    license_file: Generator | None = None
    if spec.license:
        license_file = File("{{ App.name | snake_case }}/LICENSE.txt", Contents(LICENSE_TEXT))

    return Root(
        Data("App", spec),
        UvAdd(*spec.packages()),
        File(
            "{{ App.name | snake_case }}/__main__.py",
            Template(renderer.get_template("app/__main__.py.j2")),
            Format(),
        ),
        license_file,
        options=options,
    )


def new_init_template(options: GenerateOptions | None = None) -> Root:
    """Build the generator tree that adds skelgen to the current project.

    ``uv add`` records the resolved lower bound itself, so the requirement
    is left unversioned.
    """
    return Root(UvAdd(FRAMEWORK_PACKAGE), options=options)
