"""
Code generation data models.

These models represent the output of rendering a project: the markup and
source documents, and the file tree they are written out as.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class RenderedProject(BaseModel):
    """Every document rendered for one project.

    Layouts and activity stubs are keyed by screen identifier. Activity stubs
    exist only for non-main screens; the main screen gets ``main_activity``.
    """

    manifest: str = Field(description="AndroidManifest.xml")
    layouts: dict[str, str] = Field(default_factory=dict, description="Layout XML per screen")
    strings: str = Field(description="values/strings.xml")
    colors: str = Field(description="values/colors.xml")
    styles: str = Field(description="values/styles.xml")
    main_activity: str = Field(description="MainActivity.java")
    activity_stubs: dict[str, str] = Field(default_factory=dict, description="Activity source per non-main screen")
    activity_names: dict[str, str] = Field(default_factory=dict, description="Activity class name per screen")


class FileKind(str, Enum):
    """Kinds of generated project files."""

    MANIFEST = "manifest"
    LAYOUT = "layout"
    VALUES = "values"
    JAVA = "java"
    GRADLE = "gradle"
    METADATA = "metadata"


class GeneratedFile(BaseModel):
    """A single file of the generated project tree."""

    relative_path: str = Field(description="Path relative to the project root")
    kind: FileKind = Field(description="File category")
    content: str = Field(default="", description="File content")


class GeneratedProject(BaseModel):
    """A generated project tree written to storage."""

    project_name: str = Field(description="App display name")
    package_name: str = Field(description="Application id")
    output_directory: str = Field(description="Storage key prefix of the tree")
    files: list[GeneratedFile] = Field(default_factory=list)

    @property
    def keys(self) -> list[str]:
        """Storage keys of every written file."""
        return [f"{self.output_directory}/{f.relative_path}" for f in self.files]

    def get_file(self, relative_path: str) -> GeneratedFile | None:
        """Get a generated file by its relative path.

        Args:
            relative_path: Path relative to the project root.

        Returns:
            The matching GeneratedFile if found, None otherwise.
        """
        for generated in self.files:
            if generated.relative_path == relative_path:
                return generated
        return None
