"""
ZeroApp Builder data models.

Pydantic models for the inbound project description, the rendered documents
and the results of a build run.
"""

from .build import BuildResult, KeystoreOutcome, KeystoreResult
from .codegen import FileKind, GeneratedFile, GeneratedProject, RenderedProject
from .project import (
    MAIN_SCREEN_ID,
    ButtonComponent,
    ComponentKind,
    ComponentNode,
    ContainerComponent,
    ImageComponent,
    InputComponent,
    ListComponent,
    NavigationComponent,
    NavItem,
    Project,
    Screen,
    TextComponent,
    UnknownComponent,
    WebViewComponent,
)

__all__ = [
    # Project description
    "MAIN_SCREEN_ID",
    "ButtonComponent",
    "ComponentKind",
    "ComponentNode",
    "ContainerComponent",
    "ImageComponent",
    "InputComponent",
    "ListComponent",
    "NavigationComponent",
    "NavItem",
    "Project",
    "Screen",
    "TextComponent",
    "UnknownComponent",
    "WebViewComponent",
    # Generated output
    "FileKind",
    "GeneratedFile",
    "GeneratedProject",
    "RenderedProject",
    # Build results
    "BuildResult",
    "KeystoreOutcome",
    "KeystoreResult",
]
