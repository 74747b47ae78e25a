"""
Project description models.

These models represent the inbound app description: package metadata, screens
and the recursive UI component tree of each screen. The component tree is a
closed tagged union keyed on the ``type`` field; values outside the known set
validate into ``UnknownComponent`` so the renderer can degrade them explicitly.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

MAIN_SCREEN_ID = "mainScreen"
DEFAULT_VERSION = "1.0.0"
PACKAGE_PATTERN = r"^[A-Za-z][A-Za-z0-9_]*(\.[A-Za-z][A-Za-z0-9_]*)+$"


class ComponentKind(str, Enum):
    """Known UI component kinds."""

    TEXT = "text"
    BUTTON = "button"
    CONTAINER = "container"
    INPUT = "input"
    IMAGE = "image"
    LIST = "list"
    WEBVIEW = "webview"
    NAVIGATION = "navigation"


class ComponentProperties(BaseModel):
    """Properties shared by every component kind.

    Keys arrive in camelCase (``backgroundColor``); numbers are accepted
    wherever a string is expected and empty strings count as absent.
    """

    model_config = ConfigDict(
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    margin: str | None = Field(default=None, description="layout_margin, e.g. 16dp")

    @model_validator(mode="before")
    @classmethod
    def _drop_empty(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value != ""}
        return data


class TextProperties(ComponentProperties):
    """Properties for a text label."""

    content: str | None = Field(default=None, description="Label text")
    text_align: str | None = Field(default=None, description="Gravity of the text")
    font_size: str | None = Field(default=None, description="Text size, e.g. 18sp")
    font_weight: str | None = Field(default=None, description="Only 'bold' has an effect")
    color: str | None = Field(default=None, description="Text color")


class ButtonProperties(ComponentProperties):
    """Properties for a button."""

    content: str | None = Field(default=None, description="Button label")
    background_color: str | None = Field(default=None, description="Background tint")
    color: str | None = Field(default=None, description="Label color")


class ContainerProperties(ComponentProperties):
    """Properties for a linear container."""

    layout: str | None = Field(default=None, description="'horizontal'; anything else is vertical")
    padding: str | None = Field(default=None, description="Inner padding")
    background_color: str | None = Field(default=None, description="Background color")


class InputProperties(ComponentProperties):
    """Properties for a text entry field."""

    placeholder: str | None = Field(default=None, description="Hint text")
    input_type: str | None = Field(default=None, description="email, password, number, phone or text")


class ImageProperties(ComponentProperties):
    """Properties for an image placeholder."""

    alt: str | None = Field(default=None, description="Content description")
    width: str | None = Field(default=None, description="Overrides layout_width")
    height: str | None = Field(default=None, description="Overrides layout_height")


class ListProperties(ComponentProperties):
    """Properties for a list placeholder."""


class WebViewProperties(ComponentProperties):
    """Properties for embedded web content."""

    url: str | None = Field(default=None, description="Accepted but not rendered into markup")


class NavItem(BaseModel):
    """A single navigation bar entry.

    A bare string is the label. An entry without a label is labelled with
    its target screen id; one with neither is rejected.
    """

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    label: str = Field(description="Button label")
    screen: str = Field(default="", description="Target screen identifier")

    @model_validator(mode="before")
    @classmethod
    def _from_label(cls, data: Any) -> Any:
        if isinstance(data, (str, int, float)):
            return {"label": str(data)}
        if isinstance(data, dict) and data.get("label") in (None, "") and data.get("screen"):
            return {**data, "label": data["screen"]}
        return data


DEFAULT_NAV_ITEMS: tuple[NavItem, ...] = (
    NavItem(label="Home", screen=MAIN_SCREEN_ID),
    NavItem(label="About"),
    NavItem(label="Contact"),
)


class NavigationProperties(ComponentProperties):
    """Properties for a horizontal navigation bar."""

    items: list[NavItem] | None = Field(default=None, description="Entries; defaults to Home/About/Contact")


class _Component(BaseModel):
    """Common behaviour of every component node."""

    model_config = ConfigDict(extra="ignore")

    @field_validator("properties", mode="before", check_fields=False)
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return {} if value is None else value


class TextComponent(_Component):
    type: Literal["text"] = "text"
    properties: TextProperties = Field(default_factory=TextProperties)


class ButtonComponent(_Component):
    type: Literal["button"] = "button"
    properties: ButtonProperties = Field(default_factory=ButtonProperties)


class ContainerComponent(_Component):
    """The only component kind that nests other components."""

    type: Literal["container"] = "container"
    properties: ContainerProperties = Field(default_factory=ContainerProperties)
    children: list[ComponentNode] = Field(default_factory=list)

    @field_validator("children", mode="before")
    @classmethod
    def _none_as_no_children(cls, value: Any) -> Any:
        return [] if value is None else value


class InputComponent(_Component):
    type: Literal["input"] = "input"
    properties: InputProperties = Field(default_factory=InputProperties)


class ImageComponent(_Component):
    type: Literal["image"] = "image"
    properties: ImageProperties = Field(default_factory=ImageProperties)


class ListComponent(_Component):
    type: Literal["list"] = "list"
    properties: ListProperties = Field(default_factory=ListProperties)


class WebViewComponent(_Component):
    type: Literal["webview"] = "webview"
    properties: WebViewProperties = Field(default_factory=WebViewProperties)


class NavigationComponent(_Component):
    type: Literal["navigation"] = "navigation"
    properties: NavigationProperties = Field(default_factory=NavigationProperties)


class UnknownComponent(_Component):
    """A component whose ``type`` is outside the known set; kept verbatim."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    type: str = Field(default="undefined", description="The unrecognized kind name")
    properties: dict[str, Any] = Field(default_factory=dict)


_KNOWN_KINDS = frozenset(kind.value for kind in ComponentKind)


def _component_tag(value: Any) -> str:
    """Pick the union member for raw input or an already-built node."""
    if isinstance(value, dict):
        kind = value.get("type")
    else:
        kind = getattr(value, "type", None)
    if isinstance(value, UnknownComponent):
        return "unknown"
    return kind if isinstance(kind, str) and kind in _KNOWN_KINDS else "unknown"


ComponentNode = Annotated[
    Union[
        Annotated[TextComponent, Tag("text")],
        Annotated[ButtonComponent, Tag("button")],
        Annotated[ContainerComponent, Tag("container")],
        Annotated[InputComponent, Tag("input")],
        Annotated[ImageComponent, Tag("image")],
        Annotated[ListComponent, Tag("list")],
        Annotated[WebViewComponent, Tag("webview")],
        Annotated[NavigationComponent, Tag("navigation")],
        Annotated[UnknownComponent, Tag("unknown")],
    ],
    Discriminator(_component_tag),
]

ContainerComponent.model_rebuild()


class Screen(BaseModel):
    """One app view holding an ordered component tree."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    name: str = Field(description="Display name")
    components: list[ComponentNode] = Field(default_factory=list, description="Top-level components")

    @field_validator("components", mode="before")
    @classmethod
    def _none_as_no_components(cls, value: Any) -> Any:
        return [] if value is None else value


class Project(BaseModel):
    """The app to generate."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(min_length=1, description="App display name")
    package: str = Field(pattern=PACKAGE_PATTERN, description="Reverse-domain application id")
    version: str = Field(default=DEFAULT_VERSION, description="Version name")
    screens: dict[str, Screen] = Field(description="Screens keyed by identifier")

    @field_validator("version", mode="before")
    @classmethod
    def _default_version(cls, value: Any) -> Any:
        return DEFAULT_VERSION if value in (None, "") else value

    @model_validator(mode="after")
    def _require_main_screen(self) -> Project:
        if MAIN_SCREEN_ID not in self.screens:
            raise ValueError(f"project must define a '{MAIN_SCREEN_ID}' screen")
        return self

    @property
    def main_screen(self) -> Screen:
        """The entry screen."""
        return self.screens[MAIN_SCREEN_ID]

    @property
    def secondary_screens(self) -> list[tuple[str, Screen]]:
        """Every screen except the main one, in declaration order."""
        return [
            (screen_id, screen)
            for screen_id, screen in self.screens.items()
            if screen_id != MAIN_SCREEN_ID
        ]

    @property
    def package_path(self) -> str:
        """Package name as a relative source directory."""
        return self.package.replace(".", "/")
