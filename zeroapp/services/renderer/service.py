"""
UI Tree Renderer.

Renders a project description into the Android markup and source documents a
build would consume: the manifest, one layout per screen, value resources and
activity sources. Rendering is a pure function of the project: no I/O, no
clock, no randomness, and unrecognized component kinds degrade to a
placeholder instead of raising.
"""

from __future__ import annotations

import re
from typing import Callable
from xml.sax.saxutils import escape

from ...core.logging import get_logger
from ...models.codegen import RenderedProject
from ...models.project import (
    DEFAULT_NAV_ITEMS,
    MAIN_SCREEN_ID,
    ButtonComponent,
    ComponentNode,
    ContainerComponent,
    ImageComponent,
    InputComponent,
    ListComponent,
    NavigationComponent,
    Project,
    Screen,
    TextComponent,
    UnknownComponent,
    WebViewComponent,
)

logger = get_logger(__name__)

INDENT = "    "
XML_HEADER = '<?xml version="1.0" encoding="utf-8"?>\n'
ANDROID_NS = 'xmlns:android="http://schemas.android.com/apk/res/android"'
PLACEHOLDER_DRAWABLE = "@drawable/placeholder"
DEFAULT_MAX_DEPTH = 32

INPUT_TYPES = {
    "email": "textEmailAddress",
    "password": "textPassword",
    "number": "number",
    "phone": "phone",
}
DEFAULT_INPUT_TYPE = "text"

_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]")


def layout_name(screen_id: str) -> str:
    """Resource name of a screen's layout document."""
    return "activity_main" if screen_id == MAIN_SCREEN_ID else f"activity_{screen_id}"


def activity_name(screen_id: str, screen: Screen) -> str:
    """Class name of a screen's activity.

    The display name stripped to ASCII letters and digits, suffixed with
    ``Activity``. Falls back to the screen id when nothing is left.
    """
    if screen_id == MAIN_SCREEN_ID:
        return "MainActivity"
    base = _NON_ALNUM.sub("", screen.name) or _NON_ALNUM.sub("", screen_id)
    return f"{base}Activity"


def activity_names(project: Project) -> dict[str, str]:
    """Activity class name of every screen, unique within the project.

    Names are assigned in declaration order. A name that is already taken
    gets the smallest free numeric suffix (``AboutActivity``,
    ``About2Activity``).
    """
    names = {MAIN_SCREEN_ID: "MainActivity"}
    taken = {"MainActivity"}
    for screen_id, screen in project.secondary_screens:
        name = activity_name(screen_id, screen)
        if name in taken:
            base = name[: -len("Activity")]
            suffix = 2
            while f"{base}{suffix}Activity" in taken:
                suffix += 1
            logger.warning(
                "Activity name already taken, adding suffix",
                screen=screen_id,
                name=name,
                renamed=f"{base}{suffix}Activity",
            )
            name = f"{base}{suffix}Activity"
        names[screen_id] = name
        taken.add(name)
    return names


def _xml(value: str) -> str:
    return escape(value, {'"': "&quot;"})


def _attr(indent: str, name: str, value: str) -> str:
    return f'{indent}{INDENT}android:{name}="{_xml(value)}"\n'


def _margin(indent: str, margin: str | None) -> str:
    return _attr(indent, "layout_margin", margin) if margin else ""


class UiTreeRenderer:
    """Renders projects and component trees into Android documents.

    Container nesting deeper than ``max_depth`` is truncated: the container
    element itself is rendered and its children are replaced by a comment.
    """

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        self.max_depth = max_depth
        self._dispatch: dict[type, Callable[..., str]] = {
            TextComponent: self._render_text,
            ButtonComponent: self._render_button,
            ContainerComponent: self._render_container,
            InputComponent: self._render_input,
            ImageComponent: self._render_image,
            ListComponent: self._render_list,
            WebViewComponent: self._render_webview,
            NavigationComponent: self._render_navigation,
        }

    # ------------------------------------------------------------------
    # Components
    # ------------------------------------------------------------------

    def render_component(self, node: ComponentNode, indent_level: int = 1) -> str:
        """Render one component node (and its subtree) as layout XML.

        Args:
            node: Component to render
            indent_level: Four-space indentation level of the element

        Returns:
            XML fragment followed by a blank line
        """
        return self._render(node, indent_level, depth=1)

    def _render(self, node: ComponentNode, indent_level: int, depth: int) -> str:
        indent = INDENT * indent_level
        handler = self._dispatch.get(type(node))
        if handler is None:
            return self._render_unknown(node, indent)
        if isinstance(node, ContainerComponent):
            return handler(node, indent, indent_level, depth)
        return handler(node, indent)

    def _render_text(self, node: TextComponent, indent: str) -> str:
        props = node.properties
        xml = f"{indent}<TextView\n"
        xml += _attr(indent, "layout_width", "wrap_content")
        xml += _attr(indent, "layout_height", "wrap_content")
        xml += _attr(indent, "text", props.content or "Text")
        if props.text_align:
            xml += _attr(indent, "gravity", props.text_align)
        if props.font_size:
            xml += _attr(indent, "textSize", props.font_size)
        if props.font_weight == "bold":
            xml += _attr(indent, "textStyle", "bold")
        if props.color:
            xml += _attr(indent, "textColor", props.color)
        xml += _margin(indent, props.margin)
        return xml + f"{indent}/>\n\n"

    def _render_button(self, node: ButtonComponent, indent: str) -> str:
        props = node.properties
        xml = f"{indent}<Button\n"
        xml += _attr(indent, "layout_width", "wrap_content")
        xml += _attr(indent, "layout_height", "wrap_content")
        xml += _attr(indent, "text", props.content or "Button")
        if props.background_color:
            xml += _attr(indent, "backgroundTint", props.background_color)
        if props.color:
            xml += _attr(indent, "textColor", props.color)
        xml += _margin(indent, props.margin)
        return xml + f"{indent}/>\n\n"

    def _render_container(
        self, node: ContainerComponent, indent: str, indent_level: int, depth: int
    ) -> str:
        props = node.properties
        orientation = "horizontal" if props.layout == "horizontal" else "vertical"
        xml = f"{indent}<LinearLayout\n"
        xml += _attr(indent, "layout_width", "match_parent")
        xml += _attr(indent, "layout_height", "wrap_content")
        xml += _attr(indent, "orientation", orientation)
        if props.padding:
            xml += _attr(indent, "padding", props.padding)
        if props.background_color:
            xml += _attr(indent, "background", props.background_color)
        xml += _margin(indent, props.margin)
        xml += f"{indent}>\n\n"

        if node.children and depth >= self.max_depth:
            logger.warning(
                "Container nesting limit reached, omitting children",
                max_depth=self.max_depth,
                omitted=len(node.children),
            )
            xml += (
                f"{indent}{INDENT}<!-- Nesting limit ({self.max_depth}) reached: "
                f"{len(node.children)} child component(s) omitted -->\n\n"
            )
        else:
            for child in node.children:
                xml += self._render(child, indent_level + 1, depth + 1)

        return xml + f"{indent}</LinearLayout>\n\n"

    def _render_input(self, node: InputComponent, indent: str) -> str:
        props = node.properties
        xml = f"{indent}<EditText\n"
        xml += _attr(indent, "layout_width", "match_parent")
        xml += _attr(indent, "layout_height", "wrap_content")
        xml += _attr(indent, "hint", props.placeholder or "Enter text")
        xml += _attr(indent, "inputType", INPUT_TYPES.get(props.input_type or "", DEFAULT_INPUT_TYPE))
        xml += _margin(indent, props.margin)
        return xml + f"{indent}/>\n\n"

    def _render_image(self, node: ImageComponent, indent: str) -> str:
        props = node.properties
        xml = f"{indent}<ImageView\n"
        xml += _attr(indent, "layout_width", props.width or "wrap_content")
        xml += _attr(indent, "layout_height", props.height or "wrap_content")
        xml += _attr(indent, "layout_gravity", "center")
        xml += _attr(indent, "src", PLACEHOLDER_DRAWABLE)
        xml += _attr(indent, "contentDescription", props.alt or "Image")
        xml += _margin(indent, props.margin)
        return xml + f"{indent}/>\n\n"

    def _render_list(self, node: ListComponent, indent: str) -> str:
        xml = f"{indent}<ListView\n"
        xml += _attr(indent, "layout_width", "match_parent")
        xml += _attr(indent, "layout_height", "wrap_content")
        xml += _margin(indent, node.properties.margin)
        return xml + f"{indent}/>\n\n"

    def _render_webview(self, node: WebViewComponent, indent: str) -> str:
        # The url property is loaded from code, not from markup.
        xml = f"{indent}<WebView\n"
        xml += _attr(indent, "layout_width", "match_parent")
        xml += _attr(indent, "layout_height", "match_parent")
        xml += _margin(indent, node.properties.margin)
        return xml + f"{indent}/>\n\n"

    def _render_navigation(self, node: NavigationComponent, indent: str) -> str:
        items = node.properties.items
        if items is None:
            items = list(DEFAULT_NAV_ITEMS)

        xml = f"{indent}<LinearLayout\n"
        xml += _attr(indent, "layout_width", "match_parent")
        xml += _attr(indent, "layout_height", "wrap_content")
        xml += _attr(indent, "orientation", "horizontal")
        xml += _attr(indent, "background", "#f0f0f0")
        xml += f'{indent}{INDENT}android:padding="8dp">\n\n'

        inner = indent + INDENT
        for index, item in enumerate(items):
            xml += f"{inner}<Button\n"
            xml += _attr(inner, "layout_width", "0dp")
            xml += _attr(inner, "layout_height", "wrap_content")
            xml += _attr(inner, "layout_weight", "1")
            xml += _attr(inner, "text", item.label)
            xml += _attr(inner, "id", f"@+id/nav_{index}")
            xml += f'{inner}{INDENT}style="?android:attr/buttonBarButtonStyle" />\n\n'

        return xml + f"{indent}</LinearLayout>\n\n"

    def _render_unknown(self, node: ComponentNode, indent: str) -> str:
        kind = node.type if isinstance(node, UnknownComponent) else type(node).__name__
        logger.debug("Rendering placeholder for unknown component", kind=kind)
        comment_safe = kind.replace("--", "- -")
        xml = f"{indent}<!-- Unknown component type: {comment_safe} -->\n"
        xml += f"{indent}<TextView\n"
        xml += _attr(indent, "layout_width", "wrap_content")
        xml += _attr(indent, "layout_height", "wrap_content")
        xml += _attr(indent, "text", f"Component: {kind}")
        return xml + f"{indent}/>\n\n"

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------

    def render_layout(self, screen: Screen, app_name: str) -> str:
        """Render a screen's layout document.

        Top-level components go inside a vertical root container. A screen
        without components gets one centered label showing the app name.
        """
        xml = XML_HEADER
        xml += f"<LinearLayout {ANDROID_NS}\n"
        xml += f'{INDENT}android:layout_width="match_parent"\n'
        xml += f'{INDENT}android:layout_height="match_parent"\n'
        xml += f'{INDENT}android:orientation="vertical">\n\n'

        if screen.components:
            for component in screen.components:
                xml += self._render(component, 1, depth=1)
        else:
            xml += f"{INDENT}<TextView\n"
            xml += _attr(INDENT, "layout_width", "wrap_content")
            xml += _attr(INDENT, "layout_height", "wrap_content")
            xml += _attr(INDENT, "layout_gravity", "center")
            xml += _attr(INDENT, "text", app_name)
            xml += _attr(INDENT, "layout_margin", "16dp")
            xml += f'{INDENT}{INDENT}android:textSize="24sp" />\n\n'

        return xml + "</LinearLayout>\n"

    def render_manifest(self, project: Project, names: dict[str, str] | None = None) -> str:
        """Render AndroidManifest.xml.

        The main screen is the single launcher activity; every other screen is
        declared as a plain activity.
        """
        names = names or activity_names(project)
        xml = XML_HEADER
        xml += f"<manifest {ANDROID_NS}\n"
        xml += f'{INDENT}package="{_xml(project.package)}"\n'
        xml += f'{INDENT}android:versionCode="1"\n'
        xml += f'{INDENT}android:versionName="{_xml(project.version)}">\n\n'

        xml += f"{INDENT}<application\n"
        xml += f'{INDENT * 2}android:allowBackup="true"\n'
        xml += f'{INDENT * 2}android:icon="@mipmap/ic_launcher"\n'
        xml += f'{INDENT * 2}android:label="@string/app_name"\n'
        xml += f'{INDENT * 2}android:supportsRtl="true"\n'
        xml += f'{INDENT * 2}android:theme="@style/AppTheme">\n\n'

        xml += f"{INDENT * 2}<activity\n"
        xml += f'{INDENT * 3}android:name=".MainActivity"\n'
        xml += f'{INDENT * 3}android:exported="true">\n'
        xml += f"{INDENT * 3}<intent-filter>\n"
        xml += f'{INDENT * 4}<action android:name="android.intent.action.MAIN" />\n'
        xml += f'{INDENT * 4}<category android:name="android.intent.category.LAUNCHER" />\n'
        xml += f"{INDENT * 3}</intent-filter>\n"
        xml += f"{INDENT * 2}</activity>\n\n"

        for screen_id, _ in project.secondary_screens:
            xml += f'{INDENT * 2}<activity android:name=".{names[screen_id]}" />\n\n'

        xml += f"{INDENT}</application>\n\n"
        return xml + "</manifest>\n"

    def render_strings(self, project: Project) -> str:
        """Render values/strings.xml: the app name and one entry per non-main screen."""
        xml = XML_HEADER + "<resources>\n"
        xml += f'{INDENT}<string name="app_name">{_xml(project.name)}</string>\n'
        for screen_id, screen in project.secondary_screens:
            xml += f'{INDENT}<string name="screen_{_xml(screen_id)}">{_xml(screen.name)}</string>\n'
        return xml + "</resources>\n"

    def render_colors(self) -> str:
        """Render values/colors.xml."""
        return f"""{XML_HEADER}<resources>
    <color name="colorPrimary">#4285F4</color>
    <color name="colorPrimaryDark">#3367D6</color>
    <color name="colorAccent">#F4B400</color>
    <color name="textColorPrimary">#212121</color>
    <color name="textColorSecondary">#757575</color>
</resources>
"""

    def render_styles(self) -> str:
        """Render values/styles.xml."""
        return f"""{XML_HEADER}<resources>
    <style name="AppTheme" parent="Theme.AppCompat.Light.DarkActionBar">
        <item name="colorPrimary">@color/colorPrimary</item>
        <item name="colorPrimaryDark">@color/colorPrimaryDark</item>
        <item name="colorAccent">@color/colorAccent</item>
    </style>
</resources>
"""

    def render_main_activity(self, project: Project) -> str:
        """Render MainActivity.java for the entry screen."""
        return self._activity_source(
            package=project.package,
            class_name="MainActivity",
            layout=layout_name(MAIN_SCREEN_ID),
            description=f"Main Activity for {project.name}",
            init_comment="Initialize app components",
        )

    def render_activity_stub(self, project: Project, screen_id: str, class_name: str | None = None) -> str:
        """Render the activity source for a non-main screen."""
        screen = project.screens[screen_id]
        return self._activity_source(
            package=project.package,
            class_name=class_name or activity_names(project)[screen_id],
            layout=layout_name(screen_id),
            description=f"Activity for {screen.name} screen",
            init_comment="Initialize screen components",
        )

    def _activity_source(
        self, package: str, class_name: str, layout: str, description: str, init_comment: str
    ) -> str:
        # Names are free text; "*/" would close the Javadoc early.
        description = description.replace("*/", "* /")
        return f"""package {package};

import android.os.Bundle;
import androidx.appcompat.app.AppCompatActivity;

/**
 * {description}
 * Generated by ZeroApp Builder
 */
public class {class_name} extends AppCompatActivity {{

    @Override
    protected void onCreate(Bundle savedInstanceState) {{
        super.onCreate(savedInstanceState);
        setContentView(R.layout.{layout});

        // {init_comment}
        initializeComponents();
    }}

    private void initializeComponents() {{
        // Component initialization and event handlers go here
    }}
}}
"""

    def render(self, project: Project) -> RenderedProject:
        """Render every document of a project.

        Args:
            project: Validated project description

        Returns:
            RenderedProject with the manifest, a layout per screen, value
            resources, the main activity and a stub per non-main screen
        """
        names = activity_names(project)
        return RenderedProject(
            manifest=self.render_manifest(project, names),
            layouts={
                screen_id: self.render_layout(screen, project.name)
                for screen_id, screen in project.screens.items()
            },
            strings=self.render_strings(project),
            colors=self.render_colors(),
            styles=self.render_styles(),
            main_activity=self.render_main_activity(project),
            activity_stubs={
                screen_id: self.render_activity_stub(project, screen_id, names[screen_id])
                for screen_id, _ in project.secondary_screens
            },
            activity_names=names,
        )
