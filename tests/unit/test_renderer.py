"""Unit tests for the UI tree renderer."""

import pytest

from zeroapp.models import (
    ButtonComponent,
    ContainerComponent,
    Project,
    Screen,
    TextComponent,
    UnknownComponent,
)
from zeroapp.models.project import (
    ButtonProperties,
    ContainerProperties,
    ImageComponent,
    ImageProperties,
    InputComponent,
    InputProperties,
    ListComponent,
    NavigationComponent,
    TextProperties,
    WebViewComponent,
    WebViewProperties,
)
from zeroapp.services.renderer import UiTreeRenderer, activity_name, activity_names, layout_name


@pytest.fixture
def renderer():
    return UiTreeRenderer()


def text(content: str) -> TextComponent:
    return TextComponent(properties=TextProperties(content=content))


def button(content: str) -> ButtonComponent:
    return ButtonComponent(properties=ButtonProperties(content=content))


def top_level_tags(xml: str, indent_level: int) -> list[str]:
    """Element names opened at exactly the given indentation."""
    prefix = "    " * indent_level + "<"
    return [
        line[len(prefix):].split()[0].rstrip(">")
        for line in xml.splitlines()
        if line.startswith(prefix) and not line.startswith(prefix + "!") and not line.startswith(prefix + "/")
    ]


class TestComponentRendering:
    """Tests for per-kind component rendering."""

    @pytest.mark.parametrize(
        "node, tag",
        [
            (TextComponent(), "TextView"),
            (ButtonComponent(), "Button"),
            (ContainerComponent(children=[TextComponent()]), "LinearLayout"),
            (InputComponent(), "EditText"),
            (ImageComponent(), "ImageView"),
            (ListComponent(), "ListView"),
            (WebViewComponent(), "WebView"),
            (NavigationComponent(), "LinearLayout"),
        ],
    )
    def test_defining_tag_once_at_top_level(self, renderer, node, tag):
        """Test that every kind emits its element exactly once at its own level."""
        xml = renderer.render_component(node, 1)
        assert top_level_tags(xml, 1) == [tag]

    def test_text_without_properties(self, renderer):
        """Test the text fallback content and absence of optional attributes."""
        xml = renderer.render_component(TextComponent(), 1)

        assert xml == (
            "    <TextView\n"
            '        android:layout_width="wrap_content"\n'
            '        android:layout_height="wrap_content"\n'
            '        android:text="Text"\n'
            "    />\n\n"
        )
        for attribute in ("textColor", "textSize", "gravity", "layout_margin", "textStyle"):
            assert attribute not in xml

    def test_text_with_properties(self, renderer):
        """Test that present text properties become attributes."""
        node = TextComponent(properties=TextProperties(
            content="Hello",
            text_align="center",
            font_size="20sp",
            font_weight="bold",
            color="#ff0000",
            margin="4dp",
        ))
        xml = renderer.render_component(node, 0)

        assert 'android:text="Hello"' in xml
        assert 'android:gravity="center"' in xml
        assert 'android:textSize="20sp"' in xml
        assert 'android:textStyle="bold"' in xml
        assert 'android:textColor="#ff0000"' in xml
        assert 'android:layout_margin="4dp"' in xml

    def test_font_weight_other_than_bold_ignored(self, renderer):
        """Test that only bold produces a text style."""
        node = TextComponent(properties=TextProperties(font_weight="light"))
        assert "textStyle" not in renderer.render_component(node)

    def test_button(self, renderer):
        """Test button fallback text and colors."""
        assert 'android:text="Button"' in renderer.render_component(ButtonComponent())

        node = ButtonComponent(properties=ButtonProperties(content="Go", background_color="#000", color="#fff"))
        xml = renderer.render_component(node)
        assert 'android:text="Go"' in xml
        assert 'android:backgroundTint="#000"' in xml
        assert 'android:textColor="#fff"' in xml

    def test_container_children_follow_each_other(self, renderer):
        """Test that children render in order, one level deeper than the container."""
        hi, go = text("Hi"), button("Go")
        container = ContainerComponent(children=[hi, go])

        xml = renderer.render_component(container, 1)
        expected_body = renderer.render_component(hi, 2) + renderer.render_component(go, 2)

        assert expected_body in xml
        assert expected_body.startswith("        <TextView")
        assert xml.endswith("    </LinearLayout>\n\n")

    @pytest.mark.parametrize(
        "layout, orientation",
        [("horizontal", "horizontal"), ("vertical", "vertical"), ("grid", "vertical"), (None, "vertical")],
    )
    def test_container_orientation(self, renderer, layout, orientation):
        """Test that only 'horizontal' yields a horizontal container."""
        node = ContainerComponent(properties=ContainerProperties(layout=layout))
        assert f'android:orientation="{orientation}"' in renderer.render_component(node)

    def test_container_styling(self, renderer):
        """Test container padding, background and margin."""
        node = ContainerComponent(properties=ContainerProperties(padding="8dp", background_color="#eee", margin="2dp"))
        xml = renderer.render_component(node)

        assert 'android:padding="8dp"' in xml
        assert 'android:background="#eee"' in xml
        assert 'android:layout_margin="2dp"' in xml

    @pytest.mark.parametrize(
        "input_type, expected",
        [
            ("email", "textEmailAddress"),
            ("password", "textPassword"),
            ("number", "number"),
            ("phone", "phone"),
            ("text", "text"),
            ("date", "text"),
            (None, "text"),
        ],
    )
    def test_input_types(self, renderer, input_type, expected):
        """Test the input type mapping and its fallback."""
        node = InputComponent(properties=InputProperties(input_type=input_type))
        assert f'android:inputType="{expected}"' in renderer.render_component(node)

    def test_input_hint(self, renderer):
        """Test the placeholder hint and its fallback."""
        assert 'android:hint="Enter text"' in renderer.render_component(InputComponent())
        node = InputComponent(properties=InputProperties(placeholder="Email"))
        assert 'android:hint="Email"' in renderer.render_component(node)

    def test_image_defaults(self, renderer):
        """Test the image placeholder source and description fallback."""
        xml = renderer.render_component(ImageComponent())

        assert 'android:src="@drawable/placeholder"' in xml
        assert 'android:contentDescription="Image"' in xml
        assert 'android:layout_width="wrap_content"' in xml

    def test_image_size_overrides(self, renderer):
        """Test that explicit sizes replace the defaults instead of duplicating them."""
        node = ImageComponent(properties=ImageProperties(alt="Logo", width="100dp", height="50dp"))
        xml = renderer.render_component(node)

        assert xml.count("android:layout_width=") == 1
        assert xml.count("android:layout_height=") == 1
        assert 'android:layout_width="100dp"' in xml
        assert 'android:layout_height="50dp"' in xml
        assert 'android:contentDescription="Logo"' in xml

    def test_webview_ignores_url(self, renderer):
        """Test that the webview fills its parent and does not render the url."""
        node = WebViewComponent(properties=WebViewProperties(url="https://example.com"))
        xml = renderer.render_component(node)

        assert 'android:layout_height="match_parent"' in xml
        assert "example.com" not in xml

    def test_navigation_default_items(self, renderer):
        """Test the default Home/About/Contact navigation bar."""
        xml = renderer.render_component(NavigationComponent(), 1)

        assert top_level_tags(xml, 2) == ["Button", "Button", "Button"]
        for index, label in enumerate(["Home", "About", "Contact"]):
            assert f'android:text="{label}"' in xml
            assert f'android:id="@+id/nav_{index}"' in xml
        assert 'android:orientation="horizontal"' in xml

    def test_navigation_custom_items(self, renderer):
        """Test navigation buttons from explicit items."""
        node = NavigationComponent.model_validate({"properties": {"items": [{"label": "Shop"}, "Cart"]}})
        xml = renderer.render_component(node, 1)

        assert top_level_tags(xml, 2) == ["Button", "Button"]
        assert 'android:id="@+id/nav_1"' in xml
        assert 'android:text="Cart"' in xml
        assert "nav_2" not in xml

    def test_unknown_kind_placeholder(self, renderer):
        """Test that an unknown kind renders a comment and a placeholder label."""
        xml = renderer.render_component(UnknownComponent(type="carousel"), 1)

        assert "<!-- Unknown component type: carousel -->" in xml
        assert 'android:text="Component: carousel"' in xml
        assert top_level_tags(xml, 1) == ["TextView"]

    def test_unknown_kind_comment_stays_well_formed(self, renderer):
        """Test that a double hyphen cannot terminate the comment early."""
        xml = renderer.render_component(UnknownComponent(type="a--b"))
        comment = xml.splitlines()[0]

        assert comment.count("--") == 2

    def test_values_are_escaped(self, renderer):
        """Test XML escaping of attribute values."""
        xml = renderer.render_component(text('Say "hi" & <go>'))
        assert 'android:text="Say &quot;hi&quot; &amp; &lt;go&gt;"' in xml


class TestDepthGuard:
    """Tests for the container nesting limit."""

    def _nested(self, depth: int) -> ContainerComponent:
        node = ContainerComponent(children=[text("leaf")])
        for _ in range(depth - 1):
            node = ContainerComponent(children=[node])
        return node

    def test_within_limit_renders_everything(self):
        """Test that a tree at the limit renders fully."""
        renderer = UiTreeRenderer(max_depth=4)
        xml = renderer.render_component(self._nested(3))

        assert xml.count("<LinearLayout") == 3
        assert 'android:text="leaf"' in xml
        assert "Nesting limit" not in xml

    def test_beyond_limit_truncates(self):
        """Test that children past the limit are replaced by a marker."""
        renderer = UiTreeRenderer(max_depth=3)
        xml = renderer.render_component(self._nested(5))

        assert xml.count("<LinearLayout") == 3
        assert xml.count("</LinearLayout>") == 3
        assert "Nesting limit (3) reached" in xml
        assert "leaf" not in xml


class TestDocuments:
    """Tests for whole-document rendering."""

    def test_layout_wraps_components(self, renderer, sample_project):
        """Test the vertical root container around top-level components."""
        layout = renderer.render_layout(sample_project.main_screen, sample_project.name)

        assert layout.startswith('<?xml version="1.0" encoding="utf-8"?>\n<LinearLayout')
        assert layout.endswith("</LinearLayout>\n")
        assert top_level_tags(layout, 1) == ["TextView", "LinearLayout", "LinearLayout"]

    def test_empty_screen_default_label(self, renderer):
        """Test that an empty screen shows one centered label with the app name."""
        layout = renderer.render_layout(Screen(name="About"), "My Shop")

        assert layout.count("<TextView") == 1
        assert 'android:text="My Shop"' in layout
        assert 'android:layout_gravity="center"' in layout

    def test_manifest_activities(self, renderer, sample_project):
        """Test the launcher entry and one plain activity per other screen."""
        manifest = renderer.render_manifest(sample_project)

        assert manifest.count("android.intent.action.MAIN") == 1
        assert manifest.count("android.intent.category.LAUNCHER") == 1
        assert manifest.count('android:name=".MainActivity"') == 1
        assert manifest.count('<activity android:name=".AboutActivity" />') == 1
        assert 'package="com.example.myshop"' in manifest
        assert 'android:versionName="1.2.0"' in manifest

    def test_strings(self, renderer, sample_project):
        """Test the app name entry and one entry per non-main screen."""
        strings = renderer.render_strings(sample_project)

        assert '<string name="app_name">My Shop</string>' in strings
        assert '<string name="screen_about">About</string>' in strings
        assert "screen_mainScreen" not in strings

    def test_activity_stub(self, renderer, sample_project):
        """Test that a stub references its screen's layout."""
        stub = renderer.render_activity_stub(sample_project, "about")

        assert "package com.example.myshop;" in stub
        assert "public class AboutActivity extends AppCompatActivity" in stub
        assert "setContentView(R.layout.activity_about);" in stub

    def test_render_collects_documents(self, renderer, sample_project):
        """Test the full render result."""
        rendered = renderer.render(sample_project)

        assert set(rendered.layouts) == {"mainScreen", "about"}
        assert set(rendered.activity_stubs) == {"about"}
        assert "setContentView(R.layout.activity_main);" in rendered.main_activity
        assert "colorPrimary" in rendered.colors
        assert "AppTheme" in rendered.styles

    def test_render_is_deterministic(self, sample_project_data):
        """Test that rendering identical projects twice gives identical output."""
        first = UiTreeRenderer().render(Project.model_validate(sample_project_data))
        second = UiTreeRenderer().render(Project.model_validate(sample_project_data))

        assert first.model_dump() == second.model_dump()


class TestNaming:
    """Tests for layout and activity naming."""

    def test_layout_names(self):
        assert layout_name("mainScreen") == "activity_main"
        assert layout_name("about") == "activity_about"

    @pytest.mark.parametrize(
        "screen_id, name, expected",
        [
            ("about", "About", "AboutActivity"),
            ("contact", "Contact Us!", "ContactUsActivity"),
            ("faq", "???", "faqActivity"),
            ("mainScreen", "Home", "MainActivity"),
        ],
    )
    def test_activity_names(self, screen_id, name, expected):
        assert activity_name(screen_id, Screen(name=name)) == expected

    def test_colliding_activity_names_get_suffixes(self, renderer, sample_project_data):
        """Test that screens stripping to the same class name stay distinct."""
        sample_project_data["screens"]["about2"] = {"name": "About!"}
        sample_project_data["screens"]["main"] = {"name": "Main"}
        project = Project.model_validate(sample_project_data)

        names = activity_names(project)
        assert names == {
            "mainScreen": "MainActivity",
            "about": "AboutActivity",
            "about2": "About2Activity",
            "main": "Main2Activity",
        }

        manifest = renderer.render_manifest(project)
        for class_name in names.values():
            assert manifest.count(f'android:name=".{class_name}"') == 1

        rendered = renderer.render(project)
        assert rendered.activity_names == names
        assert "public class About2Activity " in rendered.activity_stubs["about2"]

    def test_activity_comment_cannot_close_early(self, renderer, sample_project_data):
        """Test that a screen name cannot terminate the Javadoc block."""
        sample_project_data["screens"]["about"]["name"] = "About */ class X {"
        project = Project.model_validate(sample_project_data)

        stub = renderer.render_activity_stub(project, "about")
        header, _, body = stub.partition("*/")

        assert "About * / class X {" in header
        assert "*/" not in body
