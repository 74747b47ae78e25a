"""
Code Generation Service.

Turns a project description into a complete Android project source tree and
writes it through the storage backend.
"""

from __future__ import annotations

import time

from pydantic import BaseModel, Field

from ...core.logging import get_logger
from ...core.types import ServiceResult
from ...models.codegen import FileKind, GeneratedFile, GeneratedProject
from ...models.project import Project
from ...storage import StorageBackend
from ..renderer import UiTreeRenderer, layout_name

logger = get_logger(__name__)

AGP_VERSION = "7.0.4"
COMPILE_SDK = 31
MIN_SDK = 21
TARGET_SDK = 31


class CodegenInput(BaseModel):
    """Input for code generation."""

    project: Project
    output_directory: str = Field(description="Storage key prefix for the generated tree")


class CodegenService:
    """Service for generating Android project sources.

    Markup and activity sources come from the UI tree renderer; the Gradle
    build files are fixed templates parameterized by package and version.
    """

    def __init__(self, storage: StorageBackend, renderer: UiTreeRenderer | None = None) -> None:
        """Initialize the codegen service."""
        self.storage = storage
        self.renderer = renderer or UiTreeRenderer()

    def _create_root_build_gradle(self) -> str:
        """Generate the top-level build.gradle content."""
        return f"""// Top-level build file
buildscript {{
    repositories {{
        google()
        mavenCentral()
    }}
    dependencies {{
        classpath 'com.android.tools.build:gradle:{AGP_VERSION}'
    }}
}}

allprojects {{
    repositories {{
        google()
        mavenCentral()
    }}
}}

task clean(type: Delete) {{
    delete rootProject.buildDir
}}
"""

    def _create_app_build_gradle(self, project: Project) -> str:
        """Generate app/build.gradle content."""
        return f"""plugins {{
    id 'com.android.application'
}}

android {{
    compileSdkVersion {COMPILE_SDK}

    defaultConfig {{
        applicationId "{project.package}"
        minSdkVersion {MIN_SDK}
        targetSdkVersion {TARGET_SDK}
        versionCode 1
        versionName "{project.version}"
    }}

    buildTypes {{
        release {{
            minifyEnabled false
            proguardFiles getDefaultProguardFile('proguard-android-optimize.txt'), 'proguard-rules.pro'
        }}
    }}

    compileOptions {{
        sourceCompatibility JavaVersion.VERSION_1_8
        targetCompatibility JavaVersion.VERSION_1_8
    }}
}}

dependencies {{
    implementation 'androidx.appcompat:appcompat:1.4.0'
    implementation 'com.google.android.material:material:1.4.0'
    implementation 'androidx.constraintlayout:constraintlayout:2.1.2'
}}
"""

    def _create_settings_gradle(self) -> str:
        return 'include ":app"\n'

    def _create_gradle_properties(self) -> str:
        return "org.gradle.jvmargs=-Xmx2048m\nandroid.useAndroidX=true\nandroid.enableJetifier=true\n"

    def build_files(self, project: Project) -> list[GeneratedFile]:
        """Render every file of the project tree without writing anything.

        Args:
            project: Validated project description

        Returns:
            Generated files in write order, paths relative to the project root
        """
        rendered = self.renderer.render(project)
        src = "src/main"
        java_dir = f"{src}/java/{project.package_path}"

        files = [
            GeneratedFile(relative_path=f"{src}/AndroidManifest.xml", kind=FileKind.MANIFEST, content=rendered.manifest),
        ]
        for screen_id, layout in rendered.layouts.items():
            files.append(GeneratedFile(
                relative_path=f"{src}/res/layout/{layout_name(screen_id)}.xml",
                kind=FileKind.LAYOUT,
                content=layout,
            ))
        files.extend([
            GeneratedFile(relative_path=f"{src}/res/values/strings.xml", kind=FileKind.VALUES, content=rendered.strings),
            GeneratedFile(relative_path=f"{src}/res/values/colors.xml", kind=FileKind.VALUES, content=rendered.colors),
            GeneratedFile(relative_path=f"{src}/res/values/styles.xml", kind=FileKind.VALUES, content=rendered.styles),
            GeneratedFile(relative_path=f"{java_dir}/MainActivity.java", kind=FileKind.JAVA, content=rendered.main_activity),
        ])
        for screen_id, source in rendered.activity_stubs.items():
            class_name = rendered.activity_names[screen_id]
            files.append(GeneratedFile(
                relative_path=f"{java_dir}/{class_name}.java",
                kind=FileKind.JAVA,
                content=source,
            ))
        files.extend([
            GeneratedFile(relative_path="build.gradle", kind=FileKind.GRADLE, content=self._create_root_build_gradle()),
            GeneratedFile(relative_path="app/build.gradle", kind=FileKind.GRADLE, content=self._create_app_build_gradle(project)),
            GeneratedFile(relative_path="settings.gradle", kind=FileKind.GRADLE, content=self._create_settings_gradle()),
            GeneratedFile(relative_path="gradle.properties", kind=FileKind.GRADLE, content=self._create_gradle_properties()),
            GeneratedFile(
                relative_path="project.json",
                kind=FileKind.METADATA,
                content=project.model_dump_json(indent=2, by_alias=True),
            ),
        ])
        return files

    async def generate(self, input_data: CodegenInput) -> ServiceResult[GeneratedProject]:
        """Generate and store the Android project tree.

        Args:
            input_data: Codegen input

        Returns:
            ServiceResult containing the GeneratedProject
        """
        start_time = time.perf_counter()
        project = input_data.project
        output_dir = input_data.output_directory.rstrip("/")

        try:
            logger.info("Generating Android project", package=project.package, screens=len(project.screens))

            files = self.build_files(project)
            for generated in files:
                await self.storage.store_text(f"{output_dir}/{generated.relative_path}", generated.content)

            generated_project = GeneratedProject(
                project_name=project.name,
                package_name=project.package,
                output_directory=output_dir,
                files=files,
            )

            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.info("Android project generated", files=len(files), duration_ms=duration_ms)

            return ServiceResult.ok(generated_project, duration_ms=duration_ms)

        except OSError as e:
            logger.error("Code generation failed", error=str(e))
            return ServiceResult.fail(f"Failed to write project files: {e}")
