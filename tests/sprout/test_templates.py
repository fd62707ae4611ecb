from pathlib import PurePosixPath

import pytest

from sprout import templates


def _destinations(name: str) -> set[str]:
    return {item.relative_path.as_posix() for item in templates.template_files(name)}


def test_default_template_files() -> None:
    assert _destinations("default") == {".gitignore", "src/App.js", "src/index.js"}


def test_typescript_template_files() -> None:
    assert _destinations("typescript") == {
        ".gitignore",
        "tsconfig.json",
        "src/App.tsx",
        "src/index.tsx",
        "src/react-app-env.d.ts",
    }


def test_top_level_names_cover_generated_layout() -> None:
    top_levels = {item.top_level for item in templates.template_files("typescript")}

    assert top_levels == {".gitignore", "src", "tsconfig.json"}


def test_nested_gitignore_is_not_renamed() -> None:
    assert templates.destination_path(PurePosixPath("src/gitignore")) == PurePosixPath(
        "src/gitignore"
    )


@pytest.mark.parametrize("name", templates.TEMPLATE_NAMES)
def test_manifests_declare_react_dependencies(name: str) -> None:
    manifest = templates.load_manifest(name)

    assert {"react", "react-dom", "react-scripts"} <= set(manifest.package.dependencies)
    assert manifest.package.scripts["build"] == "react-scripts build"
    assert "browserslist" in (manifest.package.model_extra or {})


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, "default"),
        ("", "default"),
        ("cra-template", "default"),
        (" TypeScript ", "typescript"),
        ("cra-template-typescript", "typescript"),
    ],
)
def test_resolve_template_name(value: str | None, expected: str) -> None:
    assert templates.resolve_template_name(value) == expected


def test_unknown_template_lists_available_names() -> None:
    with pytest.raises(templates.TemplateError) as exc_info:
        templates.resolve_template_name("svelte")

    assert "default, typescript" in str(exc_info.value)
