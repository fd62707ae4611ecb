import pytest

from sprout import naming


@pytest.mark.parametrize(
    "name",
    ["my-app", "app2", "my.app", "my_app", "@acme/widgets", "a" * naming.MAX_NAME_LENGTH],
)
def test_valid_names_have_no_errors(name: str) -> None:
    assert naming.name_errors(name) == []


@pytest.mark.parametrize(
    ("name", "fragment"),
    [
        ("", "greater than zero"),
        (".hidden", "start with a period"),
        ("_private", "start with an underscore"),
        (" padded ", "leading or trailing spaces"),
        ("node_modules", "blocked name"),
        ("http", "core module name"),
        ("a" * (naming.MAX_NAME_LENGTH + 1), "more than 214 characters"),
        ("MyApp", "capital letters"),
        ("wow!", "special characters"),
        ("my app", "URL-friendly characters"),
    ],
)
def test_invalid_names_report_the_broken_rule(name: str, fragment: str) -> None:
    errors = naming.name_errors(name)

    assert any(fragment in error for error in errors), errors


def test_dependency_clash_detects_exact_match_only() -> None:
    dependencies = ["react", "react-dom", "react-scripts"]

    assert naming.dependency_clash("react-dom", dependencies) == "react-dom"
    assert naming.dependency_clash("react-app", dependencies) is None
