from __future__ import annotations

from nk.release.manifest import set_manifest_version
from nk.release.semver import SemVer


def test_pyproject_project_table() -> None:
    text = '[build-system]\nrequires = ["hatchling"]\n\n[project]\nname = "widget"\nversion = "1.0.0"  # bumped by nk\n'
    assert set_manifest_version(text, SemVer(1, 1, 0)) == (
        '[build-system]\nrequires = ["hatchling"]\n\n[project]\nname = "widget"\nversion = "1.1.0"  # bumped by nk\n'
    )


def test_cargo_package_table_keeps_dependency_versions() -> None:
    text = (
        '[package]\nname = "widget"\nversion = "0.3.1"\n\n'
        '[dependencies]\nserde = { version = "1.0" }\n\n[dependencies.toml]\nversion = "0.8"\n'
    )
    updated = set_manifest_version(text, SemVer(0, 4, 0))
    assert updated is not None
    assert 'version = "0.4.0"' in updated
    assert 'serde = { version = "1.0" }' in updated
    assert 'version = "0.8"' in updated


def test_poetry_table_single_quotes_and_crlf() -> None:
    text = "[tool.poetry]\r\nname = 'widget'\r\nversion = '2.0.0'\r\n"
    assert set_manifest_version(text, SemVer(2, 0, 1)) == "[tool.poetry]\r\nname = 'widget'\r\nversion = '2.0.1'\r\n"


def test_version_outside_package_tables_is_ignored() -> None:
    text = '[tool.other]\nversion = "1.0.0"\n'
    assert set_manifest_version(text, SemVer(1, 0, 1)) is None


def test_dynamic_version_is_not_found() -> None:
    text = '[project]\nname = "widget"\ndynamic = ["version"]\n'
    assert set_manifest_version(text, SemVer(1, 0, 1)) is None


def test_array_table_ends_the_package_table() -> None:
    text = '[package]\nname = "widget"\n\n[[bin]]\nname = "w"\nversion = "9.9.9"\n'
    assert set_manifest_version(text, SemVer(1, 0, 0)) is None
