from __future__ import annotations

import json
from pathlib import Path

import pytest

from headerlint.identity import IdentityError, RepositoryIdentity, resolve_repository


def test_parse_slug() -> None:
    identity = RepositoryIdentity.parse(" zendframework/zend-expressive ")

    assert identity.owner == "zendframework"
    assert identity.name == "zend-expressive"
    assert str(identity) == "zendframework/zend-expressive"


@pytest.mark.parametrize("value", ["", "noslash", "a/b/c", "/name", "owner/"])
def test_parse_rejects_malformed_slugs(value: str) -> None:
    with pytest.raises(IdentityError):
        RepositoryIdentity.parse(value)


def test_resolve_from_composer(tmp_path: Path) -> None:
    (tmp_path / "composer.json").write_text(json.dumps({"name": "foo/bar"}), encoding="utf-8")

    assert resolve_repository(tmp_path).slug == "foo/bar"


def test_override_wins_over_composer(tmp_path: Path) -> None:
    (tmp_path / "composer.json").write_text(json.dumps({"name": "foo/bar"}), encoding="utf-8")

    assert resolve_repository(tmp_path, "acme/widgets").slug == "acme/widgets"


def test_missing_composer_file(tmp_path: Path) -> None:
    with pytest.raises(IdentityError, match="not found"):
        resolve_repository(tmp_path)


def test_invalid_composer_json(tmp_path: Path) -> None:
    (tmp_path / "composer.json").write_text("{not json", encoding="utf-8")

    with pytest.raises(IdentityError, match="Failed to read"):
        resolve_repository(tmp_path)


def test_composer_without_name(tmp_path: Path) -> None:
    (tmp_path / "composer.json").write_text(json.dumps({"type": "library"}), encoding="utf-8")

    with pytest.raises(IdentityError, match="package name"):
        resolve_repository(tmp_path)
