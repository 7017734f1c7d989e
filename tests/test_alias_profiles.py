"""Coverage for loading game system alias profiles."""

from __future__ import annotations

from pathlib import Path

import pytest

from tabletop.profiles import AliasProfile, AliasRule, ProfileLoadError, load_alias_profiles


def test_default_profiles_cover_known_systems() -> None:
    profiles = load_alias_profiles()
    assert {"swn", "thirteenth_age", "dragonbane"} <= set(profiles)
    swn = profiles["swn"]
    assert swn.name == "Stars Without Number"
    assert swn.adventurer == AliasRule(prefix_length=10, always_add_number=False)
    assert swn.monster == AliasRule(prefix_length=5, always_add_number=True)
    assert swn.rule_for("monster") is swn.monster


def test_missing_sections_fall_back_to_defaults(tmp_path: Path) -> None:
    path = tmp_path / "profiles.yaml"
    path.write_text("Homebrew:\n  monster:\n    prefix_length: 3\n", encoding="utf-8")

    profiles = load_alias_profiles(path)
    homebrew = profiles["homebrew"]
    assert homebrew.name == "Homebrew"
    assert homebrew.adventurer == AliasRule(prefix_length=10, always_add_number=False)
    assert homebrew.monster == AliasRule(prefix_length=3, always_add_number=True)


@pytest.mark.parametrize(
    "text",
    [
        "swn:\n  monster:\n    prefix_length: 11\n",
        "swn:\n  monster:\n    prefix_length: many\n",
        "swn:\n  adventurer:\n    always_add_number: sometimes\n",
        "swn: [1, 2]\n",
        "- swn\n",
        "swn: {adventurer: [}\n",
    ],
)
def test_invalid_profiles_raise_with_source(tmp_path: Path, text: str) -> None:
    path = tmp_path / "profiles.yaml"
    path.write_text(text, encoding="utf-8")

    with pytest.raises(ProfileLoadError) as excinfo:
        load_alias_profiles(path)
    assert excinfo.value.path == path
    assert str(path) in str(excinfo.value)


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ProfileLoadError):
        load_alias_profiles(tmp_path / "absent.yaml")


def test_rule_for_rejects_unknown_kind() -> None:
    profile = AliasProfile(key="swn", name="Stars Without Number")
    with pytest.raises(ValueError):
        profile.rule_for("vehicle")
