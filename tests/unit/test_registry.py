"""Unit tests for the profile registry and active marker."""

import pytest

from claude_profiles.core.errors import InvalidProfileName, ProfileNotFound
from claude_profiles.data.registry import validate_profile_name

from conftest import make_creds, write_creds


class TestListProfiles:
    def test_empty_when_root_missing(self, registry):
        assert registry.list_profiles() == []

    def test_sorted_and_filtered(self, registry, add_profile):
        add_profile("zeta", make_creds(refresh="rt-z"))
        add_profile("Alpha", make_creds(refresh="rt-a"))
        add_profile("beta", make_creds(refresh="rt-b"))
        write_creds(registry.snapshot_path("broken"), "{oops")
        (registry.root / "empty").mkdir()
        write_creds(registry.sandbox_home("beta") / ".claude" / ".credentials.json", make_creds())

        assert registry.list_profiles() == ["Alpha", "beta", "zeta"]

    def test_case_sensitive_names(self, registry, add_profile):
        add_profile("work", make_creds())
        with pytest.raises(ProfileNotFound):
            registry.get_record("Work")


class TestActiveMarker:
    def test_unset(self, registry):
        assert registry.get_active() is None

    def test_set_writes_name_without_newline(self, registry):
        registry.set_active("work")

        assert registry.marker_path.read_bytes() == b"work"
        assert registry.get_active() == "work"

    def test_trims_whitespace_and_bom(self, registry):
        registry.root.mkdir(parents=True)
        registry.marker_path.write_bytes(b"\xef\xbb\xbf  personal \r\n")

        assert registry.get_active() == "personal"

    def test_blank_marker_is_unset(self, registry):
        registry.root.mkdir(parents=True)
        registry.marker_path.write_text("   \n")

        assert registry.get_active() is None

    def test_clear_is_idempotent(self, registry):
        registry.set_active("a")
        registry.clear_active()
        registry.clear_active()

        assert registry.get_active() is None


class TestGetRecord:
    def test_not_found_lists_available(self, registry, add_profile):
        add_profile("a", make_creds())
        add_profile("b", make_creds())

        with pytest.raises(ProfileNotFound) as exc_info:
            registry.get_record("c")

        assert exc_info.value.available == ["a", "b"]
        assert "a, b" in exc_info.value.hint

    def test_malformed_snapshot_is_not_found(self, registry):
        write_creds(registry.snapshot_path("bad"), "nope")
        with pytest.raises(ProfileNotFound):
            registry.get_record("bad")

    def test_path_traversal_is_not_found(self, registry):
        with pytest.raises(ProfileNotFound):
            registry.get_record("../outside")


class TestSaveAndRemove:
    def test_save_snapshot_writes_snapshot_and_mirror(self, registry, tmp_path):
        src = write_creds(tmp_path / "live.json", make_creds())
        registry.save_snapshot("work", src)

        assert registry.snapshot_path("work").read_bytes() == src.read_bytes()
        assert registry.mirror_path("work").read_bytes() == src.read_bytes()

    def test_remove_active_clears_marker(self, registry, add_profile):
        add_profile("work", make_creds())
        registry.set_active("work")

        assert registry.remove("work") is True
        assert not registry.profile_dir("work").exists()
        assert registry.get_active() is None

    def test_remove_inactive_keeps_marker(self, registry, add_profile):
        add_profile("work", make_creds())
        add_profile("home", make_creds())
        registry.set_active("home")

        assert registry.remove("work") is False
        assert registry.get_active() == "home"

    def test_remove_purges_sandbox_on_request(self, registry, add_profile):
        add_profile("work", make_creds())
        registry.sandbox_home("work").mkdir(parents=True)

        registry.remove("work", purge_home=True)

        assert not registry.sandbox_home("work").exists()

    def test_remove_unknown(self, registry):
        with pytest.raises(ProfileNotFound):
            registry.remove("ghost")

    def test_remove_refuses_sandbox_home(self, registry, add_profile):
        add_profile("alice", make_creds())
        (registry.sandbox_home("alice") / ".claude").mkdir(parents=True)

        with pytest.raises(ProfileNotFound):
            registry.remove("alice-home")

        assert registry.sandbox_home("alice").is_dir()
        assert registry.snapshot_path("alice").exists()

    def test_remove_refuses_directory_without_snapshot(self, registry):
        (registry.root / "stray").mkdir(parents=True)

        with pytest.raises(ProfileNotFound):
            registry.remove("stray")

        assert (registry.root / "stray").is_dir()

    def test_remove_malformed_snapshot(self, registry):
        registry.profile_dir("broken").mkdir(parents=True)
        registry.snapshot_path("broken").write_text("{not json")

        assert registry.remove("broken") is False
        assert not registry.profile_dir("broken").exists()


@pytest.mark.parametrize("name", ["", ".hidden", "a/b", "..", "work-home", "sp ace"])
def test_invalid_names(name):
    with pytest.raises(InvalidProfileName):
        validate_profile_name(name)


@pytest.mark.parametrize("name", ["work", "Work_2", "a.b-c", "9lives"])
def test_valid_names(name):
    assert validate_profile_name(name) == name
