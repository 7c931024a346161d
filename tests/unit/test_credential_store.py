"""Unit tests for credential file access."""

import json

import pytest

from claude_profiles.core.errors import MalformedCredentialFile
from claude_profiles.core.models import CredentialRecord

from conftest import make_creds, write_creds


class TestLoadAndRead:
    def test_missing_file_reads_absent(self, store, tmp_path):
        assert store.read(tmp_path / "nope.json") is None
        assert store.load(tmp_path / "nope.json") is None

    def test_malformed_json(self, store, tmp_path):
        path = write_creds(tmp_path / "creds.json", "{not json")

        assert store.read(path) is None
        with pytest.raises(MalformedCredentialFile):
            store.load(path)

    def test_non_object_is_malformed(self, store, tmp_path):
        path = write_creds(tmp_path / "creds.json", [1, 2])

        assert store.read(path) is None
        with pytest.raises(MalformedCredentialFile, match="JSON object"):
            store.load(path)

    def test_byte_order_mark_tolerated(self, store, tmp_path):
        path = tmp_path / "creds.json"
        path.write_bytes(b"\xef\xbb\xbf" + json.dumps(make_creds()).encode())

        assert store.read(path).refresh_token == "rt-alice-0001"


class TestCopy:
    def test_byte_exact_overwrite(self, store, tmp_path):
        src = tmp_path / "src.json"
        src.write_bytes(b'{"claudeAiOauth": {"refreshToken": "x"},   "odd":  1}\n')
        dst = write_creds(tmp_path / "nested" / "dst.json", make_creds())

        store.copy(src, dst)
        store.copy(src, dst)

        assert dst.read_bytes() == src.read_bytes()
        assert not dst.with_suffix(".json.tmp").exists()

    def test_missing_source_raises(self, store, tmp_path):
        with pytest.raises(FileNotFoundError):
            store.copy(tmp_path / "missing.json", tmp_path / "dst.json")
        assert not (tmp_path / "dst.json").exists()


class TestFingerprint:
    def test_changes_with_content(self, store, tmp_path):
        path = write_creds(tmp_path / "creds.json", make_creds(access="one"))
        first = store.fingerprint(path)
        write_creds(path, make_creds(access="two"))

        assert len(first) == 12
        assert store.fingerprint(path) != first

    def test_missing_file(self, store, tmp_path):
        assert store.fingerprint(tmp_path / "none.json") is None


def test_write_keeps_unknown_fields(store, tmp_path):
    data = make_creds(organizationUuid="org-9")
    record = CredentialRecord.from_dict(data)
    record.access_token = "fresh"

    path = tmp_path / "out.json"
    store.write(path, record)

    written = json.loads(path.read_text())
    assert written["claudeAiOauth"]["accessToken"] == "fresh"
    assert written["claudeAiOauth"]["organizationUuid"] == "org-9"
    assert written["claudeAiOauth"]["subscriptionType"] == "max"


def test_extract_expiry(store):
    assert store.extract_expiry(None) is None
    assert store.extract_expiry(CredentialRecord(expires_at=42)) == 42
