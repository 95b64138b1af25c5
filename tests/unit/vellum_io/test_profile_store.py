# tests/unit/vellum_io/test_profile_store.py
# Unit tests for the JSON-backed profile store

import json

import pytest

from vellum.core.exceptions import JSONParsingError
from vellum.vellum_io.profile_store import STANDARD_FIELDS, Profile, ProfileStore


@pytest.fixture
def store(tmp_path):
    return ProfileStore(tmp_path / "profile.json")


class TestProfile:

    def test_standard_fields_always_present(self):
        profile = Profile({"github": "janedoe"})
        assert list(profile.to_dict())[: len(STANDARD_FIELDS)] == list(STANDARD_FIELDS)
        assert profile.to_dict()["github"] == "janedoe"

    @pytest.mark.parametrize(
        "name,stem",
        [("Jane Doe", "Jane_Doe"), ("", "resume"), ("  ", "resume"), ("Ana-María", "Ana-María")],
    )
    def test_file_stem(self, name, stem):
        assert Profile({"name": name}).file_stem == stem

    def test_is_empty(self):
        assert Profile().is_empty
        assert not Profile({"skills": "Go"}).is_empty

    def test_rejects_non_string_values(self):
        with pytest.raises(JSONParsingError, match="age"):
            Profile.from_dict({"name": "Jane", "age": 30})


class TestStore:

    def test_missing_file_loads_empty(self, store):
        assert store.load().is_empty

    # * Verify values come back verbatim
    def test_set_and_reload(self, store):
        store.set("experience", "Acme\n- led platform team")
        assert ProfileStore(store.path).load().fields["experience"] == "Acme\n- led platform team"

    def test_unset_standard_blanks(self, store):
        store.set("name", "Jane")
        store.unset("name")
        assert store.load().fields["name"] == ""

    def test_unset_extra_removes(self, store):
        store.set("website", "https://example.com")
        store.unset("website")
        assert "website" not in store.load().fields

    def test_unset_missing(self, store):
        with pytest.raises(KeyError):
            store.unset("nope")

    def test_clear(self, store):
        store.set("name", "Jane")
        assert store.clear().is_empty
        assert store.load().is_empty

    def test_import_file(self, tmp_path, store, sample_profile_data):
        source = tmp_path / "source.json"
        source.write_text(json.dumps(sample_profile_data))
        profile = store.import_file(source)
        assert profile.name == "Jane Doe"
        assert json.loads(store.path.read_text())["skills"] == "Python, Go, Kubernetes"

    def test_default_path_under_home(self, isolate_config):
        assert ProfileStore().path == isolate_config / ".vellum" / "profile.json"
