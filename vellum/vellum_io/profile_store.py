# vellum/vellum_io/profile_store.py
# Flat key/value profile record persisted as JSON & loaded back verbatim

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..core.exceptions import JSONParsingError
from .generics import read_json_safe, write_json_safe

# * Fields shown first & always present (extra keys are preserved after these)
STANDARD_FIELDS = ("name", "title", "summary", "experience", "skills", "education")


@dataclass
class Profile:
    fields: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for key in STANDARD_FIELDS:
            self.fields.setdefault(key, "")

    @property
    def name(self) -> str:
        return self.fields.get("name", "")

    # file stem for exports: profile name, else "resume"
    @property
    def file_stem(self) -> str:
        stem = "".join(c if c.isalnum() or c in "-_" else "_" for c in self.name.strip())
        return stem.strip("_") or "resume"

    @property
    def is_empty(self) -> bool:
        return not any(v.strip() for v in self.fields.values())

    def to_dict(self) -> dict[str, str]:
        ordered = {k: self.fields[k] for k in STANDARD_FIELDS}
        ordered.update({k: v for k, v in self.fields.items() if k not in ordered})
        return ordered

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Profile":
        bad = [k for k, v in data.items() if not isinstance(v, str)]
        if bad:
            raise JSONParsingError(
                f"Profile values must be strings; invalid keys: {', '.join(sorted(bad))}"
            )
        return cls(dict(data))


class ProfileStore:

    def __init__(self, path: Path | None = None):
        if path is None:
            from ..config.settings import settings_manager

            path = settings_manager.load().profile_path
        self.path = Path(path)

    def load(self) -> Profile:
        if not self.path.exists():
            return Profile()
        return Profile.from_dict(read_json_safe(self.path))

    def save(self, profile: Profile) -> None:
        write_json_safe(profile.to_dict(), self.path)

    def set(self, key: str, value: str) -> Profile:
        profile = self.load()
        profile.fields[key] = value
        self.save(profile)
        return profile

    # standard keys are blanked, extra keys removed
    def unset(self, key: str) -> Profile:
        profile = self.load()
        if key not in profile.fields:
            raise KeyError(key)
        if key in STANDARD_FIELDS:
            profile.fields[key] = ""
        else:
            del profile.fields[key]
        self.save(profile)
        return profile

    def clear(self) -> Profile:
        profile = Profile()
        self.save(profile)
        return profile

    # replace the stored profile w/ the contents of a JSON file
    def import_file(self, source: Path) -> Profile:
        profile = Profile.from_dict(read_json_safe(Path(source)))
        self.save(profile)
        return profile
