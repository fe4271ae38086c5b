"""
Upload job payloads.

An ``UploadJob`` describes one unit of deferred image work: the record
that will own the uploaded images, the staged files to push to the media
host and the options forwarded to it verbatim.  Jobs cross the Celery
boundary as plain dicts (``to_payload``/``from_payload``) carrying ids
and storage paths only, never model instances.

A job is immutable once enqueued.  Which of its files have already been
handled is not tracked on the job itself: a staged file that no longer
exists in temporary storage has been processed.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable

DEFAULT_MAX_ATTEMPTS = 3


class OwnerKind(str, Enum):
    ANNOUNCEMENT = "announcement"
    EVENT = "event"
    PROJECT = "project"
    USER_AVATAR = "user_avatar"

    @property
    def folder(self) -> str:
        """Folder used both for staging and on the media host."""
        return {
            OwnerKind.ANNOUNCEMENT: "announcements",
            OwnerKind.EVENT: "events",
            OwnerKind.PROJECT: "projects",
            OwnerKind.USER_AVATAR: "users",
        }[self]

    @property
    def is_single_image(self) -> bool:
        return self is OwnerKind.USER_AVATAR


@dataclass(frozen=True)
class TemporaryFile:
    """A staged upload: its storage path plus the client's filename."""
    path: str
    original_name: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"path": self.path, "original_name": self.original_name}

    @classmethod
    def from_value(cls, value: "TemporaryFile | dict | str") -> "TemporaryFile":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls(path=value)
        return cls(path=value["path"], original_name=value.get("original_name"))


@dataclass(frozen=True)
class UploadJob:
    owner_id: int
    owner_kind: OwnerKind
    temporary_files: tuple[TemporaryFile, ...]
    upload_options: dict[str, Any] = field(default_factory=dict)
    max_attempts: int = DEFAULT_MAX_ATTEMPTS

    def __post_init__(self):
        object.__setattr__(self, "owner_kind", OwnerKind(self.owner_kind))
        object.__setattr__(
            self,
            "temporary_files",
            tuple(TemporaryFile.from_value(f) for f in self.temporary_files),
        )
        if not self.temporary_files:
            raise ValueError("An upload job needs at least one temporary file.")
        if self.owner_kind.is_single_image and len(self.temporary_files) != 1:
            raise ValueError("Avatar upload jobs carry exactly one temporary file.")
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1.")

    @classmethod
    def create(
        cls,
        owner_id: int,
        owner_kind: OwnerKind | str,
        temporary_files: Iterable[TemporaryFile | dict | str],
        upload_options: dict[str, Any] | None = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> "UploadJob":
        return cls(
            owner_id=int(owner_id),
            owner_kind=OwnerKind(owner_kind),
            temporary_files=tuple(temporary_files),
            upload_options=dict(upload_options or {}),
            max_attempts=max_attempts,
        )

    @property
    def paths(self) -> list[str]:
        return [f.path for f in self.temporary_files]

    def describe(self) -> str:
        return f"{self.owner_kind.value} {self.owner_id}"

    def to_payload(self) -> dict[str, Any]:
        return {
            "owner_id": self.owner_id,
            "owner_kind": self.owner_kind.value,
            "temporary_files": [f.to_dict() for f in self.temporary_files],
            "upload_options": self.upload_options,
            "max_attempts": self.max_attempts,
        }

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "UploadJob":
        return cls.create(
            owner_id=payload["owner_id"],
            owner_kind=payload["owner_kind"],
            temporary_files=payload["temporary_files"],
            upload_options=payload.get("upload_options"),
            max_attempts=payload.get("max_attempts", DEFAULT_MAX_ATTEMPTS),
        )
