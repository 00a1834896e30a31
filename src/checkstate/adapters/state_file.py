"""JSON file implementation of the state repository port."""

from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from checkstate.domain.model import StoredRecord
from checkstate.domain.ports.persistence import StateRepository

log = logging.getLogger(__name__)

STATE_FILE_VERSION: Final = 1
STATE_FILENAME: Final = "synthetic_checks.json"
DATA_DIR_ENV: Final = "CHECKSTATE_DATA_DIR"


class StateFileError(RuntimeError):
    """Raised when the state file cannot be read or does not validate."""


def default_state_path() -> Path:
    """Where ``checkstate refresh`` keeps its state when no path is given.

    ``CHECKSTATE_DATA_DIR`` wins; otherwise the XDG data home is used.
    """

    data_dir = os.getenv(DATA_DIR_ENV)
    if not data_dir:
        xdg_home = os.getenv("XDG_DATA_HOME")
        base = Path(xdg_home) if xdg_home else Path.home() / ".local" / "share"
        data_dir = str(base / "checkstate")
    return Path(data_dir).expanduser().resolve() / STATE_FILENAME


class CheckEntry(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    origin: str
    dataset: str
    synthetic_check_yaml: str

    @classmethod
    def from_record(cls, record: StoredRecord) -> CheckEntry:
        return cls(
            origin=record.origin,
            dataset=record.dataset,
            synthetic_check_yaml=record.document,
        )

    def to_record(self) -> StoredRecord:
        return StoredRecord(
            origin=self.origin,
            dataset=self.dataset,
            document=self.synthetic_check_yaml,
        )


class StateFile(BaseModel):
    model_config = ConfigDict(extra="forbid")

    version: int = STATE_FILE_VERSION
    checks: list[CheckEntry] = Field(default_factory=list)


@dataclass(slots=True)
class JsonStateRepository:
    """Stored records kept in a single JSON document on disk.

    Every ``persist`` rewrites the whole file through a temporary file and an
    atomic rename, so readers see either the old or the new state.
    """

    path: Path

    def load(self) -> list[StoredRecord]:
        return [entry.to_record() for entry in self._read().checks]

    def persist(self, record: StoredRecord) -> None:
        state = self._read()
        entry = CheckEntry.from_record(record)
        for index, existing in enumerate(state.checks):
            if (existing.origin, existing.dataset) == (record.origin, record.dataset):
                state.checks[index] = entry
                break
        else:
            state.checks.append(entry)
        self._write(state)
        log.debug("Persisted origin=%s dataset=%s to %s", record.origin, record.dataset, self.path)

    def _read(self) -> StateFile:
        if not self.path.exists():
            return StateFile()
        try:
            state = StateFile.model_validate_json(self.path.read_bytes())
        except OSError as exc:
            raise StateFileError(f"Cannot read state file {self.path}: {exc}") from exc
        except ValidationError as exc:
            raise StateFileError(f"Invalid state file {self.path}: {exc}") from exc
        if state.version != STATE_FILE_VERSION:
            msg = f"Unsupported state file version {state.version} in {self.path}"
            raise StateFileError(msg)
        return state

    def _write(self, state: StateFile) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = state.model_dump_json(indent=2)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.")
        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
                handle.write("\n")
            tmp_path.replace(self.path)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise


if TYPE_CHECKING:
    _repository_check: StateRepository = JsonStateRepository(Path())
