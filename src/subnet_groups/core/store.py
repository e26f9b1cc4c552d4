"""Local export store: named lists of strings, addressed by reference tokens."""

import contextlib
import json
import logging
import os
import re
import tempfile
import uuid
from collections.abc import Sequence
from pathlib import Path

from pydantic import BaseModel, Field

from subnet_groups.errors import ExportNotFoundError

logger = logging.getLogger(__name__)

_REFERENCE = re.compile(r"^\$\{ImportValue:(?P<key>[^:}]+):(?P<index>\d+)\}$")


def make_reference(key: str, index: int) -> str:
    """Reference token for the *index*'th value published under *key*."""
    return f"${{ImportValue:{key}:{index}}}"


class ExportStore(BaseModel):
    """String-keyed store of ordered string lists.

    Attributes:
        version: Store file format version
        lineage: Identity of this store across saves
        serial: Incremented on every save through the CLI
        exports: Mapping of export keys to their published values
    """

    version: int = 1
    lineage: str = Field(default_factory=lambda: str(uuid.uuid4()))
    serial: int = 0
    exports: dict[str, list[str]] = Field(default_factory=dict)

    def publish(self, key: str, values: Sequence[str]) -> list[str]:
        """Publish *values* under *key* and return one reference per value.

        Publishing an existing key replaces its values.
        """
        if key in self.exports:
            logger.debug("Overwriting export %s", key)
        self.exports[key] = list(values)
        return [make_reference(key, i) for i in range(len(values))]

    def resolve(self, value: str) -> str:
        """Return the literal string behind a reference; other strings pass through."""
        match = _REFERENCE.match(value)
        if match is None:
            return value
        key, index = match["key"], int(match["index"])
        try:
            values = self.exports[key]
        except KeyError as e:
            raise ExportNotFoundError(key) from e
        if index >= len(values):
            raise ExportNotFoundError(key, index)
        return values[index]

    def resolve_all(self, values: Sequence[str] | None) -> list[str] | None:
        if values is None:
            return None
        return [self.resolve(v) for v in values]

    def save(self, path: Path) -> None:
        """Save the store to a JSON file.

        - Writes atomically (temp file + rename)
        - Writes a `.backup` copy of the previous file when overwriting
        """
        path.parent.mkdir(parents=True, exist_ok=True)

        backup_path = Path(str(path) + ".backup")
        with contextlib.suppress(FileNotFoundError):
            backup_path.write_bytes(path.read_bytes())

        content = json.dumps(self.model_dump(mode="json"), indent=2, sort_keys=True) + "\n"

        fd, tmp_path = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
        tmp_file = Path(tmp_path)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            tmp_file.replace(path)
        finally:
            with contextlib.suppress(FileNotFoundError):
                tmp_file.unlink()
        logger.debug("Export store saved: serial=%d path=%s", self.serial, path)

    @classmethod
    def load(cls, path: Path) -> "ExportStore":
        store = cls.model_validate_json(path.read_text(encoding="utf-8"))
        logger.debug("Export store loaded from %s (%d exports)", path, len(store.exports))
        return store

    @classmethod
    def load_or_create(cls, path: Path) -> "ExportStore":
        """Load an existing store or create an empty one."""
        if path.exists():
            return cls.load(path)
        logger.debug("Created new export store for %s", path)
        return cls()
