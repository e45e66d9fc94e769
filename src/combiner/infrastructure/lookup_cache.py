import json
import logging
import os
import shutil
import time
from hashlib import sha1
from pathlib import Path
from typing import Any


DEFAULT_LOOKUP_DATA_VERSION = "1"
_MANIFEST_FILENAME = "manifest.json"

logger = logging.getLogger(__name__)


class FileLookupCache:
    """On-disk JSON cache for generated icons and translations.

    Entries live in one file per key. Changing the data version wipes the
    directory so stale glyphs from older prompts are never served.
    """

    def __init__(
        self,
        root_dir: str | Path,
        *,
        ttl_seconds: int | None = 604800,
        data_version: str | None = None,
    ) -> None:
        self.root_dir = Path(root_dir)
        self.ttl_seconds = ttl_seconds
        configured = str(data_version or os.getenv("COMBINER_LOOKUP_DATA_VERSION", DEFAULT_LOOKUP_DATA_VERSION)).strip()
        self.data_version = configured or DEFAULT_LOOKUP_DATA_VERSION
        self._manifest_path = self.root_dir / _MANIFEST_FILENAME
        self._prepare()

    def _prepare(self) -> None:
        if self.root_dir.exists() and self._manifest_version() == self.data_version:
            return
        if self.root_dir.exists():
            logger.info("Lookup cache version changed; clearing", extra={"root_dir": str(self.root_dir)})
            shutil.rmtree(self.root_dir, ignore_errors=True)
        self.root_dir.mkdir(parents=True, exist_ok=True)
        self._write_json(self._manifest_path, {"data_version": self.data_version, "updated_at": int(time.time())})

    def _manifest_version(self) -> str | None:
        envelope = self._read_json(self._manifest_path)
        if envelope is None:
            return None
        value = str(envelope.get("data_version", "")).strip()
        return value or None

    @staticmethod
    def _read_json(path: Path) -> dict[str, Any] | None:
        if not path.exists():
            return None
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            return None
        return payload if isinstance(payload, dict) else None

    @staticmethod
    def _write_json(path: Path, payload: dict[str, Any]) -> None:
        tmp_path = path.with_suffix(".tmp")
        tmp_path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
        os.replace(tmp_path, path)

    def _entry_path(self, key: str) -> Path:
        return self.root_dir / f"{sha1(key.encode('utf-8')).hexdigest()}.json"

    def get(self, key: str) -> dict[str, Any] | None:
        envelope = self._read_json(self._entry_path(key))
        if envelope is None or not isinstance(envelope.get("payload"), dict):
            return None
        if self.ttl_seconds is not None:
            try:
                age = int(time.time()) - int(envelope.get("stored_at"))
            except (TypeError, ValueError):
                return None
            if age > max(0, int(self.ttl_seconds)):
                return None
        return envelope["payload"]

    def set(self, key: str, payload: dict[str, Any]) -> None:
        self._write_json(self._entry_path(key), {"stored_at": int(time.time()), "payload": payload})
