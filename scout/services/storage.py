"""
Key-value storage service.

Replaces the ambient browser localStorage of the original app with an
explicit interface that is injected into whatever needs it (favorites,
saved API keys). Three backends share the same get/set/remove contract:

- InMemoryKeyValueStore: process-local, used in tests
- JsonFileKeyValueStore: one JSON document on disk
- SupabaseKeyValueStore: a `key`/`value` table in Supabase

API keys are stored base64-obfuscated so they are not readable at a glance
in the storage file or table. This is a reversible encoding and explicitly
NOT a security control; anyone with access to the store can recover the keys.
"""

import base64
import binascii
import json
import logging
import threading
from pathlib import Path
from typing import Dict, Optional, Protocol, Union, cast

from supabase import Client

from scout.config import Settings

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Minimal unstructured key-value contract."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def remove(self, key: str) -> None:
        ...


class InMemoryKeyValueStore:
    """Dictionary-backed store. Contents are lost when the process exits."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileKeyValueStore:
    """
    Store persisted as a single JSON object on disk.

    Every write rewrites the file through a temp file + rename so a crash
    never leaves a half-written document.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._lock = threading.Lock()

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Could not read storage file {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.error(f"Storage file {self.path} does not contain a JSON object, ignoring it")
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def _dump(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
        tmp_path.replace(self.path)

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            data = self._load()
            data[key] = value
            self._dump(data)

    def remove(self, key: str) -> None:
        with self._lock:
            data = self._load()
            if key in data:
                del data[key]
                self._dump(data)


class SupabaseKeyValueStore:
    """
    Store backed by a Supabase table with `key` (primary key) and `value` columns.

    The table is expected to exist; this class never creates schemas.
    """

    def __init__(self, supabase_client: Client, table: str = "app_storage"):
        self.client = supabase_client
        self.table = table

    def get(self, key: str) -> Optional[str]:
        result = (
            self.client.table(self.table)
            .select("value")
            .eq("key", key)
            .execute()
        )
        if not result.data:
            return None
        row = cast(Dict[str, str], result.data[0])
        return row.get("value")

    def set(self, key: str, value: str) -> None:
        self.client.table(self.table).upsert({"key": key, "value": value}).execute()

    def remove(self, key: str) -> None:
        self.client.table(self.table).delete().eq("key", key).execute()


def _obfuscate(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def _deobfuscate(text: str) -> str:
    try:
        return base64.b64decode(text.encode("ascii"), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeError, ValueError):
        # Stored before obfuscation existed, or edited by hand
        return text


class StorageService:
    """Typed get/set/remove over a KeyValueStore, plus obfuscated API keys."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    def get_item(self, key: str) -> Optional[str]:
        return self.store.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.store.set(key, value)

    def remove_item(self, key: str) -> None:
        self.store.remove(key)

    def save_api_key(self, key_name: str, api_key: str) -> None:
        """Save an API key (obfuscated). A blank key removes the entry."""
        api_key = (api_key or "").strip()
        if not api_key:
            self.store.remove(key_name)
            logger.info(f"Removed stored API key '{key_name}'")
            return
        self.store.set(key_name, _obfuscate(api_key))
        logger.info(f"Saved API key '{key_name}'")

    def get_api_key(self, key_name: str) -> str:
        """Return the stored API key, or "" when none is saved."""
        value = self.store.get(key_name)
        return _deobfuscate(value) if value else ""


def build_storage_service(config: Settings) -> StorageService:
    """Create the StorageService for the configured STORAGE_BACKEND."""
    backend = config.STORAGE_BACKEND.lower()

    if backend == "memory":
        store: KeyValueStore = InMemoryKeyValueStore()
    elif backend == "supabase":
        from scout.db.client import get_supabase_client
        store = SupabaseKeyValueStore(get_supabase_client(), table=config.SUPABASE_STORAGE_TABLE)
    elif backend == "file":
        store = JsonFileKeyValueStore(config.STORAGE_FILE_PATH)
    else:
        raise ValueError(f"Unknown STORAGE_BACKEND '{config.STORAGE_BACKEND}'")

    logger.info(f"Storage backend initialized: {backend}")
    return StorageService(store)
