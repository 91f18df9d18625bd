"""Document-per-directory storage backend.

Each backend instance owns one directory and keeps every key of that
storage unit in a single document, `<dir>/db.json` by default (the suffix
follows the serializer). Every write re-reads and rewrites the whole
document, replacing it atomically by writing a temporary file then
renaming it.
"""
from __future__ import annotations
import os
import logging
from pathlib import Path
from typing import Any, Dict, Iterable

from .base import StorageBackend
from .serializer import JSONSerializer, Serializer

logger = logging.getLogger(__name__)

DOCUMENT_NAME = "db"


class JsonFileBackend(StorageBackend):
    def __init__(self, path: str | Path, serializer: Serializer | None = None) -> None:
        self.path = Path(path)
        self.serializer = serializer or JSONSerializer()
        self.path.mkdir(parents=True, exist_ok=True)
        if not self.document_path.exists():
            logger.debug("Creating empty document %s", self.document_path)
            self._write_document({})

    @property
    def document_path(self) -> Path:
        return self.path / f"{DOCUMENT_NAME}{self.serializer.extension}"

    def _read_document(self) -> Dict[str, Any]:
        try:
            with open(self.document_path, "rb") as f:
                data = f.read()
        except FileNotFoundError:
            return {}
        if not data:
            return {}
        doc = self.serializer.load(data)
        if not isinstance(doc, dict):
            raise ValueError(f"Document {self.document_path} does not hold a mapping")
        return doc

    def _write_document(self, doc: Dict[str, Any]) -> None:
        path = self.document_path
        tmp = path.with_suffix(path.suffix + ".tmp")
        payload = self.serializer.dump(doc)
        with open(tmp, "wb") as f:
            f.write(payload)
            f.flush()
            os.fsync(f.fileno())
        tmp.replace(path)

    def read(self, key: str) -> Any:
        doc = self._read_document()
        if key not in doc:
            raise KeyError(key)
        return doc[key]

    def write(self, key: str, value: Any) -> None:
        doc = self._read_document()
        doc[key] = value
        self._write_document(doc)

    def delete(self, key: str) -> None:
        doc = self._read_document()
        if key not in doc:
            return
        del doc[key]
        self._write_document(doc)

    def list_keys(self) -> Iterable[str]:
        return list(self._read_document().keys())

    def exists(self, key: str) -> bool:
        return key in self._read_document()
