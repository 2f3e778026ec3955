# chainlance/services/storage.py
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from pymongo import MongoClient

from chainlance.config import Config

logger = logging.getLogger(__name__)


class LocalStorage(ABC):
    """Key/value text storage with browser localStorage semantics."""

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        pass

    @abstractmethod
    def remove_item(self, key: str) -> None:
        pass


class FileStorage(LocalStorage):
    """Stores each key as ``<storage_dir>/<key>.json``."""

    def __init__(self, storage_dir: str):
        self.storage_dir = Path(storage_dir)
        self.storage_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.storage_dir / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        path = self._path(key)
        # Replaced atomically
        tmp_path = path.with_suffix(".json.tmp")
        tmp_path.write_text(value, encoding="utf-8")
        os.replace(tmp_path, path)

    def remove_item(self, key: str) -> None:
        path = self._path(key)
        if path.exists():
            path.unlink()


class MongoStorage(LocalStorage):
    """Stores each key as one document ``{"_id": key, "value": text}``."""

    def __init__(self, collection):
        self.collection = collection

    @classmethod
    def from_uri(cls, uri: str, db_name: str) -> "MongoStorage":
        client = MongoClient(uri)
        return cls(client[db_name]["local_storage"])

    def get_item(self, key: str) -> Optional[str]:
        document = self.collection.find_one({"_id": key})
        if document:
            return document["value"]
        return None

    def set_item(self, key: str, value: str) -> None:
        self.collection.replace_one({"_id": key}, {"_id": key, "value": value}, upsert=True)

    def remove_item(self, key: str) -> None:
        self.collection.delete_one({"_id": key})


def create_storage() -> LocalStorage:
    """
    Build the storage backend selected by configuration.

    Returns:
        LocalStorage: MongoStorage when MONGO_URI is set, else FileStorage.
    """
    if Config.MONGO_URI:
        logger.info("Using MongoDB storage")
        return MongoStorage.from_uri(Config.MONGO_URI, Config.MONGO_DB)
    logger.info(f"Using file storage in {Config.STORAGE_DIR}")
    return FileStorage(Config.STORAGE_DIR)
