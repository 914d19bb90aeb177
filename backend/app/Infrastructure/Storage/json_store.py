import json
import os
from typing import Any, List

from loguru import logger

from app.Core.Exceptions.errors import StorageError


class JsonCollectionStore:
    """
    Key-value store keeping each collection as one JSON document under data_dir.

    Every write replaces the whole collection through a temp file. There is no
    transaction protocol, so a single writer is assumed.
    """

    def __init__(self, data_dir: str):
        self.data_dir = data_dir
        os.makedirs(self.data_dir, exist_ok=True)

    def _get_file_path(self, key: str) -> str:
        return os.path.join(self.data_dir, f"{key}.json")

    def exists(self, key: str) -> bool:
        return os.path.exists(self._get_file_path(key))

    def load(self, key: str) -> List[Any]:
        file_path = self._get_file_path(key)
        if not os.path.exists(file_path):
            return []
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Error loading collection {key}: {e}")
            raise StorageError(f"Could not read collection '{key}'", {"key": key}) from e
        if not isinstance(data, list):
            raise StorageError(f"Collection '{key}' is not a list", {"key": key})
        return data

    def save(self, key: str, items: List[Any]) -> None:
        file_path = self._get_file_path(key)
        tmp_path = f"{file_path}.tmp"
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(items, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, file_path)
        except (OSError, TypeError) as e:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            logger.error(f"Error saving collection {key}: {e}")
            raise StorageError(f"Could not write collection '{key}'", {"key": key}) from e
