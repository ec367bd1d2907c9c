"""Save gateway for writing game progress to disk."""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path

from pydantic import ValidationError

from riddler.config import DEFAULT_SAVE_PATH
from riddler.errors import CorruptSaveError, SaveNotFoundError, SaveWriteError
from riddler.models.state import SaveRecord

logger = logging.getLogger(__name__.split(".")[-1])


class PersistenceGateway(ABC):
    """Durable storage for a single player's save record."""

    @abstractmethod
    def save(self, record: SaveRecord) -> None:
        """Write a record, replacing any previous one. Raises SaveWriteError."""

    @abstractmethod
    def load(self) -> SaveRecord:
        """Read the record. Raises SaveNotFoundError or CorruptSaveError."""

    @abstractmethod
    def exists(self) -> bool:
        """Whether a record is present."""

    @abstractmethod
    def delete(self) -> None:
        """Remove the record if present."""


class FileSaveGateway(PersistenceGateway):
    """Stores the save record as a JSON file, written atomically."""

    def __init__(self, save_path: str | Path = DEFAULT_SAVE_PATH):
        """
        Initialize file gateway.

        Args:
            save_path: Path of the JSON save file
        """
        self.save_path = Path(save_path)
        self._ensure_directory_exists()

    def _ensure_directory_exists(self) -> None:
        """Ensure the save directory exists, create if it doesn't."""
        directory = self.save_path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            logger.info(f"Save directory ready: {directory}")
        except PermissionError:
            logger.error(f"Permission denied creating directory: {directory}")
            raise
        except OSError as e:
            logger.error(f"Error creating directory {directory}: {e}")
            raise

    def save(self, record: SaveRecord) -> None:
        """
        Write the record to disk.

        Args:
            record: SaveRecord to write

        Raises:
            SaveWriteError: If the file could not be written
        """
        temp_path = self.save_path.with_suffix(self.save_path.suffix + ".tmp")
        try:
            record_json = record.model_dump_json(indent=2)

            # Write to a temporary file first
            with open(temp_path, "w", encoding="utf-8") as f:
                f.write(record_json)

            # Atomic rename
            temp_path.replace(self.save_path)

            logger.debug(
                f"Saved game {record.state.game_id} v{record.state.state_version} to {self.save_path}"
            )
        except OSError as e:
            logger.error(f"Error saving game to {self.save_path}: {e}", exc_info=True)
            temp_path.unlink(missing_ok=True)
            raise SaveWriteError(f"Could not write save file {self.save_path}: {e}") from e

    def load(self) -> SaveRecord:
        """
        Load the record from disk.

        Returns:
            Validated SaveRecord

        Raises:
            SaveNotFoundError: If there is no save file
            CorruptSaveError: If the file is unreadable or does not match the save schema
        """
        if not self.save_path.exists():
            logger.warning(f"Save file not found: {self.save_path}")
            raise SaveNotFoundError(f"No saved game at {self.save_path}")

        try:
            with open(self.save_path, "r", encoding="utf-8") as f:
                record_data = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.error(f"Error reading save file {self.save_path}: {e}", exc_info=True)
            raise CorruptSaveError(f"Save file {self.save_path} is unreadable: {e}") from e

        record = parse_save_record(record_data)
        logger.debug(f"Loaded game {record.state.game_id} from {self.save_path}")
        return record

    def exists(self) -> bool:
        return self.save_path.is_file()

    def delete(self) -> None:
        try:
            self.save_path.unlink(missing_ok=True)
        except OSError as e:
            logger.error(f"Error deleting save file {self.save_path}: {e}", exc_info=True)
            raise SaveWriteError(f"Could not delete save file {self.save_path}: {e}") from e


def parse_save_record(data: object) -> SaveRecord:
    """
    Validate raw save data.

    Args:
        data: SaveRecord, dict or JSON string

    Returns:
        Validated SaveRecord

    Raises:
        CorruptSaveError: If the data is not a structurally valid save record
    """
    if isinstance(data, SaveRecord):
        return data
    try:
        if isinstance(data, (str, bytes)):
            return SaveRecord.model_validate_json(data)
        return SaveRecord.model_validate(data)
    except ValidationError as e:
        logger.warning(f"Rejected save record: {e.error_count()} validation errors")
        raise CorruptSaveError(f"Save record is invalid: {e.errors()}") from e
