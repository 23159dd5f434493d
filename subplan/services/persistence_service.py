"""
Persistence service for the Soccer Substitution Planner application.

This module handles saving and loading plans to/from JSON files and packing
them into compact share tokens suitable for a URL fragment.
"""
import base64
import binascii
import datetime
import json
import logging
import os
import zlib
from typing import List, Optional, Tuple

from ..models import PlanFormatError, PlanState
from ..utils.constants import DEFAULT_AUTOSAVE_DIR

logger = logging.getLogger(__name__)


class PersistenceService:
    """
    Service for persisting plans to JSON files and share tokens.
    """

    @staticmethod
    def serialize_plan(plan_state: PlanState) -> dict:
        """Convert a plan to its JSON-serializable shape."""
        return plan_state.to_json()

    @staticmethod
    def deserialize_plan(data) -> PlanState:
        """
        Build a plan from its JSON shape.

        Raises:
            PlanFormatError: If ``data`` is not a JSON object or a field has
                the wrong type
            PlanConfigError: If the stored configuration is invalid
        """
        if not isinstance(data, dict):
            raise PlanFormatError("Plan data must be a JSON object")
        return PlanState.from_json(data)

    @staticmethod
    def save_plan_to_file(plan_state: PlanState, file_path: str) -> None:
        """
        Save a plan to a JSON file.

        Args:
            plan_state: The plan to save
            file_path: Path where to save the file

        Raises:
            OSError: If the file cannot be written
        """
        directory = os.path.dirname(file_path)
        if directory and not os.path.exists(directory):
            os.makedirs(directory)

        with open(file_path, "w", encoding="utf-8") as f:
            json.dump(plan_state.to_json(), f, indent=2)
        logger.info("Saved plan to %s", file_path)

    @staticmethod
    def load_plan_from_file(file_path: str) -> PlanState:
        """
        Load a plan from a JSON file.

        Args:
            file_path: Path to the JSON file to load

        Returns:
            PlanState instance loaded from file

        Raises:
            FileNotFoundError: If file doesn't exist
            json.JSONDecodeError: If file contains invalid JSON
            PlanFormatError: If the JSON is not a plan object
        """
        if not os.path.exists(file_path):
            raise FileNotFoundError(f"Plan file not found: {file_path}")

        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)

        logger.info("Loaded plan from %s", file_path)
        return PersistenceService.deserialize_plan(data)

    @staticmethod
    def encode_share_token(plan_state: PlanState) -> str:
        """
        Pack a plan into a URL-safe token.

        The compact JSON is deflated and base64url encoded without padding.
        """
        payload = json.dumps(plan_state.to_json(), separators=(",", ":"), sort_keys=True)
        compressed = zlib.compress(payload.encode("utf-8"), 9)
        return base64.urlsafe_b64encode(compressed).decode("ascii").rstrip("=")

    @staticmethod
    def decode_share_token(token: str) -> PlanState:
        """
        Unpack a token produced by :meth:`encode_share_token`.

        Raises:
            PlanFormatError: If the token is not a valid packed plan
        """
        token = (token or "").strip().lstrip("#")
        if not token:
            raise PlanFormatError("Share token is empty")
        padded = token + "=" * (-len(token) % 4)
        try:
            compressed = base64.urlsafe_b64decode(padded.encode("ascii"))
            data = json.loads(zlib.decompress(compressed).decode("utf-8"))
        except (binascii.Error, zlib.error, UnicodeError, ValueError) as exc:
            raise PlanFormatError(f"Invalid share token: {exc}") from exc
        return PersistenceService.deserialize_plan(data)

    @staticmethod
    def auto_save(plan_state: PlanState,
                  auto_save_dir: str = DEFAULT_AUTOSAVE_DIR) -> Optional[str]:
        """
        Automatically save a plan with timestamp.

        Args:
            plan_state: Plan to save
            auto_save_dir: Directory for auto-save files

        Returns:
            Path to saved file, or None if save failed
        """
        timestamp = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
        file_path = os.path.join(auto_save_dir, f"plan_autosave_{timestamp}.json")
        try:
            PersistenceService.save_plan_to_file(plan_state, file_path)
        except OSError as exc:
            logger.warning("Auto-save to %s failed: %s", file_path, exc)
            return None
        return file_path

    @staticmethod
    def get_recent_saves(save_dir: str = ".", limit: int = 10) -> List[Tuple[str, float]]:
        """
        List saved plans in a directory, newest first.

        Returns:
            ``(filename, modification_time)`` pairs, at most ``limit`` of them
        """
        if not os.path.isdir(save_dir):
            return []

        try:
            with os.scandir(save_dir) as entries:
                saves = [
                    (entry.name, entry.stat().st_mtime)
                    for entry in entries
                    if entry.name.endswith(".json") and entry.is_file()
                ]
        except OSError as exc:
            logger.warning("Could not list saves in %s: %s", save_dir, exc)
            return []

        return sorted(saves, key=lambda save: save[1], reverse=True)[:limit]

    @staticmethod
    def load_saved_plan(save_dir: str, filename: str) -> PlanState:
        """
        Load one of the files listed by :meth:`get_recent_saves`.

        Raises:
            PlanFormatError: If ``filename`` is not a bare ``.json`` file name
            FileNotFoundError: If no such save exists
        """
        if os.path.basename(filename) != filename or not filename.endswith(".json"):
            raise PlanFormatError(f"Not a saved plan name: {filename!r}")
        return PersistenceService.load_plan_from_file(os.path.join(save_dir, filename))
