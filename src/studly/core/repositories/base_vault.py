# ♥♥─── Generic Vault ────────────────────────────────────────────────────────────
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Generic, TypeVar
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from studly.utils import load_json, save_json
from studly.core.models import StudlyBaseModel
from studly.custom_logger import log


if TYPE_CHECKING:
    from collections.abc import Iterable


# ─── Base Vault ───────────────────────────────────────────────────────────────
T = TypeVar("T", bound=StudlyBaseModel)


class BaseVault(ABC, Generic[T]):
    """Persist one collection of records as a JSON array in a single file.

    Loading never raises: a missing, unreadable or undecodable file yields an
    empty collection. A file with one bad record is treated as undecodable as a
    whole; there is no partial recovery.
    """

    def __init__(self, vault_name: str, file_path: Path) -> None:
        """Initialize the vault.

        :param vault_name: Name used in log messages.
        :param file_path: Location of the JSON array.
        """
        self.vault_name = vault_name
        self.file_path = Path(file_path)
        self._adapter: TypeAdapter[list[T]] = TypeAdapter(list[self.get_model_class()])  # type: ignore[misc]

    @abstractmethod
    def get_model_class(self) -> type[T]:
        """Return the record class stored by this vault."""

    def load(self) -> list[T]:
        """Read the whole collection.

        :returns: The decoded records, or an empty list on any failure.
        """
        raw = load_json(self.file_path)
        if raw is None:
            return []
        if not isinstance(raw, list):
            log.error("{}: expected a JSON array in '{}', got {}", self.vault_name, self.file_path, type(raw).__name__)
            return []
        try:
            items = self._adapter.validate_python(raw)
        except ValidationError as e:
            log.error("{}: could not decode '{}' ({} error(s)), starting empty", self.vault_name, self.file_path, e.error_count())
            return []
        log.debug("{}: loaded {} record(s)", self.vault_name, len(items))
        return items

    def save(self, items: Iterable[T]) -> bool:
        """Write the whole collection atomically.

        :param items: The records to persist, in order.
        :returns: True if the file was replaced, False on failure.
        """
        items = list(items)
        try:
            data: list[Any] = self._adapter.dump_python(items, mode="json", by_alias=True)
        except (TypeError, ValueError) as e:
            log.error("{}: could not encode {} record(s): {}", self.vault_name, len(items), e)
            return False
        saved = save_json(data, self.file_path)
        if saved:
            log.debug("{}: saved {} record(s)", self.vault_name, len(items))
        return saved

    def exists(self) -> bool:
        return self.file_path.is_file()

    def clear(self) -> bool:
        """Replace the stored collection with an empty array."""
        return self.save([])
