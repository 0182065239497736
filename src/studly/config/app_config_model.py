# ♥♥─── Settings Model ───────────────────────────────────────────────────────────
from __future__ import annotations

from typing import Any
from pathlib import Path
from functools import lru_cache

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from studly.custom_logger import log


LOG_LEVELS: frozenset[str] = frozenset({"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"})


@lru_cache
def get_project_root() -> Path:
	"""Detect the project root by looking for packaging or VCS markers."""
	current = Path.cwd()
	for parent in [current, *list(current.parents)]:
		if any((parent / indicator).exists() for indicator in ["pyproject.toml", ".git"]):
			return parent
	return current


root = get_project_root()
app_data = root / "app_data"


@lru_cache
def get_default_env_path() -> Path:
	"""Get the default path for the main environment file."""
	return app_data / "config" / ".env"


# ─── Default Content Constants ────────────────────────────────────────────────
ENV_DEFAULT_CONTENT = """# Studly Configuration File
# ─── Storage Configuration ─────────────────────────────────────────
# STORAGE_DATA_DIR=data
# STORAGE_TASKS_FILENAME=tasks.json
# STORAGE_SUBJECTS_FILENAME=subjects.json
# STORAGE_STATE_FILENAME=state.json
# STORAGE_ATTACHMENTS_DIR=attachments
# ─── Persistence ───────────────────────────────────────────────────
# PERSIST_SAVE_DEBOUNCE_SECONDS=0.2
# ─── Logging ───────────────────────────────────────────────────────
# LOG_CONSOLE_LEVEL=INFO
# LOG_FILE_LEVEL=INFO
"""


# ─── Configuration Paths Component ────────────────────────────────────────────
class ConfigPaths(BaseSettings):
	"""Location of the application data and configuration directories."""

	model_config = SettingsConfigDict(
		env_prefix="CONFIG_",
		case_sensitive=False,
		extra="ignore",
		env_file=get_default_env_path(),
	)

	@computed_field
	@property
	def app_data_dir(self) -> Path:
		"""Base directory for all application data storage."""
		return app_data

	@computed_field
	@property
	def config_dir(self) -> Path:
		"""Directory containing the configuration files."""
		return self.app_data_dir / "config"

	@computed_field
	@property
	def env_file_path(self) -> Path:
		"""The path to the main .env configuration file."""
		return self.config_dir / ".env"

	def ensure_env_file(self) -> None:
		"""Write a commented default .env file if none exists yet."""
		if self.env_file_path.exists():
			return
		try:
			self.config_dir.mkdir(parents=True, exist_ok=True)
			self.env_file_path.write_text(ENV_DEFAULT_CONTENT, encoding="utf-8")
		except OSError as e:
			log.warning("Could not create default env file {}: {}", self.env_file_path, e)
		else:
			log.info("Created default configuration at {}", self.env_file_path)


# ─── Storage Configuration ───────────────────────────────────────────────────
class StorageSettings(BaseSettings):
	"""File names and directories of the persisted planner state."""

	model_config = SettingsConfigDict(
		env_prefix="STORAGE_",
		env_file_encoding="utf-8",
		case_sensitive=False,
		extra="ignore",
		env_file=get_default_env_path(),
	)
	data_dir: str = Field(
		default="data",
		title="Data Directory Name",
		description="Subdirectory of app_data holding the JSON collections",
		min_length=1,
		max_length=255,
		pattern=r"^[a-zA-Z0-9_\-\.]+$",
	)
	tasks_filename: str = Field(
		default="tasks.json",
		title="Tasks File",
		description="Filename of the task collection",
		pattern=r"^[a-zA-Z0-9_\-\.]+\.json$",
	)
	subjects_filename: str = Field(
		default="subjects.json",
		title="Subjects File",
		description="Filename of the subject collection",
		pattern=r"^[a-zA-Z0-9_\-\.]+\.json$",
	)
	state_filename: str = Field(
		default="state.json",
		title="State File",
		description="Filename of the statistics checkpoint document",
		pattern=r"^[a-zA-Z0-9_\-\.]+\.json$",
	)
	attachments_dir: str = Field(
		default="attachments",
		title="Attachments Directory Name",
		description="Subdirectory of app_data holding attachment blobs",
		min_length=1,
		max_length=255,
		pattern=r"^[a-zA-Z0-9_\-\.]+$",
	)

	def get_data_directory(self) -> Path:
		return app_data / self.data_dir

	def get_tasks_file_path(self) -> Path:
		return self.get_data_directory() / self.tasks_filename

	def get_subjects_file_path(self) -> Path:
		return self.get_data_directory() / self.subjects_filename

	def get_state_file_path(self) -> Path:
		return self.get_data_directory() / self.state_filename

	def get_attachments_directory(self) -> Path:
		return app_data / self.attachments_dir

	def ensure_directories_exist(self) -> None:
		"""Create the data and attachment directories if they don't already exist."""
		for directory_path in (self.get_data_directory(), self.get_attachments_directory()):
			directory_path.mkdir(parents=True, exist_ok=True)


# ─── Persistence Settings ─────────────────────────────────────────────────────
class PersistenceSettings(BaseSettings):
	"""Timing of the background save worker."""

	model_config = SettingsConfigDict(
		env_prefix="PERSIST_",
		env_file_encoding="utf-8",
		case_sensitive=False,
		extra="ignore",
		env_file=get_default_env_path(),
	)
	save_debounce_seconds: float = Field(
		default=0.2,
		ge=0.0,
		le=10.0,
		title="Save Debounce (Seconds)",
		description="Delay after the last change before both collections are written",
		examples=[0.2, 0.5, 1.0],
	)


# ─── Logging Settings ─────────────────────────────────────────────────────────
class LogSettings(BaseSettings):
	"""Minimum levels for the console and file sinks."""

	model_config = SettingsConfigDict(
		env_prefix="LOG_",
		env_file_encoding="utf-8",
		case_sensitive=False,
		extra="ignore",
		env_file=get_default_env_path(),
	)
	console_level: str = Field(default="INFO", title="Console Level")
	file_level: str = Field(default="INFO", title="File Level")

	@field_validator("console_level", "file_level")
	@classmethod
	def validate_level(cls, v: str) -> str:
		"""Normalize the level name and reject unknown ones."""
		level = v.strip().upper()
		if level not in LOG_LEVELS:
			msg = f"log level must be one of: {', '.join(sorted(LOG_LEVELS))}"
			raise ValueError(msg)
		return level


# ─── Application Settings ─────────────────────────────────────────────────────
class ApplicationSettings(BaseSettings):
	"""Root settings object aggregating every component."""

	model_config = SettingsConfigDict(extra="ignore", case_sensitive=False)

	paths: ConfigPaths = Field(default_factory=ConfigPaths)
	storage: StorageSettings = Field(default_factory=StorageSettings)
	persistence: PersistenceSettings = Field(default_factory=PersistenceSettings)
	logging: LogSettings = Field(default_factory=LogSettings)

	def model_post_init(self, __context: Any | None = None, /) -> None:
		"""Make sure the storage directories are present."""
		self.storage.ensure_directories_exist()
