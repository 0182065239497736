# ♥♥─── Console Style Manager ────────────────────────────────────────────────────
from __future__ import annotations

import os
import json
from typing import Any
from pathlib import Path

from loguru import logger as log

from rich.style import Style
from rich.theme import Theme
from rich.console import Console


# ─── Configuration & Types ─────────────────────────────────────────────────────

ThemeData = dict[str, str]
StyleMapping = dict[str, Style]

DEFAULT_THEMES_JSON_PATH = Path(__file__).parent / "themes.json"


def ensure_true_color() -> None:
	"""Set environment variables to hint for true color support."""
	os.environ.setdefault("COLORTERM", "truecolor")


# ─── Style Mapper ──────────────────────────────────────────────────────────────


class StyleMapper:
	"""Creates rich Style mappings from theme color data."""

	DEFAULT_THEME: dict[str, ThemeData] = {
		"rose_pine": {
			"background": "#191825",
			"foreground": "#777777",
			"brightBlack": "#706e86",
			"blue": "#31748f",
			"cyan": "#ebbcba",
			"green": "#9ccfd8",
			"purple": "#c4a7e7",
			"red": "#eb6f92",
			"white": "#e0def4",
			"yellow": "#f6c177",
		},
	}

	STYLE_FALLBACKS: dict[str, str] = {
		"primary": "bold blue",
		"success": "green",
		"warning": "yellow",
		"error": "red",
		"muted": "dim white",
		"homework": "magenta",
		"reminder": "cyan",
		"pinned": "bold yellow",
		"table.header": "bold blue",
		"trend.up": "green",
		"trend.down": "red",
		"trend.flat": "dim white",
		"log.level.trace": "dim white",
		"log.level.debug": "dim white",
		"log.level.info": "blue",
		"log.level.success": "green",
		"log.level.warning": "yellow",
		"log.level.error": "red",
		"log.level.critical": "bold red",
		"log.time": "dim white",
		"log.separator": "blue",
		"log.module": "dim blue",
	}

	COLOR_MAPPINGS: dict[str, str] = {
		"primary": "purple",
		"success": "green",
		"warning": "yellow",
		"error": "red",
		"muted": "brightBlack",
		"homework": "purple",
		"reminder": "cyan",
		"pinned": "yellow",
		"table.header": "purple",
	}

	@staticmethod
	def _get_color(theme_data: ThemeData, key: str, fallback: str = "#888888") -> str:
		return theme_data.get(key, fallback)

	@classmethod
	def create_styles_from_theme(cls, theme_data: ThemeData) -> StyleMapping:
		"""Create a rich Style mapping from a theme color dictionary."""
		styles: StyleMapping = {}
		bold_styles = {"primary", "error", "table.header", "pinned"}

		for style_name, color_field in cls.COLOR_MAPPINGS.items():
			color_value = theme_data.get(color_field)
			if not color_value:
				continue
			styles[style_name] = Style(color=color_value, bold=style_name in bold_styles, dim=style_name == "muted")

		styles.update(cls._create_log_styles(theme_data))
		styles.update(cls._create_trend_styles(theme_data))

		return styles

	@classmethod
	def _create_log_styles(cls, theme_data: ThemeData) -> StyleMapping:
		return {
			"log.level.trace": Style(color=cls._get_color(theme_data, "brightBlack"), dim=True),
			"log.level.debug": Style(color=cls._get_color(theme_data, "brightBlack")),
			"log.level.info": Style(color=cls._get_color(theme_data, "blue")),
			"log.level.success": Style(color=cls._get_color(theme_data, "green")),
			"log.level.warning": Style(color=cls._get_color(theme_data, "yellow")),
			"log.level.error": Style(color=cls._get_color(theme_data, "red")),
			"log.level.critical": Style(color=cls._get_color(theme_data, "red"), bold=True),
			"log.time": Style(color=cls._get_color(theme_data, "brightBlack")),
			"log.separator": Style(color=cls._get_color(theme_data, "blue")),
			"log.module": Style(color=cls._get_color(theme_data, "purple"), dim=True),
		}

	@classmethod
	def _create_trend_styles(cls, theme_data: ThemeData) -> StyleMapping:
		"""Colours for trend segments: green up, red down, grey flat."""
		return {
			"trend.up": Style(color=cls._get_color(theme_data, "green")),
			"trend.down": Style(color=cls._get_color(theme_data, "red")),
			"trend.flat": Style(color=cls._get_color(theme_data, "brightBlack")),
		}


class ConsoleManager:
	"""Manage rich Console instances and their themes."""

	def __init__(self, themes_file_path: Path | None = None) -> None:
		self.themes_file_path = themes_file_path or DEFAULT_THEMES_JSON_PATH
		self._themes: dict[str, ThemeData] | None = None

	def _load_themes(self) -> dict[str, ThemeData]:
		"""Load theme definitions from the JSON file, with caching."""
		if self._themes is not None:
			return self._themes

		if not self.themes_file_path.exists():
			self._themes = StyleMapper.DEFAULT_THEME.copy()
			return self._themes

		try:
			with self.themes_file_path.open(encoding="utf-8") as f:
				data: dict[str, Any] = json.load(f)
		except (OSError, json.JSONDecodeError) as e:
			log.error("Error reading theme JSON: {}", e)
			self._themes = StyleMapper.DEFAULT_THEME.copy()
			return self._themes

		raw_themes = data.get("themes", data)
		all_themes = {key: value.get("colors", value) for key, value in raw_themes.items() if isinstance(value, dict)}
		if not all_themes:
			log.warning("No valid themes found in JSON, using default.")
			all_themes = StyleMapper.DEFAULT_THEME.copy()

		self._themes = all_themes
		return all_themes

	def create_theme(self, theme_name: str) -> Theme:
		"""Create a rich Theme object from a loaded theme name."""
		theme_data = self._load_themes().get(theme_name)

		if not theme_data:
			log.warning("Theme '{}' not found, using fallbacks.", theme_name)
			return Theme({name: Style.parse(style) for name, style in StyleMapper.STYLE_FALLBACKS.items()})

		styles = StyleMapper.create_styles_from_theme(theme_data)
		for style_name, fallback in StyleMapper.STYLE_FALLBACKS.items():
			styles.setdefault(style_name, Style.parse(fallback))

		return Theme(styles)

	def create_console(self, theme_name: str = "rose_pine") -> Console:
		"""Create a new rich Console with the specified theme."""
		ensure_true_color()

		return Console(
			theme=self.create_theme(theme_name),
			color_system="auto",
			highlight=False,
			markup=True,
			emoji=False,
			soft_wrap=True,
		)
