from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from typetutor.core.errors import ConfigurationError
from typetutor.core.options import is_filipino

logger = logging.getLogger(__name__)

MANIFEST_NAME = "corpus.yaml"

WORDS_ENGLISH = "words/english"
WORDS_FILIPINO = "words/filipino"
QUOTES_ENGLISH = "quotes/english"
QUOTES_FILIPINO = "quotes/filipino"

RESOURCE_NAMES = (WORDS_ENGLISH, WORDS_FILIPINO, QUOTES_ENGLISH, QUOTES_FILIPINO)


class CorpusRepository:
    """Loads word and quote lists from the bundled data directory.

    The manifest (``corpus.yaml``) maps each logical resource name to a JSON
    file relative to the data directory. Files are read on every call; nothing
    is cached between sessions.
    """

    def __init__(self, base_dir: Optional[Path] = None) -> None:
        if base_dir is None:
            base_dir = Path(__file__).resolve().parent.parent / "data"
        self._base_dir = Path(base_dir)
        self._resources = self._load_manifest()

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def resource_path(self, name: str) -> Path:
        try:
            return self._resources[name]
        except KeyError:
            raise ConfigurationError(f"Unknown corpus resource: {name}") from None

    def load_words(self, language: str) -> List[str]:
        """Return the word list for *language* in file order (may be empty)."""
        name = WORDS_FILIPINO if is_filipino(language) else WORDS_ENGLISH
        payload = self._read_payload(name)
        words = self._list_field(payload, "words", name)
        values = [str(word) for word in words if word is not None]
        self._log_loaded(name, values)
        return values

    def load_quotes(self, language: str) -> List[str]:
        """Return non-blank, trimmed quote texts for *language* (may be empty)."""
        name = QUOTES_FILIPINO if is_filipino(language) else QUOTES_ENGLISH
        payload = self._read_payload(name)
        values: List[str] = []
        for quote in self._list_field(payload, "quotes", name):
            if not isinstance(quote, dict):
                continue
            text = quote.get("text")
            if isinstance(text, str) and text.strip():
                values.append(text.strip())
        self._log_loaded(name, values)
        return values

    def _load_manifest(self) -> Dict[str, Path]:
        manifest_path = self._base_dir / MANIFEST_NAME
        if not manifest_path.exists():
            raise ConfigurationError(f"Corpus manifest not found: {manifest_path}")
        try:
            raw = yaml.safe_load(manifest_path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise ConfigurationError(f"{manifest_path.name}: invalid YAML") from e
        if not raw or not isinstance(raw, dict):
            raise ConfigurationError(f"{manifest_path.name}: expected a mapping with 'resources'")
        entries = raw.get("resources")
        if not isinstance(entries, dict):
            raise ConfigurationError(f"{manifest_path.name}: missing or invalid 'resources'")

        resources: Dict[str, Path] = {}
        for name in RESOURCE_NAMES:
            relative = entries.get(name)
            if not relative or not isinstance(relative, str):
                raise ConfigurationError(f"{manifest_path.name}: missing resource '{name}'")
            resources[name] = self._base_dir / relative
        return resources

    def _read_payload(self, name: str) -> Dict[str, Any]:
        path = self.resource_path(name)
        if not path.exists():
            raise ConfigurationError(f"Missing corpus file for {name}: {path}")
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
            raise ConfigurationError(f"Failed to read corpus file for {name}: {path}") from e
        if not isinstance(payload, dict):
            raise ConfigurationError(f"{path.name}: expected a JSON object")
        return payload

    @staticmethod
    def _list_field(payload: Dict[str, Any], field: str, name: str) -> List[Any]:
        value = payload.get(field)
        if value is None:
            return []
        if not isinstance(value, list):
            raise ConfigurationError(f"{name}: '{field}' must be a list")
        return value

    @staticmethod
    def _log_loaded(name: str, values: List[str]) -> None:
        if not values:
            logger.warning("Corpus resource %s is empty", name)
        else:
            logger.debug("Loaded %d entries from %s", len(values), name)
