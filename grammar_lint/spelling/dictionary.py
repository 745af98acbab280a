"""
Spelling Dictionaries
=====================
The dictionary capability used by the spelling checker, its PyEnchant
implementation, and the per-language cache.

Features:
- ``SpellDictionary``: ``check(word) -> bool`` plus optional suggestions
- PyEnchant system dictionaries (Hunspell/Aspell providers)
- Supplementary stems from ``<langDir>/<lang>.dic``
- ``DictionaryCache``: load on first use per language, swap wholesale on
  language change

Requires: pip install pyenchant
Note: macOS may need: brew install enchant
"""

import re
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Set

from ..base import IntegrationBase
from ..config_logging import DictionaryError, get_logger

__version__ = "1.0.0"

logger = get_logger(__name__)

_AFF_ENCODING = re.compile(r'^SET\s+(\S+)', re.MULTILINE)


class SpellDictionary(ABC):
    """Opaque spelling capability: is this word known?"""

    language: str = ""

    @abstractmethod
    def check(self, word: str) -> bool:
        """True if ``word`` is spelled correctly."""
        pass

    def suggest(self, word: str) -> List[str]:
        """Spelling suggestions for ``word``; empty when unsupported."""
        return []


class WordSetDictionary(SpellDictionary):
    """Dictionary backed by a plain set of words (case-insensitive)."""

    def __init__(self, words: Iterable[str], language: str = "en_US"):
        self.language = language
        self._words: Set[str] = {w.lower() for w in words}

    def check(self, word: str) -> bool:
        return word.lower() in self._words

    def add_word(self, word: str):
        self._words.add(word.lower())

    def __len__(self) -> int:
        return len(self._words)


class EnchantDictionary(IntegrationBase, SpellDictionary):
    """
    PyEnchant-backed dictionary for one language tag.

    When ``lang_dir`` is given, ``<lang>.aff`` and ``<lang>.dic`` must both
    exist there; the ``.dic`` stems are accepted in addition to the system
    dictionary for the language.
    """

    INTEGRATION_NAME = "PyEnchant"
    INTEGRATION_VERSION = "1.0.0"

    def __init__(self, language: str = 'en_US', lang_dir: Optional[str] = None):
        """
        Initialize and load the dictionary.

        Args:
            language: Enchant language tag (default: en_US)
            lang_dir: Directory holding <language>.aff / <language>.dic

        Raises:
            DictionaryError: if no dictionary can be loaded for ``language``
        """
        super().__init__()
        self.language = language
        self.lang_dir = Path(lang_dir) if lang_dir else None

        self._enchant = None
        self._base_dict = None
        self._supplementary_words: Set[str] = set()

        self._initialize()

    def _initialize(self):
        """Import PyEnchant and load dictionaries."""
        try:
            import enchant
        except ImportError as e:
            self._error = f"pyenchant not installed: {e}"
            raise DictionaryError(self._error, language=self.language)
        self._enchant = enchant

        if self.lang_dir is not None:
            self._load_lang_dir()

        try:
            self._base_dict = enchant.Dict(self.language)
        except enchant.errors.DictNotFoundError as e:
            if not self._supplementary_words:
                self._error = f"No dictionary for language '{self.language}': {e}"
                raise DictionaryError(self._error, language=self.language)
            logger.warning(
                f"No system dictionary for '{self.language}', using {self.lang_dir} stems only",
                language=self.language
            )

        self._available = True
        logger.info("Dictionary loaded", language=self.language,
                    supplementary_words=len(self._supplementary_words))

    def _load_lang_dir(self):
        """Load stems from ``<lang_dir>/<language>.dic``."""
        aff_file = self.lang_dir / f"{self.language}.aff"
        dic_file = self.lang_dir / f"{self.language}.dic"
        for required in (aff_file, dic_file):
            if not required.is_file():
                self._error = f"Dictionary file not found: {required}"
                raise DictionaryError(self._error, language=self.language, path=str(required))

        try:
            encoding = self._read_encoding(aff_file)
            with open(dic_file, 'r', encoding=encoding, errors='replace') as f:
                lines = f.read().splitlines()
        except OSError as e:
            self._error = f"Cannot read dictionary files in {self.lang_dir}: {e}"
            raise DictionaryError(self._error, language=self.language, path=str(self.lang_dir))

        # First line of a .dic file is the approximate entry count.
        if lines and lines[0].strip().isdigit():
            lines = lines[1:]
        for line in lines:
            entry = line.strip()
            if not entry or entry.startswith('#'):
                continue
            stem = entry.split()[0].split('/')[0]
            if stem:
                self._supplementary_words.add(stem.lower())

    @staticmethod
    def _read_encoding(aff_file: Path) -> str:
        with open(aff_file, 'r', encoding='latin-1') as f:
            match = _AFF_ENCODING.search(f.read())
        if not match:
            return 'utf-8'
        encoding = match.group(1)
        return 'latin-1' if encoding.upper().startswith('ISO8859') else encoding

    def get_status(self) -> Dict[str, Any]:
        """Get detailed status of the PyEnchant integration."""
        status = {
            'available': self.is_available,
            'error': self._error,
            'language': self.language,
            'lang_dir': str(self.lang_dir) if self.lang_dir else None,
            'supplementary_words_count': len(self._supplementary_words),
        }
        if self._enchant is not None:
            status['available_languages'] = self._enchant.list_languages()
        return status

    def check(self, word: str) -> bool:
        """
        Check if a word is spelled correctly.

        Args:
            word: Word to check

        Returns:
            True if word is known to the supplementary stems or the base dictionary
        """
        if word.lower() in self._supplementary_words:
            return True
        if self._base_dict is None:
            return False
        return self._base_dict.check(word)

    def suggest(self, word: str) -> List[str]:
        """
        Get spelling suggestions for a word.

        Args:
            word: Misspelled word

        Returns:
            List of suggestions (up to 5)
        """
        if self._base_dict is None:
            return []
        return self._base_dict.suggest(word)[:5]


DictionaryFactory = Callable[[str, Optional[str]], SpellDictionary]


class DictionaryCache:
    """
    Holds the active dictionary.

    ``get(language)`` loads on first use and replaces the dictionary
    wholesale when the language (or dictionary directory) changes. Loads
    and swaps happen under a lock, so the cache may be shared between
    threads; the dictionaries themselves are only read after loading.
    """

    def __init__(self, factory: Optional[DictionaryFactory] = None,
                 lang_dir: Optional[str] = None):
        self._factory: DictionaryFactory = factory or EnchantDictionary
        self._default_lang_dir = lang_dir
        self._lock = threading.Lock()
        self._dictionary: Optional[SpellDictionary] = None
        self._language: Optional[str] = None
        self._lang_dir: Optional[str] = None
        self.load_count = 0

    @property
    def current_language(self) -> Optional[str]:
        return self._language

    def get(self, language: str, lang_dir: Optional[str] = None) -> SpellDictionary:
        """Return the dictionary for ``language``, loading it if needed."""
        lang_dir = lang_dir or self._default_lang_dir
        with self._lock:
            if (self._dictionary is None
                    or language != self._language
                    or lang_dir != self._lang_dir):
                self._load(language, lang_dir)
            return self._dictionary

    def reload(self, language: str, lang_dir: Optional[str] = None) -> SpellDictionary:
        """Force a fresh load of ``language``."""
        lang_dir = lang_dir or self._default_lang_dir
        with self._lock:
            self._load(language, lang_dir)
            return self._dictionary

    def clear(self):
        with self._lock:
            self._dictionary = None
            self._language = None
            self._lang_dir = None

    def _load(self, language: str, lang_dir: Optional[str]):
        previous = self._language
        with logger.log_operation("Dictionary load", language=language, lang_dir=lang_dir):
            dictionary = self._factory(language, lang_dir)
        self._dictionary = dictionary
        self._language = language
        self._lang_dir = lang_dir
        self.load_count += 1
        if previous is not None and previous != language:
            logger.info("Dictionary language changed", previous=previous, language=language)
