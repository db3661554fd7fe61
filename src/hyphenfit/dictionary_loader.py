"""Locating, reading and caching hyphenation dictionaries.

Dictionaries are found by language tag, either in configured directories or
among the dictionaries bundled with pyphen. Parsed tries are kept in a
TrieCache keyed by the resolved dictionary path, so that every language is
parsed only once per process.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple, Union

import pyphen

from hyphenfit.common import MalformedPattern, UnsupportedLanguageError
from hyphenfit.consts import DEFAULT_CHARSET
from hyphenfit.pattern_dictionary import PatternDictionary
from hyphenfit.trie import PatternTrie

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

###############################################################################
# Settings
###############################################################################


@dataclass(frozen=True)
class DictionarySettings:
    """Where and how dictionaries are looked up.

    Attributes:
        search_paths: Directories searched in order before the bundled dictionaries.
        use_bundled: Fall back to the dictionaries bundled with pyphen.
        file_templates: File names tried in every directory; '{tag}' is
            replaced by a language candidate such as 'de_CH'.
        default_charset: Charset used when a file does not name one on its first line.
    """

    search_paths: Tuple[Path, ...] = ()
    use_bundled: bool = True
    file_templates: Tuple[str, ...] = ("hyph_{tag}.dic", "{tag}.dic", "{tag}")
    default_charset: str = DEFAULT_CHARSET

    @classmethod
    def with_paths(cls, *paths: PathLike, use_bundled: bool = True) -> DictionarySettings:
        """Create settings searching the given directories."""
        return cls(search_paths=tuple(Path(path) for path in paths), use_bundled=use_bundled)


def language_candidates(language: str) -> List[str]:
    """Return the lookup names of a language tag, most specific first.

    Example:
        >>> language_candidates("de-CH-1996")
        ['de_CH_1996', 'de_CH', 'de']
    """
    parts = [part for part in language.replace("-", "_").split("_") if part]
    return ["_".join(parts[:count]) for count in range(len(parts), 0, -1)]


###############################################################################
# Cache Interface
###############################################################################


class TrieCache(ABC):
    """Abstract interface for caching built tries.

    Implementations must be safe to use from several threads.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[PatternTrie]:
        """Get a trie from the cache.

        Args:
            key: The cache key (the resolved dictionary path).

        Returns:
            The cached trie, or None if not in cache.
        """

    @abstractmethod
    def put(self, key: str, trie: PatternTrie) -> None:
        """Store a trie in the cache.

        Args:
            key: The cache key.
            trie: The trie to cache.
        """

    @abstractmethod
    def clear(self) -> None:
        """Remove all entries."""


class MemoryTrieCache(TrieCache):
    """In-memory trie cache guarded by a lock.

    Does not persist across program runs.
    """

    def __init__(self) -> None:
        """Initialize an empty memory cache."""
        self._cache: Dict[str, PatternTrie] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[PatternTrie]:
        """Get a trie from the memory cache."""
        with self._lock:
            return self._cache.get(key)

    def put(self, key: str, trie: PatternTrie) -> None:
        """Store a trie in the memory cache."""
        with self._lock:
            self._cache[key] = trie

    def clear(self) -> None:
        """Remove all entries."""
        with self._lock:
            self._cache.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._cache


###############################################################################
# DictionaryLoader
###############################################################################


@dataclass
class DictionaryLoader:
    """Resolves language tags to dictionary files and builds their tries.

    Example:
        >>> loader = DictionaryLoader(DictionarySettings.with_paths("/usr/share/hyphen"))
        >>> trie = loader.load("de-CH")  # doctest: +SKIP
    """

    settings: DictionarySettings = field(default_factory=DictionarySettings)
    cache: TrieCache = field(default_factory=MemoryTrieCache)

    def find(self, language: str) -> Path:
        """Return the dictionary file of a language.

        The configured directories are searched first with every language
        candidate and file template; then the pyphen dictionaries are used.

        Args:
            language: Language tag, e.g. 'de-CH-1996', 'en_US' or 'fr'.

        Returns:
            Path of the dictionary file.

        Raises:
            UnsupportedLanguageError: If no dictionary is found.
        """
        candidates = language_candidates(language)
        if not candidates:
            raise UnsupportedLanguageError(f"Invalid language tag '{language}'")

        for candidate in candidates:
            for directory in self.settings.search_paths:
                for template in self.settings.file_templates:
                    path = directory / template.format(tag=candidate)
                    if path.is_file():
                        logger.debug("Resolved language '%s' to %s", language, path)
                        return path

        if self.settings.use_bundled:
            path = self._find_bundled(language, candidates)
            if path is not None:
                return path

        raise UnsupportedLanguageError(
            f"No hyphenation dictionary for language '{language}' "
            f"(tried {', '.join(candidates)} in {len(self.settings.search_paths)} directories"
            f"{' and the pyphen dictionaries' if self.settings.use_bundled else ''})"
        )

    @staticmethod
    def _find_bundled(language: str, candidates: Sequence[str]) -> Optional[Path]:
        """Return the pyphen dictionary of a language, or None."""
        name = pyphen.language_fallback(candidates[0])
        if name is None:
            return None
        if name.lower() != candidates[0].lower():
            logger.warning("No dictionary for '%s', falling back to the bundled '%s' dictionary", language, name)
        path = Path(pyphen.LANGUAGES[name])
        logger.debug("Resolved language '%s' to bundled dictionary %s", language, path)
        return path

    @staticmethod
    def available_bundled() -> List[str]:
        """Return the language names of the pyphen dictionaries, sorted."""
        return sorted(pyphen.LANGUAGES.keys())

    def read(self, path: PathLike) -> str:
        """Read a dictionary file and decode it.

        The file is decoded with the charset named on its first line, or with
        the default charset of the settings.

        Args:
            path: The dictionary file.

        Returns:
            The decoded dictionary source.

        Raises:
            FileNotFoundError: If the file does not exist.
            MalformedPattern: If the file cannot be decoded with its charset.
        """
        data = Path(path).read_bytes()
        first_line = data.split(b"\n", 1)[0].decode("ascii", errors="replace")
        charset = PatternDictionary.detect_charset(first_line) or self.settings.default_charset
        try:
            return data.decode(charset)
        except UnicodeDecodeError as e:
            raise MalformedPattern(f"Dictionary {path} is not valid {charset}: {e.reason}") from e

    def load_file(self, path: PathLike) -> PatternTrie:
        """Read, parse and cache the dictionary in a file."""
        key = str(Path(path).resolve())
        trie = self.cache.get(key)
        if trie is not None:
            return trie

        trie = PatternDictionary.build(self.read(path))
        self.cache.put(key, trie)
        logger.debug("Loaded dictionary %s with %d patterns", path, len(trie))
        return trie

    def load(self, language: str) -> PatternTrie:
        """Return the trie of a language, parsing its dictionary on first use.

        Raises:
            UnsupportedLanguageError: If no dictionary is found.
            MalformedPattern: If the dictionary cannot be parsed.
        """
        return self.load_file(self.find(language))
