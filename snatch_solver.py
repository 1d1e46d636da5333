"""
Snatch Solver

Finds every dictionary word that can be formed by combining the letters of
two or more words currently on the table ("snatching" them).
Uses an anagram index keyed by sorted letters.
"""

import os
import threading
import time
from collections import defaultdict
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from rapidfuzz import fuzz, process


def canonical_key(letters: str) -> str:
    """Uppercase letters sorted into a fixed order, e.g. 'tip' -> 'IPT'."""
    return ''.join(sorted(letters.upper()))


class AnagramDictionary:
    """
    Word list indexed by canonical key.

    Built once from a word source and never mutated afterwards, so a single
    instance can be shared by any number of solvers.
    """

    MIN_WORD_LENGTH = 3
    MAX_SUGGESTIONS = 5
    MIN_SIMILARITY = 60  # rapidfuzz ratio, 0-100

    DEFAULT_DICTIONARY_PATH = os.environ.get(
        'SNATCH_DICTIONARY',
        os.path.join(os.path.dirname(os.path.abspath(__file__)), 'words.txt'))

    _instance = None
    _instance_lock = threading.Lock()

    def __init__(self, lines: Iterable[str]):
        """
        Index a word source.

        Args:
            lines: One word per entry (e.g. an open file). Case is normalized
                   and words shorter than MIN_WORD_LENGTH are skipped.
                   Duplicates are kept.
        """
        index = defaultdict(list)
        by_length = defaultdict(dict)
        count = 0
        for line in lines:
            word = line.strip().upper()
            if len(word) < self.MIN_WORD_LENGTH:
                continue
            index[canonical_key(word)].append(word)
            by_length[len(word)][word] = None  # unique, in load order
            count += 1

        self._index: Dict[str, Tuple[str, ...]] = {key: tuple(bucket) for key, bucket in index.items()}
        self._by_length: Dict[int, Tuple[str, ...]] = {n: tuple(words) for n, words in by_length.items()}
        self._count = count

    @classmethod
    def from_file(cls, path) -> 'AnagramDictionary':
        """Load a dictionary file. Raises RuntimeError if it cannot be read."""
        try:
            with open(path, 'r', encoding='utf-8') as f:
                dictionary = cls(f)
        except (OSError, UnicodeDecodeError) as e:
            raise RuntimeError(f"Cannot open dictionary file: {path}") from e

        print(f"Loaded {len(dictionary)} words from dictionary")
        return dictionary

    @classmethod
    def get_instance(cls, path=None) -> 'AnagramDictionary':
        """
        Shared process-wide dictionary, loaded on first use.

        The path only matters on the first call; later calls return the
        already-built instance.
        """
        if cls._instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    cls._instance = cls.from_file(path or cls.DEFAULT_DICTIONARY_PATH)
        return cls._instance

    @classmethod
    def reset_instance(cls):
        """Forget the shared instance (tests)."""
        with cls._instance_lock:
            cls._instance = None

    def __len__(self):
        return self._count

    def __contains__(self, word):
        bucket = self._index.get(canonical_key(word))
        return bucket is not None and word.upper() in bucket

    def lookup(self, key: str) -> Optional[Tuple[str, ...]]:
        """All dictionary words whose letters are exactly `key`'s, or None."""
        return self._index.get(canonical_key(key))

    def words_of_length(self, length: int) -> Tuple[str, ...]:
        """Distinct dictionary words of the given length."""
        return self._by_length.get(length, ())

    def find_similar_words(self, word: str, limit: Optional[int] = None) -> List[str]:
        """
        Find words similar to the given word using fuzzy matching.

        Meant for OCR misreads: searches words one letter shorter up to one
        letter longer and returns the best matches, most similar first.
        """
        word = word.upper()
        limit = limit or self.MAX_SUGGESTIONS

        candidates = []
        for length in range(max(self.MIN_WORD_LENGTH, len(word) - 1), len(word) + 2):
            candidates.extend(self.words_of_length(length))

        if not candidates:
            return []

        results = process.extract(word, candidates, scorer=fuzz.ratio, limit=limit)
        return [match[0] for match in results if match[1] >= self.MIN_SIMILARITY]


def iter_subsets(words: Sequence[str], min_size: int = 2) -> Iterator[Tuple[str, ...]]:
    """
    Yield every subset of `words` with at least `min_size` members.

    Subsets are enumerated by bitmask over the word indices, so the order is
    fixed: mask 0b011 (words 0 and 1) comes before 0b101 (words 0 and 2).
    Each input position is used at most once per subset.
    """
    n = len(words)
    for mask in range(1 << n):
        if bin(mask).count('1') < min_size:
            continue
        yield tuple(words[i] for i in range(n) if mask >> i & 1)


class SnatchSolver:
    """
    Brute-force snatch finder.

    Checks all 2^n - n - 1 combinations of two or more words, which is fine
    for the handful of words visible on a table but not beyond a few dozen.
    """

    MAX_WORDS_WARNING = 20

    def __init__(self, dictionary: Optional[AnagramDictionary] = None):
        """
        Args:
            dictionary: Index to match against. Defaults to the shared
                        AnagramDictionary, loaded on first use.
        """
        self._dictionary = dictionary

    @property
    def dictionary(self) -> AnagramDictionary:
        if self._dictionary is None:
            self._dictionary = AnagramDictionary.get_instance()
        return self._dictionary

    def generate_snatchable_words(self, words: Sequence[str]) -> List[str]:
        """
        Find dictionary words formed from the letters of two or more words.

        Args:
            words: Words currently on the table (uppercase)

        Returns:
            Matching dictionary words, one entry per (combination, word) pair.
            Duplicates are not removed and the order carries no meaning.
        """
        snatchable = []
        for _, matches in self._iter_matches(words):
            snatchable.extend(matches)
        return snatchable

    def find_snatches(self, words: Sequence[str]) -> Dict[str, List[Tuple[str, ...]]]:
        """Map each snatchable word to the word combinations that form it."""
        snatches = defaultdict(list)
        for subset, matches in self._iter_matches(words):
            for match in matches:
                snatches[match].append(subset)
        return dict(snatches)

    def _iter_matches(self, words: Sequence[str]) -> Iterator[Tuple[Tuple[str, ...], Tuple[str, ...]]]:
        """Yield (subset, dictionary words) for every subset with a match."""
        if len(words) > self.MAX_WORDS_WARNING:
            print(f"Warning: {len(words)} words on the table, checking {2 ** len(words)} combinations")

        start_time = time.time()
        subsets_checked = 0
        matches_found = 0

        for subset in iter_subsets(words):
            subsets_checked += 1
            bucket = self.dictionary.lookup(''.join(subset))
            if bucket:
                matches_found += len(bucket)
                yield subset, bucket

        elapsed = time.time() - start_time
        print(f"Snatch solver: Checked {subsets_checked} combinations in {elapsed:.2f}s, "
              f"found {matches_found} snatchable words")
