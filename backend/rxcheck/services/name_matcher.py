"""
Medicine name matching for prescription OCR text.

Detects known medicine names in noisy recognized text using bidirectional
substring containment between text tokens and vocabulary entries.
"""
import logging
import re
from typing import Iterable, List, Optional, Sequence

from rxcheck.drug_data import COMMON_MEDICINES

logger = logging.getLogger(__name__)

TOKEN_SEPARATORS = re.compile(r"[\s,.\n\r]+")


def contains_either_way(first: str, second: str) -> bool:
    """True when either string is a substring of the other."""
    return first in second or second in first


class MedicineNameMatcher:
    """
    Maps raw prescription text to known medicine names.

    Matching is bidirectional: a token matches a vocabulary entry when either
    contains the other. This tolerates truncated words ("acetaminop") and
    words glued to noise ("acetaminophenextra"). Very short tokens such as a
    single letter also match every entry containing them; that false-positive
    source is a known limitation of the heuristic and is left as is.
    """

    def __init__(self, vocabulary: Optional[Iterable[str]] = None):
        """
        Initialize the matcher.

        Args:
            vocabulary: Known medicine names, in reporting order
        """
        if vocabulary is None:
            vocabulary = COMMON_MEDICINES
        self.vocabulary = tuple(vocabulary)

    @staticmethod
    def tokenize(text: str) -> List[str]:
        """Lowercase and split text into non-empty tokens."""
        tokens = (token.strip() for token in TOKEN_SEPARATORS.split(text.lower()))
        return [token for token in tokens if token]

    def match(self, text: str) -> List[str]:
        """
        Find the vocabulary entries mentioned in the text.

        Args:
            text: Raw recognized text

        Returns:
            Matched entries without duplicates, in vocabulary order

        Raises:
            TypeError: if text is not a string
        """
        if not isinstance(text, str):
            raise TypeError(f"text must be a str, got {type(text).__name__}")

        words = self.tokenize(text)
        detected = []
        for medicine in self.vocabulary:
            if medicine in detected:
                continue
            if any(contains_either_way(word, medicine) for word in words):
                detected.append(medicine)
        return detected


def create_name_matcher(vocabulary: Optional[Sequence[str]] = None) -> MedicineNameMatcher:
    """Factory function to create a name matcher."""
    return MedicineNameMatcher(vocabulary)


_default_matcher = MedicineNameMatcher()


def match_medicines(text: str) -> List[str]:
    """Detect known medicine names in recognized prescription text."""
    detected = _default_matcher.match(text)
    logger.info(f"Detected medicines: {detected}")
    return detected
