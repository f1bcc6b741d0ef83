"""KeyNormalizer: folds option names written in any convention to snake_case.

Handles camelCase, PascalCase, kebab-case, acronym runs and digit
boundaries, so ``maxTableRows``, ``MaxTableRows``, ``max-table-rows`` and
``max_table_rows`` all name the same configuration field.
"""

import re

# Underscores, hyphens, dots and whitespace all act as word separators
_SEP = re.compile(r"[_\-.\s]+")

# camelCase boundary: "maxTable" -> "max Table"
_UPPER_LOWER = re.compile(r"([a-z])([A-Z])")

# Acronym run before a capitalised word: "XMLRoot" -> "XML Root"
_UPPER_RUN = re.compile(r"([A-Z]+)([A-Z][a-z])")

# Letter/digit boundary in either direction
_DIGIT_BOUNDARY = re.compile(r"([a-zA-Z])(\d)|(\d)([a-zA-Z])")


class KeyNormalizer:
    """Normalizes keys to lowercase words joined by a separator.

    Example usage:
        normalizer = KeyNormalizer()
        normalizer.normalize("maxTableRows")     # "max_table_rows"
        normalizer.normalize("enable-type-detection")  # "enable_type_detection"
        normalizer.words("XMLRootName")          # ["xml", "root", "name"]
    """

    def words(self, key: str) -> list[str]:
        """Split ``key`` into lowercase words."""
        s = _SEP.sub(" ", key)
        s = _UPPER_LOWER.sub(r"\1 \2", s)
        s = _UPPER_RUN.sub(r"\1 \2", s)
        # Twice: each match consumes both characters of a boundary
        s = _DIGIT_BOUNDARY.sub(r"\1\3 \2\4", s)
        s = _DIGIT_BOUNDARY.sub(r"\1\3 \2\4", s)
        return s.lower().split()

    def normalize(self, key: str, sep: str = "_") -> str:
        """Return ``key`` as lowercase words joined by ``sep``."""
        return sep.join(self.words(key))
