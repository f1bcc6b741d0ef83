"""Analysis subpackage: statistics, schema inference and string patterns.

Re-exports the public API:
- StatisticsCollector / Stats: single-pass structural statistics
- SchemaInferencer / Schema variants: structural schema with array merging
- classify / format_hint: the string pattern classifiers both of them share
"""

from response_lens.analysis.patterns import Pattern, classify, format_hint
from response_lens.analysis.schema import (
    ArraySchema,
    NullSchema,
    ObjectSchema,
    OneOf,
    PrimitiveSchema,
    Schema,
    SchemaInferencer,
)
from response_lens.analysis.stats import (
    PatternCounts,
    Stats,
    StatisticsCollector,
    StatsSummary,
)

__all__ = [
    "ArraySchema",
    "NullSchema",
    "ObjectSchema",
    "OneOf",
    "Pattern",
    "PatternCounts",
    "PrimitiveSchema",
    "Schema",
    "SchemaInferencer",
    "Stats",
    "StatisticsCollector",
    "StatsSummary",
    "classify",
    "format_hint",
]
