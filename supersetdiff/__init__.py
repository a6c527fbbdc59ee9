"""
supersetdiff - JSON comparison for test assertions

Compares two JSON documents and classifies them as a full match, a
superset match (the first holds extra content) or no match, together
with an annotated rendering of every difference.
"""

from .engine import (
    DiffEngine,
    compare,
    compare_streams,
    compare_values,
)
from .models import (
    PRESENCE,
    ComparisonResult,
    Difference,
    Number,
    Options,
    Span,
    Tag,
    ValueKind,
)
from .exceptions import (
    SupersetDiffError,
    InvalidJSONError,
    ConfigurationError,
    CaseFileError,
)
from .presets import (
    json_options,
    console_options,
    html_options,
)
from .comparators import (
    literal_equal,
    float_epsilon_equal,
    decimal_equal,
)
from .config import load_options, options_from_dict
from .assertions import assert_json_matches
from .runner import (
    CaseRunner,
    ScenarioResult,
    GlobalReport,
    run_cases,
)

__version__ = "1.0.0"
__all__ = [
    # Engine
    "DiffEngine",
    "compare",
    "compare_streams",
    "compare_values",
    # Models
    "PRESENCE",
    "ComparisonResult",
    "Difference",
    "Number",
    "Options",
    "Span",
    "Tag",
    "ValueKind",
    # Errors
    "SupersetDiffError",
    "InvalidJSONError",
    "ConfigurationError",
    "CaseFileError",
    # Presets
    "json_options",
    "console_options",
    "html_options",
    # Number comparison
    "literal_equal",
    "float_epsilon_equal",
    "decimal_equal",
    # Configuration
    "load_options",
    "options_from_dict",
    # Assertions
    "assert_json_matches",
    # Case runner
    "CaseRunner",
    "ScenarioResult",
    "GlobalReport",
    "run_cases",
]
