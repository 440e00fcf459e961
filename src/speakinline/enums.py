"""Enumerations for speakinline type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, so they serialize directly into
log lines and reports.

Python 3.13+.
"""

from enum import StrEnum


class ArgumentKind(StrEnum):
    """Best-effort classification of one raw call argument.

    StrEnum provides automatic string conversion: str(ArgumentKind.STRING) == "string"
    """

    STRING = "string"
    """Single or double quoted string: 'home.title'"""

    TEMPLATE = "template"
    """Back-quoted template literal: `home.title`"""

    OBJECT = "object"
    """Object literal: { name: 'Qwik' }"""

    LITERAL = "literal"
    """Other constant: 42, true, null, undefined"""

    IDENTIFIER = "identifier"
    """Variable or member access: key, props.key"""

    CALL = "call"
    """Call expression: getKey(), obj.fn('a')"""

    EXPRESSION = "expression"
    """Anything else: a + b, cond ? x : y, [1, 2]"""


class SkipReason(StrEnum):
    """Why a scanned call was classified dynamic.

    StrEnum provides automatic string conversion: str(SkipReason.DYNAMIC_KEY) == "dynamic_key"
    """

    MISSING_KEY = "missing_key"
    """Call without arguments"""

    DYNAMIC_KEY = "dynamic_key"
    """First argument is not a string literal"""

    INTERPOLATED_KEY = "interpolated_key"
    """String key containing a ${...} placeholder"""

    INVALID_KEY = "invalid_key"
    """Key with empty path segments"""

    DYNAMIC_PARAMS = "dynamic_params"
    """Interpolation parameters that are not a parsable object literal"""

    DYNAMIC_ARGUMENT = "dynamic_argument"
    """Reserved or locale argument known only at runtime"""


class IssueKind(StrEnum):
    """Kind of non-fatal condition recorded during a pipeline run.

    StrEnum provides automatic string conversion: str(IssueKind.MISSING_VALUE) == "missing_value"
    """

    DYNAMIC = "dynamic"
    """Call skipped because an argument is dynamic"""

    MISSING_VALUE = "missing_value"
    """No leaf value for a key in a locale"""

    SHAPE_CONFLICT = "shape_conflict"
    """Leaf and interior node collided at the same path"""

    READ_FAILURE = "read_failure"
    """Source file skipped because it could not be read"""

    UNSAFE_PARTITION = "unsafe_partition"
    """Top-level key not usable as an asset file name, partition not written"""


__all__ = [
    "ArgumentKind",
    "IssueKind",
    "SkipReason",
]
