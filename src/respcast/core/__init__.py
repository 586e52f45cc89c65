"""
respcast core: path lookup, type coercion, response extraction, and
placeholder formatting. Everything here is synchronous and free of I/O.
"""

from . import ir
from .coercion import coerce, parse_number
from .config import ExtractorConfig, MissingPlaceholder, load_config
from .extractor import ExtractedRecord, ResponseExtractor, extract
from .formatting import format_string, resolve_param
from .mixins import find_mixin_arg, get_mixin_args
from .paths import PathCache, get_by_path, parse_path
from .type_parser import parse_type

__all__ = [
    "ir",
    "parse_path",
    "get_by_path",
    "PathCache",
    "coerce",
    "parse_number",
    "parse_type",
    "extract",
    "ResponseExtractor",
    "ExtractedRecord",
    "format_string",
    "resolve_param",
    "get_mixin_args",
    "find_mixin_arg",
    "ExtractorConfig",
    "MissingPlaceholder",
    "load_config",
]
