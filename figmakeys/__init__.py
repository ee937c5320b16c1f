"""
figmakeys — Figma 文字、圖片與設計 token 擷取

走訪 Figma 文件樹，依頁面與 variant 產生可比對、可重現的 key 紀錄與警告。
"""

__version__ = "0.1.0"

from .tree_reducer import reduce_tree, linearize, find_nearest_linkable_parent
from .filters import FilterPolicy, FilterDecision, text_policy, image_policy
from .colors import (
    MissingArgumentError,
    InvalidArgumentError,
    clamp_and_scale,
    round_to,
    angle_between,
    linear_gradient_string,
    radial_gradient_string,
    solid_color_string,
)
from .variant_merger import merge_variants
from .duplicates import (
    FigmaFile,
    ExtractionWarning,
    WarningLink,
    create_warning,
    find_duplicate_warnings,
    format_warnings_log,
)
from .document_parser import PageNotFoundError, ParserContext, ParseResult, parse_document
from .area_resolver import resolve_largest_variants
from .texts import parse_text_node, strip_debug_info
from .images import parse_image_node
from .tokens import parse_token_node, group_tokens
from .config import load_config, validate_config

__all__ = [
    "__version__",
    "reduce_tree",
    "linearize",
    "find_nearest_linkable_parent",
    "FilterPolicy",
    "FilterDecision",
    "text_policy",
    "image_policy",
    "MissingArgumentError",
    "InvalidArgumentError",
    "clamp_and_scale",
    "round_to",
    "angle_between",
    "linear_gradient_string",
    "radial_gradient_string",
    "solid_color_string",
    "merge_variants",
    "FigmaFile",
    "ExtractionWarning",
    "WarningLink",
    "create_warning",
    "find_duplicate_warnings",
    "format_warnings_log",
    "PageNotFoundError",
    "ParserContext",
    "ParseResult",
    "parse_document",
    "resolve_largest_variants",
    "parse_text_node",
    "strip_debug_info",
    "parse_image_node",
    "parse_token_node",
    "group_tokens",
    "load_config",
    "validate_config",
]
