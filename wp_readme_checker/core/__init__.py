"""
Core Layer - 核心层

包含 readme.txt 结构解析器、验证器和评分器。
"""

from wp_readme_checker.core.parser import (
    parse_readme,
    is_header_field,
    ReadmeHeader,
    ReadmeSection,
    ParsedReadme,
)
from wp_readme_checker.core.validator import (
    ReadmeValidator,
    validate_readme,
    suggest_heading,
    convert_hash_heading,
    Issue,
    ValidationResult,
)
from wp_readme_checker.core.scoring import (
    calculate_score,
    calculate_bonus,
    get_rating,
    Rating,
)

__all__ = [
    # parser
    "parse_readme",
    "is_header_field",
    "ReadmeHeader",
    "ReadmeSection",
    "ParsedReadme",
    # validator
    "ReadmeValidator",
    "validate_readme",
    "suggest_heading",
    "convert_hash_heading",
    "Issue",
    "ValidationResult",
    # scoring
    "calculate_score",
    "calculate_bonus",
    "get_rating",
    "Rating",
]
