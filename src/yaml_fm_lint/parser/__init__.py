"""Front-matter location and YAML parsing with line fidelity."""

from yaml_fm_lint.parser.frontmatter import FrontMatterBlock, locate_front_matter
from yaml_fm_lint.parser.loader import AttributeParser, FrontMatterParseError, FrontMatterSafetyError

__all__ = [
    "AttributeParser",
    "FrontMatterBlock",
    "FrontMatterParseError",
    "FrontMatterSafetyError",
    "locate_front_matter",
]
