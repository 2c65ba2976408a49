"""Result type of a context query."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class AttributeContext:
    """Attribute surrounding the cursor; empty strings when unknown."""

    name: str = ""
    value: str = ""


@dataclass(frozen=True)
class TagContext:
    """Where the cursor is inside markup.

    Always fully populated: fields that could not be determined are empty
    strings, never ``None``.
    """

    tag_name: str = ""
    attribute: AttributeContext = field(default_factory=AttributeContext)

    @property
    def is_empty(self) -> bool:
        return not (self.tag_name or self.attribute.name or self.attribute.value)

    @property
    def specificity(self) -> int:
        """0 empty, 1 tag name only, 2 attribute name known, 3 value present."""
        if self.attribute.value:
            return 3
        if self.attribute.name:
            return 2
        if self.tag_name:
            return 1
        return 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tag_name": self.tag_name,
            "attribute": {
                "name": self.attribute.name,
                "value": self.attribute.value,
            },
        }


def make_tag_context(
    tag_name: Optional[str] = None,
    attr_name: Optional[str] = None,
    attr_value: Optional[str] = None
) -> TagContext:
    """Create a TagContext, turning missing values into empty strings.

    Args:
        tag_name: The name of the tag
        attr_name: The name of the attribute
        attr_value: The value of the attribute

    Returns:
        TagContext with every field set
    """
    return TagContext(
        tag_name=tag_name or "",
        attribute=AttributeContext(name=attr_name or "", value=attr_value or ""),
    )
