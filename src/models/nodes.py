"""
Parse tree node model

A Node is a tagged variant: the ``type`` tag names the rule that produced
it, and ``attributes`` holds whatever that rule's builder returned.
"""

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
class Node:
    """
    Represents a node in the parse tree

    Attributes:
        type: Rule type tag (e.g., "heading", "list", "text")
        attributes: Builder-produced attributes, also readable as
                    node attributes (node.level, node.content)

    Example:
        For source "# Hi\\n":
        Node(
            type="heading",
            attributes={
                "level": 1,
                "content": [Node(type="text", attributes={"content": "Hi"})]
            }
        )
    """
    type: str
    attributes: Dict[str, Any] = field(default_factory=dict)

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails
        if name == "attributes" or name.startswith("__"):
            raise AttributeError(name)
        try:
            return self.attributes[name]
        except KeyError:
            raise AttributeError(
                f"'{self.type}' node has no attribute '{name}'"
            ) from None

    def __getitem__(self, name: str) -> Any:
        if name == "type":
            return self.type
        return self.attributes[name]

    def get(self, name: str, default: Any = None) -> Any:
        """Attribute lookup with default, mirroring dict.get"""
        return self.attributes.get(name, default)
