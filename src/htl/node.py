from __future__ import annotations


class Node:
    """Base class of the two HTL tree node kinds.

    - ElementNode: a tag (empty for anonymous groups), attrs and ordered children
    - TextNode: a literal payload, always a leaf

    A node owns its children exclusively. There are no parent pointers, so a
    tree built by appending fresh nodes cannot contain cycles.
    """

    __slots__ = ()

    ELEMENT = 0
    TEXT = 1

    kind: int

    @property
    def is_element(self) -> bool:
        return self.kind == Node.ELEMENT

    @property
    def is_text(self) -> bool:
        return self.kind == Node.TEXT

    def render(self) -> str:
        """Serialize this node and its subtree to HTML."""
        from .serialize import to_html

        return to_html(self)

    def __str__(self) -> str:
        return self.render()


class ElementNode(Node):
    __slots__ = ("attrs", "children", "tag")

    kind = Node.ELEMENT

    def __init__(self, tag: str = "", attrs: dict[str, str] | None = None) -> None:
        self.tag = tag
        self.attrs: dict[str, str] = dict(attrs) if attrs else {}
        self.children: list[Node] = []

    @property
    def is_anonymous(self) -> bool:
        """Empty-tag elements group their children without any markup."""
        return self.tag == ""

    def append_child(self, child: Node) -> None:
        if child is self:
            msg = f"Cannot append <{self.tag}> to itself"
            raise ValueError(msg)
        self.children.append(child)

    def set_attr(self, key: str, value: str) -> None:
        # Last write wins.
        self.attrs[key] = value

    def __repr__(self) -> str:
        return f"ElementNode({self.tag!r}, attrs={self.attrs!r}, children={len(self.children)})"


class TextNode(Node):
    __slots__ = ("data",)

    kind = Node.TEXT

    def __init__(self, data: str) -> None:
        self.data = data

    @property
    def children(self) -> list[Node]:
        return []

    def append_child(self, child: Node) -> None:
        msg = "Text nodes cannot have children"
        raise ValueError(msg)

    def __repr__(self) -> str:
        return f"TextNode({self.data!r})"
