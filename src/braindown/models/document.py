"""Domain models for .mschema documents: nodes, edges, canvas and metadata."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, ClassVar, Literal

from braindown.config import DEFAULT_CANVAS_BACKGROUND, DOCUMENT_VERSION
from braindown.errors import DocumentShapeError
from braindown.ids import generate_id

EndStyle = Literal["arrow", "dot"] | None

_END_STYLES = ("arrow", "dot", None)


def utc_now_iso() -> str:
    """Current time as an ISO 8601 UTC timestamp."""
    return datetime.now(tz=UTC).isoformat().replace("+00:00", "Z")


@dataclass(frozen=True)
class Point:
    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class Size:
    width: float = 200.0
    height: float = 100.0


@dataclass(frozen=True)
class NodeStyle:
    """Visual style of a node. A fill_color of None inherits from the parent node."""

    fill_color: str | None = "#3b4252"
    stroke_color: str = "#4c566a"
    stroke_width: float = 1
    font_size: float = 14
    font_family: str = "system-ui, -apple-system, sans-serif"
    text_color: str = "#eceff4"
    padding: float = 16

    def to_dict(self) -> dict[str, Any]:
        return {
            "fillColor": self.fill_color,
            "strokeColor": self.stroke_color,
            "strokeWidth": self.stroke_width,
            "fontSize": self.font_size,
            "fontFamily": self.font_family,
            "textColor": self.text_color,
            "padding": self.padding,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "NodeStyle":
        return cls(
            fill_color=data.get("fillColor"),
            stroke_color=data["strokeColor"],
            stroke_width=data["strokeWidth"],
            font_size=data["fontSize"],
            font_family=data["fontFamily"],
            text_color=data["textColor"],
            padding=data["padding"],
        )


DEFAULT_MINDMAP_STYLE = NodeStyle(
    fill_color="#5e81ac",
    stroke_color="#5e81ac",
    stroke_width=0,
    text_color="#ffffff",
    padding=12,
)


@dataclass(frozen=True)
class NoteNode:
    """A free-text note on the canvas."""

    type: ClassVar[str] = "note"

    id: str
    content: str = ""
    position: Point = field(default_factory=Point)
    size: Size = field(default_factory=Size)
    style: NodeStyle = field(default_factory=NodeStyle)


@dataclass(frozen=True)
class MindMapNode:
    """A node in a mind-map hierarchy. parent_id is None for a root."""

    type: ClassVar[str] = "mindmap"

    id: str
    content: str = ""
    parent_id: str | None = None
    children_ids: tuple[str, ...] = ()
    position: Point = field(default_factory=Point)
    size: Size = field(default_factory=Size)
    style: NodeStyle = field(default_factory=lambda: DEFAULT_MINDMAP_STYLE)


Node = NoteNode | MindMapNode


def node_to_dict(node: Node) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": node.id,
        "type": node.type,
        "position": {"x": node.position.x, "y": node.position.y},
        "size": {"width": node.size.width, "height": node.size.height},
        "style": node.style.to_dict(),
        "content": node.content,
    }
    if isinstance(node, MindMapNode):
        data["parentId"] = node.parent_id
        data["childrenIds"] = list(node.children_ids)
    return data


def node_from_dict(data: dict[str, Any]) -> Node:
    """Build a node from its JSON form, dispatching on the "type" field."""
    node_type = data.get("type")
    common: dict[str, Any] = {
        "id": data["id"],
        "content": data.get("content", ""),
        "position": Point(**data["position"]),
        "size": Size(**data["size"]),
        "style": NodeStyle.from_dict(data["style"]),
    }
    if node_type == NoteNode.type:
        return NoteNode(**common)
    if node_type == MindMapNode.type:
        return MindMapNode(
            **common,
            parent_id=data.get("parentId"),
            children_ids=tuple(data.get("childrenIds", [])),
        )
    msg = f"Unknown node type {node_type!r} for node {data.get('id')!r}"
    raise DocumentShapeError(msg)


@dataclass(frozen=True)
class EdgeStyle:
    color: str = "#a3be8c"
    start_style: EndStyle = None
    end_style: EndStyle = "arrow"

    def __post_init__(self) -> None:
        for value in (self.start_style, self.end_style):
            if value not in _END_STYLES:
                msg = f"Invalid edge end style: {value!r}"
                raise DocumentShapeError(msg)


@dataclass(frozen=True)
class Edge:
    """A connection between two nodes."""

    id: str
    source_node_id: str
    target_node_id: str
    style: EdgeStyle = field(default_factory=EdgeStyle)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "sourceNodeId": self.source_node_id,
            "targetNodeId": self.target_node_id,
            "style": {
                "color": self.style.color,
                "startStyle": self.style.start_style,
                "endStyle": self.style.end_style,
            },
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Edge":
        style = data["style"]
        return cls(
            id=data["id"],
            source_node_id=data["sourceNodeId"],
            target_node_id=data["targetNodeId"],
            style=EdgeStyle(
                color=style["color"],
                start_style=style.get("startStyle"),
                end_style=style.get("endStyle"),
            ),
        )


@dataclass(frozen=True)
class FileMeta:
    name: str
    id: str
    created_at: str
    modified_at: str


@dataclass(frozen=True)
class Viewport:
    """Canvas pan offset and zoom factor."""

    x: float = 0.0
    y: float = 0.0
    zoom: float = 1.0


@dataclass(frozen=True)
class CanvasState:
    viewport: Viewport = field(default_factory=Viewport)
    background: str = DEFAULT_CANVAS_BACKGROUND


@dataclass(frozen=True)
class Document:
    """The content of one .mschema file.

    Construction rejects duplicate node ids and mind-map parent/children
    references that do not resolve to a node of the same document.
    """

    meta: FileMeta
    canvas: CanvasState = field(default_factory=CanvasState)
    nodes: tuple[Node, ...] = ()
    edges: tuple[Edge, ...] = ()
    version: int = DOCUMENT_VERSION

    def __post_init__(self) -> None:
        if self.version != DOCUMENT_VERSION:
            msg = f"Unsupported document version {self.version!r}, expected {DOCUMENT_VERSION}"
            raise DocumentShapeError(msg)

        node_ids = [n.id for n in self.nodes]
        known = set(node_ids)
        if len(known) != len(node_ids):
            dupes = sorted({i for i in node_ids if node_ids.count(i) > 1})
            msg = f"Duplicate node ids: {dupes!r}"
            raise DocumentShapeError(msg)

        for node in self.nodes:
            if not isinstance(node, MindMapNode):
                continue
            if node.parent_id is not None and node.parent_id not in known:
                msg = f"Node {node.id!r} references missing parent {node.parent_id!r}"
                raise DocumentShapeError(msg)
            missing = [c for c in node.children_ids if c not in known]
            if missing:
                msg = f"Node {node.id!r} references missing children {missing!r}"
                raise DocumentShapeError(msg)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the on-disk JSON shape (always the full object)."""
        return {
            "version": self.version,
            "meta": {
                "name": self.meta.name,
                "id": self.meta.id,
                "createdAt": self.meta.created_at,
                "modifiedAt": self.meta.modified_at,
            },
            "canvas": {
                "viewport": {
                    "x": self.canvas.viewport.x,
                    "y": self.canvas.viewport.y,
                    "zoom": self.canvas.viewport.zoom,
                },
                "background": self.canvas.background,
            },
            "nodes": [node_to_dict(n) for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Document":
        """Parse the on-disk JSON shape.

        Raises:
            DocumentShapeError: If a required field is missing or malformed.
        """
        try:
            meta = data["meta"]
            canvas = data["canvas"]
            return cls(
                version=data["version"],
                meta=FileMeta(
                    name=meta["name"],
                    id=meta["id"],
                    created_at=meta["createdAt"],
                    modified_at=meta["modifiedAt"],
                ),
                canvas=CanvasState(
                    viewport=Viewport(**canvas["viewport"]),
                    background=canvas["background"],
                ),
                nodes=tuple(node_from_dict(n) for n in data.get("nodes", [])),
                edges=tuple(Edge.from_dict(e) for e in data.get("edges", [])),
            )
        except (KeyError, TypeError, AttributeError) as e:
            msg = f"Malformed document: {e!r}"
            raise DocumentShapeError(msg) from e


def new_document(name: str, *, background: str = DEFAULT_CANVAS_BACKGROUND) -> Document:
    """Create an empty document with fresh metadata."""
    now = utc_now_iso()
    return Document(
        meta=FileMeta(name=name, id=generate_id(), created_at=now, modified_at=now),
        canvas=CanvasState(background=background),
    )
