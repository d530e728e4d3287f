"""Document session store: the one open document and its dirty flag."""

from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Any

from loguru import logger

from braindown.core.store import Store
from braindown.models.document import (
    Document,
    Edge,
    MindMapNode,
    Node,
    Viewport,
    utc_now_iso,
)


@dataclass(frozen=True)
class SessionState:
    document: Document | None = None
    source_location: str | None = None
    dirty: bool = False

    @property
    def has_map(self) -> bool:
        return self.document is not None

    @property
    def nodes(self) -> tuple[Node, ...]:
        return self.document.nodes if self.document else ()

    @property
    def edges(self) -> tuple[Edge, ...]:
        return self.document.edges if self.document else ()

    @property
    def viewport(self) -> Viewport:
        return self.document.canvas.viewport if self.document else Viewport()


EMPTY_SESSION = SessionState()


class DocumentSessionStore(Store[SessionState]):
    """Tracks the editing session of a single open document.

    Every content mutation is a no-op while no document is loaded and sets
    the dirty flag otherwise. Viewport changes never set it.
    """

    def __init__(self) -> None:
        super().__init__(EMPTY_SESSION)

    def load_map(self, document: Document, location: str) -> None:
        """Load a document, discarding any previously loaded one and its unsaved changes."""
        logger.debug("Loaded document {!r} from {}", document.meta.name, location)
        self._publish(SessionState(document=document, source_location=location, dirty=False))

    def close_map(self) -> None:
        self._publish(EMPTY_SESSION)

    def relocate(self, location: str) -> None:
        """Record that the open document's file moved (rename). Dirty flag unchanged."""
        if self._state.document is None:
            return
        self._publish(replace(self._state, source_location=location))

    def update_file(self, document: Document) -> None:
        """Replace the whole document."""
        self._mutate(lambda _: document)

    def add_node(self, node: Node) -> None:
        self._mutate(lambda doc: replace(doc, nodes=(*doc.nodes, node)))

    def update_node(self, node_id: str, **changes: Any) -> None:
        """Merge changes into the node with node_id.

        Raises:
            TypeError: If changes name a field the node type does not have.
        """
        if "id" in changes:
            msg = "A node's id cannot be changed"
            raise TypeError(msg)
        self._mutate(
            lambda doc: replace(
                doc,
                nodes=tuple(replace(n, **changes) if n.id == node_id else n for n in doc.nodes),
            )
        )

    def remove_node(self, node_id: str) -> None:
        """Remove a node, every edge attached to it, and mind-map references to it.

        Former children of the node become roots.
        """
        self._mutate(lambda doc: _without_node(doc, node_id))

    def add_edge(self, edge: Edge) -> None:
        self._mutate(lambda doc: replace(doc, edges=(*doc.edges, edge)))

    def remove_edge(self, edge_id: str) -> None:
        self._mutate(
            lambda doc: replace(doc, edges=tuple(e for e in doc.edges if e.id != edge_id))
        )

    def update_viewport(self, viewport: Viewport) -> None:
        """Pan/zoom. Does not mark the document dirty."""
        doc = self._state.document
        if doc is None:
            return
        canvas = replace(doc.canvas, viewport=viewport)
        self._publish(replace(self._state, document=replace(doc, canvas=canvas)))

    def mark_saved(self) -> None:
        """Clear the dirty flag and stamp meta.modified_at with the current time."""
        doc = self._state.document
        if doc is None:
            return
        meta = replace(doc.meta, modified_at=utc_now_iso())
        self._publish(replace(self._state, document=replace(doc, meta=meta), dirty=False))

    def _mutate(self, change: Callable[[Document], Document]) -> None:
        doc = self._state.document
        if doc is None:
            logger.debug("No document loaded, ignoring change")
            return
        self._publish(replace(self._state, document=change(doc), dirty=True))


def _without_node(doc: Document, node_id: str) -> Document:
    nodes: list[Node] = []
    for node in doc.nodes:
        if node.id == node_id:
            continue
        if isinstance(node, MindMapNode):
            if node.parent_id == node_id:
                node = replace(node, parent_id=None)
            if node_id in node.children_ids:
                node = replace(node, children_ids=tuple(c for c in node.children_ids if c != node_id))
        nodes.append(node)

    edges = tuple(
        e for e in doc.edges if e.source_node_id != node_id and e.target_node_id != node_id
    )
    return replace(doc, nodes=tuple(nodes), edges=edges)
