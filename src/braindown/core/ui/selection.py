"""UI state: selection, active tool, editing node, context menu and modal."""

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from enum import StrEnum
from typing import Any, Literal

from braindown.core.store import Store


class Tool(StrEnum):
    SELECT = "select"
    NOTE = "note"
    MINDMAP = "mindmap"
    EDGE = "edge"


ModalKind = Literal["delete-confirm", "export", "new-file"]


@dataclass(frozen=True)
class ContextMenu:
    x: float
    y: float
    node_id: str | None = None


@dataclass(frozen=True)
class Modal:
    kind: ModalKind
    data: Any = None


@dataclass(frozen=True)
class SelectionState:
    selected_node_ids: frozenset[str] = field(default_factory=frozenset)
    selected_edge_ids: frozenset[str] = field(default_factory=frozenset)
    active_tool: Tool = Tool.SELECT
    editing_node_id: str | None = None
    context_menu: ContextMenu | None = None
    modal: Modal | None = None

    @property
    def selection_count(self) -> int:
        return len(self.selected_node_ids)

    @property
    def has_selection(self) -> bool:
        return bool(self.selected_node_ids)

    @property
    def is_editing(self) -> bool:
        return self.editing_node_id is not None


class SelectionStore(Store[SelectionState]):
    """In-memory UI state. Nothing here is persisted and nothing fails."""

    def __init__(self) -> None:
        super().__init__(SelectionState())

    # --- Selection ---

    def select_node(self, node_id: str) -> None:
        """Select exactly one node; edge selection is cleared."""
        self._set(selected_node_ids=frozenset({node_id}), selected_edge_ids=frozenset())

    def select_edge(self, edge_id: str) -> None:
        """Select exactly one edge; node selection is cleared."""
        self._set(selected_node_ids=frozenset(), selected_edge_ids=frozenset({edge_id}))

    def toggle_node_selection(self, node_id: str) -> None:
        """Add or remove one node (shift+click). Edge selection is untouched."""
        self._set(selected_node_ids=self._state.selected_node_ids ^ {node_id})

    def select_nodes(self, node_ids: Iterable[str]) -> None:
        """Replace the node selection (box select) and clear edges."""
        self._set(selected_node_ids=frozenset(node_ids), selected_edge_ids=frozenset())

    def add_to_selection(self, node_ids: Iterable[str]) -> None:
        self._set(selected_node_ids=self._state.selected_node_ids | frozenset(node_ids))

    def select_all(self, node_ids: Iterable[str]) -> None:
        self._set(selected_node_ids=frozenset(node_ids))

    def clear_selection(self) -> None:
        self._set(selected_node_ids=frozenset(), selected_edge_ids=frozenset())

    # --- Tool and editing ---

    def set_tool(self, tool: Tool | str) -> None:
        """Switch the active tool. Always leaves edit mode."""
        self._set(active_tool=Tool(tool), editing_node_id=None)

    def start_editing(self, node_id: str) -> None:
        self._set(editing_node_id=node_id, selected_node_ids=frozenset({node_id}))

    def stop_editing(self) -> None:
        self._set(editing_node_id=None)

    # --- Context menu and modal ---

    def show_context_menu(self, x: float, y: float, node_id: str | None = None) -> None:
        self._set(context_menu=ContextMenu(x=x, y=y, node_id=node_id))

    def hide_context_menu(self) -> None:
        self._set(context_menu=None)

    def show_modal(self, kind: ModalKind, data: Any = None) -> None:
        self._set(modal=Modal(kind=kind, data=data))

    def hide_modal(self) -> None:
        self._set(modal=None)

    def reset(self) -> None:
        """Back to the initial state, e.g. when the document is closed."""
        self._publish(SelectionState())

    def _set(self, **changes: Any) -> None:
        self._publish(replace(self._state, **changes))
