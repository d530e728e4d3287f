"""Tests for SelectionStore."""

import pytest

from braindown.core.ui.selection import ContextMenu, Modal, SelectionState, SelectionStore, Tool


@pytest.fixture
def selection() -> SelectionStore:
    return SelectionStore()


def test_initial_state(selection: SelectionStore) -> None:
    state = selection.get_state()
    assert state.active_tool is Tool.SELECT
    assert state.has_selection is False
    assert state.is_editing is False


def test_select_node_replaces_selection(selection: SelectionStore) -> None:
    selection.select_edge("e1")
    selection.select_node("a")
    selection.select_node("b")

    state = selection.get_state()
    assert state.selected_node_ids == {"b"}
    assert state.selected_edge_ids == frozenset()


def test_select_edge_clears_nodes(selection: SelectionStore) -> None:
    selection.select_nodes(["a", "b"])
    selection.select_edge("e1")

    state = selection.get_state()
    assert state.selected_node_ids == frozenset()
    assert state.selected_edge_ids == {"e1"}


def test_toggle_node_selection(selection: SelectionStore) -> None:
    selection.select_node("a")
    selection.toggle_node_selection("b")
    assert selection.get_state().selected_node_ids == {"a", "b"}

    selection.toggle_node_selection("a")
    assert selection.get_state().selected_node_ids == {"b"}


def test_add_to_selection_and_select_all(selection: SelectionStore) -> None:
    selection.select_node("a")
    selection.add_to_selection(["b", "c"])
    assert selection.get_state().selection_count == 3

    selection.select_all(["x", "y"])
    assert selection.get_state().selected_node_ids == {"x", "y"}


def test_clear_selection(selection: SelectionStore) -> None:
    selection.select_nodes(["a"])
    selection.clear_selection()

    assert selection.get_state().has_selection is False


def test_set_tool_leaves_edit_mode(selection: SelectionStore) -> None:
    selection.start_editing("a")

    selection.set_tool("note")

    state = selection.get_state()
    assert state.active_tool is Tool.NOTE
    assert state.editing_node_id is None


def test_set_tool_rejects_unknown_tool(selection: SelectionStore) -> None:
    with pytest.raises(ValueError):
        selection.set_tool("lasso")


def test_start_editing_selects_node(selection: SelectionStore) -> None:
    selection.select_nodes(["a", "b"])

    selection.start_editing("b")

    state = selection.get_state()
    assert state.is_editing is True
    assert state.selected_node_ids == {"b"}

    selection.stop_editing()
    assert selection.get_state().is_editing is False


def test_context_menu_and_modal(selection: SelectionStore) -> None:
    selection.show_context_menu(10, 20, "a")
    selection.show_modal("delete-confirm", {"ids": ["a"]})

    state = selection.get_state()
    assert state.context_menu == ContextMenu(x=10, y=20, node_id="a")
    assert state.modal == Modal(kind="delete-confirm", data={"ids": ["a"]})

    selection.hide_context_menu()
    selection.hide_modal()
    assert selection.get_state().context_menu is None
    assert selection.get_state().modal is None


def test_reset(selection: SelectionStore) -> None:
    selection.select_node("a")
    selection.set_tool(Tool.EDGE)
    selection.show_modal("export")

    selection.reset()

    assert selection.get_state() == SelectionState()
