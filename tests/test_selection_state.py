from data.table import ColumnType
from ui.state.selection_state import SelectionState

TYPES = {"day": ColumnType.DATE, "region": ColumnType.STRING, "revenue": ColumnType.NUMBER}


def test_initial_is_empty():
    state = SelectionState.initial()
    assert state.x_key is None
    assert state.y_key is None


def test_plain_click_toggles_x():
    state = SelectionState.initial().click_column("region")
    assert state.x_key == "region"
    assert state.is_x("region")

    state = state.click_column("day")
    assert state.x_key == "day"

    assert state.click_column("day").x_key is None


def test_modified_click_toggles_y_for_numbers():
    state = SelectionState.initial().click_column("revenue", modified=True, types=TYPES)
    assert state.y_key == "revenue"
    assert state.is_y("revenue")
    assert state.x_key is None

    assert state.click_column("revenue", modified=True, types=TYPES).y_key is None


def test_modified_click_on_non_number_is_noop():
    state = SelectionState(x_key="day", y_key="revenue")

    assert state.click_column("region", modified=True, types=TYPES) == state
    assert state.click_column("region", modified=True) == state


def test_hide_column_clears_matching_axes():
    state = SelectionState(x_key="revenue", y_key="revenue")
    assert state.hide_column("revenue") == SelectionState()

    state = SelectionState(x_key="day", y_key="revenue")
    assert state.hide_column("day") == SelectionState(y_key="revenue")
    assert state.hide_column("region") == state


def test_load_new_table_clears_selection():
    assert SelectionState(x_key="a", y_key="b").load_new_table() == SelectionState.initial()


def test_is_x_with_nothing_selected():
    assert not SelectionState().is_x("a")
    assert not SelectionState().is_y("a")
