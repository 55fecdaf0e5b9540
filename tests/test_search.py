import re

from dcv.search import SearchState

ANSI = re.compile(r"\x1b\[[0-9;]*m")
LOGS = ["line 1", "line 2", "error occurred", "line 4"]


def test_plain_search_finds_match():
    state = SearchState(text="error")
    state.perform_search(LOGS, 24)
    assert state.results == [LOGS.index("error occurred")]


def test_empty_text_finds_nothing():
    state = SearchState(text="", results=[1, 2])
    assert state.perform_search(LOGS, 24) is None
    assert state.results == []


def test_case_sensitive_by_default():
    state = SearchState(text="ERROR")
    state.perform_search(LOGS, 24)
    assert state.results == []


def test_ignore_case():
    state = SearchState(text="ERROR", ignore_case=True)
    state.perform_search(LOGS, 24)
    assert state.results == [LOGS.index("error occurred")]


def test_regex_search():
    state = SearchState(text=r"line [24]", regex=True)
    state.perform_search(LOGS, 24)
    assert state.results == [LOGS.index("line 2"), LOGS.index("line 4")]


def test_regex_ignore_case():
    state = SearchState(text="^LINE", regex=True, ignore_case=True)
    state.perform_search(LOGS, 24)
    assert len(state.results) == len([line for line in LOGS if line.startswith("line")])


def test_invalid_regex_has_no_results():
    state = SearchState(text="(", regex=True)
    assert state.perform_search(LOGS, 24) is None
    assert state.results == []


def test_scroll_is_never_negative():
    state = SearchState(text="line 1")
    assert state.perform_search(LOGS, 24) == 0


def test_scroll_centres_match():
    lines = [f"row {i}" for i in range(40)] + ["needle"]
    state = SearchState(text="needle")
    assert state.perform_search(lines, 20) == 33


def test_no_scroll_when_current_index_out_of_range():
    state = SearchState(text="error", current_idx=5)
    assert state.perform_search(LOGS, 24) is None
    assert state.results == [LOGS.index("error occurred")]


def test_clear_enters_mode():
    state = SearchState(text="x", cursor_pos=1, results=[0], current_idx=1)
    state.clear()
    assert state.mode is True
    assert state.text == ""
    assert state.results == []
    assert state.cursor_pos == 0


def test_escape_leaves_mode():
    state = SearchState(mode=True, text="error", cursor_pos=5, results=[2])
    state.input_escape()
    assert state == SearchState()


def test_append_and_delete():
    state = SearchState(mode=True, text="err", cursor_pos=3)
    state.append("o")
    assert state.text == "erro"
    assert state.delete_last_char() is True
    assert state.text == "err"
    assert state.cursor_pos == len("err")


def test_cursor_bounds():
    state = SearchState(text="ab")
    state.cursor_left()
    assert state.cursor_pos == 0
    for _ in range(4):
        state.cursor_right()
    assert state.cursor_pos == len("ab")


def test_toggles_flip():
    state = SearchState()
    state.toggle_ignore_case()
    state.toggle_regex()
    assert (state.ignore_case, state.regex) == (True, True)
    state.toggle_regex()
    assert state.regex is False


def test_render_shows_prompt():
    state = SearchState(mode=True, text="error", cursor_pos=5)
    assert "/error" in ANSI.sub("", state.render())