import asyncio
import time

from rich.style import Style
from rich.text import Text
from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.validation import Integer
from textual.widgets import DataTable, Footer, Header

from logsync.about import about_text
from logsync.merging import MergedView
from logsync.searching import find_next, find_previous
from logsync.session import LogSyncSession
from logsync.tui.dialogs import ModalInputDialog, ModalAboutDialog
from logsync.tui.validators import TimestampFormatValidator


def _entry_style(entry) -> Style:
    return Style(color="black", bgcolor=entry.color.hex)


class InteractiveLogSyncViewerApp(App):
    """
    Class to display a LogSyncSession's merged view using textual TUI.
    """
    TITLE = "logsync"

    BINDINGS = [
        Binding(key="q", action="quit", description="Quit"),
        Binding(key="f", action="find", description="Find"),
        Binding(key="n", action="find_next", description="Next"),
        Binding(key="p", action="find_prev", description="Prev"),
        Binding(key="c", action="toggle_match_case", description="Match case", show=False),
        Binding(key="l", action="goto_line", description="Go to line"),
        Binding(key="t", action="timestamp_format", description="Timestamp format"),
        Binding(key="v", action="toggle_file", description="Hide file"),
        Binding(key="a", action="show_all", description="Show all", show=False),
        Binding(key="r", action="refresh", description="Refresh"),
        Binding(key="f5", action="refresh", description="Refresh", show=False),
        Binding(key="h", action="help_about", description="Help/About"),
    ]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.session: LogSyncSession = None  # noqa
        self.current_search_string: str = ""
        self.match_case: bool = False

    def config(self, session: LogSyncSession) -> None:
        self.session = session
        self.session.model.add_listener(self.on_view_changed)

    def compose(self) -> ComposeResult:
        yield Header()
        yield DataTable()
        yield Footer()

    def on_mount(self) -> None:
        display_table = self.query_one(DataTable)
        display_table.cursor_type = "row"
        display_table.fixed_columns = 1
        display_table.add_columns("line", "text")
        self.load_data(self.session.view)

    def on_view_changed(self, view: MergedView) -> None:
        if self.is_running:
            self.load_data(view)

    @work(exclusive=True)
    async def load_data(self, view: MergedView):
        display_table = self.query_one(DataTable)
        cursor_row = display_table.cursor_row
        display_table.clear()

        start = time.time()
        for i, entry in enumerate(view.entries, start=1):
            if i % 100 == 0:
                # give other UI tasks a chance to work
                await asyncio.sleep(0)
            style = _entry_style(entry)
            display_table.add_row(
                Text(str(i), justify="right", style=style),
                Text(entry.text, style=style),
            )

        if view.entries:
            self.move_cursor_to_line_number(cursor_row)
        else:
            self.sub_title = ""

        elapsed = time.time() - start
        if elapsed > 10:
            self.bell()
            self.notify("Log data complete")

    def on_data_table_row_highlighted(self, event: DataTable.RowHighlighted) -> None:
        entries = self.session.view.entries
        if 0 <= event.cursor_row < len(entries):
            self.sub_title = entries[event.cursor_row].tooltip

    def get_current_cursor_line_index(self) -> int:
        return self.query_one(DataTable).cursor_row

    def move_cursor_to_line_number(self, line_number: int) -> None:
        last_line = len(self.session.view.entries) - 1
        line_number = max(0, min(line_number, last_line))
        self.query_one(DataTable).move_cursor(row=line_number, animate=False)

    #
    # methods to support find/next/prev search functions
    #

    def action_find(self) -> None:
        self.push_screen(
            ModalInputDialog("Find:", initial=self.current_search_string),
            self.save_search_string_and_move_to_next
        )

    def save_search_string_and_move_to_next(self, search_str: str) -> None:
        if not search_str:
            return
        self.current_search_string = search_str
        self.action_find_next()

    def _move_to(self, line_number: int | None) -> None:
        if line_number is None:
            self.bell()
        else:
            self.move_cursor_to_line_number(line_number)

    def action_find_next(self) -> None:
        self._move_to(
            find_next(
                self.session.view.entries,
                self.current_search_string,
                self.get_current_cursor_line_index(),
                match_case=self.match_case,
            )
        )

    def action_find_prev(self) -> None:
        self._move_to(
            find_previous(
                self.session.view.entries,
                self.current_search_string,
                self.get_current_cursor_line_index(),
                match_case=self.match_case,
            )
        )

    def action_toggle_match_case(self) -> None:
        self.match_case = not self.match_case
        self.notify(f"Match case {'on' if self.match_case else 'off'}")

    #
    # methods to support go to line function
    #

    def action_goto_line(self) -> None:
        self.push_screen(
            ModalInputDialog("Go to line:", validator=Integer(minimum=1)),
            self.move_cursor_to_line_number_1_based
        )

    def move_cursor_to_line_number_1_based(self, line_number_str: str) -> None:
        if line_number_str:
            self.move_cursor_to_line_number(int(line_number_str) - 1)

    #
    # methods that change the merged view
    #

    def action_timestamp_format(self) -> None:
        self.push_screen(
            ModalInputDialog(
                "Timestamp format:",
                initial=self.session.timestamp_format.pattern,
                validator=TimestampFormatValidator(),
            ),
            self.session.set_timestamp_format
        )

    def action_toggle_file(self) -> None:
        entries = self.session.view.entries
        if not entries:
            self.bell()
            return
        file_name = entries[self.get_current_cursor_line_index()].source_path
        self.session.set_visible(file_name, False)
        self.notify(f"Hiding {file_name} - press 'a' to show all files")

    def action_show_all(self) -> None:
        self.session.show_all()

    def action_refresh(self) -> None:
        self.session.refresh()
        self.notify("Log files reloaded")

    def action_help_about(self) -> None:
        self.push_screen(ModalAboutDialog(content=about_text(self.session.get_statistics())))
