"""Main Textual app class."""

from __future__ import annotations

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.css.query import NoMatches
from textual.events import Key
from textual.reactive import reactive
from textual.widgets import Header, Static

from dish_browser.api import CatalogApi
from dish_browser.constant import LOADING_MESSAGE
from dish_browser.debug_log import log_debug
from dish_browser.models import DashboardCounts
from dish_browser.rendering import badge_style, render_counts, render_view
from dish_browser.session import STATUS_ERROR, CatalogSession, fetch_dashboard_counts


class CatalogBrowserApp(App):
    """A Textual app for browsing and searching one restaurant's menu."""

    TITLE = "Dish Browser"

    CSS = """
    Screen {
        layout: vertical;
    }

    #main-layout {
        height: 1fr;
    }

    #dashboard-pane {
        width: 1fr;
        border: round $primary;
        padding: 1;
    }

    #menu-pane {
        width: 3fr;
        border: round $secondary;
        padding: 1;
    }

    #search-bar {
        border: heavy $secondary;
        padding: 0 1;
        margin-bottom: 1;
        height: 4;
    }

    #menu-scroll {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    .pane-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    input_state = reactive("normal")
    search_text = reactive("")

    BINDINGS = [
        ("backspace", "backspace_query", "Delete query char"),
        ("escape", "clear_search", "Clear search"),
        ("ctrl+c", "clear_search", "Clear search"),
        Binding("ctrl+r", "refresh", "Refresh", priority=True),
        ("up", "scroll_menu(-1)", "Scroll up"),
        ("down", "scroll_menu(1)", "Scroll down"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, restaurant_id: str, api: CatalogApi | None = None, owns_api: bool | None = None) -> None:
        super().__init__()
        if owns_api is None:
            owns_api = api is None
        self.api = api if api is not None else CatalogApi()
        self.session = CatalogSession(restaurant_id, self.api, owns_api=owns_api)
        self.counts = DashboardCounts()
        self.counts_loading = True
        self.menu_text = Text()
        log_debug("app_init", restaurant_id=restaurant_id)

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-layout"):
            with Vertical(id="dashboard-pane"):
                yield Static("Dashboard", classes="pane-title")
                yield Static("Loading...", id="counts")
            with Vertical(id="menu-pane"):
                yield Static(id="search-bar")
                with VerticalScroll(id="menu-scroll"):
                    yield Static(id="menu")

    def on_mount(self) -> None:
        self._refresh_all()
        self.run_worker(self._load_counts(), group="counts")
        self.run_worker(self._load_catalog(), group="catalog")

    async def on_unmount(self) -> None:
        await self.session.close()

    def on_key(self, event: Key) -> None:
        if not event.is_printable or not event.character or len(event.character) != 1:
            return

        if self.input_state == "normal":
            if event.character != "/":
                return
            self.input_state = "search"
            self.search_text = ""
            self._refresh_search_bar()
            event.stop()
            return

        self.search_text += event.character
        self._start_search()
        event.stop()

    def action_backspace_query(self) -> None:
        if self.input_state != "search" or not self.search_text:
            return
        self.search_text = self.search_text[:-1]
        self._start_search()

    def action_clear_search(self) -> None:
        if self.input_state == "normal" and not self.session.overlay.is_active:
            return
        self.input_state = "normal"
        self.search_text = ""
        self._refresh_search_bar()
        self.run_worker(self._clear_search(), group="catalog")

    def action_refresh(self) -> None:
        self.run_worker(self._refresh_catalog(), group="catalog")

    def action_scroll_menu(self, delta: int) -> None:
        try:
            scroller = self.query_one("#menu-scroll", VerticalScroll)
        except NoMatches:
            return
        scroller.scroll_relative(y=delta, animate=False)

    def _start_search(self) -> None:
        self._refresh_search_bar()
        self.run_worker(self._search(self.search_text), group="search")

    async def _search(self, text: str) -> None:
        await self.session.search(text)
        self._refresh_menu()

    async def _clear_search(self) -> None:
        await self.session.clear_search()
        self._refresh_all()

    async def _load_catalog(self) -> None:
        await self.session.load()
        self._refresh_all()

    async def _refresh_catalog(self) -> None:
        await self.session.refresh_after_mutation()
        self._refresh_all()

    async def _load_counts(self) -> None:
        self.counts = await fetch_dashboard_counts(self.api)
        self.counts_loading = False
        self._refresh_counts()

    def _refresh_all(self) -> None:
        self.sub_title = self.session.restaurant_name
        self._refresh_counts()
        self._refresh_search_bar()
        self._refresh_menu()

    def _refresh_counts(self) -> None:
        try:
            widget = self.query_one("#counts", Static)
        except NoMatches:
            return
        if self.counts_loading:
            widget.update("Loading...")
            return
        widget.update(render_counts(self.counts))

    def _refresh_search_bar(self) -> None:
        try:
            bar = self.query_one("#search-bar", Static)
        except NoMatches:
            return
        if self.input_state == "normal":
            bar.update(f"Dishes for {self.session.restaurant_name}\nPress / to search. Ctrl+R refresh.")
            return

        text = Text()
        text.append("Search", style=badge_style("category"))
        text.append(f": {self.search_text}")
        text.append("\nEsc clear + reload", style="dim")
        bar.update(text)

    def _refresh_menu(self) -> None:
        if self.session.status == STATUS_ERROR:
            self.menu_text = Text(self.session.error, style="bold red")
        elif self.session.loading and not self.session.dishes:
            self.menu_text = Text(LOADING_MESSAGE, style="dim")
        else:
            self.menu_text = render_view(self.session.view())

        try:
            widget = self.query_one("#menu", Static)
        except NoMatches:
            return
        widget.update(self.menu_text)
