"""
Image Detail Screen

AI Attribution (AIA): EAI Hin R Claude Code v1.0
Full: AIA Entirely AI, Human-initiated, Reviewed, Claude Code v1.0
Expanded: This work was entirely AI-generated. AI was prompted for its contributions,
or AI assistance was enabled. AI-generated content was reviewed and approved.
The following model(s) or application(s) were used: Claude Code.
Interpretation: https://aiattribution.github.io/interpret-attribution
More: https://aiattribution.github.io/
Vibe-Coder: Andrew Potozniak <potozniak@redhat.com>
Session Date: 2026-10-19
"""

from typing import List, Optional

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.widgets import DataTable, Static, Header, Footer
from textual.screen import Screen

from catalog_screen import escape_markup
from catalog_store import Failed, FetchStatus, Succeeded, TagStore
from catalog_view import ImageDetailView, render_detail
from debug_console import DebugConsoleScreen
from debug_logger import debug_logger
from router import Router


class ImageDetailsPanel(Static):
    """Right panel showing the image and the highlighted tag"""

    def update_image_info(self, view: ImageDetailView, registry_url: str, tag: Optional[str] = None):
        """Update the displayed image information"""
        if tag:
            full_image = f"{view.pull_reference}:{tag}"
            tag_lines = f"""🏷️ Tag: {tag}
🌐 Manifest API: {registry_url}/v2/{view.name}/manifests/{tag}"""
        else:
            full_image = view.pull_reference
            tag_lines = "🏷️ Tag: (none selected)"

        details = f"""📦 Image: {view.name}
{tag_lines}
🏢 Registry: {registry_url}

📥 Pull Command:
podman image pull {full_image}

🔧 Alternative Commands:
docker pull {full_image}
skopeo inspect docker://{full_image}"""
        self.update(escape_markup(details))


class ImageDetailScreen(Screen):
    """Screen for one image, with the tags the registry lists for it"""

    CSS = """
    Screen {
        layout: horizontal;
    }

    #tags_list {
        width: 60%;
        border: solid $primary;
        margin: 1;
    }

    #image_details {
        width: 40%;
        border: solid $secondary;
        margin: 1;
        padding: 1;
    }
    """

    BINDINGS = [
        ("escape", "back", "Back"),
        ("backspace", "back", "Back"),
        ("ctrl+q", "quit", "Quit"),
        ("ctrl+d", "debug_console", "Debug Console"),
        ("f5", "refresh", "Refresh"),
        ("r", "reverse_sort", "Reverse Sort"),
    ]

    def __init__(self, image_name: str, registry_url: str, registry_client, router: Router, **kwargs):
        super().__init__(**kwargs)
        self.image_name = image_name
        self.registry_url = registry_url
        self.registry_client = registry_client
        self.router = router
        self.view = render_detail(image_name, registry_url)
        self.store: Optional[TagStore] = None
        self.tags: List[str] = []
        self.sort_reversed = False

    def compose(self) -> ComposeResult:
        """Create the detail layout"""
        yield Header()
        with Horizontal():
            tags_table = DataTable(id="tags_list", cursor_type="row")
            tags_table.add_columns("Tag", "Image", "Pull Reference")
            yield tags_table

            yield ImageDetailsPanel(id="image_details")
        yield Footer()

    def on_mount(self) -> None:
        self.mount_store()

    def on_unmount(self) -> None:
        if self.store:
            self.store.discard()

    def _spawn_fetch(self, coroutine):
        return self.run_worker(coroutine, exclusive=True, group="tags_fetch")

    def mount_store(self) -> None:
        """Fetch the tag list with a fresh store"""
        if self.store:
            self.store.discard()
        self.store = TagStore(self.image_name, spawn=self._spawn_fetch, tui_debug_logger=debug_logger)
        self.store.subscribe(self.on_status_changed)
        self.store.begin_fetch_if_idle(self.registry_client, self.registry_url)
        self.refresh_view()

    def on_status_changed(self, status: FetchStatus) -> None:
        if isinstance(status, Failed):
            self.notify(f"❌ Tags unavailable: {status.message}", severity="warning", timeout=5)
        self.refresh_view()

    def update_title(self, status: FetchStatus):
        if isinstance(status, Succeeded):
            self.title = f"Image - {self.image_name} ({len(self.tags)} tags)"
        elif isinstance(status, Failed):
            self.title = f"Image - {self.image_name} (tags unavailable)"
        else:
            self.title = f"Image - {self.image_name} (loading tags...)"

    def refresh_view(self) -> None:
        status = self.store.current_status()
        self.tags = self.store.tags()
        if self.sort_reversed:
            self.tags.reverse()

        tags_table = self.query_one("#tags_list", DataTable)
        tags_table.clear()
        for tag in self.tags:
            tags_table.add_row("🏷️", self.image_name, f"{self.view.pull_reference}:{tag}")

        details_panel = self.query_one("#image_details", ImageDetailsPanel)
        if self.tags:
            tags_table.move_cursor(row=0)
            details_panel.update_image_info(self.view, self.registry_url, self.tags[0])
        else:
            details_panel.update_image_info(self.view, self.registry_url)

        self.update_title(status)

    def on_data_table_row_highlighted(self, event: DataTable.RowHighlighted) -> None:
        if 0 <= event.cursor_row < len(self.tags):
            details_panel = self.query_one("#image_details", ImageDetailsPanel)
            details_panel.update_image_info(self.view, self.registry_url, self.tags[event.cursor_row])

    def action_reverse_sort(self) -> None:
        """Reverse the current tag order"""
        self.sort_reversed = not self.sort_reversed
        self.notify("Tag sort: reversed" if self.sort_reversed else "Tag sort: default")
        self.refresh_view()

    def action_refresh(self) -> None:
        self.mount_store()

    def action_back(self) -> None:
        """Go back to the previous location"""
        self.router.back()

    def action_debug_console(self) -> None:
        """Open debug console"""
        self.app.push_screen(DebugConsoleScreen(self.registry_client))

    def action_quit(self) -> None:
        """Quit the application"""
        self.app.exit()
