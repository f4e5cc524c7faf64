"""
Catalog Screen - image list with facet filters

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

from typing import Optional

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import DataTable, Static, Header, Footer, Input, SelectionList
from textual.screen import Screen

from catalog_store import CatalogStore, Failed, FetchStatus, Idle
from catalog_view import registry_host, render_catalog, render_view
from debug_console import DebugConsoleScreen
from debug_logger import debug_logger
from facets import Facet, FacetFilter, classify, labels_for
from router import CatalogList, ImageDetail, Router, path_for


def escape_markup(text: str) -> str:
    return str(text).replace('[', '\\[')


class CatalogDetailsPanel(Static):
    """Right panel showing the highlighted image"""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.image_name = None

    def update_image_info(self, image_name: Optional[str], registry_url: str):
        """Update the displayed image information"""
        self.image_name = image_name
        if not image_name:
            self.update("Select an image to view details")
            return

        labels = classify(image_name)
        facet_lines = "\n".join(
            f"{facet.value}: {labels[facet].title if labels[facet] else 'Any'}"
            for facet in Facet
        )
        full_image = f"{registry_host(registry_url)}/{image_name}"
        details = f"""📦 Image: {image_name}
🧭 Route: {path_for(ImageDetail(image_name))}
🏷️ Tags API: {registry_url}/v2/{image_name}/tags/list
🏢 Registry: {registry_url}

{facet_lines}

📥 Pull Commands:
podman image pull {full_image}
docker pull {full_image}

Press Enter to open the image"""
        self.update(escape_markup(details))

    def show_message(self, message: str):
        self.image_name = None
        self.update(escape_markup(message))


class CatalogScreen(Screen):
    """Screen listing the repositories of one registry catalog"""

    CSS = """
    Screen {
        layout: horizontal;
    }

    #facet_sidebar {
        width: 24;
    }

    #facet_sidebar SelectionList {
        border: solid $primary;
        height: auto;
        margin: 0 1;
    }

    .left_panel {
        width: 1fr;
    }

    #catalog_filter {
        border: solid $primary;
        margin: 1;
        height: 3;
    }

    #catalog_list {
        border: solid $primary;
        margin: 1;
        height: 1fr;
    }

    #image_details {
        width: 40%;
        border: solid $secondary;
        margin: 1;
        padding: 1;
    }
    """

    BINDINGS = [
        ("escape", "clear_filters", "Clear Filters"),
        ("ctrl+q", "quit", "Quit"),
        ("ctrl+d", "debug_console", "Debug Console"),
        ("ctrl+f", "focus_filter", "Focus Filter"),
        ("f5", "refresh", "Refresh"),
    ]

    def __init__(self, registry_url: str, registry_client, router: Router, **kwargs):
        super().__init__(**kwargs)
        self.registry_url = registry_url
        self.registry_client = registry_client
        self.router = router
        self.store: Optional[CatalogStore] = None
        self.facet_filter = FacetFilter()
        self.filter_text = ""
        self.view = render_catalog(Idle())

    def compose(self) -> ComposeResult:
        """Create the catalog layout"""
        yield Header()
        with Horizontal():
            with Vertical(id="facet_sidebar"):
                for facet in Facet:
                    selections = [(label.title, label) for label in labels_for(facet)]
                    yield SelectionList(*selections, id=f"facet_{facet.name.lower()}")

            with Vertical(classes="left_panel"):
                yield Input(placeholder="Filter image names...", id="catalog_filter")
                catalog_table = DataTable(id="catalog_list", cursor_type="row")
                catalog_table.add_columns("📦", "Image", "Provider", "Category")
                yield catalog_table

            yield CatalogDetailsPanel(id="image_details")
        yield Footer()

    def on_mount(self) -> None:
        """Create this mount's store and start its single fetch"""
        for facet in Facet:
            self.query_one(f"#facet_{facet.name.lower()}", SelectionList).border_title = facet.value
        self.mount_store()

    def on_unmount(self) -> None:
        if self.store:
            self.store.discard()

    def _spawn_fetch(self, coroutine):
        return self.run_worker(coroutine, exclusive=True, group="catalog_fetch")

    def mount_store(self) -> None:
        """Replace the store with a fresh Idle one and fetch the catalog"""
        if self.store:
            self.store.discard()
        self.store = CatalogStore(spawn=self._spawn_fetch, tui_debug_logger=debug_logger)
        self.store.subscribe(self.on_status_changed)
        debug_logger.debug("Catalog store mounted", registry_url=self.registry_url)
        self.store.begin_fetch_if_idle(self.registry_client, self.registry_url)
        self.refresh_view()

    def on_status_changed(self, status: FetchStatus) -> None:
        self.refresh_view()
        if isinstance(status, Failed):
            self.notify(f"❌ {status.message}", severity="error", timeout=5)

    def update_title(self):
        """Update the title to show loading state and filter status"""
        host = registry_host(self.registry_url)
        if self.view.loading:
            self.title = f"Images - {host} (loading...)"
        elif self.view.failed:
            self.title = f"Images - {host} (error)"
        elif self.filter_text.strip() or self.facet_filter.is_active():
            self.title = f"Images - {host} ({len(self.view.entries)} matches from {self.view.total})"
        else:
            self.title = f"Images - {host} ({self.view.total} total)"

    def refresh_view(self) -> None:
        """Re-render the table from the store status and the current filters"""
        if self.store is None:
            return
        self.view = render_view(
            self.store.current_status(), CatalogList(), self.facet_filter, self.filter_text, self.registry_url
        )
        catalog_table = self.query_one("#catalog_list", DataTable)
        details_panel = self.query_one("#image_details", CatalogDetailsPanel)

        catalog_table.clear()
        for entry in self.view.entries:
            labels = classify(entry.name)
            category = labels[Facet.CATEGORY]
            catalog_table.add_row(
                "📦",
                entry.name,
                labels[Facet.PROVIDER].title,
                category.title if category else "-",
            )

        if self.view.entries:
            catalog_table.move_cursor(row=0)
            self.update_details_for_row(0)
        else:
            details_panel.show_message(self.view.message or "")

        self.update_title()

    def update_details_for_row(self, row_index: int) -> None:
        details_panel = self.query_one("#image_details", CatalogDetailsPanel)
        if 0 <= row_index < len(self.view.entries):
            details_panel.update_image_info(self.view.entries[row_index].name, self.registry_url)

    def activate_entry(self, row_index: int) -> None:
        """Open the detail view of the entry at row_index"""
        if 0 <= row_index < len(self.view.entries):
            name = self.view.entries[row_index].name
            debug_logger.debug("Catalog entry activated", image=name)
            self.router.navigate_to(ImageDetail(name))

    def on_data_table_row_highlighted(self, event: DataTable.RowHighlighted) -> None:
        self.update_details_for_row(event.cursor_row)

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        self.activate_entry(event.cursor_row)
        event.stop()

    def on_input_changed(self, event: Input.Changed) -> None:
        """Handle image name filter input changes"""
        if event.input.id == "catalog_filter":
            self.filter_text = event.value
            self.refresh_view()

    def on_selection_list_selected_changed(self, event: SelectionList.SelectedChanged) -> None:
        """Handle facet checkbox changes"""
        facet = Facet[event.selection_list.id[len("facet_"):].upper()]
        self.facet_filter.set_facet(facet, event.selection_list.selected)
        debug_logger.debug("Facet filter changed", filters=self.facet_filter.describe())
        self.refresh_view()

    def action_clear_filters(self) -> None:
        """Clear the name filter and every facet selection"""
        self.query_one("#catalog_filter", Input).value = ""
        for facet in Facet:
            self.query_one(f"#facet_{facet.name.lower()}", SelectionList).deselect_all()
        self.filter_text = ""
        self.facet_filter.clear()
        self.refresh_view()
        self.query_one("#catalog_list", DataTable).focus()

    def action_focus_filter(self) -> None:
        self.query_one("#catalog_filter", Input).focus()

    def action_refresh(self) -> None:
        """Discard the current store and fetch the catalog again"""
        self.notify("🔄 Refreshing catalog...", timeout=2)
        self.mount_store()

    def action_debug_console(self) -> None:
        """Open debug console"""
        self.app.push_screen(DebugConsoleScreen(self.registry_client))

    def action_quit(self) -> None:
        """Quit the application"""
        self.app.exit()
