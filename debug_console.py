"""
Debug Console Screen

AI Attribution (AIA): EAI Hin R Claude Code v1.0
Full: AIA Entirely AI, Human-initiated, Reviewed, Claude Code v1.0
Expanded: This work was entirely AI-generated. AI was prompted for its contributions,
or AI assistance was enabled. AI-generated content was reviewed and approved.
The following model(s) or application(s) were used: Claude Code.
Interpretation: https://aiattribution.github.io/interpret-attribution
More: https://aiattribution.github.io/
Vibe-Coder: Andrew Potozniak <potozniak@redhat.com>
Session Date: 2026-10-19

Lists every registry exchange recorded by the RegistryManager, most recent
last, with a side panel for the highlighted call.
"""

from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import urlparse

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.widgets import DataTable, Static, Header, Footer
from textual.screen import Screen

MAX_PANEL_HEADERS = 5


def split_call_url(url: str) -> Tuple[str, str]:
    """Split a logged URL into (base URL, endpoint)"""
    if "/v2/" in url:
        base_url, endpoint = url.split("/v2/", 1)
        return base_url, "/v2/" + endpoint
    parsed = urlparse(url)
    if parsed.scheme and parsed.netloc:
        return f"{parsed.scheme}://{parsed.netloc}", parsed.path or "/"
    return "Unknown", url


def is_failed_call(call: Dict[str, Any]) -> bool:
    return not 200 <= call.get("status_code", 0) < 300


def format_status(status_code: int) -> str:
    if status_code == 0:
        return "❌ ERR"
    if 200 <= status_code < 300:
        return f"✅ {status_code}"
    return f"⚠ {status_code}"


def format_size(size_bytes: int) -> str:
    if size_bytes > 1024:
        return f"{size_bytes / 1024:.1f}KB"
    return f"{size_bytes}B"


class ApiCallDetailsPanel(Static):
    """Right panel showing one recorded registry call"""

    def update_call_info(self, call: Optional[Dict[str, Any]]):
        if not call:
            self.update("No registry calls recorded yet")
            return

        url = call.get("url", "Unknown")
        method = call.get("method", "GET")
        status_code = call.get("status_code", 0)

        headers = call.get("headers", {})
        header_lines = [f"  {name}: {value}" for name, value in list(headers.items())[:MAX_PANEL_HEADERS]]
        if len(headers) > MAX_PANEL_HEADERS:
            header_lines.append(f"  (+{len(headers) - MAX_PANEL_HEADERS} more)")

        lines = [
            f"{method} {url}",
            f"Status: {format_status(status_code)}",
            f"Took {call.get('duration_ms', '?')}ms, {format_size(call.get('size_bytes', 0))}"
            f" at {call.get('timestamp', '?')}",
        ]
        if call.get("error"):
            lines += ["", f"Transport error: {call['error']}"]
        lines += [
            "",
            "Reproduce:",
            f'curl -i -H "Accept: application/json" "{url}"',
            "",
            "Response headers:",
            "\n".join(header_lines) if header_lines else "  (none)",
            "",
            "Body:",
            call.get("content_preview") or "(empty)",
        ]
        self.update("\n".join(str(line) for line in lines).replace('[', '\\['))


class DebugConsoleScreen(Screen):
    """Screen for viewing API call debug information"""

    CSS = """
    Screen {
        layout: horizontal;
    }

    #api_call_list {
        width: 60%;
        border: solid $primary;
        margin: 1;
    }

    #api_call_details {
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
        ("f5", "refresh", "Refresh"),
        ("e", "toggle_errors", "Errors Only"),
        ("ctrl+x", "purge", "Purge All"),
        ("ctrl+d", "no_action", ""),
    ]

    def __init__(self, registry_manager, **kwargs):
        super().__init__(**kwargs)
        self.registry_manager = registry_manager
        self.errors_only = False
        self.calls: List[Dict[str, Any]] = []

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal():
            calls_table = DataTable(id="api_call_list", cursor_type="row")
            calls_table.add_columns("Time", "Method", "Base URL", "Endpoint", "Status", "Size", "Duration")
            yield calls_table

            yield ApiCallDetailsPanel(id="api_call_details")
        yield Footer()

    def on_mount(self) -> None:
        self.load_api_calls()

    def load_api_calls(self) -> None:
        """Rebuild the table from the registry manager's call log"""
        calls_table = self.query_one("#api_call_list", DataTable)
        details_panel = self.query_one("#api_call_details", ApiCallDetailsPanel)

        log = list(self.registry_manager.api_call_log)
        self.calls = [call for call in log if is_failed_call(call)] if self.errors_only else log

        calls_table.clear()
        for call in self.calls:
            base_url, endpoint = split_call_url(call.get("url", ""))
            calls_table.add_row(
                call.get("timestamp", "?"),
                call.get("method", "GET"),
                base_url,
                endpoint,
                format_status(call.get("status_code", 0)),
                format_size(call.get("size_bytes", 0)),
                f"{call.get('duration_ms', 0):,}ms"
            )

        failures = sum(1 for call in log if is_failed_call(call))
        scope = "failed calls" if self.errors_only else "API calls"
        self.title = f"Debug Console - {len(self.calls)} {scope} ({failures} failed of {len(log)})"

        # Most recent call is the interesting one
        if self.calls:
            calls_table.move_cursor(row=len(self.calls) - 1)
            details_panel.update_call_info(self.calls[-1])
        else:
            details_panel.update_call_info(None)

    def on_data_table_row_highlighted(self, event: DataTable.RowHighlighted) -> None:
        if 0 <= event.cursor_row < len(self.calls):
            self.query_one("#api_call_details", ApiCallDetailsPanel).update_call_info(self.calls[event.cursor_row])

    def action_refresh(self) -> None:
        self.load_api_calls()
        self.notify("API call list refreshed")

    def action_toggle_errors(self) -> None:
        """Show only failed calls, or everything again"""
        self.errors_only = not self.errors_only
        self.load_api_calls()

    def action_back(self) -> None:
        self.app.pop_screen()

    def action_purge(self) -> None:
        """Forget every recorded call"""
        self.registry_manager.api_call_log.clear()
        self.notify("API call log purged", severity="warning")
        self.load_api_calls()

    def action_no_action(self) -> None:
        """Swallow Ctrl+D so the console does not open on top of itself"""

    def action_quit(self) -> None:
        self.app.exit()
