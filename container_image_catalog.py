#!/usr/bin/env python3
"""
Container Image Catalog TUI

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

import argparse
from typing import List, Optional

from textual.app import App

from catalog_screen import CatalogScreen
from config_manager import ConfigManager
from debug_logger import DEFAULT_DEBUG_LOG, debug_logger
from image_detail_view import ImageDetailScreen
from mock_data import MOCK_PUBLIC_REGISTRY, mock_registry
from registry_client import DEFAULT_TIMEOUT, RegistryManager, registry_manager
from router import CATALOG_PATH, ImageDetail, RouteTarget, Router

VERSION = "0.1.0"


class ContainerImageCatalog(App):
    """Main TUI application: one router, one catalog screen, detail screens on top"""

    TITLE = "Container Image Catalog"

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, registry_url: str, registry_client: RegistryManager = None,
                 initial_path: str = CATALOG_PATH, mock_mode: bool = False, **kwargs):
        super().__init__(**kwargs)
        self.registry_url = registry_url.rstrip('/')
        self.registry_client = registry_client or registry_manager
        self.mock_mode = mock_mode
        self.router = Router(initial_path, tui_debug_logger=debug_logger)
        self.catalog_screen: Optional[CatalogScreen] = None

    def on_mount(self) -> None:
        """Show the catalog, then the detail view if the initial path names one"""
        self.sub_title = f"{self.registry_url}{' (mock)' if self.mock_mode else ''}"
        self.router.subscribe(self.on_route_changed)

        self.catalog_screen = CatalogScreen(self.registry_url, self.registry_client, self.router)
        self.push_screen(self.catalog_screen)

        target = self.router.current()
        if isinstance(target, ImageDetail):
            self.push_screen(self._detail_screen(target.name))

    def _detail_screen(self, name: str) -> ImageDetailScreen:
        return ImageDetailScreen(name, self.registry_url, self.registry_client, self.router)

    def on_route_changed(self, target: RouteTarget) -> None:
        """Keep the screen stack in step with the router"""
        debug_logger.debug("Dispatching route", target=target)
        if isinstance(target, ImageDetail):
            if isinstance(self.screen, ImageDetailScreen):
                self.switch_screen(self._detail_screen(target.name))
            else:
                self.push_screen(self._detail_screen(target.name))
        elif isinstance(self.screen, ImageDetailScreen):
            self.pop_screen()

    def action_quit(self) -> None:
        """Quit the application"""
        debug_logger.debug("Application quit requested")
        self.exit()


def parse_arguments(argv: List[str] = None) -> argparse.Namespace:
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(description="Container Image Catalog - TUI for browsing a registry catalog")

    parser.add_argument(
        "--registry",
        help="Container registry base URL, e.g. https://registry.example.com:5000"
    )

    parser.add_argument(
        "--mock",
        action="store_true",
        help="Use the built-in mock registry for development/testing"
    )

    parser.add_argument(
        "--path",
        default=CATALOG_PATH,
        help="Initial location, /images or /images/{name} (default: /images)"
    )

    parser.add_argument(
        "--timeout",
        type=float,
        help=f"Seconds to wait for the registry (default: saved setting or {DEFAULT_TIMEOUT:g})"
    )

    parser.add_argument(
        "--insecure",
        action="store_true",
        help="Skip TLS certificate verification"
    )

    parser.add_argument("--username", help="Registry username")
    parser.add_argument("--password", help="Registry password or token")
    parser.add_argument(
        "--auth-type",
        choices=["none", "basic", "bearer"],
        default="none",
        help="Authentication scheme for the registry (default: none)"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable TUI operations debug logging (separate from API debug console)"
    )

    parser.add_argument(
        "--verbose-debug",
        action="store_true",
        help="Enable verbose debug logging including HTTP libraries (httpcore, httpx)"
    )

    parser.add_argument(
        "--debug-location",
        type=str,
        default=DEFAULT_DEBUG_LOG,
        help=f"File path for TUI debug logging (default: {DEFAULT_DEBUG_LOG})"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"Container Image Catalog {VERSION}"
    )

    args = parser.parse_args(argv)
    if args.timeout is not None and args.timeout <= 0:
        parser.error("--timeout must be greater than zero")
    return args


def saved_timeout(config: ConfigManager) -> float:
    """Saved timeout, or the default when the stored value is unusable"""
    value = config.get_setting("timeout", DEFAULT_TIMEOUT)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        debug_logger.error("Ignoring invalid saved timeout", timeout=repr(value), fallback=DEFAULT_TIMEOUT)
        return DEFAULT_TIMEOUT
    return float(value)


def resolve_settings(args: argparse.Namespace, config: ConfigManager) -> dict:
    """Combine CLI flags with saved settings; CLI wins"""
    registry_url = args.registry or config.get_setting("registry_url")
    mock_mode = args.mock

    if not registry_url:
        # Nothing to browse - default to mock mode
        mock_mode = True
    if mock_mode and not registry_url:
        registry_url = MOCK_PUBLIC_REGISTRY

    timeout = args.timeout if args.timeout is not None else saved_timeout(config)
    verify_tls = False if args.insecure else config.get_setting("verify_tls", True)

    return {
        "registry_url": registry_url.rstrip('/'),
        "mock_mode": mock_mode,
        "timeout": float(timeout),
        "verify_tls": bool(verify_tls),
    }


def main(argv: List[str] = None):
    """Main entry point"""
    args = parse_arguments(argv)

    debug_enabled = args.debug or args.verbose_debug
    debug_logger.configure(enabled=debug_enabled, verbose=args.verbose_debug, debug_file_path=args.debug_location)
    debug_logger.info(f"Starting Container Image Catalog {VERSION}",
                      debug_enabled=debug_enabled,
                      verbose_debug=args.verbose_debug)

    config = ConfigManager()
    debug_logger.debug("Config loaded", **config.get_config_info())
    settings = resolve_settings(args, config)
    debug_logger.debug("Configuration resolved", **settings)

    registry_manager.set_tui_debug_logger(debug_logger)
    registry_manager.configure(
        timeout=settings["timeout"],
        verify_tls=settings["verify_tls"],
        transport=mock_registry.transport() if settings["mock_mode"] else None,
    )
    if args.username or args.password:
        registry_manager.set_registry_config(
            settings["registry_url"],
            username=args.username,
            password=args.password,
            auth_type=args.auth_type,
        )

    if not settings["mock_mode"]:
        config.remember_registry(settings["registry_url"])

    app = ContainerImageCatalog(
        registry_url=settings["registry_url"],
        registry_client=registry_manager,
        initial_path=args.path,
        mock_mode=settings["mock_mode"],
    )
    app.run()


if __name__ == "__main__":
    main()
