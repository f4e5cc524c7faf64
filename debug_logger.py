"""
TUI Debug Logger

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

import logging

DEFAULT_DEBUG_LOG = '/tmp/container-image-catalog-debug.log'


class TUIDebugLogger:
    """Debug logger for TUI operations"""

    SENSITIVE_KEYWORDS = [
        # Passwords and passphrases
        'password', 'passwd', 'passphrase', 'pwd',
        # Actual tokens and credentials (but not metadata about them)
        'cached_token', 'access_token', 'refresh_token', 'bearer_token',
        'credential', 'creds',
        # Authentication secrets (but not types like auth_type)
        'authorization', 'authenticate',
        # API keys and secrets
        'secret', 'api_key', 'apikey',
    ]

    def __init__(self, enabled: bool = False, verbose: bool = False, debug_file_path: str = None):
        self.enabled = False
        self.verbose = False
        self.logger = None
        if enabled:
            self.configure(enabled=enabled, verbose=verbose, debug_file_path=debug_file_path)

    def configure(self, enabled: bool = False, verbose: bool = False, debug_file_path: str = None):
        """Enable or disable file logging; modules keep their reference to this instance"""
        self.enabled = enabled
        self.verbose = verbose
        if not enabled:
            self.logger = None
            return

        if debug_file_path is None:
            debug_file_path = DEFAULT_DEBUG_LOG

        # File only, console output would corrupt the TUI
        logging.basicConfig(
            level=logging.DEBUG,
            format='%(asctime)s [TUI-DEBUG] %(name)s: %(message)s',
            handlers=[
                logging.FileHandler(debug_file_path)
            ]
        )

        if not verbose:
            # Silence noisy HTTP libraries unless verbose mode
            logging.getLogger('httpcore').setLevel(logging.WARNING)
            logging.getLogger('httpx').setLevel(logging.WARNING)

        self.logger = logging.getLogger('TUI-Operations')
        mode_text = "VERBOSE" if verbose else "STANDARD"
        self.logger.info(f"=== TUI Debug Mode ({mode_text}) Enabled - Logging to: {debug_file_path} ===")

    def _mask_sensitive_data(self, key: str, value) -> str:
        """Mask sensitive data like passwords, tokens, and auth headers"""
        if any(keyword in key.lower() for keyword in self.SENSITIVE_KEYWORDS):
            if isinstance(value, str) and len(value) > 8:
                # Show first 3 and last 3 characters for identification
                return f"{value[:3]}...{value[-3:]}"
            return "[REDACTED]"

        return str(value)

    def format_message(self, message: str, **kwargs) -> str:
        """Render message plus masked keyword context"""
        safe_kwargs = {k: self._mask_sensitive_data(k, v) for k, v in kwargs.items()}
        context = ", ".join(f"{k}={v}" for k, v in safe_kwargs.items())
        return f"{message}" + (f" | {context}" if context else "")

    def debug(self, message: str, **kwargs):
        """Log debug message with optional context"""
        if self.enabled and self.logger:
            self.logger.debug(self.format_message(message, **kwargs))

    def info(self, message: str, **kwargs):
        """Log info message"""
        if self.enabled and self.logger:
            self.logger.info(self.format_message(message, **kwargs))

    def error(self, message: str, **kwargs):
        """Log error message"""
        if self.enabled and self.logger:
            self.logger.error(self.format_message(message, **kwargs))


# Global debug logger instance (disabled by default, enabled in main() if --debug flag provided)
debug_logger = TUIDebugLogger(enabled=False)
