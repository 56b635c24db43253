"""
OAuth2 configuration and client construction for Google Services MCP Server.

Credentials come from the environment (client id/secret plus previously
issued tokens). The setup command runs the authorization-code flow once to
obtain those tokens and stores them in a .env file.
"""

import os
import re
from dataclasses import dataclass, replace
from http.server import BaseHTTPRequestHandler, HTTPServer
from pathlib import Path
from urllib.parse import parse_qs, urlparse

from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import Flow
from googleapiclient.discovery import build

from google_services_mcp.session import CapabilitySession
from google_services_mcp.types import ConfigurationError
from google_services_mcp.utils import log

# Scopes required for read/write access to all five document families
SCOPES = [
    "https://www.googleapis.com/auth/drive",
    "https://www.googleapis.com/auth/spreadsheets",
    "https://www.googleapis.com/auth/presentations",
    "https://www.googleapis.com/auth/documents",
    "https://www.googleapis.com/auth/forms",
]

AUTH_URI = "https://accounts.google.com/o/oauth2/auth"
TOKEN_URI = "https://oauth2.googleapis.com/token"

DEFAULT_OAUTH_PORT = 8080
DEFAULT_REDIRECT_URI = f"http://localhost:{DEFAULT_OAUTH_PORT}/callback"

# (service name, API version) per session attribute
SERVICES = {
    "drive": ("drive", "v3"),
    "sheets": ("sheets", "v4"),
    "slides": ("slides", "v1"),
    "docs": ("docs", "v1"),
    "forms": ("forms", "v1"),
}


@dataclass(frozen=True)
class Settings:
    """OAuth client settings read from the environment."""

    client_id: str | None = None
    client_secret: str | None = None
    redirect_uri: str = DEFAULT_REDIRECT_URI
    access_token: str | None = None
    refresh_token: str | None = None

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "Settings":
        env = os.environ if environ is None else environ
        return cls(
            client_id=env.get("GOOGLE_CLIENT_ID") or None,
            client_secret=env.get("GOOGLE_CLIENT_SECRET") or None,
            redirect_uri=env.get("GOOGLE_REDIRECT_URI") or DEFAULT_REDIRECT_URI,
            access_token=env.get("GOOGLE_ACCESS_TOKEN") or None,
            refresh_token=env.get("GOOGLE_REFRESH_TOKEN") or None,
        )

    def require_client(self) -> None:
        """
        Raises:
            ConfigurationError: If the client id or secret is missing
        """
        missing = [
            name
            for name, value in (
                ("GOOGLE_CLIENT_ID", self.client_id),
                ("GOOGLE_CLIENT_SECRET", self.client_secret),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(
                f"Missing {' and '.join(missing)} in environment variables"
            )

    def client_config(self) -> dict:
        """Client configuration in the shape google-auth-oauthlib expects."""
        return {
            "web": {
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "auth_uri": AUTH_URI,
                "token_uri": TOKEN_URI,
                "redirect_uris": [self.redirect_uri],
            }
        }


def build_credentials(settings: Settings) -> Credentials:
    """
    Build OAuth2 user credentials from settings.

    Without a stored access token the credentials start unauthorized; with a
    refresh token they refresh on first use.

    Raises:
        ConfigurationError: If the client id or secret is missing
    """
    settings.require_client()
    return Credentials(
        token=settings.access_token,
        refresh_token=settings.refresh_token,
        token_uri=TOKEN_URI,
        client_id=settings.client_id,
        client_secret=settings.client_secret,
        scopes=SCOPES,
    )


def create_session(settings: Settings | None = None) -> CapabilitySession:
    """
    Authorize and build one API client per service family.

    Args:
        settings: OAuth settings (read from the environment when omitted)

    Returns:
        A CapabilitySession ready for tool calls

    Raises:
        ConfigurationError: If the client id or secret is missing
    """
    settings = settings or Settings.from_env()
    log("Attempting to authorize Google API clients...")
    credentials = build_credentials(settings)
    if not settings.access_token:
        log("No GOOGLE_ACCESS_TOKEN set. Run google-services-mcp-auth to obtain tokens.")

    clients = {
        attribute: build(service, version, credentials=credentials, cache_discovery=False)
        for attribute, (service, version) in SERVICES.items()
    }
    log("Google API clients authorized successfully.")
    return CapabilitySession(credentials=credentials, **clients)


# === OAUTH SETUP ===


class OAuthCallbackHandler(BaseHTTPRequestHandler):
    """HTTP request handler for the OAuth redirect."""

    def log_message(self, format: str, *args) -> None:
        """Suppress HTTP request logging."""
        pass

    def do_GET(self) -> None:
        parsed = urlparse(self.path)
        params = parse_qs(parsed.query)

        if parsed.path != "/callback":
            self.send_response(404)
            self.end_headers()
            return

        if "error" in params:
            error = params["error"][0]
            self._respond(400, f"Authentication failed: {error}")
            self.server.auth_code = None
            self.server.auth_error = error
            return

        if "code" in params:
            self._respond(
                200, "Authentication successful! You can close this window."
            )
            self.server.auth_code = params["code"][0]
            self.server.auth_error = None
            return

        self._respond(400, "No authorization code received.")

    def _respond(self, status: int, message: str) -> None:
        self.send_response(status)
        self.send_header("Content-Type", "text/html")
        self.end_headers()
        self.wfile.write(f"<html><body><h1>{message}</h1></body></html>".encode())


class _CallbackServer(HTTPServer):
    """Loopback server that records when handle_request times out."""

    timeout_reached = False

    def handle_timeout(self) -> None:
        self.timeout_reached = True


def wait_for_auth_code(port: int, timeout: int = 300) -> str:
    """
    Start a temporary HTTP server and wait for the OAuth callback.

    Args:
        port: Port to listen on
        timeout: Timeout in seconds (default 5 minutes)

    Returns:
        Authorization code from the callback

    Raises:
        RuntimeError: If authentication fails or times out
    """
    server = _CallbackServer(("localhost", port), OAuthCallbackHandler)
    server.auth_code = None
    server.auth_error = None
    server.timeout = timeout

    log(f"Listening for OAuth callback on http://localhost:{port}/callback")
    try:
        # Favicon and similar requests land here too
        while server.auth_code is None and server.auth_error is None:
            server.handle_request()
            if server.timeout_reached:
                break
    finally:
        server.server_close()

    if server.auth_error:
        raise RuntimeError(f"OAuth error: {server.auth_error}")
    if not server.auth_code:
        raise RuntimeError("Authentication timed out or no code received")
    return server.auth_code


def save_tokens(env_path: Path, access_token: str, refresh_token: str | None) -> None:
    """
    Write tokens into a .env file, replacing any existing token lines.

    Args:
        env_path: Path of the .env file (created if missing)
        access_token: OAuth access token
        refresh_token: OAuth refresh token (skipped when None)
    """
    values = {"GOOGLE_ACCESS_TOKEN": access_token}
    if refresh_token:
        values["GOOGLE_REFRESH_TOKEN"] = refresh_token

    content = env_path.read_text() if env_path.exists() else ""
    for key, value in values.items():
        line = f"{key}={value}"
        pattern = re.compile(rf"^{key}=.*$", re.MULTILINE)
        if pattern.search(content):
            content = pattern.sub(line, content)
        else:
            if content and not content.endswith("\n"):
                content += "\n"
            content += line + "\n"

    env_path.write_text(content)
    log(f"Tokens saved to {env_path}")


def tokens_are_valid(settings: Settings) -> bool:
    """Check stored tokens with a minimal Drive call."""
    try:
        drive = build(
            "drive", "v3", credentials=build_credentials(settings), cache_discovery=False
        )
        drive.files().list(pageSize=1).execute()
        return True
    except Exception as e:
        log(f"Stored tokens rejected: {e}")
        return False


def authorize(settings: Settings, port: int) -> Credentials:
    """
    Run the authorization-code flow through a loopback redirect.

    Returns:
        Credentials holding the issued access and refresh tokens
    """
    settings.require_client()
    flow = Flow.from_client_config(
        settings.client_config(), scopes=SCOPES, redirect_uri=settings.redirect_uri
    )
    auth_url, _ = flow.authorization_url(access_type="offline", prompt="consent")

    log("\n" + "=" * 60)
    log("Authorize this app by visiting this URL in your browser:")
    log("\n" + auth_url + "\n")
    log("=" * 60 + "\n")

    code = wait_for_auth_code(port)
    log("Received authorization code, exchanging for tokens...")
    flow.fetch_token(code=code)
    credentials = flow.credentials
    if not credentials.refresh_token:
        log("Did not receive refresh token. Token might expire.")
    return credentials


def setup_main() -> None:
    """Obtain OAuth tokens and store them in .env."""
    port = int(os.environ.get("OAUTH_PORT", DEFAULT_OAUTH_PORT))
    settings = Settings.from_env()
    if settings.redirect_uri == DEFAULT_REDIRECT_URI:
        settings = replace(settings, redirect_uri=f"http://localhost:{port}/callback")

    try:
        settings.require_client()
    except ConfigurationError as e:
        log(str(e))
        log("Set GOOGLE_CLIENT_ID and GOOGLE_CLIENT_SECRET before running setup.")
        raise SystemExit(1)

    if settings.access_token and settings.refresh_token:
        log("Tokens found in environment. Testing existing tokens...")
        if tokens_are_valid(settings):
            log("Existing tokens are valid.")
            return
        log("Existing tokens are invalid, getting new ones...")

    credentials = authorize(settings, port)
    save_tokens(Path(".env"), credentials.token, credentials.refresh_token)
    log("Authentication successful!")


if __name__ == "__main__":
    setup_main()
