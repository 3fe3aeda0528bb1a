"""CLI for paper-client - authorization and read-only doc access.

Usage:
    paper-client status                        # Show configured credentials
    paper-client auth url [--response-type T]  # Print the authorize URL
    paper-client auth login                    # Interactive authorization flow
    paper-client auth parse <redirect-url>     # Parse a redirect URL
    paper-client auth token <code>             # Exchange a code for a token
    paper-client auth revoke                   # Revoke DROPBOX_TOKEN
    paper-client docs list [--limit N]         # List doc ids
    paper-client docs download <doc-id>        # Export a doc
"""

from __future__ import annotations

import argparse
import os
import sys
import webbrowser
from pathlib import Path


def cmd_status() -> int:
    """Show which credentials are configured."""
    from paper_client.config import get_credential_status

    status = get_credential_status()

    print("=" * 60)
    print("PAPER-CLIENT CREDENTIAL STATUS")
    print("=" * 60)
    print()
    print(f"Repository: {status['repo_root']}")
    print(f".env:       {'[x]' if status['env_file'] else '[ ]'}")
    print()
    print("Access token:")
    print(f"  DROPBOX_TOKEN:         {'[x]' if status['token'] else '[ ]'}")
    print()
    print("App:")
    print(f"  DROPBOX_CLIENT_ID:     {'[x]' if status['app']['client_id'] else '[ ]'}")
    print(f"  DROPBOX_CLIENT_SECRET: {'[x]' if status['app']['client_secret'] else '[ ]'}")
    print(f"  Redirect URI:          {status['app']['redirect_uri']}")
    print()

    return 0


def _app_settings() -> tuple[str | None, str | None, str]:
    """Read app key, secret and redirect URI from the environment."""
    from paper_client.config import (
        CLIENT_ID_ENV,
        CLIENT_SECRET_ENV,
        DEFAULT_REDIRECT_URI,
        REDIRECT_URI_ENV,
    )

    return (
        os.environ.get(CLIENT_ID_ENV),
        os.environ.get(CLIENT_SECRET_ENV),
        os.environ.get(REDIRECT_URI_ENV, DEFAULT_REDIRECT_URI),
    )


def _print_authorization(response) -> None:
    from paper_client.auth import CodeResponse

    if isinstance(response, CodeResponse):
        print(f"Code  : {response.code}")
    else:
        print(f"Token      : {response.access_token}")
        print(f"Token type : {response.token_type}")
        print(f"Account ID : {response.account_id or 'unknown'}")
        print(f"UID        : {response.uid or 'unknown'}")
    if response.state:
        print(f"State : {response.state}")


def auth_url(response_type: str) -> int:
    """Print the authorize URL."""
    from paper_client.auth import build_authorization_uri

    client_id, _, redirect_uri = _app_settings()
    if not client_id:
        print("Error: DROPBOX_CLIENT_ID is not set")
        return 1

    print(build_authorization_uri(client_id, redirect_uri, response_type))
    return 0


def auth_parse(redirect_url: str) -> int:
    """Parse a redirect URL and show what it carries."""
    from paper_client.auth import parse_authorization_response

    response = parse_authorization_response(redirect_url)
    if response is None:
        print("No authorization response found in URL")
        return 1

    _print_authorization(response)
    return 0


def auth_token(code: str) -> int:
    """Exchange an authorization code for an access token."""
    from paper_client.auth import AuthOperations
    from paper_client.http import PaperClientError

    client_id, client_secret, redirect_uri = _app_settings()
    if not client_id or not client_secret:
        print("Error: DROPBOX_CLIENT_ID and DROPBOX_CLIENT_SECRET must be set")
        return 1

    try:
        with AuthOperations(client_id, client_secret, redirect_uri) as auth:
            token = auth.fetch_token(code)
    except PaperClientError as e:
        print(f"Error: {e}")
        return 1

    _print_authorization(token)
    print()
    print("Save the token as DROPBOX_TOKEN in .env to use it")
    return 0


def auth_login(response_type: str, no_browser: bool = False) -> int:
    """Interactive authorization flow."""
    from paper_client.auth import CodeResponse, run_authorization_flow

    client_id, _, redirect_uri = _app_settings()
    if not client_id:
        print("Error: DROPBOX_CLIENT_ID is not set")
        return 1

    print("=" * 60)
    print("PAPER-CLIENT LOGIN")
    print("=" * 60)
    print()

    response = run_authorization_flow(
        client_id,
        redirect_uri,
        response_type,
        prompt=input,
        open_url=None if no_browser else webbrowser.open,
    )
    if response is None:
        print("No authorization response found in URL")
        return 1

    if isinstance(response, CodeResponse):
        return auth_token(response.code)

    _print_authorization(response)
    return 0


def auth_revoke() -> int:
    """Revoke the configured access token."""
    from paper_client import Dropbox
    from paper_client.http import PaperClientError

    try:
        with Dropbox() as dbx:
            dbx.revoke_token()
    except PaperClientError as e:
        print(f"Error: {e}")
        return 1

    print("Token revoked")
    return 0


def docs_list(limit: int, fetch_all: bool) -> int:
    """Print doc ids, one per line."""
    from paper_client import Dropbox
    from paper_client.http import PaperClientError

    try:
        with Dropbox() as dbx:
            if fetch_all:
                for doc_id in dbx.paper.iter_doc_ids(page_size=limit):
                    print(doc_id)
            else:
                page = dbx.paper.list(limit=limit).body
                for doc_id in page.doc_ids:
                    print(doc_id)
                if page.has_more:
                    print(f"(more available, cursor: {page.cursor.value})", file=sys.stderr)
    except PaperClientError as e:
        print(f"Error: {e}")
        return 1

    return 0


def docs_download(doc_id: str, export_format: str, output: str | None) -> int:
    """Export a doc to stdout or a file."""
    from paper_client import Dropbox
    from paper_client.http import PaperClientError
    from paper_client.paper import ExportFormat

    try:
        with Dropbox() as dbx:
            with dbx.paper.download(doc_id, ExportFormat(export_format)) as resp:
                content = resp.read()
                meta = resp.body
    except PaperClientError as e:
        print(f"Error: {e}")
        return 1

    if output:
        path = Path(output).expanduser()
        path.write_bytes(content)
        print(f"Saved '{meta.title}' (revision {meta.revision}) to {path}")
    else:
        sys.stdout.write(content.decode("utf-8"))

    return 0


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="paper-client",
        description="Dropbox Paper API client",
    )
    subparsers = parser.add_subparsers(dest="command", help="Command")

    # status command
    subparsers.add_parser("status", help="Show credential status")

    # auth subcommand
    auth_parser = subparsers.add_parser("auth", help="OAuth2 authorization")
    auth_subparsers = auth_parser.add_subparsers(dest="auth_command", help="Command")

    # auth url
    url_parser = auth_subparsers.add_parser("url", help="Print the authorize URL")
    url_parser.add_argument(
        "--response-type",
        choices=["code", "token"],
        default="code",
        help="OAuth2 grant (default: code)",
    )

    # auth login
    login_parser = auth_subparsers.add_parser("login", help="Interactive authorization")
    login_parser.add_argument(
        "--response-type",
        choices=["code", "token"],
        default="code",
        help="OAuth2 grant (default: code)",
    )
    login_parser.add_argument(
        "--no-browser",
        action="store_true",
        help="Don't open browser automatically",
    )

    # auth parse
    parse_parser = auth_subparsers.add_parser("parse", help="Parse a redirect URL")
    parse_parser.add_argument("redirect_url", help="URL the browser was redirected to")

    # auth token
    token_parser = auth_subparsers.add_parser("token", help="Exchange a code for a token")
    token_parser.add_argument("code", help="Authorization code")

    # auth revoke
    auth_subparsers.add_parser("revoke", help="Revoke DROPBOX_TOKEN")

    # docs subcommand
    docs_parser = subparsers.add_parser("docs", help="Paper docs")
    docs_subparsers = docs_parser.add_subparsers(dest="docs_command", help="Command")

    # docs list
    list_parser = docs_subparsers.add_parser("list", help="List doc ids")
    list_parser.add_argument("--limit", type=int, default=100, help="Page size (default: 100)")
    list_parser.add_argument(
        "--all",
        action="store_true",
        dest="fetch_all",
        help="Follow cursors until every doc id is listed",
    )

    # docs download
    download_parser = docs_subparsers.add_parser("download", help="Export a doc")
    download_parser.add_argument("doc_id", help="Paper doc id")
    download_parser.add_argument(
        "--format",
        choices=["markdown", "html"],
        default="markdown",
        dest="export_format",
        help="Export format (default: markdown)",
    )
    download_parser.add_argument("--output", "-o", help="Write to file instead of stdout")

    args = parser.parse_args(argv if argv is not None else sys.argv[1:])

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "status":
        return cmd_status()

    if args.command == "auth":
        if args.auth_command == "url":
            return auth_url(args.response_type)
        elif args.auth_command == "login":
            return auth_login(args.response_type, args.no_browser)
        elif args.auth_command == "parse":
            return auth_parse(args.redirect_url)
        elif args.auth_command == "token":
            return auth_token(args.code)
        elif args.auth_command == "revoke":
            return auth_revoke()
        else:
            auth_parser.print_help()
            return 0

    if args.command == "docs":
        if args.docs_command == "list":
            return docs_list(args.limit, args.fetch_all)
        elif args.docs_command == "download":
            return docs_download(args.doc_id, args.export_format, args.output)
        else:
            docs_parser.print_help()
            return 0

    return 0


if __name__ == "__main__":
    sys.exit(main())
