#!/usr/bin/env python3
"""Shmrep content server: validated chapter collections over a JSON API."""

import argparse
import logging
import sys

from flask import Flask

from config import CONTENT_DIR, ON_ERROR, PORT

app = Flask(__name__)

from routes.collections import bp as collections_bp  # noqa: E402

app.register_blueprint(collections_bp)


def check(content_dir: str, on_error: str) -> int:
    """Build every registered collection and report rejections. Returns an exit code."""
    from services.collection import DEFAULT_REGISTRY, CollectionBuildError, build_collection

    status = 0
    for name in DEFAULT_REGISTRY:
        try:
            collection = build_collection(name, DEFAULT_REGISTRY, content_dir, on_error)
        except CollectionBuildError as e:
            print(f"  {name}: FAILED ({len(e.diagnostics)} rejected)")
            for diag in e.diagnostics:
                print(f"    {diag['slug']}: {diag['message']}")
            status = 1
            continue

        print(f"  {name}: {len(collection)} admitted, {len(collection.rejected)} skipped")
        for diag in collection.rejected:
            print(f"    skipped {diag['slug']}: {diag['message']}")
    return status


def main(argv=None):
    """Entry point for `shmrep-content` CLI command."""
    parser = argparse.ArgumentParser(description="Shmrep content server")
    parser.add_argument(
        "--port", type=int, default=PORT, help=f"Port to listen on (default: {PORT})"
    )
    parser.add_argument("--content-dir", default=CONTENT_DIR, help="Content root directory")
    parser.add_argument(
        "--on-error",
        choices=("fail", "skip"),
        default=ON_ERROR,
        help=f"Rejected document policy (default: {ON_ERROR})",
    )
    parser.add_argument(
        "--check", action="store_true", help="Validate all collections and exit"
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    cli_args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if cli_args.debug else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )

    if cli_args.check:
        return check(cli_args.content_dir, cli_args.on_error)

    import services.collection as collection_mod

    collection_mod.CONTENT_DIR = cli_args.content_dir
    collection_mod.ON_ERROR = cli_args.on_error

    print("\n  Shmrep Content Server v0.1.0")
    print(f"  Port: {cli_args.port}")
    print(f"  Content: {cli_args.content_dir}")
    print(f"  On error: {cli_args.on_error}\n")

    app.run(port=cli_args.port, threaded=True)
    return 0


if __name__ == "__main__":
    sys.exit(main())
