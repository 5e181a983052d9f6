"""Run the shell with Flask's development server (``python -m cofi``)."""
from __future__ import annotations

import argparse

from cofi.startup import create_app


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Cofi brewing timer shell")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8080)
    parser.add_argument("--debug", action="store_true")
    args = parser.parse_args(argv)
    app = create_app()
    app.run(host=args.host, port=args.port, debug=args.debug)


if __name__ == "__main__":
    main()
