"""Entry point for Grift."""

import argparse
import logging

from grift.app import GriftApp


def main() -> None:
    parser = argparse.ArgumentParser(description="Grift — an idle scam empire")
    parser.add_argument("--log-file", default=None, help="Write logs here (the TUI owns the terminal)")
    parser.add_argument("--debug", action="store_true", help="Log every completed scam")
    args = parser.parse_args()

    if args.log_file:
        logging.basicConfig(
            filename=args.log_file,
            level=logging.DEBUG if args.debug else logging.INFO,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )

    app = GriftApp()
    app.run()


if __name__ == "__main__":
    main()
