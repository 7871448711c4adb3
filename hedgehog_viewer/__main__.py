import argparse
import logging


def main(argv=None):
    parser = argparse.ArgumentParser(prog="hedgehog_viewer", description="Rust call graph viewer")
    parser.add_argument("dot_file", nargs="?", help="DOT file to open at start-up")
    parser.add_argument("--folder", help="workspace folder to select")
    parser.add_argument("--no-creatures", action="store_true", help="hide the wandering hedgehogs")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # imported late so --help works without a display
    from .app import HedgehogViewerApp

    app = HedgehogViewerApp(show_creatures=False if args.no_creatures else None)
    if args.folder:
        app.set_folder(args.folder)
    if args.dot_file:
        app.after_idle(app.load_dot_file, args.dot_file)
    app.mainloop()


if __name__ == "__main__":
    main()
