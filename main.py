# Main.py
""""" Entry point for YardCalc.

   Responsibilities:
   - Load configuration and apply command line overrides
   - Set up logging (stderr, so stdout only carries results)
   - Run the console loop over stdin, or start the Qt GUI with --gui

"""""
import sys
import argparse
import logging

from YardCalc import config_manager as config_manager, Console as Console


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="yardcalc",
        description="Evaluate one arithmetic expression per input line.")
    parser.add_argument("--gui", action="store_true", help="start the desktop calculator")
    parser.add_argument("--dump", action="store_true", help="print the expression tree after each line")
    parser.add_argument("--postfix", action="store_true", help="print the postfix sequence after each result")
    parser.add_argument("--debug", action="store_true", help="enable debug logging")
    return parser.parse_args(argv)


def load_settings(args):
    """Configuration file values, overridden by the command line flags that are set."""
    settings = config_manager.load_setting_value("all")
    if args.dump:
        settings["dump_tree"] = True
    if args.postfix:
        settings["show_postfix"] = True
    if args.debug:
        settings["debug"] = True
    return settings


def main(argv=None):

    """
    Keep this thin: no business logic here.
    """

    args = parse_args(argv)
    settings = load_settings(args)

    logging.basicConfig(
        level=logging.DEBUG if settings["debug"] else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
        stream=sys.stderr,
    )
    logging.getLogger(__name__).debug("Config loaded: %s", settings)

    if args.gui:
        # Imported here so the console mode works without a display
        from YardCalc import UI as UI
        return UI.main()

    Console.run(sys.stdin, sys.stdout, settings)
    return 0


if __name__ == "__main__":
    sys.exit(main())
