import sys
import json
import logging
from pathlib import Path

import yaml

from . import __version__

USAGE = """usage: droidacq [--version] [-v|--verbose] [--config PATH] [--serial SERIAL]
                [--output DIR] [--fast]"""


def _setup_basic_logging(verbose=False):
    # stderr only until the case folder exists
    level = logging.INFO if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def _default_config_path():
    # when frozen by PyInstaller, sys._MEIPASS points to bundle root
    if getattr(sys, "frozen", False):
        base = Path(getattr(sys, "_MEIPASS", Path.cwd()))
        return base / "config.yaml"
    return Path(__file__).parent / "config.yaml"


def _pop_option(argv, name):
    """Remove `name VALUE` from argv and return VALUE, or None."""
    if name not in argv:
        return None
    i = argv.index(name)
    if i + 1 >= len(argv):
        raise ValueError(f"{name} requires a value")
    value = argv[i + 1]
    del argv[i:i + 2]
    return value


def _pop_flag(argv, *names):
    found = False
    for name in names:
        while name in argv:
            argv.remove(name)
            found = True
    return found


def main(argv=None):
    argv = list(argv if argv is not None else sys.argv[1:])

    if "--version" in argv:
        print(__version__)
        return 0

    if _pop_flag(argv, "--help", "-h"):
        print(USAGE)
        return 0

    verbose = _pop_flag(argv, "--verbose", "-v")
    fast = _pop_flag(argv, "--fast")
    _setup_basic_logging(verbose)

    try:
        config_path = _pop_option(argv, "--config")
        serial = _pop_option(argv, "--serial")
        output_directory = _pop_option(argv, "--output")
    except ValueError as e:
        print(f"droidacq: {e}\n{USAGE}", file=sys.stderr)
        return 2

    if argv:
        print(f"droidacq: unrecognized arguments: {' '.join(argv)}\n{USAGE}", file=sys.stderr)
        return 2

    if not config_path:
        default_config = _default_config_path()
        if default_config.exists():
            config_path = str(default_config)

    # Lazy import to keep --version and --help cheap
    from .application.acquire_device import AcquireDeviceUseCase

    try:
        use_case = AcquireDeviceUseCase(config_path, verbose=verbose)
        summary = use_case.execute(
            device_serial=serial,
            output_directory=output_directory,
            fast_mode=True if fast else None
        )
    except (RuntimeError, ValueError, OSError, yaml.YAMLError) as e:
        logging.getLogger("cli").error(str(e))
        return 1

    summary.setdefault("metadata", {})
    summary["metadata"]["engineVersion"] = __version__
    summary["metadata"]["schemaVersion"] = 1

    print(json.dumps(summary, indent=2))
    return 0 if all(c["status"] == "completed" for c in summary["collectors"].values()) else 1


if __name__ == "__main__":
    sys.exit(main())
