"""Locate, download, build or generate bindings for the CSPICE library.

Examples
--------
% python -m cspice.native locate

% CSPICE_CACHE_DIR=/tmp/cspice python -m cspice.native download --force

% python -m cspice.native build /opt/cspice -o /opt/cspice/lib/libcspice.so

% CSPICE_DIR=/opt/cspice python -m cspice.native bindgen -o spice_bindings.py -v

"""
import argparse
import logging

from cspice.native import bindgen, download, library
from cspice.utils import enable_logging

logger = logging.getLogger(__name__)


def cmd_locate(**_):
    path = library.find_library()
    print(path)
    return path


def cmd_download(dest_dir=None, url=None, force=False, **_):
    cspice_dir = download.download_toolkit(dest_dir, url=url, force=force)
    print(cspice_dir)
    return cspice_dir


def cmd_build(cspice_dir=None, output=None, compiler=None, from_source=False, **_):
    if cspice_dir is None:
        path = download.ensure_toolkit()
    else:
        path = download.build_shared_library(cspice_dir, output=output, compiler=compiler, from_source=from_source)
    print(path)
    return path


def cmd_bindgen(output, cspice_dir=None, cpp=None, **_):
    path = bindgen.write_bindings(output, cspice_dir=cspice_dir, cpp=cpp)
    print(path)
    return path


def build_parser():
    """Command line argument parser."""
    parser = argparse.ArgumentParser(prog="python -m cspice.native", description="CSPICE native library tools.")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_const",
        const=logging.DEBUG,
        dest="log_level",
        default=logging.INFO,
        help='Set log reporting level to "debug" (default="info").',
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    sub = subparsers.add_parser("locate", help="Print the CSPICE shared library that would be loaded.")
    sub.set_defaults(func=cmd_locate)

    sub = subparsers.add_parser("download", help="Download and extract NAIF's CSPICE toolkit.")
    sub.add_argument("-d", "--dest_dir", type=str, default=None, help="Destination (default=cache directory).")
    sub.add_argument("--url", type=str, default=None, help="Package URL (default=host platform).")
    sub.add_argument("--force", action="store_true", help="Download even if the toolkit already exists.")
    sub.set_defaults(func=cmd_download)

    sub = subparsers.add_parser("build", help="Build a shared library from a CSPICE toolkit.")
    sub.add_argument(
        "cspice_dir", type=str, nargs="?", default=None, help="Toolkit root (default=download into the cache)."
    )
    sub.add_argument("-o", "--output", type=str, default=None, help="Output shared library.")
    sub.add_argument("--compiler", type=str, default=None, help="C compiler (default=$CC or cc).")
    sub.add_argument(
        "--from_source", action="store_true", help="Compile the toolkit sources instead of the static archive."
    )
    sub.set_defaults(func=cmd_build)

    sub = subparsers.add_parser("bindgen", help="Generate ctypes declarations from SpiceUsr.h.")
    sub.add_argument("-o", "--output", type=str, required=True, help="Output Python module.")
    sub.add_argument("--cspice_dir", type=str, default=None, help="Toolkit root (default=$CSPICE_DIR).")
    sub.add_argument("--cpp", type=str, default=None, help="C compiler used to preprocess (default=$CC or clang).")
    sub.set_defaults(func=cmd_bindgen)
    return parser


def cmd_line_call(args=None):
    """Method to process command line arguments (`python -m cspice.native --help`)."""
    parser = build_parser()
    kwargs = vars(parser.parse_args(args))
    orig_kwargs = str(kwargs)

    enable_logging(log_level=kwargs.pop("log_level"))
    logger.debug("Supplied arguments: %s", orig_kwargs)

    func = kwargs.pop("func")
    kwargs.pop("command")
    try:
        return func(**kwargs)
    except Exception:
        logger.exception("An exception occurred:")
        parser.exit(status=1, message="Command failed with errors! Exiting early...\n")


if __name__ == "__main__":
    cmd_line_call()
