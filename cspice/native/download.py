"""Download NAIF's prebuilt CSPICE toolkit and turn it into a shared library.

NAIF distributes CSPICE as an archive per platform containing headers
(`include/`), the static library (`lib/cspice.a`) and the sources
(`src/cspice/`). Python needs a shared library, so the static archive is linked
into one with the host C compiler.

Examples
--------
>>> from cspice.native import download
>>> download.toolkit_url('Linux', 'x86_64')
'https://naif.jpl.nasa.gov/pub/naif/toolkit/C/PC_Linux_GCC_64bit/packages/cspice.tar.Z'

"""
import logging
import os
import platform
import shutil
import tarfile
import zipfile
from pathlib import Path

import requests
import tqdm

from . import config
from ..utils import capture_subprocess

logger = logging.getLogger(__name__)

TOOLKIT_BASE_URL = "https://naif.jpl.nasa.gov/pub/naif/toolkit/C/"

_PACKAGES = {
    ("Linux", "x86_64"): ("PC_Linux_GCC_64bit", "cspice.tar.Z"),
    ("Darwin", "x86_64"): ("MacIntel_OSX_AppleC_64bit", "cspice.tar.Z"),
    ("Darwin", "arm64"): ("MacM1_OSX_clang_64bit", "cspice.tar.Z"),
    ("Windows", "x86_64"): ("PC_Windows_VisualC_64bit", "cspice.zip"),
}
_MACHINE_ALIASES = {
    "amd64": "x86_64",
    "x64": "x86_64",
    "aarch64": "arm64",
}

_CHUNK_SIZE = 1024 * 1024


def _normalize_machine(machine):
    machine = machine.lower()
    return _MACHINE_ALIASES.get(machine, machine)


def toolkit_url(system=None, machine=None):
    """NAIF package URL for a platform.

    Parameters
    ----------
    system : str, optional
        "Linux", "Darwin" or "Windows". Default is the host.
    machine : str, optional
        Machine architecture (e.g., "x86_64", "arm64"). Default is the host.

    Returns
    -------
    str

    """
    system = config.host_system(system)
    machine = _normalize_machine(platform.machine() if machine is None else machine)
    try:
        package, filename = _PACKAGES[(system, machine)]
    except KeyError:
        raise ValueError(f"NAIF does not provide a CSPICE package for system=[{system}], machine=[{machine}]") from None
    return f"{TOOLKIT_BASE_URL}{package}/packages/{filename}"


def download_file(url, local_path, timeout=60):
    """Download a file, writing to a temp file until it is complete.

    Parameters
    ----------
    url : str
        File to download.
    local_path : str or Path
        Destination file.
    timeout : int, optional
        Connection/read timeout in seconds.

    Returns
    -------
    Path

    """
    local_path = Path(local_path)
    local_path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = local_path.with_name(local_path.name + ".temp")

    logger.info("Downloading [%s] to [%s]", url, local_path)
    with requests.get(url, stream=True, timeout=timeout) as resp:
        resp.raise_for_status()
        total = int(resp.headers.get("content-length", 0)) or None
        with open(temp_path, "wb") as fobj, tqdm.tqdm(
            total=total, unit="B", unit_scale=True, unit_divisor=1024, desc=local_path.name
        ) as pbar:
            for chunk in resp.iter_content(chunk_size=_CHUNK_SIZE):
                fobj.write(chunk)
                pbar.update(len(chunk))

    # Only move into place once fully downloaded.
    os.replace(temp_path, local_path)
    return local_path


def extract_archive(archive, dest_dir):
    """Extract a NAIF toolkit archive.

    Parameters
    ----------
    archive : str or Path
        A `cspice.tar.Z` (gzip compressed tar) or `cspice.zip` file.
    dest_dir : str or Path
        Directory to extract into.

    Returns
    -------
    Path
        The extracted `cspice` root directory.

    """
    archive = Path(archive)
    dest_dir = Path(dest_dir)
    dest_dir.mkdir(parents=True, exist_ok=True)

    logger.debug("Extracting [%s] into [%s]", archive, dest_dir)
    if archive.suffix.lower() == ".zip":
        with zipfile.ZipFile(archive) as zobj:
            zobj.extractall(dest_dir)
    else:
        with tarfile.open(archive, "r:*") as tobj:
            if hasattr(tarfile, "data_filter"):
                tobj.extractall(dest_dir, filter="data")
            else:
                tobj.extractall(dest_dir)  # noqa: S202

    cspice_dir = dest_dir / "cspice"
    if not cspice_dir.is_dir():
        raise FileNotFoundError(f"Archive [{archive}] did not contain a `cspice` directory")
    return cspice_dir


def download_toolkit(dest_dir=None, url=None, force=False):
    """Download and extract the CSPICE toolkit.

    Parameters
    ----------
    dest_dir : str or Path, optional
        Directory to download and extract into. Default is the cache directory.
    url : str, optional
        Package URL. Default is the host platform's package.
    force : bool, optional
        Download even if an extracted toolkit already exists.

    Returns
    -------
    Path
        The extracted `cspice` root directory.

    """
    dest_dir = config.cache_dir() if dest_dir is None else Path(dest_dir)
    url = toolkit_url() if url is None else url

    cspice_dir = dest_dir / "cspice"
    if cspice_dir.is_dir():
        if not force:
            logger.info("CSPICE toolkit already exists: %s", cspice_dir)
            return cspice_dir
        logger.info("CSPICE toolkit already exists, downloading anyway: %s", cspice_dir)
        shutil.rmtree(cspice_dir)

    archive = download_file(url, dest_dir / url.rsplit("/", 1)[-1])
    try:
        return extract_archive(archive, dest_dir)
    finally:
        archive.unlink()


def find_static_library(cspice_dir):
    """Find the static CSPICE archive within a toolkit directory, or None."""
    lib_dir = Path(cspice_dir) / "lib"
    for name in config.static_library_names():
        path = lib_dir / name
        if path.is_file():
            return path
    return None


def _link_command(compiler, system, archive, output):
    if system == "Darwin":
        return [compiler, "-dynamiclib", "-o", output, f"-Wl,-force_load,{archive}", "-lm"]
    return [compiler, "-shared", "-fPIC", "-o", output, "-Wl,--whole-archive", archive, "-Wl,--no-whole-archive",
            "-lm"]


def _compile_command(compiler, system, cspice_dir, output):
    sources = sorted((cspice_dir / "src" / "cspice").glob("*.c"))
    if not sources:
        raise FileNotFoundError(f"No CSPICE sources found in: {cspice_dir / 'src' / 'cspice'}")
    shared = ["-dynamiclib"] if system == "Darwin" else ["-shared"]
    return [compiler, *shared, "-fPIC", "-O2", "-ansi", "-DNON_UNIX_STDIO", "-I", cspice_dir / "include",
            "-o", output, *sources, "-lm"]


def build_shared_library(cspice_dir, output=None, compiler=None, from_source=False):
    """Build a shared CSPICE library from a toolkit directory.

    Parameters
    ----------
    cspice_dir : str or Path
        Root of the CSPICE toolkit (contains `include/` and `lib/`).
    output : str or Path, optional
        Shared library to create. Default is the cache directory.
    compiler : str, optional
        C compiler. Default is `$CC`, otherwise "cc".
    from_source : bool, optional
        Compile `src/cspice/*.c` instead of re-linking `lib/cspice.a`. Needed
        when the archive was not compiled as position independent code.

    Returns
    -------
    Path

    """
    system = config.host_system()
    if system == "Windows":
        raise NotImplementedError("Building a CSPICE DLL is not supported; set CSPICE_LIB to an existing cspice.dll")

    cspice_dir = Path(cspice_dir)
    if output is None:
        output = config.cache_dir() / config.shared_library_names(system)[0]
    output = Path(output)
    output.parent.mkdir(parents=True, exist_ok=True)

    compiler = compiler or config.env_value("CC") or "cc"
    if shutil.which(compiler) is None:
        raise FileNotFoundError(f'Unable to find C compiler "{compiler}" in system PATH.')

    if from_source:
        cmd = _compile_command(compiler, system, cspice_dir, output)
    else:
        archive = find_static_library(cspice_dir)
        if archive is None:
            raise FileNotFoundError(f"No static CSPICE library found in: {cspice_dir / 'lib'}")
        cmd = _link_command(compiler, system, archive, output)

    logger.info("Building CSPICE shared library: %s", output)
    capture_subprocess(cmd)
    return output


def ensure_toolkit(dest_dir=None, force=False):
    """Download the toolkit (if needed) and build its shared library.

    Parameters
    ----------
    dest_dir : str or Path, optional
        Download/build directory. Default is the cache directory.
    force : bool, optional
        Re-download and rebuild.

    Returns
    -------
    Path
        Shared library path.

    """
    dest_dir = config.cache_dir() if dest_dir is None else Path(dest_dir)
    output = dest_dir / config.shared_library_names()[0]
    if output.is_file() and not force:
        logger.debug("Using previously built CSPICE library: %s", output)
        return output

    cspice_dir = download_toolkit(dest_dir, force=force)
    return build_shared_library(cspice_dir, output=output)
