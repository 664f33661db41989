"""Generate ctypes declarations from the CSPICE user header (`SpiceUsr.h`).

The header is run through a C preprocessor (clang/cc `-E`, using the fake libc
headers from `pycparser-fake-libc` in place of the system headers) and then
parsed with `pycparser`. Every function declaration ending in `_c` becomes a
:class:`~cspice.native.prototypes.Prototype`.

Compiler front-end options come from the environment:

CSPICE_CLANG_TARGET
    Passed as `--target=<value>` (cross compiling).
CSPICE_CLANG_ROOT
    Passed as `--sysroot=<value>`.

Examples
--------
>>> from cspice.native import bindgen
>>> protos = bindgen.generate('/opt/cspice')
>>> protos['vsep_c']
Prototype(name='vsep_c', restype=<class 'ctypes.c_double'>, argtypes=(...))

>>> bindgen.write_bindings('spice_bindings.py', '/opt/cspice')

"""
import ctypes
import importlib.util
import logging
import shutil
from pathlib import Path

import jinja2
import pycparser_fake_libc
from pycparser import c_ast, c_parser

from . import config, library
from .prototypes import Prototype
from .types import SpiceBoolean, SpiceCell, SpiceChar, SpiceDouble, SpiceInt
from ..utils import capture_subprocess

logger = logging.getLogger(__name__)

HEADER_NAME = "SpiceUsr.h"

env = jinja2.Environment(
    loader=jinja2.PackageLoader(__package__, "templates"),
    keep_trailing_newline=True,
    autoescape=False,
    trim_blocks=True,
    lstrip_blocks=True,
)

# CSPICE typedefs are mapped directly rather than followed through SpiceZdf.h,
# whose definitions depend on the platform macros of the preprocessing host.
_SPICE_TYPES = {
    "SpiceDouble": SpiceDouble,
    "ConstSpiceDouble": SpiceDouble,
    "SpiceInt": SpiceInt,
    "ConstSpiceInt": SpiceInt,
    "SpiceBoolean": SpiceBoolean,
    "ConstSpiceBoolean": SpiceBoolean,
    "SpiceChar": SpiceChar,
    "ConstSpiceChar": SpiceChar,
    "SpiceCell": SpiceCell,
}

_C_TYPES = {
    "double": ctypes.c_double,
    "float": ctypes.c_float,
    "int": ctypes.c_int,
    "signed int": ctypes.c_int,
    "unsigned int": ctypes.c_uint,
    "unsigned": ctypes.c_uint,
    "short": ctypes.c_short,
    "short int": ctypes.c_short,
    "unsigned short": ctypes.c_ushort,
    "long": ctypes.c_long,
    "long int": ctypes.c_long,
    "unsigned long": ctypes.c_ulong,
    "long long": ctypes.c_longlong,
    "unsigned long long": ctypes.c_ulonglong,
    "char": ctypes.c_char,
    "signed char": ctypes.c_byte,
    "unsigned char": ctypes.c_ubyte,
    "void": None,
}

_CHAR_TYPES = (ctypes.c_char,)

# Typedef'd as int by pycparser-fake-libc, but opaque in a real libc.
_OPAQUE_TYPES = frozenset({"FILE", "fpos_t", "DIR", "va_list"})

_NAMED = {
    SpiceCell: "SpiceCell",
}


class UnsupportedType(ValueError):
    """C type that has no ctypes equivalent in the generated declarations."""


def clang_args():
    """Extra compiler front-end arguments from the environment.

    Returns
    -------
    list of str

    """
    args = []
    target = config.env_value(config.CSPICE_CLANG_TARGET)
    if target:
        args.append(f"--target={target}")
    sysroot = config.env_value(config.CSPICE_CLANG_ROOT)
    if sysroot:
        args.append(f"--sysroot={sysroot}")
    return args


def find_preprocessor(cpp=None):
    """C compiler used for preprocessing.

    Preference: explicit `cpp`, `$CC`, clang, cc, gcc.
    """
    candidates = [cpp] if cpp else [config.env_value("CC"), "clang", "cc", "gcc"]
    for candidate in candidates:
        if candidate and shutil.which(candidate):
            return candidate
    raise FileNotFoundError(f"Unable to find a C compiler to preprocess {HEADER_NAME}. Tried: {candidates}")


def preprocess(header, include_dirs=(), cpp=None, extra_args=None):
    """Run the C preprocessor over a header.

    Parameters
    ----------
    header : str or Path
        Header file to preprocess.
    include_dirs : iter of str or Path, optional
        Additional include directories (searched after the fake libc headers).
    cpp : str, optional
        Compiler executable. See `find_preprocessor`.
    extra_args : list of str, optional
        Extra arguments. Default is `clang_args()`.

    Returns
    -------
    str
        Preprocessed source.

    """
    compiler = find_preprocessor(cpp)
    extra_args = clang_args() if extra_args is None else list(extra_args)
    cmd = [compiler, "-E", "-nostdinc", *extra_args, "-D__attribute__(x)=", "-I", pycparser_fake_libc.directory]
    for inc in include_dirs:
        cmd.extend(["-I", str(inc)])
    cmd.append(str(header))
    return capture_subprocess(cmd, capture_output=True)


def _identifier(names):
    return " ".join(name for name in names if name not in ("const", "volatile"))


class _TypeResolver:
    """Map pycparser type nodes to ctypes types."""

    def __init__(self, typedefs):
        self.typedefs = typedefs

    def resolve(self, node):
        if isinstance(node, c_ast.TypeDecl):
            return self._resolve_base(node.type)
        if isinstance(node, c_ast.PtrDecl):
            return self._resolve_pointer(node.type)
        if isinstance(node, c_ast.ArrayDecl):
            # Array parameters decay to pointers.
            return self._resolve_pointer(node.type)
        if isinstance(node, c_ast.FuncDecl):
            return ctypes.c_void_p
        raise UnsupportedType(f"Unexpected declaration node: {type(node).__name__}")

    def _resolve_base(self, node):
        if isinstance(node, c_ast.IdentifierType):
            name = _identifier(node.names)
            if name in _SPICE_TYPES:
                return _SPICE_TYPES[name]
            if name in _C_TYPES:
                return _C_TYPES[name]
            if name in self.typedefs:
                return self.resolve(self.typedefs[name])
            raise UnsupportedType(f"Unknown type name: {name}")
        if isinstance(node, c_ast.Struct):
            if node.name in ("_SpiceCell", "SpiceCell"):
                return SpiceCell
            raise UnsupportedType(f"Struct passed by value: {node.name}")
        if isinstance(node, c_ast.Enum):
            return ctypes.c_int
        raise UnsupportedType(f"Unexpected type node: {type(node).__name__}")

    def _resolve_pointer(self, target):
        if isinstance(target, c_ast.FuncDecl):
            return ctypes.c_void_p
        if (isinstance(target, c_ast.TypeDecl) and isinstance(target.type, c_ast.IdentifierType)
                and _identifier(target.type.names) in _OPAQUE_TYPES):
            return ctypes.c_void_p
        if isinstance(target, c_ast.ArrayDecl):
            length = target.dim.value if isinstance(target.dim, c_ast.Constant) else None
            try:
                elem = self.resolve(target.type)
            except UnsupportedType:
                return ctypes.c_void_p
            if length is None or elem is None:
                return ctypes.c_void_p
            return ctypes.POINTER(elem * int(length, 0))
        try:
            inner = self.resolve(target)
        except UnsupportedType:
            return ctypes.c_void_p
        if inner is None:
            return ctypes.c_void_p
        if inner in _CHAR_TYPES and isinstance(target, c_ast.TypeDecl):
            return ctypes.c_char_p
        return ctypes.POINTER(inner)


def _is_void_params(params):
    if len(params) != 1:
        return False
    param = params[0]
    return (isinstance(param, c_ast.Typename) and isinstance(param.type, c_ast.TypeDecl)
            and isinstance(param.type.type, c_ast.IdentifierType) and param.type.type.names == ["void"])


def parse_prototypes(source, suffix="_c", filename="<SpiceUsr.h>"):
    """Parse preprocessed C and collect function prototypes.

    Parameters
    ----------
    source : str
        Preprocessed C source.
    suffix : str, optional
        Only functions ending with this suffix are kept. Default="_c".
    filename : str, optional
        Name used in parser error messages.

    Returns
    -------
    dict
        Function name to `Prototype`, in declaration order.

    """
    ast = c_parser.CParser().parse(source, filename=filename)

    typedefs = {}
    for node in ast.ext:
        if isinstance(node, c_ast.Typedef):
            typedefs[node.name] = node.type
    resolver = _TypeResolver(typedefs)

    prototypes = {}
    skipped = []
    for node in ast.ext:
        if not (isinstance(node, c_ast.Decl) and isinstance(node.type, c_ast.FuncDecl)):
            continue
        if not node.name.endswith(suffix):
            continue

        func = node.type
        params = func.args.params if func.args is not None else []
        if _is_void_params(params):
            params = []
        try:
            if any(isinstance(param, c_ast.EllipsisParam) for param in params):
                raise UnsupportedType("variadic")
            restype = resolver.resolve(func.type)
            argtypes = tuple(resolver.resolve(param.type) for param in params)
        except UnsupportedType as err:
            skipped.append(node.name)
            logger.debug("Skipping [%s]: %s", node.name, err)
            continue
        prototypes[node.name] = Prototype(node.name, restype, argtypes)

    logger.info("Parsed [%i] prototypes, skipped [%i]", len(prototypes), len(skipped))
    return prototypes


def generate(cspice_dir=None, cpp=None):
    """Generate prototypes for the whole CSPICE API.

    Parameters
    ----------
    cspice_dir : str or Path, optional
        CSPICE installation. Default is `$CSPICE_DIR`.
    cpp : str, optional
        Compiler used for preprocessing.

    Returns
    -------
    dict
        Function name to `Prototype`.

    """
    include_dir = library.find_include_dir(cspice_dir)
    header = include_dir / HEADER_NAME
    logger.info("Generating bindings from: %s", header)
    source = preprocess(header, include_dirs=[include_dir], cpp=cpp)
    return parse_prototypes(source, filename=str(header))


def ctype_expr(ctype):
    """Python source expression for a ctypes type."""
    if ctype is None:
        return "None"
    if ctype in _NAMED:
        return _NAMED[ctype]
    if isinstance(ctype, type) and issubclass(ctype, ctypes._Pointer):  # pylint: disable=protected-access
        return f"ctypes.POINTER({ctype_expr(ctype._type_)})"
    if isinstance(ctype, type) and issubclass(ctype, ctypes.Array):
        return f"({ctype_expr(ctype._type_)} * {ctype._length_})"
    return f"ctypes.{ctype.__name__}"


def render_module(prototypes, source=HEADER_NAME):
    """Render a Python module declaring `PROTOTYPES`.

    Parameters
    ----------
    prototypes : dict
        Function name to `Prototype`.
    source : str, optional
        Header the prototypes were generated from (for the module docstring).

    Returns
    -------
    str

    """
    entries = [
        {
            "name": proto.name,
            "restype": ctype_expr(proto.restype),
            "argtypes": [ctype_expr(arg) for arg in proto.argtypes],
        }
        for proto in prototypes.values()
    ]
    template = env.get_template("bindings.py.j2")
    return template.render(source=source, prototypes=entries)


def write_bindings(path, cspice_dir=None, cpp=None):
    """Generate and write a bindings module.

    Parameters
    ----------
    path : str or Path
        Output Python file.
    cspice_dir : str or Path, optional
        CSPICE installation. Default is `$CSPICE_DIR`.
    cpp : str, optional
        Compiler used for preprocessing.

    Returns
    -------
    Path

    """
    path = Path(path)
    prototypes = generate(cspice_dir, cpp=cpp)
    path.write_text(render_module(prototypes))
    logger.info("Wrote [%i] prototypes to: %s", len(prototypes), path)
    return path


def load_bindings(path):
    """Load `PROTOTYPES` from a module written by `write_bindings`.

    Parameters
    ----------
    path : str or Path
        Generated Python file.

    Returns
    -------
    dict

    """
    path = Path(path)
    spec = importlib.util.spec_from_file_location(f"_cspice_bindings_{path.stem}", path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module.PROTOTYPES
