"""Locate, download or build the CSPICE shared library.

Examples
--------
% python bin/build_cspice.py locate

% CSPICE_DOWNLOAD=1 python bin/build_cspice.py build -v

% CSPICE_DIR=/opt/cspice python bin/build_cspice.py bindgen -o spice_bindings.py

"""
from cspice.native.__main__ import cmd_line_call

if __name__ == "__main__":
    cmd_line_call()
