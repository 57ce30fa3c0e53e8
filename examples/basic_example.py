#!/usr/bin/env python3
"""
Example script demonstrating the usage of CommandLine.

This script declares gcc-like options with description strings, parses the
process arguments and prints the resulting values. Try:

    python basic_example.py -I /a --include=/b -O2 -v main.c
    python basic_example.py --help
"""

import sys

from optdesc import CommandLine, CommandLineError

OPTIONS = [
    ":help,h:display this help and exit",
    ":verbose,v:print the commands executed",
    "*:include,I=string:add DIR to the include search path",
    "*define:define,D=string:predefine a macro",
    "optimize:optimize,O?int,1:optimization level",
    ":output,o=string,a.out:place the output into FILE",
]


def main() -> int:
    cmdline = CommandLine(OPTIONS, banner="usage: cc [OPTIONS] FILE...")

    outcome = cmdline.safe_parse()
    if outcome.is_err():
        print(f"error: {outcome.unwrap_err()}", file=sys.stderr)
        cmdline.usage(sys.stderr)
        return 2

    config = outcome.unwrap()
    if config.get("help"):
        cmdline.usage()
        return 0

    print("include paths:", config.get_list("include", []))
    print("macros:", config.get_list("define", []))
    print("optimization:", config.get("optimize", 0))
    print("output:", config.get_string("output"))
    print("verbose:", bool(config.get("verbose")))
    print("sources:", cmdline.remaining())
    return 0


if __name__ == "__main__":
    sys.exit(main())
