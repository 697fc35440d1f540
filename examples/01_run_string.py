#!/usr/bin/env python3

import os
import sys

sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

from bfinterp import OnEOFAction, RunOptions, run_file


def main():
    here = os.path.dirname(__file__)

    result = run_file(os.path.join(here, "hello.bf"), options=RunOptions(debug=True))
    print(result.text, end="")
    for dump in result.tape_dumps:
        print(dump)

    result = run_file(os.path.join(here, "reverse.bf"), options=RunOptions(on_eof=OnEOFAction.STORE_ZERO))
    print(result.text.strip())


if __name__ == "__main__":
    main()
