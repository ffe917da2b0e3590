#!/usr/bin/env python3
# This script writes the builder signature table used by --signatures.
#
# SPDX-FileCopyrightText: Michael Popoloski
# SPDX-License-Identifier: MIT

import argparse
import json
import os
import sys

from builderize.builders import Builders
from builderize.signatures import generate_signature_table


def main():
    parser = argparse.ArgumentParser(description="Builder signature table generator")
    parser.add_argument("--dir", default=os.getcwd(), help="Output directory")
    parser.add_argument("--name", default="signatures.json", help="Output file name")
    args = parser.parse_args()

    table = generate_signature_table(Builders())

    path = os.path.join(args.dir, args.name)
    with open(path, "w", encoding="utf-8") as outf:
        json.dump(table, outf, indent=2, sort_keys=True)
        outf.write("\n")

    print(f"{len(table)} signatures written to {path}", file=sys.stderr)


if __name__ == "__main__":
    main()
