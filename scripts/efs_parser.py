#!/usr/bin/env python
# -*- coding: utf-8 -*-

import argparse
import os
import sys

from amd_firmware import FlatFirmwareImage
from amd_firmware.embedded import (
    EmbeddedFirmwareStructureError, find_embedded_firmware_structure)
from amd_firmware.utils import print_error, hex_dump, red, green


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Locate and parse the AMD Embedded Firmware Structure.")
    parser.add_argument(
        '-q', "--quiet", default=False, action="store_true",
        help="Do not show info.")
    parser.add_argument(
        '-s', "--structure", default=False, action="store_true",
        help="Show every structure field and a hex dump of the raw bytes.")
    parser.add_argument(
        '-o', "--output", default=".",
        help="Dump the structure to this folder.")
    parser.add_argument(
        '-c', "--echo", default=False, action="store_true",
        help="Echo the filename before parsing or extracting.")
    parser.add_argument(
        '-e', "--extract", action="store_true",
        help="Extract the structure bytes.")
    parser.add_argument(
        "--test", default=False, action='store_true',
        help="Test file parsing, output name/success.")
    parser.add_argument(
        "file", nargs='+',
        help="The file(s) to work on")
    return parser.parse_args(argv)


def process_file(args, file_name):
    if args.echo:
        print(file_name)

    try:
        with open(file_name, 'rb') as fh:
            input_data = fh.read()
    except (IOError, OSError) as e:
        print_error("Error: Cannot read file (%s) (%s)." % (file_name, str(e)))
        return False

    firmware = FlatFirmwareImage(input_data, os.path.basename(file_name))
    try:
        efs, efs_range = find_embedded_firmware_structure(firmware)
    except EmbeddedFirmwareStructureError as e:
        if args.test:
            print("%s: %s" % (file_name, red("error")))
        print_error("Error: cannot parse %s (%s)." % (file_name, str(e)))
        return False

    if args.test:
        print("%s: %s" % (file_name, green("found")))
        return True

    if not args.quiet:
        firmware.showinfo('')
        efs.showinfo('  ')
        print("  range= 0x%x-0x%x" % (efs_range.offset, efs_range.end))

    if args.structure:
        efs.show_structure()
        hex_dump(efs.build())

    if args.extract:
        print("Dumping...")
        efs.dump(os.path.join(args.output, "%s_output" % (
            os.path.basename(file_name))))
    return True


def main(argv=None):
    args = parse_args(argv)
    failed = False
    for file_name in args.file:
        if not process_file(args, file_name):
            failed = True
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
