# -*- coding: utf-8 -*-

# AMD Platform Security Processor BIOS Architecture Design Guide for AMD
# Family 17h and Family 19h Processors, Publication #55758, Table 2.

from ..base import structure_type

EMBEDDED_FIRMWARE_STRUCTURE_SIGNATURE = 0x55AA55AA

# Probed in this order, the first signature match wins.
EMBEDDED_FIRMWARE_STRUCTURE_ADDRESSES = (
    0xFFFA0000,
    0xFFF20000,
    0xFFE20000,
    0xFFC20000,
    0xFF820000,
    0xFF020000,
)

# The record is 72 bytes. Reserved3 is 28 bytes, 2 bytes shorter than the
# 30 listed in the vendor table, so the record ends at that boundary.
EmbeddedFirmwareStructureType = structure_type("EmbeddedFirmwareStructureType", [
    ("Signature",                                       "<I"),
    ("Reserved1",                                       "<16s"),
    ("PSPDirectoryTablePointer",                        "<I"),
    ("BIOSDirectoryTableFamily17hModels00h0FhPointer",  "<I"),
    ("BIOSDirectoryTableFamily17hModels10h1FhPointer",  "<I"),
    ("BIOSDirectoryTableFamily17hModels30h3FhPointer",  "<I"),
    ("Reserved2",                                       "<I"),
    ("BIOSDirectoryTableFamily17hModels60h3FhPointer",  "<I"),
    ("Reserved3",                                       "<28s"),
])

EMBEDDED_FIRMWARE_STRUCTURE_SIZE = EmbeddedFirmwareStructureType.size

EMBEDDED_FIRMWARE_STRUCTURE_POINTERS = [
    "PSPDirectoryTablePointer",
    "BIOSDirectoryTableFamily17hModels00h0FhPointer",
    "BIOSDirectoryTableFamily17hModels10h1FhPointer",
    "BIOSDirectoryTableFamily17hModels30h3FhPointer",
    "BIOSDirectoryTableFamily17hModels60h3FhPointer",
]
