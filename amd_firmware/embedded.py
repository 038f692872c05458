'''AMD Embedded Firmware Structure (EFS).

The EFS is the anchor table AMD boot firmware uses to discover the PSP and BIOS
directory tables. Its address is not recorded anywhere; it is found by probing
a fixed list of physical addresses for its signature.
'''

import os
import struct

from .base import FirmwareObject, StructuredObject, ByteRange
from .utils import blue, green, purple, hex_bytes, dump_data
from .structs.amd_structs import *


class EmbeddedFirmwareStructureError(Exception):
    pass


class EmbeddedFirmwareStructureNotFound(EmbeddedFirmwareStructureError):

    def __init__(self):
        EmbeddedFirmwareStructureError.__init__(
            self, "EmbeddedFirmwareStructure is not found")


class EmbeddedFirmwareStructureShortRead(EmbeddedFirmwareStructureError):

    def __init__(self, expected, actual):
        self.expected = expected
        self.actual = actual
        message = "Short read of EmbeddedFirmwareStructure (%d of %d bytes)." % (
            actual, expected)
        EmbeddedFirmwareStructureError.__init__(self, message)


class EmbeddedFirmwareStructureInvalidSignature(EmbeddedFirmwareStructureError):

    def __init__(self, signature):
        self.signature = signature
        message = "Incorrect EmbeddedFirmwareStructure signature: 0x%08x" % (
            signature)
        EmbeddedFirmwareStructureError.__init__(self, message)


class EmbeddedFirmwareStructure(StructuredObject, FirmwareObject):
    '''A decoded Embedded Firmware Structure.

    The decoded fields are held, read-only, in 'structure'. Directory table
    pointers are kept as opaque integers.
    '''

    size = EMBEDDED_FIRMWARE_STRUCTURE_SIZE

    def __init__(self, data, offset=None, address=None):
        '''Decode the structure from the leading bytes of data.

        Args:
            data (binary): At least 'size' bytes, starting at the structure.
            offset (Optional[int]): Image offset the data was read from.
            address (Optional[int]): Physical address the data was read from.
        '''
        if len(data) < self.size:
            raise EmbeddedFirmwareStructureShortRead(self.size, len(data))

        self.parse_structure(data, EmbeddedFirmwareStructureType)
        if self.structure.Signature != EMBEDDED_FIRMWARE_STRUCTURE_SIGNATURE:
            raise EmbeddedFirmwareStructureInvalidSignature(
                self.structure.Signature)

        self.data = self.structure_data
        self.offset = offset
        self.address = address
        self.name = "efs"
        self.attrs = None

    @classmethod
    def from_fields(cls, **fields):
        '''Create a structure from field values.

        The signature defaults to the EFS signature, opaque regions to zeros
        and pointers to 0. Opaque regions must be given at their exact size.
        '''
        values = []
        for name, fmt in EmbeddedFirmwareStructureType._layout_:
            if name == "Signature":
                default = EMBEDDED_FIRMWARE_STRUCTURE_SIGNATURE
            elif fmt.endswith("s"):
                default = b"\x00" * struct.calcsize(fmt)
            else:
                default = 0
            value = fields.pop(name, default)
            if fmt.endswith("s") and len(value) != struct.calcsize(fmt):
                raise ValueError(
                    "EmbeddedFirmwareStructure field %s must be %d bytes, not %d" % (
                        name, struct.calcsize(fmt), len(value)))
            values.append(struct.pack(fmt, value))
        if fields:
            raise TypeError("Unknown EmbeddedFirmwareStructure fields: %s" % (
                ", ".join(sorted(fields))))
        return cls(b"".join(values))

    @property
    def pointers(self):
        '''The directory table pointers, by field name.'''
        return dict([
            (name, getattr(self.structure, name))
            for name in EMBEDDED_FIRMWARE_STRUCTURE_POINTERS
        ])

    @property
    def attrs_label(self):
        attrs = self.pointers
        if self.offset is not None:
            attrs["offset"] = self.offset
        if self.address is not None:
            attrs["address"] = self.address
        return attrs

    def build(self):
        return self.build_structure()

    def __eq__(self, other):
        if not isinstance(other, EmbeddedFirmwareStructure):
            return NotImplemented
        return self.structure == other.structure

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self):
        return hash(self.structure)

    def showinfo(self, ts='', index=None):
        location = ""
        if self.address is not None:
            location += " address= 0x%08x" % self.address
        if self.offset is not None:
            location += " offset= 0x%x" % self.offset
        print("%s%s%s size= %d" % (
            ts, blue("AMD Embedded Firmware Structure:"), location, self.size))
        for name in EMBEDDED_FIRMWARE_STRUCTURE_POINTERS:
            print("%s  %s %s" % (
                ts, purple(name), green("0x%08x" % getattr(self.structure, name))))
        print("%s  %s %s" % (
            ts, purple("Reserved2"), "0x%08x" % self.structure.Reserved2))
        print("%s  %s %s" % (
            ts, purple("Reserved1"), hex_bytes(self.structure.Reserved1)))
        print("%s  %s %s" % (
            ts, purple("Reserved3"), hex_bytes(self.structure.Reserved3)))

    def dump(self, parent='', index=None):
        dump_data(os.path.join(parent, "efs.bin"), self.build())


def _read_full(stream, size):
    '''Read size bytes, or fewer only once the stream reaches EOF.'''
    data = b""
    while len(data) < size:
        chunk = stream.read(size - len(data))
        if not chunk:
            break
        data += chunk
    return data


def parse_embedded_firmware_structure(source, offset=None, address=None):
    '''Decode an Embedded Firmware Structure from a byte source.

    Args:
        source: A readable stream positioned at the structure, or a bytes-like
            object starting with it.
        offset (Optional[int]): Image offset of the structure, for reporting.
        address (Optional[int]): Physical address of the structure.

    Return:
        pair (EmbeddedFirmwareStructure, int): The structure and the number of
            bytes consumed.
    '''
    if hasattr(source, "read"):
        data = _read_full(source, EMBEDDED_FIRMWARE_STRUCTURE_SIZE)
    else:
        data = source[:EMBEDDED_FIRMWARE_STRUCTURE_SIZE]
    efs = EmbeddedFirmwareStructure(data, offset, address)
    return (efs, efs.structure_size)


def iter_embedded_firmware_structure_offsets(firmware):
    '''Yield (address, offset) for each candidate address inside the image.

    Candidates are produced in priority order. Addresses that translate to
    an offset without room for a signature are skipped.
    '''
    image_size = len(firmware.image_bytes())
    for address in EMBEDDED_FIRMWARE_STRUCTURE_ADDRESSES:
        offset = firmware.phys_addr_to_offset(address)
        if offset < 0 or offset + 4 > image_size:
            continue
        yield (address, offset)


def _locate(firmware):
    image = firmware.image_bytes()
    for address, offset in iter_embedded_firmware_structure_offsets(firmware):
        signature = struct.unpack_from("<I", image, offset)[0]
        if signature == EMBEDDED_FIRMWARE_STRUCTURE_SIGNATURE:
            return (address, offset)
    raise EmbeddedFirmwareStructureNotFound()


def locate_embedded_firmware_structure(firmware):
    '''Return the image offset of the first candidate holding the signature.

    Args:
        firmware (FirmwareImage): Provides image_bytes and phys_addr_to_offset.

    Raises:
        EmbeddedFirmwareStructureNotFound: No candidate matched.
    '''
    return _locate(firmware)[1]


def find_embedded_firmware_structure(firmware):
    '''Locate and decode the Embedded Firmware Structure of an image.

    The first candidate whose signature matches is decoded; a decode failure
    there is raised rather than trying the remaining candidates.

    Return:
        pair (EmbeddedFirmwareStructure, ByteRange)
    '''
    address, offset = _locate(firmware)
    image = firmware.image_bytes()
    efs, length = parse_embedded_firmware_structure(
        memoryview(image)[offset:], offset, address)
    return (efs, ByteRange(offset, length))
