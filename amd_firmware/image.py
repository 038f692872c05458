'''Firmware image access.

Parsers only need two things from an image: its raw bytes and a way to turn a
physical address, as referenced by the firmware, into an offset within those
bytes.
'''

from .base import FirmwareObject
from .utils import blue, green


class FirmwareImage(FirmwareObject):
    '''The minimal capability a firmware image must provide to parsers.'''

    def image_bytes(self):
        '''Return the raw, randomly-addressable image content.'''
        raise NotImplementedError

    def phys_addr_to_offset(self, addr):
        '''Translate a physical address into an offset within image_bytes().

        The result may lie outside the image; callers bounds-check it.
        '''
        raise NotImplementedError


class FlatFirmwareImage(FirmwareImage):
    '''A flat SPI flash image mapped to the top of the 32-bit address space.

    The last byte of the image sits at physical address 0xFFFFFFFF.
    '''

    ADDRESS_SPACE_END = 0x100000000

    def __init__(self, data, name=None):
        self.data = data
        self.name = name
        self.attrs = None

    @property
    def size(self):
        return len(self.data)

    @property
    def base_address(self):
        return self.ADDRESS_SPACE_END - len(self.data)

    def image_bytes(self):
        return self.data

    def phys_addr_to_offset(self, addr):
        return addr - self.base_address

    def offset_to_phys_addr(self, offset):
        return offset + self.base_address

    def showinfo(self, ts='', index=None):
        print("%s%s %s size= 0x%x (%d bytes) base= 0x%08x" % (
            ts, blue("Flat Firmware Image:"), green(self.label),
            self.size, self.size, self.base_address))
