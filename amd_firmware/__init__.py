'''AMD firmware image parser utils.

Locates and decodes the AMD Embedded Firmware Structure, the anchor table
pointing to the PSP and BIOS directory tables of an SPI flash image.
'''

from .base import FirmwareObject, StructuredObject, ByteRange
from .image import FirmwareImage, FlatFirmwareImage
from .embedded import (
    EmbeddedFirmwareStructure,
    EmbeddedFirmwareStructureError,
    EmbeddedFirmwareStructureNotFound,
    EmbeddedFirmwareStructureShortRead,
    EmbeddedFirmwareStructureInvalidSignature,
    find_embedded_firmware_structure,
    locate_embedded_firmware_structure,
    parse_embedded_firmware_structure,
)


__title__ = "amd_firmware"
__version__ = "0.1"
__author__ = "amd_firmware developers"
__license__ = "BSD"
