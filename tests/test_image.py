import io
import unittest
from contextlib import redirect_stdout

from amd_firmware import ByteRange, FirmwareImage, FlatFirmwareImage


class FlatFirmwareImageTest(unittest.TestCase):

    def test_top_of_address_space(self):
        firmware = FlatFirmwareImage(b"\x00" * 0x1000000)
        self.assertEqual(firmware.size, 0x1000000)
        self.assertEqual(firmware.base_address, 0xFF000000)
        self.assertEqual(firmware.phys_addr_to_offset(0xFF000000), 0)
        self.assertEqual(firmware.phys_addr_to_offset(0xFFFFFFFF), 0xFFFFFF)
        self.assertEqual(firmware.phys_addr_to_offset(0xFFFA0000), 0xFA0000)

    def test_below_image_is_negative(self):
        firmware = FlatFirmwareImage(b"\x00" * 0x10000)
        self.assertLess(firmware.phys_addr_to_offset(0xFFFA0000), 0)

    def test_offset_to_phys_addr(self):
        firmware = FlatFirmwareImage(b"\x00" * 0x100000)
        for address in (0xFFF00000, 0xFFF20000, 0xFFFFFFF0):
            offset = firmware.phys_addr_to_offset(address)
            self.assertEqual(firmware.offset_to_phys_addr(offset), address)

    def test_image_bytes(self):
        data = b"\x01\x02\x03"
        firmware = FlatFirmwareImage(data, "bios.bin")
        self.assertIs(firmware.image_bytes(), data)
        self.assertEqual(firmware.info()["label"], "bios.bin")

        output = io.StringIO()
        with redirect_stdout(output):
            firmware.showinfo()
        self.assertIn("bios.bin", output.getvalue())
        self.assertIn("base= 0xfffffffd", output.getvalue())

    def test_interface_is_abstract(self):
        firmware = FirmwareImage()
        with self.assertRaises(NotImplementedError):
            firmware.image_bytes()
        with self.assertRaises(NotImplementedError):
            firmware.phys_addr_to_offset(0xFFFA0000)


class ByteRangeTest(unittest.TestCase):

    def test_end(self):
        efs_range = ByteRange(0x20000, 72)
        self.assertEqual(efs_range.offset, 0x20000)
        self.assertEqual(efs_range.length, 72)
        self.assertEqual(efs_range.end, 0x20048)
        self.assertEqual(tuple(efs_range), (0x20000, 72))


if __name__ == '__main__':
    unittest.main()
