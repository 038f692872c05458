import importlib.util
import io
import os
import shutil
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout

from amd_firmware.embedded import EmbeddedFirmwareStructure

SCRIPT = os.path.join(
    os.path.dirname(os.path.abspath(__file__)), "..", "scripts", "efs_parser.py")


def _load_script():
    spec = importlib.util.spec_from_file_location("efs_parser", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class EfsParserScriptTest(unittest.TestCase):

    def setUp(self):
        self.script = _load_script()
        self.folder = tempfile.mkdtemp()

        # 1MB image, structure at 0xFFF20000.
        image = bytearray(b"\xFF" * 0x100000)
        efs = EmbeddedFirmwareStructure.from_fields(
            PSPDirectoryTablePointer=0x00240000)
        image[0x20000:0x20000 + 72] = efs.build()
        self.valid = os.path.join(self.folder, "valid.bin")
        with open(self.valid, "wb") as fh:
            fh.write(bytes(image))

        self.invalid = os.path.join(self.folder, "invalid.bin")
        with open(self.invalid, "wb") as fh:
            fh.write(b"\xFF" * 0x10000)

    def tearDown(self):
        shutil.rmtree(self.folder)

    def _run(self, argv):
        stdout, stderr = io.StringIO(), io.StringIO()
        with redirect_stdout(stdout), redirect_stderr(stderr):
            status = self.script.main(argv)
        return status, stdout.getvalue(), stderr.getvalue()

    def test_showinfo(self):
        status, stdout, _ = self._run([self.valid])
        self.assertEqual(status, 0)
        self.assertIn("address= 0xfff20000", stdout)
        self.assertIn("0x00240000", stdout)
        self.assertIn("range= 0x20000-0x20048", stdout)

    def test_test_mode(self):
        status, stdout, stderr = self._run(
            ["--test", self.valid, self.invalid])
        self.assertEqual(status, 1)
        self.assertIn("valid.bin", stdout)
        self.assertIn("found", stdout)
        self.assertIn("not found", stderr)

    def test_missing_file(self):
        status, _, stderr = self._run(
            [os.path.join(self.folder, "missing.bin")])
        self.assertEqual(status, 1)
        self.assertIn("Cannot read file", stderr)

    def test_structure(self):
        status, stdout, _ = self._run(["-q", "-s", self.valid])
        self.assertEqual(status, 0)
        self.assertIn("PSPDirectoryTablePointer: 2359296", stdout)
        self.assertTrue(any(
            line.startswith("aa55aa55") for line in stdout.splitlines()))

    def test_extract(self):
        output = os.path.join(self.folder, "output")
        status, _, _ = self._run(["-q", "-e", "-o", output, self.valid])
        self.assertEqual(status, 0)
        path = os.path.join(output, "valid.bin_output", "efs.bin")
        with open(path, "rb") as fh:
            data = fh.read()
        self.assertEqual(len(data), 72)
        self.assertEqual(data[:4], b"\xAA\x55\xAA\x55")


if __name__ == '__main__':
    unittest.main()
