#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import os
import tempfile
import unittest
from unittest.mock import patch
from pchip import main
from pchip.constants import DEFAULT_KEYMAP, DEFAULT_TICKS_PER_FRAME
from plainchip import parse_args


class TestCLI(unittest.TestCase):
    def test_cli_defaults(self):
        args = vars(parse_args(["game.ch8"]))
        self.assertEqual("game.ch8", args["filename"])
        self.assertEqual(DEFAULT_TICKS_PER_FRAME, args["ticks_per_frame"])
        self.assertEqual(DEFAULT_KEYMAP, args["keymap"])
        self.assertIsNone(args["renderer"])
        self.assertFalse(args["debug"])

    def test_cli_options(self):
        args = vars(parse_args(["game.ch8", "-t", "20", "-r", "null", "-m", "1", "-d"]))
        self.assertEqual(20, args["ticks_per_frame"])
        self.assertEqual("null", args["renderer"])
        self.assertEqual(1, args["mute"])
        self.assertTrue(args["debug"])

    def test_cli_bad_renderer(self):
        with patch("sys.stderr"):
            self.assertRaises(SystemExit, parse_args, ["game.ch8", "-r", "tk"])

    def test_main_null_renderer(self):
        with tempfile.TemporaryDirectory() as tempdir:
            filename = os.path.join(tempdir, "test.ch8")

            with open(filename, "wb") as f:
                f.write(b"\x12\x00")

            args = vars(parse_args([filename, "-r", "null"]))

            # The null inputs never ask to quit, so keep out of the host loop itself
            with patch("pchip.Host.run") as mock_run, patch("builtins.print"):
                main(args)

            mock_run.assert_called_once_with()
