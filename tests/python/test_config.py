"""Unit tests for options file loading."""

import os
import tempfile
import unittest
from unittest import mock

from strargv import config
from strargv.tokenizer import DEFAULT_SEPARATORS, TokenizerException


class TestConfig(unittest.TestCase):
    """Test options file loading and checking."""

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmpdir.cleanup)

    def write_config(self, content: str) -> str:
        """Write an options file and return its path."""
        path = os.path.join(self.tmpdir.name, "options.toml")
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
        return path

    def test_load_options(self):
        """Test loading a well-formed file."""
        path = self.write_config(
            'separators = ","\n'
            "[options]\n"
            "console = \"9600,N81,'banner=hi there'\"\n"
            'modem = "115200,8DATABITS"\n'
        )
        options_file = config.load_options(path)

        self.assertEqual(path, options_file.path)
        self.assertEqual(",", options_file.separators)
        self.assertEqual(["console", "modem"], list(options_file.options))

    def test_default_separators(self):
        """Test that separators default to whitespace."""
        path = self.write_config('[options]\na = "x y"\n')
        self.assertEqual(DEFAULT_SEPARATORS, config.load_options(path).separators)

    def test_missing_file(self):
        """Test that a missing file is reported."""
        with self.assertRaises(config.InvalidConfig):
            config.load_options(os.path.join(self.tmpdir.name, "nope.toml"))

    def test_invalid_toml(self):
        """Test that TOML syntax errors are reported."""
        path = self.write_config("[options\n")
        with self.assertRaises(config.InvalidConfig):
            config.load_options(path)

    def test_non_string_values(self):
        """Test that option values must be strings."""
        path = self.write_config("[options]\nspeed = 9600\n")
        with self.assertRaises(config.InvalidConfig):
            config.load_options(path)

        path = self.write_config("separators = 1\n")
        with self.assertRaises(config.InvalidConfig):
            config.load_options(path)

    def test_non_ascii_separators(self):
        """Test that separators in the file must be ASCII characters."""
        path = self.write_config('separators = "\u00e9"\n[options]\na = "x"\n')
        with self.assertRaises(config.InvalidConfig) as ctx:
            config.load_options(path)
        self.assertIsInstance(ctx.exception, config.ConfigException)
        self.assertNotIsInstance(ctx.exception, TokenizerException)

    def test_default_config_path(self):
        """Test that the default path lives in the user config dir."""
        with mock.patch.object(config, "user_config_dir", return_value="/cfg"):
            self.assertEqual(
                os.path.join("/cfg", "options.toml"), config.default_config_path()
            )

    def test_check_options(self):
        """Test counting tokens across all options."""
        options_file = config.OptionsFile(
            path="opts.toml", options={"a": "x y z", "b": "'one arg'"}
        )
        stats, errors = config.check_options(options_file)

        self.assertEqual([], errors)
        self.assertEqual(2, stats.option_count)
        self.assertEqual(4, stats.token_count)

    def test_check_options_errors(self):
        """Test that every malformed option is reported."""
        options_file = config.OptionsFile(
            path="opts.toml",
            options={"good": "a b", "quote": "'open", "escape": "end\\"},
        )
        stats, errors = config.check_options(options_file)

        self.assertEqual(2, len(errors))
        self.assertEqual("quote", errors[0].key)
        self.assertEqual("MalformedInput", errors[0].message)
        self.assertEqual("escape", errors[1].key)
        self.assertEqual("opts.toml", errors[1].path)
        self.assertEqual(2, stats.token_count)


if __name__ == "__main__":
    unittest.main()
