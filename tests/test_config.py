import os
import tempfile
import unittest
from dataclasses import FrozenInstanceError
from pathlib import Path
from unittest.mock import patch

from devserver.core.config import (
    DevServerConfig,
    get_dev_server_config,
    load_dev_server_config,
    normalize_public_url,
    parse_plugin_specs,
)
from devserver.core.web_config import WebConfig


def _clean_env():
    env = patch.dict(os.environ)
    env.start()
    for name in ("WEB_HOST", "WEB_PORT", "DEVSERVER_CONFIG", "DEVSERVER_SECRET_KEY", "FLASK_SECRET_KEY"):
        os.environ.pop(name, None)
    return env


class WebConfigTests(unittest.TestCase):
    def test_reads_basic_values(self):
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            conf = root / "devserver.env"
            conf.write_text(
                "\n".join(
                    [
                        "# comment",
                        "WEB_HOST='127.0.0.1'",
                        "WEB_PORT=8989",
                        "POLL_SECONDS=0.5",
                        "STATIC_PATH=./public",
                        "DEBUG=yes",
                    ]
                ),
                encoding="utf-8",
            )
            cfg = WebConfig(conf, root)
            self.assertEqual(cfg.get_str("WEB_HOST", "x"), "127.0.0.1")
            self.assertEqual(cfg.get_int("WEB_PORT", 0), 8989)
            self.assertEqual(cfg.get_float("POLL_SECONDS", 0.0), 0.5)
            self.assertEqual(cfg.get_path("STATIC_PATH", root / "none"), root / "public")
            self.assertTrue(cfg.get_bool("DEBUG", False))

    def test_missing_file_uses_defaults(self):
        with tempfile.TemporaryDirectory() as tmp:
            cfg = WebConfig(Path(tmp) / "missing.env", tmp)
            self.assertEqual(cfg.values, {})
            self.assertEqual(cfg.get_int("WEB_PORT", 5000, minimum=0), 5000)
            self.assertIsNone(cfg.get_path("STATIC_PATH", None))
            self.assertFalse(cfg.get_bool("DEBUG", False))

    def test_int_is_clamped_and_bad_values_fall_back(self):
        with tempfile.TemporaryDirectory() as tmp:
            conf = Path(tmp) / "devserver.env"
            conf.write_text("WEB_PORT=-5\nRETRIES=abc\nDEBUG=maybe\n", encoding="utf-8")
            cfg = WebConfig(conf, tmp)
            self.assertEqual(cfg.get_int("WEB_PORT", 5000, minimum=0), 0)
            self.assertEqual(cfg.get_int("RETRIES", 3), 3)
            self.assertTrue(cfg.get_bool("DEBUG", True))


class DevServerConfigTests(unittest.TestCase):
    def setUp(self):
        self.addCleanup(_clean_env().stop)

    def test_defaults_without_config_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            config = load_dev_server_config(base_dir=root)
        self.assertIsInstance(config, DevServerConfig)
        self.assertEqual(config.host, "localhost")
        self.assertEqual(config.port, 5000)
        self.assertIsNone(config.static_path)
        self.assertEqual(config.public_url, "/")
        self.assertEqual(config.log_dir, root / "logs")
        self.assertEqual(config.plugins, ())
        self.assertTrue(config.secret_key)

    def test_file_values_and_env_overrides(self):
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "devserver.env").write_text(
                "WEB_HOST=0.0.0.0\nWEB_PORT=7000\nSTATIC_PATH=static\nPUBLIC_URL=assets\n"
                "PLUGINS=pkg.mod:start, other:plugin ,\nDEVSERVER_SECRET_KEY=s3cret\n",
                encoding="utf-8",
            )
            os.environ["WEB_PORT"] = "7100"
            config = load_dev_server_config(base_dir=root)
        self.assertEqual(config.host, "0.0.0.0")
        self.assertEqual(config.port, 7100)
        self.assertEqual(config.static_path, root / "static")
        self.assertEqual(config.public_url, "/assets/")
        self.assertEqual(config.plugins, ("pkg.mod:start", "other:plugin"))
        self.assertEqual(config.secret_key, "s3cret")

    def test_config_env_var_points_at_alternate_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            conf_dir = Path(tmp) / "conf"
            conf_dir.mkdir()
            (conf_dir / "custom.env").write_text("WEB_PORT=6123\nSTATIC_PATH=public\n", encoding="utf-8")
            os.environ["DEVSERVER_CONFIG"] = str(conf_dir / "custom.env")
            config = get_dev_server_config()
        self.assertEqual(config.port, 6123)
        self.assertEqual(config.static_path, conf_dir.resolve() / "public")

    def test_config_is_immutable(self):
        config = DevServerConfig(root_dir=Path("."))
        with self.assertRaises(FrozenInstanceError):
            config.port = 1


class HelperTests(unittest.TestCase):
    def test_normalize_public_url(self):
        self.assertEqual(normalize_public_url(""), "/")
        self.assertEqual(normalize_public_url("/"), "/")
        self.assertEqual(normalize_public_url("static"), "/static/")
        self.assertEqual(normalize_public_url("/a/b"), "/a/b/")
        self.assertEqual(normalize_public_url("https://cdn.example.com/app"), "/app/")

    def test_parse_plugin_specs(self):
        self.assertEqual(parse_plugin_specs(""), ())
        self.assertEqual(parse_plugin_specs("a:b,,c:d "), ("a:b", "c:d"))


if __name__ == "__main__":
    unittest.main()
