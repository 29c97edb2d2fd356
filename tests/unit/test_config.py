import json
import sys
import tempfile
import unittest
from dataclasses import FrozenInstanceError
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "renderer"))
sys.path.insert(0, str(ROOT / "packages" / "core"))

from statcard_core.config import CardConfig, load_config, save_config, with_overrides


class ConfigTests(unittest.TestCase):
    def test_load_default_when_missing(self):
        with tempfile.TemporaryDirectory() as tmp:
            cfg = load_config(Path(tmp) / "missing.json")
            self.assertIsInstance(cfg, CardConfig)
            self.assertEqual(cfg.paths.assets, "./png")
            self.assertEqual(cfg.fonts.data, "10014.ttf")
            self.assertEqual(cfg.render.icon_theme, "sakura miku")
            self.assertEqual(cfg.render.quality, 100)

    def test_unreadable_file_falls_back(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            path.write_text("{not json", encoding="utf-8")
            self.assertEqual(load_config(path), CardConfig())

    def test_save_and_reload(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            cfg = with_overrides(load_config(path), assets="/srv/png")
            save_config(cfg, path)
            reloaded = load_config(path)
            self.assertEqual(reloaded.paths.assets, "/srv/png")
            self.assertEqual(reloaded, cfg)

    def test_migrate_v1_shape(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            old = {"png": "/data/png", "font": "/data/fonts", "font_set": {"sign": "/sign.ttf"}, "bogus": 1}
            path.write_text(json.dumps(old), encoding="utf-8")
            cfg = load_config(path)
            self.assertEqual(cfg.config_version, 2)
            self.assertEqual(cfg.paths.assets, "/data/png")
            self.assertEqual(cfg.fonts.sign, "sign.ttf")
            self.assertEqual(cfg.font_set().sign, str(Path("/data/fonts") / "sign.ttf"))

    def test_quality_clamped(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            path.write_text(json.dumps({"config_version": 2, "render": {"quality": 500}}), encoding="utf-8")
            self.assertEqual(load_config(path).render.quality, 100)

    def test_frozen(self):
        cfg = CardConfig()
        with self.assertRaises(FrozenInstanceError):
            cfg.paths.assets = "/elsewhere"  # type: ignore[misc]

    def test_asset_library(self):
        cfg = with_overrides(CardConfig(), assets="/assets")
        library = cfg.asset_library()
        self.assertEqual(library.avatar(7), Path("/assets/avatars/7.png"))
        self.assertEqual(library.icon("x.png"), Path("/assets/rank/sakura miku/x.png"))


if __name__ == "__main__":
    unittest.main()
