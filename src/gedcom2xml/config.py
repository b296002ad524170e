import os
from pathlib import Path

import yaml

CONFIG_PATH = Path(__file__).resolve().parents[2] / "config" / "gedcom2xml.yml"
CONFIG_ENV_VAR = "GEDCOM2XML_CONFIG"

DEFAULT_TRANSCODER = {
    "root_tag": "gedcom",
    "indent": "  ",
    "input_encoding": "utf-8",
}


class GPConfig:
    def __init__(self, data):
        self.paths = data.get("paths", {})
        self.logging = data.get("logging", {})
        self.transcoder = {**DEFAULT_TRANSCODER, **(data.get("transcoder") or {})}
        self.debug = data.get("debug", False)

    @property
    def root_tag(self) -> str:
        return str(self.transcoder["root_tag"])

    @property
    def indent(self) -> str:
        return str(self.transcoder["indent"])

    @property
    def input_encoding(self) -> str:
        return str(self.transcoder["input_encoding"])


def config_path() -> Path:
    override = os.environ.get(CONFIG_ENV_VAR)
    return Path(override) if override else CONFIG_PATH


def load_config(path: Path | None = None) -> 'GPConfig':
    path = path or config_path()
    if not path.exists():
        # Installed without the repository's config/ directory
        return GPConfig({})

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    return GPConfig(data)


_config_cache = None


def get_config() -> 'GPConfig':
    global _config_cache
    if _config_cache is None:
        _config_cache = load_config()
    return _config_cache
