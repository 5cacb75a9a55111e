import json
from pathlib import Path

_DEFAULT_CONFIG = Path(__file__).parent / "config.json"


class ServerConfig:
    __slots__ = ("host", "port")

    def __init__(self, host="127.0.0.1", port=8080):
        self.host = host
        self.port = port


class LoggingConfig:
    __slots__ = ("level", "crash_file")

    def __init__(self, level="INFO", crash_file="logs/crash.log"):
        self.level = level
        self.crash_file = crash_file


class IssuerConfig:
    __slots__ = ("default_country", "max_batch")

    def __init__(self, default_country=0, max_batch=1000):
        self.default_country = default_country
        self.max_batch = max_batch


class Config:
    __slots__ = ("server", "logging", "issuer")

    def __init__(self, server=None, logging=None, issuer=None):
        self.server = server or ServerConfig()
        self.logging = logging or LoggingConfig()
        self.issuer = issuer or IssuerConfig()

    @classmethod
    def from_dict(cls, d):
        return cls(
            ServerConfig(**d.get("server", {})),
            LoggingConfig(**d.get("logging", {})),
            IssuerConfig(**d.get("issuer", {})),
        )


def load_config(path=None):
    config_path = Path(path) if path else _DEFAULT_CONFIG

    if not config_path.exists():
        return Config()

    with open(config_path) as file:
        return Config.from_dict(json.load(file))
