import os
import logging
from pathlib import Path
from typing import Dict, Any

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:3001/api"


def _as_bool(value: Any, default: bool = False) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


class Config:
    def __init__(self, config_file: str = "config/config.yaml"):
        # Carregar variáveis de ambiente do arquivo .env
        load_dotenv()

        self.config_file = config_file
        self.config = self._load_yaml(config_file)

    def _load_yaml(self, config_file: str) -> Dict[str, Any]:
        """Carrega o arquivo YAML de configuração, usando valores padrão se não existir."""
        path = Path(config_file)
        if not path.exists():
            logger.warning(f"Arquivo de configuração {config_file} não encontrado. Usando valores padrão.")
            return {}

        with open(path, 'r', encoding='utf-8') as file:
            data = yaml.safe_load(file)

        if not isinstance(data, dict):
            logger.warning(f"Arquivo de configuração {config_file} está vazio. Usando valores padrão.")
            return {}
        return data

    def _section(self, name: str) -> Dict[str, Any]:
        return self.config.get(name) or {}

    @property
    def api_config(self) -> dict:
        """Retorna as configurações de acesso à API REST de eventos"""
        api = self._section("api")
        return {
            "base_url": (os.getenv("EVENTS_API_URL") or api.get("base_url") or DEFAULT_API_URL).rstrip("/"),
            "token": os.getenv("EVENTS_API_TOKEN") or api.get("token") or None,
            "timeout": float(api.get("timeout", 30)),
        }

    @property
    def query_config(self) -> dict:
        """Retorna as configurações de retry e cache das consultas"""
        query = self._section("query")
        return {
            "retry": int(query.get("retry", 3)),
            "retry_delay": float(query.get("retry_delay", 1.0)),
            "stale_time": float(query.get("stale_time", 30)),
        }

    @property
    def ui_config(self) -> dict:
        ui = self._section("ui")
        return {
            "page_size": int(ui.get("page_size", 10)),
        }

    @property
    def server_config(self) -> dict:
        """Retorna as configurações do servidor web"""
        server = self._section("server")
        return {
            "host": server.get("host", "0.0.0.0"),
            "port": int(server.get("port", 5000)),
            "debug": _as_bool(server.get("debug"), False),
            "secret_key": os.getenv("SECRET_KEY") or server.get("secret_key") or "dev",
        }

    @property
    def security_config(self) -> dict:
        """Retorna as configurações de segurança (CORS e rate limiting)"""
        security = self._section("security")
        rate_limiting = security.get("rate_limiting") or {}
        return {
            "enable_cors": _as_bool(security.get("enable_cors"), True),
            "allowed_origins": security.get("allowed_origins", "*"),
            "rate_limiting": {
                "enabled": _as_bool(rate_limiting.get("enabled"), True),
                "mutations_per_minute": int(rate_limiting.get("mutations_per_minute", 30)),
            },
        }

    @property
    def logging_config(self) -> dict:
        """Retorna as configurações de log"""
        log_cfg = self._section("logging")
        return {
            "level": os.getenv("LOG_LEVEL") or log_cfg.get("level", "INFO"),
            "file": log_cfg.get("file", ""),
        }
