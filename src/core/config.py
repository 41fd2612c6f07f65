"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Cliente (TwinFetcher), servicio de lookup y frontend leen la misma config.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "deathbat-twin"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "deathbat-twin"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "deathbat-twin"
    return Path.home() / ".config" / "deathbat-twin"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str], *, env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# deathbat-twin user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="DEATHBAT_TWIN_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    twin_api_url: str = Field(
        default="http://localhost:6660/twin",
        min_length=1,
        description="Endpoint base del servicio de lookup (sin query string).",
    )
    http_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Timeout por request (segundos). None = sin timeout.",
    )
    user_agent: str = Field(
        default="deathbat-twin/0.1 (+https://local)",
        min_length=1,
        description="User-Agent para peticiones HTTP salientes.",
    )

    collection_path: Path = Field(
        default=Path("deathbats.json"),
        description="Ruta al JSON con la colección completa de Deathbats.",
    )
    api_host: str = Field(
        default="0.0.0.0",
        description="Interfaz donde escuchan el servicio de lookup y el frontend.",
    )
    api_port: int = Field(
        default=6660,
        ge=1,
        le=65535,
        description="Puerto del servicio de lookup (/twin).",
    )
    frontend_port: int = Field(
        default=6661,
        ge=1,
        le=65535,
        description="Puerto del frontend (página + /static/).",
    )

    opensea_asset_api: str = Field(
        default="https://api.opensea.io/api/v1/asset/0x1D3aDa5856B14D9dF178EA5Cab137d436dC55F1D/",
        min_length=8,
        description="Prefijo de la API de assets de OpenSea para el contrato Deathbats.",
    )
    opensea_api_key: str | None = Field(
        default=None,
        description="API key de OpenSea (header X-API-KEY), opcional.",
    )

    token_id_min: int = Field(default=1, ge=0, description="Token id mínimo aceptado.")
    token_id_max: int = Field(default=10_000, ge=1, description="Token id máximo aceptado.")

    log_level: str = Field(
        default="INFO",
        description="Nivel de logging (DEBUG, INFO, WARNING, ...).",
    )
