"""Helpdesk analytics configuration and environment setup."""

import os
from dataclasses import dataclass, replace
from pathlib import Path

from helpdesk.utils.io import load_toml_config
from helpdesk.utils.types import TimeRange

type ConfigDict = dict[str, str | int | bool | list[str]]

PROJECT_ROOT = Path(__file__).parent.parent


@dataclass(frozen=True)
class StorageConfig:
    data_dir: Path
    tickets_key: str
    insights_key: str
    settings_key: str


@dataclass(frozen=True)
class LLMConfig:
    provider: str
    model: str
    base_url: str
    api_key_env: str
    timeout: int

    @property
    def api_key(self) -> str:
        return os.environ.get(self.api_key_env, "")


@dataclass(frozen=True)
class HelpdeskConfig:
    storage: StorageConfig
    llm: LLMConfig
    default_range: TimeRange
    top_n: int
    demo_on_empty: bool


def load_helpdesk_config(env: str = "production") -> HelpdeskConfig:
    match env:
        case "production":
            storage = StorageConfig(
                data_dir=Path.home() / ".helpdesk",
                tickets_key="helpdesk_db_tickets",
                insights_key="helpdesk_insights_cache",
                settings_key="llm_settings",
            )
            llm = LLMConfig(
                provider="gemini",
                model="gemini-2.5-flash",
                base_url="https://generativelanguage.googleapis.com/v1beta/openai",
                api_key_env="HELPDESK_API_KEY",
                timeout=90,
            )
            demo_on_empty = True
        case "development":
            storage = StorageConfig(
                data_dir=PROJECT_ROOT / ".helpdesk",
                tickets_key="helpdesk_db_tickets",
                insights_key="helpdesk_insights_cache",
                settings_key="llm_settings",
            )
            llm = LLMConfig(
                provider="custom",
                model="llama3",
                base_url="http://localhost:11434/v1",
                api_key_env="HELPDESK_API_KEY",
                timeout=120,
            )
            demo_on_empty = True
        case "test":
            storage = StorageConfig(
                data_dir=PROJECT_ROOT / ".helpdesk-test",
                tickets_key="helpdesk_db_tickets",
                insights_key="helpdesk_insights_cache",
                settings_key="llm_settings",
            )
            llm = LLMConfig(
                provider="openai",
                model="gpt-4o-mini",
                base_url="https://api.openai.com/v1",
                api_key_env="HELPDESK_API_KEY",
                timeout=5,
            )
            demo_on_empty = False
        case other:
            raise ValueError(f"Unknown environment: {other}")

    return HelpdeskConfig(
        storage=storage,
        llm=llm,
        default_range=TimeRange.LAST_30_DAYS,
        top_n=10,
        demo_on_empty=demo_on_empty,
    )


def apply_overrides(config: HelpdeskConfig, overrides: dict) -> HelpdeskConfig:
    """Layer a parsed override mapping (yaml or ``[tool.helpdesk]``) on a config."""
    storage, llm = config.storage, config.llm
    top = {}

    for key, value in overrides.items():
        match key, value:
            case "data_dir", str() as path:
                storage = replace(storage, data_dir=Path(path).expanduser())
            case "llm", {**llm_opts}:
                known = {k: v for k, v in llm_opts.items() if k in LLMConfig.__dataclass_fields__}
                llm = replace(llm, **known)
            case "default_range", str() as name:
                top["default_range"] = TimeRange(name)
            case "top_n", int() as n:
                top["top_n"] = n
            case "demo_on_empty", bool() as flag:
                top["demo_on_empty"] = flag
            case _:
                raise ValueError(f"Unknown configuration key: {key}")

    return replace(config, storage=storage, llm=llm, **top)


def get_env_config() -> ConfigDict:
    """Read helpdesk config from pyproject.toml."""
    pyproject = PROJECT_ROOT / "pyproject.toml"
    if not pyproject.exists():
        return {}
    data = load_toml_config(pyproject)
    return data.get("tool", {}).get("helpdesk", {})
