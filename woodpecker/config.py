"""
Модуль для загрузки и валидации конфигурации клиента Woodpecker.
Схема описана моделью Pydantic, файл читается из YAML или JSON.

Переменные окружения здесь не читаются: токен передаётся явно
(в файле конфигурации или через опцию CLI ``--token``).
"""
from __future__ import annotations

import errno
import json
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator

from woodpecker.common.swarm import MAX_POOL_SIZE

DEFAULT_API_BASE = "https://treehole.pku.edu.cn/api/"
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/80.0.3987.149 Safari/537.36"
)
DEFAULT_REFERER = "https://pkuhelper.pku.edu.cn/hole/"


class FetcherConfig(BaseModel):
    """Конфигурация одного клиента: адрес API, токен и параметры HTTP."""
    model_config = ConfigDict(extra="forbid", frozen=True, validate_default=True)

    base_url: HttpUrl = Field(DEFAULT_API_BASE, description="Базовый URL API.")
    params: Dict[str, str] = Field(
        default_factory=dict, description="Фиксированные query-параметры для каждого запроса."
    )
    user_token: str = Field("", description="Токен доступа пользователя.")
    token_param: Optional[str] = Field(
        None, min_length=1, description="Имя query-параметра для токена (None — не передавать)."
    )
    user_agent: str = Field(DEFAULT_USER_AGENT, min_length=1, description="Заголовок User-Agent.")
    referer: str = Field(DEFAULT_REFERER, description="Заголовок Referer.")
    timeout: float = Field(15.0, gt=0, description="Таймаут на один запрос (секунд).")
    pool_limit: int = Field(
        MAX_POOL_SIZE, ge=1, le=MAX_POOL_SIZE, description="Максимум параллельных воркеров."
    )
    polite: bool = Field(False, description="Включить ограничения на номер и размер страницы.")

    @field_validator("params", mode="before")
    def _stringify_params(cls, v: Any) -> Any:
        if isinstance(v, dict):
            return {str(k): str(val) for k, val in v.items()}
        return v


#: используется, если путь к конфигу не передан
DEFAULT_CONFIG_PATH = Path("configs") / "default.yaml"


def _parse_yaml(text: str) -> Any:
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML: {exc}") from exc


def _parse_json(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON: {exc}") from exc


_PARSERS: Dict[str, Callable[[str], Any]] = {
    ".yaml": _parse_yaml,
    ".yml": _parse_yaml,
    ".json": _parse_json,
}


def read_mapping(path: Path) -> Dict[str, Any]:
    """Читает файл конфигурации; формат определяется по расширению."""
    parser = _PARSERS.get(path.suffix.lower())
    if parser is None:
        raise ValueError(f"Неподдерживаемый формат конфига: {path.suffix or path.name}")
    data = parser(path.read_text(encoding="utf-8"))
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise TypeError(f"{path}: ожидался mapping на верхнем уровне, получено {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None]) -> FetcherConfig:
    """
    Возвращает проверенный FetcherConfig.

    Без пути читается ``configs/default.yaml`` (относительно рабочей папки),
    а если его нет, берутся значения по умолчанию. Ошибки: FileNotFoundError,
    ValueError (синтаксис, формат), TypeError (не mapping), ValidationError.
    """
    if path is None:
        if not DEFAULT_CONFIG_PATH.is_file():
            return FetcherConfig()
        source = DEFAULT_CONFIG_PATH
    else:
        source = Path(path).expanduser()
        if not source.is_file():
            raise FileNotFoundError(errno.ENOENT, "Файл конфигурации не найден", str(source))
    return FetcherConfig.model_validate(read_mapping(source))


__all__ = ["FetcherConfig", "load_config", "read_mapping", "DEFAULT_API_BASE", "DEFAULT_CONFIG_PATH"]
