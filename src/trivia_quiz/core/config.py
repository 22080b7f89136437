"""TOML configuration for the trivia quiz.

Settings are grouped by concern (API endpoints, retry policy, quiz
defaults, fixture mode, logging). Files only need to name the keys they
override; unknown keys are rejected so typos do not pass silently.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Mapping, MutableMapping, Optional

try:  # Python 3.11+
    import tomllib
except ModuleNotFoundError as exc:  # pragma: no cover - should never happen
    raise RuntimeError("Python 3.11+ required for tomllib support") from exc

from ..api.models import Difficulty, QuestionType
from . import workspace as workspace_mod

__all__ = [
    "CONFIG_PATH_ENV",
    "FIXTURES_ENV",
    "ConfigError",
    "ApiConfig",
    "RetryConfig",
    "QuizConfig",
    "FixturesConfig",
    "LoggingConfig",
    "TriviaConfig",
    "config_template",
    "default_tree",
    "load_config",
    "resolve_config_path",
    "write_template",
]

CONFIG_PATH_ENV = "TRIVIA_QUIZ_CONFIG"
FIXTURES_ENV = "TRIVIA_QUIZ_FIXTURES"


class ConfigError(RuntimeError):
    """Raised when configuration parsing or validation fails."""


@dataclass(frozen=True)
class ApiConfig:
    base_url: str
    token_url: str
    category_url: str
    timeout_seconds: float


@dataclass(frozen=True)
class RetryConfig:
    max_retries: int
    base_delay_seconds: float
    cooldown_seconds: float


@dataclass(frozen=True)
class QuizConfig:
    amount: int
    difficulty: Optional[Difficulty]
    type: Optional[QuestionType]
    category: Optional[int]


@dataclass(frozen=True)
class FixturesConfig:
    enabled: bool


@dataclass(frozen=True)
class LoggingConfig:
    level: str
    verbose: bool


@dataclass(frozen=True)
class TriviaConfig:
    api: ApiConfig
    retry: RetryConfig
    quiz: QuizConfig
    fixtures: FixturesConfig
    logging: LoggingConfig

    def with_quiz(self, **changes: Any) -> "TriviaConfig":
        """Return a copy with some quiz defaults replaced (CLI overrides)."""

        updates = {k: v for k, v in changes.items() if v is not None}
        if not updates:
            return self
        merged = {
            "amount": self.quiz.amount,
            "difficulty": _value_or_none(self.quiz.difficulty),
            "type": _value_or_none(self.quiz.type),
            "category": self.quiz.category,
        }
        merged.update(updates)
        return replace(self, quiz=_build_quiz(merged))

    def with_fixtures(self, enabled: bool) -> "TriviaConfig":
        return replace(self, fixtures=FixturesConfig(enabled=enabled))


def _value_or_none(member: Any) -> Any:
    return member.value if member is not None else None


def _merge_dict(
    base: MutableMapping[str, Any],
    override: Mapping[str, Any],
    *,
    path: str = "",
) -> None:
    for key, value in override.items():
        dotted = f"{path}{key}"
        if key not in base:
            raise ConfigError(f"Unknown configuration key '{dotted}'.")
        base_value = base[key]
        if isinstance(base_value, MutableMapping):
            if not isinstance(value, Mapping):
                raise ConfigError(
                    "Expected table for '{0}', found {1}.".format(
                        dotted,
                        type(value).__name__,
                    )
                )
            _merge_dict(base_value, value, path=f"{dotted}.")
        else:
            base[key] = value


def _require_positive_int(value: Any, *, field: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigError(f"'{field}' must be a positive integer.")
    return value


def _require_non_negative_int(value: Any, *, field: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ConfigError(f"'{field}' must be a non-negative integer.")
    return value


def _require_non_negative_float(value: Any, *, field: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"'{field}' must be a number.")
    if value < 0:
        raise ConfigError(f"'{field}' must not be negative.")
    return float(value)


def _require_bool(value: Any, *, field: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(f"'{field}' must be a boolean.")
    return value


def _require_url(value: Any, *, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"'{field}' must be a non-empty string.")
    trimmed = value.strip()
    if not trimmed.startswith(("http://", "https://")):
        raise ConfigError(f"'{field}' must be an http(s) URL.")
    return trimmed


def _coerce_optional_choice(value: Any, *, field: str, enum: Any) -> Any:
    if value is None or value == "":
        return None
    try:
        return enum(str(value).strip().lower())
    except ValueError as exc:
        allowed = ", ".join(member.value for member in enum)
        raise ConfigError(f"'{field}' must be one of: {allowed}.") from exc


def _build_api(section: Mapping[str, Any]) -> ApiConfig:
    timeout = _require_non_negative_float(
        section.get("timeout_seconds"), field="api.timeout_seconds"
    )
    if timeout == 0:
        raise ConfigError("'api.timeout_seconds' must be greater than 0.")
    return ApiConfig(
        base_url=_require_url(section.get("base_url"), field="api.base_url"),
        token_url=_require_url(
            section.get("token_url"), field="api.token_url"
        ),
        category_url=_require_url(
            section.get("category_url"), field="api.category_url"
        ),
        timeout_seconds=timeout,
    )


def _build_retry(section: Mapping[str, Any]) -> RetryConfig:
    return RetryConfig(
        max_retries=_require_non_negative_int(
            section.get("max_retries"), field="retry.max_retries"
        ),
        base_delay_seconds=_require_non_negative_float(
            section.get("base_delay_seconds"),
            field="retry.base_delay_seconds",
        ),
        cooldown_seconds=_require_non_negative_float(
            section.get("cooldown_seconds"), field="retry.cooldown_seconds"
        ),
    )


def _build_quiz(section: Mapping[str, Any]) -> QuizConfig:
    amount = _require_positive_int(section.get("amount"), field="quiz.amount")
    if amount > 50:
        raise ConfigError("'quiz.amount' must be 50 or fewer.")
    category = section.get("category")
    if category is not None:
        category = _require_positive_int(category, field="quiz.category")
    return QuizConfig(
        amount=amount,
        difficulty=_coerce_optional_choice(
            section.get("difficulty"), field="quiz.difficulty", enum=Difficulty
        ),
        type=_coerce_optional_choice(
            section.get("type"), field="quiz.type", enum=QuestionType
        ),
        category=category,
    )


def _build_logging(section: Mapping[str, Any]) -> LoggingConfig:
    level = section.get("level")
    if not isinstance(level, str) or level.strip().upper() not in {
        "DEBUG",
        "INFO",
        "WARNING",
        "ERROR",
        "CRITICAL",
    }:
        raise ConfigError(
            "logging.level must be one of "
            "DEBUG, INFO, WARNING, ERROR, CRITICAL."
        )
    verbose = _require_bool(section.get("verbose"), field="logging.verbose")
    return LoggingConfig(level=level.strip().upper(), verbose=verbose)


def _build_config(tree: Mapping[str, Any]) -> TriviaConfig:
    return TriviaConfig(
        api=_build_api(tree["api"]),
        retry=_build_retry(tree["retry"]),
        quiz=_build_quiz(tree["quiz"]),
        fixtures=FixturesConfig(
            enabled=_require_bool(
                tree["fixtures"].get("enabled"), field="fixtures.enabled"
            )
        ),
        logging=_build_logging(tree["logging"]),
    )


def _load_toml(path: Path) -> Mapping[str, Any]:
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except FileNotFoundError as exc:
        raise ConfigError(f"Config file not found: {path}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Failed to parse config TOML: {exc}") from exc


def _env_flag(raw: Optional[str]) -> Optional[bool]:
    if raw is None or not raw.strip():
        return None
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def resolve_config_path(
    *,
    explicit_path: Optional[Path] = None,
    env: Mapping[str, str] | None = None,
) -> tuple[Path, bool]:
    """Return the config path and whether the caller asked for it by name.

    A named file (flag or ``TRIVIA_QUIZ_CONFIG``) must exist; the workspace
    default is optional.
    """

    env_map = os.environ if env is None else env
    if explicit_path is not None:
        return explicit_path.expanduser().resolve(), True
    env_override = env_map.get(CONFIG_PATH_ENV)
    if env_override:
        return Path(env_override).expanduser().resolve(), True
    layout = workspace_mod.ensure_workspace(env=env_map, create=False)
    return layout.config_file, False


def load_config(
    *,
    explicit_path: Optional[Path] = None,
    env: Mapping[str, str] | None = None,
) -> TriviaConfig:
    """Load the TOML config, applying defaults, env overrides and checks."""

    env_map = os.environ if env is None else env
    path, required = resolve_config_path(explicit_path=explicit_path, env=env)
    tree = _deepcopy_defaults()
    if required or path.exists():
        toml_data = _load_toml(path)
        _merge_dict(tree, toml_data)
    fixtures_flag = _env_flag(env_map.get(FIXTURES_ENV))
    if fixtures_flag is not None:
        tree["fixtures"]["enabled"] = fixtures_flag
    return _build_config(tree)


def _deepcopy_defaults() -> Dict[str, Any]:
    return copy.deepcopy(_DEFAULTS)


def default_tree() -> Dict[str, Any]:
    """Return a copy of the default configuration tree."""

    return _deepcopy_defaults()


def config_template() -> str:
    """Return the TOML template written by ``trivia init``."""

    return _CONFIG_TEMPLATE.strip() + "\n"


def write_template(
    path: Path, *, overwrite: bool = False, mode: int = 0o600
) -> Path:
    """Write the default template to ``path``."""

    path.parent.mkdir(parents=True, exist_ok=True)
    if path.exists() and not overwrite:
        raise ConfigError(f"Config already exists: {path}")
    with path.open("w", encoding="utf-8") as fh:
        fh.write(config_template())
    try:
        path.chmod(mode)
    except PermissionError:
        pass
    return path


_DEFAULTS: Dict[str, Any] = {
    "api": {
        "base_url": "https://opentdb.com/api.php",
        "token_url": "https://opentdb.com/api_token.php",
        "category_url": "https://opentdb.com/api_category.php",
        "timeout_seconds": 10,
    },
    "retry": {
        "max_retries": 3,
        "base_delay_seconds": 1.0,
        "cooldown_seconds": 5.0,
    },
    "quiz": {
        "amount": 10,
        "difficulty": "medium",
        "type": None,
        "category": None,
    },
    "fixtures": {
        "enabled": False,
    },
    "logging": {
        "level": "INFO",
        "verbose": False,
    },
}


_CONFIG_TEMPLATE = """
# Trivia quiz configuration

[api]
base_url = "https://opentdb.com/api.php"
token_url = "https://opentdb.com/api_token.php"
category_url = "https://opentdb.com/api_category.php"
timeout_seconds = 10

[retry]
# Extra attempts after HTTP 429 / response code 5
max_retries = 3
# First backoff delay; doubles on every further attempt
base_delay_seconds = 1.0
# Minimum spacing between two fetches (Open Trivia DB allows one per 5s)
cooldown_seconds = 5.0

[quiz]
amount = 10
# easy, medium or hard; set to "" for any difficulty
difficulty = "medium"
# multiple or boolean
# type = "multiple"
# Category id, see `trivia categories`
# category = 9

[fixtures]
# Serve the built-in question set instead of calling the API
enabled = false

[logging]
level = "INFO"
verbose = false
"""
