"""
Key/value stores receiving the values of matched options.

The matcher only needs the small ConfigStore protocol; ConfigSet is the
dict-backed implementation used by default. It can also be seeded from a
YAML or JSON file so that command-line values override file values.
"""

import json
import os
from typing import Any, Optional, Protocol, runtime_checkable

import yaml

_MISSING = object()


def _copied(value: Any) -> Any:
    return list(value) if isinstance(value, list) else value


@runtime_checkable
class ConfigStore(Protocol):
    """The store operations the argument matcher relies on."""

    def set_scalar(self, key: str, value: Any) -> None: ...

    def append_to_list(self, key: str, value: Any) -> None: ...

    def has(self, key: str) -> bool: ...


class ConfigSet:
    """
    A dict-backed ConfigStore with typed accessors.

    Example:
        config = ConfigSet()
        config.set_scalar("verbose", True)
        config.append_to_list("include", "/a")
        config.get_bool("verbose")  # True
        config.get_list("include")  # ['/a']
    """

    def __init__(self, values: Optional[dict[str, Any]] = None) -> None:
        self._values: dict[str, Any] = {
            key: _copied(value) for key, value in (values or {}).items()
        }

    @classmethod
    def from_file(cls, config_path: str) -> "ConfigSet":
        """Create a store holding the values of a YAML or JSON file."""
        config = cls()
        config.load_file(config_path)
        return config

    def load_file(self, config_path: str) -> None:
        """
        Load values from a YAML or JSON file.

        The file must hold a mapping at the top level. Loaded values replace
        values already stored under the same keys.

        Args:
            config_path (str): Path to the configuration file.

        Raises:
            FileNotFoundError: If the config file doesn't exist.
            ValueError: If the file format is not supported or invalid.
        """
        if not os.path.exists(config_path):
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        file_ext = os.path.splitext(config_path)[1].lower()

        with open(config_path, "r") as f:
            if file_ext in [".yaml", ".yml"]:
                try:
                    data = yaml.safe_load(f)
                except yaml.YAMLError as e:
                    raise ValueError(f"Invalid YAML file: {e}")
            elif file_ext == ".json":
                try:
                    data = json.load(f)
                except json.JSONDecodeError as e:
                    raise ValueError(f"Invalid JSON file: {e}")
            else:
                raise ValueError(
                    f"Unsupported file format: {file_ext}. "
                    "Supported formats are: .yaml, .yml, .json"
                )

        if data is None:
            return
        if not isinstance(data, dict):
            raise ValueError(
                f"Configuration file must contain a mapping, got {type(data).__name__}"
            )
        for key, value in data.items():
            self._values[str(key)] = _copied(value)

    def set_scalar(self, key: str, value: Any) -> None:
        self._values[key] = _copied(value)

    def append_to_list(self, key: str, value: Any) -> None:
        """Append ``value`` to the list under ``key``, creating it if needed."""
        current = self._values.get(key, _MISSING)
        if current is _MISSING:
            self._values[key] = [value]
        elif isinstance(current, list):
            self._values[key] = current + [value]
        else:
            self._values[key] = [current, value]

    def has(self, key: str) -> bool:
        return key in self._values

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def _typed(self, key: str, expected: type, default: Any) -> Any:
        if key not in self._values:
            if default is _MISSING:
                raise KeyError(key)
            return default
        value = self._values[key]
        if expected is int and isinstance(value, bool):
            raise TypeError(f"Key '{key}' expects int, got bool: {value!r}")
        if not isinstance(value, expected):
            raise TypeError(
                f"Key '{key}' expects {expected.__name__}, got {type(value).__name__}: {value!r}"
            )
        return value

    def get_string(self, key: str, default: Any = _MISSING) -> str:
        return self._typed(key, str, default)

    def get_int(self, key: str, default: Any = _MISSING) -> int:
        return self._typed(key, int, default)

    def get_bool(self, key: str, default: Any = _MISSING) -> bool:
        return self._typed(key, bool, default)

    def get_list(self, key: str, default: Any = _MISSING) -> list[str]:
        """
        Return the list stored under ``key``.

        A scalar value is returned as a one-element list, so options declared
        without ``*`` can be read the same way.
        """
        if key not in self._values:
            if default is _MISSING:
                raise KeyError(key)
            return default
        value = self._values[key]
        if isinstance(value, list):
            return list(value)
        return [value]

    def to_dict(self) -> dict[str, Any]:
        return {key: _copied(value) for key, value in self._values.items()}

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"ConfigSet({self._values!r})"
