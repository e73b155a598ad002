"""API credential lookup.

The key is looked up in an environment variable first and then in a local
file. Resolution is lazy: nothing is read until a request needs the key.
"""

import os
from pathlib import Path

from .errors import ConfigurationError

DEFAULT_API_KEY_VAR = "OPENAI_API_KEY"
DEFAULT_API_KEY_FILE = "open_ai_auth_key.txt"


def _checked(value: str, origin: str) -> str:
    """Reject keys that cannot be sent in an HTTP header."""
    if not value.isascii():
        raise ConfigurationError(f"API key from {origin} contains non-ASCII characters")
    return value


class CredentialSource:
    """Resolves the API key from the environment, falling back to a file."""

    def __init__(
        self,
        env_var: str = DEFAULT_API_KEY_VAR,
        key_file: str | Path = DEFAULT_API_KEY_FILE
    ):
        self._env_var = env_var
        self._key_file = Path(key_file)

    @property
    def env_var(self) -> str:
        return self._env_var

    @property
    def key_file(self) -> Path:
        return self._key_file

    def resolve(self) -> str:
        """Return the current API key.

        Returns:
            The environment variable's value if set and non-empty, otherwise
            the key file's trimmed contents

        Raises:
            ConfigurationError: If neither source yields a usable key
        """
        value = os.getenv(self._env_var)
        if value:
            return _checked(value, f"${self._env_var}")

        try:
            value = self._key_file.read_text(encoding="utf-8").strip()
        except OSError as e:
            raise ConfigurationError(
                f"couldn't find API key in environment variable (${self._env_var}) "
                f"or file ({self._key_file}): {e.strerror or e}"
            ) from e
        except UnicodeDecodeError as e:
            raise ConfigurationError(
                f"couldn't read API key file {self._key_file}: not valid UTF-8"
            ) from e

        if not value:
            raise ConfigurationError(
                f"couldn't find API key in environment variable (${self._env_var}); "
                f"file {self._key_file} is empty"
            )
        return _checked(value, f"file {self._key_file}")
