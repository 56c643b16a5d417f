"""
Credential source for the upstream OpenAI API.
The key is read from the environment on every call, never cached, so an
operator can fix a missing key without restarting the process.
"""

import os
from typing import Mapping, Optional

from responses_proxy.shared.metrics import API_KEY_CONFIGURED


class ApiKeySource:
    """Looks up the bearer token for the upstream API in an environment mapping."""

    def __init__(self, env_var: str, environ: Optional[Mapping[str, str]] = None):
        self.env_var = env_var
        self._environ = os.environ if environ is None else environ

    def get_key(self) -> Optional[str]:
        """Returns the key, or None when it is unset or blank."""
        key = self._environ.get(self.env_var, "").strip()
        API_KEY_CONFIGURED.set(1 if key else 0)
        return key or None

    def is_configured(self) -> bool:
        return self.get_key() is not None
