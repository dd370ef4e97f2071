"""Provider credential resolution."""

from __future__ import annotations

import logging
import os

from schemas.config_schemas import Config
from schemas.issue_schemas import ProviderId
from tools.error_handler import CredentialsError

logger = logging.getLogger(__name__)


def resolve_token(provider: ProviderId, config: Config) -> str:
    """Return the token for ``provider``: environment variable first, then the stored token."""
    env_token = os.environ.get(provider.env_var, "").strip()
    if env_token:
        logger.debug("Using %s token from %s", provider.display_name, provider.env_var)
        return env_token

    stored = config.unified.tokens.get(provider)
    if stored:
        return stored

    raise CredentialsError(
        f"missing credentials for {provider.display_name}",
        detail=f"set {provider.env_var} or run `kirei init --{provider.value}-token ...`",
    )
