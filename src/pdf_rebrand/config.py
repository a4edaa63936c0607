# SPDX-License-Identifier: Apache-2.0
"""Environment configuration.

Values are read once by the hosting application (CLI, scripts) and passed
on explicitly; nothing here mutates module state.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

SERVICE_URL_ENV = "PDF_REBRAND_SERVICE_URL"


def load_environment(env_file: Optional[Path] = None) -> None:
    """Load a ``.env`` file into the process environment.

    Variables already set in the environment win over the file.
    """
    if env_file is not None:
        load_dotenv(env_file)
    else:
        load_dotenv()


def load_service_url(env_file: Optional[Path] = None) -> Optional[str]:
    """Return the remote service URL from the environment, if configured."""
    load_environment(env_file)
    url = os.environ.get(SERVICE_URL_ENV, "").strip()
    return url or None
