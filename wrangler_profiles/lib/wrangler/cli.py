import logging
import re
import subprocess
from dataclasses import dataclass
from typing import Dict, List, Optional

from ..core.errors import ExternalToolError

logger = logging.getLogger("wrangler_profiles")

# `wrangler whoami` prints a table of accounts:
#   │ Account Name │ Account ID                       │
#   │ Some Account │ 0123456789abcdef0123456789abcdef │
_ACCOUNT_ID_RE = re.compile(r"[|│]\s*([a-f0-9]{32})\s*[|│]?\s*$", re.IGNORECASE)
_EMAIL_RE = re.compile(r"associated with the email\s+(\S+?@\S+?)\.?\s*$", re.IGNORECASE)


@dataclass
class WhoAmI:
    account_id: str
    email: str = ""


def parse_whoami(output: str) -> Optional[WhoAmI]:
    """Extract the first account ID (and e-mail, if shown) from `wrangler whoami` output."""
    email = ""
    account_id = None
    for line in output.splitlines():
        line = line.strip()
        if not email:
            match = _EMAIL_RE.search(line)
            if match:
                email = match.group(1)
        if account_id is None:
            match = _ACCOUNT_ID_RE.search(line)
            if match:
                account_id = match.group(1)

    if account_id is None:
        return None
    return WhoAmI(account_id=account_id, email=email)


class WranglerCLI:
    """Thin wrapper around the wrangler executable."""

    def __init__(self, executable: str = "wrangler", whoami_timeout: int = 30):
        self.executable = executable
        self.whoami_timeout = whoami_timeout

    def login(self):
        """
        Run the interactive `wrangler login` browser flow.
        Raises ExternalToolError if it cannot be started or exits non-zero.
        """
        try:
            result = subprocess.run([self.executable, "login"], check=False)
        except FileNotFoundError as e:
            raise ExternalToolError(
                f"'{self.executable}' command not found. Please ensure wrangler is installed."
            ) from e

        if result.returncode != 0:
            raise ExternalToolError("Login failed or was cancelled")

    def whoami(self) -> Optional[WhoAmI]:
        """Detect the logged-in account. Returns None when it cannot be determined."""
        try:
            result = subprocess.run(
                [self.executable, "whoami"],
                capture_output=True,
                text=True,
                timeout=self.whoami_timeout,
                check=False,
            )
        except (subprocess.TimeoutExpired, FileNotFoundError) as e:
            logger.warning(f"wrangler whoami failed: {e}")
            return None

        if result.returncode != 0:
            logger.warning(f"wrangler whoami exited with code {result.returncode}")
            return None
        return parse_whoami(result.stdout)

    def run(self, args: List[str], env: Dict[str, str]) -> int:
        """Run wrangler with inherited stdio and return its exit code."""
        logger.debug(f"Running {self.executable} {' '.join(args)}")
        try:
            result = subprocess.run([self.executable, *args], env=env, check=False)
        except FileNotFoundError as e:
            raise ExternalToolError(
                f"'{self.executable}' command not found. Please ensure wrangler is installed."
            ) from e
        return result.returncode
