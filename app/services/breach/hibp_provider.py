import logging

import requests

from app.core import config
from app.core.errors import CollaboratorUnavailable
from app.services.breach.base import BreachProvider

logger = logging.getLogger(__name__)


def parse_range_body(body: str) -> dict[str, int]:
    """
    Parses newline separated SUFFIX:COUNT lines.
    Blank lines are skipped; anything else malformed is an error.
    """
    counts: dict[str, int] = {}

    for line in body.splitlines():
        line = line.strip()
        if not line:
            continue

        hash_suffix, sep, count = line.partition(":")
        if not sep:
            raise CollaboratorUnavailable("Malformed range line")

        try:
            counts[hash_suffix] = int(count)
        except ValueError:
            raise CollaboratorUnavailable("Malformed range count") from None

    return counts


class HIBPProvider(BreachProvider):
    """
    Have I Been Pwned "Pwned Passwords" range API.
    Password must NEVER be sent, stored or logged; only the prefix leaves.
    """

    def __init__(
        self,
        range_url: str = config.HIBP_RANGE_URL,
        timeout: float = config.HIBP_TIMEOUT_SECONDS,
        user_agent: str = config.HIBP_USER_AGENT,
    ):
        self.range_url = range_url
        self.timeout = timeout

        self.headers = {
            "User-Agent": user_agent,
            "Accept": "text/plain",
        }

    def range_counts(self, prefix: str) -> dict[str, int]:
        try:
            resp = requests.get(
                f"{self.range_url}/{prefix}",
                headers=self.headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.warning("Breach lookup request failed: %s", exc.__class__.__name__)
            raise CollaboratorUnavailable("Password breach service unavailable") from exc

        if resp.status_code != 200:
            logger.warning("Breach lookup returned status=%s", resp.status_code)
            raise CollaboratorUnavailable("Password breach service unavailable")

        return parse_range_body(resp.text)
