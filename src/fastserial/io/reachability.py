"""Network reachability gate consulted before a remote fetch, using requests."""

from __future__ import annotations

import logging
from typing import Optional

import requests

log = logging.getLogger(__name__)

DEFAULT_CHECK_URL = "https://www.example.com/"
CHECK_TIMEOUT = 5.0

# Module-level session for connection pooling
_session = None


def _get_session():
    """Get or create the global requests session."""
    global _session
    if _session is None:
        _session = requests.Session()
    return _session


class RequestsReachability:
    """Reports whether the network is up by asking a check URL to answer at all.

    Any HTTP status counts as reachable. This is a connectivity check: it
    never contacts the host the payload is fetched from, unless that host is
    passed as `check_url`.
    """

    def __init__(self, check_url: Optional[str] = None, timeout: Optional[float] = CHECK_TIMEOUT):
        self.check_url = check_url or DEFAULT_CHECK_URL
        self.timeout = timeout
        self.checks_made = 0

    def is_reachable(self) -> bool:
        self.checks_made += 1
        try:
            _get_session().head(self.check_url, timeout=self.timeout, allow_redirects=False)
        except requests.RequestException as e:
            log.debug("Reachability check %s failed: %s", self.check_url, e)
            return False
        return True

    __call__ = is_reachable


class AlwaysReachable:
    """Gate that never blocks a fetch."""

    def is_reachable(self) -> bool:
        return True

    __call__ = is_reachable
