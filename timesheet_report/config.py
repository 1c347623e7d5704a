"""Runtime configuration, read from TIMESHEET_* environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from urllib.parse import urlsplit

from timesheet_report.models import ConfigError, FetchError

DEFAULT_API_URL = (
    "https://rc-vault-fap-live-1.azurewebsites.net/api/gettimeentries"
    "?code=vO17RnE8vuzXzPJo5eaLLjXjmRW07"
)
DEFAULT_TIMEOUT = 30.0
DEFAULT_LOW_HOURS = 100.0
DEFAULT_HTML_OUT = "output.html"
DEFAULT_CHART_OUT = "chart.png"
DEFAULT_LOG_LEVEL = "WARNING"


def _float_env(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from None


def _list_env(name: str) -> list[str]:
    raw = os.environ.get(name, "")
    return [item.strip().lower() for item in raw.split(",") if item.strip()]


def check_timeout(timeout: float) -> float:
    if timeout <= 0:
        raise ConfigError(f"timeout must be positive, got {timeout}")
    return timeout


@dataclass
class ReportSettings:
    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT
    low_hours_threshold: float = DEFAULT_LOW_HOURS
    html_out: str = DEFAULT_HTML_OUT
    chart_out: str = DEFAULT_CHART_OUT
    log_level: str = DEFAULT_LOG_LEVEL
    # hosts the API may fetch from besides the api_url host
    allowed_hosts: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        check_timeout(self.timeout)

    @property
    def fetchable_hosts(self) -> set[str]:
        hosts = {h.lower() for h in self.allowed_hosts}
        api_host = urlsplit(self.api_url).hostname
        if api_host:
            hosts.add(api_host.lower())
        return hosts

    def check_fetch_url(self, url: str) -> str:
        """Return url if the API may fetch it, else raise FetchError."""
        parts = urlsplit(url)
        if parts.scheme not in ("http", "https"):
            raise FetchError(f"URL scheme {parts.scheme!r} is not allowed")
        if not parts.hostname or parts.hostname.lower() not in self.fetchable_hosts:
            raise FetchError(f"Host {parts.hostname!r} is not in TIMESHEET_ALLOWED_HOSTS")
        return url

    @classmethod
    def from_env(cls) -> "ReportSettings":
        return cls(
            api_url=os.environ.get("TIMESHEET_API_URL", "").strip() or DEFAULT_API_URL,
            timeout=_float_env("TIMESHEET_TIMEOUT", DEFAULT_TIMEOUT),
            low_hours_threshold=_float_env("TIMESHEET_LOW_HOURS", DEFAULT_LOW_HOURS),
            html_out=os.environ.get("TIMESHEET_HTML_OUT", "").strip() or DEFAULT_HTML_OUT,
            chart_out=os.environ.get("TIMESHEET_CHART_OUT", "").strip() or DEFAULT_CHART_OUT,
            log_level=os.environ.get("TIMESHEET_LOG_LEVEL", "").strip() or DEFAULT_LOG_LEVEL,
            allowed_hosts=_list_env("TIMESHEET_ALLOWED_HOSTS"),
        )
