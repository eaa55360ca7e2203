"""DSN parsing and masking.

A DSN has the form ``scheme://key@host/project``.  The key is the only
credential the router handles and it must never be logged in full.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict

from sentry_router.errors import ConfigurationError

# Optional scheme, then everything up to the last "@" before the host.
_CREDENTIAL_RE = re.compile(r"^((?:[^:/@]*://)?).*@")


def mask_dsn(dsn: str | None) -> str:
    """Replace the key portion of *dsn* with ``***``."""
    if dsn is None:
        return "null"
    return _CREDENTIAL_RE.sub(r"\1***@", dsn, count=1)


class Dsn(BaseModel):
    """A parsed DSN: where to POST envelopes and which key to present."""

    model_config = ConfigDict(frozen=True)

    scheme: str
    auth_key: str
    host: str
    project_path: str

    @classmethod
    def parse(cls, dsn: str) -> Dsn:
        """Parse *dsn*, failing fast on anything malformed.

        Raises
        ------
        ConfigurationError
            If ``://``, ``@`` or the ``/`` before the project is missing,
            or any of scheme, key, host or project is empty.
        """
        masked = mask_dsn(dsn)
        scheme, sep, remainder = dsn.partition("://")
        if not sep:
            raise ConfigurationError(f"DSN {masked!r} is missing '://'")
        auth_key, sep, host_and_project = remainder.rpartition("@")
        if not sep:
            raise ConfigurationError(f"DSN {masked!r} is missing '@'")
        host, sep, project_path = host_and_project.partition("/")
        if not sep:
            raise ConfigurationError(f"DSN {masked!r} is missing '/' before the project")

        project_path = project_path.strip("/")
        for label, value in (
            ("scheme", scheme),
            ("key", auth_key),
            ("host", host),
            ("project", project_path),
        ):
            if not value:
                raise ConfigurationError(f"DSN {masked!r} has an empty {label}")

        return cls(
            scheme=scheme,
            auth_key=auth_key,
            host=host,
            project_path=project_path,
        )

    @property
    def api_url(self) -> str:
        """The envelope ingestion endpoint for this project."""
        return f"{self.scheme}://{self.host}/api/{self.project_path}/envelope/"

    @property
    def masked(self) -> str:
        return f"{self.scheme}://***@{self.host}/{self.project_path}"

    def __repr__(self) -> str:
        return f"Dsn({self.masked!r})"
