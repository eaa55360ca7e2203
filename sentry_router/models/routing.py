"""Routing models — matching rules, extracted event attributes, config file."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _lowered(values: Any) -> frozenset[str]:
    return frozenset(str(v).lower() for v in values)


class Route(BaseModel):
    """A single destination plus the rules that select it.

    Exception-type patterns, message keywords, environments and levels are
    lower-cased on construction.  Tag names and status values are exact
    keys and values, compared case-sensitively.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    dsn: str
    tags: frozenset[str] = frozenset()
    status_values: frozenset[str] = frozenset()
    exception_types: frozenset[str] = frozenset()
    message_keywords: frozenset[str] = frozenset()
    environments: frozenset[str] = frozenset()
    levels: frozenset[str] = frozenset()

    @field_validator("tags", "status_values", mode="before")
    @classmethod
    def _exact(cls, value: Any) -> frozenset[str]:
        return frozenset(str(v) for v in value)

    @field_validator(
        "exception_types", "message_keywords", "environments", "levels", mode="before"
    )
    @classmethod
    def _case_fold(cls, value: Any) -> frozenset[str]:
        return _lowered(value)

    def matches(self, attrs: EventAttributes) -> bool:
        """Return ``True`` if any single rule of this route is satisfied."""
        if attrs.tags:
            if any(tag in attrs.tags for tag in self.tags):
                return True
            status = attrs.tags.get("status")
            if status is not None and status in self.status_values:
                return True

        if attrs.exception_type is not None:
            lowered = attrs.exception_type.lower()
            if any(pattern in lowered for pattern in self.exception_types):
                return True

        if attrs.message is not None:
            lowered = attrs.message.lower()
            if any(keyword in lowered for keyword in self.message_keywords):
                return True

        if self.environments and attrs.environment is not None:
            if attrs.environment.lower() in self.environments:
                return True

        if self.levels and attrs.level is not None:
            if attrs.level.lower() in self.levels:
                return True

        return False


class EventAttributes(BaseModel):
    """The handful of event fields that routing looks at."""

    model_config = ConfigDict(frozen=True)

    tags: dict[str, str] = {}
    exception_type: str | None = None
    message: str | None = None
    environment: str | None = None
    level: str | None = None

    @classmethod
    def empty(cls) -> EventAttributes:
        """Attributes of an event nothing could be extracted from."""
        return cls()


# ---------------------------------------------------------------------------
# JSON route configuration file
# ---------------------------------------------------------------------------


class RouteRules(BaseModel):
    """The ``rules`` object of one project in the routing config file."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    tags: list[str] = []
    status_codes: list[str] = Field(default=[], alias="statusCodes")
    exception_types: list[str] = Field(default=[], alias="exceptionTypes")
    message_keywords: list[str] = Field(default=[], alias="messageKeywords")
    environments: list[str] = []
    levels: list[str] = []

    @field_validator("status_codes", mode="before")
    @classmethod
    def _stringify_codes(cls, value: Any) -> Any:
        # Status codes are commonly written as bare integers.
        if isinstance(value, list):
            return [str(v) for v in value]
        return value


class ProjectRouteConfig(BaseModel):
    """One ``projects[]`` entry of the routing config file."""

    model_config = ConfigDict(frozen=True)

    name: str
    dsn: str
    rules: RouteRules = RouteRules()

    def to_route(self) -> Route:
        return Route(
            name=self.name,
            dsn=self.dsn,
            tags=self.rules.tags,
            status_values=self.rules.status_codes,
            exception_types=self.rules.exception_types,
            message_keywords=self.rules.message_keywords,
            environments=self.rules.environments,
            levels=self.rules.levels,
        )


class RoutingConfigFile(BaseModel):
    """Top-level shape of ``sentry-routing-config.json``."""

    model_config = ConfigDict(frozen=True)

    projects: list[ProjectRouteConfig]

    def to_routes(self) -> list[Route]:
        return [project.to_route() for project in self.projects]
