"""Data models shared by the HTTP APIs, with their JSON wire forms."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Mapping


class ErrorCode(str, enum.Enum):
    """Terse error strings, based on OAuth2 with proprietary additions."""

    ACCESS_DENIED = "access_denied"
    CONFLICT = "conflict"
    FORBIDDEN = "forbidden"
    INVALID_CLIENT = "invalid_client"
    INVALID_GRANT = "invalid_grant"
    INVALID_REQUEST = "invalid_request"
    INVALID_SCOPE = "invalid_scope"
    METHOD_NOT_ALLOWED = "method_not_allowed"
    NOT_FOUND = "not_found"
    SERVER_ERROR = "server_error"
    TEMPORARILY_UNAVAILABLE = "temporarily_unavailable"
    UNAUTHORIZED_CLIENT = "unauthorized_client"
    UNSUPPORTED_GRANT_TYPE = "unsupported_grant_type"
    UNSUPPORTED_MEDIA_TYPE = "unsupported_media_type"
    UNSUPPORTED_RESPONSE_TYPE = "unsupported_response_type"


class ResourceProvisioningStatus(str, enum.Enum):
    """The provisioning state of a resource."""

    DEPROVISIONING = "deprovisioning"
    ERROR = "error"
    PROVISIONED = "provisioned"
    PROVISIONING = "provisioning"
    UNKNOWN = "unknown"


KubernetesLabelValue = str
Semver = str

_TIME_RE = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})[Tt](\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?"
    r"(?:([Zz])|([+-])(\d{2}):(\d{2}))\Z"
)


def _format_time(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)

    text = (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    )
    if value.microsecond:
        text += "." + f"{value.microsecond:06d}".rstrip("0")

    offset = value.utcoffset() or timedelta(0)
    if not offset:
        return text + "Z"

    sign = "+" if offset > timedelta(0) else "-"
    minutes = abs(int(offset.total_seconds())) // 60
    return f"{text}{sign}{minutes // 60:02d}:{minutes % 60:02d}"


def _parse_time(text: Any) -> datetime:
    if not isinstance(text, str):
        raise ValueError(f"time must be a string, not {type(text).__name__}")

    match = _TIME_RE.match(text)
    if match is None:
        raise ValueError(f"invalid RFC 3339 time {text!r}")

    year, month, day, hour, minute, second, fraction, zulu, sign, oh, om = match.groups()
    micro = int((fraction or "")[:6].ljust(6, "0"))

    if zulu:
        tz = timezone.utc
    else:
        delta = timedelta(hours=int(oh), minutes=int(om))
        tz = timezone(delta if sign == "+" else -delta)

    return datetime(
        int(year), int(month), int(day), int(hour), int(minute), int(second), micro, tzinfo=tz
    )


def _optional_time(value: Any) -> datetime | None:
    return None if value is None else _parse_time(value)


def _mapping(data: Any) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise TypeError(f"expected a mapping, not {type(data).__name__}")
    return data


def _required(data: Mapping[str, Any], key: str) -> Any:
    if key not in data:
        raise ValueError(f"missing required field {key!r}")
    return data[key]


@dataclass(kw_only=True)
class Error:
    """Generic error message, compatible with OAuth2."""

    error: ErrorCode
    error_description: str

    def __post_init__(self) -> None:
        self.error = ErrorCode(self.error)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form."""
        return {"error": self.error.value, "error_description": self.error_description}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Error:
        """Build from the JSON form."""
        data = _mapping(data)
        return cls(
            error=ErrorCode(_required(data, "error")),
            error_description=_required(data, "error_description"),
        )


BadRequestResponse = Error
ConflictResponse = Error
ForbiddenResponse = Error
InternalServerErrorResponse = Error
NotFoundResponse = Error
UnauthorizedResponse = Error


@dataclass(kw_only=True)
class Tag:
    """An arbitrary tag name and value."""

    name: str
    value: str

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form."""
        return {"name": self.name, "value": self.value}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Tag:
        """Build from the JSON form."""
        data = _mapping(data)
        return cls(name=_required(data, "name"), value=_required(data, "value"))


TagList = list[Tag]


@dataclass(kw_only=True)
class ResourceMetadata:
    """Resource metadata valid for all API resource reads and writes."""

    name: KubernetesLabelValue
    description: str | None = None
    tags: list[Tag] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form, leaving out unset optional fields."""
        out: dict[str, Any] = {"name": self.name}
        if self.description is not None:
            out["description"] = self.description
        if self.tags is not None:
            out["tags"] = [tag.to_dict() for tag in self.tags]
        return out

    @classmethod
    def _fields(cls, data: Mapping[str, Any]) -> dict[str, Any]:
        tags = data.get("tags")
        return {
            "name": _required(data, "name"),
            "description": data.get("description"),
            "tags": None if tags is None else [Tag.from_dict(tag) for tag in tags],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ResourceMetadata:
        """Build from the JSON form."""
        return cls(**cls._fields(_mapping(data)))


ResourceWriteMetadata = ResourceMetadata


@dataclass(kw_only=True)
class StaticResourceMetadata(ResourceMetadata):
    """Read metadata for resources that are not provisioned."""

    id: str
    creation_time: datetime
    created_by: str | None = None
    modified_by: str | None = None
    modified_time: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form, leaving out unset optional fields."""
        out = super().to_dict()
        out["id"] = self.id
        out["creationTime"] = _format_time(self.creation_time)
        if self.created_by is not None:
            out["createdBy"] = self.created_by
        if self.modified_by is not None:
            out["modifiedBy"] = self.modified_by
        if self.modified_time is not None:
            out["modifiedTime"] = _format_time(self.modified_time)
        return out

    @classmethod
    def _fields(cls, data: Mapping[str, Any]) -> dict[str, Any]:
        fields = super()._fields(data)
        fields.update(
            id=_required(data, "id"),
            creation_time=_parse_time(_required(data, "creationTime")),
            created_by=data.get("createdBy"),
            modified_by=data.get("modifiedBy"),
            modified_time=_optional_time(data.get("modifiedTime")),
        )
        return fields

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> StaticResourceMetadata:
        """Build from the JSON form."""
        return cls(**cls._fields(_mapping(data)))


@dataclass(kw_only=True)
class ResourceReadMetadata(StaticResourceMetadata):
    """Read metadata for provisioned resources."""

    provisioning_status: ResourceProvisioningStatus
    deletion_time: datetime | None = None

    def __post_init__(self) -> None:
        self.provisioning_status = ResourceProvisioningStatus(self.provisioning_status)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form, leaving out unset optional fields."""
        out = super().to_dict()
        out["provisioningStatus"] = self.provisioning_status.value
        if self.deletion_time is not None:
            out["deletionTime"] = _format_time(self.deletion_time)
        return out

    @classmethod
    def _fields(cls, data: Mapping[str, Any]) -> dict[str, Any]:
        fields = super()._fields(data)
        fields.update(
            provisioning_status=ResourceProvisioningStatus(
                _required(data, "provisioningStatus")
            ),
            deletion_time=_optional_time(data.get("deletionTime")),
        )
        return fields

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ResourceReadMetadata:
        """Build from the JSON form."""
        return cls(**cls._fields(_mapping(data)))


@dataclass(kw_only=True)
class OrganizationScopedResourceReadMetadata(ResourceReadMetadata):
    """Read metadata for resources owned by an organization."""

    organization_id: str

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form, leaving out unset optional fields."""
        out = super().to_dict()
        out["organizationId"] = self.organization_id
        return out

    @classmethod
    def _fields(cls, data: Mapping[str, Any]) -> dict[str, Any]:
        fields = super()._fields(data)
        fields["organization_id"] = _required(data, "organizationId")
        return fields

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> OrganizationScopedResourceReadMetadata:
        """Build from the JSON form."""
        return cls(**cls._fields(_mapping(data)))


@dataclass(kw_only=True)
class ProjectScopedResourceReadMetadata(OrganizationScopedResourceReadMetadata):
    """Read metadata for resources owned by a project."""

    project_id: str

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form, leaving out unset optional fields."""
        out = super().to_dict()
        out["projectId"] = self.project_id
        return out

    @classmethod
    def _fields(cls, data: Mapping[str, Any]) -> dict[str, Any]:
        fields = super()._fields(data)
        fields["project_id"] = _required(data, "projectId")
        return fields

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ProjectScopedResourceReadMetadata:
        """Build from the JSON form."""
        return cls(**cls._fields(_mapping(data)))