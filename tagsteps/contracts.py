"""Payload, input and outcome contracts for tagsteps."""

from __future__ import annotations

import json
from enum import Enum, IntEnum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class TagAction(IntEnum):
    """Action codes understood by the TAG element."""

    ADD = 0
    DELETE = 1
    UPDATE = 2


class TagMonitoring(IntEnum):
    NO = 0
    YES = 1


class Manifest(BaseModel):
    """One stream manifest attached to a scan instance."""

    name: str
    url: str


class ScanRequest(BaseModel):
    """A single unit of work pushed to the TAG element."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    action: TagAction = Field(alias="Action")
    asset_id: str = Field(alias="AssetId")
    interface: str = Field(alias="Interface")
    name: str = Field(alias="Name")
    type: str = Field(alias="Type")
    url: str = Field(alias="Url")


class TagRequest(BaseModel):
    """Batch of scan requests for one TAG device."""

    model_config = ConfigDict(populate_by_name=True)

    scan_requests: List[ScanRequest] = Field(default_factory=list, alias="ScanRequests")


def serialize_tag_requests(requests: Dict[str, TagRequest]) -> str:
    """Encode requests keyed by TAG device into the element's JSON format."""
    return json.dumps(
        {device: request.model_dump(mode="json", by_alias=True) for device, request in requests.items()}
    )


class ScannerParameters(BaseModel):
    """Inputs of the Deactivate Scanner step."""

    model_config = ConfigDict(populate_by_name=True)

    instance_id: str = Field(alias="InstanceId (TAG Scan)")
    asset_id: str = Field(alias="Asset ID (TAG Scan)")
    scan_name: str = Field(alias="Scan Name (TAG Scan)")
    tag_device: str = Field(alias="TAG Device (TAG Scan)")
    tag_element: str = Field(alias="TAG Element (TAG Scan)")
    tag_interface: str = Field(alias="TAG Interface (TAG Scan)")
    scan_type: str = Field(alias="Scan Type (TAG Scan)")
    action: str = Field(alias="Action (TAG Scan)")
    source_element: str = Field(default="", alias="Source Element (TAG Scan)")
    source_id: str = Field(default="", alias="Source ID (TAG Scan)")
    channels: List[str] = Field(default_factory=list, alias="Channels (TAG Scan)")


class MonitoringParameters(BaseModel):
    """Inputs of the Update Monitoring State step."""

    model_config = ConfigDict(populate_by_name=True)

    instance_id: str = Field(alias="InstanceId")
    tag_element: str = Field(alias="TAG Element")
    channel_name: str = Field(alias="Channel Name")
    channel_match: str = Field(alias="Channel Match")
    monitoring_mode: Optional[str] = Field(default=None, alias="Monitoring Mode")
    threshold: Optional[str] = Field(default=None, alias="Threshold")
    notification: Optional[str] = Field(default=None, alias="Notification")
    encryption: Optional[str] = Field(default=None, alias="Encryption")
    kms: Optional[str] = Field(default=None, alias="KMS")


class OutcomeKind(str, Enum):
    CONTINUE = "continue"
    FINISH = "finish"
    IGNORABLE_ABORT = "ignorable_abort"
    ERROR = "error"


class StepOutcome(BaseModel):
    """Terminal result of one step invocation."""

    model_config = ConfigDict(frozen=True)

    kind: OutcomeKind
    detail: Optional[str] = None
    error_kind: Optional[str] = None

    @classmethod
    def proceed(cls, detail: Optional[str] = None) -> "StepOutcome":
        return cls(kind=OutcomeKind.CONTINUE, detail=detail)

    @classmethod
    def finish(cls, detail: Optional[str] = None) -> "StepOutcome":
        return cls(kind=OutcomeKind.FINISH, detail=detail)

    @classmethod
    def aborted(cls) -> "StepOutcome":
        return cls(kind=OutcomeKind.IGNORABLE_ABORT)

    @classmethod
    def error(cls, detail: str, error_kind: str = "Unhandled") -> "StepOutcome":
        return cls(kind=OutcomeKind.ERROR, detail=detail, error_kind=error_kind)

    @property
    def is_error(self) -> bool:
        return self.kind == OutcomeKind.ERROR
