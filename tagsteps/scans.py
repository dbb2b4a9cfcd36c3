"""Build scan requests for a scan instance."""

from __future__ import annotations

from typing import Iterable, List

from .constants import SCAN_NAME_FORMAT
from .contracts import Manifest, ScannerParameters, ScanRequest, TagAction, TagRequest, serialize_tag_requests
from .persistence import Instance


def get_manifests(instance: Instance) -> List[Manifest]:
    """Return the manifests stored on a scan instance."""
    return [Manifest.model_validate(item) for item in instance.fields.get("manifests") or []]


def scan_request_name(scan_name: str, manifest_name: str) -> str:
    return SCAN_NAME_FORMAT.format(scan_name=scan_name, manifest_name=manifest_name)


def build_scan_requests(
    instance: Instance, scanner: ScannerParameters, action: TagAction = TagAction.DELETE
) -> List[ScanRequest]:
    """One request per manifest; names are a pure function of the inputs."""
    return [
        ScanRequest(
            action=action,
            asset_id=scanner.asset_id,
            interface=scanner.tag_interface,
            name=scan_request_name(scanner.scan_name, manifest.name),
            type=scanner.scan_type,
            url=manifest.url,
        )
        for manifest in get_manifests(instance)
    ]


def request_titles(requests: Iterable[ScanRequest]) -> List[str]:
    return [request.name for request in requests]


def build_tag_payload(tag_device: str, requests: Iterable[ScanRequest]) -> str:
    """JSON written to the element's scan request parameter."""
    return serialize_tag_requests({tag_device: TagRequest(scan_requests=list(requests))})
