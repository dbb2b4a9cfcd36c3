"""Scan request construction tests."""

import json

from tagsteps.contracts import ScannerParameters, ScanRequest, TagAction
from tagsteps.persistence import Instance
from tagsteps.scans import build_scan_requests, build_tag_payload, get_manifests


def _scanner():
    return ScannerParameters.model_validate(
        {
            "InstanceId (TAG Scan)": "scan-1",
            "Asset ID (TAG Scan)": "asset-9",
            "Scan Name (TAG Scan)": "Sports",
            "TAG Device (TAG Scan)": "TAG MCS",
            "TAG Element (TAG Scan)": "TAG Element 1",
            "TAG Interface (TAG Scan)": "eth1",
            "Scan Type (TAG Scan)": "HLS",
            "Action (TAG Scan)": "delete",
            "Channels (TAG Scan)": ["ch-1"],
        }
    )


def test_scanner_parameters_use_orchestrator_names():
    scanner = _scanner()
    assert scanner.scan_name == "Sports"
    assert scanner.channels == ["ch-1"]
    assert scanner.source_element == ""


def test_build_scan_requests_one_per_manifest():
    instance = Instance(
        id="scan-1",
        status="deactivate",
        fields={"manifests": [{"name": "1080p", "url": "http://a/1080.m3u8"}]},
    )
    requests = build_scan_requests(instance, _scanner())

    assert requests == [
        ScanRequest(
            action=TagAction.DELETE,
            asset_id="asset-9",
            interface="eth1",
            name="Sports 1080p #RES|BAND#",
            type="HLS",
            url="http://a/1080.m3u8",
        )
    ]


def test_instance_without_manifests_has_no_requests():
    instance = Instance(id="scan-1", status="deactivate")
    assert get_manifests(instance) == []
    assert build_scan_requests(instance, _scanner()) == []


def test_tag_payload_format():
    request = ScanRequest(
        action=TagAction.DELETE,
        asset_id="asset-9",
        interface="eth1",
        name="Sports 1080p #RES|BAND#",
        type="HLS",
        url="http://a/1080.m3u8",
    )
    payload = json.loads(build_tag_payload("TAG MCS", [request]))

    assert payload == {
        "TAG MCS": {
            "ScanRequests": [
                {
                    "Action": 1,
                    "AssetId": "asset-9",
                    "Interface": "eth1",
                    "Name": "Sports 1080p #RES|BAND#",
                    "Type": "HLS",
                    "Url": "http://a/1080.m3u8",
                }
            ]
        }
    }
