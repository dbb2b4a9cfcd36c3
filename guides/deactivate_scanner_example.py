"""Deactivate a scanner against in-memory backends.

The TAG element drops the scan rows a few seconds after the delete request,
so the step polls twice before the scan converges.
"""

from tagsteps import DeactivateScannerStep, ProcessContext, TagStepsConfig, run_step
from tagsteps.gateway import InMemoryElement, InMemoryGateway
from tagsteps.persistence import Instance, InMemoryInstanceRepository

TITLES = ["Evening News 1080p #RES|BAND#", "Evening News 720p #RES|BAND#"]


def main():
    repo = InMemoryInstanceRepository()
    repo.create_instance(
        Instance(
            id="scan-1",
            definition="tag_scan",
            status="deactivate",
            fields={
                "manifests": [
                    {"name": "1080p", "url": "http://origin/news/1080p.m3u8"},
                    {"name": "720p", "url": "http://origin/news/720p.m3u8"},
                ]
            },
        )
    )
    repo.create_instance(Instance(id="ch-1", definition="tag_channel", status="active"))

    element = InMemoryElement("TAG Element 1")
    element.tables[1310] = [[t] + [""] * 12 + [t] for t in TITLES]
    gateway = InMemoryGateway()
    gateway.add_element(element)

    config = TagStepsConfig()
    config.retry.delay = 0.5
    attempts = []

    def sleep(seconds):
        attempts.append(seconds)
        if len(attempts) == 2:
            element.remove_rows(1310, 13, TITLES)

    step = DeactivateScannerStep(repo, gateway, config, sleep=sleep)
    context = ProcessContext(
        {
            "InstanceId (TAG Scan)": "scan-1",
            "Asset ID (TAG Scan)": "asset-42",
            "Scan Name (TAG Scan)": "Evening News",
            "TAG Device (TAG Scan)": "TAG MCS",
            "TAG Element (TAG Scan)": "TAG Element 1",
            "TAG Interface (TAG Scan)": "eth0",
            "Scan Type (TAG Scan)": "HLS",
            "Action (TAG Scan)": "delete",
            "Channels (TAG Scan)": ["ch-1"],
        }
    )

    outcome = run_step(step, context)
    print(f"Outcome: {outcome.kind.value}, signal: {context.signal.value}")
    print(f"Scan status: {repo.read_by_id('scan-1').status}")
    print(f"Channel status: {repo.read_by_id('ch-1').status}")


if __name__ == "__main__":
    main()
