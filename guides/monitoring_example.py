"""Run Update Monitoring State twice for a channel that starts in ``ready``."""

from tagsteps import ProcessContext, TagStepsConfig, UpdateMonitoringStateStep, run_step
from tagsteps.gateway import InMemoryElement, InMemoryGateway
from tagsteps.persistence import Instance, InMemoryInstanceRepository


def main():
    repo = InMemoryInstanceRepository()
    repo.create_instance(Instance(id="ch-1", definition="tag_channel", status="ready"))

    element = InMemoryElement("TAG Element 1")
    element.tables[240] = [["11", "", "", "", "", "", "", "Evening News*"]]
    gateway = InMemoryGateway()
    gateway.add_element(element)

    step = UpdateMonitoringStateStep(repo, gateway, TagStepsConfig())
    parameters = {
        "InstanceId": "ch-1",
        "TAG Element": "TAG Element 1",
        "Channel Name": "Evening News",
        "Channel Match": "Evening News*",
    }

    for _ in range(2):
        context = ProcessContext(parameters)
        outcome = run_step(step, context)
        print(
            f"Outcome: {outcome.kind.value}, status: {repo.read_by_id('ch-1').status}, "
            f"monitoring: {element.keyed_parameters[356]}"
        )


if __name__ == "__main__":
    main()
