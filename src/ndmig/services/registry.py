"""Groups matching containers into named Ballsdex instances."""

from typing import Dict

from ndmig.constants import DB_ROLE_SUFFIX


class InstanceRegistryBuilder:
    """Builds the mapping of database container name to container id."""

    def __init__(self, runtime, matcher, logger, role_suffix: str = DB_ROLE_SUFFIX):
        self.runtime = runtime
        self.matcher = matcher
        self.logger = logger
        self.role_suffix = role_suffix

    def build(self) -> Dict[str, str]:
        """
        Lists every container on the host, stopped ones included, and keeps those
        whose image matches the signature and whose name carries the database
        role suffix. Containers are inspected one at a time.
        """
        instances: Dict[str, str] = {}

        for container in self.runtime.list_containers():
            if not container.id:
                continue

            if not self.matcher.matches(container.id):
                continue

            if not container.name.endswith(self.role_suffix):
                self.logger.debug(
                    "Ignoring %s: image matches but it is not a database container",
                    container.name,
                )
                continue

            instances[container.name] = container.id

        self.logger.info("Detected %s Ballsdex instance(s)", len(instances))
        return instances
