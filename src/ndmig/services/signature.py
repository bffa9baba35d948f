"""Recognizes Ballsdex database containers by image reference."""

from docker.errors import DockerException
from requests.exceptions import RequestException

from ndmig.constants import DEFAULT_IMAGE_SIGNATURE


class SignatureMatcher:
    """Exact image-reference check against a single expected signature."""

    def __init__(self, runtime, logger, signature: str = DEFAULT_IMAGE_SIGNATURE):
        self.runtime = runtime
        self.logger = logger
        self.signature = signature

    def matches(self, container_id: str) -> bool:
        # A container can disappear between listing and inspection.
        try:
            info = self.runtime.inspect_container(container_id)
        except (DockerException, RequestException) as exc:
            self.logger.debug("Skipping container %s, inspection failed: %s", container_id, exc)
            return False

        image = (info.get("Config") or {}).get("Image")
        return image == self.signature
