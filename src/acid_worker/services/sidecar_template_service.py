import json
from logging import Logger
from typing import Final

from injector import inject
from kubernetes import client as k
from kubernetes.client.api_client import ApiClient

from acid_worker.common.config import Config
from acid_worker.entities import mappers
from acid_worker.entities.event import AcidEvent
from acid_worker.entities.project import Project
from acid_worker.utilities import naming_utilities

from .base_service import BaseService

SIDECAR_CONTAINER_NAME: Final = "acid-vcs-sidecar"
VCS_VOLUME_NAME: Final = "vcs-sidecar"
SSH_KEY_SECRET_KEY: Final = "acidSSHKey"  # key of the ssh key in the JobRunner Secret data
SSH_KEY_ENV_VAR: Final = "ACID_REPO_KEY"


def secret_env_var(env_name: str, secret_name: str, secret_key: str) -> k.V1EnvVar:
    """Environment variable sourced from a Secret key, the value itself is never inlined"""
    return k.V1EnvVar(
        name=env_name,
        value_from=k.V1EnvVarSource(secret_key_ref=k.V1SecretKeySelector(name=secret_name, key=secret_key)),
    )


class SidecarTemplateService(BaseService):
    """
    Compose the checkout ("vcs-sidecar") init container of a job run.

    The target API version injects init containers through a Pod annotation, so the container
    is rendered to JSON text. That text is visible to anyone who can read the Pod: the ssh key is
    referenced by Secret key name only.
    """

    _k_api_client: ApiClient  # Just needed to serialize K8s models

    @inject
    def __init__(self, config: Config, logger: Logger, k_api_client: ApiClient):
        super().__init__(config, logger)
        self._k_api_client = k_api_client

    def compose(
        self, project: Project, event: AcidEvent, name: str, mount_path: str, *, privileged: bool = False
    ) -> k.V1Container:
        env = [
            k.V1EnvVar(name="CI", value="true"),
            k.V1EnvVar(name="ACID_BUILD_ID", value=event.build_id),
            k.V1EnvVar(name="ACID_COMMIT", value=naming_utilities.resolve_commit(event.commit)),
            k.V1EnvVar(name="ACID_REPO_URL", value=project.repo.clone_url),
        ]
        if project.repo.ssh_key:
            env.append(secret_env_var(SSH_KEY_ENV_VAR, name, SSH_KEY_SECRET_KEY))

        return k.V1Container(
            name=SIDECAR_CONTAINER_NAME,
            image=project.kubernetes.vcs_sidecar,
            image_pull_policy="Always",
            env=env,
            volume_mounts=[k.V1VolumeMount(name=VCS_VOLUME_NAME, mount_path=mount_path)],
            security_context=k.V1SecurityContext(privileged=privileged),
        )

    def render(
        self, project: Project, event: AcidEvent, name: str, mount_path: str, *, privileged: bool = False
    ) -> str:
        """Render the sidecar as the JSON list of init containers expected by the annotation"""
        sidecar = self.compose(project, event, name, mount_path, privileged=privileged)
        rendered = json.dumps(mappers.serialize_k_model_to_dict(self._k_api_client, [sidecar]))
        self.logger.debug("Rendered sidecar '%s' for '%s' (%d bytes)", sidecar.name, name, len(rendered))
        return rendered
