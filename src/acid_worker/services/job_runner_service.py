from logging import Logger
from typing import Final

from injector import inject
from kubernetes import client as k

from acid_worker.common.config import Config
from acid_worker.entities.event import AcidEvent
from acid_worker.entities.job import Job
from acid_worker.entities.job_runner import JobRunner
from acid_worker.entities.job_runner_settings import JobRunnerSettings
from acid_worker.entities.project import Project
from acid_worker.utilities import naming_utilities
from acid_worker.utilities.encoding_utilities import b64enc

from .base_service import BaseService
from .exceptions import InvalidJobNameError, MissingImageError, ReservedEnvKeyError
from .sidecar_template_service import (
    SSH_KEY_ENV_VAR,
    SSH_KEY_SECRET_KEY,
    VCS_VOLUME_NAME,
    SidecarTemplateService,
    secret_env_var,
)

_A_COMMON_LABELS: Final = {"heritage": "acid", "managedBy": "acid"}
_A_COMMIT_LABEL: Final = "commit"

_SCRIPT_KEY: Final = "main.sh"
_SCRIPTS_VOLUME_NAME: Final = "acid-scripts"
_STORAGE_VOLUME_NAME: Final = "build-storage"
_RUNNER_CONTAINER_NAME: Final = "acid-runner"

# Secret data keys and container env names owned by the job runner
_RESERVED_ENV_KEYS: Final = frozenset({_SCRIPT_KEY, SSH_KEY_SECRET_KEY, SSH_KEY_ENV_VAR})


class JobRunnerService(BaseService):
    """Build the Kubernetes objects (Secret and Pod) that run a job for an event of a project.

    Building is a pure transformation: no I/O, inputs are never mutated.
    """

    _settings: JobRunnerSettings
    _sidecar_service: SidecarTemplateService

    @inject
    def __init__(
        self,
        config: Config,
        logger: Logger,
        settings: JobRunnerSettings,
        sidecar_service: SidecarTemplateService,
    ):
        super().__init__(config, logger)
        self._settings = settings
        self._sidecar_service = sidecar_service

    def build(self, job: Job, event: AcidEvent, project: Project) -> JobRunner:
        """
        Raises:
            `InvalidJobNameError`,
            `MissingImageError`,
            `ReservedEnvKeyError`
        """
        if not naming_utilities.is_valid_job_name(job.name):
            raise InvalidJobNameError(name=job.name)
        if not job.image:
            raise MissingImageError(job_name=job.name)
        if reserved := sorted(_RESERVED_ENV_KEYS.intersection(job.env)):
            raise ReservedEnvKeyError(job_name=job.name, key=reserved[0])

        commit = naming_utilities.resolve_commit(event.commit)
        name = naming_utilities.job_runner_name(job.name, event.build_id, event.commit)
        labels = {
            **_A_COMMON_LABELS,
            "jobname": job.name,
            "belongsto": project.id,
            _A_COMMIT_LABEL: commit,
        }

        self.logger.info("Building JobRunner '%s' for project '%s' at commit '%s'", name, project.name, commit)

        secret = self._new_secret(job, project, name, labels)
        runner = self._new_runner_pod(job, event, project, name, labels, has_script=bool(job.tasks))

        self.logger.debug(
            "JobRunner '%s': secret keys %s, %d volume(s)", name, sorted(secret.data), len(runner.spec.volumes)
        )
        return JobRunner(name=name, secret=secret, runner=runner)

    def _new_secret(self, job: Job, project: Project, name: str, labels: dict[str, str]) -> k.V1Secret:
        data: dict[str, str] = {}
        # No tasks means no "main.sh" key at all, not an empty script
        if job.tasks:
            data[_SCRIPT_KEY] = b64enc("\n".join(job.tasks))
        for key, value in job.env.items():
            data[key] = b64enc(value)
        if project.repo.ssh_key:
            data[SSH_KEY_SECRET_KEY] = b64enc(project.repo.ssh_key)

        return k.V1Secret(
            api_version="v1",
            kind="Secret",
            type="Opaque",
            metadata=k.V1ObjectMeta(name=name, labels=dict(labels)),
            data=data,
        )

    def _new_runner_pod(
        self,
        job: Job,
        event: AcidEvent,
        project: Project,
        name: str,
        labels: dict[str, str],
        *,
        has_script: bool,
    ) -> k.V1Pod:
        mount_path = job.mount_path or self._settings.default_mount_path

        # region volumes and mounts
        volume_mounts = [k.V1VolumeMount(name=VCS_VOLUME_NAME, mount_path=mount_path)]
        volumes = [k.V1Volume(name=VCS_VOLUME_NAME, empty_dir=k.V1EmptyDirVolumeSource())]

        if has_script:
            volume_mounts.append(
                k.V1VolumeMount(name=_SCRIPTS_VOLUME_NAME, mount_path=self._settings.scripts_mount_path, read_only=True)
            )
            volumes.append(
                k.V1Volume(
                    name=_SCRIPTS_VOLUME_NAME,
                    secret=k.V1SecretVolumeSource(
                        secret_name=name, items=[k.V1KeyToPath(key=_SCRIPT_KEY, path=_SCRIPT_KEY)]
                    ),
                )
            )

        if job.cache.enabled:
            # One cache claim per (project, job), one storage claim shared by every job of the build
            cache_name = naming_utilities.cache_volume_name(project.name, job.name)
            volume_mounts.append(k.V1VolumeMount(name=cache_name, mount_path=self._settings.cache_path))
            volume_mounts.append(k.V1VolumeMount(name=_STORAGE_VOLUME_NAME, mount_path=self._settings.storage_path))
            volumes.append(
                k.V1Volume(
                    name=cache_name,
                    persistent_volume_claim=k.V1PersistentVolumeClaimVolumeSource(claim_name=cache_name),
                )
            )
            volumes.append(
                k.V1Volume(
                    name=_STORAGE_VOLUME_NAME,
                    persistent_volume_claim=k.V1PersistentVolumeClaimVolumeSource(claim_name=event.build_id),
                )
            )
        # endregion / volumes and mounts

        # region environment
        build_env = {
            "CI": "true",
            "ACID_BUILD_ID": event.build_id,
            "ACID_COMMIT": naming_utilities.resolve_commit(event.commit),
            "ACID_PROJECT_ID": project.id,
        }
        env = [k.V1EnvVar(name=key, value=value) for key, value in build_env.items() if key not in job.env]
        env.extend(secret_env_var(key, name, key) for key in job.env)
        if project.repo.ssh_key:
            env.append(secret_env_var(SSH_KEY_ENV_VAR, name, SSH_KEY_SECRET_KEY))
        # endregion / environment

        container = k.V1Container(
            name=_RUNNER_CONTAINER_NAME,
            image=job.image,
            command=["/bin/sh", f"{self._settings.scripts_mount_path}/{_SCRIPT_KEY}"] if has_script else None,
            env=env,
            volume_mounts=volume_mounts,
            security_context=k.V1SecurityContext(privileged=job.privileged),
        )

        sidecar = self._sidecar_service.render(project, event, name, mount_path, privileged=job.privileged)

        return k.V1Pod(
            api_version="v1",
            kind="Pod",
            metadata=k.V1ObjectMeta(
                name=name,
                labels=dict(labels),
                annotations={self._settings.sidecar_annotation: sidecar},
            ),
            spec=k.V1PodSpec(
                containers=[container],
                volumes=volumes,
                restart_policy="Never",
            ),
        )
