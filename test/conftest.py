# pylint: disable=redefined-outer-name
import logging

import pytest
from kubernetes import client as k
from kubernetes.client.api_client import ApiClient

from acid_worker.common.config import Config
from acid_worker.entities.event import AcidEvent
from acid_worker.entities.job import Job
from acid_worker.entities.job_runner_settings import JobRunnerSettings
from acid_worker.entities.project import Project, ProjectKubernetes, ProjectRepo
from acid_worker.services.job_runner_service import JobRunnerService
from acid_worker.services.project_secret_service import ProjectSecretService
from acid_worker.services.sidecar_template_service import SidecarTemplateService


@pytest.fixture()
def config() -> Config:
    return Config()


@pytest.fixture()
def logger() -> logging.Logger:
    return logging.getLogger("acid-worker-test")


@pytest.fixture()
def settings() -> JobRunnerSettings:
    return JobRunnerSettings()


@pytest.fixture()
def k_api_client() -> ApiClient:
    return ApiClient()


@pytest.fixture()
def sidecar_service(config: Config, logger: logging.Logger, k_api_client: ApiClient) -> SidecarTemplateService:
    return SidecarTemplateService(config, logger, k_api_client)


@pytest.fixture()
def job_runner_service(
    config: Config, logger: logging.Logger, settings: JobRunnerSettings, sidecar_service: SidecarTemplateService
) -> JobRunnerService:
    return JobRunnerService(config, logger, settings, sidecar_service)


@pytest.fixture()
def project_secret_service(config: Config, logger: logging.Logger, k_api_client: ApiClient) -> ProjectSecretService:
    return ProjectSecretService(config, logger, k_api_client)


@pytest.fixture()
def job() -> Job:
    return Job(name="pequod", image="whaler", tasks=["echo hello"])


@pytest.fixture()
def event() -> AcidEvent:
    return AcidEvent(commit="c0ffee", build_id="build-1234")


@pytest.fixture()
def project() -> Project:
    return Project(
        name="github.com/deis/acid",
        repo=ProjectRepo(name="deis/acid", clone_url="https://github.com/deis/acid.git"),
        kubernetes=ProjectKubernetes(namespace="default", vcs_sidecar="acid/vcs-sidecar:latest"),
        secrets={"hello": "world"},
    )


@pytest.fixture()
def project_secret() -> k.V1Secret:
    return k.V1Secret(
        metadata=k.V1ObjectMeta(
            name="acid-544b459e6ad7267e7791c4f77bfd1722a15e305a22cf9d3c60c5be",
            annotations={"projectName": "deis/test-private-testbed"},
            labels={"managedBy": "acid", "release": "deis-test-private-testbed"},
        ),
        data={
            "cloneURL": "aHR0cHM6Ly9naXRodWIuY29tL2RlaXMvZW1wdHktdGVzdGJlZC5naXQ=",
            "githubToken": "cHJldGVuZCBwYXNzd29yZAo=",
            "repository": "Z2l0aHViLmNvbS9kZWlzL3Rlc3QtcHJpdmF0ZS10ZXN0YmVk",
            "secrets": "eyJoZWxsbyI6ICJ3b3JsZCJ9Cg==",
            "vcsSidecar": "YWNpZGljLmF6dXJlY3IuaW8vdmNzLXNpZGVjYXI6bGF0ZXN0",
        },
    )
