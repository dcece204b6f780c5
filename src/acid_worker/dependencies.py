"""
Configure Dependency Injection
"""

import logging

from injector import Injector, Module, provider, singleton
from kubernetes.client.api_client import ApiClient

from acid_worker.common.config import Config, Option
from acid_worker.common.logger_manager import LoggerManager
from acid_worker.entities import job_runner_settings as s
from acid_worker.entities.job_runner_settings import JobRunnerSettings
from acid_worker.services.job_runner_service import JobRunnerService
from acid_worker.services.project_secret_service import ProjectSecretService
from acid_worker.services.sidecar_template_service import SidecarTemplateService


# region Configure Injector Module
class InjectorModule(Module):
    """Configure Injector bindings, i.e. how dependencies are provided.

    Note: bindings provide instances when invoking `Injector.get(MyClass)`.
    Bindings are required to provide instances within a given scope (e.g. singleton).
    If no binding is defined for `MyClass` then a fresh new instance is created
    (resolving constructor injected dependencies) and returned.

    See https://github.com/python-injector/injector/blob/master/docs/terminology.rst.
    """

    def configure(self, binder):
        binder.bind(Config, to=Config(), scope=singleton)

    @singleton
    @provider
    def provide_logger(self, config: Config) -> logging.Logger:
        return LoggerManager(config).logger

    @singleton
    @provider
    def provide_job_runner_settings(self, config: Config) -> JobRunnerSettings:
        return JobRunnerSettings(
            default_mount_path=config.get(Option.ACID_DEFAULT_MOUNT_PATH, s.DEFAULT_MOUNT_PATH),
            cache_path=config.get(Option.ACID_CACHE_PATH, s.DEFAULT_CACHE_PATH),
            storage_path=config.get(Option.ACID_STORAGE_PATH, s.DEFAULT_STORAGE_PATH),
            scripts_mount_path=config.get(Option.ACID_SCRIPTS_MOUNT_PATH, s.DEFAULT_SCRIPTS_MOUNT_PATH),
            sidecar_annotation=config.get(Option.ACID_SIDECAR_ANNOTATION, s.DEFAULT_SIDECAR_ANNOTATION),
        )

    @singleton
    @provider
    def provide_k_api_client(self) -> ApiClient:
        # Only (de)serializes models: no kubeconfig is loaded and no request is ever sent
        return ApiClient()

    @singleton
    @provider
    def provide_sidecar_template_service(
        self, config: Config, logger: logging.Logger, k_api_client: ApiClient
    ) -> SidecarTemplateService:
        return SidecarTemplateService(config, logger, k_api_client)

    @singleton
    @provider
    def provide_job_runner_service(
        self,
        config: Config,
        logger: logging.Logger,
        settings: JobRunnerSettings,
        sidecar_service: SidecarTemplateService,
    ) -> JobRunnerService:
        return JobRunnerService(config, logger, settings, sidecar_service)

    @singleton
    @provider
    def provide_project_secret_service(
        self, config: Config, logger: logging.Logger, k_api_client: ApiClient
    ) -> ProjectSecretService:
        return ProjectSecretService(config, logger, k_api_client)


def create_injector() -> Injector:
    return Injector([InjectorModule()])


_injector = create_injector()
# endregion / Configure Injector Module


# region Public Injector instances
def get_config() -> Config:
    return _injector.get(Config)


def get_logger() -> logging.Logger:
    return _injector.get(logging.Logger)


def get_job_runner_service() -> JobRunnerService:
    return _injector.get(JobRunnerService)


def get_project_secret_service() -> ProjectSecretService:
    return _injector.get(ProjectSecretService)


def get_sidecar_template_service() -> SidecarTemplateService:
    return _injector.get(SidecarTemplateService)


# endregion / Public Injector instances
