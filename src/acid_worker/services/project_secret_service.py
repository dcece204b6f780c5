import json
from logging import Logger
from typing import Any, Final

import pydash as _
from injector import inject
from kubernetes import client as k
from kubernetes.client.api_client import ApiClient

from acid_worker.common.config import Config
from acid_worker.entities import mappers
from acid_worker.entities.project import Project, ProjectKubernetes, ProjectRepo
from acid_worker.utilities.encoding_utilities import b64dec

from .base_service import BaseService
from .exceptions import DecodeError, MalformedSecretError, MalformedSecretsBlobError

_P_PROJECT_NAME_KEY: Final = "projectName"
_P_REPO_HOST: Final = "github.com/"

_P_CLONE_URL: Final = "cloneURL"
_P_REPOSITORY: Final = "repository"
_P_VCS_SIDECAR: Final = "vcsSidecar"
_P_GITHUB_TOKEN: Final = "githubToken"
_P_SSH_KEY: Final = "sshKey"
_P_SECRETS: Final = "secrets"


class ProjectSecretService(BaseService):
    """Rehydrate a `Project` from the Kubernetes Secret that persists its configuration"""

    _k_api_client: ApiClient  # Just needed to deserialize dict to K8s model

    @inject
    def __init__(self, config: Config, logger: Logger, k_api_client: ApiClient):
        super().__init__(config, logger)
        self._k_api_client = k_api_client

    def decode(self, namespace: str, secret: k.V1Secret | dict[str, Any]) -> Project:
        """
        Decode a project Secret, given either as a `V1Secret` or its camelCase dict form.

        Raises:
            `MalformedSecretError`,
            `MalformedSecretsBlobError`
        """
        k_secret = mappers.as_k_model(self._k_api_client, secret, k.V1Secret)
        secret_name = _.get(k_secret, "metadata.name") or "<unnamed>"
        data: dict[str, str] = k_secret.data or {}

        clone_url = self._required_field(secret_name, data, _P_CLONE_URL)
        repository = self._required_field(secret_name, data, _P_REPOSITORY)
        vcs_sidecar = self._required_field(secret_name, data, _P_VCS_SIDECAR)
        github_token = self._optional_field(secret_name, data, _P_GITHUB_TOKEN)
        ssh_key = self._optional_field(secret_name, data, _P_SSH_KEY)
        secrets = self._decode_secrets_blob(secret_name, data)

        repo_name = _.get(k_secret, f"metadata.annotations.{_P_PROJECT_NAME_KEY}") or repository.removeprefix(
            _P_REPO_HOST
        )

        project = Project(
            name=f"{_P_REPO_HOST}{repo_name}",
            repo=ProjectRepo(name=repo_name, clone_url=clone_url, ssh_key=ssh_key, token=github_token),
            kubernetes=ProjectKubernetes(namespace=namespace, vcs_sidecar=vcs_sidecar),
            secrets=secrets,
        )
        self.logger.debug(
            "Decoded project '%s' (%s) from secret '%s' with %d project secret(s)",
            project.name,
            project.id,
            secret_name,
            len(secrets),
        )
        return project

    def _optional_field(self, secret_name: str, data: dict[str, str], field: str) -> str | None:
        encoded = data.get(field)
        if encoded is None:
            return None
        try:
            return b64dec(encoded, value_name=field)
        except DecodeError as exc:
            raise MalformedSecretError(secret_name=secret_name, field=field) from exc

    def _required_field(self, secret_name: str, data: dict[str, str], field: str) -> str:
        value = self._optional_field(secret_name, data, field)
        if value is None:
            raise MalformedSecretError(secret_name=secret_name, field=field)
        return value

    def _decode_secrets_blob(self, secret_name: str, data: dict[str, str]) -> dict[str, str]:
        """Parse the `secrets` field, a JSON object of user-defined project secrets"""
        blob = self._optional_field(secret_name, data, _P_SECRETS)
        if blob is None or not blob.strip():
            return {}
        try:
            parsed = json.loads(blob)
        except json.JSONDecodeError as exc:
            raise MalformedSecretsBlobError(secret_name=secret_name) from exc
        if not isinstance(parsed, dict):
            raise MalformedSecretsBlobError(secret_name=secret_name)
        return {str(key): value if isinstance(value, str) else json.dumps(value) for key, value in parsed.items()}
